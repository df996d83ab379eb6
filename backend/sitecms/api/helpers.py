from flask import request

from sitecms.utils.pagination import parse_positive_int


def parse_body(schema):
    """Validate the JSON body against a request schema. Raises ValidationError."""
    return schema.model_validate(request.get_json(silent=True) or {})


def page_args(default_limit=50, maximum=None):
    page = parse_positive_int(request.args.get("page"), default=1, name="page")
    limit = parse_positive_int(
        request.args.get("limit"), default=default_limit, name="limit", maximum=maximum
    )
    return page, limit


def wire_asset(asset):
    return {
        "url": asset["url"],
        "publicId": asset["public_id"],
        "width": asset.get("width"),
        "height": asset.get("height"),
        "format": asset.get("format"),
        "bytes": asset.get("bytes"),
    }
