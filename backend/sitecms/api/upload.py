from flask import request

from sitecms.domain.exceptions import BadRequestError
from sitecms.extensions import media
from sitecms.schemas.media import DeleteImageInput, ImageUrlInput, UploadImageInput, UploadImagesInput
from sitecms.utils.decorators import admin_required
from sitecms.utils.media import file_to_data_uri, fill_transform
from sitecms.utils.responses import listing, success
from .helpers import parse_body, wire_asset
from . import api_bp

MAX_IMAGES_PER_REQUEST = 10
DEFAULT_FOLDER = "general"
HERO_TRANSFORM = fill_transform(1920, 1080)


def _single_image():
    """A JSON data URI, or a multipart ``file`` converted to one."""
    upload = request.files.get("file")
    if upload is not None:
        return file_to_data_uri(upload), request.form.get("folder")

    body = parse_body(UploadImageInput)
    if not body.image:
        raise BadRequestError("Please provide an image")
    return body.image, body.folder


def _many_images():
    uploads = request.files.getlist("files")
    if uploads:
        images, folder = [file_to_data_uri(upload) for upload in uploads], request.form.get("folder")
    else:
        body = parse_body(UploadImagesInput)
        images, folder = body.images, body.folder

    if not images:
        raise BadRequestError("Please provide images")
    if len(images) > MAX_IMAGES_PER_REQUEST:
        raise BadRequestError(f"At most {MAX_IMAGES_PER_REQUEST} images per request")
    return images, folder


@api_bp.route("/upload/image", methods=["POST"])
@admin_required
def upload_image(ctx):
    image, folder = _single_image()
    asset = media.store(image, folder=folder or DEFAULT_FOLDER)
    return success(wire_asset(asset), message="Image uploaded successfully", status=201)


@api_bp.route("/upload/images", methods=["POST"])
@admin_required
def upload_images(ctx):
    images, folder = _many_images()
    assets = media.store_many(images, folder=folder or DEFAULT_FOLDER)
    return listing(
        [wire_asset(asset) for asset in assets],
        message=f"{len(assets)} images uploaded successfully",
        status=201,
    )


@api_bp.route("/upload/image-url", methods=["POST"])
@admin_required
def upload_image_from_url(ctx):
    body = parse_body(ImageUrlInput)
    if not body.url:
        raise BadRequestError("Please provide an image URL")

    asset = media.store_from_url(body.url, folder=body.folder or DEFAULT_FOLDER)
    return success(wire_asset(asset), message="Image uploaded successfully", status=201)


@api_bp.route("/upload/hero-images", methods=["POST"])
@admin_required
def upload_hero_images(ctx):
    images, _ = _many_images()
    assets = media.store_many(images, folder="homepage/hero", transform=HERO_TRANSFORM)
    return listing(
        [wire_asset(asset) for asset in assets],
        message="Hero images uploaded successfully",
        status=201,
    )


@api_bp.route("/upload/about-image", methods=["POST"])
@admin_required
def upload_about_image(ctx):
    image, _ = _single_image()
    asset = media.store(image, folder="about")
    return success(wire_asset(asset), message="Image uploaded successfully", status=201)


@api_bp.route("/upload/image", methods=["DELETE"])
@admin_required
def delete_image(ctx):
    body = parse_body(DeleteImageInput)
    public_id = body.public_id or media.derive_handle_from_url(body.url)
    if not public_id:
        raise BadRequestError("Please provide a valid publicId or image URL")

    media.remove(public_id)
    return success(message="Image deleted successfully")


@api_bp.route("/upload/folder", methods=["GET"], defaults={"folder": None})
@api_bp.route("/upload/folder/<path:folder>", methods=["GET"])
@admin_required
def list_folder(ctx, folder):
    return listing([wire_asset(asset) for asset in media.list_folder(folder)])
