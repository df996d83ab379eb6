from flask import jsonify


def success(data=None, *, message=None, status=200, **extra):
    """
    Standard envelope: {success, message?, data?, count?, total?, ...}.
    """
    body = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    body.update({key: value for key, value in extra.items() if value is not None})
    return jsonify(body), status


def listing(items, **extra):
    return success(items, count=len(items), **extra)


def failure(error, status, **extra):
    body = {"success": False, "error": error}
    body.update(extra)
    return jsonify(body), status
