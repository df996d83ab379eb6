import base64
import binascii
import logging
import re
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import cloudinary
import cloudinary.api
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from werkzeug.utils import secure_filename

from sitecms.domain.exceptions import BadRequestError, ExternalServiceError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp"}

_EXTENSION_MIME = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "webp": "image/webp",
}

DATA_URI_PATTERN = re.compile(r"^data:image/(jpeg|jpg|png|gif|webp|svg\+xml);base64,")

# https://res.cloudinary.com/<cloud>/image/upload/[<transform>/][v123/]<folder>/<name>.<ext>
_DELIVERY_URL_PATTERN = re.compile(
    r"^https?://res\.cloudinary\.com/[^/]+/(?:image|video|raw)/upload/(?P<rest>.+)$"
)
_VERSION_SEGMENT = re.compile(r"^v\d+$")
# Transformation parameters are "<key>_<value>" joined by commas, with keys
# from a fixed vocabulary. Anything else is a folder name.
_TRANSFORM_KEYS = (
    "a", "ac", "af", "ar", "b", "bo", "br", "c", "co", "cs", "d", "dl", "dn",
    "dpr", "du", "e", "eo", "f", "fl", "fn", "fps", "g", "h", "if", "ki", "l",
    "o", "p", "pg", "q", "r", "so", "sp", "t", "u", "vc", "vs", "w", "x", "y", "z",
)
_TRANSFORM_SEGMENT = re.compile(
    r"^(?:{keys})_[^/,]+(?:,(?:{keys})_[^/,]+)*$".format(keys="|".join(_TRANSFORM_KEYS))
)

_REMOVED_RESULTS = {"ok", "not found"}


def allowed_file(filename):
    return "." in filename and filename.rsplit(".", 1)[1].lower() in ALLOWED_EXTENSIONS


def file_to_data_uri(file) -> str:
    """
    Turn a multipart upload into a base64 data URI the gateway accepts.
    """
    filename = secure_filename(file.filename or "")
    if not allowed_file(filename):
        raise BadRequestError("Only image files are allowed (jpeg, png, gif, webp)")

    ext = filename.rsplit(".", 1)[1].lower()
    encoded = base64.b64encode(file.read()).decode("ascii")
    return f"data:{_EXTENSION_MIME[ext]};base64,{encoded}"


def is_data_uri_image(value) -> bool:
    if not isinstance(value, str):
        return False

    match = DATA_URI_PATTERN.match(value)
    if not match:
        return False

    try:
        base64.b64decode(value[match.end():], validate=True)
    except (binascii.Error, ValueError):
        return False
    return True


def fill_transform(width: int, height: int) -> list[dict]:
    return [
        {"width": width, "height": height, "crop": "fill"},
        {"quality": "auto", "fetch_format": "auto"},
    ]


class MediaGateway:
    """
    Thin adapter over the hosted media service. Callers only ever see
    ``{url, public_id, width, height, format, bytes}`` dicts and our own
    exceptions, never the SDK's response shape.
    """

    def __init__(self, app=None):
        self.root_folder = "site-media"
        self.max_workers = 4
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        cloud_name = app.config.get("CLOUDINARY_CLOUD_NAME")
        api_key = app.config.get("CLOUDINARY_API_KEY")
        api_secret = app.config.get("CLOUDINARY_API_SECRET")

        if not (cloud_name and api_key and api_secret):
            app.logger.warning("Cloudinary credentials missing; media uploads will fail")

        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True,
        )
        self.root_folder = app.config.get("MEDIA_ROOT_FOLDER", self.root_folder)
        app.extensions["media_gateway"] = self

    def _folder(self, folder: Optional[str]) -> str:
        if not folder:
            return self.root_folder
        if folder.startswith(self.root_folder):
            return folder
        return f"{self.root_folder}/{folder.strip('/')}"

    @staticmethod
    def _asset(result: dict) -> dict:
        return {
            "url": result["secure_url"],
            "public_id": result["public_id"],
            "width": result.get("width"),
            "height": result.get("height"),
            "format": result.get("format"),
            "bytes": result.get("bytes"),
        }

    def _upload(self, source: str, folder: Optional[str], transform: Optional[list]) -> dict:
        options = {"folder": self._folder(folder), "resource_type": "auto"}
        if transform:
            options["transformation"] = transform

        try:
            result = cloudinary.uploader.upload(source, **options)
        except CloudinaryError as exc:
            logger.error("Media upload failed: %s", exc)
            raise ExternalServiceError("Failed to upload image") from exc

        asset = self._asset(result)
        logger.info("Stored media asset %s", asset["public_id"])
        return asset

    def store(self, image: str, *, folder: Optional[str] = None, transform: Optional[list] = None) -> dict:
        if not is_data_uri_image(image):
            raise BadRequestError("Invalid image format. Expected a base64 encoded image")
        return self._upload(image, folder, transform)

    def store_many(self, images: list[str], *, folder: Optional[str] = None, transform: Optional[list] = None) -> list[dict]:
        """
        Upload every image concurrently. Any failure fails the whole call;
        assets that did upload are left in place.
        """
        if not images:
            return []

        for image in images:
            if not is_data_uri_image(image):
                raise BadRequestError("Invalid image format. Expected a base64 encoded image")

        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(images))) as pool:
            futures = [pool.submit(self._upload, image, folder, transform) for image in images]
            return [future.result() for future in futures]

    def store_from_url(self, url: str, *, folder: Optional[str] = None, transform: Optional[list] = None) -> dict:
        if not isinstance(url, str) or not re.match(r"^https?://", url):
            raise BadRequestError("Invalid image URL")
        return self._upload(url, folder, transform)

    def remove(self, public_id: str) -> bool:
        """
        Idempotent delete. "not found" counts as removed.
        """
        if not public_id:
            raise BadRequestError("Public ID is required")

        try:
            result = cloudinary.uploader.destroy(public_id)
        except CloudinaryError as exc:
            logger.error("Media delete failed for %s: %s", public_id, exc)
            raise ExternalServiceError("Failed to delete image") from exc

        outcome = (result or {}).get("result")
        if outcome not in _REMOVED_RESULTS:
            logger.error("Media delete for %s returned %r", public_id, outcome)
            raise ExternalServiceError("Failed to delete image")

        logger.info("Removed media asset %s (%s)", public_id, outcome)
        return True

    def remove_quietly(self, public_id: Optional[str]) -> bool:
        """Best-effort remove used by cleanup paths. Never raises."""
        if not public_id:
            return False
        try:
            return self.remove(public_id)
        except ExternalServiceError:
            logger.warning("Could not remove media asset %s; continuing", public_id)
            return False

    @staticmethod
    def derive_handle_from_url(url: Optional[str]) -> Optional[str]:
        """
        Recover the public id from a delivery URL, or None when the URL
        does not look like one of ours.
        """
        if not url or not isinstance(url, str):
            return None

        match = _DELIVERY_URL_PATTERN.match(url)
        if not match:
            return None

        segments = match.group("rest").split("/")

        # Drop transformation segments and the version marker.
        for index, segment in enumerate(segments):
            if _VERSION_SEGMENT.match(segment):
                segments = segments[index + 1:]
                break
        else:
            while len(segments) > 1 and _TRANSFORM_SEGMENT.match(segments[0]):
                segments = segments[1:]

        if not segments or not segments[-1]:
            return None

        segments[-1] = segments[-1].rsplit(".", 1)[0]
        return "/".join(segments) or None

    def list_folder(self, folder: Optional[str] = None) -> list[dict]:
        try:
            result = cloudinary.api.resources(
                type="upload",
                prefix=self._folder(folder),
                max_results=500,
            )
        except CloudinaryError as exc:
            logger.error("Media folder listing failed: %s", exc)
            raise ExternalServiceError("Failed to list folder") from exc

        return [self._asset(resource) for resource in result.get("resources", [])]
