"""
Media gateway adapter over the cloudinary SDK.
"""

from io import BytesIO

import pytest
from cloudinary.exceptions import Error as CloudinaryError

from sitecms.domain.exceptions import BadRequestError, ExternalServiceError
from sitecms.extensions import media
from sitecms.utils.media import file_to_data_uri, is_data_uri_image
from tests.conftest import JPEG, PNG


class FakeUpload:
    def __init__(self, filename, content=b"\x89PNG\r\n"):
        self.filename = filename
        self._content = content

    def read(self):
        return BytesIO(self._content).read()


class TestValidation:

    @pytest.mark.parametrize("value", [PNG, JPEG, "data:image/webp;base64,AAAA", "data:image/svg+xml;base64,PHN2Zz4="])
    def test_accepts_data_uris(self, value):
        assert is_data_uri_image(value)

    @pytest.mark.parametrize("value", [
        None,
        "",
        "https://example.com/a.png",
        "data:image/bmp;base64,AAAA",
        "data:text/plain;base64,AAAA",
        "data:image/png;base64,not base64!",
    ])
    def test_rejects_everything_else(self, value):
        assert not is_data_uri_image(value)

    def test_store_rejects_bad_input_without_calling_sdk(self, app, cloud):
        with pytest.raises(BadRequestError):
            media.store("plain text")

        cloud.upload.assert_not_called()


class TestStore:

    def test_store_returns_our_shape(self, app, cloud):
        asset = media.store(PNG, folder="blog", transform=[{"width": 10}])

        assert set(asset) == {"url", "public_id", "width", "height", "format", "bytes"}
        assert cloud.upload.call_args.kwargs["folder"] == "site-media/blog"
        assert cloud.upload.call_args.kwargs["transformation"] == [{"width": 10}]

    def test_sdk_failure_becomes_external_service_error(self, app, cloud):
        cloud.upload.side_effect = CloudinaryError("boom")

        with pytest.raises(ExternalServiceError):
            media.store(PNG)

    def test_store_many_fails_as_a_whole(self, app, cloud):
        results = iter([
            {"secure_url": "https://res.cloudinary.com/c/image/upload/v1/a.jpg", "public_id": "a"},
            CloudinaryError("second one fails"),
            {"secure_url": "https://res.cloudinary.com/c/image/upload/v1/c.jpg", "public_id": "c"},
        ])

        def upload(source, **options):
            result = next(results)
            if isinstance(result, Exception):
                raise result
            return result

        cloud.upload.side_effect = upload

        with pytest.raises(ExternalServiceError):
            media.store_many([PNG, PNG, PNG])

    def test_store_many_checks_all_before_uploading(self, app, cloud):
        with pytest.raises(BadRequestError):
            media.store_many([PNG, "bad"])

        cloud.upload.assert_not_called()

    def test_store_from_url(self, app, cloud):
        media.store_from_url("https://example.com/pic.jpg", folder="imports")

        assert cloud.upload.call_args.args[0] == "https://example.com/pic.jpg"

    def test_store_from_url_rejects_non_http(self, app, cloud):
        with pytest.raises(BadRequestError):
            media.store_from_url("ftp://example.com/pic.jpg")


class TestRemove:

    @pytest.mark.parametrize("result", ["ok", "not found"])
    def test_remove_is_idempotent(self, app, cloud, result):
        cloud.destroy.return_value = {"result": result}

        assert media.remove("site-media/blog/x") is True

    def test_other_outcomes_fail(self, app, cloud):
        cloud.destroy.return_value = {"result": "error"}

        with pytest.raises(ExternalServiceError):
            media.remove("site-media/blog/x")

    def test_remove_quietly_never_raises(self, app, cloud):
        cloud.destroy.side_effect = CloudinaryError("down")

        assert media.remove_quietly("site-media/blog/x") is False
        assert media.remove_quietly(None) is False


class TestDeriveHandle:

    @pytest.mark.parametrize("url, expected", [
        ("https://res.cloudinary.com/demo/image/upload/v1700000000/site-media/blog/abc.jpg", "site-media/blog/abc"),
        ("https://res.cloudinary.com/demo/image/upload/c_fill,w_800/v12/folder/pic.png", "folder/pic"),
        ("https://res.cloudinary.com/demo/image/upload/sample.jpg", "sample"),
        ("https://res.cloudinary.com/demo/image/upload/w_300/folder/pic.webp", "folder/pic"),
        ("https://res.cloudinary.com/demo/image/upload/my_photos/pic.jpg", "my_photos/pic"),
        ("https://res.cloudinary.com/demo/image/upload/c_fill,w_300/my_photos/pic.jpg", "my_photos/pic"),
        ("https://res.cloudinary.com/demo/image/upload/w_300.jpg", "w_300"),
    ])
    def test_parses_delivery_urls(self, url, expected):
        assert media.derive_handle_from_url(url) == expected

    @pytest.mark.parametrize("url", [
        None,
        "",
        "https://example.com/image/upload/v1/a.jpg",
        "https://images.unsplash.com/photo-1?w=800",
        "not a url",
    ])
    def test_returns_none_for_foreign_urls(self, url):
        assert media.derive_handle_from_url(url) is None


class TestMultipart:

    def test_file_to_data_uri(self):
        uri = file_to_data_uri(FakeUpload("photo.PNG"))

        assert uri.startswith("data:image/png;base64,")
        assert is_data_uri_image(uri)

    def test_rejects_non_images(self):
        with pytest.raises(BadRequestError):
            file_to_data_uri(FakeUpload("notes.pdf"))


class TestUploadRoutes:

    def test_upload_image_json(self, client, auth_headers, cloud):
        response = client.post("/api/upload/image", headers=auth_headers, json={"image": PNG, "folder": "misc"})

        data = response.get_json()["data"]
        assert response.status_code == 201
        assert data["publicId"].startswith("site-media/misc/")
        assert data["url"].startswith("https://")

    def test_upload_image_multipart(self, client, auth_headers, cloud):
        response = client.post(
            "/api/upload/image",
            headers=auth_headers,
            data={"file": (BytesIO(b"\x89PNG\r\n"), "logo.png")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 201
        assert cloud.upload.call_args.args[0].startswith("data:image/png;base64,")

    def test_upload_images(self, client, auth_headers, cloud):
        response = client.post("/api/upload/images", headers=auth_headers, json={"images": [PNG, JPEG]})

        assert response.status_code == 201
        assert response.get_json()["count"] == 2

    def test_hero_images_use_hero_transform(self, client, auth_headers, cloud):
        client.post("/api/upload/hero-images", headers=auth_headers, json={"images": [PNG]})

        transform = cloud.upload.call_args.kwargs["transformation"]
        assert transform[0] == {"width": 1920, "height": 1080, "crop": "fill"}

    def test_delete_by_url(self, client, auth_headers, cloud):
        response = client.delete(
            "/api/upload/image",
            headers=auth_headers,
            json={"url": "https://res.cloudinary.com/demo/image/upload/v1/site-media/misc/a.jpg"},
        )

        assert response.status_code == 200
        cloud.destroy.assert_called_once_with("site-media/misc/a")

    def test_delete_unresolvable_url_is_400(self, client, auth_headers, cloud):
        response = client.delete(
            "/api/upload/image",
            headers=auth_headers,
            json={"url": "https://example.com/a.jpg"},
        )

        assert response.status_code == 400
        cloud.destroy.assert_not_called()

    def test_list_folder(self, client, auth_headers, cloud):
        cloud.resources.return_value = {"resources": [
            {"secure_url": "https://res.cloudinary.com/demo/image/upload/v1/site-media/blog/a.jpg", "public_id": "site-media/blog/a"},
        ]}

        response = client.get("/api/upload/folder/blog", headers=auth_headers)

        assert response.get_json()["data"][0]["publicId"] == "site-media/blog/a"
        assert cloud.resources.call_args.kwargs["prefix"] == "site-media/blog"

    def test_upload_requires_admin(self, client, cloud):
        assert client.post("/api/upload/image", json={"image": PNG}).status_code == 401
