"""
Shared fixtures for API tests.

Each test gets a fresh app on an in-memory SQLite database. The media
service SDK is patched so nothing leaves the process.
"""

import itertools
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from sitecms import create_app
from sitecms.extensions import db
from sitecms.models import Admin

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct-horse-battery"

# Smallest string the gateway accepts as an image.
PNG = "data:image/png;base64,iVBORw0KGgo="
JPEG = "data:image/jpeg;base64,/9j/4AAQSkZJRg=="


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def admin(app):
    admin = Admin()
    admin.email = ADMIN_EMAIL
    admin.name = "Site Admin"
    admin.set_password(ADMIN_PASSWORD)
    db.session.add(admin)
    db.session.commit()
    return admin


@pytest.fixture
def auth_headers(client, admin):
    response = client.post(
        "/api/auth/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    token = response.get_json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def cloud():
    """Patch the cloudinary SDK calls the gateway makes."""
    counter = itertools.count(1)

    def fake_upload(source, **options):
        public_id = f"{options.get('folder', 'site-media')}/asset{next(counter)}"
        return {
            "secure_url": f"https://res.cloudinary.com/test-cloud/image/upload/v1700000000/{public_id}.jpg",
            "public_id": public_id,
            "width": 1200,
            "height": 800,
            "format": "jpg",
            "bytes": 2048,
        }

    with patch("cloudinary.uploader.upload", side_effect=fake_upload) as upload, \
            patch("cloudinary.uploader.destroy", return_value={"result": "ok"}) as destroy, \
            patch("cloudinary.api.resources", return_value={"resources": []}) as resources:
        yield SimpleNamespace(upload=upload, destroy=destroy, resources=resources)


def destroyed_ids(cloud):
    return [c.args[0] for c in cloud.destroy.call_args_list]
