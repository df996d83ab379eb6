"""
Auth service and access gate tests.
"""

from datetime import timedelta

import pytest
from flask_jwt_extended import create_access_token

from sitecms.application.auth import service as auth_service
from sitecms.extensions import db
from sitecms.models import Admin
from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD


class TestLogin:

    def test_login_returns_token_and_public_user(self, client, admin):
        response = client.post(
            "/api/auth/login",
            json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
        )

        body = response.get_json()
        assert response.status_code == 200
        assert body["success"] is True
        assert body["data"]["token"]
        assert body["data"]["user"] == {
            "id": admin.id,
            "email": ADMIN_EMAIL,
            "name": "Site Admin",
            "role": "admin",
        }
        assert "password_hash" not in body["data"]["user"]

    def test_login_missing_fields_is_400(self, client, admin):
        response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL})

        assert response.status_code == 400
        assert response.get_json() == {
            "success": False,
            "error": "Please provide email and password",
        }

    def test_unknown_email_and_wrong_password_look_identical(self, client, admin):
        """No account enumeration through status or message."""
        unknown = client.post(
            "/api/auth/login",
            json={"email": "nobody@example.com", "password": ADMIN_PASSWORD},
        )
        wrong = client.post(
            "/api/auth/login",
            json={"email": ADMIN_EMAIL, "password": "not-the-password"},
        )

        assert unknown.status_code == wrong.status_code == 401
        assert unknown.get_json() == wrong.get_json() == {
            "success": False,
            "error": "Invalid credentials",
        }

    def test_inactive_admin_cannot_login(self, client, admin):
        admin.is_active = False
        db.session.commit()

        response = client.post(
            "/api/auth/login",
            json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
        )

        assert response.status_code == 401
        assert response.get_json()["error"] == "Invalid credentials"

    def test_issue_token_without_secret_raises(self, app, admin):
        app.config["JWT_SECRET_KEY"] = None

        with pytest.raises(RuntimeError):
            auth_service.issue_token(admin)


class TestAccessGate:

    def test_me_returns_current_admin(self, client, auth_headers):
        response = client.get("/api/auth/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.get_json()["data"]["email"] == ADMIN_EMAIL

    @pytest.mark.parametrize("headers", [
        {},
        {"Authorization": "Bearer not-a-jwt"},
        {"Authorization": "Token abc"},
    ])
    def test_bad_or_missing_token_is_401_with_fixed_message(self, client, admin, headers):
        response = client.get("/api/auth/me", headers=headers)

        assert response.status_code == 401
        assert response.get_json() == {
            "success": False,
            "error": "Not authorized to access this route",
        }

    def test_expired_token_is_rejected_like_any_other(self, app, client, admin):
        with app.test_request_context():
            token = create_access_token(identity=admin.id, expires_delta=timedelta(seconds=-10))

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.get_json()["error"] == "Not authorized to access this route"

    def test_token_for_deleted_admin_is_rejected(self, client, admin, auth_headers):
        db.session.delete(admin)
        db.session.commit()

        response = client.get("/api/auth/me", headers=auth_headers)

        assert response.status_code == 401

    def test_token_for_disabled_admin_is_rejected(self, client, admin, auth_headers):
        admin.is_active = False
        db.session.commit()

        response = client.get("/api/auth/me", headers=auth_headers)

        assert response.status_code == 401

    def test_gate_runs_before_route_logic(self, client, admin, cloud):
        response = client.post("/api/blogs", json={"title": "x"})

        assert response.status_code == 401
        cloud.upload.assert_not_called()

    def test_logout_is_stateless(self, client, auth_headers):
        response = client.post("/api/auth/logout", headers=auth_headers)

        assert response.status_code == 200
        # The token itself keeps working until it expires.
        assert client.get("/api/auth/me", headers=auth_headers).status_code == 200


class TestChangePassword:

    def test_change_password(self, client, admin, auth_headers):
        response = client.put(
            "/api/auth/change-password",
            headers=auth_headers,
            json={"currentPassword": ADMIN_PASSWORD, "newPassword": "a-new-password"},
        )

        assert response.status_code == 200
        login = client.post(
            "/api/auth/login",
            json={"email": ADMIN_EMAIL, "password": "a-new-password"},
        )
        assert login.status_code == 200

    def test_wrong_current_password_is_401(self, client, admin, auth_headers):
        response = client.put(
            "/api/auth/change-password",
            headers=auth_headers,
            json={"currentPassword": "wrong", "newPassword": "a-new-password"},
        )

        assert response.status_code == 401
        assert response.get_json()["error"] == "Current password is incorrect"
        assert db.session.get(Admin, admin.id).check_password(ADMIN_PASSWORD)

    def test_short_new_password_is_400(self, client, auth_headers):
        response = client.put(
            "/api/auth/change-password",
            headers=auth_headers,
            json={"currentPassword": ADMIN_PASSWORD, "newPassword": "short"},
        )

        assert response.status_code == 400


class TestSeedAdmin:

    def test_seed_admin_is_idempotent(self, app):
        first = auth_service.seed_admin("owner@example.com", "long-enough-password", "Owner")
        second = auth_service.seed_admin("owner@example.com", "long-enough-password", "Owner")

        assert first is not None
        assert second is None
        assert Admin.query.filter_by(email="owner@example.com").count() == 1

    def test_seed_admin_cli(self, app):
        app.config["ADMIN_EMAIL"] = "cli@example.com"
        app.config["ADMIN_INITIAL_PASSWORD"] = "long-enough-password"

        result = app.test_cli_runner().invoke(args=["seed-admin"])

        assert result.exit_code == 0
        assert "created" in result.output
        assert Admin.query.filter_by(email="cli@example.com").one().role == "admin"
