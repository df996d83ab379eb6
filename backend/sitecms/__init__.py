import logging
import os

from flask import Flask, send_file, current_app
from flask_swagger_ui import get_swaggerui_blueprint

from .config import config_by_name
from .extensions import db, migrate, jwt, media
from .api import api_bp
from .middleware.request_pipeline import request_pipeline
from .errors import register_error_handlers
from .cli import register_commands
from .application.auth.service import find_active_admin


def create_app(config_name: str | None = None) -> Flask:
    config_name = config_name or os.getenv("APP_ENV", "development")

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.config["ENV_NAME"] = config_name

    logging.getLogger("sitecms").setLevel(app.config["LOG_LEVEL"])

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    media.init_app(app)
    _register_jwt_loaders()

    # -------------------------------------------------
    # Middleware
    # -------------------------------------------------
    request_pipeline(app)

    # -------------------------------------------------
    # API Blueprint
    # -------------------------------------------------
    app.register_blueprint(api_bp, url_prefix="/api")
    register_error_handlers(app)
    register_commands(app)

    # -------------------------------------------------
    # Serve OpenAPI YAML (public)
    # -------------------------------------------------
    @app.route("/openapi/site.yaml", methods=["GET"], endpoint="openapi_site")
    def serve_openapi():
        spec_path = os.path.join(current_app.root_path, "api", "openapi.yaml")
        return send_file(spec_path, mimetype="application/yaml", as_attachment=False)

    # -------------------------------------------------
    # Swagger UI
    # -------------------------------------------------
    SWAGGER_URL = "/swagger"
    API_URL = "/openapi/site.yaml"

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            "app_name": "Site CMS API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )

    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

    return app


def _register_jwt_loaders():
    @jwt.user_lookup_loader
    def load_admin(_jwt_header, jwt_data):
        # Re-read on every request so disabled or deleted admins lose access.
        return find_active_admin(jwt_data["sub"])
