import logging
import time

from flask import g, request

from sitecms.extensions import cors, limiter

logger = logging.getLogger(__name__)


def rate_limit_string(config) -> str:
    window_seconds = max(1, config["RATE_LIMIT_WINDOW_MS"] // 1000)
    return f"{config['RATE_LIMIT_MAX']} per {window_seconds} seconds"


def request_pipeline(app):
    """
    Cross-cutting request handling: CORS allow-list, the limiter (its per-IP
    window is attached to the /api blueprint) and one log line per completed
    request.
    """
    cors.init_app(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    limiter.init_app(app)

    @app.before_request
    def start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def log_request(response):
        started = g.get("request_started")
        elapsed_ms = (time.perf_counter() - started) * 1000 if started else 0.0
        logger.info(
            "%s %s %s %.1fms",
            request.method,
            request.path,
            response.status_code,
            elapsed_ms,
        )
        return response
