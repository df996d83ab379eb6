from datetime import datetime, timezone

from flask import current_app, jsonify

from . import api_bp


@api_bp.route("/health", methods=["GET"])
def health_check():
    return jsonify({
        "success": True,
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": current_app.config.get("ENV_NAME", "development"),
    })
