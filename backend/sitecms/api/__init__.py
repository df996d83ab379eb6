from flask import Blueprint, current_app

from sitecms.extensions import limiter
from sitecms.middleware.request_pipeline import rate_limit_string

# Every route lives under /api
api_bp = Blueprint("api", __name__)

# Per-IP window from RATE_LIMIT_*; routes outside the blueprint are not limited
limiter.limit(lambda: rate_limit_string(current_app.config))(api_bp)

# Import route modules so they register with api_bp
from . import health
from . import auth
from . import home
from . import about
from . import content
from . import leads
from . import upload
from . import audit
