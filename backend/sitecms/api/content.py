from sitecms.application.content.types import CONTENT_TYPES
from .factory import register_content_routes
from . import api_bp

_OPTIONS = {
    "blogs": {"by_category": True, "related": True},
    "projects": {"by_category": True},
    "faqs": {"by_category": True},
}

for _prefix, (_repository, _schema) in CONTENT_TYPES.items():
    register_content_routes(api_bp, _prefix, _repository, _schema, **_OPTIONS.get(_prefix, {}))
