import logging
from contextlib import contextmanager

from sitecms.extensions import db

logger = logging.getLogger(__name__)


@contextmanager
def transactional(label: str = "write"):
    """Commit on success, roll back and re-raise on any failure."""
    try:
        yield db.session
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.debug("Rolled back %s", label)
        raise
