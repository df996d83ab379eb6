import logging
import os
import sys

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from sitecms import create_app
from sitecms.config import config_by_name
from sitecms.extensions import db

logger = logging.getLogger("sitecms")


def check_database(app) -> bool:
    with app.app_context():
        try:
            db.session.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.exception("Could not connect to the database")
            return False
        finally:
            db.session.remove()

    logger.info("Database connected")
    return True


config_name = os.getenv("APP_ENV", "development")

if not config_by_name[config_name].SQLALCHEMY_DATABASE_URI:
    logger.error("DATABASE_URI is not set")
    sys.exit(1)

app = create_app(config_name)

if not check_database(app):
    sys.exit(1)


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=app.config["PORT"])
