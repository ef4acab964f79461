import logging
import os
import sys

from flask_migrate import upgrade
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError

from app import create_app
from config import Config

# Configure logging
logging.basicConfig(level=logging.DEBUG)
logger = logging.getLogger(__name__)

MIGRATIONS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "migrations")


def main():
    # create_app makes the data directory and any missing tables
    app = create_app(Config)

    try:
        engine = create_engine(app.config["SQLALCHEMY_DATABASE_URI"])
        with engine.connect():
            logger.info("Database connection successful")
    except OperationalError as e:
        logger.error(f"Database connection failed: {e}")
        sys.exit(1)

    if not os.path.isdir(MIGRATIONS_DIR):
        logger.info("No migrations directory, tables created from models")
        return

    with app.app_context():
        try:
            upgrade(directory=MIGRATIONS_DIR)  # Apply migrations
            logger.info("Database migrations applied successfully")
        except Exception as e:
            logger.error(f"Failed to apply migrations: {e}")
            sys.exit(1)


if __name__ == "__main__":
    main()
