"""Create the users table, constraints and indexes (dev/bootstrap helper)."""
from __future__ import annotations

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

from user_api import create_app  # noqa: E402
from user_api.config import BaseConfig  # noqa: E402
from user_api.db.session import db  # noqa: E402


def main() -> None:
    # create_app would create the schema itself; do it explicitly here.
    app = create_app(BaseConfig(AUTO_CREATE_SCHEMA=False))
    with app.app_context():
        db.create_all()
    logger.info("Tables created.")


if __name__ == "__main__":
    main()
