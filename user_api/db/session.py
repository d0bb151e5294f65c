"""SQLAlchemy engine/session initialization and lifecycle management."""
from __future__ import annotations

from typing import Any

from flask import Flask
from loguru import logger
from sqlalchemy import create_engine, make_url
from sqlalchemy.orm import scoped_session, sessionmaker

from .base import Base


class Database:
    def __init__(self) -> None:
        self.engine = None
        self.Session = None  # type: ignore[assignment]

    def init_app(self, app: Flask) -> None:
        url: str = app.config["DATABASE_URL"]
        echo: bool = app.config.get("SQL_ECHO", False)

        options: dict[str, Any] = {"echo": echo, "pool_pre_ping": True}
        # SQLite's default pools reject size/overflow arguments.
        if make_url(url).get_backend_name() != "sqlite":
            options["pool_size"] = app.config.get("POOL_SIZE", 10)
            options["max_overflow"] = app.config.get("MAX_OVERFLOW", 20)

        self.engine = create_engine(url, **options)
        self.Session = scoped_session(
            sessionmaker(bind=self.engine, expire_on_commit=False, autoflush=False)
        )
        logger.info("Database engine created for {}", make_url(url).render_as_string(hide_password=True))

        if app.config.get("AUTO_CREATE_SCHEMA", True):
            self.create_all()

        @app.teardown_appcontext
        def remove_session(_: object | None) -> None:
            if self.Session is not None:
                self.Session.remove()

    def create_all(self) -> None:
        from .models import user  # noqa: F401

        assert self.engine is not None, "DB engine is not initialized"
        Base.metadata.create_all(self.engine)


db = Database()
