"""Health check endpoints."""
from __future__ import annotations

from flask import Blueprint
from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from ...db.session import db
from ...errors import ok


bp = Blueprint("health", __name__)


@bp.get("/")
def alive():
    return ok({"status": "ok"})


@bp.get("/db")
def database_status():
    assert db.engine is not None, "DB engine is not initialized"
    try:
        with db.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("Database readiness check failed: {}", exc)
        return ok({"database": "unavailable"}, 503)
    return ok({"database": "ok"})
