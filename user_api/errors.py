"""Global HTTP error handling and JSON response helpers."""
from __future__ import annotations

from typing import Any

import pydantic
from flask import Flask, jsonify
from loguru import logger
from werkzeug.exceptions import HTTPException

from .domain.errors import UserError


def _body(error: str, message: str):
    return jsonify({"error": error, "message": message})


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(UserError)
    def user_error(err: UserError):
        return _body(err.code, str(err)), err.status

    @app.errorhandler(pydantic.ValidationError)
    def invalid_payload(err: pydantic.ValidationError):
        message = "; ".join(
            f"{'.'.join(str(p) for p in e['loc']) or 'body'}: {e['msg']}" for e in err.errors()
        )
        return _body("validation_error", message), 400

    @app.errorhandler(HTTPException)
    def http_error(err: HTTPException):
        return _body(err.name.lower().replace(" ", "_"), err.description or err.name), err.code

    @app.errorhandler(Exception)
    def internal(err: Exception):
        logger.opt(exception=err).error("Unhandled error while serving request")
        return _body("internal_server_error", "unexpected error"), 500


def ok(data: Any, status: int = 200):
    return jsonify(data), status
