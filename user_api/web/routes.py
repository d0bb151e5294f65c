"""Serves the single-page user management client."""
from __future__ import annotations

from flask import Blueprint, Response

bp = Blueprint("web", __name__, static_folder="static", static_url_path="/assets")


@bp.get("/")
def index() -> Response:
    return bp.send_static_file("index.html")
