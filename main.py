"""Development server entry point: ``python main.py``.

For production, serve ``main:app`` with a WSGI server instead.
"""
from __future__ import annotations

from dotenv import load_dotenv

load_dotenv()

from user_api import create_app  # noqa: E402

app = create_app()


if __name__ == "__main__":
    app.run(host=app.config["HOST"], port=app.config["PORT"])
