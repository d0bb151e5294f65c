"""Application factory and blueprint registration."""
from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from .config import BaseConfig
from .db.session import db
from .api.health.routes import bp as health_bp
from .api.users.routes import bp as users_bp
from .docs.routes import bp as docs_bp
from .web.routes import bp as web_bp
from .errors import register_error_handlers
from .log import configure_logging


def create_app(config: BaseConfig | None = None) -> Flask:
    """Create and configure the Flask application."""
    config = config or BaseConfig()
    configure_logging(config.LOG_LEVEL)

    app = Flask(__name__)
    app.config.from_object(config)
    # Serve /api/users and /api/users/ alike.
    app.url_map.strict_slashes = False
    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})

    # Init extensions
    db.init_app(app)

    # Register blueprints
    app.register_blueprint(health_bp, url_prefix="/api/health")
    app.register_blueprint(users_bp, url_prefix="/api/users")
    app.register_blueprint(docs_bp)
    app.register_blueprint(web_bp)

    # Global error handlers
    register_error_handlers(app)
    return app
