"""Application factory and app-wide configuration."""

import logging

from flask import Flask
from flask_cors import CORS

from backend.app.api.routes import api_bp
from backend.app.config import load_config
from backend.app.errors import register_error_handlers

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("backend").setLevel(level)


def create_app(env_name=None, **overrides) -> Flask:
    """Build the Flask app instance; keyword overrides win over env settings."""
    app = Flask(__name__)
    app.config.from_mapping(load_config(env_name, overrides))

    configure_logging(app.config["LOG_LEVEL"])

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    register_error_handlers(app)
    app.register_blueprint(api_bp, url_prefix="/api")
    return app
