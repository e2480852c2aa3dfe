"""
Project: Restaurant Management API
Description:
Main application entry point. Initializes Flask, database, logging and
Socket.IO, registers the API blueprints and error handlers, and launches
the app.
"""

import logging

from flask import Flask, jsonify

from auth_api import bp as auth_bp
from config import Config
from errors import register_error_handlers
from feedback_api import bp as feedback_bp
from menu_api import bp as menu_bp
from models import db
from order_api import bp as order_bp
from realtime import init_socketio, socketio
from reservation_api import bp as reservation_bp

logger = logging.getLogger(__name__)


def configure_logging(app):
    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.setLevel(app.config["LOG_LEVEL"])


def create_app(testing: bool = False, config_overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)

    if testing:
        app.config["TESTING"] = True
        app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite:///:memory:"
        app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
        app.config["SECRET_KEY"] = app.config.get("SECRET_KEY") or "test-secret-key"
        app.config["SOCKETIO_ASYNC_MODE"] = "threading"

    if config_overrides:
        app.config.update(config_overrides)

    if not app.config.get("SECRET_KEY"):
        raise RuntimeError("SECRET_KEY is not set; refusing to start without a token-signing secret")

    configure_logging(app)
    db.init_app(app)
    init_socketio(app)
    register_error_handlers(app)

    for bp in (auth_bp, menu_bp, reservation_bp, order_bp, feedback_bp):
        app.register_blueprint(bp)

    @app.get("/health")
    def health():
        return jsonify({"status": "ok"})

    with app.app_context():
        db.create_all()

    logger.info("App created (testing=%s)", testing)
    return app


if __name__ == "__main__":
    app = create_app()
    socketio.run(app, host="0.0.0.0", port=5013, debug=True)
