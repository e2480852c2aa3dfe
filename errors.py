"""
Project: Restaurant Management API
Description:
Typed business errors and the Flask handlers that turn them into JSON
responses. Every failure body carries a ``message``; validation failures
may also carry field-level ``errors``.
"""

import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException, NotFound

from models import db

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.message = message
        self.errors = errors

    def to_dict(self):
        body = {"message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(AppError):
    status_code = 400


class AuthenticationError(AppError):
    status_code = 401


class ForbiddenError(AppError):
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409


def register_error_handlers(app):
    @app.errorhandler(AppError)
    def handle_app_error(err):
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(NotFound)
    def handle_not_found(_err):
        return jsonify({"message": "Route not found"}), 404

    @app.errorhandler(HTTPException)
    def handle_http_error(err):
        return jsonify({"message": err.description}), err.code

    @app.errorhandler(Exception)
    def handle_unexpected(err):
        logger.exception("Unhandled error: %s", err)
        db.session.rollback()
        return jsonify({"message": "Something went wrong"}), 500
