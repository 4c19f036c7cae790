"""API error taxonomy and JSON error handlers.

Handlers raise an `ApiError` subclass; `register_error_handlers` turns it
into a `{"message": ...}` response with the matching status code.
"""

from typing import Any

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException


class ApiError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500
    message = "Internal server error"

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        payload: dict[str, Any] | None = None,
    ):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.payload = payload or {}

    def to_dict(self) -> dict[str, Any]:
        body = dict(self.payload)
        body["message"] = self.message
        return body


class ValidationError(ApiError):
    status_code = 400
    message = "Invalid input data"


class Unauthenticated(ApiError):
    status_code = 401
    message = "Authentication required"


class AuthFailed(ApiError):
    status_code = 401
    message = "Invalid email or password"


class InvalidToken(ApiError):
    status_code = 403
    message = "Invalid or expired token"


class NotFound(ApiError):
    status_code = 404
    message = "Not found"


class Conflict(ApiError):
    # 411 is what existing clients of the signup endpoint expect
    status_code = 411
    message = "Email already taken"


class BadRequest(ApiError):
    status_code = 400
    message = "Bad request"


class ConfigError(ApiError):
    status_code = 500
    message = "Server misconfigured"


class UploadError(ApiError):
    status_code = 500
    message = "Upload failed"


class InternalError(ApiError):
    status_code = 500
    message = "Internal server error"


def register_error_handlers(app: Flask) -> None:
    """Register JSON handlers for API errors, HTTP errors and crashes."""

    @app.errorhandler(ApiError)
    def api_error(error: ApiError):
        if error.status_code >= 500:
            app.logger.error("%s: %s", type(error).__name__, error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def http_error(error: HTTPException):
        return jsonify({"message": error.description}), error.code

    @app.errorhandler(Exception)
    def internal_error(error: Exception):
        app.logger.exception("Unhandled error: %s", error)
        internal = InternalError()
        return jsonify(internal.to_dict()), internal.status_code
