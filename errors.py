"""
Typed API errors and their translation into JSON responses.

Services raise one of the ``APIError`` subclasses below; the handlers
registered by ``register_error_handlers`` turn them into
``{"success": false, "message": ...}`` bodies with the matching status code.
"""
import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class APIError(Exception):
    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class InvalidArgument(APIError):
    status_code = 400
    default_message = "Invalid request"


class Unauthorized(APIError):
    status_code = 401
    default_message = "Not authenticated"


class NotFound(APIError):
    status_code = 404
    default_message = "Not found"


class Conflict(APIError):
    # Duplicate registrations and friend-graph conflicts are client errors.
    status_code = 400
    default_message = "Conflict"


def error_response(message, status_code):
    return jsonify({"success": False, "message": message}), status_code


def register_error_handlers(app):
    @app.errorhandler(APIError)
    def handle_api_error(error):
        return error_response(error.message, error.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return error_response(error.description, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception("Unhandled error: %s", error)
        return error_response("Internal Server Error", 500)
