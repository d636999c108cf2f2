from datetime import datetime, timezone

from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError
import logging

from utils.errors import ServiceError

logger = logging.getLogger(__name__)


def error_response(error: str, message: str, status: int, details: dict | None = None):
    payload = {
        "error": error,
        "message": message,
        "statusCode": status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if details:
        payload["details"] = details
    return jsonify(payload), status


HTTP_ERROR_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    408: "REQUEST_TIMEOUT",
    409: "CONFLICT",
    415: "UNSUPPORTED_MEDIA_TYPE",
    429: "TOO_MANY_REQUESTS",
}


def register_error_handlers(app):
    # Service taxonomy: InvalidInput, Unauthorized, NotFound, Conflict, RequestTimeout
    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        if err.status_code >= 500:
            logger.exception("Service failure", exc_info=err)
        return error_response(err.error, err.message, err.status_code)

    # Marshmallow validation errors map to 400
    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        # err.messages contains field-level details
        messages = err.messages if isinstance(err.messages, dict) else {"_schema": err.messages}
        return error_response("VALIDATION_ERROR", "Invalid input", 400, details=messages)

    # Integrity errors that escaped a repository (unique constraints, FK violations)
    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # The driver message can echo the offending key value; log only the constraint name
        orig = getattr(err, "orig", None)
        constraint = getattr(getattr(orig, "diag", None), "constraint_name", None)
        logger.warning("Integrity error on constraint %s", constraint or "<unknown>")
        lower_msg = str(orig if orig is not None else err).lower()
        if "unique constraint" in lower_msg or "unique violation" in lower_msg:
            return error_response("CONFLICT", "Unique constraint violated.", 409)
        return error_response("BAD_REQUEST", "Integrity error.", 400)

    # Werkzeug HTTPExceptions (404 routing, 405, 429 from the limiter) keep their status codes
    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = err.code or 400
        return error_response(HTTP_ERROR_CODES.get(status, "HTTP_ERROR"), err.description, status)

    # 500 Internal Error (catch-all)
    @app.errorhandler(Exception)
    def internal_error(err: Exception):
        logger.exception("Unhandled exception", exc_info=err)
        # In dev, include exception details to speed up debugging
        details = None
        if current_app and current_app.debug:
            details = {"type": err.__class__.__name__, "message": str(err)}
        return error_response("INTERNAL_ERROR", "An unexpected error occurred", 500, details=details)
