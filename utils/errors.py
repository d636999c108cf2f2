"""
Error taxonomy shared by the services and the HTTP layer.

Services raise these; api.errors turns them into the error envelope with the
matching status code.
"""
from __future__ import annotations


class ServiceError(Exception):
    """Base class for every error a service surfaces to its caller."""

    status_code = 500
    error = "INTERNAL_ERROR"
    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(ServiceError):
    status_code = 400
    error = "BAD_REQUEST"
    default_message = "Invalid input"


class Unauthorized(ServiceError):
    status_code = 401
    error = "UNAUTHORIZED"
    default_message = "Unauthorized"


class NotFound(ServiceError):
    status_code = 404
    error = "NOT_FOUND"
    default_message = "Resource not found"


class RequestTimeout(ServiceError):
    status_code = 408
    error = "REQUEST_TIMEOUT"
    default_message = "Request timeout exceeded"


class Conflict(ServiceError):
    status_code = 409
    error = "CONFLICT"
    default_message = "Conflict"
