"""
Custom exception classes for the application.

This module defines the catalog error taxonomy. Each exception carries the
HTTP status it maps to and a machine-readable code, so the service layer
can raise domain errors without knowing anything about the transport.
"""

from typing import Self


class AppException(Exception):
    """
    Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        code: Machine-readable error code, or None to let the transport
            derive one from the failing operation.
        http_status: HTTP status code for REST API responses.
    """

    http_status: int = 500
    default_code: str | None = None

    def __init__(self, message: str, code: str | None = None):
        """
        Initialize the exception with a message.

        Args:
            message: Human-readable error description.
            code: Optional machine-readable code overriding the class default.
        """
        self.message = message
        self.code = code or self.default_code
        super().__init__(message)

    def with_context(self, context: str) -> Self:
        """
        Return a copy of this exception with an operation prefix.

        The class and the code are preserved, so a NotFoundError stays a
        NotFoundError after the service layer wraps it.

        Args:
            context: Operation description, e.g. "failed to create quote".

        Returns:
            New exception of the same type.
        """
        return type(self)(f"{context}: {self.message}", code=self.code)


class ValidationError(AppException):
    """
    Data validation failed.

    Raised when input data fails validation checks before processing.

    HTTP Status: 400 Bad Request
    """

    http_status = 400
    default_code = "VALIDATION_ERROR"


class NotFoundError(AppException):
    """
    Resource not found.

    Raised when a requested author or quote does not exist.

    HTTP Status: 404 Not Found
    """

    http_status = 404
    default_code = "NOT_FOUND"


class ConflictError(AppException):
    """
    Resource conflict.

    Raised when an operation conflicts with existing state: a duplicate
    author name, or deleting an author that still has quotes.

    HTTP Status: 400 Bad Request
    """

    http_status = 400
    default_code = "CONFLICT"


class DependencyFailure(AppException):
    """
    Storage engine unreachable or query failed.

    Raised when a database operation fails for a reason that is not
    otherwise classified.

    HTTP Status: 500 Internal Server Error
    """

    http_status = 500
