"""
Custom Exceptions.

Errors that leave the board as an error envelope. Each class carries
its HTTP status and error code; the handlers read them off the instance.

Mutations on a missing note are not errors and never raise. These cover
reading a single note that does not exist and bad input that reaches
the service layer.
"""

from typing import Any


class ApplicationError(Exception):
    """Base exception for all application errors."""

    status_code = 500
    default_code = "SYS_INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a read names a note that is not on the board."""

    status_code = 404
    default_code = "RES_NOT_FOUND"

    def __init__(self, message: str = "Resource not found", details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details=details)


class ValidationError(ApplicationError):
    """Raised when service-level input validation fails."""

    status_code = 400
    default_code = "VAL_VALIDATION_ERROR"

    def __init__(self, message: str = "Validation failed", details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details=details)
