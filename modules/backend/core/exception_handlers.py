"""
Exception Handlers.

Turn errors into the board's error envelope:

    ApplicationError        -> exc.status_code, exc.code, exc.details
    RequestValidationError  -> 422 VAL_REQUEST_INVALID, one entry per field
    anything else           -> 500 SYS_INTERNAL_ERROR, details only logged

A mutation addressed to a missing note never gets here. What does is a
read of a missing note, a malformed body or query (a sort key other than
created_at/updated_at, a non-finite pointer coordinate) and bugs.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from modules.backend.core.exceptions import ApplicationError
from modules.backend.core.logging import get_logger
from modules.backend.schemas.base import ErrorDetail, ErrorResponse, ResponseMetadata

logger = get_logger(__name__)


def _get_request_id(request: Request) -> str | None:
    """Request ID set by the middleware, else the raw header."""
    return getattr(request.state, "request_id", None) or request.headers.get("x-request-id")


def _error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error=ErrorDetail(code=code, message=message, details=details or None),
        metadata=ResponseMetadata(request_id=_get_request_id(request)),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def application_error_handler(request: Request, exc: ApplicationError) -> JSONResponse:
    """Envelope for errors the board raises on purpose."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "Request rejected",
        extra={
            "code": exc.code,
            "status": exc.status_code,
            "error_message": exc.message,
            **exc.details,
        },
    )
    return _error_response(request, exc.status_code, exc.code, exc.message, exc.details)


def _field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    # Input values are left out: a NaN coordinate is not valid JSON.
    return [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "message": err.get("msg", "Validation error"),
            "type": err.get("type", "unknown"),
        }
        for err in exc.errors()
    ]


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Envelope for request bodies and queries FastAPI rejected."""
    errors = _field_errors(exc)
    logger.warning(
        "Request validation failed",
        extra={"fields": [e["field"] for e in errors]},
    )
    return _error_response(
        request,
        422,
        "VAL_REQUEST_INVALID",
        "Request validation failed",
        {"validation_errors": errors},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Envelope for bugs; the traceback goes to the log only."""
    logger.exception("Unhandled exception", extra={"exception_type": type(exc).__name__})
    return _error_response(request, 500, "SYS_INTERNAL_ERROR", "An unexpected error occurred")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the three handlers on the app."""
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
