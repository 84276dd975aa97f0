"""
Request Context Middleware.

Every board request gets a request ID (the renderer's X-Request-ID, or a
fresh UUID) and a renderer name from X-Frontend-ID. Both are bound to the
structlog context for the length of the request, so a note's creation,
edit or drag step can be followed from response header to log record.
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from modules.backend.core.logging import get_logger

logger = get_logger(__name__)

# Renderers that identify themselves via X-Frontend-ID; anything else logs as "unknown".
KNOWN_FRONTENDS = frozenset({"web", "cli", "api", "internal"})


def resolve_frontend(header: str | None) -> str:
    name = (header or "").lower()
    return name if name in KNOWN_FRONTENDS else "unknown"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Sets request.state.request_id and request.state.frontend, and stamps
    X-Request-ID and X-Response-Time on the response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        frontend = resolve_frontend(request.headers.get("X-Frontend-ID"))
        request.state.request_id = request_id
        request.state.frontend = frontend

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            frontend=frontend,
            method=request.method,
            path=request.url.path,
        )
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request raised",
                extra={"duration_ms": _elapsed_ms(started), "error_type": type(exc).__name__},
            )
            raise
        finally:
            structlog.contextvars.clear_contextvars()

        duration_ms = _elapsed_ms(started)
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms}ms"
        logger.debug(
            "Request served",
            extra={
                "request_id": request_id,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)
