"""
Health Check Endpoints.

    GET /health          the process answers
    GET /health/ready    a board is attached; reports its size and activity
"""

from typing import Any

from fastapi import APIRouter, HTTPException, Request

from modules.backend.core.logging import get_logger
from modules.backend.core.utils import utc_now

router = APIRouter()
logger = get_logger(__name__)


def check_board(request: Request) -> dict[str, Any]:
    """Status of the board attached to the app, with its counters when present."""
    service = getattr(request.app.state, "note_service", None)
    if service is None:
        return {"status": "unhealthy", "error": "board not initialized"}
    store = service.store
    return {
        "status": "healthy",
        "notes": len(store),
        "version": store.version,
        "next_z_order": store.next_z_order,
        "dragging": len(service.drag.dragging()),
    }


@router.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check(request: Request) -> dict[str, Any]:
    """200 with the board counters, or 503 when no board is attached."""
    board = check_board(request)
    report = {"status": board["status"], "checks": {"board": board}, "timestamp": utc_now().isoformat()}

    if board["status"] != "healthy":
        logger.warning("Board not ready", extra={"board": board})
        raise HTTPException(status_code=503, detail=report)
    return report
