"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from modules.backend.api.v1.endpoints import drag, notes

router = APIRouter()

# Board endpoints
router.include_router(notes.router, prefix="/notes", tags=["notes"])

# Drag lifecycle hooks live under the same note paths
router.include_router(drag.router, prefix="/notes", tags=["drag"])
