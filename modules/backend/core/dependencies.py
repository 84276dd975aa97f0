"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

from typing import Annotated

from fastapi import Depends, Request

from modules.backend.services.note import NoteService


def get_note_service(request: Request) -> NoteService:
    """
    Return the board service owned by the running application.

    The board is process-wide: one NoteService is created in create_app()
    and lives on app.state until the process exits.
    """
    return request.app.state.note_service


def get_request_id(request: Request) -> str:
    """Request ID assigned by RequestContextMiddleware."""
    return getattr(request.state, "request_id", None) or request.headers.get("x-request-id", "")


# Type aliases for endpoint signatures
Board = Annotated[NoteService, Depends(get_note_service)]
RequestId = Annotated[str, Depends(get_request_id)]
