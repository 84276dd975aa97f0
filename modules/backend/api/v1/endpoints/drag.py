"""
Drag API Endpoints.

Pointer-drag lifecycle hooks. A renderer forwards pointer down, move and
up events for a note; coordinates are in board space.

Events for a note that is not being dragged, or that no longer exists,
are ignored and return null data.
"""

from fastapi import APIRouter

from modules.backend.core.dependencies import Board, RequestId
from modules.backend.schemas.base import ApiResponse, ResponseMetadata
from modules.backend.schemas.note import NoteResponse, PointerEvent

router = APIRouter()


def _respond(note, request_id: str) -> ApiResponse[NoteResponse]:
    return ApiResponse(
        data=NoteResponse.model_validate(note) if note is not None else None,
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "/{note_id}/drag/begin",
    response_model=ApiResponse[NoteResponse],
    summary="Pointer down on a note",
    description="Start dragging and bring the note to the front.",
)
async def begin_drag(
    note_id: str,
    event: PointerEvent,
    board: Board,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    note = board.begin_drag(note_id, event.to_position())
    return _respond(note, request_id)


@router.post(
    "/{note_id}/drag/move",
    response_model=ApiResponse[NoteResponse],
    summary="Pointer move while dragging",
)
async def drag_to(
    note_id: str,
    event: PointerEvent,
    board: Board,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    note = board.drag_to(note_id, event.to_position())
    return _respond(note, request_id)


@router.post(
    "/{note_id}/drag/end",
    status_code=204,
    summary="Pointer up",
)
async def end_drag(
    note_id: str,
    board: Board,
) -> None:
    board.end_drag(note_id)
