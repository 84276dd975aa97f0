"""
Notes API Endpoints.

REST API endpoints for the note board.

Every handler is ``async def`` so board mutations run one at a time on the
event loop, in arrival order.
"""

from fastapi import APIRouter, Query

from modules.backend.core.dependencies import Board, RequestId
from modules.backend.models.note import ALL_COLORS
from modules.backend.schemas.base import ApiResponse, ResponseMetadata
from modules.backend.schemas.note import (
    BoardSnapshotResponse,
    BoardStatsResponse,
    NoteResponse,
    NoteTextUpdate,
    PaletteResponse,
    PositionSchema,
)
from modules.backend.services.view import SortKey

router = APIRouter()


def _note_or_none(note) -> NoteResponse | None:
    return NoteResponse.model_validate(note) if note is not None else None


@router.post(
    "",
    response_model=ApiResponse[NoteResponse],
    status_code=201,
    summary="Create a note",
    description="Create an empty note with a random color and spawn position.",
)
async def create_note(
    board: Board,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Create a new note."""
    note = board.create_note()
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "",
    response_model=ApiResponse[list[NoteResponse]],
    summary="List notes",
    description="Notes filtered by color and text, most recent first.",
)
async def list_notes(
    board: Board,
    request_id: RequestId,
    color: str = Query(
        default=ALL_COLORS,
        description="Palette color, or 'all'",
    ),
    q: str = Query(
        default="",
        description="Case-insensitive text search",
    ),
    sort: SortKey | None = Query(
        default=None,
        description="Timestamp to sort by (defaults to the board setting)",
    ),
) -> ApiResponse[list[NoteResponse]]:
    """Derived view of the board."""
    notes = board.derive_view(color, q, sort)
    return ApiResponse(
        data=[NoteResponse.model_validate(note) for note in notes],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/stats",
    response_model=ApiResponse[BoardStatsResponse],
    summary="Board statistics",
    description="Total notes and per-color counts.",
)
async def get_stats(
    board: Board,
    request_id: RequestId,
) -> ApiResponse[BoardStatsResponse]:
    """Aggregate the board."""
    return ApiResponse(
        data=BoardStatsResponse.model_validate(board.aggregate()),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/board",
    response_model=ApiResponse[BoardSnapshotResponse],
    summary="Board snapshot",
    description="Derived view and statistics in one response.",
)
async def get_board(
    board: Board,
    request_id: RequestId,
    color: str = Query(default=ALL_COLORS),
    q: str = Query(default=""),
    sort: SortKey | None = Query(default=None),
) -> ApiResponse[BoardSnapshotResponse]:
    """Snapshot for a full redraw."""
    snapshot = board.snapshot(color, q, sort)
    return ApiResponse(
        data=BoardSnapshotResponse.model_validate(snapshot),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/palette",
    response_model=ApiResponse[PaletteResponse],
    summary="Color palette",
)
async def get_palette(
    board: Board,
    request_id: RequestId,
) -> ApiResponse[PaletteResponse]:
    """Colors a note can have."""
    return ApiResponse(
        data=PaletteResponse(colors=list(board.palette)),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Get a note",
)
async def get_note(
    note_id: str,
    board: Board,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Get a note by ID."""
    note = board.get_note(note_id)
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.patch(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Edit note text",
    description="Replace the text. Unknown notes are ignored and return null data.",
)
async def update_note_text(
    note_id: str,
    data: NoteTextUpdate,
    board: Board,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Update a note's text."""
    note = board.update_text(note_id, data.text)
    return ApiResponse(
        data=_note_or_none(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.put(
    "/{note_id}/position",
    response_model=ApiResponse[NoteResponse],
    summary="Move a note",
    description="Reposition a note and bring it to the front. Unknown notes are ignored.",
)
async def move_note(
    note_id: str,
    data: PositionSchema,
    board: Board,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Move a note."""
    note = board.move_note(note_id, data.to_position())
    return ApiResponse(
        data=_note_or_none(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.delete(
    "/{note_id}",
    status_code=204,
    summary="Delete a note",
    description="Permanently delete a note. Deleting an unknown note succeeds.",
)
async def delete_note(
    note_id: str,
    board: Board,
) -> None:
    """Delete a note."""
    board.delete_note(note_id)
