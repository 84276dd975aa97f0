"""
Note Schemas.

Pydantic schemas for board API request/response validation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from modules.backend.models.note import Position


class PositionSchema(BaseModel):
    """A point in board coordinates. No bounds, but both coordinates must be finite."""

    x: float = Field(description="Horizontal coordinate", examples=[120.0])
    y: float = Field(description="Vertical coordinate", examples=[48.5])

    model_config = ConfigDict(from_attributes=True, allow_inf_nan=False)

    def to_position(self) -> Position:
        return Position(x=self.x, y=self.y)


class PointerEvent(PositionSchema):
    """Pointer location in board coordinates for drag events."""


class NoteTextUpdate(BaseModel):
    """Schema for replacing a note's text."""

    text: str = Field(
        ...,
        description="New note text (any length, may be empty)",
        examples=["Buy milk"],
    )


class NoteResponse(BaseModel):
    """Schema for a note in API responses."""

    id: str = Field(description="Note unique identifier")
    text: str = Field(description="Note text")
    color: str = Field(description="Palette color name")
    position: PositionSchema = Field(description="Board position")
    z_order: int = Field(description="Stacking rank, higher is in front")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last text edit timestamp")

    model_config = ConfigDict(from_attributes=True)


class BoardStatsResponse(BaseModel):
    """Total note count and per-color counts."""

    total: int
    color_counts: dict[str, int]

    model_config = ConfigDict(from_attributes=True)


class BoardSnapshotResponse(BaseModel):
    """Derived view plus statistics for one redraw."""

    notes: list[NoteResponse]
    stats: BoardStatsResponse
    version: int = Field(description="Store version the snapshot was taken at")

    model_config = ConfigDict(from_attributes=True)


class PaletteResponse(BaseModel):
    """Colors available on the board."""

    colors: list[str]
