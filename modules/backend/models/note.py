"""
Note Model.

Domain model for a sticky note ("postit") on the board.

Notes are immutable values. The store replaces a note with an updated
copy on every mutation, so a note handed to a caller never changes
underneath it and derived views stay stable between mutations.
"""

from dataclasses import dataclass, replace
from datetime import datetime

DEFAULT_PALETTE: tuple[str, ...] = (
    "yellow",
    "green",
    "blue",
    "red",
    "purple",
    "pink",
)

ALL_COLORS = "all"
"""Color filter value that keeps every note."""


@dataclass(frozen=True)
class Position:
    """A point in board (surface) coordinates. Unbounded in both axes."""

    x: float
    y: float

    def __add__(self, other: "Position") -> "Position":
        return Position(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Position") -> "Position":
        return Position(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Note:
    """
    A single note on the board.

    z_order is a stacking rank for the free-position board only: the
    higher the value, the closer to the front. The list view ignores it
    along with position.
    """

    id: str
    text: str
    color: str
    position: Position
    created_at: datetime
    updated_at: datetime
    z_order: int

    def with_text(self, text: str, updated_at: datetime) -> "Note":
        return replace(self, text=text, updated_at=updated_at)

    def with_position(self, position: Position, z_order: int) -> "Note":
        return replace(self, position=position, z_order=z_order)

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, color={self.color!r}, z_order={self.z_order})>"
