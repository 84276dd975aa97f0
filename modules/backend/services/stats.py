"""
Board Statistics.

Color-count summary of the note collection.
"""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from modules.backend.models.note import Note


@dataclass(frozen=True)
class BoardStats:
    """Total note count and per-color counts (present colors only)."""

    total: int
    color_counts: dict[str, int] = field(default_factory=dict)


def aggregate(notes: Iterable[Note]) -> BoardStats:
    """
    Count notes overall and per color.

    Colors that do not occur are absent rather than zero. Colors are
    listed in order of first appearance.
    """
    counts = Counter(note.color for note in notes)
    return BoardStats(total=sum(counts.values()), color_counts=dict(counts))
