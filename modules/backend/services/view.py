"""
View Derivation.

Computes the filtered, searched and sorted projection of the board that a
renderer draws, in either board or list mode. Pure functions of their
inputs; nothing here touches the store.
"""

from collections.abc import Iterable
from enum import Enum

from modules.backend.models.note import ALL_COLORS, Note


class SortKey(str, Enum):
    """Timestamp a view is ordered by (most recent first)."""

    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


def matches_color(note: Note, filter_color: str) -> bool:
    """Exact color match; "all" matches every note."""
    return filter_color == ALL_COLORS or note.color == filter_color


def matches_search(note: Note, search_term: str) -> bool:
    """Case-insensitive substring match on the note text."""
    return search_term.casefold() in note.text.casefold()


def derive_view(
    notes: Iterable[Note],
    filter_color: str = ALL_COLORS,
    search_term: str = "",
    sort_key: SortKey | str = SortKey.CREATED_AT,
) -> list[Note]:
    """
    Filter by color, then by search term, then sort newest first.

    A color outside the palette simply matches nothing. Notes whose sort
    timestamps are equal keep a fixed order: the one later in ``notes``
    comes first, which for the store's creation-ordered list means the
    most recently created note leads.

    Args:
        notes: Notes in creation order
        filter_color: Palette color name, or "all"
        search_term: Substring to look for in note text; "" matches all
        sort_key: SortKey or its string value

    Returns:
        New list of matching notes, most recent first

    Raises:
        ValueError: If sort_key is not a SortKey value
    """
    field = SortKey(sort_key).value

    indexed = [
        (index, note)
        for index, note in enumerate(notes)
        if matches_color(note, filter_color) and matches_search(note, search_term)
    ]
    indexed.sort(key=lambda pair: (getattr(pair[1], field), pair[0]), reverse=True)
    return [note for _, note in indexed]
