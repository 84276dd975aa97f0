"""
Note Service.

Business logic layer for the board. This is the surface a renderer talks
to: the four store mutators, the derived view, the statistics summary and
the drag lifecycle hooks.

Mutations addressed to unknown notes are silent no-ops all the way up;
only get_note, a plain read, reports a missing note.
"""

import random
from dataclasses import dataclass

from modules.backend.core.config_schema import BoardSchema
from modules.backend.core.exceptions import NotFoundError
from modules.backend.models.note import ALL_COLORS, Note, Position
from modules.backend.repositories.note import NoteStore
from modules.backend.services.base import BaseService
from modules.backend.services.drag import DragController
from modules.backend.services.stats import BoardStats, aggregate
from modules.backend.services.view import SortKey, derive_view

_SORT_KEYS = tuple(key.value for key in SortKey)


@dataclass(frozen=True)
class BoardSnapshot:
    """Everything a renderer needs for one redraw."""

    notes: list[Note]
    stats: BoardStats
    version: int


class NoteService(BaseService):
    """
    Service for the note board.

    Owns the note store and the drag controller for the lifetime of the
    process. Derived views are memoized on the store version plus the
    view arguments, so repeated redraws between mutations are free.
    """

    def __init__(
        self,
        store: NoteStore,
        default_sort: SortKey = SortKey.CREATED_AT,
    ) -> None:
        super().__init__()
        self.store = store
        self.drag = DragController(store)
        self.default_sort = default_sort
        self._view_cache: tuple[tuple, list[Note]] | None = None

    @classmethod
    def from_config(cls, board: BoardSchema, seed: int | None = None) -> "NoteService":
        """
        Build a service from board.yaml settings.

        Args:
            board: Validated board configuration
            seed: Optional seed for color and position generation
        """
        store = NoteStore(
            palette=board.palette,
            spawn_width=board.spawn_region.width,
            spawn_height=board.spawn_region.height,
            rng=random.Random(seed),
        )
        return cls(store, default_sort=SortKey(board.default_sort))

    @property
    def palette(self) -> tuple[str, ...]:
        return self.store.palette

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create_note(self) -> Note:
        """
        Create a new note with a random color and spawn position.

        Returns:
            Created note
        """
        note = self.store.create()
        self._log_operation("Note created", note_id=note.id, color=note.color)
        return note

    def update_text(self, note_id: str, text: str) -> Note | None:
        """
        Replace a note's text.

        Returns:
            Updated note, or None if the note does not exist
        """
        note = self.store.update_text(note_id, text)
        if note is None:
            self._log_debug("Text update ignored for missing note", note_id=note_id)
        return note

    def move_note(self, note_id: str, position: Position) -> Note | None:
        """
        Move a note and bring it to the front.

        Returns:
            Moved note, or None if the note does not exist
        """
        note = self.store.move(note_id, position)
        if note is None:
            self._log_debug("Move ignored for missing note", note_id=note_id)
        return note

    def delete_note(self, note_id: str) -> None:
        """Delete a note if it exists."""
        self.drag.forget(note_id)
        if self.store.delete(note_id):
            self._log_operation("Note deleted", note_id=note_id)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_note(self, note_id: str) -> Note:
        """
        Get a note by ID.

        Raises:
            NotFoundError: If note not found
        """
        note = self.store.get(note_id)
        if note is None:
            raise NotFoundError("Note not found", details={"note_id": note_id})
        return note

    def derive_view(
        self,
        filter_color: str = ALL_COLORS,
        search_term: str = "",
        sort_key: SortKey | str | None = None,
    ) -> list[Note]:
        """
        Filtered, searched and sorted notes, most recent first.

        Args:
            filter_color: Palette color or "all"; unknown colors match nothing
            search_term: Case-insensitive substring of the note text
            sort_key: created_at or updated_at; defaults to board.yaml's default_sort

        Raises:
            ValidationError: If sort_key is not created_at or updated_at
        """
        if sort_key is None:
            sort_key = self.default_sort
        key = sort_key.value if isinstance(sort_key, SortKey) else sort_key
        key = self._require_choice(key, "sort_key", _SORT_KEYS)

        cache_key = (self.store.version, filter_color, search_term, key)
        if self._view_cache is not None and self._view_cache[0] == cache_key:
            return list(self._view_cache[1])

        view = derive_view(self.store.list_notes(), filter_color, search_term, key)
        self._view_cache = (cache_key, view)
        return list(view)

    def aggregate(self) -> BoardStats:
        """Total and per-color note counts."""
        return aggregate(self.store.list_notes())

    def snapshot(
        self,
        filter_color: str = ALL_COLORS,
        search_term: str = "",
        sort_key: SortKey | str | None = None,
    ) -> BoardSnapshot:
        """Derived view and statistics taken at the same store version."""
        return BoardSnapshot(
            notes=self.derive_view(filter_color, search_term, sort_key),
            stats=self.aggregate(),
            version=self.store.version,
        )

    # -------------------------------------------------------------------------
    # Drag lifecycle
    # -------------------------------------------------------------------------

    def begin_drag(self, note_id: str, point: Position) -> Note | None:
        """Pick a note up at a pointer position and raise it to the front."""
        note = self.drag.begin_drag(note_id, point)
        if note is not None:
            self._log_debug("Drag started", note_id=note_id, z_order=note.z_order)
        return note

    def drag_to(self, note_id: str, point: Position) -> Note | None:
        """Move a held note so it follows the pointer."""
        return self.drag.drag_to(note_id, point)

    def end_drag(self, note_id: str) -> None:
        """Release a held note."""
        self.drag.end_drag(note_id)
        self._log_debug("Drag ended", note_id=note_id)
