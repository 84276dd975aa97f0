"""
Drag Interaction.

Pointer-drag lifecycle for notes on the free-position board. Each note has
its own small state machine:

    Idle --begin_drag(P)--> Dragging(offset = P - position)   raise to front
    Dragging --drag_to(P)--> Dragging                         move to P - offset
    Dragging --end_drag--> Idle

Drag state is transient UI state, so it lives here keyed by note ID and
never on the Note itself.
"""

from dataclasses import dataclass

from modules.backend.core.logging import get_logger
from modules.backend.models.note import Note, Position
from modules.backend.repositories.note import NoteStore

logger = get_logger(__name__)


@dataclass(frozen=True)
class Idle:
    """Note is not being dragged."""


@dataclass(frozen=True)
class Dragging:
    """Note is following the pointer at a fixed offset."""

    note_id: str
    offset: Position


DragState = Idle | Dragging

IDLE = Idle()


class DragController:
    """
    Translates pointer events into NoteStore.move calls.

    Every pick-up and every drag step goes through store.move, so the
    note under the pointer is always frontmost. The stacking counter
    climbs on each step of a drag; that is expected.
    """

    def __init__(self, store: NoteStore) -> None:
        self._store = store
        self._states: dict[str, Dragging] = {}

    def state_of(self, note_id: str) -> DragState:
        return self._states.get(note_id, IDLE)

    def dragging(self) -> list[str]:
        """IDs of notes currently being dragged."""
        return list(self._states)

    def begin_drag(self, note_id: str, point: Position) -> Note | None:
        """
        Pick a note up at a pointer position.

        Records the pointer offset from the note's origin and raises the
        note to the front without moving it. A note that is already being
        dragged is picked up afresh, so a missed pointer-up cannot leave
        it stuck following a stale offset.

        Returns:
            The raised note, or None if the note does not exist
        """
        note = self._store.get(note_id)
        if note is None:
            logger.debug("Drag ignored for missing note", extra={"note_id": note_id})
            return None

        self._states[note_id] = Dragging(note_id=note_id, offset=point - note.position)
        return self._store.move(note_id, note.position)

    def drag_to(self, note_id: str, point: Position) -> Note | None:
        """
        Follow the pointer to a new position.

        Ignored unless the note is being dragged.

        Returns:
            The moved note, or None if nothing moved
        """
        state = self._states.get(note_id)
        if state is None:
            return None

        note = self._store.move(note_id, point - state.offset)
        if note is None:
            # Deleted while held.
            self._states.pop(note_id, None)
        return note

    def end_drag(self, note_id: str) -> None:
        """Release the note. No store mutation."""
        self._states.pop(note_id, None)

    def forget(self, note_id: str) -> None:
        """Drop any drag state for a note that no longer exists."""
        self._states.pop(note_id, None)
