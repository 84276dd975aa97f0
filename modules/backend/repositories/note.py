"""
Note Store.

In-memory data access layer for the board. Owns the note collection and
the stacking counter; every mutation of either goes through this class.

Missing IDs are never an error here: update_text, move and delete on an
unknown note are silent no-ops, so a late event for a note that was just
deleted cannot fail.
"""

import math
import random
import threading
import uuid
from collections.abc import Callable, Sequence
from datetime import datetime, timedelta

from modules.backend.core.logging import get_logger
from modules.backend.core.utils import utc_now
from modules.backend.models.note import DEFAULT_PALETTE, Note, Position

logger = get_logger(__name__)

DEFAULT_SPAWN_WIDTH = 300.0
DEFAULT_SPAWN_HEIGHT = 300.0

_CLOCK_STEP = timedelta(microseconds=1)


def _new_note_id() -> str:
    return str(uuid.uuid4())


class NoteStore:
    """
    Insertion-ordered note collection with monotonic stacking order.

    Every create and every move takes the next value of the stacking
    counter, so the most recently created or moved note is always
    frontmost and no two assignments share a value. The counter starts
    at 1 and is never reset or reused.

    All mutations are serialized behind a lock. The application drives
    the store from a single event loop, so the lock is uncontended in
    practice; it keeps the z_order and ID invariants if a host ever
    calls in from several threads.

    Collaborators are injectable for deterministic tests:

        store = NoteStore(rng=random.Random(42), clock=fake_clock)
    """

    def __init__(
        self,
        palette: Sequence[str] = DEFAULT_PALETTE,
        spawn_width: float = DEFAULT_SPAWN_WIDTH,
        spawn_height: float = DEFAULT_SPAWN_HEIGHT,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = _new_note_id,
    ) -> None:
        if not palette:
            raise ValueError("palette must contain at least one color")
        self._palette = tuple(palette)
        self._spawn_width = spawn_width
        self._spawn_height = spawn_height
        self._rng = rng or random.Random()
        self._clock = clock
        self._id_factory = id_factory

        self._notes: dict[str, Note] = {}
        # Deleted IDs stay here so they are never handed out again.
        self._issued_ids: set[str] = set()
        self._next_z_order = 1
        self._last_timestamp: datetime | None = None
        self._version = 0
        self._lock = threading.Lock()

    @property
    def palette(self) -> tuple[str, ...]:
        return self._palette

    @property
    def version(self) -> int:
        """Incremented on every mutation that changed the collection."""
        return self._version

    @property
    def next_z_order(self) -> int:
        return self._next_z_order

    def __len__(self) -> int:
        return len(self._notes)

    def __contains__(self, note_id: object) -> bool:
        return note_id in self._notes

    def get(self, note_id: str) -> Note | None:
        """Get a note by ID, or None if it does not exist."""
        return self._notes.get(note_id)

    def list_notes(self) -> list[Note]:
        """All notes in insertion (creation) order."""
        return list(self._notes.values())

    def create(self) -> Note:
        """
        Create a note with a random color and a random spawn position.

        The note starts with empty text and created_at == updated_at.
        """
        with self._lock:
            note_id = self._id_factory()
            if note_id in self._issued_ids:
                raise RuntimeError(f"ID factory returned a previously issued note ID: {note_id}")
            self._issued_ids.add(note_id)

            now = self._tick()
            note = Note(
                id=note_id,
                text="",
                color=self._rng.choice(self._palette),
                position=Position(
                    x=self._spawn_coordinate(self._spawn_width),
                    y=self._spawn_coordinate(self._spawn_height),
                ),
                created_at=now,
                updated_at=now,
                z_order=self._take_z_order(),
            )
            self._notes[note.id] = note
            self._version += 1

        logger.debug(
            "Note created",
            extra={"note_id": note.id, "color": note.color, "z_order": note.z_order},
        )
        return note

    def update_text(self, note_id: str, text: str) -> Note | None:
        """
        Replace a note's text and refresh updated_at.

        Stacking order and position are left alone.

        Returns:
            The updated note, or None if no such note exists
        """
        with self._lock:
            note = self._notes.get(note_id)
            if note is None:
                return None
            note = note.with_text(text, updated_at=self._tick())
            self._notes[note_id] = note
            self._version += 1

        logger.debug("Note text updated", extra={"note_id": note_id, "length": len(text)})
        return note

    def move(self, note_id: str, position: Position) -> Note | None:
        """
        Reposition a note and raise it to the front.

        Moving to the note's current position is how a pick-up raises a
        note without moving it. updated_at is not touched.

        Returns:
            The moved note, or None if no such note exists
        """
        with self._lock:
            note = self._notes.get(note_id)
            if note is None:
                return None
            note = note.with_position(position, z_order=self._take_z_order())
            self._notes[note_id] = note
            self._version += 1

        logger.debug(
            "Note moved",
            extra={"note_id": note_id, "x": position.x, "y": position.y, "z_order": note.z_order},
        )
        return note

    def delete(self, note_id: str) -> bool:
        """
        Remove a note permanently.

        Returns:
            True if a note was removed, False if it did not exist
        """
        with self._lock:
            if self._notes.pop(note_id, None) is None:
                return False
            self._version += 1

        logger.debug("Note deleted", extra={"note_id": note_id})
        return True

    def _spawn_coordinate(self, limit: float) -> float:
        # Half-open [0, limit); scaling random() can round up to limit.
        return min(self._rng.random() * limit, math.nextafter(limit, 0.0))

    def _take_z_order(self) -> int:
        z_order = self._next_z_order
        self._next_z_order += 1
        return z_order

    def _tick(self) -> datetime:
        # Coarse clocks can repeat a reading; nudge forward so timestamps
        # issued by this store strictly increase.
        now = self._clock()
        if self._last_timestamp is not None and now <= self._last_timestamp:
            now = self._last_timestamp + _CLOCK_STEP
        self._last_timestamp = now
        return now
