"""
Unit Test Fixtures.

Fixtures for unit tests. The board runs entirely in memory, so unit tests
build real stores with a seeded random generator and a fake clock instead
of mocking them. Only the board API client and loggers are mocked.
"""

import random
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from modules.backend.models.note import Note, Position
from modules.backend.repositories.note import NoteStore
from modules.backend.services.note import NoteService
from modules.cli.client import APIClient


# =============================================================================
# Board Fixtures
# =============================================================================


@pytest.fixture
def store(clock) -> NoteStore:
    """
    Note store with deterministic colors, positions and timestamps.

    Usage:
        def test_create(store: NoteStore, clock):
            first = store.create()
            clock.advance()
            second = store.create()
    """
    return NoteStore(rng=random.Random(1234), clock=clock)


@pytest.fixture
def service(store: NoteStore) -> NoteService:
    """Note service over the deterministic store."""
    return NoteService(store)


@pytest.fixture
def make_note() -> Callable[..., Note]:
    """
    Factory for standalone notes, for testing pure functions.

    Usage:
        def test_view(make_note):
            note = make_note("a", text="Buy milk", color="yellow", minute=3)
    """
    base = datetime(2024, 1, 1, 12, 0, 0)

    def _make(
        note_id: str,
        text: str = "",
        color: str = "yellow",
        minute: int = 0,
        updated_minute: int | None = None,
        z_order: int = 1,
    ) -> Note:
        created_at = base + timedelta(minutes=minute)
        updated_at = base + timedelta(minutes=updated_minute if updated_minute is not None else minute)
        return Note(
            id=note_id,
            text=text,
            color=color,
            position=Position(0.0, 0.0),
            created_at=created_at,
            updated_at=updated_at,
            z_order=z_order,
        )

    return _make


# =============================================================================
# Board API Client Fixtures
# =============================================================================


class MockResponse:
    """Just enough of an httpx.Response for the CLI commands."""

    def __init__(self, status_code: int, json_data: dict[str, Any] | None = None) -> None:
        self.status_code = status_code
        self._json_data = json_data or {}
        self.text = str(self._json_data)

    def json(self) -> dict[str, Any]:
        return self._json_data

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            request = httpx.Request("GET", "http://test")
            raise httpx.HTTPStatusError(
                f"HTTP {self.status_code}",
                request=request,
                response=httpx.Response(self.status_code, request=request),
            )


@pytest.fixture
def mock_response() -> type[MockResponse]:
    return MockResponse


@pytest.fixture
def mock_http_client() -> AsyncMock:
    """
    Stand-in for the CLI's APIClient, raw verbs and board helpers alike.

    Usage:
        def test_palette(mock_http_client):
            mock_http_client.palette.return_value = ["yellow", "pink"]
    """
    return AsyncMock(spec=APIClient)


@pytest.fixture
def mock_logger() -> MagicMock:
    """A structlog-shaped logger recording its calls."""
    return MagicMock(spec=["debug", "info", "warning", "error", "exception"])
