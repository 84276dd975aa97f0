"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Tests run from the project root so config/settings/*.yaml is found through
the .project_root marker. Configuration caches are cleared around every
test so a test that edits the environment cannot leak into the next one.
"""

import random
from collections.abc import Generator
from datetime import datetime, timedelta

import pytest

from modules.backend.core.config import get_app_config, get_settings


# =============================================================================
# Configuration Cache Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _clear_config_cache() -> Generator[None, None, None]:
    """Give each test a fresh configuration load."""
    get_settings.cache_clear()
    get_app_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()


# =============================================================================
# Clock Fixtures
# =============================================================================


class FakeClock:
    """
    Manually advanced clock.

    Returns the same reading until advanced, which also makes it a
    stand-in for a coarse system clock.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1.0) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    """Provide a fake clock starting at 2024-01-01 12:00."""
    return FakeClock()


# =============================================================================
# Utility Fixtures
# =============================================================================


@pytest.fixture
def anyio_backend() -> str:
    """Specify the async backend for anyio."""
    return "asyncio"


# =============================================================================
# Random Source Fixtures
# =============================================================================


class ScriptedRandom(random.Random):
    """Seeded random source whose color picks follow a fixed script."""

    def __init__(self, colors: list[str], seed: int = 0) -> None:
        super().__init__(seed)
        self._colors = iter(colors)

    def choice(self, seq):
        return next(self._colors)


@pytest.fixture
def scripted_rng() -> type[ScriptedRandom]:
    """
    Provide ScriptedRandom for forcing the colors of created notes.

    Usage:
        def test_colors(scripted_rng, clock):
            store = NoteStore(rng=scripted_rng(["yellow", "green"]), clock=clock)
    """
    return ScriptedRandom
