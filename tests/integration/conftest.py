"""
Integration Test Fixtures.

The real application over ASGI, with a fresh empty board per test, plus
assertions for the response envelope.
"""

from collections.abc import AsyncGenerator, Callable
from typing import Any

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from modules.backend.repositories.note import NoteStore
from modules.backend.services.note import NoteService


@pytest.fixture
def app() -> FastAPI:
    from modules.backend.main import create_app

    return create_app()


@pytest.fixture
def board(app: FastAPI) -> NoteService:
    """The board behind ``app``, for arranging state without HTTP."""
    return app.state.note_service


@pytest.fixture
def use_colors(app: FastAPI, scripted_rng, clock) -> Callable[[list[str]], NoteService]:
    """
    Swap in a board whose new notes take the given colors, in order.

    Usage:
        async def test_filter(client, use_colors):
            use_colors(["yellow", "green", "yellow"])
    """

    def _install(colors: list[str]) -> NoteService:
        app.state.note_service = NoteService(NoteStore(rng=scripted_rng(colors), clock=clock))
        return app.state.note_service

    return _install


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client


class ApiAssertions:
    """Checks on the board's response envelope. Each returns the parsed body."""

    @staticmethod
    def _envelope(response: httpx.Response, status: int, success: bool) -> dict[str, Any]:
        assert response.status_code == status, f"expected {status}, got {response.status_code}: {response.text}"
        body = response.json()
        assert body["success"] is success, body
        assert "request_id" in body["metadata"], body
        return body

    def assert_success(self, response: httpx.Response, expected_status: int = 200) -> dict[str, Any]:
        body = self._envelope(response, expected_status, True)
        assert body["error"] is None, body
        return body

    def assert_error(
        self,
        response: httpx.Response,
        expected_status: int,
        expected_code: str | None = None,
    ) -> dict[str, Any]:
        body = self._envelope(response, expected_status, False)
        assert body["data"] is None, body
        if expected_code is not None:
            assert body["error"]["code"] == expected_code, body["error"]
        return body

    def assert_validation_error(self, response: httpx.Response, field: str | None = None) -> dict[str, Any]:
        """422 VAL_REQUEST_INVALID; with ``field``, one of the reported locations must mention it."""
        body = self.assert_error(response, 422, "VAL_REQUEST_INVALID")
        if field is not None:
            fields = [e["field"] for e in body["error"]["details"]["validation_errors"]]
            assert any(field in f for f in fields), f"no error for {field!r} in {fields}"
        return body


@pytest.fixture
def api() -> ApiAssertions:
    return ApiAssertions()
