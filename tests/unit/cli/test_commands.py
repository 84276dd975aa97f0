"""Unit tests for CLI commands."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from typer.testing import CliRunner

from board_cli import app

runner = CliRunner()


def _note(note_id: str, text: str = "", color: str = "yellow") -> dict:
    return {
        "id": note_id,
        "text": text,
        "color": color,
        "position": {"x": 10.0, "y": 20.0},
        "z_order": 1,
        "created_at": "2024-01-01T12:00:00",
        "updated_at": "2024-01-01T12:00:00",
    }


@pytest.fixture
def api_client(mock_http_client):
    """Patch the notes commands to use a mocked API client."""
    with patch("modules.cli.commands.notes.get_api_client", return_value=mock_http_client):
        yield mock_http_client


class TestMainApp:
    """Tests for main app options."""

    def test_help(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Postit" in result.output

    def test_debug_flag(self, api_client) -> None:
        api_client.palette = AsyncMock(return_value=["yellow"])

        result = runner.invoke(app, ["--debug", "notes", "palette"])

        assert result.exit_code == 0
        assert "Debug mode enabled" in result.output


class TestHealthCommands:
    """Tests for health check commands."""

    def test_health_status_help(self) -> None:
        result = runner.invoke(app, ["health", "status", "--help"])
        assert result.exit_code == 0
        assert "readiness" in result.output

    def test_ping_reachable(self, mock_http_client, mock_response) -> None:
        mock_http_client.get.return_value = mock_response(200, {"status": "healthy"})

        with patch("modules.cli.commands.health.get_api_client", return_value=mock_http_client):
            result = runner.invoke(app, ["health", "ping"])

        assert result.exit_code == 0
        assert "reachable" in result.output
        mock_http_client.close.assert_awaited_once()

    def test_ping_unreachable(self, mock_http_client) -> None:
        mock_http_client.get.side_effect = httpx.ConnectError("Connection refused")

        with patch("modules.cli.commands.health.get_api_client", return_value=mock_http_client):
            result = runner.invoke(app, ["health", "ping"])

        assert result.exit_code == 1
        assert "not reachable" in result.output

    def test_status_shows_board_check(self, mock_http_client, mock_response) -> None:
        mock_http_client.get.return_value = mock_response(
            200,
            {"status": "healthy", "checks": {"board": {"status": "healthy", "notes": 3, "version": 7}}},
        )

        with patch("modules.cli.commands.health.get_api_client", return_value=mock_http_client):
            result = runner.invoke(app, ["health", "status"])

        assert result.exit_code == 0
        assert "board" in result.output
        assert "HEALTHY" in result.output

    def test_status_without_board_exits_nonzero(self, mock_http_client, mock_response) -> None:
        mock_http_client.get.return_value = mock_response(
            503,
            {"detail": {"status": "unhealthy", "checks": {"board": {"status": "unhealthy", "error": "board not initialized"}}}},
        )

        with patch("modules.cli.commands.health.get_api_client", return_value=mock_http_client):
            result = runner.invoke(app, ["health", "status"])

        assert result.exit_code == 1
        assert "UNHEALTHY" in result.output
        assert "board not initialized" in result.output
        mock_http_client.close.assert_awaited_once()


class TestNoteCommands:
    """Tests for note commands."""

    def test_add_with_text(self, api_client) -> None:
        api_client.create_note = AsyncMock(return_value=_note("n-1"))
        api_client.update_text = AsyncMock(return_value=_note("n-1", text="Buy milk"))

        result = runner.invoke(app, ["notes", "add", "Buy milk"])

        assert result.exit_code == 0
        api_client.update_text.assert_awaited_once_with("n-1", "Buy milk")
        assert "n-1" in result.output
        api_client.close.assert_awaited_once()

    def test_add_without_text_skips_edit(self, api_client) -> None:
        api_client.create_note = AsyncMock(return_value=_note("n-2"))
        api_client.update_text = AsyncMock()

        result = runner.invoke(app, ["notes", "add"])

        assert result.exit_code == 0
        api_client.update_text.assert_not_awaited()

    def test_list_passes_filters(self, api_client) -> None:
        api_client.list_notes = AsyncMock(return_value=[_note("n-1", "milk"), _note("n-2", "bread")])

        result = runner.invoke(app, ["notes", "list", "-c", "yellow", "-s", "milk", "--sort", "updated_at"])

        assert result.exit_code == 0
        api_client.list_notes.assert_awaited_once_with(color="yellow", q="milk", sort="updated_at")
        assert "Notes (2)" in result.output

    def test_edit_missing_note(self, api_client) -> None:
        api_client.update_text = AsyncMock(return_value=None)

        result = runner.invoke(app, ["notes", "edit", "gone", "text"])

        assert result.exit_code == 0
        assert "nothing changed" in result.output

    def test_move_reports_z_order(self, api_client) -> None:
        moved = {**_note("n-1"), "z_order": 5}
        api_client.move_note = AsyncMock(return_value=moved)

        result = runner.invoke(app, ["notes", "move", "n-1", "100", "20"])

        assert result.exit_code == 0
        api_client.move_note.assert_awaited_once_with("n-1", 100.0, 20.0)
        assert "z_order 5" in result.output

    def test_delete(self, api_client) -> None:
        api_client.delete_note = AsyncMock(return_value=None)

        result = runner.invoke(app, ["notes", "delete", "n-1"])

        assert result.exit_code == 0
        api_client.delete_note.assert_awaited_once_with("n-1")

    def test_stats_table(self, api_client) -> None:
        api_client.stats = AsyncMock(return_value={"total": 3, "color_counts": {"yellow": 2, "green": 1}})

        result = runner.invoke(app, ["notes", "stats"])

        assert result.exit_code == 0
        assert "Total notes: 3" in result.output

    def test_connection_error_exits_nonzero(self, api_client) -> None:
        api_client.stats = AsyncMock(side_effect=httpx.ConnectError("Connection refused"))

        result = runner.invoke(app, ["notes", "stats"])

        assert result.exit_code == 1
        assert "Cannot connect" in result.output
        assert "--service server" in result.output
        api_client.close.assert_awaited_once()

    def test_server_error_is_reported(self, api_client, mock_response) -> None:
        api_client.stats = AsyncMock(side_effect=lambda: mock_response(500).raise_for_status())

        result = runner.invoke(app, ["notes", "stats"])

        assert result.exit_code == 1
        assert "Error: HTTP 500" in result.output
        api_client.close.assert_awaited_once()

    def test_board_shows_front_note_first(self, api_client) -> None:
        back = {**_note("back-note", "first"), "z_order": 1}
        front = {**_note("front-note", "second", color="green"), "z_order": 2}
        api_client.board = AsyncMock(return_value={
            "notes": [back, front],
            "stats": {"total": 2, "color_counts": {"yellow": 1, "green": 1}},
            "version": 4,
        })

        result = runner.invoke(app, ["notes", "board", "-c", "all"])

        assert result.exit_code == 0
        api_client.board.assert_awaited_once_with(color="all", q="", sort=None)
        assert "Board v4" in result.output
        assert result.output.index("front-no") < result.output.index("back-not")
        assert "Total notes: 2" in result.output

    def test_drag_steps_pointer_and_ends(self, api_client) -> None:
        api_client.begin_drag = AsyncMock(return_value=_note("n-1"))
        api_client.drag_to = AsyncMock(return_value={**_note("n-1"), "z_order": 7})
        api_client.end_drag = AsyncMock(return_value=None)

        result = runner.invoke(app, ["notes", "drag", "n-1", "0", "0", "100", "50", "--steps", "2"])

        assert result.exit_code == 0
        api_client.begin_drag.assert_awaited_once_with("n-1", 0.0, 0.0)
        assert [c.args for c in api_client.drag_to.await_args_list] == [
            ("n-1", 50.0, 25.0),
            ("n-1", 100.0, 50.0),
        ]
        api_client.end_drag.assert_awaited_once_with("n-1")
        assert "z_order 7" in result.output

    def test_drag_missing_note(self, api_client) -> None:
        api_client.begin_drag = AsyncMock(return_value=None)
        api_client.drag_to = AsyncMock()
        api_client.end_drag = AsyncMock()

        result = runner.invoke(app, ["notes", "drag", "gone", "0", "0", "1", "1"])

        assert result.exit_code == 0
        assert "nothing changed" in result.output
        api_client.drag_to.assert_not_awaited()
        api_client.end_drag.assert_not_awaited()

    def test_drag_note_removed_midway_still_ends(self, api_client) -> None:
        api_client.begin_drag = AsyncMock(return_value=_note("n-1"))
        api_client.drag_to = AsyncMock(return_value=None)
        api_client.end_drag = AsyncMock(return_value=None)

        result = runner.invoke(app, ["notes", "drag", "n-1", "0", "0", "10", "10", "--steps", "3"])

        assert result.exit_code == 0
        assert "removed during the drag" in result.output
        assert api_client.drag_to.await_count == 1
        api_client.end_drag.assert_awaited_once_with("n-1")
