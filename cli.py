#!/usr/bin/env python3
"""
Postit Board CLI.

Runs the board server and checks a board installation without one.

Usage:
    python cli.py --help
    python cli.py --service server --verbose
    python cli.py --service server --seed 42 --port 8099 --reload
    python cli.py --service health --debug
    python cli.py --service config

Working with notes on a running server is done with board_cli.py.
"""

import os
import subprocess
import sys
from collections.abc import Callable
from pathlib import Path

import click

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from modules.backend.core.logging import get_logger, setup_logging


def validate_project_root() -> Path:
    """Validate that we're running from the project root."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


@click.command()
@click.option(
    "--service", "-s",
    type=click.Choice(["server", "health", "config"]),
    default="health",
    help="What to run.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output (INFO level logging).")
@click.option("--debug", "-d", is_flag=True, help="Enable debug output (DEBUG level logging).")
@click.option("--host", default=None, help="Server host (default from application.yaml).")
@click.option("--port", default=None, type=int, help="Server port (default from application.yaml).")
@click.option("--reload", is_flag=True, help="Enable auto-reload (server only).")
@click.option(
    "--seed",
    default=None,
    type=int,
    help="Seed note colors and spawn positions, for a reproducible board.",
)
def main(
    service: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    seed: int | None,
) -> None:
    """
    Postit Board CLI.

    \b
    Examples:
        python cli.py --service server --verbose
        python cli.py --service server --seed 7
        python cli.py --service health
        python cli.py --service config
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    setup_logging(level=log_level, format_type="console")
    logger = get_logger(__name__, source="cli")
    logger.debug("CLI invoked", extra={"service": service, "log_level": log_level})

    if service == "server":
        run_server(logger, host, port, reload, seed)
    elif service == "health":
        check_health(logger, seed)
    elif service == "config":
        show_config(logger)


def run_server(logger, host: str | None, port: int | None, reload: bool, seed: int | None) -> None:
    """Start the board server under uvicorn."""
    from modules.backend.core.config import get_app_config

    try:
        server_config = get_app_config().application.server
    except Exception as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    server_host = host or server_config.host
    server_port = port or server_config.port

    env = dict(os.environ)
    if seed is not None:
        env["POSTIT_RANDOM_SEED"] = str(seed)

    cmd = [
        sys.executable, "-m", "uvicorn",
        "modules.backend.main:app",
        "--host", server_host,
        "--port", str(server_port),
    ]
    if reload:
        cmd.append("--reload")

    logger.info(
        "Starting board server",
        extra={"host": server_host, "port": server_port, "reload": reload, "seed": seed},
    )
    click.echo(f"Board server at http://{server_host}:{server_port} (Ctrl+C to stop)")
    if reload:
        click.echo("Note: every reload starts an empty board.")

    try:
        subprocess.run(cmd, check=True, env=env)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server failed to start", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


# -----------------------------------------------------------------------------
# Health: configuration plus the board's core guarantees on a scratch board
# -----------------------------------------------------------------------------


def _scratch_board(seed: int | None):
    from modules.backend.core.config import get_app_config
    from modules.backend.services.note import NoteService

    return NoteService.from_config(get_app_config().board, seed=seed)


def _check_stacking(seed: int | None) -> str:
    from modules.backend.models.note import Position

    board = _scratch_board(seed)
    first, second = board.create_note(), board.create_note()
    moved = board.move_note(first.id, Position(5, 5))
    if not (first.z_order < second.z_order < moved.z_order):
        raise RuntimeError(f"z_order not increasing: {first.z_order}, {second.z_order}, {moved.z_order}")
    return f"move raised z_order {first.z_order} -> {moved.z_order}"


def _check_editing(seed: int | None) -> str:
    board = _scratch_board(seed)
    note = board.create_note()
    board.update_text(note.id, "hello")
    edited = board.update_text(note.id, "hello world")
    if edited.text != "hello world" or not edited.updated_at > edited.created_at:
        raise RuntimeError("edit did not refresh updated_at")
    if (edited.id, edited.color) != (note.id, note.color):
        raise RuntimeError("edit changed identity or color")
    return "updated_at advances, color kept"


def _check_view(seed: int | None) -> str:
    board = _scratch_board(seed)
    notes = [board.create_note() for _ in range(6)]
    board.update_text(notes[0].id, "Buy MILK")
    color = notes[0].color
    view = board.derive_view(filter_color=color, search_term="milk")
    if [n.id for n in view] != [notes[0].id]:
        raise RuntimeError("color filter with search returned the wrong notes")
    stats = board.aggregate()
    if stats.total != 6 or sum(stats.color_counts.values()) != stats.total:
        raise RuntimeError("color counts do not add up")
    return f"{len(stats.color_counts)} colors across {stats.total} notes"


def _check_drag(seed: int | None) -> str:
    from modules.backend.models.note import Position

    board = _scratch_board(seed)
    note = board.move_note(board.create_note().id, Position(0, 0))
    other = board.create_note()
    picked = board.begin_drag(note.id, Position(10, 10))
    dropped = board.drag_to(note.id, Position(110, 110))
    if picked.z_order <= other.z_order:
        raise RuntimeError("pick-up did not raise the note")
    if (dropped.position.x, dropped.position.y) != (100, 100):
        raise RuntimeError("drag did not keep the grab offset")
    board.delete_note(note.id)
    if board.drag.dragging() or len(board.store) != 1:
        raise RuntimeError("deleting a dragged note left drag state behind")
    return "pick-up raises, offset kept"


def check_health(logger, seed: int | None = None) -> None:
    """Check configuration, the app factory and the board guarantees."""
    click.echo("Checking board health...\n")

    checks: list[tuple[str, Callable[[], str]]] = [
        ("YAML configuration", _describe_config),
        ("Environment settings", _describe_settings),
        ("Stacking order", lambda: _check_stacking(seed)),
        ("Text editing", lambda: _check_editing(seed)),
        ("Filtered view and counts", lambda: _check_view(seed)),
        ("Drag gesture", lambda: _check_drag(seed)),
        ("FastAPI application", _describe_app),
    ]

    click.echo("Health Check Results:")
    click.echo("-" * 50)

    failed = 0
    for name, check in checks:
        try:
            detail = check()
        except Exception as e:
            failed += 1
            logger.error("Health check failed", extra={"check": name, "error": str(e)})
            click.echo(f"  {click.style('✗ FAIL', fg='red')}  {name} ({e})")
        else:
            logger.debug("Health check passed", extra={"check": name})
            click.echo(f"  {click.style('✓ PASS', fg='green')}  {name} ({detail})")

    click.echo("-" * 50)

    if failed:
        click.echo(click.style(f"\n{failed} check(s) failed. See details above.", fg="yellow"))
        sys.exit(1)
    click.echo(click.style("\nAll checks passed!", fg="green"))


def _describe_config() -> str:
    from modules.backend.core.config import get_app_config

    app_config = get_app_config()
    return f"{app_config.application.name}, palette {', '.join(app_config.board.palette)}"


def _describe_settings() -> str:
    from modules.backend.core.config import get_settings

    settings = get_settings()
    seed = "random" if settings.random_seed is None else settings.random_seed
    return f"seed: {seed}"


def _describe_app() -> str:
    from modules.backend.main import create_app

    app = create_app()
    return f"{app.title}, {len(app.state.note_service.store)} notes at start"


def _echo_section(title: str, values: dict) -> None:
    click.echo(f"\n{title}:")
    click.echo("-" * 40)
    for key, value in values.items():
        if isinstance(value, dict):
            click.echo(f"  {key}:")
            for k, v in value.items():
                click.echo(f"    {k}: {v}")
        else:
            click.echo(f"  {key}: {value}")


def show_config(logger) -> None:
    """Display loaded configuration."""
    from modules.backend.core.config import get_app_config, get_settings

    try:
        app_config = get_app_config()
        settings = get_settings()
    except Exception as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.echo(click.style(f"Error loading configuration: {e}", fg="red"), err=True)
        sys.exit(1)

    click.echo("Board Configuration:")
    _echo_section("Application (application.yaml)", app_config.application.model_dump())
    _echo_section("Logging (logging.yaml)", app_config.logging.model_dump())
    _echo_section("Board (board.yaml)", app_config.board.model_dump())
    _echo_section("Environment overrides (POSTIT_*)", settings.model_dump())


if __name__ == "__main__":
    main()
