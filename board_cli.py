#!/usr/bin/env python3
"""
Board CLI.

Terminal renderer for a running board server: the same notes, filters and
drag gestures a browser renderer uses, as Typer commands with Rich tables.

Usage:
    python board_cli.py --help                           # Show help

    # Notes
    python board_cli.py notes add "Buy milk"             # Create a note
    python board_cli.py notes list                       # Most recent first
    python board_cli.py notes list -c yellow -s milk     # Filter by color and text
    python board_cli.py notes list --sort updated_at     # Most recently edited first
    python board_cli.py notes edit <id> "Buy oat milk"   # Replace text
    python board_cli.py notes move <id> 120 40           # Move and bring to front
    python board_cli.py notes drag <id> 110 120 210 320  # Pick up and drop with pointer offset
    python board_cli.py notes board                      # Stacking order plus color counts
    python board_cli.py notes delete <id>                # Delete
    python board_cli.py notes stats                      # Totals per color
    python board_cli.py notes palette                    # Available colors

    # Health checks
    python board_cli.py health status                    # Board readiness
    python board_cli.py health ping                      # Ping server

Options:
    --verbose, -v     INFO-level logging
    --debug, -d       DEBUG-level logging, including every API request and response
    --help            Show help message
"""

import sys
from pathlib import Path

import typer

PROJECT_ROOT = Path(__file__).resolve().parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from modules.cli.commands import health_app, notes_app
from modules.cli.commands.common import console

app = typer.Typer(
    name="board",
    help="Postit board CLI - create, find and arrange notes on a running board server.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
app.add_typer(notes_app, name="notes")
app.add_typer(health_app, name="health")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="INFO-level logging"),
    debug: bool = typer.Option(False, "--debug", "-d", help="DEBUG-level logging, including every API request"),
) -> None:
    """
    Postit Board CLI.

    Every command talks to the board server over HTTP; start it first with
    `python cli.py --service server`.
    """
    if not (PROJECT_ROOT / ".project_root").exists():
        console.print("[red]Error: .project_root not found. Run from project root.[/red]")
        raise typer.Exit(1)

    level = "DEBUG" if debug else "INFO" if verbose else None
    if level is not None:
        from modules.backend.core.logging import setup_logging

        setup_logging(level=level, format_type="console")
        if debug:
            console.print("[dim]Debug mode enabled[/dim]")


if __name__ == "__main__":
    app()
