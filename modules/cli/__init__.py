"""
CLI Client Module.

Terminal renderer for the note board, built with Typer and Rich.

Architecture:
- CLI is a thin presentation layer
- All board state lives in the backend process
- CLI calls backend via HTTP (httpx)
- Sends X-Frontend-ID: cli header for log routing

Usage:
    python board_cli.py --help
    python board_cli.py notes add "Buy milk"
    python board_cli.py notes list --color yellow
    python board_cli.py health ping
"""
