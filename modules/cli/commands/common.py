"""
Shared plumbing for board_cli commands.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import typer
from rich.console import Console

console = Console()

START_HINT = "Is the server running? Start with: python cli.py --service server"


def is_connection_error(exc: Exception) -> bool:
    return "Connection refused" in str(exc) or "ConnectError" in type(exc).__name__


def run_with_client(
    get_client: Callable[[], Any],
    action: Callable[[Any], Awaitable[None]],
    unreachable: str = "Error: Cannot connect to board server",
) -> None:
    """
    Run ``action`` with the API client and close the client afterwards.

    A typer.Exit from the action passes through. Any other error is
    printed and becomes exit code 1.
    """

    async def runner() -> None:
        client = get_client()
        try:
            await action(client)
        except typer.Exit:
            raise
        except Exception as e:
            if is_connection_error(e):
                console.print(f"[red]{unreachable}[/red]")
                console.print(f"[dim]{START_HINT}[/dim]")
            else:
                console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)
        finally:
            await client.close()

    asyncio.run(runner())
