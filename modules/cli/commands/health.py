"""
Health Check Commands.

    health ping     is the board server answering?
    health status   is a board attached, and how busy is it?
"""

from typing import Any

import typer
from rich.table import Table

from modules.cli.client import get_api_client
from modules.cli.commands.common import console, run_with_client

app = typer.Typer(help="Health check commands")


def render_readiness(report: dict[str, Any]) -> Table:
    """One row per readiness check, its counters joined in the last column."""
    table = Table(title=f"Board Status: {report.get('status', 'unknown').upper()}")
    table.add_column("Component", style="cyan")
    table.add_column("Status")
    table.add_column("Details")

    for component, check in report.get("checks", {}).items():
        state = check.get("status", "unknown")
        color = "green" if state == "healthy" else "red"
        details = ", ".join(f"{key}: {value}" for key, value in check.items() if key != "status")
        table.add_row(component, f"[{color}]{state}[/{color}]", details or "-")
    return table


@app.command()
def status() -> None:
    """
    Board readiness: note count, store version, active drags.

    Examples:
        board_cli.py health status
    """

    async def action(client) -> None:
        response = await client.get("/health/ready")
        report = response.json()
        # 503 bodies arrive wrapped by FastAPI's HTTPException handler.
        report = report.get("detail", report)
        console.print(render_readiness(report))
        if response.status_code != 200:
            raise typer.Exit(1)

    run_with_client(get_api_client, action)


@app.command()
def ping() -> None:
    """
    Check that the board server answers at all.

    Examples:
        board_cli.py health ping
    """

    async def action(client) -> None:
        response = await client.get("/health")
        if response.status_code == 200:
            console.print("[green]✓ Board server is reachable[/green]")
        else:
            console.print(f"[yellow]Board server responded with status {response.status_code}[/yellow]")

    run_with_client(get_api_client, action, unreachable="✗ Board server is not reachable")
