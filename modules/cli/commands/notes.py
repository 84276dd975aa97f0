"""
Note Commands.

Terminal renderer for the board: create, list, edit, move, drag and delete
notes on a running board server. `list` shows the derived view in list
mode; `board` shows the same view in stacking order with color counts.
"""

from typing import Any

import typer
from rich.table import Table

from modules.cli.client import get_api_client
from modules.cli.commands.common import console, run_with_client

app = typer.Typer(help="Board note commands")


def _short_time(value: str) -> str:
    return value.replace("T", " ")[:19]


def render_notes(notes: list[dict[str, Any]]) -> Table:
    """Build a table for a derived view, most recent first."""
    table = Table(title=f"Notes ({len(notes)})", show_header=True)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Color")
    table.add_column("Text")
    table.add_column("Position", justify="right")
    table.add_column("Z", justify="right")
    table.add_column("Created")
    table.add_column("Updated")

    for note in notes:
        position = note["position"]
        table.add_row(
            note["id"][:8],
            note["color"],
            note["text"] or "[dim](empty)[/dim]",
            f"{position['x']:.0f}, {position['y']:.0f}",
            str(note["z_order"]),
            _short_time(note["created_at"]),
            _short_time(note["updated_at"]),
        )
    return table


@app.command()
def add(
    text: str = typer.Argument("", help="Initial text for the note"),
) -> None:
    """
    Create a note (random color and position).

    Examples:
        board_cli.py notes add
        board_cli.py notes add "Call the plumber"
    """

    async def action(client) -> None:
        note = await client.create_note()
        if text:
            note = await client.update_text(note["id"], text) or note
        console.print(f"[green]Created {note['color']} note[/green] {note['id']}")

    run_with_client(get_api_client, action)


@app.command("list")
def list_notes(
    color: str = typer.Option("all", "--color", "-c", help="Palette color or 'all'"),
    search: str = typer.Option("", "--search", "-s", help="Text to search for"),
    sort: str = typer.Option(None, "--sort", help="created_at or updated_at"),
) -> None:
    """
    Show notes filtered by color and text, most recent first.

    Examples:
        board_cli.py notes list
        board_cli.py notes list --color yellow --search milk --sort updated_at
    """

    async def action(client) -> None:
        notes = await client.list_notes(color=color, q=search, sort=sort)
        console.print(render_notes(notes))

    run_with_client(get_api_client, action)


@app.command()
def edit(
    note_id: str = typer.Argument(..., help="Note ID"),
    text: str = typer.Argument(..., help="New text"),
) -> None:
    """Replace a note's text."""

    async def action(client) -> None:
        note = await client.update_text(note_id, text)
        if note is None:
            console.print(f"[yellow]No note {note_id}; nothing changed[/yellow]")
        else:
            console.print(f"[green]Updated[/green] {note_id}")

    run_with_client(get_api_client, action)


@app.command()
def move(
    note_id: str = typer.Argument(..., help="Note ID"),
    x: float = typer.Argument(..., help="New x coordinate"),
    y: float = typer.Argument(..., help="New y coordinate"),
) -> None:
    """Move a note and bring it to the front."""

    async def action(client) -> None:
        note = await client.move_note(note_id, x, y)
        if note is None:
            console.print(f"[yellow]No note {note_id}; nothing changed[/yellow]")
        else:
            console.print(f"[green]Moved[/green] {note_id} (z_order {note['z_order']})")

    run_with_client(get_api_client, action)


@app.command()
def delete(
    note_id: str = typer.Argument(..., help="Note ID"),
) -> None:
    """Delete a note. Deleting an unknown note is not an error."""

    async def action(client) -> None:
        await client.delete_note(note_id)
        console.print(f"[green]Deleted[/green] {note_id}")

    run_with_client(get_api_client, action)


@app.command()
def board(
    color: str = typer.Option("all", "--color", "-c", help="Palette color or 'all'"),
    search: str = typer.Option("", "--search", "-s", help="Text to search for"),
    sort: str = typer.Option(None, "--sort", help="created_at or updated_at"),
) -> None:
    """
    Show the board in stacking order, frontmost note first, with color counts.

    Examples:
        board_cli.py notes board
        board_cli.py notes board --color green
    """

    async def action(client) -> None:
        snapshot = await client.board(color=color, q=search, sort=sort)
        notes = sorted(snapshot["notes"], key=lambda note: note["z_order"], reverse=True)

        table = Table(title=f"Board v{snapshot['version']} ({len(notes)} shown)", show_header=True)
        table.add_column("Z", justify="right")
        table.add_column("ID", style="dim", no_wrap=True)
        table.add_column("Color")
        table.add_column("Position", justify="right")
        table.add_column("Text")
        for note in notes:
            position = note["position"]
            table.add_row(
                str(note["z_order"]),
                note["id"][:8],
                note["color"],
                f"{position['x']:.0f}, {position['y']:.0f}",
                note["text"] or "[dim](empty)[/dim]",
            )
        console.print(table)

        stats = snapshot["stats"]
        counts = "  ".join(f"{name}: {count}" for name, count in stats["color_counts"].items())
        console.print(f"Total notes: {stats['total']}  {counts}".rstrip())

    run_with_client(get_api_client, action)


@app.command()
def drag(
    note_id: str = typer.Argument(..., help="Note ID"),
    from_x: float = typer.Argument(..., help="Pointer x where the note is picked up"),
    from_y: float = typer.Argument(..., help="Pointer y where the note is picked up"),
    to_x: float = typer.Argument(..., help="Pointer x where the note is dropped"),
    to_y: float = typer.Argument(..., help="Pointer y where the note is dropped"),
    steps: int = typer.Option(1, "--steps", min=1, help="Pointer moves between pick-up and drop"),
) -> None:
    """
    Pick a note up at one pointer location and drop it at another.

    The note keeps its offset from the pointer, so picking it up by a
    corner and dropping at a point puts that corner at the point.

    Examples:
        board_cli.py notes drag <id> 110 120 210 320
        board_cli.py notes drag <id> 0 0 50 50 --steps 5
    """

    async def action(client) -> None:
        note = await client.begin_drag(note_id, from_x, from_y)
        if note is None:
            console.print(f"[yellow]No note {note_id}; nothing changed[/yellow]")
            return

        try:
            for step in range(1, steps + 1):
                fraction = step / steps
                moved = await client.drag_to(
                    note_id,
                    from_x + (to_x - from_x) * fraction,
                    from_y + (to_y - from_y) * fraction,
                )
                if moved is None:
                    console.print(f"[yellow]Note {note_id} was removed during the drag[/yellow]")
                    return
                note = moved
        finally:
            await client.end_drag(note_id)

        position = note["position"]
        console.print(
            f"[green]Dragged[/green] {note_id} to {position['x']:.0f}, {position['y']:.0f} "
            f"(z_order {note['z_order']})"
        )

    run_with_client(get_api_client, action)


@app.command()
def stats() -> None:
    """Show total notes and per-color counts."""

    async def action(client) -> None:
        data = await client.stats()
        table = Table(title=f"Total notes: {data['total']}", show_header=True)
        table.add_column("Color", style="cyan")
        table.add_column("Count", justify="right")
        for color, count in data["color_counts"].items():
            table.add_row(color, str(count))
        console.print(table)

    run_with_client(get_api_client, action)


@app.command()
def palette() -> None:
    """Show the colors notes can have."""

    async def action(client) -> None:
        colors = await client.palette()
        console.print(", ".join(colors))

    run_with_client(get_api_client, action)
