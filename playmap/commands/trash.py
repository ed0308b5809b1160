"""
Trash management commands for playmap.

    playmap trash           → list trash
    playmap trash list      → list trash (explicit)
    playmap trash restore   → restore a keymap
    playmap trash purge     → permanently delete trashed keymaps
"""

from typing import Optional

import typer
from rich.table import Table

from playmap.utils.cli import handle_cli_errors
from playmap.utils.output import console

from ._helpers import get_repository

app = typer.Typer(help="Manage deleted keymaps")


@app.callback(invoke_without_command=True)
def trash_callback(
    ctx: typer.Context,
    days: Optional[int] = typer.Option(
        None, "--days", "-d", help="Show keymaps deleted in the last N days"
    ),
) -> None:
    """Manage deleted keymaps (trash)."""
    # If a subcommand was invoked, don't run the default list behavior
    if ctx.invoked_subcommand is not None:
        return
    _list_trash(ctx, days=days)


@app.command("list")
def list_cmd(
    ctx: typer.Context,
    days: Optional[int] = typer.Option(
        None, "--days", "-d", help="Show keymaps deleted in the last N days"
    ),
) -> None:
    """List trashed keymaps."""
    _list_trash(ctx, days=days)


@handle_cli_errors("listing trash")
def _list_trash(ctx: typer.Context, days: Optional[int] = None) -> None:
    """Shared implementation for listing trash."""
    repository = get_repository(ctx)
    entries = repository.trash.list_entries(days=days)

    if not entries:
        if days:
            console.print(f"[yellow]No keymaps deleted in the last {days} days[/yellow]")
        else:
            console.print("[yellow]No keymaps in trash[/yellow]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Name", style="white")
    table.add_column("Deleted", style="red")
    table.add_column("File", style="dim")

    for entry in entries:
        table.add_row(entry.name, entry.trashed_at.strftime("%Y-%m-%d %H:%M"), entry.path.name)

    console.print(f"\n[bold]Trashed keymaps ({len(entries)} items):[/bold]\n")
    console.print(table)


@app.command("restore")
@handle_cli_errors("restoring keymap")
def restore(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the trashed keymap"),
) -> None:
    """Restore the most recently deleted copy of a keymap."""
    repository = get_repository(ctx)
    if repository.restore_from_trash(name):
        console.print(f"[green]Restored keymap '{name}'[/green]")
    else:
        console.print(f"[red]Could not restore keymap '{name}'[/red]")
        raise typer.Exit(1)


@app.command("purge")
@handle_cli_errors("purging trash")
def purge(
    ctx: typer.Context,
    older_than: Optional[int] = typer.Option(
        None, "--older-than", help="Only purge keymaps deleted more than N days ago"
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Permanently delete trashed keymaps."""
    repository = get_repository(ctx)

    if not yes and not typer.confirm("Permanently delete trashed keymaps?"):
        console.print("[yellow]Purge cancelled[/yellow]")
        return

    removed = repository.trash.purge(older_than_days=older_than)
    if removed:
        console.print(f"[green]Purged {removed} keymap(s)[/green]")
    else:
        console.print("[yellow]Nothing to purge[/yellow]")
