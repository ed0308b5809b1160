"""Keymap management commands for playmap."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.table import Table

from playmap.models.keymap import KeymapRecord
from playmap.services.transfer import KeymapTransfer, portable_destination
from playmap.utils.cli import handle_cli_errors
from playmap.utils.output import console, print_json
from playmap.utils.validation import NameValidation, validate_keymap_name

from ._helpers import get_repository, require_keymap

_NAME_ERRORS = {
    NameValidation.EMPTY: "keymap name cannot be empty",
    NameValidation.MALFORMED: "keymap name contains characters that are not allowed",
    NameValidation.DUPLICATE: "a keymap with this name already exists",
}


def _check_name(name: str, existing: List[str], allow_existing: bool = False) -> None:
    result = validate_keymap_name(name, existing)
    if result is NameValidation.DUPLICATE and allow_existing:
        return
    if result is not NameValidation.VALID:
        console.print(f"[red]Error: {_NAME_ERRORS[result]}: '{name}'[/red]")
        raise typer.Exit(1)


@handle_cli_errors("listing keymaps")
def list_keymaps(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """List keymaps in display order."""
    repository = get_repository(ctx)
    names = repository.list()
    default = repository.default_keymap

    if json_output:
        print_json({"default": default, "keymaps": names})
        return

    if not names:
        console.print("[yellow]No keymaps[/yellow]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", style="cyan", justify="right", width=4)
    table.add_column("Name", style="white")
    table.add_column("Controls", style="yellow", justify="right")
    table.add_column("", style="green")

    for position, name in enumerate(names, start=1):
        record = repository.get(name)
        marker = "default" if name == default else ""
        table.add_row(str(position), name, str(record.control_count), marker)

    console.print(f"\n[bold]Keymaps for {repository.bundle_identifier}:[/bold]\n")
    console.print(table)


def _show_record(name: str, record: KeymapRecord) -> None:
    console.print(f"\n[bold]{name}[/bold] [dim]({record.bundle_identifier}, v{record.version})[/dim]\n")
    if record.is_empty:
        console.print("[yellow]No controls[/yellow]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Type", style="cyan")
    table.add_column("Label", style="white")
    table.add_column("Keys", style="yellow")
    table.add_column("Position", style="green")
    table.add_column("Size", style="green", justify="right")

    def position(transform) -> str:
        return f"{transform.x_coord:g}, {transform.y_coord:g}"

    for button in record.buttons:
        table.add_row("button", button.key_name, str(button.key_code),
                      position(button.transform), f"{button.transform.size:g}")
    for button in record.draggable_buttons:
        table.add_row("draggable", button.key_name, str(button.key_code),
                      position(button.transform), f"{button.transform.size:g}")
    for joystick in record.joysticks:
        keys = (f"{joystick.up_key_code}/{joystick.right_key_code}/"
                f"{joystick.down_key_code}/{joystick.left_key_code}")
        table.add_row(f"joystick ({joystick.mode.name.lower()})", joystick.key_name, keys,
                      position(joystick.transform), f"{joystick.transform.size:g}")
    for area in record.mouse_areas:
        table.add_row("mouse area", area.key_name, "",
                      position(area.transform), f"{area.transform.size:g}")

    console.print(table)


@handle_cli_errors("showing keymap")
def show(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Keymap name"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Show the controls of a keymap."""
    repository = get_repository(ctx)
    require_keymap(repository, name)
    record = repository.get(name)

    if json_output:
        print_json(record.to_dict())
        return
    _show_record(name, record)


@handle_cli_errors("creating keymap")
def create(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the new keymap"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing keymap"),
) -> None:
    """Create an empty keymap."""
    repository = get_repository(ctx)
    _check_name(name, repository.list(), allow_existing=force)

    if repository.create_empty(name):
        console.print(f"[green]Created keymap '{name}'[/green]")
    else:
        console.print(f"[red]Error: could not create keymap '{name}'[/red]")
        raise typer.Exit(1)


@handle_cli_errors("renaming keymap")
def rename(
    ctx: typer.Context,
    old_name: str = typer.Argument(..., help="Current keymap name"),
    new_name: str = typer.Argument(..., help="New keymap name"),
) -> None:
    """Rename a keymap, keeping its position."""
    repository = get_repository(ctx)
    require_keymap(repository, old_name)
    _check_name(new_name, repository.list())

    if repository.rename(old_name, new_name):
        console.print(f"[green]Renamed '{old_name}' to '{new_name}'[/green]")
    else:
        console.print(f"[red]Error: could not rename keymap '{old_name}'[/red]")
        raise typer.Exit(1)


@handle_cli_errors("deleting keymap")
def delete(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Keymap to move to the trash"),
) -> None:
    """Move a keymap to the trash."""
    repository = get_repository(ctx)
    require_keymap(repository, name)

    if repository.delete(name):
        console.print(f"[green]Moved '{name}' to the trash[/green]")
        console.print(f"[dim]Restore with: playmap trash restore {name}[/dim]")
    else:
        console.print(f"[red]Error: failed to delete keymap '{name}'[/red]")
        raise typer.Exit(1)


@handle_cli_errors("resetting keymap")
def reset(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Keymap to clear"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Remove every control from a keymap."""
    repository = get_repository(ctx)
    require_keymap(repository, name)

    if not yes and not typer.confirm(f"Remove all controls from '{name}'?"):
        console.print("[yellow]Reset cancelled[/yellow]")
        return

    repository.reset(name)
    console.print(f"[green]Reset keymap '{name}'[/green]")


@handle_cli_errors("setting default keymap")
def set_default(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Keymap to use by default"),
) -> None:
    """Make a keymap the default."""
    repository = get_repository(ctx)
    require_keymap(repository, name)
    repository.set_default(name)
    console.print(f"[green]Default keymap is now '{name}'[/green]")


@handle_cli_errors("reordering keymaps")
def reorder(
    ctx: typer.Context,
    names: List[str] = typer.Argument(..., help="Keymap names in the new order"),
) -> None:
    """Set the display order of keymaps.

    Keymaps left out of NAMES are appended again by the next refresh.
    """
    repository = get_repository(ctx)
    unknown = [name for name in names if not repository.has_keymap(name)]
    if unknown:
        console.print(f"[red]Error: unknown keymaps: {', '.join(unknown)}[/red]")
        raise typer.Exit(1)
    if len(set(names)) != len(names):
        console.print("[red]Error: a keymap is listed more than once[/red]")
        raise typer.Exit(1)

    repository.reorder(names)
    config = repository.refresh()
    console.print(f"[green]Order: {', '.join(config.keymap_order)}[/green]")


@handle_cli_errors("refreshing keymaps")
def refresh(ctx: typer.Context) -> None:
    """Re-sync the keymap list with the files on disk."""
    repository = get_repository(ctx)
    config = repository.refresh()
    console.print(
        f"[green]{len(config.keymap_order)} keymap(s) tracked, default '{config.default_keymap}'[/green]"
    )


@handle_cli_errors("importing keymap")
def import_keymap(
    ctx: typer.Context,
    source: Path = typer.Argument(..., help="Portable .playmap file"),
    name: str = typer.Argument(..., help="Name to install the keymap under"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing keymap"),
    yes: bool = typer.Option(
        False, "--yes", "-y", help="Accept keymaps made for a different application"
    ),
) -> None:
    """Import a keymap from a portable file."""
    repository = get_repository(ctx)
    _check_name(name, repository.list(), allow_existing=force)

    def confirm(file_identity: str, repository_identity: str) -> bool:
        if yes:
            return True
        return typer.confirm(
            f"This keymap was made for {file_identity}, not {repository_identity}. Import anyway?"
        )

    transfer = KeymapTransfer(repository, confirm_owner_mismatch=confirm)
    if transfer.import_file(name, source):
        console.print(f"[green]Imported '{source.name}' as '{name}'[/green]")
    else:
        console.print(f"[red]Error: could not import keymap from '{source}'[/red]")
        raise typer.Exit(1)


@handle_cli_errors("exporting keymap")
def export_keymap(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Keymap to export"),
    destination: Optional[Path] = typer.Argument(
        None, help="Output file (defaults to <app name>.playmap in the current directory)"
    ),
) -> None:
    """Export a keymap to a portable file."""
    repository = get_repository(ctx)
    require_keymap(repository, name)

    transfer = KeymapTransfer(repository)
    target = portable_destination(destination or Path.cwd() / transfer.suggested_file_name)
    if transfer.export_file(name, target):
        console.print(f"[green]Exported '{name}' to {target}[/green]")
    else:
        console.print(f"[red]Error: could not export keymap '{name}'[/red]")
        raise typer.Exit(1)
