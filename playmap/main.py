#!/usr/bin/env python3
"""
Main CLI entry point for playmap
"""

from typing import Optional

import typer
from rich.table import Table

from playmap import __version__
from playmap.commands import keymaps
from playmap.commands.trash import app as trash_app
from playmap.config.settings import get_env_info, validate_all_env_vars
from playmap.utils.logging_utils import setup_cli_logging
from playmap.utils.output import console


def version():
    """Show playmap version"""
    typer.echo(f"playmap version {__version__}")


def env():
    """Show playmap environment variables"""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Variable", style="cyan")
    table.add_column("Value")
    table.add_column("Default", style="dim")
    table.add_column("Description")

    for name, info in get_env_info().items():
        if info["is_set"]:
            value = info["value"] if info["valid"] else f"[red]{info['value']} (invalid)[/red]"
        else:
            value = "[dim]unset[/dim]"
        table.add_row(name, value, info["default"] or "", info["description"])

    console.print(table)


def main(
    ctx: typer.Context,
    bundle_identifier: Optional[str] = typer.Option(
        None, "--app", "-a", envvar="PLAYMAP_APP", help="Bundle identifier of the application"
    ),
    display_name: Optional[str] = typer.Option(
        None, "--name", help="Display name of the application (used for export file names)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
):
    """
    playmap - per-application keymap manager

    Keymaps live in one folder per application, next to a hidden config that
    remembers their order and which one is the default.

    [bold]Examples:[/bold]

    List keymaps:
        [cyan]playmap -a com.example.game list[/cyan]

    Import a shared keymap:
        [cyan]playmap -a com.example.game import racing.playmap racing[/cyan]
    """
    setup_cli_logging(verbose)

    for error in validate_all_env_vars():
        console.print(f"[yellow]Warning: {error}[/yellow]")

    ctx.obj = {"bundle_identifier": bundle_identifier, "display_name": display_name}


def create_app() -> typer.Typer:
    """Create and configure the main CLI application"""
    app = typer.Typer(no_args_is_help=True, rich_markup_mode="rich")
    app.callback()(main)

    app.command("list")(keymaps.list_keymaps)
    app.command("show")(keymaps.show)
    app.command("create")(keymaps.create)
    app.command("rename")(keymaps.rename)
    app.command("delete")(keymaps.delete)
    app.command("reset")(keymaps.reset)
    app.command("set-default")(keymaps.set_default)
    app.command("reorder")(keymaps.reorder)
    app.command("refresh")(keymaps.refresh)
    app.command("import")(keymaps.import_keymap)
    app.command("export")(keymaps.export_keymap)
    app.command("version")(version)
    app.command("env")(env)

    app.add_typer(trash_app, name="trash")
    return app


# Create the app instance
app = create_app()


def run():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    run()
