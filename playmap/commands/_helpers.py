"""Shared helpers for playmap commands."""

from __future__ import annotations

from typing import Optional

import typer

from playmap.exceptions import KeymapNotFoundError
from playmap.models.app import AppInfo
from playmap.services.keymap_repository import KeymapRepository
from playmap.utils.output import console


def get_repository(ctx: typer.Context) -> KeymapRepository:
    """Open the repository for the application selected with --app."""
    obj = ctx.find_root().obj or {}
    bundle_identifier: Optional[str] = obj.get("bundle_identifier")
    if not bundle_identifier:
        console.print("[red]Error: no application given. Pass --app or set PLAYMAP_APP[/red]")
        raise typer.Exit(1)
    app_info = AppInfo(bundle_identifier, obj.get("display_name"))
    return KeymapRepository(app_info)


def require_keymap(repository: KeymapRepository, name: str) -> None:
    """Raise KeymapNotFoundError when ``name`` is not a tracked keymap.

    Commands are wrapped in ``handle_cli_errors``, which turns it into a
    printed error and exit status 1.
    """
    if not repository.has_keymap(name):
        raise KeymapNotFoundError(name, bundle_identifier=repository.bundle_identifier)
