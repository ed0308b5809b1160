"""Error reporting for CLI commands."""

import functools
import logging
from typing import Callable, TypeVar

import typer

from playmap.exceptions import PlaymapError
from playmap.utils.output import console

logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable)


def handle_cli_errors(action: str) -> Callable[[F], F]:
    """Turn exceptions escaping a command into a red message and exit status 1.

    ``PlaymapError`` is an expected failure and prints its message only;
    anything else is also logged with its traceback.

        @handle_cli_errors("renaming keymap")
        def rename(ctx: typer.Context, old_name: str, new_name: str):
            ...
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except typer.Exit:
                raise
            except PlaymapError as e:
                console.print(f"[red]Error {action}: {e.message}[/red]")
                raise typer.Exit(1) from e
            except Exception as e:
                logger.exception(f"Unexpected error {action}")
                console.print(f"[red]Error {action}: {e}[/red]")
                raise typer.Exit(1) from e
        return wrapper
    return decorator
