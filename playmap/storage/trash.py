"""Recoverable deletion area for keymap files.

Deleted keymaps are moved, not erased, to::

    <keymapRoot>/.Trash/<bundleIdentifier>/<name>~<timestamp>.plist

and can be listed, restored or purged later.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

from playmap.config.constants import (
    RECORD_EXTENSION,
    TRASH_DIR_NAME,
    TRASH_NAME_SEPARATOR,
    TRASH_TIMESTAMP_FORMAT,
)
from playmap.exceptions import FileOperationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrashEntry:
    """A keymap file sitting in the trash."""

    name: str
    bundle_identifier: str
    trashed_at: datetime
    path: Path


class KeymapTrash:
    """Trash folder for one application's keymaps."""

    def __init__(self, root: Path, bundle_identifier: str) -> None:
        self.bundle_identifier = bundle_identifier
        self.directory = root / TRASH_DIR_NAME / bundle_identifier

    def move_to_trash(self, path: Path) -> Path:
        """Move a keymap file into the trash and return its new location.

        Raises:
            FileOperationError: If the file could not be moved.
        """
        stamp = datetime.now().strftime(TRASH_TIMESTAMP_FORMAT)
        target = self.directory / f"{path.stem}{TRASH_NAME_SEPARATOR}{stamp}.{RECORD_EXTENSION}"
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            shutil.move(str(path), str(target))
        except OSError as e:
            raise FileOperationError(f"Failed to move keymap to trash: {e}", path=str(path)) from e
        logger.info(f"Trashed {path.name} for {self.bundle_identifier} -> {target.name}")
        return target

    def _parse(self, path: Path) -> Optional[TrashEntry]:
        name, sep, stamp = path.stem.rpartition(TRASH_NAME_SEPARATOR)
        if not sep or not name:
            return None
        try:
            trashed_at = datetime.strptime(stamp, TRASH_TIMESTAMP_FORMAT)
        except ValueError:
            return None
        return TrashEntry(
            name=name,
            bundle_identifier=self.bundle_identifier,
            trashed_at=trashed_at,
            path=path,
        )

    def list_entries(self, days: Optional[int] = None) -> list[TrashEntry]:
        """Trashed keymaps, newest first, optionally limited to the last N days."""
        if not self.directory.exists():
            return []
        entries = [
            entry
            for entry in (self._parse(path) for path in self.directory.glob(f"*.{RECORD_EXTENSION}"))
            if entry is not None
        ]
        if days is not None:
            cutoff = datetime.now() - timedelta(days=days)
            entries = [entry for entry in entries if entry.trashed_at >= cutoff]
        return sorted(entries, key=lambda entry: entry.trashed_at, reverse=True)

    def latest(self, name: str) -> Optional[TrashEntry]:
        """Most recently trashed copy of a keymap, if any."""
        for entry in self.list_entries():
            if entry.name == name:
                return entry
        return None

    def restore(self, entry: TrashEntry, destination: Path) -> bool:
        """Move a trashed file back. Refuses to overwrite an existing keymap."""
        if destination.exists():
            logger.warning(f"Cannot restore {entry.name}: {destination} already exists")
            return False
        try:
            shutil.move(str(entry.path), str(destination))
        except OSError as e:
            logger.error(f"Failed to restore {entry.name} from trash: {e}")
            return False
        return True

    def purge(self, older_than_days: Optional[int] = None) -> int:
        """Permanently delete trashed keymaps. Returns the number removed."""
        entries = self.list_entries()
        if older_than_days is not None:
            cutoff = datetime.now() - timedelta(days=older_than_days)
            entries = [entry for entry in entries if entry.trashed_at < cutoff]

        removed = 0
        for entry in entries:
            try:
                entry.path.unlink()
                removed += 1
            except OSError as e:
                logger.error(f"Failed to purge {entry.path}: {e}")
        return removed
