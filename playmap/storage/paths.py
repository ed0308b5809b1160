"""Path resolution for keymap storage.

Layout::

    <keymapRoot>/<bundleIdentifier>/<name>.plist
    <keymapRoot>/<bundleIdentifier>/.config.plist
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from playmap.config.constants import CONFIG_RECORD_STEM, RECORD_EXTENSION
from playmap.exceptions import InvalidKeymapNameError

logger = logging.getLogger(__name__)


class PathResolver:
    """Maps (owning identity, keymap name) pairs to files and back."""

    def __init__(self, root: Path, bundle_identifier: str) -> None:
        self.root = root
        self.bundle_identifier = bundle_identifier
        self.directory = root / bundle_identifier
        self.config_path = self.directory / f"{CONFIG_RECORD_STEM}.{RECORD_EXTENSION}"

    def keymap_path(self, name: str) -> Path:
        """Record file for ``name``.

        Raises:
            InvalidKeymapNameError: If the file would be hidden (the sidecar
                included) or would land outside the application directory.
        """
        path = self.directory / f"{name}.{RECORD_EXTENSION}"
        if not name or name.startswith(".") or path.parent != self.directory:
            raise InvalidKeymapNameError(name, bundle_identifier=self.bundle_identifier)
        return path

    @staticmethod
    def name_for(path: Path) -> str:
        return path.stem

    @staticmethod
    def is_record_file(path: Path) -> bool:
        """Visible regular files with the record extension; the sidecar is hidden."""
        return (
            not path.name.startswith(".")
            and path.suffix == f".{RECORD_EXTENSION}"
            and path.is_file()
        )

    def ensure_directory(self) -> bool:
        """Create the owning directory if needed. Failures are logged, not raised."""
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            return True
        except OSError as e:
            logger.error(f"Failed to create keymap directory {self.directory}: {e}")
            return False

    def list_record_files(self) -> list[Path]:
        """Record files in directory listing order (not sorted)."""
        try:
            with os.scandir(self.directory) as entries:
                paths = [Path(entry.path) for entry in entries]
        except OSError as e:
            logger.error(f"Failed to list keymap directory {self.directory}: {e}")
            return []
        return [path for path in paths if self.is_record_file(path)]
