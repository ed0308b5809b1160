"""Keymap repository: CRUD over one application's keymap folder.

Every operation goes back to disk. Mutations follow the same shape: write or
move the record file, then load the sidecar, change it, and save it. A crash
between the two steps leaves the sidecar pointing at a file that is missing
or not yet tracked; the next ``refresh()`` repairs it.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Optional

from playmap.config.constants import DEFAULT_KEYMAP_NAME
from playmap.config.settings import get_keymap_root
from playmap.exceptions import InvalidKeymapNameError, PlaymapError
from playmap.models.app import AppInfo
from playmap.models.keymap import ConfigRecord, KeymapRecord
from playmap.storage.codec import decode_keymap, encode_keymap
from playmap.storage.config_store import ConfigStore
from playmap.storage.files import read_record_bytes, write_record_bytes
from playmap.storage.paths import PathResolver
from playmap.storage.reconcile import reconcile
from playmap.storage.trash import KeymapTrash

logger = logging.getLogger(__name__)


class KeymapRepository:
    """Named keymaps for one application plus their order and default."""

    def __init__(self, app_info: AppInfo, root: Optional[Path] = None) -> None:
        self.app_info = app_info
        self.root = root or get_keymap_root()
        self.paths = PathResolver(self.root, app_info.bundle_identifier)
        self.config = ConfigStore(self.paths)
        self.trash = KeymapTrash(self.root, app_info.bundle_identifier)

        self.refresh()

    @property
    def bundle_identifier(self) -> str:
        return self.app_info.bundle_identifier

    def refresh(self) -> ConfigRecord:
        """Reconcile the sidecar with the files on disk."""
        return reconcile(self.paths, self.config)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, name: str) -> KeymapRecord:
        """Load a keymap. A missing or corrupted file is reset to an empty keymap."""
        try:
            return decode_keymap(read_record_bytes(self.paths.keymap_path(name)))
        except PlaymapError as e:
            logger.warning(f"Keymap '{name}' is unreadable, resetting it: {e}")
            return self.reset(name)

    def has_keymap(self, name: str) -> bool:
        """Whether ``name`` is in the order list. The filesystem is not consulted."""
        return self.config.load().contains(name)

    def list(self) -> list[str]:
        """Keymap names in display order."""
        return list(self.config.load().keymap_order)

    @property
    def default_keymap(self) -> str:
        return self.config.load().default_keymap

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save(self, name: str, record: KeymapRecord) -> bool:
        """Write ``record`` at ``name`` and track it. Returns False if the write failed."""
        if not self.paths.ensure_directory():
            return False
        try:
            write_record_bytes(self.paths.keymap_path(name), encode_keymap(record))
        except PlaymapError as e:
            logger.error(f"Failed to save keymap '{name}': {e}")
            return False

        with self.config.edit() as config:
            if not config.contains(name):
                config.keymap_order.append(name)
        return True

    def create_empty(self, name: str) -> bool:
        """Write an empty keymap at ``name``; an existing keymap is overwritten.

        Returns whether ``name`` is now tracked.
        """
        self.save(name, KeymapRecord.empty(self.bundle_identifier))
        return self.has_keymap(name)

    def reset(self, name: str) -> KeymapRecord:
        """Replace ``name`` with an empty keymap and return it."""
        record = KeymapRecord.empty(self.bundle_identifier)
        self.save(name, record)
        return record

    def rename(self, old_name: str, new_name: str) -> bool:
        """Move a keymap to a new name, keeping its display position."""
        config = self.config.load()
        if not config.contains(old_name):
            logger.warning(f"Could not find keymap with name: {old_name}")
            return False

        try:
            old_path = self.paths.keymap_path(old_name)
            new_path = self.paths.keymap_path(new_name)
        except InvalidKeymapNameError as e:
            logger.warning(f"Cannot rename '{old_name}': {e}")
            return False
        if new_path.exists() or config.contains(new_name):
            logger.warning(f"Cannot rename '{old_name}': keymap '{new_name}' already exists")
            return False

        try:
            shutil.move(str(old_path), str(new_path))
        except OSError as e:
            logger.error(f"Failed to rename keymap '{old_name}' to '{new_name}': {e}")
            return False

        with self.config.edit() as config:
            if config.contains(old_name):
                config.keymap_order[config.keymap_order.index(old_name)] = new_name
            else:
                config.keymap_order.append(new_name)
            if config.default_keymap == old_name:
                config.default_keymap = new_name
        return True

    def delete(self, name: str) -> bool:
        """Move a keymap to the trash and stop tracking it."""
        if not self.has_keymap(name):
            logger.warning(f"Could not find keymap with name: {name}")
            return False

        try:
            self.trash.move_to_trash(self.paths.keymap_path(name))
        except PlaymapError as e:
            logger.error(f"Failed to delete keymap '{name}': {e}")
            return False

        with self.config.edit() as config:
            config.keymap_order.remove(name)
            if config.default_keymap == name:
                config.default_keymap = (
                    config.keymap_order[0] if config.keymap_order else DEFAULT_KEYMAP_NAME
                )
        return True

    def restore_from_trash(self, name: str) -> bool:
        """Bring back the most recently trashed copy of ``name``."""
        entry = self.trash.latest(name)
        if entry is None:
            logger.warning(f"No trashed keymap named: {name}")
            return False
        if not self.paths.ensure_directory():
            return False
        try:
            destination = self.paths.keymap_path(name)
        except InvalidKeymapNameError as e:
            logger.warning(f"Cannot restore trashed keymap: {e}")
            return False
        if not self.trash.restore(entry, destination):
            return False

        with self.config.edit() as config:
            if not config.contains(name):
                config.keymap_order.append(name)
        return True

    # ------------------------------------------------------------------
    # Order and default, driven by the UI layer
    # ------------------------------------------------------------------

    def reorder(self, names: list[str]) -> None:
        """Replace the order list wholesale. The next refresh repairs any drift."""
        with self.config.edit() as config:
            config.keymap_order = list(names)

    def set_default(self, name: str) -> None:
        """Point the default at ``name`` without checking that it exists."""
        with self.config.edit() as config:
            config.default_keymap = name
