"""Import and export of portable ``.playmap`` keymap files.

A portable file is a single keymap record in the same property-list format
as internal storage. It carries its own ``bundleIdentifier``; importing a file
made for another application needs an explicit confirmation.

The callback-style entry points mirror a file dialog: the chooser is handed
a one-shot callback, and nothing happens until it is called with a path (or
``None`` when the user cancels). ``completion`` then fires exactly once.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from playmap.config.constants import PORTABLE_EXTENSION
from playmap.exceptions import PlaymapError, RecordDecodeError
from playmap.models.keymap import KeymapRecord
from playmap.storage.codec import decode_keymap, decode_legacy_keymap, encode_keymap
from playmap.storage.files import read_record_bytes, write_record_bytes

from .keymap_repository import KeymapRepository

logger = logging.getLogger(__name__)

# (identity in the file, identity of the repository) -> proceed?
ConfirmOwnerMismatch = Callable[[str, str], bool]
Completion = Callable[[bool], None]
PathChooser = Callable[[Callable[[Optional[Path]], None]], None]


def decline_owner_mismatch(file_identity: str, repository_identity: str) -> bool:
    """Confirmation policy that never installs keymaps made for another app."""
    return False


def read_portable_keymap(source: Path) -> KeymapRecord:
    """Decode a portable file, falling back to the legacy layout.

    Raises:
        PlaymapError: If the file cannot be read or decoded in either format.
    """
    data = read_record_bytes(source)
    try:
        return decode_keymap(data)
    except RecordDecodeError as e:
        logger.info(f"{source.name} is not a current keymap ({e}); trying legacy format")
        return decode_legacy_keymap(data)


def portable_destination(destination: Path) -> Path:
    """Add the portable extension when the chosen path has none."""
    if destination.suffix == f".{PORTABLE_EXTENSION}":
        return destination
    return destination.with_name(f"{destination.name}.{PORTABLE_EXTENSION}")


class KeymapTransfer:
    """Moves keymaps between a repository and portable files."""

    def __init__(
        self,
        repository: KeymapRepository,
        confirm_owner_mismatch: ConfirmOwnerMismatch = decline_owner_mismatch,
    ) -> None:
        self.repository = repository
        self.confirm_owner_mismatch = confirm_owner_mismatch

    @property
    def suggested_file_name(self) -> str:
        return f"{self.repository.app_info.display_name}.{PORTABLE_EXTENSION}"

    def export_file(self, name: str, destination: Path) -> bool:
        """Write keymap ``name`` to ``destination`` as a portable file."""
        target = portable_destination(destination)
        record = self.repository.get(name)
        try:
            write_record_bytes(target, encode_keymap(record))
        except PlaymapError as e:
            logger.error(f"Failed to export keymap '{name}': {e}")
            return False
        logger.info(f"Exported keymap '{name}' to {target}")
        return True

    def import_file(self, name: str, source: Path) -> bool:
        """Install the keymap in ``source`` at ``name``, overwriting it.

        Returns False without touching the repository when the file cannot
        be decoded or the owner mismatch is declined.
        """
        try:
            record = read_portable_keymap(source)
        except PlaymapError as e:
            logger.error(f"Failed to import keymap from {source}: {e}")
            return False

        if record.bundle_identifier != self.repository.bundle_identifier:
            if not self.confirm_owner_mismatch(
                record.bundle_identifier, self.repository.bundle_identifier
            ):
                logger.info(
                    f"Import of {source.name} declined: made for {record.bundle_identifier}"
                )
                return False

        return self.repository.save(name, record)

    def export_keymap(self, name: str, choose_destination: PathChooser, completion: Completion) -> None:
        """Export after the destination chooser resolves."""

        def on_choice(destination: Optional[Path]) -> None:
            if destination is None:
                completion(False)
                return
            completion(self.export_file(name, destination))

        choose_destination(_once(on_choice))

    def import_keymap(self, name: str, choose_source: PathChooser, completion: Completion) -> None:
        """Import after the source chooser resolves."""

        def on_choice(source: Optional[Path]) -> None:
            if source is None:
                completion(False)
                return
            completion(self.import_file(name, source))

        choose_source(_once(on_choice))


def _once(callback: Callable[[Optional[Path]], None]) -> Callable[[Optional[Path]], None]:
    """Ignore every call after the first."""
    called = False

    def wrapper(path: Optional[Path]) -> None:
        nonlocal called
        if called:
            logger.warning("File chooser resolved more than once; ignoring")
            return
        called = True
        callback(path)

    return wrapper
