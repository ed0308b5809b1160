"""Sidecar store for keymap order and the default keymap.

Nothing is cached: every ``load`` re-reads the sidecar and every ``save``
rewrites it whole. Two writers racing on the same sidecar end with the last
write winning; callers serialize access if that matters.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from playmap.config.constants import DEFAULT_KEYMAP_NAME
from playmap.exceptions import PlaymapError
from playmap.models.keymap import ConfigRecord

from .codec import decode_config, encode_config
from .files import read_record_bytes, write_record_bytes
from .paths import PathResolver

logger = logging.getLogger(__name__)


class ConfigStore:
    """Load/mutate/save access to ``.config.plist`` for one application."""

    def __init__(self, resolver: PathResolver) -> None:
        self.resolver = resolver

    def load(self) -> ConfigRecord:
        """Read the sidecar, regenerating it if it is missing or corrupted."""
        try:
            return decode_config(read_record_bytes(self.resolver.config_path))
        except PlaymapError as e:
            logger.warning(f"Regenerating keymap config for {self.resolver.bundle_identifier}: {e}")
            return self.reset()

    def save(self, record: ConfigRecord) -> None:
        """Overwrite the sidecar. Failures are logged; the UI keeps working."""
        try:
            data = encode_config(record, self.resolver.directory)
            write_record_bytes(self.resolver.config_path, data)
        except (PlaymapError, ValueError) as e:
            logger.error(f"Failed to save keymap config for {self.resolver.bundle_identifier}: {e}")

    def reset(self) -> ConfigRecord:
        """Replace the sidecar with one pointing at the bootstrap keymap."""
        record = ConfigRecord.bootstrap(DEFAULT_KEYMAP_NAME)
        self.save(record)
        return record

    @contextmanager
    def edit(self) -> Iterator[ConfigRecord]:
        """Load the sidecar, let the caller mutate it, then save it.

        Example:
            with store.edit() as config:
                config.default_keymap = "racing"
        """
        record = self.load()
        yield record
        self.save(record)
