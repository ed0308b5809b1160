"""Reconciliation of the sidecar order list with the keymap files on disk.

The directory listing and the persisted order list are two sources of truth
that drift apart when files are added or removed outside playmap, or when a
multi-file operation is interrupted. Reconciliation converges them:

* files on disk that the order list does not know about are appended, in
  directory listing order;
* duplicate references, and references no file could be stored under, are
  dropped;
* references whose file is gone get a fresh empty keymap, so the reference
  (and its display position) survives while the content resets;
* an empty directory is bootstrapped with a ``default`` keymap.

Running it twice with no filesystem change in between yields the same
config record.
"""

from __future__ import annotations

import logging

from playmap.config.constants import DEFAULT_KEYMAP_NAME
from playmap.exceptions import InvalidKeymapNameError, PlaymapError
from playmap.models.keymap import ConfigRecord, KeymapRecord

from .codec import encode_keymap
from .config_store import ConfigStore
from .files import write_record_bytes
from .paths import PathResolver

logger = logging.getLogger(__name__)

# The bootstrap pass recurses once; a second empty listing means writes are failing
_MAX_BOOTSTRAP_PASSES = 1


def write_empty_keymap(resolver: PathResolver, name: str) -> bool:
    """Write an empty keymap for the resolver's application. Failures are logged."""
    try:
        data = encode_keymap(KeymapRecord.empty(resolver.bundle_identifier))
        write_record_bytes(resolver.keymap_path(name), data)
        return True
    except PlaymapError as e:
        logger.error(f"Failed to write empty keymap '{name}': {e}")
        return False


def reconcile(resolver: PathResolver, store: ConfigStore, _pass: int = 0) -> ConfigRecord:
    """Bring the sidecar in line with the keymap files and return the result."""
    if not resolver.ensure_directory():
        return store.load()

    record_files = resolver.list_record_files()

    if not record_files:
        if _pass >= _MAX_BOOTSTRAP_PASSES:
            logger.error(
                f"No keymaps found in {resolver.directory} after bootstrap; giving up"
            )
            return store.load()

        logger.info(f"Bootstrapping '{DEFAULT_KEYMAP_NAME}' keymap for {resolver.bundle_identifier}")
        write_empty_keymap(resolver, DEFAULT_KEYMAP_NAME)
        with store.edit() as config:
            if not config.contains(DEFAULT_KEYMAP_NAME):
                config.keymap_order.append(DEFAULT_KEYMAP_NAME)
            if not config.contains(config.default_keymap):
                config.default_keymap = DEFAULT_KEYMAP_NAME
        return reconcile(resolver, store, _pass + 1)

    config = store.load()
    order = list(dict.fromkeys(config.keymap_order))
    if len(order) != len(config.keymap_order):
        logger.warning(f"Dropped duplicate keymap references for {resolver.bundle_identifier}")

    for name in list(order):
        try:
            resolver.keymap_path(name)
        except InvalidKeymapNameError as e:
            logger.warning(f"Dropping unusable keymap reference: {e}")
            order.remove(name)

    present = [resolver.name_for(path) for path in record_files]
    for name in present:
        if name not in order:
            logger.info(f"Discovered untracked keymap '{name}'")
            order.append(name)

    present_names = set(present)
    for name in order:
        if name not in present_names:
            logger.warning(f"Keymap '{name}' is missing on disk; recreating it empty")
            write_empty_keymap(resolver, name)

    config.keymap_order = order
    store.save(config)
    return config
