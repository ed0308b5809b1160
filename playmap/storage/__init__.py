"""On-disk storage for keymaps: codec, paths, sidecar, reconciliation, trash."""

from .codec import (
    decode_config,
    decode_keymap,
    decode_legacy_keymap,
    encode_config,
    encode_keymap,
)
from .config_store import ConfigStore
from .paths import PathResolver
from .reconcile import reconcile
from .trash import KeymapTrash, TrashEntry

__all__ = [
    "ConfigStore",
    "KeymapTrash",
    "PathResolver",
    "TrashEntry",
    "decode_config",
    "decode_keymap",
    "decode_legacy_keymap",
    "encode_config",
    "encode_keymap",
    "reconcile",
]
