"""Keymap name validation for the UI layer.

The repository accepts any name it is given; callers use this before
creating, renaming or importing so that users get feedback instead of a
silently overwritten keymap.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from playmap.config.constants import TRASH_NAME_SEPARATOR

_FORBIDDEN_CHARACTERS = frozenset({"/", "\\", ":", TRASH_NAME_SEPARATOR})


class NameValidation(str, Enum):
    """Outcome of validating a proposed keymap name."""

    EMPTY = "empty"
    MALFORMED = "malformed"
    DUPLICATE = "duplicate"
    VALID = "valid"


def is_malformed(name: str) -> bool:
    if name != name.strip() or name.startswith("."):
        return True
    return any(ch in _FORBIDDEN_CHARACTERS or not ch.isprintable() for ch in name)


def validate_keymap_name(name: str, existing: Iterable[str]) -> NameValidation:
    """Classify a proposed name against the keymaps that already exist."""
    if not name:
        return NameValidation.EMPTY
    if is_malformed(name):
        return NameValidation.MALFORMED
    if name in set(existing):
        return NameValidation.DUPLICATE
    return NameValidation.VALID
