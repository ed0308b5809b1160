"""Services built on keymap storage."""

from .keymap_repository import KeymapRepository
from .transfer import KeymapTransfer

__all__ = ["KeymapRepository", "KeymapTransfer"]
