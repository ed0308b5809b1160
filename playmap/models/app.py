"""Owning application identity."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AppInfo:
    """Identity of the application a set of keymaps belongs to."""

    bundle_identifier: str
    display_name: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.bundle_identifier:
            raise ValueError("bundle_identifier cannot be empty")
        if not self.display_name:
            object.__setattr__(self, "display_name", self.bundle_identifier.rsplit(".", 1)[-1])
