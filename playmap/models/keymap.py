"""Keymap data models.

Field names in ``to_dict``/``from_dict`` are the stable on-disk names shared
with keymaps written by other tools, so they stay camelCase. Every optional
field is decoded explicitly with its documented default.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Mapping

from playmap.config.constants import (
    DEFAULT_JOYSTICK_LABEL,
    DEFAULT_MOUSE_AREA_LABEL,
    KEYMAP_SCHEMA_VERSION,
)

from .keycodes import key_name_for


def _mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise TypeError(f"{what} must be a dictionary, got {type(value).__name__}")
    return value


def _sequence(value: Any, what: str) -> list[Any]:
    if not isinstance(value, (list, tuple)):
        raise TypeError(f"{what} must be an array, got {type(value).__name__}")
    return list(value)


# Integer range a property list can store
_MIN_PLIST_INT = -(1 << 63)
_MAX_PLIST_INT = 1 << 64


def parse_key_code(value: Any) -> int:
    """Convert a decoded key code to int, rejecting values a property list cannot hold."""
    code = int(value)
    if not _MIN_PLIST_INT <= code < _MAX_PLIST_INT:
        raise ValueError(f"key code out of range: {code}")
    return code


def _label(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"keyName must be a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Transform:
    """Placement of a control on screen."""

    size: float
    x_coord: float
    y_coord: float

    @classmethod
    def from_dict(cls, data: Any) -> "Transform":
        data = _mapping(data, "transform")
        return cls(
            size=float(data["size"]),
            x_coord=float(data["xCoord"]),
            y_coord=float(data["yCoord"]),
        )

    def to_dict(self) -> dict[str, float]:
        return {"size": self.size, "xCoord": self.x_coord, "yCoord": self.y_coord}


@dataclass(frozen=True)
class ButtonBinding:
    """A single key bound to an on-screen position."""

    key_code: int
    key_name: str
    transform: Transform

    def __post_init__(self) -> None:
        if not self.key_name:
            object.__setattr__(self, "key_name", key_name_for(self.key_code))

    @classmethod
    def from_dict(cls, data: Any) -> "ButtonBinding":
        data = _mapping(data, "button")
        return cls(
            key_code=parse_key_code(data["keyCode"]),
            key_name=_label(data.get("keyName")),
            transform=Transform.from_dict(data["transform"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "keyCode": self.key_code,
            "keyName": self.key_name,
            "transform": self.transform.to_dict(),
        }


class JoystickMode(IntEnum):
    """Whether a joystick stays put or follows the first touch."""

    FIXED = 0
    FLOATING = 1


@dataclass(frozen=True)
class JoystickBinding:
    """Four direction keys driving a virtual joystick."""

    up_key_code: int
    right_key_code: int
    down_key_code: int
    left_key_code: int
    key_name: str
    transform: Transform
    mode: JoystickMode = JoystickMode.FIXED

    def __post_init__(self) -> None:
        if not self.key_name:
            object.__setattr__(self, "key_name", DEFAULT_JOYSTICK_LABEL)
        object.__setattr__(self, "mode", JoystickMode(self.mode))

    @classmethod
    def from_dict(cls, data: Any) -> "JoystickBinding":
        data = _mapping(data, "joystick")
        return cls(
            up_key_code=parse_key_code(data["upKeyCode"]),
            right_key_code=parse_key_code(data["rightKeyCode"]),
            down_key_code=parse_key_code(data["downKeyCode"]),
            left_key_code=parse_key_code(data["leftKeyCode"]),
            key_name=_label(data.get("keyName")),
            transform=Transform.from_dict(data["transform"]),
            mode=JoystickMode(int(data.get("mode", JoystickMode.FIXED))),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "upKeyCode": self.up_key_code,
            "rightKeyCode": self.right_key_code,
            "downKeyCode": self.down_key_code,
            "leftKeyCode": self.left_key_code,
            "keyName": self.key_name,
            "transform": self.transform.to_dict(),
            "mode": int(self.mode),
        }


@dataclass(frozen=True)
class MouseAreaBinding:
    """Screen region that captures mouse movement."""

    key_name: str
    transform: Transform

    def __post_init__(self) -> None:
        if not self.key_name:
            object.__setattr__(self, "key_name", DEFAULT_MOUSE_AREA_LABEL)

    @classmethod
    def from_dict(cls, data: Any) -> "MouseAreaBinding":
        data = _mapping(data, "mouse area")
        return cls(
            key_name=_label(data.get("keyName")),
            transform=Transform.from_dict(data["transform"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"keyName": self.key_name, "transform": self.transform.to_dict()}


@dataclass
class KeymapRecord:
    """The unit of storage: every control of one named keymap."""

    bundle_identifier: str
    buttons: list[ButtonBinding] = field(default_factory=list)
    draggable_buttons: list[ButtonBinding] = field(default_factory=list)
    joysticks: list[JoystickBinding] = field(default_factory=list)
    mouse_areas: list[MouseAreaBinding] = field(default_factory=list)
    version: str = KEYMAP_SCHEMA_VERSION

    @classmethod
    def empty(cls, bundle_identifier: str) -> "KeymapRecord":
        """Create a keymap with no controls for the given application."""
        return cls(bundle_identifier=bundle_identifier)

    @property
    def is_empty(self) -> bool:
        return not (self.buttons or self.draggable_buttons or self.joysticks or self.mouse_areas)

    @property
    def control_count(self) -> int:
        return (
            len(self.buttons)
            + len(self.draggable_buttons)
            + len(self.joysticks)
            + len(self.mouse_areas)
        )

    @classmethod
    def from_dict(cls, data: Any) -> "KeymapRecord":
        """Create a KeymapRecord from a decoded dictionary.

        ``bundleIdentifier`` is required; the binding arrays default to empty
        and ``version`` to the current schema version.
        """
        data = _mapping(data, "keymap")
        bundle_identifier = data["bundleIdentifier"]
        if not isinstance(bundle_identifier, str):
            raise TypeError("bundleIdentifier must be a string")
        version = data.get("version", KEYMAP_SCHEMA_VERSION)
        if not isinstance(version, str):
            raise TypeError("version must be a string")

        return cls(
            bundle_identifier=bundle_identifier,
            buttons=[
                ButtonBinding.from_dict(item)
                for item in _sequence(data.get("buttonModels", []), "buttonModels")
            ],
            draggable_buttons=[
                ButtonBinding.from_dict(item)
                for item in _sequence(
                    data.get("draggableButtonModels", []), "draggableButtonModels"
                )
            ],
            joysticks=[
                JoystickBinding.from_dict(item)
                for item in _sequence(data.get("joystickModel", []), "joystickModel")
            ],
            mouse_areas=[
                MouseAreaBinding.from_dict(item)
                for item in _sequence(data.get("mouseAreaModel", []), "mouseAreaModel")
            ],
            version=version,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "buttonModels": [button.to_dict() for button in self.buttons],
            "draggableButtonModels": [button.to_dict() for button in self.draggable_buttons],
            "joystickModel": [joystick.to_dict() for joystick in self.joysticks],
            "mouseAreaModel": [area.to_dict() for area in self.mouse_areas],
            "bundleIdentifier": self.bundle_identifier,
            "version": self.version,
        }


@dataclass
class ConfigRecord:
    """Sidecar record: display order of keymaps and the default one.

    References are logical keymap names; the codec turns them into file URLs
    on disk.
    """

    default_keymap: str
    keymap_order: list[str] = field(default_factory=list)

    @classmethod
    def bootstrap(cls, name: str) -> "ConfigRecord":
        """Config pointing at a single keymap as both default and only entry."""
        return cls(default_keymap=name, keymap_order=[name])

    def contains(self, name: str) -> bool:
        return name in self.keymap_order
