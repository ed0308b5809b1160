"""Data models for playmap."""

from .app import AppInfo
from .keymap import (
    ButtonBinding,
    ConfigRecord,
    JoystickBinding,
    JoystickMode,
    KeymapRecord,
    MouseAreaBinding,
    Transform,
)

__all__ = [
    "AppInfo",
    "ButtonBinding",
    "ConfigRecord",
    "JoystickBinding",
    "JoystickMode",
    "KeymapRecord",
    "MouseAreaBinding",
    "Transform",
]
