"""Record codec: keymap and config records <-> XML property lists.

The byte format is the Foundation property-list layout of existing keymap
folders and exported ``.playmap`` files, so they can be read and written as-is.
Sidecar references are stored as Foundation-encoded file URLs
(``{"relative": "file:///.../name.plist"}``) and reduced to keymap names when
decoded.
"""

from __future__ import annotations

import json
import plistlib
from pathlib import Path, PurePosixPath
from typing import Any, Mapping
from urllib.parse import unquote, urlparse
from xml.parsers.expat import ExpatError

from playmap.config.constants import RECORD_EXTENSION
from playmap.exceptions import RecordDecodeError, RecordEncodeError
from playmap.models.keymap import (
    ButtonBinding,
    ConfigRecord,
    JoystickBinding,
    KeymapRecord,
    MouseAreaBinding,
    Transform,
    parse_key_code,
)

# Anything a malformed document can make plistlib or the model constructors raise
_DECODE_ERRORS = (ExpatError, ValueError, TypeError, KeyError, IndexError, OverflowError)


def _load_plist(data: bytes) -> Any:
    try:
        return plistlib.loads(data)
    except _DECODE_ERRORS as e:
        raise RecordDecodeError(f"Not a property list: {e}") from e


def _dump_plist(value: Any) -> bytes:
    try:
        return plistlib.dumps(value, fmt=plistlib.FMT_XML)
    except (OverflowError, TypeError, ValueError) as e:
        raise RecordEncodeError(f"Cannot encode property list: {e}") from e


# =============================================================================
# Keymap records
# =============================================================================


def encode_keymap(record: KeymapRecord) -> bytes:
    """Encode a keymap record as an XML property list.

    Raises:
        RecordEncodeError: If a value cannot be stored in a property list.
    """
    return _dump_plist(record.to_dict())


def decode_keymap(data: bytes) -> KeymapRecord:
    """Decode a keymap record.

    Raises:
        RecordDecodeError: If the bytes are not a valid current-format keymap.
    """
    payload = _load_plist(data)
    try:
        return KeymapRecord.from_dict(payload)
    except _DECODE_ERRORS as e:
        raise RecordDecodeError(f"Invalid keymap record: {e!r}") from e


# =============================================================================
# Config (sidecar) records
# =============================================================================


def reference_for(name: str, directory: Path) -> dict[str, str]:
    """Encode a keymap name as a Foundation file URL dictionary."""
    path = (directory / f"{name}.{RECORD_EXTENSION}").absolute()
    return {"relative": path.as_uri()}


def reference_name(value: Any) -> str:
    """Reduce a stored reference (URL dict, URL string, path or name) to a keymap name."""
    if isinstance(value, Mapping):
        value = value.get("relative")
    if not isinstance(value, str) or not value:
        raise TypeError(f"Invalid keymap reference: {value!r}")

    if value.startswith("file:"):
        value = unquote(urlparse(value).path)

    name = PurePosixPath(value).name
    suffix = f".{RECORD_EXTENSION}"
    if name.endswith(suffix):
        name = name[: -len(suffix)]
    if not name:
        raise ValueError(f"Keymap reference has no name: {value!r}")
    return name


def encode_config(record: ConfigRecord, directory: Path) -> bytes:
    """Encode the sidecar record, writing references as file URLs inside ``directory``."""
    return _dump_plist(
        {
            "defaultKm": reference_for(record.default_keymap, directory),
            "keymapOrder": [reference_for(name, directory) for name in record.keymap_order],
        }
    )


def decode_config(data: bytes) -> ConfigRecord:
    """Decode the sidecar record.

    ``defaultKm`` is required; ``keymapOrder`` defaults to an empty list.

    Raises:
        RecordDecodeError: If the bytes are not a valid config record.
    """
    payload = _load_plist(data)
    try:
        if not isinstance(payload, Mapping):
            raise TypeError("config record must be a dictionary")
        order = payload.get("keymapOrder", [])
        if not isinstance(order, list):
            raise TypeError("keymapOrder must be an array")
        return ConfigRecord(
            default_keymap=reference_name(payload["defaultKm"]),
            keymap_order=[reference_name(item) for item in order],
        )
    except _DECODE_ERRORS as e:
        raise RecordDecodeError(f"Invalid config record: {e!r}") from e


# =============================================================================
# Legacy portable files
# =============================================================================

_LEGACY_BUTTON_FIELDS = 4
_LEGACY_MOUSE_AREA_FIELDS = 3
_LEGACY_JOYSTICK_FIELDS = 7


def _legacy_payload(data: bytes) -> Any:
    try:
        return plistlib.loads(data)
    except _DECODE_ERRORS:
        pass
    try:
        return json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise RecordDecodeError("Legacy keymap is neither a property list nor JSON") from e


def decode_legacy_keymap(data: bytes) -> KeymapRecord:
    """Convert a legacy flat-layout keymap into a current KeymapRecord.

    Legacy files carry ``bundleIdentifier`` and a ``layout`` array where each
    control is a flat list of numbers::

        [keyCode, xCoord, yCoord, size]            -> button
        [xCoord, yCoord, size]                     -> mouse area
        [up, right, down, left, xCoord, yCoord, size] -> joystick

    Raises:
        RecordDecodeError: If the bytes are not a legacy keymap either.
    """
    payload = _legacy_payload(data)
    try:
        if not isinstance(payload, Mapping):
            raise TypeError("legacy keymap must be a dictionary")
        bundle_identifier = payload["bundleIdentifier"]
        if not isinstance(bundle_identifier, str):
            raise TypeError("bundleIdentifier must be a string")
        layout = payload["layout"]
        if not isinstance(layout, list):
            raise TypeError("layout must be an array")

        record = KeymapRecord.empty(bundle_identifier)
        for control in layout:
            if not isinstance(control, list):
                raise TypeError(f"layout entry must be an array: {control!r}")
            values = [float(v) for v in control]
            if len(values) == _LEGACY_BUTTON_FIELDS:
                key_code, x, y, size = values
                record.buttons.append(
                    ButtonBinding(parse_key_code(key_code), "", Transform(size, x, y))
                )
            elif len(values) == _LEGACY_MOUSE_AREA_FIELDS:
                x, y, size = values
                record.mouse_areas.append(MouseAreaBinding("", Transform(size, x, y)))
            elif len(values) == _LEGACY_JOYSTICK_FIELDS:
                up, right, down, left, x, y, size = values
                record.joysticks.append(
                    JoystickBinding(
                        parse_key_code(up),
                        parse_key_code(right),
                        parse_key_code(down),
                        parse_key_code(left),
                        "",
                        Transform(size, x, y),
                    )
                )
            else:
                raise ValueError(f"Unrecognized legacy control with {len(values)} fields")
        return record
    except _DECODE_ERRORS as e:
        raise RecordDecodeError(f"Invalid legacy keymap: {e!r}") from e
