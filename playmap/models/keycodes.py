"""Display names for key codes.

Key codes are HID keyboard usage IDs; mouse buttons use negative codes.
Only used to derive a button label when a binding has none.
"""

from __future__ import annotations

from playmap.config.constants import DEFAULT_BUTTON_LABEL

KEY_CODE_NAMES: dict[int, str] = {
    # mouse
    -1: "LMB",
    -2: "RMB",
    -3: "MMB",
    # control keys
    40: "Enter",
    41: "Esc",
    42: "Del",
    43: "Tab",
    44: "Spc",
    45: "-",
    46: "=",
    47: "[",
    48: "]",
    49: "\\",
    51: ";",
    52: "'",
    53: "`",
    54: ",",
    55: ".",
    56: "/",
    57: "Caps",
    # arrows
    79: "Right",
    80: "Left",
    81: "Down",
    82: "Up",
    # modifiers
    224: "Lctrl",
    225: "Lshft",
    226: "Lopt",
    227: "LCmd",
    228: "Rctrl",
    229: "Rshft",
    230: "Ropt",
    231: "RCmd",
}

# letters A-Z occupy 4..29
KEY_CODE_NAMES.update({4 + offset: chr(ord("A") + offset) for offset in range(26)})
# digits 1-9 then 0 occupy 30..39
KEY_CODE_NAMES.update({30 + offset: str((offset + 1) % 10) for offset in range(10)})
# function keys F1-F12 occupy 58..69
KEY_CODE_NAMES.update({58 + offset: f"F{offset + 1}" for offset in range(12)})


def key_name_for(key_code: int) -> str:
    """Return the display name for a key code, or the generic button label."""
    return KEY_CODE_NAMES.get(key_code, DEFAULT_BUTTON_LABEL)
