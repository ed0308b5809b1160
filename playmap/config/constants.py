"""
Centralized constants for playmap.

File layout, wire-format identifiers and retention policies live here so the
storage modules and the CLI agree on them.
"""

from pathlib import Path

# =============================================================================
# LOCATIONS
# =============================================================================

PLAYMAP_CONFIG_DIR = Path.home() / ".config" / "playmap"
KEYMAPPING_DIR_NAME = "Keymapping"
TRASH_DIR_NAME = ".Trash"

# =============================================================================
# RECORD FORMAT
# =============================================================================

RECORD_EXTENSION = "plist"
CONFIG_RECORD_STEM = ".config"
KEYMAP_SCHEMA_VERSION = "2.0.0"

# Name of the keymap created when an owning directory holds no records
DEFAULT_KEYMAP_NAME = "default"

# Portable export format
PORTABLE_EXTENSION = "playmap"

# Default labels applied when a binding's keyName is empty or missing
DEFAULT_BUTTON_LABEL = "Btn"
DEFAULT_JOYSTICK_LABEL = "Keyboard"
DEFAULT_MOUSE_AREA_LABEL = "Mouse"

# =============================================================================
# TRASH
# =============================================================================

TRASH_TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S-%f"
TRASH_NAME_SEPARATOR = "~"

# =============================================================================
# LOGGING
# =============================================================================

LOG_FILE_NAME = "playmap.log"
MAX_LOG_BYTES = 5 * 1024 * 1024  # 5MB
LOG_BACKUP_COUNT = 2

# =============================================================================
# ENVIRONMENT VARIABLES
# =============================================================================

ENV_VAR_DEFINITIONS = {
    "PLAYMAP_KEYMAP_DIR": {
        "description": "Root directory holding one keymap folder per application",
        "default": None,
        "valid_values": None,
    },
    "PLAYMAP_APP": {
        "description": "Bundle identifier used when --app is not given",
        "default": None,
        "valid_values": None,
    },
    "PLAYMAP_LOG_LEVEL": {
        "description": "Log level for the playmap log file",
        "default": "INFO",
        "valid_values": ["DEBUG", "INFO", "WARNING", "ERROR"],
    },
}
