"""Configuration utilities for playmap."""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .constants import ENV_VAR_DEFINITIONS, KEYMAPPING_DIR_NAME, PLAYMAP_CONFIG_DIR

logger = logging.getLogger(__name__)


def get_keymap_root() -> Path:
    """Get the keymapping root, respecting the PLAYMAP_KEYMAP_DIR environment variable.

    Tests point PLAYMAP_KEYMAP_DIR at a temp directory so they never touch
    the real keymaps. Directory creation failures are logged, not raised;
    the per-application directory creation reports them again later.
    """
    override = os.environ.get("PLAYMAP_KEYMAP_DIR")
    root = Path(override).expanduser() if override else PLAYMAP_CONFIG_DIR / KEYMAPPING_DIR_NAME

    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Failed to create keymapping directory {root}: {e}")
    return root


def validate_env_var(name: str, value: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Validate a single environment variable value.

    Args:
        name: The environment variable name.
        value: The current value (or None if not set).

    Returns:
        Tuple of (is_valid, error_message).
    """
    if name not in ENV_VAR_DEFINITIONS:
        return True, None

    valid_values = ENV_VAR_DEFINITIONS[name].get("valid_values")

    if value is None or valid_values is None:
        return True, None

    if value.lower() not in [v.lower() for v in valid_values]:
        return False, f"Invalid value '{value}' for {name}. Valid values: {valid_values}"

    return True, None


def validate_all_env_vars() -> List[str]:
    """Validate all playmap environment variables.

    Returns:
        List of error messages (empty if all valid).
    """
    errors = []
    for name in ENV_VAR_DEFINITIONS:
        is_valid, error = validate_env_var(name, os.environ.get(name))
        if not is_valid:
            errors.append(error)
    return errors


def get_env_var(name: str, validate: bool = True) -> Optional[str]:
    """Get an environment variable with optional validation.

    Raises:
        ValueError: If validate=True and the value is invalid.
    """
    value = os.environ.get(name)

    if validate and value is not None:
        is_valid, error = validate_env_var(name, value)
        if not is_valid:
            raise ValueError(error)

    if value is None and name in ENV_VAR_DEFINITIONS:
        return ENV_VAR_DEFINITIONS[name].get("default")

    return value


def get_env_info() -> Dict[str, Dict]:
    """Get information about all playmap environment variables."""
    info = {}
    for name, definition in ENV_VAR_DEFINITIONS.items():
        value = os.environ.get(name)
        is_valid, _ = validate_env_var(name, value)
        info[name] = {
            "description": definition.get("description", ""),
            "value": value,
            "is_set": value is not None,
            "valid": is_valid,
            "default": definition.get("default"),
        }
    return info
