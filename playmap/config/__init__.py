"""Configuration for playmap."""

from .settings import (
    get_env_info,
    get_env_var,
    get_keymap_root,
    validate_all_env_vars,
    validate_env_var,
)

__all__ = [
    "get_env_info",
    "get_env_var",
    "get_keymap_root",
    "validate_all_env_vars",
    "validate_env_var",
]
