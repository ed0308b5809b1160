"""Logging utilities for playmap.

Standard Logger Initialization Pattern
--------------------------------------
Modules use the standard Python pattern:

    import logging
    logger = logging.getLogger(__name__)

Handlers are attached once, by the CLI, through ``setup_cli_logging``.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from playmap.config.constants import (
    LOG_BACKUP_COUNT,
    LOG_FILE_NAME,
    MAX_LOG_BYTES,
    PLAYMAP_CONFIG_DIR,
)
from playmap.config.settings import get_env_var

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _file_handler(log_dir: Path) -> Optional[logging.Handler]:
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            log_dir / LOG_FILE_NAME, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUP_COUNT
        )
    except OSError as e:
        print(f"Warning: playmap file logging disabled: {e}", file=sys.stderr)
        return None
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
    return handler


def _log_level() -> int:
    name = (get_env_var("PLAYMAP_LOG_LEVEL", validate=False) or "INFO").upper()
    level = getattr(logging, name, None)
    return level if isinstance(level, int) else logging.INFO


def setup_cli_logging(verbose: bool = False, log_dir: Optional[Path] = None) -> logging.Logger:
    """Configure the ``playmap`` logger for a CLI run.

    Everything goes to the rotating log file; with ``verbose`` the same
    records are echoed to stderr at DEBUG level. Warnings always reach
    stderr so self-healing repairs are visible.
    """
    logger = logging.getLogger("playmap")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    file_handler = _file_handler(log_dir or PLAYMAP_CONFIG_DIR)
    if file_handler is not None:
        file_handler.setLevel(_log_level())
        logger.addHandler(file_handler)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    stream_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(stream_handler)

    logger.setLevel(logging.DEBUG if verbose else min(_log_level(), logging.INFO))
    logger.propagate = False
    return logger
