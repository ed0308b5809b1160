"""Custom exception hierarchy for playmap.

Exceptions raised by the storage layer are caught by the repository at the
boundaries where the error policy says to self-heal or to report a boolean
failure. They only escape to callers from the low-level modules.

Exception Hierarchy:
    PlaymapError (base)
    ├── RecordDecodeError - malformed or unreadable record bytes
    ├── RecordEncodeError - record holds values the format cannot store
    ├── FileOperationError - File I/O
    │   ├── FileReadError
    │   └── FileWriteError
    ├── KeymapNotFoundError - name not tracked in the order list
    └── InvalidKeymapNameError - name cannot be stored inside the app folder

Usage:
    from playmap.exceptions import RecordDecodeError

    try:
        record = decode_keymap(data)
    except RecordDecodeError as e:
        logger.warning("Corrupted keymap: %s", e)
"""

from typing import Any, Optional


class PlaymapError(Exception):
    """Base exception for all playmap errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., names, paths)
    """

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class RecordDecodeError(PlaymapError):
    """Record bytes could not be decoded into a keymap or config record."""

    def __init__(
        self,
        message: str = "Failed to decode record",
        *,
        path: Optional[str] = None,
        **context: Any,
    ) -> None:
        if path:
            context["path"] = path
        super().__init__(message, **context)


class RecordEncodeError(PlaymapError):
    """A record could not be encoded, e.g. an integer outside the 64-bit range."""

    def __init__(self, message: str = "Failed to encode record", **context: Any) -> None:
        super().__init__(message, **context)


# =============================================================================
# File Operation Errors
# =============================================================================


class FileOperationError(PlaymapError):
    """Base exception for file operations."""

    def __init__(
        self,
        message: str = "File operation failed",
        *,
        path: Optional[str] = None,
        **context: Any,
    ) -> None:
        if path:
            context["path"] = path
        super().__init__(message, **context)


class FileReadError(FileOperationError):
    """Failed to read a file."""

    def __init__(self, message: str = "Failed to read file", **context: Any) -> None:
        super().__init__(message, **context)


class FileWriteError(FileOperationError):
    """Failed to write to a file."""

    def __init__(self, message: str = "Failed to write file", **context: Any) -> None:
        super().__init__(message, **context)


class KeymapNotFoundError(PlaymapError):
    """A keymap name is not present in the order list."""

    def __init__(
        self,
        name: str,
        *,
        bundle_identifier: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.name = name
        if bundle_identifier:
            context["bundle_identifier"] = bundle_identifier
        super().__init__(f"Keymap not found: {name}", **context)



class InvalidKeymapNameError(PlaymapError):
    """A keymap name would resolve outside the application's folder or onto the sidecar."""

    def __init__(self, name: str, **context: Any) -> None:
        self.name = name
        super().__init__(f"Invalid keymap name: {name!r}", **context)
