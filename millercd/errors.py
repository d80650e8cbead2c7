"""Error taxonomy shared by the navigator core and its process boundary.

Filesystem errors are recovered close to where they occur. Selection errors
abort a single transition. Config and log-setup errors are startup-only.
"""

from __future__ import annotations


class MillercdError(Exception):
    """Base class for errors raised by millercd."""


class FileSystemError(MillercdError):
    """A directory could not be opened or a path could not be resolved."""

    def __init__(self, message: str, path: object = None) -> None:
        super().__init__(message)
        self.path = path


class InvalidSelectionError(MillercdError):
    """A transition needed a selected entry but the cursor is unset or out of range."""

    def __init__(self, index: int | None) -> None:
        super().__init__(f"invalid selection: {index!r}")
        self.index = index


class ConfigError(MillercdError):
    """Configuration values could not be parsed."""


class LogSetupError(MillercdError):
    """The session log file could not be created."""
