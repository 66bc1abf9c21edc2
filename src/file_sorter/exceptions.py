"""Custom exceptions for file sorter."""

from pathlib import Path
from typing import Optional


class FileSorterError(Exception):
    """Base exception for file sorter errors."""
    pass


class ConfigurationError(FileSorterError):
    """Raised when a required configuration value is missing or invalid."""
    pass


class TraversalError(FileSorterError):
    """Raised when a directory under the source tree cannot be listed."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class MoveError(FileSorterError):
    """Raised when relocating a file or directory fails."""

    def __init__(self, message: str, source: Optional[Path] = None,
                 destination: Optional[Path] = None):
        super().__init__(message)
        self.source = source
        self.destination = destination


class EntryNotFoundError(FileSorterError):
    """Raised when an entry vanished before it could be relocated.

    Not fatal: the sorter logs it and carries on with the next entry.
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path
