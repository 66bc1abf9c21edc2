"""File Sorter

Sort the entries of a directory into category folders by filename extension.
"""

__version__ = "0.1.0"

from .core.classifier import ClassificationMatch, ExtensionClassifier
from .core.organizer import Disposition, FileSorter
from .exceptions import (
    ConfigurationError,
    EntryNotFoundError,
    FileSorterError,
    MoveError,
    TraversalError,
)
from .models.config import CategoryRule, SorterConfig, load_config, load_config_from_env

__all__ = [
    # Core components
    "ExtensionClassifier",
    "ClassificationMatch",
    "FileSorter",
    "Disposition",

    # Configuration
    "CategoryRule",
    "SorterConfig",
    "load_config",
    "load_config_from_env",

    # Errors
    "FileSorterError",
    "ConfigurationError",
    "TraversalError",
    "MoveError",
    "EntryNotFoundError",
]
