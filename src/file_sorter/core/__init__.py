"""Core file sorter modules."""

from .classifier import ClassificationMatch, ExtensionClassifier
from .mover import FileMover, MoveRecord
from .organizer import Disposition, FileSorter
from .walker import VisitResult, walk

__all__ = [
    'ExtensionClassifier',
    'ClassificationMatch',
    'FileMover',
    'MoveRecord',
    'FileSorter',
    'Disposition',
    'VisitResult',
    'walk',
]
