"""Main orchestration logic for sorting a directory."""

import logging
from enum import Enum
from typing import Any, Dict, Optional, Set

from ..exceptions import EntryNotFoundError
from ..models.config import SorterConfig
from .classifier import ExtensionClassifier
from .extensions import OTHER_CATEGORY
from .mover import FileMover
from .walker import TraversalEntry, VisitResult, walk

logger = logging.getLogger(__name__)


class Disposition(Enum):
    """What happened to a visited entry."""
    SCRIPT = "script"
    EXCLUDED = "excluded"
    CATEGORY = "category"
    OTHER = "other"
    VANISHED = "vanished"


class FileSorter:
    """Relocate every entry of the source directory to its destination.

    Per entry, in priority order: the script is left alone, excluded names
    are skipped with their subtree, directories go to the catch-all
    directory whole, and files go to their matched category or to the
    catch-all directory.
    """

    def __init__(self, config: SorterConfig, file_mover: Optional[FileMover] = None):
        self.config = config
        self.classifier = ExtensionClassifier(config.rules)
        self.file_mover = file_mover or FileMover()
        self.exclusions: Set[str] = config.exclusion_names()
        self.results: Dict[str, Any] = self._empty_results()

    @staticmethod
    def _empty_results() -> Dict[str, Any]:
        return {
            'processed': 0,
            'moved': 0,
            'skipped': 0,
            'vanished': 0,
            'files': 0,
            'directories': 0,
            'by_category': {},
        }

    def run(self) -> Dict[str, Any]:
        """Walk the source directory once and relocate its entries.

        The first fatal error propagates; entries moved before it stay moved.
        """
        self.results = self._empty_results()
        self.file_mover.operations.clear()
        logger.info(f"Sorting {self.config.source_directory}")

        walk(self.config.source_directory, self.visit)

        summary = self.file_mover.get_operation_summary()
        self.results['files'] = summary['total_files']
        self.results['directories'] = summary['total_directories']
        logger.info(
            f"Processed {self.results['processed']} entries, "
            f"moved {self.results['moved']}"
        )
        return self.results

    def visit(self, entry: TraversalEntry) -> VisitResult:
        """Dispose of one entry and tell the walker whether to descend."""
        disposition = self.dispose(entry)
        self.results['processed'] += 1

        if disposition in (Disposition.SCRIPT, Disposition.EXCLUDED):
            self.results['skipped'] += 1
        elif disposition is Disposition.VANISHED:
            self.results['vanished'] += 1
        else:
            self.results['moved'] += 1

        # Every directory is either left whole or relocated whole
        if entry.is_dir:
            return VisitResult.SKIP_SUBTREE
        return VisitResult.CONTINUE

    def dispose(self, entry: TraversalEntry) -> Disposition:
        """Apply the disposition rules to a single entry."""
        name = entry.name

        if name == self.config.script_name:
            logger.debug(f"Leaving script in place: {entry.path}")
            return Disposition.SCRIPT

        if name in self.exclusions:
            logger.debug(f"Skipping excluded entry: {entry.path}")
            return Disposition.EXCLUDED

        if entry.is_dir:
            return self._move_to_other(entry)

        match = self.classifier.classify(name)
        if match is None:
            return self._move_to_other(entry)

        self.file_mover.move_to_category(
            entry.path, match.category, match.rule.destination, match.extension
        )
        self._count(match.category)
        return Disposition.CATEGORY

    def _move_to_other(self, entry: TraversalEntry) -> Disposition:
        try:
            self.file_mover.move_to_other(entry.path, self.config.other_directory)
        except EntryNotFoundError as e:
            logger.warning(str(e))
            return Disposition.VANISHED

        self._count(OTHER_CATEGORY)
        return Disposition.OTHER

    def _count(self, category: str) -> None:
        by_category = self.results['by_category']
        by_category[category] = by_category.get(category, 0) + 1
