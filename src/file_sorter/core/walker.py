"""Top-down directory traversal driven by a visitor."""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, List

from ..exceptions import TraversalError

logger = logging.getLogger(__name__)


class VisitResult(Enum):
    """What the walker should do after visiting an entry.

    Aborting is not a result: the visitor raises instead.
    """
    CONTINUE = "continue"
    SKIP_SUBTREE = "skip_subtree"


@dataclass(frozen=True)
class TraversalEntry:
    """A path seen during the walk."""
    path: Path
    is_dir: bool
    depth: int = 0

    @property
    def name(self) -> str:
        return self.path.name


Visitor = Callable[[TraversalEntry], VisitResult]


def list_entries(directory: Path, depth: int = 0) -> List[TraversalEntry]:
    """List directory in name order, raising TraversalError on failure."""
    try:
        with os.scandir(directory) as it:
            entries = [
                TraversalEntry(path=Path(e.path), is_dir=e.is_dir(), depth=depth)
                for e in it
            ]
    except OSError as e:
        raise TraversalError(f"Failed to list {directory}: {e}", path=directory) from e

    entries.sort(key=lambda entry: entry.name)
    return entries


def _is_dir(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError as e:
        raise TraversalError(f"Failed to check {path}: {e}", path=path) from e


def walk(root: Path, visitor: Visitor) -> int:
    """Visit every entry below root once, parents before children.

    The root itself is not visited. A directory is descended into only when
    its visit returns CONTINUE and it still exists afterwards. Exceptions
    raised by the visitor propagate and end the walk.

    The sorter skips every subtree, so it only sees the top level; descent
    is left to the visitor so that choice stays in one place.

    Returns the number of entries visited.
    """
    if not _is_dir(root):
        raise TraversalError(f"Source directory does not exist: {root}", path=root)

    visited = 0
    pending = [list_entries(root, depth=0)]

    while pending:
        entries = pending[-1]
        if not entries:
            pending.pop()
            continue

        entry = entries.pop(0)
        visited += 1
        logger.debug(f"Visiting {entry.path}")

        result = visitor(entry)
        if result is VisitResult.CONTINUE and entry.is_dir and _is_dir(entry.path):
            pending.append(list_entries(entry.path, depth=entry.depth + 1))

    return visited
