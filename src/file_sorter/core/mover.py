"""File operations for relocating entries into category directories."""

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from ..exceptions import EntryNotFoundError, MoveError

logger = logging.getLogger(__name__)

COPY_MARKER = " - copy"


def literal_extension(name: str) -> str:
    """Return the text from the last '.' of name, or '' if there is none.

    Leading-dot names count: ".bashrc" has extension ".bashrc".
    """
    index = name.rfind(".")
    if index < 0:
        return ""
    return name[index:]


def copy_name(name: str, extension: str) -> str:
    """Insert the copy marker before extension, which must end name."""
    if extension and name.endswith(extension):
        return f"{name[:-len(extension)]}{COPY_MARKER}{extension}"
    return f"{name}{COPY_MARKER}"


@dataclass
class MoveRecord:
    """One completed relocation."""
    source: Path
    destination: Path
    category: str
    is_directory: bool = False


class FileMover:
    """Move files and directories, renaming on collision.

    Every completed relocation is appended to ``operations``. There is no
    rollback; a failure leaves earlier moves in place.
    """

    def __init__(self):
        self.operations: List[MoveRecord] = []

    def move_to_category(self, source: Path, category: str, destination_dir: Path,
                         extension: str) -> Path:
        """Move a file into destination_dir.

        On a name collision the matched extension is stripped and re-added
        after the copy marker. The move is a single rename.
        """
        name = source.name
        target = self._resolve_duplicate(
            source, destination_dir / name, destination_dir / copy_name(name, extension)
        )

        self._ensure_directory(destination_dir, source)
        self._rename(source, target)

        self._record(source, target, category)
        logger.info(f"File moved to {destination_dir}: {name}")
        return target

    def move_to_other(self, source: Path, destination_dir: Path, category: str = "other") -> Path:
        """Move a file or directory into the catch-all directory.

        Directories are copied recursively and then removed. Raises
        EntryNotFoundError if source has already gone.
        """
        if not self._exists(source):
            raise EntryNotFoundError(f"Not exist: {source}", path=source)

        name = source.name
        is_directory = self._is_dir(source)
        if is_directory:
            alternate = destination_dir / f"{name}{COPY_MARKER}"
        else:
            alternate = destination_dir / copy_name(name, literal_extension(name))
        target = self._resolve_duplicate(source, destination_dir / name, alternate)

        if is_directory:
            self._ensure_directory(target, source)
            self.copy_tree(source, target)
            self._remove_tree(source)
            self._record(source, target, category, is_directory=True)
            logger.info(f"Dir moved to {destination_dir}: {name}")
            return target

        self._ensure_directory(destination_dir, source)
        self._rename(source, target)
        self._record(source, target, category)
        logger.info(f"File moved to {destination_dir}: {name}")
        return target

    def copy_tree(self, source: Path, destination: Path) -> None:
        """Copy every file and subdirectory of source into destination.

        Existing directories at the destination are merged into; existing
        files are overwritten. Only file contents are copied.
        """
        self._ensure_directory(destination, source)

        try:
            entries = sorted(os.scandir(source), key=lambda e: e.name)
        except OSError as e:
            raise MoveError(f"Failed to list {source}: {e}", source=source) from e

        for entry in entries:
            src_path = Path(entry.path)
            dst_path = destination / entry.name
            try:
                is_dir = entry.is_dir()
            except OSError as e:
                raise MoveError(f"Failed to inspect {src_path}: {e}", source=src_path) from e

            if is_dir:
                self.copy_tree(src_path, dst_path)
            else:
                try:
                    shutil.copyfile(src_path, dst_path)
                except OSError as e:
                    raise MoveError(
                        f"Failed to copy {src_path} to {dst_path}: {e}",
                        source=src_path, destination=dst_path
                    ) from e

    def get_operation_summary(self) -> Dict:
        """Get summary of performed operations."""
        summary = {
            'total_files': 0,
            'total_directories': 0,
        }

        for op in self.operations:
            if op.is_directory:
                summary['total_directories'] += 1
            else:
                summary['total_files'] += 1

        return summary

    def _resolve_duplicate(self, source: Path, target: Path, alternate: Path) -> Path:
        """Return target, or alternate when target is taken.

        Only one copy name is tried; when it is taken too the move fails
        rather than replace an earlier file.
        """
        if not self._exists(target, source):
            return target
        if self._exists(alternate, source):
            raise MoveError(
                f"Cannot move {source}: both {target} and {alternate} already exist",
                source=source, destination=alternate
            )
        return alternate

    def _record(self, source: Path, destination: Path, category: str,
                is_directory: bool = False) -> None:
        self.operations.append(MoveRecord(
            source=source,
            destination=destination,
            category=category,
            is_directory=is_directory,
        ))

    @staticmethod
    def _exists(path: Path, source: Optional[Path] = None) -> bool:
        try:
            return path.exists()
        except OSError as e:
            if source is None:
                raise MoveError(f"Failed to check {path}: {e}", source=path) from e
            raise MoveError(
                f"Failed to check {path}: {e}",
                source=source, destination=path
            ) from e

    @staticmethod
    def _is_dir(path: Path) -> bool:
        try:
            return path.is_dir()
        except OSError as e:
            raise MoveError(f"Failed to check {path}: {e}", source=path) from e

    @staticmethod
    def _ensure_directory(path: Path, source: Optional[Path] = None) -> None:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise MoveError(
                f"Failed to create directory {path}: {e}",
                source=source, destination=path
            ) from e

    @staticmethod
    def _rename(source: Path, target: Path) -> None:
        try:
            source.rename(target)
        except OSError as e:
            raise MoveError(
                f"Failed to move {source} to {target}: {e}",
                source=source, destination=target
            ) from e

    @staticmethod
    def _remove_tree(path: Path) -> None:
        try:
            shutil.rmtree(path)
        except OSError as e:
            raise MoveError(f"Failed to remove {path}: {e}", source=path) from e
