"""Tests for the file sorter orchestration."""

import pytest
from pathlib import Path

from file_sorter.core.extensions import CATEGORY_ORDER
from file_sorter.core.mover import FileMover
from file_sorter.core.organizer import Disposition, FileSorter
from file_sorter.core.walker import TraversalEntry, VisitResult
from file_sorter.exceptions import MoveError, TraversalError
from file_sorter.models.config import SorterConfig, build_rules

DEST_NAMES = {
    "image": "Images",
    "video": "Videos",
    "music": "Music",
    "documents": "Documents",
    "presentations": "Presentations",
    "tables": "Tables",
    "text": "Text",
    "archive": "Archives",
    "executable": "Programs",
}


def make_config(source: Path, dest_root: Path, **kwargs) -> SorterConfig:
    """Build a config with every destination under dest_root."""
    return SorterConfig(
        source_directory=source,
        rules=build_rules({name: dest_root / DEST_NAMES[name] for name in CATEGORY_ORDER}),
        other_directory=dest_root / "Other",
        script_name=kwargs.pop("script_name", "run.sh"),
        **kwargs
    )


@pytest.fixture
def source(tmp_path):
    source = tmp_path / "Downloads"
    source.mkdir()
    return source


@pytest.fixture
def dest_root(tmp_path):
    return tmp_path / "Sorted"


@pytest.fixture
def sorter(source, dest_root):
    return FileSorter(make_config(source, dest_root))


class TestFileSorter:
    """Test the sorting run end to end."""

    def test_mixed_directory(self, source, dest_root, sorter):
        """Files go to their categories, the rest to Other, script stays."""
        (source / "photo.jpg").write_bytes(b"jpg")
        (source / "clip.mp4").write_bytes(b"mp4")
        (source / "notes.txt").write_text("notes")
        (source / "weird.xyz").write_text("?")
        (source / "run.sh").write_text("#!/bin/sh")
        (source / "Projects" / "src").mkdir(parents=True)
        (source / "Projects" / "src" / "main.c").write_text("int main;")
        (source / "Projects" / "photo.jpg").write_bytes(b"nested")

        results = sorter.run()

        assert (dest_root / "Images" / "photo.jpg").read_bytes() == b"jpg"
        assert (dest_root / "Videos" / "clip.mp4").read_bytes() == b"mp4"
        assert (dest_root / "Text" / "notes.txt").read_text() == "notes"
        assert (dest_root / "Other" / "weird.xyz").read_text() == "?"
        assert (dest_root / "Other" / "Projects" / "src" / "main.c").read_text() == "int main;"
        assert (dest_root / "Other" / "Projects" / "photo.jpg").read_bytes() == b"nested"
        assert sorted(p.name for p in source.iterdir()) == ["run.sh"]

        assert results["moved"] == 5
        assert results["skipped"] == 1
        assert results["by_category"] == {"image": 1, "video": 1, "text": 1, "other": 2}
        assert results["files"] == 4
        assert results["directories"] == 1

    def test_files_inside_directories_are_not_classified(self, source, dest_root, sorter):
        """Nested files travel with their directory."""
        (source / "Album").mkdir()
        (source / "Album" / "song.mp3").write_bytes(b"mp3")

        sorter.run()

        assert not (dest_root / "Music").exists()
        assert (dest_root / "Other" / "Album" / "song.mp3").exists()

    def test_category_collision(self, source, dest_root, sorter):
        (dest_root / "Text").mkdir(parents=True)
        (dest_root / "Text" / "a.txt").write_text("old")
        (source / "a.txt").write_text("new")

        sorter.run()

        assert (dest_root / "Text" / "a.txt").read_text() == "old"
        assert (dest_root / "Text" / "a - copy.txt").read_text() == "new"

    def test_directory_collision_goes_to_copy_directory(self, source, dest_root, sorter):
        (dest_root / "Other" / "Projects").mkdir(parents=True)
        (dest_root / "Other" / "Projects" / "existing.md").write_text("keep")
        (source / "Projects").mkdir()
        (source / "Projects" / "new.md").write_text("new")

        sorter.run()

        assert (dest_root / "Other" / "Projects - copy" / "new.md").read_text() == "new"
        assert not (dest_root / "Other" / "Projects" / "new.md").exists()
        assert (dest_root / "Other" / "Projects" / "existing.md").read_text() == "keep"
        assert not (source / "Projects").exists()

    def test_excluded_literal_subtree_preserved(self, source, dest_root, sorter):
        telegram = source / "Telegram Desktop"
        (telegram / "chats").mkdir(parents=True)
        (telegram / "photo.jpg").write_bytes(b"keep")
        (telegram / "chats" / "log.txt").write_text("log")

        results = sorter.run()

        assert (telegram / "photo.jpg").read_bytes() == b"keep"
        assert (telegram / "chats" / "log.txt").read_text() == "log"
        assert not (dest_root / "Images").exists()
        assert results["skipped"] == 1

    def test_destinations_inside_source_are_not_resorted(self, source):
        """Category folders living in the source are excluded by name."""
        sorter = FileSorter(make_config(source, source))
        (source / "Images").mkdir()
        (source / "Images" / "old.jpg").write_bytes(b"old")
        (source / "Other").mkdir()
        (source / "Other" / "junk.bin").write_bytes(b"junk")
        (source / "new.jpg").write_bytes(b"new")

        sorter.run()

        assert sorted(p.name for p in (source / "Images").iterdir()) == ["new.jpg", "old.jpg"]
        assert sorted(p.name for p in (source / "Other").iterdir()) == ["junk.bin"]
        assert sorted(p.name for p in source.iterdir()) == ["Images", "Other"]

    def test_custom_excluded_names(self, source, dest_root):
        sorter = FileSorter(make_config(source, dest_root, excluded_names=("Keep",)))
        (source / "Keep").mkdir()
        (source / "Telegram Desktop").mkdir()

        sorter.run()

        assert (source / "Keep").is_dir()
        assert (dest_root / "Other" / "Telegram Desktop").is_dir()

    def test_excluded_file_name_left_in_place(self, source, dest_root, sorter):
        """A file named like a destination folder is left alone too."""
        (source / "Documents").write_text("not a folder")

        sorter.run()

        assert (source / "Documents").read_text() == "not a folder"

    def test_script_directory_not_descended(self, source, dest_root, sorter):
        (source / "run.sh").mkdir()
        (source / "run.sh" / "inner.txt").write_text("x")

        sorter.run()

        assert (source / "run.sh" / "inner.txt").exists()
        assert not (dest_root / "Text").exists()

    def test_empty_source(self, sorter):
        results = sorter.run()

        assert results["processed"] == 0
        assert results["moved"] == 0

    def test_missing_source_raises(self, tmp_path, dest_root):
        sorter = FileSorter(make_config(tmp_path / "missing", dest_root))

        with pytest.raises(TraversalError):
            sorter.run()

    def test_first_error_aborts_run(self, source, dest_root, sorter):
        """Entries before the failure stay moved, later ones are untouched."""
        dest_root.mkdir()
        # A regular file where the image folder should be
        (dest_root / "Images").write_text("blocker")
        (source / "a.txt").write_text("a")
        (source / "b.jpg").write_bytes(b"b")
        (source / "c.txt").write_text("c")

        with pytest.raises(MoveError):
            sorter.run()

        assert (dest_root / "Text" / "a.txt").exists()
        assert (source / "b.jpg").exists()
        assert (source / "c.txt").exists()

    def test_rerun_after_partial_run_uses_copy_names(self, source, dest_root, sorter):
        (source / "a.txt").write_text("first")
        sorter.run()
        (source / "a.txt").write_text("second")

        FileSorter(sorter.config).run()

        assert (dest_root / "Text" / "a.txt").read_text() == "first"
        assert (dest_root / "Text" / "a - copy.txt").read_text() == "second"

    def test_third_run_stops_instead_of_overwriting(self, source, dest_root, sorter):
        for content in ("first", "second"):
            (source / "a.txt").write_text(content)
            FileSorter(sorter.config).run()
        (source / "a.txt").write_text("third")

        with pytest.raises(MoveError, match="already exist"):
            FileSorter(sorter.config).run()

        assert (dest_root / "Text" / "a.txt").read_text() == "first"
        assert (dest_root / "Text" / "a - copy.txt").read_text() == "second"
        assert (source / "a.txt").read_text() == "third"

    def test_summary_counts_only_current_run(self, source, dest_root):
        mover = FileMover()
        config = make_config(source, dest_root)
        (source / "a.txt").write_text("a")
        FileSorter(config, file_mover=mover).run()
        (source / "b.txt").write_text("b")

        results = FileSorter(config, file_mover=mover).run()

        assert results["files"] == 1
        assert results["directories"] == 0


class TestDispose:
    """Test per-entry disposition."""

    def test_vanished_entry_is_not_an_error(self, source, sorter):
        entry = TraversalEntry(path=source / "ghost.xyz", is_dir=False)

        result = sorter.visit(entry)

        assert result is VisitResult.CONTINUE
        assert sorter.results["vanished"] == 1
        assert sorter.results["moved"] == 0

    def test_vanished_directory_skips_subtree(self, source, sorter):
        entry = TraversalEntry(path=source / "ghost", is_dir=True)

        assert sorter.dispose(entry) is Disposition.VANISHED
        assert sorter.visit(entry) is VisitResult.SKIP_SUBTREE

    def test_dispositions(self, source, sorter):
        (source / "run.sh").write_text("")
        (source / "song.mp3").write_bytes(b"")
        (source / "misc.bin").write_bytes(b"")

        assert sorter.dispose(TraversalEntry(source / "run.sh", False)) is Disposition.SCRIPT
        assert sorter.dispose(TraversalEntry(source / "Telegram Desktop", True)) is Disposition.EXCLUDED
        assert sorter.dispose(TraversalEntry(source / "song.mp3", False)) is Disposition.CATEGORY
        assert sorter.dispose(TraversalEntry(source / "misc.bin", False)) is Disposition.OTHER
