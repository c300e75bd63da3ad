"""Tests for outline_engine.paths module."""
import pytest

from outline_engine.paths import (
    UniquePathAllocator,
    archive_folder_destination,
    split_known_extension,
    unique_path,
)


def _exists_in(*paths: str):
    taken = set(paths)
    return lambda p: p in taken


class TestSplitKnownExtension:
    def test_markdown(self) -> None:
        assert split_known_extension("E/Archive/Notes.md") == ("E/Archive/Notes", ".md")

    def test_folder(self) -> None:
        assert split_known_extension("E/Archive/Alpha") == ("E/Archive/Alpha", "")

    def test_case_sensitive(self) -> None:
        assert split_known_extension("Notes.MD") == ("Notes.MD", "")

    def test_custom_extensions(self) -> None:
        assert split_known_extension("a.txt", (".md", ".txt")) == ("a", ".txt")


class TestUniquePath:
    def test_free_path_unchanged(self) -> None:
        assert unique_path("Notes.md", _exists_in()) == "Notes.md"

    def test_skips_taken_candidates(self) -> None:
        exists = _exists_in("Notes.md", "Notes (1).md")
        assert unique_path("Notes.md", exists) == "Notes (2).md"

    def test_folder_counter_on_full_name(self) -> None:
        exists = _exists_in("E/Archive/Projects/Alpha")
        assert unique_path("E/Archive/Projects/Alpha", exists) == "E/Archive/Projects/Alpha (1)"

    def test_never_returns_existing(self) -> None:
        for n in range(6):
            taken = {"Notes.md"} | {f"Notes ({i}).md" for i in range(1, n + 1)}
            result = unique_path("Notes.md", taken.__contains__)
            assert result not in taken
            assert result == f"Notes ({n + 1}).md"

    def test_candidates_checked_in_order(self) -> None:
        checked: list[str] = []

        def exists(p: str) -> bool:
            checked.append(p)
            return p != "Notes (3).md"

        assert unique_path("Notes.md", exists) == "Notes (3).md"
        assert checked == ["Notes.md", "Notes (1).md", "Notes (2).md", "Notes (3).md"]

    def test_exists_errors_propagate(self) -> None:
        def exists(p: str) -> bool:
            raise PermissionError(p)

        with pytest.raises(PermissionError):
            unique_path("Notes.md", exists)


class TestUniquePathAllocator:
    def test_distinct_within_batch(self) -> None:
        alloc = UniquePathAllocator(_exists_in("E/Archive/Notes.md"))
        first = alloc.allocate("E/Archive/Notes.md")
        second = alloc.allocate("E/Archive/Notes.md")
        third = alloc.allocate("E/Archive/Other.md")
        assert first == "E/Archive/Notes (1).md"
        assert second == "E/Archive/Notes (2).md"
        assert third == "E/Archive/Other.md"
        assert alloc.reserved == {first, second, third}


class TestArchiveFolderDestination:
    def test_projects(self) -> None:
        assert archive_folder_destination("D/Projects/Alpha") == "E/Archive/Projects/Alpha"

    def test_exams(self) -> None:
        assert archive_folder_destination("D/Exams/Bar/") == "E/Archive/Exams/Bar"

    def test_generic(self) -> None:
        assert archive_folder_destination("D/Misc") == "E/Archive/Misc"
        assert archive_folder_destination("D/Projects") == "E/Archive/Projects"

    def test_custom_root(self) -> None:
        assert archive_folder_destination("D/Projects/Alpha", "Old/") == "Old/Projects/Alpha"

    def test_top_level_category_is_generic(self) -> None:
        assert archive_folder_destination("Projects/Alpha") == "E/Archive/Alpha"
        assert archive_folder_destination("Exams/Bar", "Old") == "Old/Bar"

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError):
            archive_folder_destination("/")
