"""Tests for outline_engine.appender module.

The appender stops at the first blank line or heading after the heading's
first run of content. Content below a blank line in the same section is not
skipped; these tests pin that placement down.
"""
import pytest

from outline_engine.appender import append_under, find_content_insertion_point


class TestFindContentInsertionPoint:
    def test_right_after_heading_when_followed_by_blank(self) -> None:
        lines = ["## A", "", "- old"]
        assert find_content_insertion_point(lines, 0) == 1

    def test_after_contiguous_content(self) -> None:
        lines = ["## A", "- one", "- two", "", "## B"]
        assert find_content_insertion_point(lines, 0) == 3

    def test_stops_at_next_heading_of_any_level(self) -> None:
        lines = ["## A", "- one", "#### deep", "- x"]
        assert find_content_insertion_point(lines, 0) == 2

    def test_end_of_document(self) -> None:
        lines = ["## A", "- one"]
        assert find_content_insertion_point(lines, 0) == 2

    def test_whitespace_only_line_is_blank(self) -> None:
        lines = ["## A", "- one", "   ", "- two"]
        assert find_content_insertion_point(lines, 0) == 2

    def test_hash_tag_line_is_content(self) -> None:
        lines = ["## A", "#todo review", "- one", ""]
        assert find_content_insertion_point(lines, 0) == 3

    def test_out_of_range(self) -> None:
        with pytest.raises(IndexError):
            find_content_insertion_point(["## A"], 1)
        with pytest.raises(IndexError):
            find_content_insertion_point(["## A"], -1)


class TestAppendUnder:
    def test_inserts_and_returns_position(self) -> None:
        lines = ["## A", "- one", "", "## B"]
        pos = append_under(lines, 0, "- two")
        assert pos == 2
        assert lines == ["## A", "- one", "- two", "", "## B"]

    def test_repeated_appends_keep_order(self) -> None:
        lines = ["## A", "", "## B"]
        for item in ("- 1", "- 2", "- 3"):
            append_under(lines, 0, item)
        assert lines == ["## A", "- 1", "- 2", "- 3", "", "## B"]

    def test_content_after_gap_is_not_skipped(self) -> None:
        lines = ["## A", "- one", "", "- later", "", "## B"]
        append_under(lines, 0, "- new")
        assert lines == ["## A", "- one", "- new", "", "- later", "", "## B"]
