"""Tests for outline_engine.io_utils module."""
from pathlib import Path

import pytest

from outline_engine.io_utils import (
    load_json,
    load_jsonl,
    load_requests,
    read_document,
    request_from_record,
    save_json,
    write_document,
)
from outline_engine.mutation import InsertionRequest


class TestJson:
    def test_save_and_load(self, tmp_path: Path) -> None:
        path = tmp_path / "sub" / "x.json"
        save_json({"b": 1, "a": [1, 2]}, path)
        assert load_json(path) == {"a": [1, 2], "b": 1}

    def test_jsonl_skips_blank_lines(self, tmp_path: Path) -> None:
        path = tmp_path / "r.jsonl"
        path.write_text('{"a": 1}\n\n{"a": 2}\n', encoding="utf-8")
        assert load_jsonl(path) == [{"a": 1}, {"a": 2}]


class TestDocuments:
    def test_preserves_newlines_exactly(self, tmp_path: Path) -> None:
        path = tmp_path / "D" / "Projects" / "Content.md"
        write_document(path, "# A\r\nbody\n")
        assert path.read_bytes() == b"# A\r\nbody\n"
        assert read_document(path) == "# A\r\nbody\n"

    def test_unicode(self, tmp_path: Path) -> None:
        path = tmp_path / "n.md"
        write_document(path, "# ٢ خطة\n")
        assert read_document(path) == "# ٢ خطة\n"


class TestRequests:
    def test_content_record(self) -> None:
        req = request_from_record({"heading": "2 Setup", "content": "- a", "level": 3})
        assert req == InsertionRequest("2 Setup", "- a", 3)

    def test_link_and_text_records(self) -> None:
        assert request_from_record({"heading": "H", "link": "Note"}).content_line == "- [[Note]]"
        assert request_from_record({"heading": "H", "text": "t"}).content_line == "- t"

    @pytest.mark.parametrize(
        "record",
        [
            {"content": "- a"},
            {"heading": "  ", "content": "- a"},
            {"heading": "H"},
            {"heading": "H", "content": "- a", "level": 0},
            {"heading": "H", "content": "- a", "level": "2"},
        ],
    )
    def test_invalid_records(self, record: dict) -> None:
        with pytest.raises(ValueError):
            request_from_record(record)

    def test_load_requests_preserves_order(self, tmp_path: Path) -> None:
        path = tmp_path / "r.jsonl"
        path.write_text(
            '{"heading": "2 B", "link": "x"}\n{"heading": "1 A", "text": "y"}\n',
            encoding="utf-8",
        )
        assert [r.target_heading_text for r in load_requests(path)] == ["2 B", "1 A"]
