"""I/O utilities for JSON, JSONL, documents and insertion requests.

orjson-backed JSON I/O plus plain UTF-8 document reads/writes. Documents are
read and written without newline translation so that splitting on ``\\n``
sees exactly what is on disk.
"""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import orjson

from outline_engine.mutation import InsertionRequest, Selection


def load_json(path: Path) -> Any:
    return orjson.loads(path.read_bytes())


def save_json(obj: Any, path: Path, *, pretty: bool = True) -> None:
    """Save an object as JSON, creating parent folders."""
    path.parent.mkdir(parents=True, exist_ok=True)
    opts = orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS if pretty else orjson.OPT_SORT_KEYS
    path.write_bytes(orjson.dumps(obj, option=opts))


def load_jsonl(path: Path) -> list[dict[str, Any]]:
    """Load a JSON Lines file (one JSON object per line). Blank lines skipped."""
    records: list[dict[str, Any]] = []
    for line in path.read_bytes().split(b"\n"):
        line = line.strip()
        if line:
            records.append(orjson.loads(line))
    return records


def dump_json(obj: object) -> None:
    """Write *obj* as indented JSON to stdout."""
    sys.stdout.buffer.write(orjson.dumps(obj, option=orjson.OPT_INDENT_2))
    sys.stdout.buffer.write(b"\n")
    sys.stdout.flush()


def read_document(path: Path) -> str:
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def write_document(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def request_from_record(record: dict[str, Any]) -> InsertionRequest:
    """Build a request from one JSONL record.

    Accepted shapes::

        {"heading": "2 Setup", "content": "- step one", "level": 2}
        {"heading": "2 Setup", "link": "Some Note"}
        {"heading": "2 Setup", "text": "free text"}
    """
    heading = record.get("heading")
    if not isinstance(heading, str) or not heading.strip():
        raise ValueError(f"record needs a non-empty 'heading': {record!r}")
    level = record.get("level")
    if level is not None and (not isinstance(level, int) or isinstance(level, bool) or level < 1):
        raise ValueError(f"'level' must be a positive integer: {record!r}")

    if isinstance(record.get("content"), str):
        return InsertionRequest(heading, record["content"], level)
    if isinstance(record.get("link"), str):
        return Selection(heading, record["link"], "note").to_request(level)
    if isinstance(record.get("text"), str):
        return Selection(heading, record["text"], "text").to_request(level)
    raise ValueError(f"record needs one of 'content', 'link' or 'text': {record!r}")


def load_requests(path: Path) -> list[InsertionRequest]:
    """Load insertion requests from a JSONL file, preserving order."""
    return [request_from_record(r) for r in load_jsonl(path)]
