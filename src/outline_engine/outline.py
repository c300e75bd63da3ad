"""Outline index for marker-prefixed (Markdown ``#``) headings.

Scans a document's lines and records every heading with its nesting level
(number of marker characters), trimmed text, numeric section path and line
position. Duplicate (level, text) pairs are kept; resolution always uses the
first one.
"""
from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from outline_engine.numbering import parse_section_path

MARKER = "#"

# One or more markers, whitespace, then non-empty text (trailing space trimmed).
_HEADING_RE = re.compile(r"^(#+)\s+(\S.*?)\s*$")


# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Heading:
    """A heading found in a line buffer."""

    level: int                      # count of marker characters
    text: str                       # "2.1 Setup"
    section_path: tuple[int, ...]   # (2, 1), empty when unnumbered
    line_index: int                 # 0-based, valid when the index was built


@dataclass(slots=True)
class OutlineNode:
    """A heading with the headings nested under it."""

    heading: Heading
    children: list[OutlineNode] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------


def match_heading(line: str) -> tuple[int, str] | None:
    """Return ``(level, text)`` when *line* is a heading, else None."""
    m = _HEADING_RE.match(line)
    if m is None:
        return None
    return len(m.group(1)), m.group(2).strip()


def is_heading_line(line: str) -> bool:
    """True when *line* is a heading of any level."""
    return _HEADING_RE.match(line) is not None


def build_index(lines: Sequence[str]) -> list[Heading]:
    """Index every heading in *lines*, in document order."""
    index: list[Heading] = []
    for i, line in enumerate(lines):
        parsed = match_heading(line)
        if parsed is None:
            continue
        level, text = parsed
        index.append(Heading(level, text, parse_section_path(text), i))
    return index


def find_heading(index: Iterable[Heading], level: int, text: str) -> Heading | None:
    """First heading with exactly this level and (trimmed, case-sensitive) text."""
    wanted = text.strip()
    for heading in index:
        if heading.level == level and heading.text == wanted:
            return heading
    return None


def heading_levels(template_text: str) -> dict[str, int]:
    """Map heading text -> level for a template document.

    Used to decide at which level a heading is created in a target document.
    The first occurrence of a text wins.
    """
    levels: dict[str, int] = {}
    for heading in build_index(template_text.split("\n")):
        levels.setdefault(heading.text, heading.level)
    return levels


def build_tree(index: Iterable[Heading]) -> list[OutlineNode]:
    """Nest headings by level.

    A heading becomes the child of the nearest preceding heading with a
    smaller level; headings with no such predecessor are roots. Skipped
    levels (``#`` followed by ``###``) nest directly.
    """
    roots: list[OutlineNode] = []
    stack: list[OutlineNode] = []
    for heading in index:
        node = OutlineNode(heading)
        while stack and stack[-1].heading.level >= heading.level:
            stack.pop()
        if stack:
            stack[-1].children.append(node)
        else:
            roots.append(node)
        stack.append(node)
    return roots
