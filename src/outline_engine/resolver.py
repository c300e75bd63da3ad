"""Heading resolver: find a heading or create it at its numeric position.

Resolution is by exact (level, text), never by section path alone, so
"2 Build" and "2 Budget" stay independent targets even though both parse
to ``(2,)``. A missing numbered heading is spliced in before the first
numbered heading that sorts after it; an unnumbered one always goes to the
end of the document.
"""
from __future__ import annotations

from collections.abc import Sequence

from outline_engine.numbering import compare_section_path, parse_section_path
from outline_engine.outline import MARKER, Heading, build_index, find_heading


def heading_line(level: int, text: str) -> str:
    """Render a heading line: ``heading_line(2, "2 Setup") -> "## 2 Setup"``."""
    return f"{MARKER * level} {text}"


def find_anchor(index: Sequence[Heading], target_path: Sequence[int]) -> Heading | None:
    """First numbered heading that *target_path* sorts strictly before.

    Unnumbered headings are never anchors. Returns None for an empty target.
    """
    if not target_path:
        return None
    for heading in index:
        if heading.section_path and compare_section_path(target_path, heading.section_path) < 0:
            return heading
    return None


def resolve_heading(
    lines: list[str],
    level: int,
    text: str,
    *,
    index: Sequence[Heading] | None = None,
) -> int:
    """Return the line index of the (level, text) heading, creating it if needed.

    Mutates *lines* when the heading is missing. A new heading is inserted as
    the block ``["", heading, ""]`` before its anchor, or as ``["", heading]``
    at the end of the document.

    Args:
        lines: Line buffer, mutated in place.
        level: Number of marker characters, >= 1.
        text: Heading text; compared after trimming.
        index: A prebuilt outline index of *lines*, reused when given. It must
            reflect the current buffer.

    Returns:
        Line index of the heading line.
    """
    if level < 1:
        raise ValueError(f"heading level must be >= 1, got {level}")
    wanted = text.strip()
    if not wanted:
        raise ValueError("heading text must not be empty")

    if index is None:
        index = build_index(lines)

    existing = find_heading(index, level, wanted)
    if existing is not None:
        return existing.line_index

    anchor = find_anchor(index, parse_section_path(wanted))
    new_line = heading_line(level, wanted)
    if anchor is None:
        lines.extend(["", new_line])
        return len(lines) - 1

    insert_at = anchor.line_index
    lines[insert_at:insert_at] = ["", new_line, ""]
    return insert_at + 1
