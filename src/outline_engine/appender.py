"""Section appender: splice a content line into a heading's block.

The insertion point is the first blank line or heading after the run of
non-empty lines that directly follows the heading. Content separated from
the heading by a blank line is therefore *not* skipped: a new line lands
right after the first contiguous run, not at the true end of the section.
Existing documents rely on this placement, so it is kept as is.
"""
from __future__ import annotations

from collections.abc import Sequence

from outline_engine.outline import is_heading_line


def find_content_insertion_point(lines: Sequence[str], heading_line_index: int) -> int:
    """Index at which content for the heading at *heading_line_index* goes."""
    if not 0 <= heading_line_index < len(lines):
        raise IndexError(
            f"heading line index {heading_line_index} out of range for {len(lines)} lines"
        )
    pos = heading_line_index + 1
    while pos < len(lines):
        line = lines[pos]
        if is_heading_line(line) or not line.strip():
            break
        pos += 1
    return pos


def append_under(lines: list[str], heading_line_index: int, content_line: str) -> int:
    """Insert *content_line* into the heading's block; returns its line index."""
    pos = find_content_insertion_point(lines, heading_line_index)
    lines.insert(pos, content_line)
    return pos
