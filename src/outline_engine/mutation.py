"""Apply a list of insertion requests to one document.

One mutation pass owns the line buffer: the text is split on ``\\n``, each
request is resolved and appended in the order given (later requests see
headings created by earlier ones), and the buffer is joined back. There is
no I/O here; reading and writing the document is the caller's job and
happens strictly before and after the pass.

Example:

    result = apply_insertions(
        "# Intro\\n",
        [InsertionRequest("2 Setup", "- step one")],
    )
    result.text  # "# Intro\\n\\n\\n## 2 Setup\\n- step one"
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Literal

from outline_engine.appender import append_under
from outline_engine.outline import build_index, find_heading
from outline_engine.resolver import resolve_heading

log = logging.getLogger(__name__)

DEFAULT_HEADING_LEVEL = 2


# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class InsertionRequest:
    """Put *content_line* under the heading *target_heading_text*."""

    target_heading_text: str
    content_line: str
    level: int | None = None   # None -> heading-levels map, then default


@dataclass(frozen=True, slots=True)
class Selection:
    """A user pick destined for a heading: a linked note or free text."""

    heading: str
    value: str
    kind: Literal["note", "text"] = "note"

    def content_line(self) -> str:
        if self.kind == "note":
            return f"- [[{self.value}]]"
        return f"- {self.value}"

    def to_request(self, level: int | None = None) -> InsertionRequest:
        return InsertionRequest(self.heading, self.content_line(), level)


@dataclass(frozen=True, slots=True)
class MutationResult:
    """Outcome of one pass."""

    text: str
    created_headings: tuple[str, ...]
    inserted: int


# ---------------------------------------------------------------------------
# Pass
# ---------------------------------------------------------------------------


def new_document(title: str) -> str:
    """Seed text for a target document that does not exist yet."""
    return f"# {title}\n"


def resolve_level(
    request: InsertionRequest,
    heading_levels: Mapping[str, int] | None,
    default_level: int,
) -> int:
    """Explicit level, else the heading-levels map, else *default_level*."""
    if request.level is not None:
        return request.level
    if heading_levels:
        level = heading_levels.get(request.target_heading_text.strip())
        if level is not None:
            return level
    return default_level


def apply_insertions(
    text: str,
    requests: Iterable[InsertionRequest],
    *,
    heading_levels: Mapping[str, int] | None = None,
    default_level: int = DEFAULT_HEADING_LEVEL,
) -> MutationResult:
    """Apply *requests* in order to *text* and return the mutated document.

    Args:
        text: Whole document text.
        requests: Insertion requests, applied strictly in order.
        heading_levels: Heading text -> level, typically from
            :func:`outline_engine.outline.heading_levels` on a template.
        default_level: Level for headings found in neither the request nor
            *heading_levels*.

    Returns:
        MutationResult with the new text, the headings that had to be
        created (in creation order) and the number of inserted lines.
    """
    lines = text.split("\n")
    created: list[str] = []
    inserted = 0

    for request in requests:
        level = resolve_level(request, heading_levels, default_level)
        index = build_index(lines)
        is_new = find_heading(index, level, request.target_heading_text) is None
        heading_idx = resolve_heading(lines, level, request.target_heading_text, index=index)
        if is_new:
            created.append(request.target_heading_text.strip())
            log.debug(
                "Created level-%d heading %r at line %d",
                level, request.target_heading_text.strip(), heading_idx,
            )
        pos = append_under(lines, heading_idx, request.content_line)
        log.debug("Inserted %r at line %d", request.content_line, pos)
        inserted += 1

    if inserted:
        log.info(
            "Applied %d insertion(s), created %d heading(s)", inserted, len(created),
        )
    return MutationResult("\n".join(lines), tuple(created), inserted)


def mutate_document(
    text: str,
    requests: Iterable[InsertionRequest],
    *,
    heading_levels: Mapping[str, int] | None = None,
    default_level: int = DEFAULT_HEADING_LEVEL,
) -> str:
    """Like :func:`apply_insertions` but returns only the text."""
    return apply_insertions(
        text, requests, heading_levels=heading_levels, default_level=default_level,
    ).text
