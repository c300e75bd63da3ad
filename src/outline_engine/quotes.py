"""Append a block quote to a document's quotes section."""
from __future__ import annotations

import re

QUOTES_HEADER_EN = "# 🗨 Quotes"
QUOTES_HEADER_AR = "# 🗨 اقتباسات"

_ARABIC_RE = re.compile(r"[\u0600-\u06FF]")


def contains_arabic(text: str) -> bool:
    """True when *text* has any character from the Arabic block."""
    return _ARABIC_RE.search(text) is not None


def append_quote(
    text: str,
    quote: str,
    headers: tuple[str, ...] = (QUOTES_HEADER_EN, QUOTES_HEADER_AR),
) -> str:
    """Return *text* with ``> quote`` added to the quotes section.

    The first header of *headers* present in the document wins; the quote
    goes right before the next ``#`` line after it. Without a quotes
    section one is appended, in Arabic when the document contains Arabic.
    """
    if not quote:
        return text
    lines = text.split("\n")
    for header in headers:
        try:
            start = next(i for i, line in enumerate(lines) if line.strip() == header)
        except StopIteration:
            continue
        end = start + 1
        while end < len(lines) and not lines[end].startswith("#"):
            end += 1
        lines[end:end] = ["", f"> {quote}"]
        return "\n".join(lines)

    header = headers[-1] if contains_arabic(text) and len(headers) > 1 else headers[0]
    return f"{text}\n\n{header}\n\n> {quote}\n"
