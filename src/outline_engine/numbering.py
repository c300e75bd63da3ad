"""Section numbering for heading text.

Turns the numeric prefix of a heading ("2.3.1 Setup") into a tuple path
``(2, 3, 1)`` and orders such paths. Digits from other scripts
(Arabic-Indic, Extended Arabic-Indic, Devanagari, fullwidth, ...) are
folded onto ASCII first so mixed-script documents sort together.

Pure text operations with zero I/O.
"""
from __future__ import annotations

import functools
import re
import unicodedata
from collections.abc import Sequence

# Leading "digit+ ('.' digit+)*" ending on a word boundary, optional trailing
# period. Runs on normalized text, hence [0-9] rather than \d. ASCII word
# boundary: a digit glued to a non-Latin letter ("٢مرحلة") still counts.
_SECTION_PREFIX_RE = re.compile(r"^\s*([0-9]+(?:\.[0-9]+)*)\b\.?", re.ASCII)


def normalize_digits(text: str) -> str:
    """Map every Unicode decimal digit onto ASCII 0-9.

    Other characters pass through untouched.
    """
    if text.isascii():
        return text
    out: list[str] = []
    for ch in text:
        value = unicodedata.decimal(ch, None) if not ch.isascii() else None
        out.append(str(value) if value is not None else ch)
    return "".join(out)


def parse_section_path(text: str) -> tuple[int, ...]:
    """Parse the leading numeric section path of *text*.

    ``"2.3.1 Setup"`` -> ``(2, 3, 1)``; ``"2. Build"`` -> ``(2,)``;
    ``"Intro"`` -> ``()``. Never raises on malformed input.
    """
    m = _SECTION_PREFIX_RE.match(normalize_digits(text).lstrip())
    if m is None:
        return ()
    try:
        return tuple(int(part) for part in m.group(1).split("."))
    except ValueError:
        # digit runs past the interpreter's int conversion limit
        return ()


def compare_section_path(a: Sequence[int], b: Sequence[int]) -> int:
    """Three-way compare of two section paths.

    Missing trailing elements count as 0; when every compared element is
    equal the shorter path sorts first (parent before child).

    Returns:
        -1, 0 or 1.
    """
    width = max(len(a), len(b))
    for i in range(width):
        av = a[i] if i < len(a) else 0
        bv = b[i] if i < len(b) else 0
        if av != bv:
            return -1 if av < bv else 1
    if len(a) == len(b):
        return 0
    return -1 if len(a) < len(b) else 1


section_sort_key = functools.cmp_to_key(compare_section_path)


def format_section_path(path: Sequence[int]) -> str:
    """Render a path back to dotted form: ``(2, 3, 1)`` -> ``"2.3.1"``."""
    return ".".join(str(n) for n in path)
