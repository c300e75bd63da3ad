"""Collision-free destination paths for move/archive workflows.

Paths are vault-style POSIX strings ("E/Archive/Notes.md"). The ``exists``
predicate is supplied by the caller and may hit the filesystem on every
call; its errors propagate unchanged.
"""
from __future__ import annotations

import logging
import posixpath
from collections.abc import Callable, Sequence

log = logging.getLogger(__name__)

KNOWN_EXTENSIONS: tuple[str, ...] = (".md",)

ExistsFn = Callable[[str], bool]


def split_known_extension(
    path: str, extensions: Sequence[str] = KNOWN_EXTENSIONS,
) -> tuple[str, str]:
    """Split *path* into (stem, ext) for the first known extension it ends with.

    ``("Notes", ".md")`` for ``"Notes.md"``; ``("Projects/Alpha", "")`` for a
    folder path.
    """
    for ext in extensions:
        if ext and path.endswith(ext) and len(path) > len(ext):
            return path[: -len(ext)], ext
    return path, ""


def unique_path(
    base_path: str,
    exists: ExistsFn,
    *,
    extensions: Sequence[str] = KNOWN_EXTENSIONS,
) -> str:
    """Return *base_path*, or the first free ``"{stem} (n){ext}"`` for n = 1, 2, ...

    There is no cap on n: the loop ends because ``exists`` is backed by a
    finite directory listing.
    """
    if not exists(base_path):
        return base_path
    stem, ext = split_known_extension(base_path, extensions)
    counter = 1
    while True:
        candidate = f"{stem} ({counter}){ext}"
        if not exists(candidate):
            log.debug("Resolved %s -> %s", base_path, candidate)
            return candidate
        counter += 1


class UniquePathAllocator:
    """Hands out unique paths across a batch of moves.

    ``exists`` only sees the state before the batch runs, so two sources with
    the same name would both be told "Notes.md is free". The allocator
    treats every path it has already returned as taken.
    """

    def __init__(
        self,
        exists: ExistsFn,
        *,
        extensions: Sequence[str] = KNOWN_EXTENSIONS,
    ) -> None:
        self._exists = exists
        self._extensions = tuple(extensions)
        self._reserved: set[str] = set()

    def _taken(self, path: str) -> bool:
        return path in self._reserved or self._exists(path)

    def allocate(self, base_path: str) -> str:
        path = unique_path(base_path, self._taken, extensions=self._extensions)
        self._reserved.add(path)
        return path

    @property
    def reserved(self) -> frozenset[str]:
        return frozenset(self._reserved)


def archive_folder_destination(folder_path: str, archive_root: str = "E/Archive") -> str:
    """Where an archived folder goes, before collision handling.

    ``D/Projects/Alpha`` -> ``E/Archive/Projects/Alpha``,
    ``D/Exams/Bar`` -> ``E/Archive/Exams/Bar``, anything else
    ``E/Archive/<name>``. The category segment has to sit below some parent
    folder: a top-level ``Projects/Alpha`` is routed as a generic folder.
    """
    folder_path = folder_path.rstrip("/")
    name = posixpath.basename(folder_path)
    if not name:
        raise ValueError(f"cannot archive folder path {folder_path!r}")
    root = archive_root.rstrip("/")
    if "/Projects/" in folder_path:
        return f"{root}/Projects/{name}"
    if "/Exams/" in folder_path:
        return f"{root}/Exams/{name}"
    return f"{root}/{name}"
