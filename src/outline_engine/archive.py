"""Age-based archive selection and archive move planning.

Timestamps are epoch milliseconds. A document is eligible when it was
created strictly before ``now - threshold_days`` days, is not inside an
excluded folder, and is not already under the archive root.
"""
from __future__ import annotations

import logging
import posixpath
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from outline_engine.paths import ExistsFn, UniquePathAllocator, archive_folder_destination

log = logging.getLogger(__name__)

MS_PER_DAY = 86_400_000
DEFAULT_ARCHIVE_ROOT = "E/Archive"

_FRONTMATTER_RE = re.compile(r"^---\s*\n([\s\S]*?)\n---")


# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ArchiveSettings:
    enabled: bool = False
    archive_after_days: int = 30
    exclude_folders: tuple[str, ...] = ()
    archive_root: str = DEFAULT_ARCHIVE_ROOT


@dataclass(frozen=True, slots=True)
class ArchiveCandidate:
    """A document considered by one archival scan. Never persisted."""

    document_id: str          # vault path, e.g. "A/Notes/Idea.md"
    creation_timestamp: int   # epoch ms


@dataclass(frozen=True, slots=True)
class EligibleDocument:
    candidate: ArchiveCandidate
    age_days: int


@dataclass(frozen=True, slots=True)
class ArchiveMove:
    source: str
    destination: str


# ---------------------------------------------------------------------------
# Eligibility
# ---------------------------------------------------------------------------


def age_days(creation_timestamp: int, now: int) -> int:
    """Whole days elapsed since creation (floored)."""
    return (now - creation_timestamp) // MS_PER_DAY


def _under(path: str, folder: str) -> bool:
    folder = folder.rstrip("/")
    return path == folder or path.startswith(folder + "/")


def is_excluded(path: str, excluded_prefixes: Iterable[str]) -> bool:
    """Case-insensitive: *path* equals or lies inside an excluded folder."""
    lowered = path.lower()
    for prefix in excluded_prefixes:
        prefix = prefix.strip()
        if prefix and _under(lowered, prefix.lower()):
            return True
    return False


def is_under_archive(path: str, archive_root: str = DEFAULT_ARCHIVE_ROOT) -> bool:
    return _under(path, archive_root)


def is_eligible(
    creation_timestamp: int,
    now: int,
    threshold_days: int,
    path: str,
    excluded_prefixes: Iterable[str] = (),
    archive_root: str = DEFAULT_ARCHIVE_ROOT,
) -> bool:
    """Decide archive eligibility for one document.

    The age comparison is strict: a document exactly ``threshold_days`` old
    is not eligible yet.
    """
    if threshold_days < 0:
        raise ValueError(f"threshold_days must be >= 0, got {threshold_days}")
    cutoff = now - threshold_days * MS_PER_DAY
    if not creation_timestamp < cutoff:
        return False
    if is_excluded(path, excluded_prefixes):
        return False
    return not is_under_archive(path, archive_root)


def select_for_archive(
    candidates: Iterable[ArchiveCandidate],
    now: int,
    settings: ArchiveSettings,
) -> list[EligibleDocument]:
    """Eligible candidates with their ages, in input order."""
    if not settings.enabled:
        log.info("Archiving by age is disabled")
        return []
    selected: list[EligibleDocument] = []
    for cand in candidates:
        if is_eligible(
            cand.creation_timestamp,
            now,
            settings.archive_after_days,
            cand.document_id,
            settings.exclude_folders,
            settings.archive_root,
        ):
            selected.append(EligibleDocument(cand, age_days(cand.creation_timestamp, now)))
        else:
            log.debug("Skipping %s", cand.document_id)
    log.info(
        "%d document(s) older than %d day(s)", len(selected), settings.archive_after_days,
    )
    return selected


# ---------------------------------------------------------------------------
# Tag-based selection
# ---------------------------------------------------------------------------


def contains_archived_tag(content: str) -> bool:
    """True for ``#archived`` anywhere, or ``archived`` in front-matter tags."""
    if "#archived" in content.lower():
        return True
    m = _FRONTMATTER_RE.match(content)
    if m is None:
        return False
    frontmatter = m.group(1).lower()
    return "archived" in frontmatter and ("tags:" in frontmatter or "tag:" in frontmatter)


# ---------------------------------------------------------------------------
# Move planning
# ---------------------------------------------------------------------------


def plan_archive_moves(
    paths: Sequence[str],
    exists: ExistsFn,
    archive_root: str = DEFAULT_ARCHIVE_ROOT,
) -> list[ArchiveMove]:
    """Map each path to a unique ``{archive_root}/{basename}`` destination.

    Destinations are unique within the batch as well as against *exists*.
    Paths already under the archive root are left out.
    """
    root = archive_root.rstrip("/")
    allocator = UniquePathAllocator(exists)
    moves: list[ArchiveMove] = []
    for path in paths:
        if is_under_archive(path, root):
            log.debug("Already archived: %s", path)
            continue
        dest = allocator.allocate(f"{root}/{posixpath.basename(path)}")
        moves.append(ArchiveMove(path, dest))
    return moves


def plan_folder_archive_moves(
    folders: Sequence[str],
    exists: ExistsFn,
    archive_root: str = DEFAULT_ARCHIVE_ROOT,
) -> list[ArchiveMove]:
    """Map whole folders to unique archive destinations.

    ``Projects`` and ``Exams`` folders keep their category under the archive
    root (see ``archive_folder_destination``). Collisions get a ``" (n)"``
    suffix on the folder name. Folders already under the archive root are
    left out.
    """
    root = archive_root.rstrip("/")
    allocator = UniquePathAllocator(exists, extensions=())
    moves: list[ArchiveMove] = []
    for folder in folders:
        folder = folder.rstrip("/")
        if is_under_archive(folder, root):
            log.debug("Already archived: %s", folder)
            continue
        dest = allocator.allocate(archive_folder_destination(folder, root))
        moves.append(ArchiveMove(folder, dest))
    return moves
