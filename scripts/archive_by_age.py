#!/usr/bin/env python3
"""Find (and optionally move) notes that are due for archival.

Scans every ``*.md`` file under a vault root. By default a note is selected
when it is older than the configured threshold; with ``--tagged`` it is
selected when it carries an ``#archived`` tag instead. Destinations are
``{archive_root}/{file name}``, made unique against the vault and against
each other. With ``--folder`` whole folders are archived instead; folders
under a ``Projects`` or ``Exams`` parent keep that category below the
archive root.

Usage:
    # Preview notes older than 90 days
    python3 scripts/archive_by_age.py --root ~/vault --days 90 \\
      --exclude "C/Templates" --exclude "Daily Notes"

    # Move them
    python3 scripts/archive_by_age.py --root ~/vault --config engine.json --apply

    # Move notes tagged #archived
    python3 scripts/archive_by_age.py --root ~/vault --tagged --apply

    # Archive whole project folders, keeping a copy of the report
    python3 scripts/archive_by_age.py --root ~/vault --folder "D/Projects/Alpha" \\
      --apply --output archive_report.json

Outputs a JSON report to stdout, log messages to stderr.
"""
from __future__ import annotations

import argparse
import dataclasses
import logging
import os
import shutil
import sys
import time
from pathlib import Path
from typing import Any

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from outline_engine.archive import (
    ArchiveCandidate,
    ArchiveMove,
    ArchiveSettings,
    EligibleDocument,
    age_days,
    contains_archived_tag,
    is_under_archive,
    plan_archive_moves,
    plan_folder_archive_moves,
    select_for_archive,
)
from outline_engine.config import ConfigError, load_config
from outline_engine.io_utils import dump_json, read_document, save_json

log = logging.getLogger("archive_by_age")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Archive old or #archived notes.")
    parser.add_argument("--root", required=True, type=Path, help="Vault root folder")
    parser.add_argument("--config", type=Path, default=None, help="Engine config JSON")
    parser.add_argument(
        "--days",
        type=int,
        default=None,
        help="Age threshold in days (overrides config and enables age archiving)",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        help="Vault-relative folder to skip (repeatable, added to config excludes)",
    )
    parser.add_argument("--archive-root", default=None, help="Vault-relative archive folder")
    parser.add_argument(
        "--now-ms", type=int, default=None, help="Reference time in epoch ms (default: now)",
    )
    parser.add_argument(
        "--tagged", action="store_true", help="Select notes tagged #archived instead of by age",
    )
    parser.add_argument(
        "--folder",
        action="append",
        default=[],
        help="Vault-relative folder to archive as a whole (repeatable; skips the note scan)",
    )
    parser.add_argument("--apply", action="store_true", help="Move the selected notes")
    parser.add_argument(
        "--output", type=Path, default=None, help="Also write the JSON report to this path",
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def creation_ms(path: Path) -> int:
    """Birth time where the platform records it, else ctime, in epoch ms."""
    st = path.stat()
    created = getattr(st, "st_birthtime", None)
    if created is None:
        created = st.st_ctime
    return int(created * 1000)


def scan_vault(root: Path) -> list[ArchiveCandidate]:
    """All Markdown notes under *root* as vault-relative POSIX paths, sorted."""
    candidates = [
        ArchiveCandidate(p.relative_to(root).as_posix(), creation_ms(p))
        for p in root.rglob("*.md")
        if p.is_file()
    ]
    candidates.sort(key=lambda c: c.document_id)
    return candidates


def resolve_settings(args: argparse.Namespace) -> ArchiveSettings:
    settings = load_config(args.config).archive
    if args.days is not None:
        if args.days < 1:
            raise ConfigError(f"--days must be >= 1, got {args.days}")
        settings = dataclasses.replace(settings, enabled=True, archive_after_days=args.days)
    if args.exclude:
        settings = dataclasses.replace(
            settings, exclude_folders=settings.exclude_folders + tuple(args.exclude),
        )
    if args.archive_root:
        settings = dataclasses.replace(settings, archive_root=args.archive_root.rstrip("/"))
    return settings


def select_tagged(
    root: Path, candidates: list[ArchiveCandidate], now: int, archive_root: str,
) -> list[EligibleDocument]:
    selected: list[EligibleDocument] = []
    for cand in candidates:
        if is_under_archive(cand.document_id, archive_root):
            continue
        try:
            content = read_document(root / cand.document_id)
        except (OSError, UnicodeDecodeError) as exc:
            log.warning("Could not read %s: %s", cand.document_id, exc)
            continue
        if contains_archived_tag(content):
            selected.append(EligibleDocument(cand, age_days(cand.creation_timestamp, now)))
    return selected


def apply_moves(root: Path, moves: list[ArchiveMove]) -> tuple[int, list[dict[str, str]]]:
    """Move each source to its destination; a failed move does not stop the batch."""
    moved = 0
    errors: list[dict[str, str]] = []
    for move in moves:
        dest = root / move.destination
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(os.fspath(root / move.source), os.fspath(dest))
        except OSError as exc:
            log.warning("Could not archive %s: %s", move.source, exc)
            errors.append({"path": move.source, "error": str(exc)})
            continue
        moved += 1
        log.debug("Moved %s -> %s", move.source, move.destination)
    return moved, errors


def run(args: argparse.Namespace) -> dict[str, Any]:
    settings = resolve_settings(args)
    root: Path = args.root

    def exists(rel: str) -> bool:
        return (root / rel).exists()

    ages: dict[str, int] = {}
    if args.folder:
        mode = "folders"
        missing = [f for f in args.folder if not (root / f).is_dir()]
        if missing:
            raise ConfigError(f"--folder not found under {root}: {', '.join(missing)}")
        moves = plan_folder_archive_moves(args.folder, exists, settings.archive_root)
    else:
        now = args.now_ms if args.now_ms is not None else int(time.time() * 1000)
        candidates = scan_vault(root)
        log.info("Scanned %d note(s) under %s", len(candidates), root)
        if args.tagged:
            mode = "tagged"
            selected = select_tagged(root, candidates, now, settings.archive_root)
        else:
            mode = "age"
            selected = select_for_archive(candidates, now, settings)
        moves = plan_archive_moves(
            [e.candidate.document_id for e in selected], exists, settings.archive_root,
        )
        ages = {e.candidate.document_id: e.age_days for e in selected}

    moved = 0
    errors: list[dict[str, str]] = []
    if args.apply:
        moved, errors = apply_moves(root, moves)
        log.info("Archived %d of %d item(s) to %s", moved, len(moves), settings.archive_root)

    selected_rows: list[dict[str, Any]] = []
    for m in moves:
        row: dict[str, Any] = {"path": m.source, "destination": m.destination}
        if m.source in ages:
            row["age_days"] = ages[m.source]
        selected_rows.append(row)

    return {
        "root": str(root),
        "mode": mode,
        "threshold_days": settings.archive_after_days,
        "archive_root": settings.archive_root,
        "selected": selected_rows,
        "moved": moved,
        "errors": errors,
    }


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    if not args.root.is_dir():
        log.error("Vault root not found: %s", args.root)
        return 1
    try:
        report = run(args)
    except ConfigError as exc:
        log.error("%s", exc)
        return 1
    dump_json(report)
    if args.output is not None:
        save_json(report, args.output)
        log.info("Report written to %s", args.output)
    if report["errors"]:
        log.error("%d move(s) failed", len(report["errors"]))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
