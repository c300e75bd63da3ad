#!/usr/bin/env python3
"""Insert content lines under headings of a Markdown document.

Missing headings are created at their numeric position (or appended when
unnumbered). Requests are applied in file order.

Usage:
    python3 scripts/insert_under_headings.py \\
      --document "D/Projects/Alpha/Content.md" \\
      --requests selections.jsonl \\
      --template "C/Templates/Content-to-D-Projects-Alpha.md"

    # Preview only
    python3 scripts/insert_under_headings.py --document notes.md \\
      --requests selections.jsonl --dry-run

Each JSONL record is one of:
    {"heading": "2 Setup", "content": "- step one", "level": 2}
    {"heading": "2 Setup", "link": "Some Note"}
    {"heading": "2 Setup", "text": "free text"}

Outputs a JSON summary to stdout, log messages to stderr.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

import orjson

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from outline_engine.config import ConfigError, load_config
from outline_engine.io_utils import dump_json, load_requests, read_document, write_document
from outline_engine.mutation import apply_insertions, new_document
from outline_engine.outline import heading_levels

log = logging.getLogger("insert_under_headings")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Insert content lines under (possibly new) headings of a document."
    )
    parser.add_argument("--document", required=True, type=Path, help="Target Markdown document")
    parser.add_argument(
        "--requests", required=True, type=Path, help="JSONL file of insertion requests",
    )
    parser.add_argument(
        "--template",
        type=Path,
        default=None,
        help="Template document whose heading levels are used for new headings",
    )
    parser.add_argument("--config", type=Path, default=None, help="Engine config JSON")
    parser.add_argument(
        "--default-level",
        type=int,
        default=None,
        help="Level for headings not found in the template (overrides config)",
    )
    parser.add_argument(
        "--title",
        default=None,
        help="Title for a newly created document (default: document file stem)",
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Do not write; include the new text in output",
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def run(args: argparse.Namespace) -> dict[str, Any]:
    """Apply the requests and return the summary written to stdout."""
    config = load_config(args.config)
    default_level = (
        config.default_heading_level if args.default_level is None else args.default_level
    )
    if default_level < 1:
        raise ConfigError(f"--default-level must be >= 1, got {default_level}")

    requests = load_requests(args.requests)
    levels = heading_levels(read_document(args.template)) if args.template else None

    created_document = not args.document.exists()
    if created_document:
        text = new_document(args.title or args.document.stem)
        log.info("Creating %s", args.document)
    else:
        text = read_document(args.document)

    result = apply_insertions(
        text, requests, heading_levels=levels, default_level=default_level,
    )

    summary: dict[str, Any] = {
        "document": str(args.document),
        "created_document": created_document,
        "inserted": result.inserted,
        "created_headings": list(result.created_headings),
        "written": False,
    }
    if args.dry_run:
        summary["text"] = result.text
    elif result.inserted or created_document:
        write_document(args.document, result.text)
        summary["written"] = True
        log.info("Wrote %d insertion(s) to %s", result.inserted, args.document)
    return summary


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    if not args.requests.exists():
        log.error("Requests file not found: %s", args.requests)
        return 1
    if args.template is not None and not args.template.exists():
        log.error("Template not found: %s", args.template)
        return 1

    try:
        summary = run(args)
    except (ConfigError, orjson.JSONDecodeError) as exc:
        log.error("%s", exc)
        return 1
    except ValueError as exc:
        log.error("Invalid request: %s", exc)
        return 1

    dump_json(summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
