#!/usr/bin/env python3
"""Print the heading outline of a Markdown document as JSON.

Usage:
    python3 scripts/outline_report.py --document notes.md
    python3 scripts/outline_report.py --document notes.md --tree
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from outline_engine.io_utils import dump_json, read_document
from outline_engine.numbering import format_section_path
from outline_engine.outline import Heading, OutlineNode, build_index, build_tree


def heading_to_dict(heading: Heading) -> dict[str, object]:
    return {
        "level": heading.level,
        "text": heading.text,
        "section": format_section_path(heading.section_path),
        "line": heading.line_index,
    }


def node_to_dict(node: OutlineNode) -> dict[str, object]:
    out = heading_to_dict(node.heading)
    out["children"] = [node_to_dict(c) for c in node.children]
    return out


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print a document's heading outline.")
    parser.add_argument("--document", required=True, type=Path)
    parser.add_argument("--tree", action="store_true", help="Nest headings by level")
    args = parser.parse_args(argv)

    if not args.document.exists():
        print(f"Document not found: {args.document}", file=sys.stderr)
        return 1

    index = build_index(read_document(args.document).split("\n"))
    if args.tree:
        dump_json([node_to_dict(n) for n in build_tree(index)])
    else:
        dump_json([heading_to_dict(h) for h in index])
    return 0


if __name__ == "__main__":
    sys.exit(main())
