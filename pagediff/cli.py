#!/usr/bin/env python3
"""
Command line entry point: compare a saved/fetched source page with the current page.

Example:
  pagediff snapshots/home_v1.html https://example.com/ --filter LINK --json diffs/home.json
"""

import argparse
import json
import sys
from pathlib import Path

from pagediff.engine import ComparisonEngine
from pagediff.fetcher import is_remote, load_snapshot_text
from pagediff.logger import add_file_handler, logger, set_level
from pagediff.marking import SoupMarker
from pagediff.models import Category, RunStatus
from pagediff.parser import parse_document
from pagediff.ranker import ALL, SORT_COLUMNS, icon_of, priority_badge, search_records, sort_by_column

EXIT_OK = 0
EXIT_LOAD_FAILED = 1
EXIT_EMPTY_SOURCE = 2

FILTER_CHOICES = [ALL] + [c.value for c in Category]


def build_parser():
    parser = argparse.ArgumentParser(
        prog="pagediff",
        description="Report content differences between a source and a current web page snapshot.",
    )
    parser.add_argument("source", help="Source snapshot: file path or http(s) URL")
    parser.add_argument("current", help="Current snapshot: file path or http(s) URL")
    parser.add_argument("--base-url", help="Base URL used to resolve relative links and images")
    parser.add_argument("--filter", default=ALL, type=str.upper, choices=FILTER_CHOICES,
                        help="Only show one category (LINK covers new and modified links)")
    parser.add_argument("--search", help="Only show rows containing this text")
    parser.add_argument("--sort", choices=SORT_COLUMNS, help="Sort by a table column instead of priority")
    parser.add_argument("--descending", action="store_true", help="Reverse the --sort order")
    parser.add_argument("--json", dest="json_path", help="Write the records as JSON to this path")
    parser.add_argument("--annotate", help="Write the marked-up current page to this path")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)")
    parser.add_argument("--log-file", help="Also write logs to this file")
    return parser


def print_table(records, total):
    print(f"\nPage Differences ({total})")
    if not records:
        print("  No differences.")
        return
    for r in records:
        print(f"  [{priority_badge(r.priority):<4}] {icon_of(r.category)}  {r.kind.value:<20} {r.detail}")


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.log_file:
        add_file_handler(args.log_file)
    if args.log_level:
        set_level(args.log_level)

    source_html = load_snapshot_text(args.source)
    current_html = load_snapshot_text(args.current)
    if source_html is None or current_html is None:
        missing = args.source if source_html is None else args.current
        logger.error(f"[COMPARE] Could not load snapshot: {missing}")
        return EXIT_LOAD_FAILED

    current_base = args.base_url or (args.current if is_remote(args.current) else None)
    current = parse_document(current_html, current_base)

    marker = SoupMarker(current.soup) if args.annotate else None
    engine = ComparisonEngine(marker=marker)
    result = engine.compare(source_html, current, base_url=args.base_url)

    if result.status is RunStatus.EMPTY_SOURCE:
        print(f"Source snapshot is empty: {result.reason}")
        return EXIT_EMPTY_SOURCE

    if args.filter != ALL:
        records = engine.grouped(args.filter)
    else:
        records = engine.ordered()
    if args.search:
        records = search_records(records, args.search)
    if args.sort:
        records = sort_by_column(records, args.sort, ascending=not args.descending)

    print_table(records, result.count)

    if args.json_path:
        out = Path(args.json_path)
        out.parent.mkdir(parents=True, exist_ok=True)
        with open(out, "w", encoding="utf-8") as f:
            json.dump([r.to_dict() for r in records], f, indent=4, ensure_ascii=False)
        logger.info(f"[COMPARE] Exported {len(records)} record(s) to {out}")

    if args.annotate:
        out = Path(args.annotate)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(str(current.soup), encoding="utf-8")
        logger.info(f"[COMPARE] Annotated page written to {out}")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
