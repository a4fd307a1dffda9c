#!/usr/bin/env python3
"""
Look up Bible verses from the command line.

Usage:
    sword-drill "John 3:16"
    sword-drill "psa.119.105-112" --html
    sword-drill --search "lamp unto my feet"
    sword-drill --db ./bible.db "1 Tim 3:16"
"""

import argparse
import sys

from sword_drill.core.config import configure_logging
from sword_drill.services.references import (
    ReferenceService,
    SwordDrillError,
    VerseFormat,
)


def print_passage(service: ReferenceService, ref: str, fmt: VerseFormat) -> int:
    passage = service.lookup(ref, fmt=fmt)
    print(passage.reference)
    if not passage.found:
        print(f"No verses found for '{ref}'", file=sys.stderr)
        return 1
    for verse in passage.verses:
        print(f"{verse.verse} {verse.words}")
    return 0


def print_search(service: ReferenceService, query: str) -> int:
    results = service.search(query)
    if not results:
        print(f"No matches for '{query}'", file=sys.stderr)
        return 1
    for hit, book in results:
        print(f"{book.name} {hit.chapter}:{hit.verse}  {hit.words}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="CLI for looking up Bible verses",
    )
    parser.add_argument(
        "reference",
        nargs="?",
        default="John 3:16",
        help="The Bible reference to look up (default: John 3:16)"
    )
    parser.add_argument(
        "--search", "-s",
        metavar="QUERY",
        help="Search verse text instead of looking up a reference"
    )
    parser.add_argument(
        "--html",
        action="store_true",
        help="Print the HTML verse text"
    )
    parser.add_argument(
        "--db",
        default=None,
        help="Path to the SQLite database (defaults to SWORD_DRILL_DB)"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)"
    )
    args = parser.parse_args(argv)

    configure_logging(args.log_level.upper())
    service = ReferenceService(args.db)

    try:
        if args.search is not None:
            return print_search(service, args.search)
        fmt = VerseFormat.HTML if args.html else VerseFormat.PLAIN_TEXT
        return print_passage(service, args.reference, fmt)
    except SwordDrillError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
