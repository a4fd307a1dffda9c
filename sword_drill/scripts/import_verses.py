#!/usr/bin/env python3
"""
Load a verse corpus into the sword-drill database.

The source is a JSON object mapping references to verse text:

    {"Genesis 1:1": "In the beginning God created the heaven and the earth.", ...}

Words the KJV translators supplied are marked with square brackets in most
electronic editions ("[was] without form"). The plain text table drops the
brackets; the HTML table renders them as <em>...</em>. A leading "#"
paragraph mark is removed from both.

Usage:
    python -m sword_drill.scripts.import_verses --file kjv.json
    python -m sword_drill.scripts.import_verses --url https://example.org/kjv.json --db ./bible.db
"""

import argparse
import html
import json
import logging
import re
import sqlite3
import sys
from typing import Dict, Tuple

from sword_drill.core.config import KJV_SOURCE_URL, configure_logging
from sword_drill.services.references import (
    BookIndex,
    BookNotFound,
    InvalidReference,
    StorageError,
    parse_reference,
    seed_books,
)
from sword_drill.services.references.models import verse_id
from sword_drill.utils import run_migrations
from sword_drill.utils.db import db_connection
from sword_drill.utils.http_retry import get_with_retry

logger = logging.getLogger(__name__)

BATCH_SIZE = 1000

_SUPPLIED = re.compile(r"\[([^\]]*)\]")


def to_plain(text: str) -> str:
    """Verse body for the plain text table."""
    return _SUPPLIED.sub(r"\1", text.lstrip("#").strip())


def to_html(text: str) -> str:
    """Verse body for the HTML table."""
    return _SUPPLIED.sub(r"<em>\1</em>", html.escape(text.lstrip("#").strip(), quote=False))


def load_source(path: str = None, url: str = None) -> Dict[str, str]:
    """Read the reference -> text map from a file or URL."""
    if path:
        logger.info(f"Reading verses from {path}")
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    if url:
        logger.info(f"Downloading verses from {url}")
        return get_with_retry(url, timeout=120).json()
    raise ValueError("A source file or URL is required")


def import_verses(conn, data: Dict[str, str]) -> Tuple[int, int]:
    """
    Insert verses into `verses` and `verses_html`, then rebuild the search index.

    Args:
        conn: sqlite3 connection to a migrated database
        data: {"Book C:V": "text"}

    Returns:
        (verses imported, entries skipped)
    """
    seed_books(conn)
    index = BookIndex.from_db(conn)

    imported = 0
    skipped = 0
    plain_rows, html_rows = [], []

    def flush():
        conn.executemany(
            "INSERT OR REPLACE INTO verses (id, book, chapter, verse, words) VALUES (?, ?, ?, ?, ?)",
            plain_rows,
        )
        conn.executemany(
            "INSERT OR REPLACE INTO verses_html (id, book, chapter, verse, words) VALUES (?, ?, ?, ?, ?)",
            html_rows,
        )
        plain_rows.clear()
        html_rows.clear()

    try:
        for ref, text in data.items():
            try:
                reference = parse_reference(ref)
                book, _ = index.resolve(reference.book)
            except (InvalidReference, BookNotFound) as e:
                logger.warning(f"Skipping '{ref}': {e}")
                skipped += 1
                continue

            if reference.verses is None or reference.verses[0] != reference.verses[1]:
                logger.warning(f"Skipping '{ref}': not a single verse")
                skipped += 1
                continue

            number = reference.verses[0]
            key = verse_id(book.id, reference.chapter, number)
            plain_rows.append((key, book.id, reference.chapter, number, to_plain(text)))
            html_rows.append((key, book.id, reference.chapter, number, to_html(text)))
            imported += 1

            if len(plain_rows) >= BATCH_SIZE:
                flush()
                logger.info(f"Processed {imported} verses...")

        flush()
        conn.execute("INSERT INTO verses_fts(verses_fts) VALUES ('rebuild')")
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        logger.error(f"Import failed: {e}")
        raise StorageError("Verse import failed.") from e

    logger.info(f"Imported {imported} verses ({skipped} skipped)")
    return imported, skipped


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Import a verse corpus into the sword-drill database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m sword_drill.scripts.import_verses --file kjv.json
  python -m sword_drill.scripts.import_verses --url https://example.org/kjv.json
  KJV_SOURCE_URL=https://example.org/kjv.json python -m sword_drill.scripts.import_verses
        """
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--file", "-f",
        help="Path to a JSON reference -> text map"
    )
    source.add_argument(
        "--url", "-u",
        help="URL of a JSON reference -> text map (defaults to KJV_SOURCE_URL)"
    )
    parser.add_argument(
        "--db",
        default=None,
        help="Path to the SQLite database (defaults to SWORD_DRILL_DB)"
    )
    args = parser.parse_args(argv)

    configure_logging()

    url = args.url or (None if args.file else KJV_SOURCE_URL)
    if not args.file and not url:
        parser.error("pass --file or --url, or set KJV_SOURCE_URL")

    if not run_migrations.run(args.db):
        return 1

    try:
        data = load_source(path=args.file, url=url)
    except (OSError, ValueError, RuntimeError) as e:
        print(f"Could not read source: {e}", file=sys.stderr)
        return 1

    with db_connection(args.db) as conn:
        try:
            imported, skipped = import_verses(conn, data)
        except StorageError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    print(f"\nImport complete: {imported} verses, {skipped} skipped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
