# sword_drill/services/references/verse_retriever.py
"""
Bounded verse queries for a parsed reference.
"""

import logging
import sqlite3
from typing import Callable, List, Optional, Tuple

from .book_resolver import resolve_book
from .exceptions import StorageError
from .models import Book, Verse, VerseFormat
from .reference_parser import Reference

logger = logging.getLogger(__name__)

Resolver = Callable[[str], Tuple[Book, List[int]]]


def get_verses(
    conn,
    reference: Reference,
    fmt: VerseFormat = VerseFormat.PLAIN_TEXT,
    resolver: Optional[Resolver] = None,
) -> Tuple[Book, List[Verse]]:
    """
    Look up the verses for a reference.

    Args:
        conn: sqlite3 connection
        reference: Parsed reference; its book may be any known abbreviation
        fmt: PLAIN_TEXT reads `verses`, HTML reads `verses_html`
        resolver: Optional book resolver (e.g. BookIndex.resolve); defaults
            to querying the abbreviation table on `conn`

    Returns:
        (Book, verses ordered by chapter then verse). The list is empty when
        the chapter or verse range doesn't exist.

    Raises:
        BookNotFound: If the book can't be resolved
        StorageError: If a query fails
    """
    if resolver is None:
        book, _ = resolve_book(conn, reference.book)
    else:
        book, _ = resolver(reference.book)

    sql = (
        f"SELECT id, book, chapter, verse, words FROM {fmt.table} "
        "WHERE book = ? AND chapter = ?"
    )
    params = [book.id, reference.chapter]

    if reference.verses is not None:
        sql += " AND verse BETWEEN ? AND ?"
        params.extend(reference.verses)

    sql += " ORDER BY chapter ASC, verse ASC"

    try:
        rows = conn.execute(sql, params).fetchall()
    except sqlite3.Error as e:
        logger.error(f"Verse lookup failed for '{reference}': {e}")
        raise StorageError() from e

    logger.debug(f"{reference} -> {book.name}: {len(rows)} verse(s) from {fmt.table}")
    return book, [Verse.from_row(row) for row in rows]


def narrow_reference(reference: Reference, book: Book, verses: List[Verse]) -> Reference:
    """
    Rewrite a reference to describe what was actually returned.

    The book becomes the canonical name. A requested verse range is cut to
    end at the last verse found, so "Psalms 119:1-999" reports 1-176; if
    nothing was found the range is dropped.
    """
    narrowed = reference.with_book(book.name)
    if reference.verses is None:
        return narrowed
    if not verses:
        return narrowed.with_verses(None)
    return narrowed.with_verses((reference.verses[0], verses[-1].verse))
