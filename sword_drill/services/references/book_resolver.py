# sword_drill/services/references/book_resolver.py
"""
Resolve free-text book names against the abbreviation table.
"""

import logging
import sqlite3
from typing import List, Tuple

from .exceptions import BookNotFound, StorageError
from .models import Book

logger = logging.getLogger(__name__)


def resolve_book(conn, token: str) -> Tuple[Book, List[int]]:
    """
    Look up the book for a name or abbreviation.

    The token may be the canonical name or any registered abbreviation
    ("Psalms", "psa", "PS"); matching is case-insensitive.

    Args:
        conn: sqlite3 connection
        token: Book name as typed

    Returns:
        (Book, [1, 2, ..., chapter_count])

    Raises:
        BookNotFound: If no abbreviation matches
        StorageError: If the query fails
    """
    try:
        row = conn.execute(
            """
            SELECT b.id, b.name, b.chapter_count, b.testament
            FROM books b
            JOIN book_abbreviations ba ON ba.book_id = b.id
            WHERE ba.abbreviation = ?
            LIMIT 1
            """,
            (token.lower(),),
        ).fetchone()
    except sqlite3.Error as e:
        logger.error(f"Book lookup failed for '{token}': {e}")
        raise StorageError() from e

    if row is None:
        logger.debug(f"No book matches '{token}'")
        raise BookNotFound(token)

    book = Book.from_row(row)
    return book, book.chapters


def all_books(conn) -> List[Book]:
    """Get all books in canonical order."""
    try:
        rows = conn.execute(
            "SELECT id, name, chapter_count, testament FROM books ORDER BY id"
        ).fetchall()
    except sqlite3.Error as e:
        logger.error(f"Listing books failed: {e}")
        raise StorageError() from e
    return [Book.from_row(row) for row in rows]


def prefetch_books(conn) -> List[Book]:
    """Load the book table once at startup (used to build a BookIndex)."""
    try:
        return all_books(conn)
    except StorageError as e:
        raise StorageError("Could not preload book data from database.") from e.__cause__
