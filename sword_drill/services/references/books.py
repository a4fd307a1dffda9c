# sword_drill/services/references/books.py
"""
Static book table: loading, seeding, and an in-memory abbreviation index.

The 66 books and their abbreviations live in data/books.yml. They are
written to the books/book_abbreviations tables by seed_books(), and can be
held in memory as a BookIndex to resolve names without a query per call.
"""

import logging
import os
import sqlite3
from functools import lru_cache
from typing import Dict, List, Tuple

import yaml

from .exceptions import BookNotFound, StorageError
from .models import Book, Testament

logger = logging.getLogger(__name__)

BOOKS_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(__file__))),
    "data",
    "books.yml",
)


def _abbreviations_for(name: str, extra: List[str]) -> List[str]:
    """Lowercase name, its space-free form, then the listed abbreviations (deduplicated)."""
    seen = []
    for abbr in [name.lower(), name.lower().replace(" ", "")] + [str(a).lower() for a in extra]:
        if abbr not in seen:
            seen.append(abbr)
    return seen


@lru_cache(maxsize=1)
def load_book_table() -> Tuple[Tuple[Book, Tuple[str, ...]], ...]:
    """
    Load the canonical book table from YAML.

    Returns:
        Tuple of (Book, abbreviations) in canonical order

    Raises:
        ValueError: If an abbreviation is claimed by two books
    """
    with open(BOOKS_PATH, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    table = []
    owners: Dict[str, str] = {}
    for position, entry in enumerate(raw.get("books", []), start=1):
        book = Book(
            id=position,
            name=str(entry["name"]),
            chapter_count=int(entry["chapters"]),
            testament=Testament(entry["testament"]),
        )
        abbreviations = _abbreviations_for(book.name, entry.get("abbreviations", []))
        for abbr in abbreviations:
            if abbr in owners:
                raise ValueError(
                    f"Abbreviation '{abbr}' is used by both {owners[abbr]} and {book.name}"
                )
            owners[abbr] = book.name
        table.append((book, tuple(abbreviations)))

    return tuple(table)


def canonical_books() -> List[Book]:
    """All books in canonical order, straight from the static table."""
    return [book for book, _ in load_book_table()]


def seed_books(conn) -> int:
    """
    Populate books and book_abbreviations from the static table.

    Safe to run repeatedly; existing rows are left alone.

    Returns:
        Number of abbreviation rows inserted
    """
    inserted = 0
    try:
        for book, abbreviations in load_book_table():
            conn.execute(
                """
                INSERT OR IGNORE INTO books (id, name, chapter_count, testament)
                VALUES (?, ?, ?, ?)
                """,
                (book.id, book.name, book.chapter_count, book.testament.value),
            )
            for abbr in abbreviations:
                cur = conn.execute(
                    "INSERT OR IGNORE INTO book_abbreviations (book_id, abbreviation) VALUES (?, ?)",
                    (book.id, abbr),
                )
                inserted += cur.rowcount
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        logger.error(f"Seeding books failed: {e}")
        raise StorageError("Could not seed book data.") from e

    logger.info(f"Seeded {len(load_book_table())} books ({inserted} new abbreviations)")
    return inserted


class BookIndex:
    """
    In-memory lowercase-abbreviation -> Book map.

    Same contract as book_resolver.resolve_book, without a database round
    trip. Build it once at startup:

        index = BookIndex.from_db(conn)
        book, chapters = index.resolve("psa")
    """

    def __init__(self, books: List[Book], abbreviations: Dict[str, int]):
        self._books = {book.id: book for book in books}
        self._abbreviations = dict(abbreviations)

    @classmethod
    def from_table(cls) -> "BookIndex":
        """Build from data/books.yml."""
        books, abbreviations = [], {}
        for book, abbrs in load_book_table():
            books.append(book)
            for abbr in abbrs:
                abbreviations[abbr] = book.id
        return cls(books, abbreviations)

    @classmethod
    def from_db(cls, conn) -> "BookIndex":
        """Build from the books/book_abbreviations tables."""
        from .book_resolver import prefetch_books

        books = prefetch_books(conn)
        try:
            rows = conn.execute(
                "SELECT book_id, abbreviation FROM book_abbreviations"
            ).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Could not load abbreviations: {e}")
            raise StorageError("Could not preload book data.") from e
        return cls(books, {row["abbreviation"]: row["book_id"] for row in rows})

    def __len__(self) -> int:
        return len(self._books)

    def books(self) -> List[Book]:
        return [self._books[book_id] for book_id in sorted(self._books)]

    def resolve(self, token: str) -> Tuple[Book, List[int]]:
        book_id = self._abbreviations.get(token.lower())
        if book_id is None:
            raise BookNotFound(token)
        book = self._books[book_id]
        return book, book.chapters
