# sword_drill/services/references/reference_service.py
"""
Unified reference service for passage lookup and verse search.

Wraps the parser, resolver, retriever and search behind one object that
checks out a database connection per call.
"""

import logging
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from sword_drill.utils.db import get_db

from .book_resolver import all_books, resolve_book
from .books import BookIndex
from .exceptions import BookNotFound, InvalidReference, StorageError
from .models import Book, SearchHit, Verse, VerseFormat
from .reference_parser import Reference, parse_reference
from .search import SEARCH_RESULT_LIMIT, search_verses
from .verse_retriever import get_verses, narrow_reference

logger = logging.getLogger(__name__)


@dataclass
class Passage:
    """
    A looked-up passage.

    Attributes:
        book: The resolved book
        reference: Reference with the canonical book name and the verse
            range narrowed to what was found
        verses: Verses in order (empty if the chapter/verses don't exist)
        fmt: Which verse table the text came from
    """
    book: Book
    reference: Reference
    verses: List[Verse] = field(default_factory=list)
    fmt: VerseFormat = VerseFormat.PLAIN_TEXT

    @property
    def found(self) -> bool:
        return bool(self.verses)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "book": self.book.to_dict(),
            "reference": self.reference.to_dict(),
            "reference_string": str(self.reference),
            "format": "html" if self.fmt is VerseFormat.HTML else "text",
            "verses": [v.to_dict() for v in self.verses],
        }


class ReferenceService:
    """
    Unified service for scripture lookup.

    Usage:
        service = ReferenceService()

        passage = service.lookup("John 3:16")
        print(passage.reference, passage.verses[0].words)

        for hit, book in service.search("lamp unto my feet"):
            print(book.name, hit.chapter, hit.verse, hit.words)
    """

    def __init__(self, db_path: str = None, book_index: Optional[BookIndex] = None):
        """
        Args:
            db_path: SQLite file (defaults to SWORD_DRILL_DB)
            book_index: Preloaded books; when given, book names are resolved
                in memory instead of by query
        """
        self.db_path = db_path
        self.book_index = book_index

    @contextmanager
    def _connection(self):
        """One connection per call; failure to open it is a StorageError."""
        try:
            conn = get_db(self.db_path)
        except sqlite3.Error as e:
            logger.error(f"Could not open database {self.db_path or 'SWORD_DRILL_DB'}: {e}")
            raise StorageError() from e
        try:
            yield conn
        finally:
            conn.close()

    def preload_books(self) -> BookIndex:
        """Build a BookIndex from the database and resolve through it from now on."""
        with self._connection() as conn:
            self.book_index = BookIndex.from_db(conn)
        return self.book_index

    def _resolve(self, conn, name: str) -> Tuple[Book, List[int]]:
        if self.book_index is not None:
            return self.book_index.resolve(name)
        return resolve_book(conn, name)

    def lookup(self, ref: str, fmt: VerseFormat = VerseFormat.PLAIN_TEXT) -> Passage:
        """
        Look up a passage.

        Args:
            ref: Reference string (e.g. "Genesis 1:1-3", "jhn.3.16")
            fmt: PLAIN_TEXT or HTML verse bodies

        Returns:
            Passage; check `found` before treating it as content

        Raises:
            InvalidReference: If the reference cannot be parsed
            BookNotFound: If the book is unknown
            StorageError: If the database fails
        """
        return self.lookup_reference(parse_reference(ref), fmt)

    def lookup_reference(self, reference: Reference, fmt: VerseFormat = VerseFormat.PLAIN_TEXT) -> Passage:
        """Look up an already parsed reference."""
        resolver = self.book_index.resolve if self.book_index is not None else None
        with self._connection() as conn:
            book, verses = get_verses(conn, reference, fmt, resolver=resolver)

        return Passage(
            book=book,
            reference=narrow_reference(reference, book, verses),
            verses=verses,
            fmt=fmt,
        )

    def book(self, name: str) -> Tuple[Book, List[int]]:
        """Resolve a book name or abbreviation to (Book, chapters)."""
        with self._connection() as conn:
            return self._resolve(conn, name)

    def books(self) -> List[Book]:
        """All books in canonical order."""
        if self.book_index is not None:
            return self.book_index.books()
        with self._connection() as conn:
            return all_books(conn)

    def search(self, query: str, limit: int = SEARCH_RESULT_LIMIT) -> List[Tuple[SearchHit, Book]]:
        """
        Search box entry point.

        If the query reads as a reference ("psalms 119:105") the exact
        verses are returned (rank 0.0, no highlighting). A query that looks
        like a reference but names no real book yields no results rather
        than an error. Anything else goes to full text search.

        Raises:
            StorageError: If the database fails
        """
        try:
            reference = parse_reference(query)
        except InvalidReference:
            reference = None

        if reference is not None:
            try:
                passage = self.lookup_reference(reference)
            except (BookNotFound, InvalidReference) as e:
                logger.info(f"Search '{query}' looked like a reference but: {e}")
                return []
            return [
                (SearchHit(book=v.book, chapter=v.chapter, verse=v.verse, words=v.words, rank=0.0), passage.book)
                for v in passage.verses[:limit]
            ]

        with self._connection() as conn:
            return search_verses(conn, query, limit=limit)
