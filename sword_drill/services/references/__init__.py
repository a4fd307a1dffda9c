# sword_drill/services/references/__init__.py
"""
Reference parsing and retrieval services.

This package provides:
- ReferenceService: Unified interface for passage lookup and search
- Passage: A looked-up passage with its narrowed reference
- Reference: Parsed book/chapter/verse-range value
- parse_reference: Parse human-written citations ("1 Tim 3:16-18")
- resolve_book: Map a book name or abbreviation to its canonical Book
- get_verses: Bounded, ordered verse query for a reference
- search_verses: Ranked, highlighted full text search
- BookIndex: In-memory abbreviation index
"""

from .exceptions import (
    SwordDrillError,
    InvalidReference,
    BookNotFound,
    StorageError,
)
from .models import (
    Book,
    Verse,
    SearchHit,
    Testament,
    VerseFormat,
)
from .reference_parser import (
    Reference,
    parse_reference,
    is_valid_reference,
    MAX_REFERENCE_LENGTH,
)
from .books import (
    BookIndex,
    canonical_books,
    load_book_table,
    seed_books,
)
from .book_resolver import (
    resolve_book,
    all_books,
    prefetch_books,
)
from .verse_retriever import (
    get_verses,
    narrow_reference,
)
from .search import (
    sanitize_query,
    search_verses,
    SEARCH_RESULT_LIMIT,
)
from .reference_service import (
    ReferenceService,
    Passage,
)

__all__ = [
    # Unified Service (primary interface)
    "ReferenceService",
    "Passage",
    # Errors
    "SwordDrillError",
    "InvalidReference",
    "BookNotFound",
    "StorageError",
    # Models
    "Book",
    "Verse",
    "SearchHit",
    "Testament",
    "VerseFormat",
    # Reference parsing
    "Reference",
    "parse_reference",
    "is_valid_reference",
    "MAX_REFERENCE_LENGTH",
    # Books
    "BookIndex",
    "canonical_books",
    "load_book_table",
    "seed_books",
    "resolve_book",
    "all_books",
    "prefetch_books",
    # Retrieval
    "get_verses",
    "narrow_reference",
    # Search
    "sanitize_query",
    "search_verses",
    "SEARCH_RESULT_LIMIT",
]
