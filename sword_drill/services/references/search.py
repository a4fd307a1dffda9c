# sword_drill/services/references/search.py
"""
Full text verse search on SQLite FTS5.

Two query styles are accepted:

- `fire hammer`: every word is matched on its own as a prefix token
  (fire* hammer*), and all of them must appear.
- `"fire hammer"`: the words must appear together as a phrase. The KJV has
  no literal quotation marks, so a quote in the query always means phrase
  search.

Everything other than ASCII letters and spaces is stripped before the query
reaches FTS5, which keeps its control syntax (*, ", :, -, ^, parentheses)
out of user hands.
"""

import logging
import re
import sqlite3
from typing import List, Optional, Tuple

from .exceptions import StorageError
from .models import Book, SearchHit, Testament

logger = logging.getLogger(__name__)

SEARCH_RESULT_LIMIT = 15

HIGHLIGHT_OPEN = "<em>"
HIGHLIGHT_CLOSE = "</em>"

# Index of the `words` column in verses_fts (book, chapter, verse, words)
WORDS_COLUMN = 3

_NON_ALPHA = re.compile(r"[^a-zA-Z ]+")


def sanitize_query(query: str) -> Optional[str]:
    """
    Turn free text into a safe FTS5 MATCH expression.

    Words are lowercased so FTS5 never reads them as AND/OR/NOT operators.

    Returns:
        The MATCH expression, or None if nothing searchable is left
        (e.g. "1 " or "?!")
    """
    had_quote = '"' in query
    words = _NON_ALPHA.sub("", query).lower().split()

    if not words:
        return None

    if had_quote:
        return '"' + " ".join(words) + '"'
    return " ".join(f"{word}*" for word in words)


def search_verses(conn, query: str, limit: int = SEARCH_RESULT_LIMIT) -> List[Tuple[SearchHit, Book]]:
    """
    Search verse text.

    Args:
        conn: sqlite3 connection
        query: Free text as typed into a search box
        limit: Maximum results (default 15)

    Returns:
        List of (SearchHit, Book), most relevant first. Empty when the query
        has no searchable words; the database is not touched in that case.

    Raises:
        StorageError: If the query fails
    """
    match = sanitize_query(query)
    if match is None:
        logger.debug(f"Search query '{query}' has no searchable words")
        return []

    try:
        rows = conn.execute(
            f"""
            SELECT verses_fts.book AS book,
                   verses_fts.chapter AS chapter,
                   verses_fts.verse AS verse,
                   highlight(verses_fts, {WORDS_COLUMN}, '{HIGHLIGHT_OPEN}', '{HIGHLIGHT_CLOSE}') AS words,
                   verses_fts.rank AS rank,
                   b.name AS book_name,
                   b.chapter_count AS chapter_count,
                   b.testament AS testament
            FROM verses_fts
            JOIN books b ON b.id = verses_fts.book
            WHERE verses_fts MATCH ?
            ORDER BY verses_fts.rank
            LIMIT ?
            """,
            (match, limit),
        ).fetchall()
    except sqlite3.Error as e:
        logger.error(f"Search failed for '{match}': {e}")
        raise StorageError() from e

    logger.info(f"Search '{query}' ({match}) -> {len(rows)} result(s)")

    results = []
    for row in rows:
        hit = SearchHit(
            book=row["book"],
            chapter=row["chapter"],
            verse=row["verse"],
            words=row["words"],
            rank=float(row["rank"]),
        )
        book = Book(
            id=row["book"],
            name=row["book_name"],
            chapter_count=row["chapter_count"],
            testament=Testament(row["testament"]),
        )
        results.append((hit, book))
    return results
