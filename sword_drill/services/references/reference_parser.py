# sword_drill/services/references/reference_parser.py
"""
Citation parser for single-passage Bible references.

Handles the formats people actually type:
- Full names: "Genesis 50", "John 1:1"
- Abbreviations and codes: "1tim 3.16", "jhn.1.1"
- Numbered books: "1 Timothy 3:16-18", "3 John 1", "I Timothy 3:16"
- Verse ranges within one chapter: "Psalms 119:1-8"

The book token is kept exactly as typed (trimmed); mapping it to a canonical
book is the resolver's job.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple

from .exceptions import InvalidReference

MAX_REFERENCE_LENGTH = 100
MAX_NUMBER_DIGITS = 3

DIGITS = "0123456789"

CHAPTER_SEPARATORS = (":", ".")
RANGE_SEPARATOR = "-"


@dataclass(frozen=True)
class Reference:
    """
    A parsed Bible reference.

    Attributes:
        book: Book token as typed, or the canonical name once resolved
        chapter: Chapter number (>= 1)
        verses: Inclusive (start, end) verse range, or None for a whole chapter
    """
    book: str
    chapter: int
    verses: Optional[Tuple[int, int]] = field(default=None)

    def __str__(self) -> str:
        if self.verses is None:
            return f"{self.book} {self.chapter}"
        start, end = self.verses
        if start == end:
            return f"{self.book} {self.chapter}:{start}"
        return f"{self.book} {self.chapter}:{start}-{end}"

    def with_book(self, name: str) -> "Reference":
        return replace(self, book=name)

    def with_verses(self, verses: Optional[Tuple[int, int]]) -> "Reference":
        return replace(self, verses=verses)

    def to_dict(self) -> dict:
        return {
            "book": self.book,
            "chapter": self.chapter,
            "verses": list(self.verses) if self.verses else None,
        }


class _State(Enum):
    INIT = 0
    BOOK = 1
    CHAPTER = 2
    VERSE_FROM = 3
    VERSE_TO = 4


def _to_number(digits: str, raw: str) -> int:
    if not digits or len(digits) > MAX_NUMBER_DIGITS:
        raise InvalidReference(raw)
    number = int(digits)
    if number < 1:
        raise InvalidReference(raw)
    return number


def parse_reference(raw: str) -> Reference:
    """
    Parse a citation string into a Reference.

    Walks the string once. Letters and spaces build the book token, the first
    digit after it starts the chapter, ":" or "." starts the verse and "-"
    starts the end of the range. Characters that don't fit the current state
    are skipped, so "John 3:16a" reads as John 3:16.

    Args:
        raw: The citation as typed (1-100 characters)

    Returns:
        Reference

    Raises:
        InvalidReference: If there is no book or chapter, a number is out of
            range, or the verse range runs backwards
    """
    if not raw or len(raw) > MAX_REFERENCE_LENGTH:
        raise InvalidReference(raw or "")

    state = _State.INIT
    book, chapter, verse_from, verse_to = [], [], [], []

    for ch in raw:
        if state is _State.INIT:
            book.append(ch)
            state = _State.BOOK
        elif state is _State.BOOK:
            if ch in DIGITS:
                chapter.append(ch)
                state = _State.CHAPTER
            elif ch.isalpha() or ch.isspace():
                book.append(ch)
        elif state is _State.CHAPTER:
            if ch in DIGITS:
                chapter.append(ch)
            elif ch in CHAPTER_SEPARATORS:
                state = _State.VERSE_FROM
        elif state is _State.VERSE_FROM:
            if ch in DIGITS:
                verse_from.append(ch)
            elif ch == RANGE_SEPARATOR:
                state = _State.VERSE_TO
        elif ch in DIGITS:
            verse_to.append(ch)

    book_name = "".join(book).strip()
    if not book_name:
        raise InvalidReference(raw)

    chapter_number = _to_number("".join(chapter), raw)

    verses = None
    if verse_from:
        start = _to_number("".join(verse_from), raw)
        end = _to_number("".join(verse_to), raw) if verse_to else start
        if start > end:
            raise InvalidReference(raw)
        verses = (start, end)

    return Reference(book=book_name, chapter=chapter_number, verses=verses)


def is_valid_reference(ref_string: str) -> bool:
    """
    Check if a string parses as a reference.

    This says nothing about whether the book or verses exist.
    """
    try:
        parse_reference(ref_string)
    except InvalidReference:
        return False
    return True
