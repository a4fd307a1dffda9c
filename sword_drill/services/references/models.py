# sword_drill/services/references/models.py
"""
Read-only records returned by the reference engine.
"""

from dataclasses import dataclass, asdict
from enum import Enum


class Testament(str, Enum):
    """Testament column of the books table."""
    OLD = "OLD"
    NEW = "NEW"


class VerseFormat(Enum):
    """Which verse table to read from."""
    PLAIN_TEXT = "verses"
    HTML = "verses_html"

    @property
    def table(self) -> str:
        return self.value


@dataclass(frozen=True)
class Book:
    """A book of the Bible; id follows canonical order starting at 1."""
    id: int
    name: str
    chapter_count: int
    testament: Testament

    @property
    def chapters(self) -> list[int]:
        return list(range(1, self.chapter_count + 1))

    @classmethod
    def from_row(cls, row) -> "Book":
        return cls(
            id=row["id"],
            name=row["name"],
            chapter_count=row["chapter_count"],
            testament=Testament(row["testament"]),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "chapter_count": self.chapter_count,
            "testament": self.testament.value,
        }


@dataclass(frozen=True)
class Verse:
    id: int
    book: int
    chapter: int
    verse: int
    words: str

    @classmethod
    def from_row(cls, row) -> "Verse":
        return cls(
            id=row["id"],
            book=row["book"],
            chapter=row["chapter"],
            verse=row["verse"],
            words=row["words"],
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class SearchHit:
    """
    A full text search match.

    Attributes:
        book: Book id
        chapter: Chapter number
        verse: Verse number
        words: Verse text with <em>...</em> around matched terms
        rank: FTS5 rank (lower is more relevant)
    """
    book: int
    chapter: int
    verse: int
    words: str
    rank: float


def verse_id(book: int, chapter: int, verse: int) -> int:
    """Primary key used by the verse tables (e.g. John 3:16 -> 43003016)."""
    return book * 1_000_000 + chapter * 1_000 + verse
