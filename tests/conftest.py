"""
Shared fixtures: a migrated, seeded SQLite database with a handful of KJV verses.
"""

import pytest

from sword_drill.scripts.import_verses import import_verses
from sword_drill.utils import run_migrations
from sword_drill.utils.db import db_connection

PSALM_119_105 = "NUN. Thy word is a lamp unto my feet, and a light unto my path."
JEREMIAH_23_29 = "Is not my word like as a fire? saith the LORD; and like a hammer that breaketh the rock in pieces?"

SAMPLE_VERSES = {
    "Genesis 1:1": "In the beginning God created the heaven and the earth.",
    "Genesis 1:2": "And the earth was without form, and void; and darkness [was] upon the face of the deep. "
                   "And the Spirit of God moved upon the face of the waters.",
    "Genesis 1:3": "And God said, Let there be light: and there was light.",
    "John 1:1": "In the beginning was the Word, and the Word was with God, and the Word was God.",
    "John 3:16": "For God so loved the world, that he gave his only begotten Son, that whosoever "
                 "believeth in him should not perish, but have everlasting life.",
    "Jeremiah 23:29": "[Is] not my word like as a fire? saith the LORD; and like a hammer [that] breaketh the rock in pieces?",
    "1 Timothy 3:15": "But if I tarry long, that thou mayest know how thou oughtest to behave thyself in the "
                      "house of God, which is the church of the living God, the pillar and ground of the truth.",
    "1 Timothy 3:16": "And without controversy great is the mystery of godliness: God was manifest in the flesh, "
                      "justified in the Spirit, seen of angels, preached unto the Gentiles, believed on in the "
                      "world, received up into glory.",
    # Not importable: unknown book, and a key without a verse
    "Hezekiah 1:1": "Not a book.",
    "Genesis 2": "Not a verse.",
}

# Psalm 119 has 176 verses; only 105 carries its real text here
for n in range(1, 177):
    SAMPLE_VERSES[f"Psalms 119:{n}"] = f"Filler text numbered {n}."
SAMPLE_VERSES["Psalms 119:105"] = "NUN. Thy word [is] a lamp unto my feet, and a light unto my path."

SAMPLE_VERSE_COUNT = 8 + 176
SAMPLE_SKIPPED = 2


@pytest.fixture
def bible_db(tmp_path):
    """Path to a fully migrated database loaded with SAMPLE_VERSES."""
    db_path = str(tmp_path / "bible.db")
    assert run_migrations.run(db_path)
    with db_connection(db_path) as conn:
        import_verses(conn, SAMPLE_VERSES)
    return db_path


@pytest.fixture
def conn(bible_db):
    with db_connection(bible_db) as c:
        yield c
