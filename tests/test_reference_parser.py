# tests/test_reference_parser.py
"""
Tests for reference_parser.py - the citation state machine.
"""

import pytest

from sword_drill.services.references import InvalidReference, Reference, is_valid_reference, parse_reference


def test_parse_chapter_only():
    """A book and chapter with no verse is a whole-chapter reference."""
    ref = parse_reference("Genesis 50")
    assert ref == Reference("Genesis", 50)
    assert ref.verses is None


def test_parse_single_verse():
    ref = parse_reference("John 1:1")
    assert ref == Reference("John", 1, (1, 1))


def test_parse_numbered_book_range():
    ref = parse_reference("1 Timothy 3:16-18")
    assert ref.book == "1 Timothy"
    assert ref.chapter == 3
    assert ref.verses == (16, 18)


def test_round_trip():
    """Formatting a parsed canonical reference gives back the input."""
    for text in ["Genesis 50", "John 1:1", "1 Timothy 3:16-18", "Psalms 119:1-176", "3 John 1"]:
        assert str(parse_reference(text)) == text, text


def test_dot_separators():
    """Dots work as chapter/verse separators, with or without a space after the book."""
    assert parse_reference("jhn.1.1") == Reference("jhn", 1, (1, 1))
    assert parse_reference("1tim 3.16") == Reference("1tim", 3, (16, 16))
    assert parse_reference("psa.119.105-112") == Reference("psa", 119, (105, 112))


def test_book_token_kept_as_typed():
    """The parser trims the book token but never normalizes it."""
    assert parse_reference("  PSALMS 23").book == "PSALMS"
    assert parse_reference("I Timothy 3:16").book == "I Timothy"
    assert parse_reference("Song of Solomon 2:1").book == "Song of Solomon"


def test_stray_characters_ignored():
    """Characters that don't fit the current position are skipped."""
    assert parse_reference("John 3:16a") == Reference("John", 3, (16, 16))
    assert parse_reference("John, 3:16") == Reference("John", 3, (16, 16))
    assert parse_reference("John 3:16-18 KJV") == Reference("John", 3, (16, 18))


def test_trailing_separator_means_whole_chapter():
    assert parse_reference("Joel 2:") == Reference("Joel", 2)


def test_rejects_missing_chapter():
    for text in ["John", "1 ", "1", "Genesis:"]:
        with pytest.raises(InvalidReference):
            parse_reference(text)


def test_rejects_empty_and_blank():
    for text in ["", "   "]:
        with pytest.raises(InvalidReference):
            parse_reference(text)


def test_rejects_too_long():
    """More than 100 characters is refused before parsing."""
    text = "John 3:16" + " " * 92
    assert len(text) == 101
    with pytest.raises(InvalidReference):
        parse_reference(text)

    # Exactly 100 is fine
    assert parse_reference(text[:100]).chapter == 3


def test_rejects_out_of_range_numbers():
    for text in ["John 0", "John 3:0", "John 1000", "John 3:1234", "John 3:1-0"]:
        with pytest.raises(InvalidReference):
            parse_reference(text)


def test_rejects_backwards_range():
    with pytest.raises(InvalidReference) as exc_info:
        parse_reference("John 3:18-16")
    assert exc_info.value.reference == "John 3:18-16"
    assert "not a valid Bible reference" in str(exc_info.value)


def test_unicode_digits_are_not_numbers():
    """Superscript digits are skipped, so there is no chapter."""
    with pytest.raises(InvalidReference):
        parse_reference("John ²")


def test_range_is_ordered():
    """Any accepted range has start <= end and a chapter of at least 1."""
    samples = ["Gen 1:1-31", "Ps 119:1-1", "Rev 22", "Jude 1:3-4", "ex 20.1-17", "1cor 13:4"]
    for text in samples:
        ref = parse_reference(text)
        assert ref.chapter >= 1
        if ref.verses is not None:
            assert 1 <= ref.verses[0] <= ref.verses[1]


def test_is_valid_reference():
    assert is_valid_reference("John 3:16")
    assert is_valid_reference("Hezekiah 1:1")  # unknown books still parse
    assert not is_valid_reference("John")
    assert not is_valid_reference("x" * 101)


def test_to_dict():
    assert parse_reference("John 3:16-18").to_dict() == {"book": "John", "chapter": 3, "verses": [16, 18]}
    assert parse_reference("Genesis 50").to_dict() == {"book": "Genesis", "chapter": 50, "verses": None}
