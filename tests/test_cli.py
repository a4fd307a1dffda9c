# tests/test_cli.py
"""
Tests for the sword-drill command line.
"""

from sword_drill.cli import main

from conftest import PSALM_119_105


def test_lookup(bible_db, capsys):
    assert main(["psa 119:105", "--db", bible_db]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["Psalms 119:105", f"105 {PSALM_119_105}"]


def test_lookup_html(bible_db, capsys):
    assert main(["Jeremiah 23:29", "--html", "--db", bible_db]) == 0
    assert "<em>that</em>" in capsys.readouterr().out


def test_default_reference(bible_db, capsys):
    assert main(["--db", bible_db]) == 0
    assert capsys.readouterr().out.startswith("John 3:16\n16 For God so loved")


def test_not_found(bible_db, capsys):
    assert main(["Genesis 50", "--db", bible_db]) == 1
    assert "No verses found" in capsys.readouterr().err


def test_errors(bible_db, capsys):
    assert main(["Hezekiah 1:1", "--db", bible_db]) == 2
    assert "'Hezekiah' was not found." in capsys.readouterr().err

    assert main(["Genesis", "--db", bible_db]) == 2
    assert "not a valid Bible reference" in capsys.readouterr().err


def test_search(bible_db, capsys):
    assert main(["--search", "lamp feet", "--db", bible_db]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Psalms 119:105")
    assert "<em>lamp</em>" in out

    assert main(["-s", "1 ", "--db", bible_db]) == 1


def test_unopenable_database(tmp_path, capsys):
    """Exit code 2 with a generic message, no traceback."""
    db_path = str(tmp_path / "nope" / "x.db")
    assert main(["--db", db_path, "John 3:16"]) == 2
    assert "There was a database error." in capsys.readouterr().err

    assert main(["--db", db_path, "--search", "lamp"]) == 2
