# tests/test_run_migrations.py
"""
Tests for the migration runner.
"""

from sword_drill.utils import run_migrations
from sword_drill.utils.db import db_connection


def test_discover_migrations():
    versions = [m.version for m in run_migrations.discover_migrations()]
    assert versions == [1, 2, 3]


def test_discover_ignores_unnumbered_files(tmp_path):
    (tmp_path / "002_second.sql").write_text("SELECT 1;")
    (tmp_path / "001_first.sql").write_text("SELECT 1;")
    (tmp_path / "notes.sql").write_text("-- not a migration")
    (tmp_path / "003_readme.txt").write_text("")

    found = run_migrations.discover_migrations(str(tmp_path))
    assert [m.name for m in found] == ["001_first.sql", "002_second.sql"]


def test_run_creates_schema(tmp_path):
    db_path = str(tmp_path / "bible.db")
    assert run_migrations.run(db_path)

    with db_connection(db_path) as conn:
        tables = {
            row["name"]
            for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        }
        assert sorted(run_migrations.applied_migrations(conn)) == [1, 2, 3]
        assert run_migrations.pending_migrations(conn) == []

    assert {"books", "book_abbreviations", "verses", "verses_html", "verses_fts"} <= tables


def test_run_is_repeatable(tmp_path):
    db_path = str(tmp_path / "bible.db")
    assert run_migrations.run(db_path)
    assert run_migrations.run(db_path)
    assert run_migrations.validate(db_path)


def test_dry_run_changes_nothing(tmp_path, capsys):
    db_path = str(tmp_path / "bible.db")
    assert run_migrations.run(db_path, dry_run=True)
    assert "Would apply 3 migration(s)" in capsys.readouterr().out

    with db_connection(db_path) as conn:
        assert run_migrations.applied_migrations(conn) == {}


def test_edited_migration_is_reported(tmp_path):
    db_path = str(tmp_path / "bible.db")
    assert run_migrations.run(db_path)

    with db_connection(db_path) as conn:
        conn.execute("UPDATE migrations SET checksum = 'stale' WHERE version = 2")
        conn.commit()

    assert run_migrations.check(db_path) == ["002_verses.sql changed after it was applied"]
    assert not run_migrations.validate(db_path)


def test_status(tmp_path, capsys):
    db_path = str(tmp_path / "bible.db")
    run_migrations.status(db_path)
    assert capsys.readouterr().out.count("[ ]") == 3

    run_migrations.run(db_path)
    run_migrations.status(db_path)
    assert capsys.readouterr().out.count("[x]") == 3
