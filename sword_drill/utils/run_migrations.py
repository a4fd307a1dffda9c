"""
Schema migrations for the verse database.

Migrations are the numbered files in sword_drill/migrations (001_books.sql,
002_verses.sql, ...). Each applied file is recorded in the `migrations`
table with an MD5 of its contents so later edits can be detected.

Usage:
    python -m sword_drill.utils.run_migrations [--db PATH] [--dry-run] [--validate] [--status]
"""

import argparse
import hashlib
import logging
import os
import sqlite3
import sys
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List

from sword_drill.core.config import configure_logging
from sword_drill.utils.db import db_connection

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = os.path.join(
    os.path.dirname(os.path.dirname(__file__)),
    "migrations"
)


@dataclass(frozen=True)
class Migration:
    version: int
    name: str
    path: str
    checksum: str

    def read(self) -> str:
        with open(self.path, "r", encoding="utf-8") as f:
            return f.read()


def file_checksum(path: str) -> str:
    with open(path, "rb") as f:
        return hashlib.md5(f.read()).hexdigest()


def discover_migrations(directory: str = MIGRATIONS_DIR) -> List[Migration]:
    """All migration files, lowest version first. Files without a numeric prefix are ignored."""
    found = []
    for filename in sorted(os.listdir(directory)):
        if not filename.endswith(".sql"):
            continue
        prefix = filename.split("_", 1)[0]
        if not prefix.isdigit():
            logger.warning(f"Ignoring migration file without a version prefix: {filename}")
            continue
        path = os.path.join(directory, filename)
        found.append(Migration(int(prefix), filename, path, file_checksum(path)))
    return sorted(found, key=lambda m: m.version)


def applied_migrations(conn) -> Dict[int, sqlite3.Row]:
    """Recorded migrations keyed by version; creates the tracking table on first use."""
    conn.execute("""
        CREATE TABLE IF NOT EXISTS migrations (
            version INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            checksum TEXT NOT NULL,
            applied_at TEXT NOT NULL
        )
    """)
    conn.commit()
    rows = conn.execute(
        "SELECT version, name, checksum, applied_at FROM migrations ORDER BY version"
    ).fetchall()
    return {row["version"]: row for row in rows}


def pending_migrations(conn) -> List[Migration]:
    done = applied_migrations(conn)
    return [m for m in discover_migrations() if m.version not in done]


def apply_migration(conn, migration: Migration) -> None:
    """Run one migration file and record it."""
    conn.executescript(migration.read())
    conn.execute(
        "INSERT INTO migrations (version, name, checksum, applied_at) VALUES (?, ?, ?, ?)",
        (migration.version, migration.name, migration.checksum, datetime.now().isoformat()),
    )
    conn.commit()


def run(db_path: str = None, dry_run: bool = False) -> bool:
    """
    Apply pending migrations in version order, stopping at the first failure.

    Returns:
        True if the database is up to date (or would be, for a dry run)
    """
    with db_connection(db_path) as conn:
        pending = pending_migrations(conn)
        if not pending:
            logger.info("Database schema is up to date")
            return True

        names = ", ".join(m.name for m in pending)
        if dry_run:
            print(f"Would apply {len(pending)} migration(s): {names}")
            return True

        for migration in pending:
            try:
                apply_migration(conn, migration)
            except (sqlite3.Error, OSError) as e:
                conn.rollback()
                logger.error(f"Migration {migration.name} failed: {e}")
                return False
            logger.info(f"Applied {migration.name}")

    return True


def check(db_path: str = None) -> List[str]:
    """Problems with the recorded history: missing files and edited files."""
    with db_connection(db_path) as conn:
        done = applied_migrations(conn)

    problems = []
    on_disk = {m.version: m for m in discover_migrations()}
    for version, row in done.items():
        migration = on_disk.get(version)
        if migration is None:
            problems.append(f"{row['name']} was applied but its file is gone")
        elif migration.checksum != row["checksum"]:
            problems.append(f"{migration.name} changed after it was applied")
    return problems


def validate(db_path: str = None) -> bool:
    problems = check(db_path)
    for problem in problems:
        print(f"  ! {problem}")
    if not problems:
        print("Migration history is consistent.")
    return not problems


def status(db_path: str = None) -> None:
    """Print each migration as applied [x] or pending [ ]."""
    with db_connection(db_path) as conn:
        done = applied_migrations(conn)

    for migration in discover_migrations():
        row = done.get(migration.version)
        if row is None:
            print(f"  [ ] {migration.name}")
        else:
            flag = "" if row["checksum"] == migration.checksum else "  (modified)"
            print(f"  [x] {migration.name}  {row['applied_at'][:19]}{flag}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create or upgrade the sword-drill database")
    parser.add_argument(
        "--db",
        default=None,
        help="Path to the SQLite database (defaults to SWORD_DRILL_DB)"
    )
    action = parser.add_mutually_exclusive_group()
    action.add_argument(
        "--dry-run", "-n",
        action="store_true",
        help="List pending migrations without applying them"
    )
    action.add_argument(
        "--validate",
        action="store_true",
        help="Check applied migrations against the files on disk"
    )
    action.add_argument(
        "--status", "-s",
        action="store_true",
        help="Show which migrations are applied"
    )
    args = parser.parse_args(argv)

    configure_logging()

    if args.status:
        status(args.db)
        return 0
    if args.validate:
        return 0 if validate(args.db) else 1
    return 0 if run(args.db, dry_run=args.dry_run) else 1


if __name__ == "__main__":
    sys.exit(main())
