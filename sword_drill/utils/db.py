import sqlite3
from contextlib import contextmanager

from sword_drill.core.config import DATABASE_PATH


def get_db(db_path: str = None):
    """
    Return a sqlite3 connection to the verse DB.
    """
    conn = sqlite3.connect(db_path or DATABASE_PATH)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def db_connection(db_path: str = None):
    """Check out a connection for a single call and always close it."""
    conn = get_db(db_path)
    try:
        yield conn
    finally:
        conn.close()
