"""
sword-drill: Bible reference parsing and retrieval.

Turns citations such as "John 3:16" or "jhn.1.1" into verse lookups against
a SQLite corpus, and runs ranked full text search over the same corpus.
"""

__version__ = "0.3.0"
