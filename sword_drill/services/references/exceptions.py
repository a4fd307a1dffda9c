# sword_drill/services/references/exceptions.py
"""
Error taxonomy for reference lookups.

InvalidReference and BookNotFound are caused by caller input and carry the
offending text. StorageError wraps any database fault behind a generic
message; the original exception is chained for logging only.
"""


class SwordDrillError(Exception):
    """Base exception for reference lookup failures."""
    pass


class InvalidReference(SwordDrillError):
    """Raised when a citation string does not parse."""

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(f"'{reference}' is not a valid Bible reference.")


class BookNotFound(SwordDrillError):
    """Raised when a book token matches no known abbreviation."""

    def __init__(self, book: str):
        self.book = book
        super().__init__(f"'{book}' was not found.")


class StorageError(SwordDrillError):
    """Raised when the verse database fails."""

    def __init__(self, cause: str = "There was a database error."):
        self.cause = cause
        super().__init__(cause)
