# sword_drill/utils/errors.py
"""
JSON error responses for the API.

Every error body has the shape {"error": "<snake_case_code>", "detail": "..."},
optionally with extra fields naming the offending input.
"""

import logging
from typing import Optional

from flask import jsonify

from sword_drill.services.references import (
    BookNotFound,
    InvalidReference,
    StorageError,
    SwordDrillError,
)

logger = logging.getLogger(__name__)

GENERIC_STORAGE_DETAIL = "There was a database error."


def error_response(code: str, status: int = 400, detail: Optional[str] = None, **extra):
    """Build a (response, status) pair; `extra` fields are added to the body."""
    payload = {"error": code}
    if detail:
        payload["detail"] = detail
    payload.update(extra)
    return jsonify(payload), status


def not_found(detail: str):
    return error_response("not_found", 404, detail)


def missing_field(field: str):
    return error_response(f"{field}_required", 400, f"Missing required field: {field}")


def invalid_field(field: str, detail: str = None):
    return error_response(f"invalid_{field}", 400, detail)


def reference_error(e: SwordDrillError):
    """
    Map a lookup failure to a response.

    InvalidReference -> 400, BookNotFound -> 404, both echoing the input.
    StorageError -> 500 with a fixed message; the cause is only logged.
    """
    if isinstance(e, InvalidReference):
        return error_response("invalid_reference", 400, str(e), reference=e.reference)
    if isinstance(e, BookNotFound):
        return error_response("book_not_found", 404, str(e), book=e.book)
    if isinstance(e, StorageError):
        logger.error(f"Storage error: {e}", exc_info=e.__cause__ is not None)
        return error_response("storage_error", 500, GENERIC_STORAGE_DETAIL)
    logger.error(f"Unhandled lookup error: {e}")
    return error_response("internal_error", 500)
