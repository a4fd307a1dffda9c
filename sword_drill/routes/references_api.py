# routes/references_api.py
"""
API endpoints for passage lookup and verse search.

Provides access to:
- Passage lookup by reference ("/api/John 3:16", "/api/jhn.3.16")
- Full text search with reference detection
- Book list and per-book chapter lists
"""

from flask import Blueprint, current_app, jsonify, request

from sword_drill.services.references import (
    ReferenceService,
    SwordDrillError,
    VerseFormat,
)
from sword_drill.utils.errors import (
    invalid_field,
    missing_field,
    not_found,
    reference_error,
)

references_bp = Blueprint("references_api", __name__, url_prefix="/api")

FORMATS = {
    "text": VerseFormat.PLAIN_TEXT,
    "html": VerseFormat.HTML,
}


def get_service() -> ReferenceService:
    """Get the app's ReferenceService instance."""
    return current_app.extensions["reference_service"]


# =============================================================================
# Books
# =============================================================================

@references_bp.get("/books")
def list_books():
    """
    List all books in canonical order.

    Returns:
        {"books": [{"id": 1, "name": "Genesis", "chapter_count": 50, "testament": "OLD"}, ...]}
    """
    try:
        books = get_service().books()
    except SwordDrillError as e:
        return reference_error(e)
    return jsonify({"books": [b.to_dict() for b in books]})


@references_bp.get("/books/<name>")
def get_book(name):
    """
    Resolve a book name or abbreviation.

    Returns:
        {"book": {...}, "chapters": [1, 2, ...]}
    """
    try:
        book, chapters = get_service().book(name)
    except SwordDrillError as e:
        return reference_error(e)
    return jsonify({"book": book.to_dict(), "chapters": chapters})


# =============================================================================
# Search
# =============================================================================

@references_bp.get("/search")
def search_verses():
    """
    Search verses, or look up the query directly if it is a reference.

    Query params:
        q: Search text (required), e.g. "lamp unto my feet" or "psalms 119:105"

    Returns:
        {
            "query": "lamp",
            "matches": [
                {"book": "Psalms", "chapter": 119, "verse": 105,
                 "reference": "Psalms 119:105", "text": "... a <em>lamp</em> ...", "rank": -4.2}
            ]
        }
    """
    query = request.args.get("q")
    if query is None:
        return missing_field("q")

    try:
        results = get_service().search(query)
    except SwordDrillError as e:
        return reference_error(e)

    return jsonify({
        "query": query,
        "matches": [
            {
                "book": book.name,
                "chapter": hit.chapter,
                "verse": hit.verse,
                "reference": f"{book.name} {hit.chapter}:{hit.verse}",
                "text": hit.words,
                "rank": hit.rank,
            }
            for hit, book in results
        ],
    })


# =============================================================================
# Lookup
# =============================================================================

@references_bp.get("/<path:reference>")
def lookup_reference(reference):
    """
    Look up a passage.

    Path:
        reference: e.g. "John 3:16", "psalms.119.105", "1tim 3.16-18".
            Slashes are read as separators ("John/3/16").

    Query params:
        format: "text" (default) or "html"

    Returns:
        Passage JSON with the canonical reference and verses; 404 if the
        reference is well formed but has no verses.
    """
    fmt_name = request.args.get("format", "text").lower()
    fmt = FORMATS.get(fmt_name)
    if fmt is None:
        return invalid_field("format", f"format must be one of: {', '.join(FORMATS)}")

    raw = reference.replace("/", ".")
    try:
        passage = get_service().lookup(raw, fmt=fmt)
    except SwordDrillError as e:
        return reference_error(e)

    if not passage.found:
        return not_found(f"No verses found for '{raw}'")

    return jsonify(passage.to_dict())
