import logging

from flask import Flask
from flask_cors import CORS

from sword_drill.core.config import DATABASE_PATH, HOST, PORT, configure_logging
from sword_drill.routes.references_api import references_bp
from sword_drill.services.references import ReferenceService

logger = logging.getLogger(__name__)


def create_app(db_path: str = None, preload_books: bool = True) -> Flask:
    """
    Build the API app.

    Args:
        db_path: SQLite file (defaults to SWORD_DRILL_DB)
        preload_books: Resolve book names from an in-memory index built at
            startup instead of querying per request
    """
    app = Flask(__name__)
    app.json.sort_keys = False

    CORS(app, resources={r"/api/*": {"origins": "*", "methods": ["GET", "OPTIONS"]}})

    db_path = db_path or DATABASE_PATH
    service = ReferenceService(db_path)
    if preload_books:
        book_index = service.preload_books()
        logger.info(f"Preloaded {len(book_index)} books from {db_path}")

    app.extensions["reference_service"] = service

    # Register blueprints
    app.register_blueprint(references_bp)

    return app


def main():
    configure_logging()
    app = create_app()
    app.run(host=HOST, port=PORT)


if __name__ == "__main__":
    main()
