# core/config.py
import logging
import os
import sys

from dotenv import load_dotenv

# Load .env
load_dotenv()

# ---- ENV VALUES ----
DATABASE_PATH = os.getenv("SWORD_DRILL_DB", os.path.join(os.getcwd(), "bible.db"))

HOST = os.getenv("SWORD_DRILL_HOST", "127.0.0.1")
PORT = int(os.getenv("SWORD_DRILL_PORT", "5055"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Verse source for scripts.import_verses ({"Genesis 1:1": "In the beginning...", ...})
KJV_SOURCE_URL = os.getenv("KJV_SOURCE_URL")


def configure_logging(level: str = None) -> None:
    """Send log output to stdout at the configured level."""
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL), logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
