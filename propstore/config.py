"""
propstore configuration.
Single source of truth for environment-driven defaults.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def get_settings():
    """Return library settings (read fresh from the environment on each call)."""
    return Settings()


class Settings:
    """Library settings loaded from environment."""

    # Files: "latin-1" escapes non-ASCII as \uXXXX, "utf-8" writes it literally
    PROPSTORE_ENCODING: str = "latin-1"

    # Write the "#<date>" header line on every commit
    PROPSTORE_TIMESTAMP: bool = True

    # Optional level for the "propstore" logger, e.g. DEBUG
    PROPSTORE_LOG_LEVEL: str = ""

    def __init__(self):
        encoding = (os.environ.get("PROPSTORE_ENCODING") or "latin-1").strip().lower()
        try:
            "".encode(encoding)
        except LookupError:
            encoding = "latin-1"
        self.PROPSTORE_ENCODING = encoding
        timestamp = (os.environ.get("PROPSTORE_TIMESTAMP") or "true").strip().lower()
        self.PROPSTORE_TIMESTAMP = timestamp not in ("0", "false", "no", "off")
        level = (os.environ.get("PROPSTORE_LOG_LEVEL") or "").strip().upper()
        self.PROPSTORE_LOG_LEVEL = level if isinstance(logging.getLevelName(level), int) else ""


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Apply PROPSTORE_LOG_LEVEL to the package logger. No-op when unset."""
    settings = settings or get_settings()
    if not settings.PROPSTORE_LOG_LEVEL:
        return
    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO)
    logging.getLogger("propstore").setLevel(settings.PROPSTORE_LOG_LEVEL)
