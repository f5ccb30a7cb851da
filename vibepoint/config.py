"""
Configuration for the Vibepoint service.

Product thresholds live here as named values so every component (and every
test) reads the same number. Each can be overridden through the environment
or a local ``.env`` file.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


# MARK: - Product Constants

RAPID_WINDOW_MINUTES = _env_int("VIBEPOINT_RAPID_WINDOW_MINUTES", 30)
RAPID_ENTRY_LIMIT = _env_int("VIBEPOINT_RAPID_ENTRY_LIMIT", 3)
PATTERN_UNLOCK_ENTRIES = _env_int("VIBEPOINT_PATTERN_UNLOCK_ENTRIES", 10)

DELETE_CONFIRMATION_PHRASE = "DELETE ALL MY DATA"

EXPORT_DATA_TYPE = "vibepoint-mood-data"
EXPORT_VERSION = "1.0"

# MARK: - Server

SERVICE_NAME = "vibepoint"
HOST = os.getenv("VIBEPOINT_HOST", "0.0.0.0")
PORT = _env_int("VIBEPOINT_PORT", 8000)
LOG_LEVEL = os.getenv("VIBEPOINT_LOG_LEVEL", "info")


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Set up root logging for the server process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
