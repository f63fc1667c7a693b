"""Configuration: paths, limits, logging."""

import logging
import os

DEFAULT_DATA_FILE = "Orum Calls Jan 1 to Mar 4 2025.csv"

# --- Data ---
CANCELLED_DISPOSITION = "cancelled"  # noise rows, never part of the working set
DISPOSITION_COL = "Disposition"
NOTE_COL = "Note"

# --- Detail view ---
NOTE_LIMIT = 100
KEYWORD_LIMIT = 25
MIN_WORD_LEN = 4  # words of length <= 3 are dropped

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def data_path() -> str:
    return os.getenv("CALL_DATA_PATH", DEFAULT_DATA_FILE)


def log_level() -> str:
    return os.getenv("CALL_EXPLORER_LOG_LEVEL", "INFO").upper()


def configure_logging(level=None) -> None:
    logging.basicConfig(level=(level or log_level()), format=LOG_FORMAT)
