"""Configuration management for Floaty."""

import logging
import os
from pathlib import Path

FLOATY_HOME = Path(os.environ.get("FLOATY_HOME", Path.home()))
NOTES_FILE = FLOATY_HOME / "notes.jsonl"
SETTINGS_FILE = FLOATY_HOME / "floaty_settings.json"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(debug: bool = False) -> None:
    """Route log output to stderr. Warnings always show; debug on request."""
    logging.basicConfig(
        format=LOG_FORMAT,
        level=logging.DEBUG if debug else logging.WARNING,
    )
