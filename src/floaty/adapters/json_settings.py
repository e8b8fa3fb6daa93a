"""JSON settings storage adapter."""

import json
import logging
from pathlib import Path

from floaty.config import SETTINGS_FILE
from floaty.core.settings import Settings

from .jsonl_notes import StorageError

logger = logging.getLogger(__name__)


class JsonSettingsStore:
    """
    Single-document settings storage.

    Implements SettingsStore protocol. Saves overwrite the file in place;
    a torn write only costs the settings, which load back as defaults.
    """

    def __init__(self, path: Path | str = SETTINGS_FILE):
        self.path = Path(path).expanduser()

    def load(self) -> Settings:
        """Load settings. Missing or unreadable files yield defaults."""
        if not self.path.exists():
            return Settings()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return Settings.from_dict(data)
        except (OSError, UnicodeDecodeError, ValueError) as e:
            logger.warning(f"Ignoring unreadable settings file {self.path}: {e}")
            return Settings()

    def save(self, settings: Settings) -> None:
        """Overwrite the settings file."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(settings.to_dict(), indent=2), encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to save settings to {self.path}: {e}") from e
