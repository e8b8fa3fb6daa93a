"""Settings storage interface."""

from typing import Protocol

from floaty.core.settings import Settings


class SettingsStore(Protocol):
    """Interface for reading and writing the settings document."""

    def load(self) -> Settings:
        """Read settings, falling back to defaults."""
        ...

    def save(self, settings: Settings) -> None:
        """Overwrite the stored settings."""
        ...
