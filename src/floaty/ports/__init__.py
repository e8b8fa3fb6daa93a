"""Ports - interfaces/protocols for external dependencies."""

from .note_store import NoteStore
from .settings_store import SettingsStore

__all__ = [
    "NoteStore",
    "SettingsStore",
]
