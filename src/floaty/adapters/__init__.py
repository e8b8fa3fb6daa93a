"""Adapters - I/O implementations of ports."""

from .jsonl_notes import JsonlNoteStore, StorageError
from .json_settings import JsonSettingsStore

__all__ = [
    "JsonlNoteStore",
    "JsonSettingsStore",
    "StorageError",
]
