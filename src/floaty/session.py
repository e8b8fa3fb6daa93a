"""Interactive shell session with a lazily loaded read cache."""

import logging

from .core.notes import EditResult, EmptyNoteError, Note, apply_edit, check_index, remove_at
from .core.settings import Settings
from .ports import NoteStore, SettingsStore

logger = logging.getLogger(__name__)


class NoteSession:
    """
    Owns the in-memory copy of the note sequence for one shell session.

    The cache is either unloaded (nothing in memory) or loaded (equal to
    the last sequence read from or written to the store). Every mutation
    either updates the cache to match disk or unloads it.
    """

    def __init__(self, store: NoteStore, settings_store: SettingsStore | None = None):
        self.store = store
        self.settings_store = settings_store
        self._notes: list[Note] = []
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    def ensure_loaded(self) -> list[Note]:
        """Load from the store on first access; no-op afterwards."""
        if not self._loaded:
            self._notes = self.store.load()
            self._loaded = True
            logger.debug(f"Loaded {len(self._notes)} notes into session cache")
        return self._notes

    def invalidate(self) -> None:
        """Drop the cached notes so the next access re-reads the store."""
        self._notes = []
        self._loaded = False

    def append(self, title: str, content: str) -> Note:
        title, content = title.strip(), content.strip()
        if not title and not content:
            raise EmptyNoteError("Note needs a title or some content")
        note = Note.create(title, content)
        self.store.append(note)
        if self._loaded:
            self._notes.append(note)
        return note

    def list_notes(self) -> list[Note]:
        return list(self.ensure_loaded())

    def get(self, index: int) -> Note:
        notes = self.ensure_loaded()
        check_index(notes, index)
        return notes[index]

    def edit(self, index: int, title: str, content: str) -> EditResult:
        """Edit against a copy, then commit it to the cache once persisted."""
        working = list(self.ensure_loaded())
        result = apply_edit(working, index, title, content)
        if result is not EditResult.UNCHANGED:
            self._commit(working)
        return result

    def delete(self, index: int) -> Note:
        working = list(self.ensure_loaded())
        removed = remove_at(working, index)
        self._commit(working)
        return removed

    def clear(self) -> None:
        self.store.clear()
        self.invalidate()

    def get_settings(self) -> Settings:
        if self.settings_store is None:
            return Settings()
        return self.settings_store.load()

    def set_settings(self, settings: Settings) -> None:
        if self.settings_store is None:
            raise RuntimeError("Session has no settings store")
        self.settings_store.save(settings)

    def _commit(self, notes: list[Note]) -> None:
        try:
            self.store.rewrite_all(notes)
        except Exception:
            # Disk state is unknown to us now; re-read on next access
            self.invalidate()
            raise
        self._notes = notes
        self._loaded = True
