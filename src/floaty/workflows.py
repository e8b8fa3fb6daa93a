"""Shared workflow layer between one-shot CLI commands and the desktop UI.

Each function loads what it needs straight from disk, so every call sees
the current file. Indices are 0-based here; surfaces convert their own.
"""

from .adapters.json_settings import JsonSettingsStore
from .adapters.jsonl_notes import JsonlNoteStore
from .core.notes import EditResult, EmptyNoteError, Note, apply_edit, remove_at
from .core.settings import Settings
from .ports import NoteStore, SettingsStore


def get_store(notes_file=None) -> JsonlNoteStore:
    """Resolve the note store, defaulting to the well-known file."""
    if notes_file:
        return JsonlNoteStore(notes_file)
    return JsonlNoteStore()


def add_note(store: NoteStore, title: str, content: str) -> Note:
    """Append a new note. Surrounding whitespace is dropped."""
    title, content = title.strip(), content.strip()
    if not title and not content:
        raise EmptyNoteError("Note needs a title or some content")
    note = Note.create(title, content)
    store.append(note)
    return note


def list_notes(store: NoteStore) -> list[Note]:
    return store.load()


def edit_note(store: NoteStore, index: int, title: str, content: str) -> EditResult:
    """
    Edit the note at index, rewriting the file only when something changed.

    Values are compared exactly as given, so callers that trim input should
    do it before calling.
    """
    notes = store.load()
    result = apply_edit(notes, index, title, content)
    if result is not EditResult.UNCHANGED:
        store.rewrite_all(notes)
    return result


def delete_note(store: NoteStore, index: int) -> Note:
    notes = store.load()
    removed = remove_at(notes, index)
    store.rewrite_all(notes)
    return removed


def get_settings(settings_store: SettingsStore | None = None) -> Settings:
    return (settings_store or JsonSettingsStore()).load()


def set_settings(settings: Settings, settings_store: SettingsStore | None = None) -> None:
    (settings_store or JsonSettingsStore()).save(settings)
