"""Functional core - pure business logic with no I/O."""

from .notes import (
    EditResult,
    EmptyNoteError,
    Note,
    NoteDecodeError,
    NoteIndexError,
    apply_edit,
    check_index,
    decode_note,
    encode_note,
    now_string,
    preview,
    remove_at,
    search_notes,
)
from .settings import Settings

__all__ = [
    # Notes
    "Note",
    "EditResult",
    "EmptyNoteError",
    "NoteDecodeError",
    "NoteIndexError",
    "apply_edit",
    "check_index",
    "decode_note",
    "encode_note",
    "now_string",
    "preview",
    "remove_at",
    "search_notes",
    # Settings
    "Settings",
]
