"""Pure note domain logic - no I/O dependencies."""

import json
from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
PREVIEW_LIMIT = 60


class NoteDecodeError(ValueError):
    """Raised when a stored line cannot be turned back into a Note."""

    pass


class NoteIndexError(IndexError):
    """Raised when an index does not address an existing note."""

    pass


class EmptyNoteError(ValueError):
    """Raised when a note has neither title nor content."""

    pass


@dataclass
class Note:
    """A single user-authored note."""

    ts: str
    title: str
    content: str

    @property
    def display_title(self) -> str:
        return self.title or "(untitled)"

    @classmethod
    def create(cls, title: str, content: str, ts: str | None = None) -> "Note":
        """Build a new note stamped with the current time."""
        return cls(ts=ts or now_string(), title=title, content=content)


class EditResult(Enum):
    """What an edit did to the note sequence."""

    UPDATED = "updated"
    UNCHANGED = "unchanged"
    DELETED = "deleted"


def now_string() -> str:
    """Current local time in the stored timestamp format."""
    return datetime.now().strftime(TIMESTAMP_FORMAT)


# ============== Codec ==============


def encode_note(note: Note) -> str:
    """
    Serialize a note to one line of JSON.

    json.dumps escapes control characters, so multi-line content never
    produces a raw newline in the output.
    """
    return json.dumps(asdict(note), ensure_ascii=False)


def decode_note(line: str) -> Note:
    """Parse one stored line. Raises NoteDecodeError for anything malformed."""
    try:
        data = json.loads(line)
    except (ValueError, RecursionError) as e:
        raise NoteDecodeError(f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise NoteDecodeError(f"expected an object, got {type(data).__name__}")

    fields = {}
    for key in ("ts", "title", "content"):
        value = data.get(key)
        if not isinstance(value, str):
            raise NoteDecodeError(f"field '{key}' missing or not a string")
        fields[key] = value
    return Note(**fields)


# ============== Sequence operations ==============


def check_index(notes: list[Note], index: int) -> None:
    """Raise NoteIndexError unless 0 <= index < len(notes)."""
    if index < 0 or index >= len(notes):
        raise NoteIndexError(f"Index {index} out of range ({len(notes)} notes)")


def remove_at(notes: list[Note], index: int) -> Note:
    """Remove and return the note at index."""
    check_index(notes, index)
    return notes.pop(index)


def apply_edit(
    notes: list[Note], index: int, title: str, content: str, ts: str | None = None
) -> EditResult:
    """
    Apply an edit to the in-memory sequence.

    Both fields empty deletes the note. Identical fields leave the note
    (and its timestamp) alone. Anything else replaces the note in place
    with a fresh timestamp.
    """
    check_index(notes, index)

    if not title and not content:
        notes.pop(index)
        return EditResult.DELETED

    current = notes[index]
    if current.title == title and current.content == content:
        return EditResult.UNCHANGED

    notes[index] = Note.create(title, content, ts)
    return EditResult.UPDATED


def search_notes(notes: list[Note], term: str) -> list[tuple[int, Note]]:
    """Case-insensitive match over title and content, keeping real indices."""
    needle = term.strip().lower()
    if not needle:
        return list(enumerate(notes))
    return [
        (i, n)
        for i, n in enumerate(notes)
        if needle in f"{n.title} {n.content}".lower()
    ]


def preview(content: str, limit: int = PREVIEW_LIMIT) -> str:
    """First line of content, shortened with an ellipsis when too long."""
    first = content.split("\n", 1)[0].rstrip("\r")
    if len(first) > limit:
        return first[: limit - 3] + "..."
    return first
