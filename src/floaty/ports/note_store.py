"""Note storage interface."""

from typing import Protocol

from floaty.core.notes import Note


class NoteStore(Protocol):
    """Interface for persisting the ordered note sequence."""

    def append(self, note: Note) -> None:
        """Add a note to the tail of the store."""
        ...

    def load(self) -> list[Note]:
        """Read every readable note, oldest first."""
        ...

    def rewrite_all(self, notes: list[Note]) -> None:
        """Replace the whole store with the given sequence."""
        ...

    def clear(self) -> None:
        """Remove every note."""
        ...
