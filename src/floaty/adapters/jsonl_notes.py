"""JSON-lines note storage adapter."""

import logging
import os
from pathlib import Path

from floaty.config import NOTES_FILE
from floaty.core.notes import Note, NoteDecodeError, decode_note, encode_note

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the note or settings file cannot be read or written."""

    pass


class JsonlNoteStore:
    """
    File-based note storage.

    Implements NoteStore protocol. One JSON object per line, oldest first.
    Appends go straight to the end of the file; edits and deletes rewrite
    the whole file through a sibling temp file and an atomic rename.
    """

    def __init__(self, path: Path | str = NOTES_FILE):
        self.path = Path(path).expanduser()

    @property
    def tmp_path(self) -> Path:
        return self.path.with_name(self.path.name + ".tmp")

    def append(self, note: Note) -> None:
        """Write one encoded note to the end of the file."""
        line = encode_note(note) + "\n"
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a+b") as f:
                # A torn earlier write can leave the last line unterminated
                if f.tell() > 0:
                    f.seek(-1, os.SEEK_END)
                    if f.read(1) != b"\n":
                        f.write(b"\n")
                f.write(line.encode("utf-8"))
                f.flush()
        except (OSError, UnicodeEncodeError) as e:
            raise StorageError(f"Failed to append to {self.path}: {e}") from e
        logger.debug(f"Appended note '{note.title}' to {self.path}")

    def load(self) -> list[Note]:
        """
        Read every decodable note. A missing file is an empty store.

        Lines that fail to decode are logged and skipped so one bad line
        never hides the rest.
        """
        try:
            with self.path.open("rb") as f:
                raw_lines = f.read().split(b"\n")
        except FileNotFoundError:
            return []
        except OSError as e:
            raise StorageError(f"Failed to read {self.path}: {e}") from e

        notes = []
        for lineno, raw in enumerate(raw_lines, start=1):
            try:
                text = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                logger.warning(f"Skipping bad line {lineno} in {self.path}: {e}")
                continue
            if not text.strip():
                continue
            try:
                notes.append(decode_note(text))
            except NoteDecodeError as e:
                logger.warning(f"Skipping bad line {lineno} in {self.path}: {e}")
        return notes

    def rewrite_all(self, notes: list[Note]) -> None:
        """
        Replace the file with exactly these notes.

        The temp file is fully written and synced before the rename, so
        readers see either the old file or the new one. On failure the
        canonical file is untouched and the temp file may be left behind.
        """
        tmp = self.tmp_path
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8", newline="\n") as f:
                for note in notes:
                    f.write(encode_note(note))
                    f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except (OSError, UnicodeEncodeError) as e:
            raise StorageError(f"Failed to rewrite {self.path}: {e}") from e
        logger.debug(f"Rewrote {self.path} with {len(notes)} notes")

    def clear(self) -> None:
        """Remove every note, keeping an empty file in place."""
        self.rewrite_all([])
