"""Tests for the JSON-lines note store."""

import hashlib
import logging
import os
from unittest.mock import patch

import pytest

from floaty.adapters.jsonl_notes import JsonlNoteStore, StorageError
from floaty.core.notes import Note, encode_note


@pytest.fixture
def path(tmp_path):
    return tmp_path / "notes.jsonl"


@pytest.fixture
def store(path):
    return JsonlNoteStore(path)


def _note(title: str, content: str = "") -> Note:
    return Note(ts="2025-01-15 09:00:00", title=title, content=content)


def _digest(path) -> str:
    return hashlib.sha256(path.read_bytes()).hexdigest()


class TestLoad:
    def test_missing_file_is_empty(self, store, path):
        assert store.load() == []
        assert not path.exists()

    def test_blank_lines_ignored(self, store, path):
        path.write_text(encode_note(_note("A")) + "\n\n   \n" + encode_note(_note("B")) + "\n")
        assert [n.title for n in store.load()] == ["A", "B"]

    def test_last_line_without_newline(self, store, path):
        path.write_text(encode_note(_note("A")))
        assert [n.title for n in store.load()] == ["A"]

    def test_corrupt_line_skipped_with_one_warning(self, store, path, caplog):
        lines = [encode_note(_note(t)) for t in ("A", "B", "C")]
        lines.insert(1, '{"ts": "broken')
        path.write_text("\n".join(lines) + "\n")

        with caplog.at_level(logging.WARNING, logger="floaty.adapters.jsonl_notes"):
            notes = store.load()

        assert [n.title for n in notes] == ["A", "B", "C"]
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "line 2" in warnings[0].getMessage()

    def test_invalid_utf8_line_skipped(self, store, path, caplog):
        path.write_bytes(
            encode_note(_note("A")).encode() + b"\n\xff\xfe\n" + encode_note(_note("B")).encode() + b"\n"
        )
        with caplog.at_level(logging.WARNING):
            notes = store.load()
        assert [n.title for n in notes] == ["A", "B"]
        assert len(caplog.records) == 1

    def test_unreadable_path_raises_storage_error(self, tmp_path):
        store = JsonlNoteStore(tmp_path)  # a directory, not a file
        with pytest.raises(StorageError):
            store.load()

    def test_oversized_integer_line_skipped(self, store, path, caplog):
        path.write_text(
            encode_note(_note("A")) + "\n"
            + '{"ts": ' + "1" * 5000 + "}\n"
            + encode_note(_note("B")) + "\n"
        )
        with caplog.at_level(logging.WARNING, logger="floaty.adapters.jsonl_notes"):
            notes = store.load()
        assert [n.title for n in notes] == ["A", "B"]
        assert len(caplog.records) == 1


class TestAppend:
    def test_creates_file(self, store, path):
        store.append(_note("A", "x"))
        assert path.read_text() == encode_note(_note("A", "x")) + "\n"

    def test_new_note_is_tail_and_prior_unchanged(self, store):
        store.append(_note("A", "x"))
        store.append(_note("B", "y"))
        before = store.load()

        store.append(_note("C", "z"))

        after = store.load()
        assert after[:-1] == before
        assert after[-1] == _note("C", "z")

    def test_multiline_content_stays_one_line(self, store, path):
        store.append(_note("A", "one\ntwo\nthree"))
        assert len(path.read_text().splitlines()) == 1
        assert store.load()[0].content == "one\ntwo\nthree"

    def test_terminates_torn_last_line(self, store, path):
        path.write_text(encode_note(_note("A")) + "\n" + '{"ts": "torn')
        store.append(_note("B"))
        assert [n.title for n in store.load()] == ["A", "B"]

    def test_creates_parent_directory(self, tmp_path):
        store = JsonlNoteStore(tmp_path / "nested" / "notes.jsonl")
        store.append(_note("A"))
        assert store.load() == [_note("A")]

    def test_failure_raises_storage_error(self, store, path):
        store.append(_note("A"))
        before = path.read_bytes()
        with patch("pathlib.Path.open", side_effect=PermissionError("denied")):
            with pytest.raises(StorageError):
                store.append(_note("B"))
        assert path.read_bytes() == before

    def test_unencodable_text_raises_storage_error(self, store, path):
        store.append(_note("A"))
        before = path.read_bytes()
        with pytest.raises(StorageError):
            store.append(_note("\ud800"))
        assert path.read_bytes() == before


class TestRewriteAll:
    def test_replaces_content_in_order(self, store):
        for t in ("A", "B", "C"):
            store.append(_note(t))
        store.rewrite_all([_note("C"), _note("A")])
        assert [n.title for n in store.load()] == ["C", "A"]

    def test_no_temp_file_left_on_success(self, store):
        store.append(_note("A"))
        store.rewrite_all([_note("B")])
        assert not store.tmp_path.exists()

    def test_creates_file_when_missing(self, store, path):
        store.rewrite_all([_note("A")])
        assert store.load() == [_note("A")]

    def test_failed_rename_leaves_canonical_file_untouched(self, store, path):
        for t in ("A", "B"):
            store.append(_note(t))
        digest = _digest(path)

        with patch("floaty.adapters.jsonl_notes.os.replace", side_effect=OSError("disk gone")):
            with pytest.raises(StorageError):
                store.rewrite_all([_note("Z")])

        assert _digest(path) == digest
        assert [n.title for n in store.load()] == ["A", "B"]
        # The fully written temp file is an acceptable orphan
        assert store.tmp_path.exists()

    def test_failed_fsync_leaves_canonical_file_untouched(self, store, path):
        store.append(_note("A"))
        digest = _digest(path)

        with patch("floaty.adapters.jsonl_notes.os.fsync", side_effect=OSError("io error")):
            with pytest.raises(StorageError):
                store.rewrite_all([])

        assert _digest(path) == digest

    def test_data_synced_before_rename(self, store):
        calls = []
        real_fsync, real_replace = os.fsync, os.replace

        def fake_fsync(fd):
            calls.append("fsync")
            real_fsync(fd)

        def fake_replace(src, dst):
            calls.append("replace")
            real_replace(src, dst)

        with patch("floaty.adapters.jsonl_notes.os.fsync", side_effect=fake_fsync), patch(
            "floaty.adapters.jsonl_notes.os.replace", side_effect=fake_replace
        ):
            store.rewrite_all([_note("A")])

        assert calls == ["fsync", "replace"]

    def test_stale_temp_file_is_overwritten(self, store):
        store.tmp_path.write_text("leftover garbage\n")
        store.rewrite_all([_note("A")])
        assert store.load() == [_note("A")]

    def test_unencodable_text_leaves_canonical_file_untouched(self, store, path):
        store.append(_note("A"))
        digest = _digest(path)
        with pytest.raises(StorageError):
            store.rewrite_all([_note("B"), _note("\udcff")])
        assert _digest(path) == digest


class TestClear:
    def test_clear_empties_store(self, store, path):
        store.append(_note("A"))
        store.clear()
        assert store.load() == []
        assert path.read_text() == ""
