import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from desktop_notes.core.models import Note
from desktop_notes.core.store import NoteStore
from desktop_notes.storage.codec import decode_notes
from desktop_notes.storage.filesystem import atomic_write_text
from desktop_notes.storage.persistence import LoadState, PersistenceController


@pytest.mark.parametrize("notes", [
    [],
    [Note("only", "")],
    [Note("a", "1"), Note("a", "2"), Note("", "no title")],
])
def test_round_trip(tmp_path, notes):
    path = tmp_path / "notes.dat"
    ctl = PersistenceController()

    assert ctl.save(path, notes) is True
    assert PersistenceController().load(path) == notes


def test_missing_file_is_empty(tmp_path):
    result = PersistenceController().load_result(tmp_path / "nope.dat")

    assert result.state is LoadState.MISSING
    assert result.notes == []
    assert result.error is None


def test_corrupt_file_loads_empty_and_reports(tmp_path):
    path = tmp_path / "notes.dat"
    path.write_bytes(b"\xac\xed\x00\x05 not our format")
    ctl = PersistenceController()
    failures = []
    ctl.load_failed.connect(lambda p, err: failures.append(p))

    result = ctl.load_result(path)

    assert result.state is LoadState.FAILED
    assert result.notes == []
    assert result.error
    assert failures == [str(path)]
    assert ctl.load(path) == []


def test_save_failure_does_not_raise(tmp_path, no_recovery):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    path = blocker / "notes.dat"
    ctl = PersistenceController()
    failures = []
    ctl.save_failed.connect(lambda p, err: failures.append(p))

    assert ctl.save(path, [Note("a", "b")]) is False
    assert failures == [str(path)]
    assert [p.name for p in no_recovery.iterdir()] == ["notes.recovery.json"]


def test_save_overwrites_whole_file(tmp_path):
    path = tmp_path / "notes.dat"
    ctl = PersistenceController()
    ctl.save(path, [Note("a", "1"), Note("b", "2")])

    ctl.save(path, [Note("c", "3")])

    assert ctl.load(path) == [Note("c", "3")]
    assert [p.name for p in tmp_path.iterdir()] == ["notes.dat"]


def test_atomic_write_keeps_old_file_on_encode_error(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("old", encoding="utf-8")

    with pytest.raises(UnicodeEncodeError):
        atomic_write_text(path, "\udcff", encoding="utf-8")

    assert path.read_text(encoding="utf-8") == "old"
    assert [p.name for p in tmp_path.iterdir()] == ["notes.txt"]


def test_new_note_scenario(tmp_path):
    path = tmp_path / "notes.dat"
    store = NoteStore()

    store.add(Note("New Note", ""))
    assert store.rowCount() == 1
    assert store.title_at(0) == "New Note"

    store.update_content(0, "hello")
    assert store.note_at(0).content == "hello"

    assert PersistenceController().save(path, store.snapshot())
    assert PersistenceController().load(path) == [Note("New Note", "hello")]


JAVA_SERIALIZED = b"\xac\xed\x00\x05sr\x00\x13java.util.ArrayList"


def test_unreadable_file_is_kept_aside(tmp_path):
    path = tmp_path / "notes.dat"
    path.write_bytes(JAVA_SERIALIZED)

    result = PersistenceController().load_result(path)

    assert result.state is LoadState.FAILED
    assert result.preserved is not None
    assert result.preserved.parent == tmp_path
    assert result.preserved.name.startswith("notes.dat.unreadable-")
    assert result.preserved.read_bytes() == JAVA_SERIALIZED


def test_missing_and_valid_files_are_not_copied(tmp_path):
    path = tmp_path / "notes.dat"
    ctl = PersistenceController()
    assert ctl.load_result(path).preserved is None

    ctl.save(path, [Note("a", "b")])
    assert ctl.load_result(path).preserved is None
    assert [p.name for p in tmp_path.iterdir()] == ["notes.dat"]


def test_repeated_save_failures_keep_one_recovery_file(tmp_path, no_recovery):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    path = blocker / "notes.dat"
    ctl = PersistenceController()

    for i in range(3):
        assert ctl.save(path, [Note("a", str(i))]) is False

    files = list(no_recovery.iterdir())
    assert len(files) == 1
    assert decode_notes(files[0].read_text(encoding="utf-8")) == [Note("a", "2")]
