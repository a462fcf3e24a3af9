import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest
from PySide6.QtCore import Qt

from desktop_notes.core.models import Note, NoteSnapshot
from desktop_notes.core.store import NoteStore


def _store(*titles):
    store = NoteStore()
    for t in titles:
        store.add(Note(t, f"body of {t}"))
    return store


def test_empty_store():
    store = NoteStore()
    assert store.rowCount() == 0
    assert store.columnCount() == 1
    assert len(store) == 0


def test_adds_keep_order():
    titles = ["a", "b", "c", "a"]
    store = _store(*titles)

    assert store.rowCount() == len(titles)
    assert [store.title_at(i) for i in range(store.rowCount())] == titles


def test_add_returns_row_and_signals_insert(qapp):
    store = _store("a")
    inserted = []
    store.rowsInserted.connect(lambda parent, first, last: inserted.append((first, last)))

    row = store.add(Note("b", ""))

    assert row == 1
    assert inserted == [(1, 1)]


def test_remove_shifts_left(qapp):
    store = _store("a", "b", "c", "d")
    removed = []
    store.rowsRemoved.connect(lambda parent, first, last: removed.append((first, last)))

    note = store.remove_at(1)

    assert note.title == "b"
    assert removed == [(1, 1)]
    assert [store.title_at(i) for i in range(store.rowCount())] == ["a", "c", "d"]


@pytest.mark.parametrize("row", [-1, 3, 100])
def test_remove_out_of_range_leaves_store_unchanged(row):
    store = _store("a", "b", "c")

    with pytest.raises(IndexError):
        store.remove_at(row)

    assert store.rowCount() == 3
    assert [n.title for n in store.notes()] == ["a", "b", "c"]


@pytest.mark.parametrize("row", [-1, 2])
def test_accessors_check_bounds(row):
    store = _store("a", "b")
    with pytest.raises(IndexError):
        store.title_at(row)
    with pytest.raises(IndexError):
        store.note_at(row)
    with pytest.raises(IndexError):
        store.update_content(row, "x")


def test_update_content_only_touches_one_note():
    store = _store("a", "b", "c")

    store.update_content(1, "hello")

    assert store.note_at(1).content == "hello"
    assert store.note_at(0).content == "body of a"
    assert store.note_at(2).content == "body of c"


def test_note_at_is_live():
    store = _store("a")
    store.note_at(0).title = "renamed"
    assert store.title_at(0) == "renamed"


def test_model_data_and_header():
    store = _store("first")
    assert store.data(store.index(0, 0), Qt.DisplayRole) == "first"
    assert store.data(store.index(5, 0), Qt.DisplayRole) is None
    assert store.headerData(0, Qt.Horizontal, Qt.DisplayRole) == "Title"


def test_snapshot_is_detached():
    store = _store("a")
    snap = store.snapshot()

    store.update_content(0, "changed")
    store.add(Note("b", ""))

    assert snap == (NoteSnapshot("a", "body of a"),)


def test_replace_all_resets(qapp):
    store = _store("old")
    resets = []
    store.modelReset.connect(lambda: resets.append(True))

    store.replace_all([Note("x", "1"), Note("y", "2")])

    assert resets == [True]
    assert [n.title for n in store.notes()] == ["x", "y"]
