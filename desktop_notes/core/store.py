from __future__ import annotations

from typing import Iterable

from PySide6.QtCore import QAbstractTableModel, QModelIndex, Qt

from desktop_notes.core.models import Note, NoteSnapshot

TITLE_COLUMN = 0


class NoteStore(QAbstractTableModel):
    """
    Ordered in-memory list of notes exposed as a one-column table of titles.

    Rows are positional: row i is the i-th note added (minus deletions).
    All methods are meant to be called from the UI thread only; other threads
    get a `snapshot()` instead of the live list.
    """

    def __init__(self, notes: Iterable[Note] = (), parent=None):
        super().__init__(parent)
        self._notes: list[Note] = list(notes)

    # ───────────────────────── Qt model API ─────────────────────────

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:  # type: ignore[override]
        if parent.isValid():
            return 0
        return len(self._notes)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:  # type: ignore[override]
        if parent.isValid():
            return 0
        return 1

    def headerData(self, section, orientation, role=Qt.DisplayRole):  # type: ignore[override]
        if role == Qt.DisplayRole and orientation == Qt.Horizontal and section == TITLE_COLUMN:
            return "Title"
        return None

    def data(self, index: QModelIndex, role=Qt.DisplayRole):  # type: ignore[override]
        if not index.isValid() or not 0 <= index.row() < len(self._notes):
            return None
        if role in (Qt.DisplayRole, Qt.EditRole, Qt.ToolTipRole):
            return self._notes[index.row()].title
        return None

    # ───────────────────────── note access ─────────────────────────

    def __len__(self) -> int:
        return len(self._notes)

    def _check_row(self, row: int) -> None:
        if not 0 <= row < len(self._notes):
            raise IndexError(f"row {row} out of range [0, {len(self._notes)})")

    def title_at(self, row: int) -> str:
        self._check_row(row)
        return self._notes[row].title

    def note_at(self, row: int) -> Note:
        """Live note at row; mutating it changes the store."""
        self._check_row(row)
        return self._notes[row]

    def notes(self) -> list[Note]:
        return list(self._notes)

    def snapshot(self) -> tuple[NoteSnapshot, ...]:
        return tuple(n.snapshot() for n in self._notes)

    # ───────────────────────── mutation ─────────────────────────

    def add(self, note: Note) -> int:
        row = len(self._notes)
        self.beginInsertRows(QModelIndex(), row, row)
        self._notes.append(note)
        self.endInsertRows()
        return row

    def remove_at(self, row: int) -> Note:
        self._check_row(row)
        self.beginRemoveRows(QModelIndex(), row, row)
        note = self._notes.pop(row)
        self.endRemoveRows()
        return note

    def update_content(self, row: int, text: str) -> None:
        # No dataChanged: the title column is the only thing the view shows.
        self._check_row(row)
        self._notes[row].content = text

    def replace_all(self, notes: Iterable[Note]) -> None:
        self.beginResetModel()
        self._notes = list(notes)
        self.endResetModel()
