from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QObject, QRunnable, Signal

from desktop_notes.core.models import NoteSnapshot
from desktop_notes.storage.persistence import write_notes, write_recovery_snapshot


class AutosaveSignals(QObject):
    finished = Signal(int, int)   # req_id, note count
    failed = Signal(int, str)     # req_id, error


class AutosaveWorker(QRunnable):
    """
    Writes one immutable snapshot of the store to disk off the UI thread.

    The worker only ever sees the snapshot it was built with, never the
    live NoteStore.
    """

    def __init__(self, *, req_id: int, path: Path, snapshot: tuple[NoteSnapshot, ...]):
        super().__init__()
        self.req_id = req_id
        self.path = Path(path)
        self.snapshot = tuple(snapshot)
        self.signals = AutosaveSignals()

    def run(self) -> None:
        try:
            write_notes(self.path, self.snapshot)
            self.signals.finished.emit(self.req_id, len(self.snapshot))
        except Exception as exc:
            write_recovery_snapshot(self.path, self.snapshot)
            self.signals.failed.emit(self.req_id, str(exc))
