from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QObject, QThreadPool, QTimer, Signal, Slot

from desktop_notes.core.store import NoteStore
from desktop_notes.logging_setup import log
from desktop_notes.settings import AUTOSAVE_INTERVAL_MS, MIN_AUTOSAVE_INTERVAL_MS
from desktop_notes.storage.persistence import PersistenceController
from desktop_notes.workers.autosave import AutosaveWorker


class AutosaveService(QObject):
    """
    Periodically saves the whole store.

    Responsibilities:
    - run the autosave timer on the UI thread
    - snapshot the store at each tick and queue it for writing
    - write snapshots one at a time, in submission order
    - relay worker outcomes as saved / save_failed
    """

    saved = Signal(str, int)          # path, note count
    save_failed = Signal(str, str)    # path, error

    def __init__(
        self,
        *,
        store: NoteStore,
        path: Path,
        controller: PersistenceController,
        interval_ms: int = AUTOSAVE_INTERVAL_MS,
        parent: QObject | None = None,
    ):
        super().__init__(parent)

        self._store = store
        self._path = Path(path)
        self._controller = controller
        self._req_id = 0

        # One thread: snapshots hit the disk in the order they were taken.
        self._pool = QThreadPool(self)
        self._pool.setMaxThreadCount(1)

        self._timer = QTimer(self)
        self._timer.setInterval(max(MIN_AUTOSAVE_INTERVAL_MS, int(interval_ms)))
        self._timer.timeout.connect(self.trigger)

        self._controller.saved.connect(self.saved)
        self._controller.save_failed.connect(self.save_failed)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    def is_running(self) -> bool:
        return self._timer.isActive()

    # ───────────────────────── public API ─────────────────────────

    def start(self) -> None:
        log.info("Autosave started: path=%s interval_ms=%d", self._path, self._timer.interval())
        self._timer.start()

    def stop(self) -> None:
        """Stop the timer and wait for writes already queued."""
        self._timer.stop()
        self._pool.waitForDone()

    @Slot()
    def trigger(self) -> int:
        """Queue a background save of the current store contents. Returns req_id."""
        self._req_id += 1
        req_id = self._req_id

        snapshot = self._store.snapshot()
        worker = AutosaveWorker(req_id=req_id, path=self._path, snapshot=snapshot)
        worker.signals.finished.connect(self._on_finished)
        worker.signals.failed.connect(self._on_failed)

        log.debug("Autosave queued: req_id=%d count=%d", req_id, len(snapshot))
        self._pool.start(worker)
        return req_id

    def save_now(self) -> bool:
        """Synchronous save on the calling (UI) thread, after queued autosaves finish."""
        self._pool.waitForDone()
        return self._controller.save(self._path, self._store.snapshot())

    def wait(self, msecs: int = -1) -> bool:
        return self._pool.waitForDone(msecs)

    # ───────────────────────── internal ─────────────────────────

    @Slot(int, int)
    def _on_finished(self, req_id: int, count: int) -> None:
        log.debug("Autosave done: req_id=%d count=%d", req_id, count)
        self.saved.emit(str(self._path), count)

    @Slot(int, str)
    def _on_failed(self, req_id: int, err: str) -> None:
        log.error("Autosave failed: req_id=%d path=%s err=%s", req_id, self._path, err)
        self.save_failed.emit(str(self._path), err)
