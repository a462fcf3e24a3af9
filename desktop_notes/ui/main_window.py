from __future__ import annotations

from datetime import datetime
from pathlib import Path

from PySide6.QtCore import QSettings, Qt, Slot
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QAbstractItemView, QHeaderView, QLabel, QMainWindow, QMessageBox,
    QPlainTextEdit, QSplitter, QTableView, QToolBar,
)

from desktop_notes.core.models import Note
from desktop_notes.core.store import NoteStore
from desktop_notes.logging_setup import log
from desktop_notes.qt_utils import blocked_signals
from desktop_notes.services.autosave import AutosaveService
from desktop_notes.settings import (
    APP_NAME, APP_TITLE, AUTOSAVE_INTERVAL_MS, DEFAULT_NOTE_TITLE, NOTES_FILE,
    SettingsKeys, get_int, get_sizes,
)
from desktop_notes.storage.persistence import LoadState, PersistenceController


class NotesWindow(QMainWindow):
    def __init__(
        self,
        *,
        notes_path: Path = NOTES_FILE,
        autosave_ms: int = AUTOSAVE_INTERVAL_MS,
        settings: QSettings | None = None,
    ):
        super().__init__()
        self.setWindowTitle(APP_TITLE)

        self.notes_path = Path(notes_path)
        self.settings = settings if settings is not None else QSettings(APP_NAME, APP_NAME)

        self.store = NoteStore(parent=self)
        self.persistence = PersistenceController(self)

        # UI

        self.table = QTableView()
        self.table.setModel(self.store)
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SingleSelection)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.table.verticalHeader().setVisible(False)

        self.editor = QPlainTextEdit()
        self.status_label = QLabel()

        self.splitter = QSplitter(Qt.Horizontal)
        self.splitter.addWidget(self.table)
        self.splitter.addWidget(self.editor)
        self.setCentralWidget(self.splitter)
        self.statusBar().addWidget(self.status_label, 1)

        self._build_menu()
        self._build_toolbar()

        # Signals
        self.table.selectionModel().selectionChanged.connect(self._on_select_note)
        self.editor.textChanged.connect(self._on_text_changed)
        self.persistence.load_failed.connect(self._on_load_failed)

        self._load_notes()

        self.autosave = AutosaveService(
            store=self.store,
            path=self.notes_path,
            controller=self.persistence,
            interval_ms=get_int(self.settings, SettingsKeys.AUTOSAVE_INTERVAL, autosave_ms),
            parent=self,
        )
        self.autosave.saved.connect(self._on_saved)
        self.autosave.save_failed.connect(self._on_save_failed)
        self.autosave.start()

        self._restore_ui_state()
        log.info("Window initialized: notes=%d path=%s", len(self.store), self.notes_path)

    def _build_menu(self):
        menubar = self.menuBar()
        filem = menubar.addMenu("File")

        act_new = QAction("New Note", self)
        act_new.setShortcut("Ctrl+N")
        act_new.triggered.connect(self.add_note)

        act_save = QAction("Save", self)
        act_save.setShortcut("Ctrl+S")
        act_save.triggered.connect(self.save_notes)

        act_exit = QAction("Exit", self)
        act_exit.triggered.connect(self.close)

        filem.addAction(act_new)
        filem.addAction(act_save)
        filem.addSeparator()
        filem.addAction(act_exit)

        helpm = menubar.addMenu("Help")
        act_about = QAction("About", self)
        act_about.triggered.connect(
            lambda: QMessageBox.information(self, "About", f"{APP_TITLE}\nPySide6 notes app")
        )
        helpm.addAction(act_about)

    def _build_toolbar(self):
        tb = QToolBar("Notes", self)
        tb.setObjectName("notes_toolbar")
        tb.addAction("Add", self.add_note)
        tb.addAction("Delete", self.delete_note)
        self.addToolBar(tb)

    # ───────────────────────── UI state ─────────────────────────

    def _restore_ui_state(self) -> None:
        geo = self.settings.value(SettingsKeys.UI_GEOMETRY)
        if geo:
            self.restoreGeometry(geo)
        else:
            self.resize(1000, 600)

        sizes = get_sizes(self.settings, SettingsKeys.UI_SPLITTER)
        self.splitter.setSizes(sizes or [350, 650])

    def _save_ui_state(self) -> None:
        self.settings.setValue(SettingsKeys.UI_GEOMETRY, self.saveGeometry())
        self.settings.setValue(SettingsKeys.UI_SPLITTER, self.splitter.sizes())

    def closeEvent(self, event):  # type: ignore[override]
        """Final synchronous save so edits since the last autosave are kept."""
        try:
            self._save_ui_state()
        except Exception:
            log.exception("Failed to save UI state")
        self.autosave.stop()
        self.autosave.save_now()
        log.info("Window closed")
        super().closeEvent(event)

    # ───────────────────────── actions ─────────────────────────

    def selected_row(self) -> int:
        rows = self.table.selectionModel().selectedRows()
        return rows[0].row() if rows else -1

    def add_note(self):
        row = self.store.add(Note(DEFAULT_NOTE_TITLE, ""))
        self.table.selectRow(row)
        self.status("Note added")

    def delete_note(self):
        row = self.selected_row()
        if row < 0:
            return
        # Otherwise the view moves the selection onto a neighbour mid-removal.
        self.table.clearSelection()
        self.store.remove_at(row)
        with blocked_signals(self.editor):
            self.editor.clear()
        self.status("Note deleted")

    def save_notes(self):
        self.autosave.save_now()

    def status(self, msg: str) -> None:
        self.status_label.setText(f"{msg} • {datetime.now():%Y-%m-%d %H:%M:%S}")

    def _load_notes(self) -> None:
        result = self.persistence.load_result(self.notes_path)
        self.store.replace_all(result.notes)
        if result.state is LoadState.LOADED:
            self.status(f"Loaded {len(result.notes)} notes")
        elif result.state is LoadState.MISSING:
            self.status("Ready")

    # ───────────────────────── slots ─────────────────────────

    def _on_select_note(self, *_):
        row = self.selected_row()
        if row < 0:
            return
        with blocked_signals(self.editor):
            self.editor.setPlainText(self.store.note_at(row).content)

    def _on_text_changed(self):
        row = self.selected_row()
        if row < 0:
            return
        self.store.update_content(row, self.editor.toPlainText())
        self.status("Edited note")

    @Slot(str, int)
    def _on_saved(self, path: str, count: int):
        self.status("Saved")

    @Slot(str, str)
    def _on_save_failed(self, path: str, err: str):
        self.status(f"Save failed: {err}")

    @Slot(str, str)
    def _on_load_failed(self, path: str, err: str):
        self.status(f"Load failed: {err}")
