from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from PySide6.QtCore import QObject, Signal

from desktop_notes.core.models import Note, NoteSnapshot
from desktop_notes.logging_setup import log
from desktop_notes.storage.codec import decode_notes, encode_notes
from desktop_notes.storage.filesystem import atomic_write_text, preserve_unreadable, write_recovery_copy


def read_notes(path: Path) -> list[Note]:
    """Raises FileNotFoundError, OSError, UnicodeDecodeError or NotesFormatError."""
    return decode_notes(Path(path).read_text(encoding="utf-8"))


def write_notes(path: Path, notes: Sequence[Note | NoteSnapshot]) -> None:
    atomic_write_text(Path(path), encode_notes(notes))


def write_recovery_snapshot(path: Path, notes: Sequence[Note | NoteSnapshot]) -> Path | None:
    """Returns the recovery file, or None if even that could not be written."""
    try:
        recovery = write_recovery_copy(Path(path), encode_notes(notes))
    except Exception:
        log.exception("Recovery copy failed: %s", path)
        return None
    log.warning("Recovery copy written: %s", recovery)
    return recovery


class LoadState(enum.Enum):
    MISSING = "missing"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class LoadResult:
    state: LoadState
    notes: list[Note] = field(default_factory=list)
    error: str | None = None
    preserved: Path | None = None


class PersistenceController(QObject):
    """
    Loads and saves the whole note collection as one file.

    Neither operation raises: failures are logged and reported via signals
    so the window can show them in the status bar.
    """

    saved = Signal(str, int)          # path, note count
    save_failed = Signal(str, str)    # path, error
    load_failed = Signal(str, str)    # path, error

    def load(self, path: Path) -> list[Note]:
        return self.load_result(path).notes

    def load_result(self, path: Path) -> LoadResult:
        path = Path(path)
        if not path.exists():
            log.info("Notes file not found, starting empty: %s", path)
            return LoadResult(LoadState.MISSING)

        try:
            notes = read_notes(path)
        except Exception as exc:
            log.exception("Load failed: %s", path)
            preserved = self._preserve(path)
            self.load_failed.emit(str(path), str(exc))
            return LoadResult(LoadState.FAILED, error=str(exc), preserved=preserved)

        log.info("Loaded notes: path=%s count=%d", path, len(notes))
        return LoadResult(LoadState.LOADED, notes)

    @staticmethod
    def _preserve(path: Path) -> Path | None:
        # The next save overwrites path, so keep the unreadable bytes aside first.
        try:
            preserved = preserve_unreadable(path)
        except Exception:
            log.exception("Could not keep a copy of unreadable file: %s", path)
            return None
        log.warning("Unreadable notes file kept as: %s", preserved)
        return preserved

    def save(self, path: Path, notes: Sequence[Note | NoteSnapshot]) -> bool:
        path = Path(path)
        try:
            write_notes(path, notes)
        except Exception as exc:
            log.exception("Save failed: %s", path)
            write_recovery_snapshot(path, notes)
            self.save_failed.emit(str(path), str(exc))
            return False

        log.debug("Saved notes: path=%s count=%d", path, len(notes))
        self.saved.emit(str(path), len(notes))
        return True
