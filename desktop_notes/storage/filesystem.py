from __future__ import annotations

import os
import shutil
import uuid
from datetime import datetime
from pathlib import Path

from desktop_notes.settings import RECOVERY_DIR


def atomic_write_text(path: Path, text: str, *, encoding: str = "utf-8") -> None:
    """
    Atomic-ish file write:
    - write to temp file in same directory
    - fsync
    - replace()

    A failure at any step leaves the previous file untouched.
    """
    path = Path(path)
    parent = path.parent
    parent.mkdir(parents=True, exist_ok=True)

    tmp_path = parent / f".{path.name}.tmp-{uuid.uuid4().hex}"

    try:
        with open(tmp_path, "w", encoding=encoding, newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    finally:
        if tmp_path.exists():
            try:
                tmp_path.unlink()
            except OSError:
                pass


def write_recovery_copy(notes_path: Path, text: str, *, recovery_dir: Path = RECOVERY_DIR) -> Path:
    """
    Best-effort emergency save when the normal save fails.

    Keeps one copy per notes file in ~/.desktop-notes/recovery/, overwritten
    by each later failure so repeated autosave failures do not pile up.
    """
    notes_path = Path(notes_path)
    stem = notes_path.stem or "notes"

    recovery_path = Path(recovery_dir) / f"{stem}.recovery.json"
    atomic_write_text(recovery_path, text)
    return recovery_path


def preserve_unreadable(path: Path) -> Path:
    """
    Copy a notes file that failed to load next to itself as
    <name>.unreadable-<timestamp>, before anything overwrites it.
    """
    path = Path(path)
    ts = datetime.now().strftime("%Y%m%d-%H%M%S")
    target = path.with_name(f"{path.name}.unreadable-{ts}")
    shutil.copy2(path, target)
    return target
