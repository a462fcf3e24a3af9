from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from PySide6.QtCore import QSettings

APP_NAME = "desktop-notes"
APP_TITLE = "Desktop Notes Manager"
LOG_DIR = Path.home() / f".{APP_NAME}" / "logs"
LOG_PATH = LOG_DIR / f"{APP_NAME}.log"
RECOVERY_DIR = Path.home() / f".{APP_NAME}" / "recovery"

NOTES_FILE = Path("notes.dat")
AUTOSAVE_INTERVAL_MS = 10_000
MIN_AUTOSAVE_INTERVAL_MS = 1_000
DEFAULT_NOTE_TITLE = "New Note"


@dataclass(frozen=True)
class SettingsKeys:
    UI_GEOMETRY: str = "ui/geometry"
    UI_SPLITTER: str = "ui/splitter_sizes"
    AUTOSAVE_INTERVAL: str = "autosave/interval_ms"


def get_int(settings: QSettings, key: str, default: int) -> int:
    try:
        return int(settings.value(key, default))
    except Exception:
        return default


def get_sizes(settings: QSettings, key: str) -> list[int] | None:
    value = settings.value(key)
    if value is None:
        return None
    # QSettings may hand back a list, a tuple or "350,650" depending on backend
    if isinstance(value, str):
        value = value.replace(",", " ").split()
    if not isinstance(value, (list, tuple)):
        return None
    out: list[int] = []
    for x in value:
        try:
            out.append(int(x))
        except (TypeError, ValueError):
            continue
    return out or None
