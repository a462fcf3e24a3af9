import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def no_recovery(monkeypatch, tmp_path):
    """Send recovery copies into tmp_path instead of the home directory."""
    from desktop_notes.storage import filesystem, persistence

    recovery_dir = tmp_path / "recovery"

    def _write(notes_path, text):
        return filesystem.write_recovery_copy(notes_path, text, recovery_dir=recovery_dir)

    monkeypatch.setattr(persistence, "write_recovery_copy", _write)
    return recovery_dir
