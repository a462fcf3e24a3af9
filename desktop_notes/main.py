from __future__ import annotations

from PySide6.QtWidgets import QApplication

from desktop_notes.logging_setup import SESSION_ID, install_global_exception_hooks, log
from desktop_notes.settings import APP_NAME
from desktop_notes.ui.main_window import NotesWindow


def main() -> int:
    install_global_exception_hooks()
    app = QApplication([])
    app.setApplicationName(APP_NAME)
    win = NotesWindow()
    win.show()
    log.info("Application started, SID=%s", SESSION_ID)
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
