from __future__ import annotations

from dataclasses import dataclass

from desktop_notes.settings import DEFAULT_NOTE_TITLE


@dataclass
class Note:
    title: str = DEFAULT_NOTE_TITLE
    content: str = ""

    def snapshot(self) -> NoteSnapshot:
        return NoteSnapshot(self.title, self.content)


@dataclass(frozen=True)
class NoteSnapshot:
    """Immutable copy of a note, safe to hand to another thread."""
    title: str
    content: str

    def to_note(self) -> Note:
        return Note(self.title, self.content)
