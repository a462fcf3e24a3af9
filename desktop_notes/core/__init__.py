from .models import Note, NoteSnapshot
from .store import NoteStore

__all__ = ["Note", "NoteSnapshot", "NoteStore"]
