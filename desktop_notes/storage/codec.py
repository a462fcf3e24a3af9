from __future__ import annotations

import json
from typing import Iterable

from desktop_notes.core.models import Note, NoteSnapshot

FORMAT_NAME = "desktop-notes"
FORMAT_VERSION = 1


class NotesFormatError(ValueError):
    """The notes file is not a valid notes document."""


def encode_notes(notes: Iterable[Note | NoteSnapshot]) -> str:
    """
    Serialize notes to the on-disk document:

        {"format": "desktop-notes", "version": 1,
         "notes": [{"title": ..., "content": ...}, ...]}
    """
    doc = {
        "format": FORMAT_NAME,
        "version": FORMAT_VERSION,
        "notes": [{"title": n.title, "content": n.content} for n in notes],
    }
    return json.dumps(doc, ensure_ascii=False, indent=2) + "\n"


def decode_notes(text: str) -> list[Note]:
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as exc:
        raise NotesFormatError(f"not JSON: {exc}") from exc

    if not isinstance(doc, dict) or doc.get("format") != FORMAT_NAME:
        raise NotesFormatError("missing or unknown format marker")
    if doc.get("version") != FORMAT_VERSION:
        raise NotesFormatError(f"unsupported version: {doc.get('version')!r}")

    items = doc.get("notes")
    if not isinstance(items, list):
        raise NotesFormatError("'notes' must be a list")

    notes: list[Note] = []
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            raise NotesFormatError(f"note #{i} is not an object")
        title = item.get("title")
        content = item.get("content")
        if not isinstance(title, str) or not isinstance(content, str):
            raise NotesFormatError(f"note #{i} needs string 'title' and 'content'")
        notes.append(Note(title, content))
    return notes
