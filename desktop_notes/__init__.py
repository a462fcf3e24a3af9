from .core.models import Note, NoteSnapshot
from .core.store import NoteStore
from .storage.codec import NotesFormatError
from .storage.persistence import LoadResult, LoadState, PersistenceController
from .services.autosave import AutosaveService

__all__ = ['Note',
           'NoteSnapshot',
           'NoteStore',
           'NotesFormatError',
           'LoadResult',
           'LoadState',
           'PersistenceController',
           'AutosaveService'
           ]
