from .codec import NotesFormatError, decode_notes, encode_notes
from .filesystem import atomic_write_text, preserve_unreadable, write_recovery_copy
from .persistence import LoadResult, LoadState, PersistenceController, read_notes, write_notes

__all__ = ["NotesFormatError",
           "decode_notes",
           "encode_notes",
           "atomic_write_text",
           "preserve_unreadable",
           "write_recovery_copy",
           "LoadResult",
           "LoadState",
           "PersistenceController",
           "read_notes",
           "write_notes",
           ]
