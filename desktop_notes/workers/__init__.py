from .autosave import AutosaveWorker

__all__ = [
    "AutosaveWorker",
]
