from .autosave import AutosaveService

__all__ = [
    "AutosaveService",
]
