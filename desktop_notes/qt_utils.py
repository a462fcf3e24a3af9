from __future__ import annotations

from contextlib import contextmanager


@contextmanager
def blocked_signals(obj):
    """
    Temporarily silence Qt signals on obj, always re-enabling them.
    """
    if obj is None:
        yield
        return
    previous = obj.blockSignals(True)
    try:
        yield
    finally:
        obj.blockSignals(previous)
