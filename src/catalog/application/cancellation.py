"""Cooperative cancellation for use-case handlers.

Callers pass a ``threading.Event``; handlers check it before touching
the store and again right before committing.  A cancelled operation
rolls back and raises OperationCancelledError, never leaving partial
state behind.
"""

from __future__ import annotations

import threading


class OperationCancelledError(Exception):
    """The caller cancelled the operation before it completed."""


def raise_if_cancelled(cancel: threading.Event | None) -> None:
    if cancel is not None and cancel.is_set():
        raise OperationCancelledError("Operation cancelled")
