# pagewait/core/errors.py
from __future__ import annotations

from typing import Any, Optional


class WaitTimeoutError(TimeoutError):
    """
    A wait's deadline elapsed before its condition held.

    `context` is the locator's string form for locator waits, the last two
    samples (previous, current) for change waits, otherwise None.
    """

    def __init__(self, description: str, timeout_ms: int, context: Optional[Any] = None) -> None:
        self.description = description
        self.timeout_ms = timeout_ms
        self.context = context
        message = f"{description} after a timeout of {timeout_ms / 1000:g} seconds"
        if isinstance(context, tuple):
            message += "; last samples: " + ", ".join(repr(c) for c in context)
        elif context is not None:
            message += f" ({context})"
        super().__init__(message)


class StaleHandleError(RuntimeError):
    """The page node behind an element handle was removed or replaced."""


class NoSuchElementError(LookupError):
    pass


class MultipleElementsError(RuntimeError):
    pass
