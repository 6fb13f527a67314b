# pagewait/utils/timing.py
from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, TypeVar, ParamSpec

from pagewait.utils.logger import get_logger

P = ParamSpec("P")
T = TypeVar("T")


# ---------------- Monotonic time helpers ----------------

def now_ms() -> int:
    """Monotonic time in milliseconds."""
    return time.monotonic_ns() // 1_000_000


def sleep_ms(ms: int) -> None:
    """Sleep for `ms` milliseconds (blocking)."""
    if ms <= 0:
        return
    time.sleep(ms / 1000.0)


# ---------------- Clock ----------------

class Clock:
    """
    Time source and sleeper used by the wait engine.

    Sleeping waits on a private Event rather than calling time.sleep. Tests
    substitute a fake with the same two methods.
    """

    def __init__(self) -> None:
        self._wakeup = threading.Event()

    def now_ms(self) -> int:
        return now_ms()

    def sleep_ms(self, ms: int) -> None:
        if ms <= 0:
            return
        self._wakeup.wait(ms / 1000.0)


# ---------------- Stopwatch ----------------

@dataclass
class Stopwatch:
    """Simple stopwatch usable as a context manager."""
    clock: Clock = field(default_factory=Clock)
    start_ms: Optional[int] = None

    def start(self) -> "Stopwatch":
        self.start_ms = self.clock.now_ms()
        return self

    def elapsed_ms(self) -> int:
        if self.start_ms is None:
            return 0
        return max(0, self.clock.now_ms() - self.start_ms)

    def __enter__(self) -> "Stopwatch":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        return None


# ---------------- measure decorator ----------------

def measure(label: str = "", level: str = "INFO") -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    Decorator to log the execution time of a function.
    Example:
        @measure("open session")
        def open_session(...): ...
    """
    level = level.upper()
    log = get_logger(__name__)
    log_fn = getattr(log, level.lower(), log.info)

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            with Stopwatch() as sw:
                try:
                    return func(*args, **kwargs)
                finally:
                    ms = sw.elapsed_ms()
                    human = f"{ms} ms" if ms < 1000 else f"{ms/1000:.3f} s"
                    name = label or func.__name__
                    log_fn(f"{name} took {human}")
        wrapper.__name__ = func.__name__
        wrapper.__doc__ = func.__doc__
        return wrapper
    return decorator
