"""Time-derived identifier generator.

IDs are the current Unix time in milliseconds rendered as a decimal
string. Two IDs requested within the same millisecond would collide, so
the generator never hands out a value less than or equal to the last one.
"""

import threading
import time
from typing import Callable


class TimeIdGenerator:
    """Generator for unique, monotonically increasing time-based IDs.

    Example:
        >>> gen = TimeIdGenerator(clock=lambda: 1700000000.0)
        >>> gen.next_id(), gen.next_id()
        ('1700000000000', '1700000000001')
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            candidate = int(self._clock() * 1000)
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return str(candidate)


_default_generator = TimeIdGenerator()


def generate_id() -> str:
    """Return a new unique time-derived ID from the process-wide generator."""
    return _default_generator.next_id()
