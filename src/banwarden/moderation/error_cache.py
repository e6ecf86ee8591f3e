"""
Alert throttling for persistent room errors.

A room the warden cannot moderate tends to fail the same way on every pass.
``ErrorCache`` remembers, per room and error kind, when operators were last
told about it, and only says "alert" again once the kind's interval elapsed.
"""

from __future__ import annotations

import time
from typing import Callable, Dict, Tuple

from banwarden.datatypes.error_datatypes import ErrorKind

TRIGGER_INTERVALS: Dict[ErrorKind, float] = {
    ErrorKind.PERMISSION: 3 * 60 * 60,
    ErrorKind.FATAL: 15 * 60,
}


class ErrorCache:
    """
    Remembers the last time each ``(room_id, kind)`` error was raised to operators.

    Args:
        clock: Monotonic time source in seconds; injectable for tests.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._last_triggered: Dict[Tuple[str, ErrorKind], float] = {}

    def trigger_error(self, room_id: str, kind: ErrorKind) -> bool:
        """Record an occurrence and return True if it should be reported."""
        now = self._clock()
        key = (room_id, kind)
        last = self._last_triggered.get(key)
        if last is not None and now - last < TRIGGER_INTERVALS[kind]:
            return False
        self._last_triggered[key] = now
        return True

    def reset_error(self, room_id: str, kind: ErrorKind) -> None:
        self._last_triggered.pop((room_id, kind), None)

    def reset_room(self, room_id: str) -> None:
        """Forget every error kind for ``room_id``, e.g. after a clean pass."""
        for kind in ErrorKind:
            self.reset_error(room_id, kind)
