# Overview: Record identity allocation; unique, strictly increasing string ids.

"""
Identity Service

Ids are millisecond timestamps rendered as decimal strings. The clock only
proposes a value: each id is bumped past the last one issued, so two records
created in the same millisecond (or after the clock steps backwards) still
get distinct, increasing ids.

OBSERVE: ids already on disk are fed back through ``observe`` so a restarted
process never reissues or undercuts an existing numeric id.
"""
from __future__ import annotations

import threading
import time
from typing import Callable, Iterable


def _clock_ms() -> int:
    return time.time_ns() // 1_000_000


class IdentityService:
    def __init__(self, clock: Callable[[], int] = _clock_ms):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    @property
    def last_issued(self) -> int:
        return self._last

    def next_id(self) -> str:
        with self._lock:
            candidate = max(self._clock(), self._last + 1)
            self._last = candidate
            return str(candidate)

    def observe(self, ids: Iterable[str]) -> None:
        """Advance past any numeric id already in use. Non-numeric ids are ignored."""
        highest = 0
        for value in ids:
            if value and value.isdigit():
                highest = max(highest, int(value))
        with self._lock:
            self._last = max(self._last, highest)
