# savepoint/schedule.py
from __future__ import annotations

import heapq
import itertools
import threading
from typing import Callable, List, Protocol, Tuple


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, fn: Callable[[], None]) -> TimerHandle: ...


class ThreadingScheduler:
    """Real-time scheduler on daemon threading.Timer threads."""

    def call_later(self, delay: float, fn: Callable[[], None]) -> TimerHandle:
        t = threading.Timer(max(0.0, float(delay)), fn)
        t.daemon = True
        t.start()
        return t


class _ManualHandle:
    def __init__(self) -> None:
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual-time scheduler; callbacks run only from advance().

    Deterministic: callbacks due at the same instant run in scheduling order.
    """

    def __init__(self, start: float = 0.0) -> None:
        self.now = float(start)
        self._seq = itertools.count()
        self._queue: List[Tuple[float, int, _ManualHandle, Callable[[], None]]] = []

    def call_later(self, delay: float, fn: Callable[[], None]) -> TimerHandle:
        h = _ManualHandle()
        heapq.heappush(self._queue, (self.now + max(0.0, float(delay)), next(self._seq), h, fn))
        return h

    def pending(self) -> int:
        return sum(1 for _, _, h, _ in self._queue if not h.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing due callbacks; returns how many ran."""
        target = self.now + float(seconds)
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            when, _, h, fn = heapq.heappop(self._queue)
            self.now = when
            if h.cancelled:
                continue
            fn()
            fired += 1
        self.now = target
        return fired

    def clock_ms(self) -> int:
        return int(self.now * 1000)
