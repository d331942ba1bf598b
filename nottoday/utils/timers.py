"""
Timer scheduling for the single-threaded choreography.

Every phase delay and polling tick goes through a scheduler so the same
controller runs on a real asyncio loop (HTTP surface) or on a virtual clock
(tests, scripts/simulate_cycle.py). Both expose:
- now_ms() -> int
- call_later(delay_ms, callback) -> handle with .cancel()
"""
from __future__ import annotations

import asyncio
import heapq
import itertools
from typing import Callable, List, Optional, Protocol, Tuple


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def now_ms(self) -> int: ...

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioScheduler:
    """Runs callbacks on an asyncio event loop; time is the loop's monotonic clock."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop or asyncio.get_running_loop()

    def now_ms(self) -> int:
        return int(self._loop.time() * 1000)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        return self._loop.call_later(max(0, delay_ms) / 1000.0, callback)


class _ManualTimer:
    def __init__(self, callback: Callable[[], None]):
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Virtual clock. Nothing runs until advance() is called; callbacks fire in
    due-time order, ties broken by scheduling order.
    """

    def __init__(self, start_ms: int = 0):
        self._now = int(start_ms)
        self._queue: List[Tuple[int, int, _ManualTimer]] = []
        self._seq = itertools.count()

    def now_ms(self) -> int:
        return self._now

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> _ManualTimer:
        timer = _ManualTimer(callback)
        due = self._now + max(0, int(delay_ms))
        heapq.heappush(self._queue, (due, next(self._seq), timer))
        return timer

    def pending(self) -> int:
        return sum(1 for _, _, t in self._queue if not t.cancelled)

    def advance(self, ms: int) -> None:
        target = self._now + max(0, int(ms))
        while self._queue and self._queue[0][0] <= target:
            due, _, timer = heapq.heappop(self._queue)
            self._now = due
            if timer.cancelled:
                continue
            timer.cancelled = True
            timer.callback()
        self._now = target

    def run_until_idle(self, limit_ms: int = 60_000) -> None:
        """Drain every pending timer, failing loudly if they never settle."""
        deadline = self._now + limit_ms
        while self.pending():
            due = min(d for d, _, t in self._queue if not t.cancelled)
            if due > deadline:
                raise RuntimeError(f"timers still pending after {limit_ms}ms")
            self.advance(due - self._now)


class Interval:
    """Repeats callback every interval_ms until cancelled."""

    def __init__(self, scheduler: Scheduler, interval_ms: int, callback: Callable[[], None]):
        self._scheduler = scheduler
        self._interval_ms = interval_ms
        self._callback = callback
        self._cancelled = False
        self._handle = scheduler.call_later(interval_ms, self._tick)

    def _tick(self) -> None:
        if self._cancelled:
            return
        # re-arm first so a callback that cancels also cancels the next tick
        self._handle = self._scheduler.call_later(self._interval_ms, self._tick)
        self._callback()

    def cancel(self) -> None:
        self._cancelled = True
        self._handle.cancel()
