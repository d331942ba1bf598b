from collections import deque
from typing import Deque, List, Optional, Protocol

from nottoday.observability.logging import log
from nottoday.utils.timers import Interval, Scheduler

# on/off pairs in ms
PRESS_START_PATTERN = [10, 20] * 10
PRESS_PULSE_PATTERN = [10, 20] * 5
STOP_PATTERN = [0]

PULSE_INTERVAL_MS = 600


class Vibrator(Protocol):
    def vibrate(self, pattern: List[int]) -> None: ...


class QueuedVibrator:
    """
    Holds patterns until the client drains them (GET /haptics) and plays them
    with its own vibration API. Oldest patterns fall off when nobody drains.
    """

    def __init__(self, maxlen: int = 32):
        self._pending: Deque[List[int]] = deque(maxlen=maxlen)

    def vibrate(self, pattern: List[int]) -> None:
        self._pending.append(list(pattern))

    def drain(self) -> List[List[int]]:
        out = list(self._pending)
        self._pending.clear()
        return out


class PressHaptics:
    """
    Press feedback on top of an optional vibrator. With no vibrator every
    call is a no-op; vibrator failures are logged and never reach the caller.
    """

    def __init__(self, scheduler: Scheduler, vibrator: Optional[Vibrator] = None):
        self._scheduler = scheduler
        self._vibrator = vibrator
        self._pulse: Optional[Interval] = None

    @property
    def vibrator(self) -> Optional[Vibrator]:
        return self._vibrator

    @property
    def available(self) -> bool:
        return self._vibrator is not None

    def _send(self, pattern: List[int]) -> None:
        if self._vibrator is None:
            return
        try:
            self._vibrator.vibrate(pattern)
        except Exception as e:
            log(event="haptics_failed", error=str(e))

    def start(self) -> None:
        if self._vibrator is None:
            return
        self._cancel_pulse()
        self._send(PRESS_START_PATTERN)
        self._pulse = Interval(self._scheduler, PULSE_INTERVAL_MS, lambda: self._send(PRESS_PULSE_PATTERN))

    def stop(self) -> None:
        if self._vibrator is None:
            return
        self._cancel_pulse()
        self._send(STOP_PATTERN)

    def _cancel_pulse(self) -> None:
        if self._pulse is not None:
            self._pulse.cancel()
            self._pulse = None
