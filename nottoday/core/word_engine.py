"""
Word Lifecycle Engine
---------------------
Reacts to every phase the controller enters. Owns the word of the current
cycle (selection, position, tail length, progress) and the sub-timers that
report completion back to the controller as signals.

Timer hygiene: on_phase() cancels whatever the previous phase armed before
arming anything new, and each callback re-checks that the phase payload it
was armed under is still the active one.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from nottoday.core import state_machine as sm
from nottoday.core import timing
from nottoday.core.dictionary import choose_word, ensure_words
from nottoday.core.positions import Position, pick_position, position_seed
from nottoday.core.symbols import apply_broken_pattern, broken_seed, symbolize, symbolize_seed
from nottoday.observability.logging import log
from nottoday.utils.timers import Interval, Scheduler, TimerHandle

SignalCallback = Callable[[str, int], None]


@dataclass
class WordCycle:
    """Transient per-cycle state. Word, position and tail are fixed at selection."""
    word: str
    position: Position
    tailLength: int
    degradingProgress: float = 0.0
    symbolizingProgress: float = 0.0
    brokenChars: List[str] = field(default_factory=list)


def pick_tail_length(depth: int, rng=None) -> int:
    rng = rng or random
    if depth == 3:
        if rng.random() < 0.5:
            return 1
        return int(rng.random() * 3) + 1
    return int(rng.random() * 5) + 1


def _progress(elapsed_ms: int, duration_ms: int) -> float:
    return min(max(elapsed_ms, 0) / duration_ms, 1.0)


class WordLifecycleEngine:
    def __init__(
        self,
        scheduler: Scheduler,
        words: Sequence[str],
        rng: Optional[random.Random] = None,
    ):
        self._scheduler = scheduler
        self._words = ensure_words(words)
        self._rng = rng
        self._on_signal: Optional[SignalCallback] = None
        self._active: Optional[sm.PhaseState] = None
        self._depth = 0
        self._handles: List[TimerHandle] = []
        self.cycle: Optional[WordCycle] = None

    def bind(self, on_signal: SignalCallback) -> None:
        self._on_signal = on_signal

    @property
    def phase(self) -> Optional[str]:
        return self._active.phase if self._active else None

    # ------------------------------------------------------------
    # Phase dispatch
    # ------------------------------------------------------------

    def on_phase(self, state: sm.PhaseState, depth: int) -> None:
        self._cancel_timers()
        self._active = state
        self._depth = depth

        handler = {
            sm.IDLE: self._on_idle,
            sm.RELEASED: self._on_released,
            sm.WORD_APPEARING: self._on_word_appearing,
            sm.BROKEN_ON_APPEAR: self._on_broken_on_appear,
            sm.WORD_VISIBLE: self._on_word_visible,
            sm.READING_DETECTED: self._on_reading_detected,
            sm.WORD_DEGRADING: self._on_word_degrading,
            sm.SYMBOLIZED: self._on_symbolized,
            sm.RESET_TO_CIRCLE: self._on_reset_to_circle,
        }.get(state.phase)
        if handler is not None:
            handler(state)

    def _on_idle(self, state: sm.PhaseState) -> None:
        self.cycle = None

    def _on_released(self, state: sm.PhaseState) -> None:
        self._select_word()

    def _on_word_appearing(self, state: sm.PhaseState) -> None:
        self._ensure_word()
        self._after(state, timing.APPEAR_MS, sm.SIG_VISIBLE)

    def _on_broken_on_appear(self, state: sm.PhaseState) -> None:
        cycle = self._ensure_word()
        cycle.brokenChars = apply_broken_pattern(
            cycle.word, self._depth, broken_seed(cycle.word, self._depth)
        )
        self._after(state, timing.BROKEN_ON_APPEAR_MS, sm.SIG_BROKEN_SHOWN)

    def _on_word_visible(self, state: sm.PhaseState) -> None:
        self._after(state, timing.for_depth(timing.READING_MS, self._depth), sm.SIG_READING_DETECTED)

    def _on_reading_detected(self, state: sm.PhaseState) -> None:
        # zero delay: the controller observes readingDetected for one loop turn
        self._after(state, 0, sm.SIG_DEGRADE_NOW)

    def _on_word_degrading(self, state: sm.PhaseState) -> None:
        if self.cycle is None:
            return
        duration = timing.for_depth(timing.DEGRADING_MS, self._depth)
        started = self._scheduler.now_ms()

        def tick():
            if not self._is_active(state) or self.cycle is None:
                return
            progress = _progress(self._scheduler.now_ms() - started, duration)
            self.cycle.degradingProgress = progress
            if progress >= 1:
                self._cancel_timers()
                self._emit(state, sm.SIG_SYMBOLIZED)

        self._every(timing.POLL_INTERVAL_MS, tick)

    def _on_symbolized(self, state: sm.PhaseState) -> None:
        if self.cycle is None:
            return
        duration = timing.for_depth(timing.SYMBOLIZING_MS, self._depth)
        started = self._scheduler.now_ms()

        def tick():
            if not self._is_active(state) or self.cycle is None:
                return
            progress = _progress(self._scheduler.now_ms() - started, duration)
            self.cycle.symbolizingProgress = progress
            if progress >= 1:
                self._cancel_timers()
                # let the final symbols linger before handing back
                self._after(state, timing.LINGER_MS, sm.SIG_RESET)

        self._every(timing.POLL_INTERVAL_MS, tick)

    def _on_reset_to_circle(self, state: sm.PhaseState) -> None:
        def done():
            if not self._is_active(state):
                return
            self.cycle = None
            self._emit(state, sm.SIG_DECAY_COMPLETE)

        self._handles.append(self._scheduler.call_later(timing.RESET_MS, done))

    # ------------------------------------------------------------
    # Word selection
    # ------------------------------------------------------------

    def _select_word(self) -> WordCycle:
        word = choose_word(self._words, self._rng)
        seed = position_seed(word, self._scheduler.now_ms())
        self.cycle = WordCycle(
            word=word,
            position=pick_position(seed),
            tailLength=pick_tail_length(self._depth, self._rng),
        )
        log(
            event="word_selected",
            word=word,
            depth=self._depth,
            tailLength=self.cycle.tailLength,
            positionSeed=seed,
        )
        return self.cycle

    def _ensure_word(self) -> WordCycle:
        if self.cycle is None:
            return self._select_word()
        return self.cycle

    # ------------------------------------------------------------
    # Render view
    # ------------------------------------------------------------

    def render_chars(self) -> List[str]:
        """Characters as they should be drawn right now."""
        cycle = self.cycle
        if cycle is None:
            return []
        phase = self.phase
        if phase == sm.BROKEN_ON_APPEAR and cycle.brokenChars:
            return list(cycle.brokenChars)
        chars = list(cycle.word)
        if phase in (sm.SYMBOLIZED, sm.RESET_TO_CIRCLE):
            progress = cycle.symbolizingProgress
            return symbolize(chars, progress, cycle.tailLength, symbolize_seed(cycle.word, progress))
        return chars

    # ------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------

    def _is_active(self, state: sm.PhaseState) -> bool:
        return self._active is state

    def _emit(self, state: sm.PhaseState, signal: str) -> None:
        if self._on_signal is not None:
            self._on_signal(signal, state.generation)

    def _after(self, state: sm.PhaseState, delay_ms: int, signal: str) -> None:
        def fire():
            if self._is_active(state):
                self._emit(state, signal)

        self._handles.append(self._scheduler.call_later(delay_ms, fire))

    def _every(self, interval_ms: int, callback: Callable[[], None]) -> None:
        self._handles.append(Interval(self._scheduler, interval_ms, callback))

    def _cancel_timers(self) -> None:
        handles, self._handles = self._handles, []
        for handle in handles:
            handle.cancel()
