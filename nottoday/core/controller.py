"""
Interaction Controller
----------------------
Sole owner of the phase and of the persisted depth counters.

Inputs:
- pointer events (down / up / leave / cancel)
- its own release timer (released -> appear branch)
- completion signals from the word lifecycle engine

INVARIANT: every transition goes through _enter(), which cancels the
controller's pending timer and swaps the whole PhaseState payload. Signals
and timers armed under an older payload are ignored.
"""
from __future__ import annotations

import random
from typing import Any, Callable, Dict, List, Optional, Sequence

from nottoday.core import state_machine as sm
from nottoday.core import timing
from nottoday.core.depth import calculate_depth, should_trigger_b_pattern
from nottoday.core.haptics import PressHaptics, Vibrator
from nottoday.core.visuals import derive_visuals
from nottoday.core.word_engine import WordLifecycleEngine
from nottoday.observability.logging import log
from nottoday.store.depth_repo import load_depth_state, save_depth_state
from nottoday.store.kv import KeyValueStore
from nottoday.store.models import DepthState
from nottoday.utils.time import clamp
from nottoday.utils.timers import Scheduler, TimerHandle

POINTER_DOWN = "down"
POINTER_UP = "up"
POINTER_LEAVE = "leave"
POINTER_CANCEL = "cancel"

PhaseListener = Callable[[sm.PhaseState], None]


def compute_hesitation(press_duration_ms: int) -> int:
    return int(clamp(
        press_duration_ms - timing.HESITATION_THRESHOLD_MS, 0, timing.MAX_HESITATION_MS
    ))


class InteractionController:
    def __init__(
        self,
        scheduler: Scheduler,
        store: KeyValueStore,
        words: Sequence[str],
        vibrator: Optional[Vibrator] = None,
        rng: Optional[random.Random] = None,
    ):
        self._scheduler = scheduler
        self._store = store
        self._depth_state = load_depth_state(store)
        self._haptics = PressHaptics(scheduler, vibrator)

        self.engine = WordLifecycleEngine(scheduler, words, rng=rng)
        self.engine.bind(self.signal)

        self._state = sm.PhaseState(phase=sm.IDLE, generation=0, enteredAtMs=scheduler.now_ms())
        self._timer: Optional[TimerHandle] = None
        self._press_started_at: Optional[int] = None
        self._hesitation_ms = 0
        self._b_pattern = False
        self._listeners: List[PhaseListener] = []

    # ------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------

    @property
    def phase(self) -> str:
        return self._state.phase

    @property
    def phase_state(self) -> sm.PhaseState:
        return self._state

    @property
    def depth_state(self) -> DepthState:
        return self._depth_state

    @property
    def depth(self) -> int:
        return self._depth_state.depth

    @property
    def b_pattern(self) -> bool:
        return self._b_pattern

    @property
    def hesitation_ms(self) -> int:
        return self._hesitation_ms

    @property
    def vibrator(self):
        return self._haptics.vibrator

    def subscribe(self, listener: PhaseListener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    # ------------------------------------------------------------
    # Pointer input
    # ------------------------------------------------------------

    def pointer_down(self) -> None:
        if self._state.phase != sm.IDLE:
            log(event="pointer_ignored", pointer=POINTER_DOWN, phase=self._state.phase)
            return
        self._press_started_at = self._scheduler.now_ms()
        self._enter(sm.PRESSING)
        self._haptics.start()

    def pointer_up(self) -> None:
        if self._state.phase != sm.PRESSING or self._press_started_at is None:
            log(event="pointer_ignored", pointer=POINTER_UP, phase=self._state.phase)
            return

        self._haptics.stop()

        duration = self._scheduler.now_ms() - self._press_started_at
        hesitation = compute_hesitation(duration)

        pull_count = self._depth_state.pullCount + 1
        depth = calculate_depth(pull_count, hesitation)
        self._depth_state = DepthState(depth=depth, pullCount=pull_count)
        save_depth_state(self._store, self._depth_state)

        # fixed for the rest of the cycle
        self._b_pattern = should_trigger_b_pattern(depth)
        self._hesitation_ms = hesitation
        self._press_started_at = None

        log(
            event="cycle_released",
            pullCount=pull_count,
            depth=depth,
            pressMs=duration,
            hesitationMs=hesitation,
            bPattern=self._b_pattern,
        )
        self._enter(sm.RELEASED)

    def pointer_leave(self) -> None:
        # leaving the control while held releases it; otherwise nothing to do
        if self._state.phase == sm.PRESSING:
            self.pointer_up()

    def pointer_cancel(self) -> None:
        self.pointer_up()

    def handle_pointer(self, kind: str) -> None:
        handler = {
            POINTER_DOWN: self.pointer_down,
            POINTER_UP: self.pointer_up,
            POINTER_LEAVE: self.pointer_leave,
            POINTER_CANCEL: self.pointer_cancel,
        }.get(kind)
        if handler is None:
            raise ValueError(f"unknown pointer event: {kind}")
        handler()

    # ------------------------------------------------------------
    # Engine signals
    # ------------------------------------------------------------

    def signal(self, signal: str, generation: int) -> None:
        if generation != self._state.generation:
            log(event="stale_signal", signal=signal, generation=generation,
                currentGeneration=self._state.generation, phase=self._state.phase)
            return
        nxt = sm.next_phase_for_signal(self._state.phase, signal)
        if nxt is None:
            log(event="stale_signal", signal=signal, generation=generation, phase=self._state.phase)
            return
        self._enter(nxt)

    # ------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------

    def _enter(self, phase: str) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        prev = self._state
        state = sm.PhaseState(
            phase=phase,
            generation=prev.generation + 1,
            enteredAtMs=self._scheduler.now_ms(),
        )
        self._state = state

        if phase == sm.IDLE:
            self._hesitation_ms = 0
            self._b_pattern = False

        log(event="phase_transition", fromPhase=prev.phase, toPhase=phase, generation=state.generation)

        if phase == sm.RELEASED:
            self._timer = self._scheduler.call_later(
                timing.RELEASE_TO_APPEAR_MS, lambda: self._appear(state)
            )

        self.engine.on_phase(state, self.depth)

        for listener in list(self._listeners):
            listener(state)

    def _appear(self, armed_under: sm.PhaseState) -> None:
        if armed_under is not self._state:
            return
        self._timer = None
        self._enter(sm.appear_phase(self._b_pattern))

    # ------------------------------------------------------------
    # Render boundary
    # ------------------------------------------------------------

    def snapshot(self) -> Dict[str, Any]:
        cycle = self.engine.cycle
        chars = self.engine.render_chars()
        return {
            "phase": self._state.phase,
            "generation": self._state.generation,
            "depth": self._depth_state.depth,
            "pullCount": self._depth_state.pullCount,
            "isBPattern": self._b_pattern,
            "hesitationTime": self._hesitation_ms,
            "word": cycle.word if cycle else None,
            "chars": chars,
            "tailLength": cycle.tailLength if cycle else 0,
            "degradingProgress": cycle.degradingProgress if cycle else 0.0,
            "symbolizingProgress": cycle.symbolizingProgress if cycle else 0.0,
            "position": cycle.position.to_dict() if cycle else None,
            "visuals": derive_visuals(
                phase=self._state.phase,
                depth=self._depth_state.depth,
                char_count=len(chars),
                tail_length=cycle.tailLength if cycle else 0,
                symbolizing_progress=cycle.symbolizingProgress if cycle else 0.0,
            ),
        }
