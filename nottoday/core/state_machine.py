# Interaction phases and the transition table driven by completion signals.
from dataclasses import dataclass
from typing import Optional

# Circle breathing, waiting for a press
IDLE = "idle"

# Pointer held down; haptic pulses running
PRESSING = "pressing"

# Press completed; depth persisted, pattern flag fixed, word selected
RELEASED = "released"

# Normal path: word fades/slides in
WORD_APPEARING = "wordAppearing"

# B pattern: word appears already corrupted
BROKEN_ON_APPEAR = "brokenOnAppear"

# Word fully legible; reading delay running
WORD_VISIBLE = "wordVisible"

# Pass-through, observable hop into degradation
READING_DETECTED = "readingDetected"

# Shake/blur ramps up; characters untouched
WORD_DEGRADING = "wordDegrading"

# Characters progressively replaced by symbols
SYMBOLIZED = "symbolized"

# Word fades out, circle returns
RESET_TO_CIRCLE = "resetToCircle"

ALL_PHASES = (
    IDLE,
    PRESSING,
    RELEASED,
    WORD_APPEARING,
    BROKEN_ON_APPEAR,
    WORD_VISIBLE,
    READING_DETECTED,
    WORD_DEGRADING,
    SYMBOLIZED,
    RESET_TO_CIRCLE,
)


# Completion signals emitted by the word lifecycle engine
SIG_VISIBLE = "visible"
SIG_BROKEN_SHOWN = "broken_shown"
SIG_READING_DETECTED = "reading_detected"
SIG_DEGRADE_NOW = "degrade_now"
SIG_SYMBOLIZED = "symbolized"
SIG_RESET = "reset"
SIG_DECAY_COMPLETE = "decay_complete"

SIGNAL_TRANSITIONS = {
    (WORD_APPEARING, SIG_VISIBLE): WORD_VISIBLE,
    (BROKEN_ON_APPEAR, SIG_BROKEN_SHOWN): SYMBOLIZED,
    (WORD_VISIBLE, SIG_READING_DETECTED): READING_DETECTED,
    (READING_DETECTED, SIG_DEGRADE_NOW): WORD_DEGRADING,
    (WORD_DEGRADING, SIG_SYMBOLIZED): SYMBOLIZED,
    (SYMBOLIZED, SIG_RESET): RESET_TO_CIRCLE,
    (RESET_TO_CIRCLE, SIG_DECAY_COMPLETE): IDLE,
}


def next_phase_for_signal(phase: str, signal: str) -> Optional[str]:
    return SIGNAL_TRANSITIONS.get((phase, signal))


def appear_phase(b_pattern: bool) -> str:
    """The one branch out of `released`, decided by the cycle's pattern flag."""
    return BROKEN_ON_APPEAR if b_pattern else WORD_APPEARING


@dataclass(frozen=True)
class PhaseState:
    """
    Payload of the active phase. Replaced wholesale on every transition;
    timers capture the instance they were armed under and compare identity
    (or generation) before acting.
    """
    phase: str
    generation: int
    enteredAtMs: int
