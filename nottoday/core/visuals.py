"""Derived visual parameters handed to the renderer alongside the phase."""
import math
from typing import Any, Dict, List

from nottoday.core import state_machine as sm
from nottoday.core.symbols import TAIL_RELEASE_PROGRESS

SHAKE_INTENSITY = (1.0, 1.5, 2.0, 2.5)

# Tail characters turn into a soft glow near the end of symbolizing
SHADOW_PROGRESS = 0.85
SHADOW_MAX_TAIL = 3

CIRCLE_PHASES = (sm.IDLE, sm.PRESSING)

WORD_PHASES = (
    sm.WORD_APPEARING,
    sm.BROKEN_ON_APPEAR,
    sm.WORD_VISIBLE,
    sm.WORD_DEGRADING,
    sm.SYMBOLIZED,
    sm.RESET_TO_CIRCLE,
)


def shake_intensity(depth: int) -> float:
    return SHAKE_INTENSITY[min(max(int(depth), 0), len(SHAKE_INTENSITY) - 1)]


def broken_char_opacity(index: int) -> float:
    return 0.7 + math.sin(index * 0.5) * 0.15


def char_styles(
    phase: str,
    char_count: int,
    tail_length: int,
    symbolizing_progress: float,
) -> List[Dict[str, Any]]:
    styles = []
    for i in range(char_count):
        style: Dict[str, Any] = {
            "tail": i >= char_count - tail_length,
            "shadow": False,
            "opacity": None,
        }
        if phase == sm.BROKEN_ON_APPEAR:
            style["opacity"] = round(broken_char_opacity(i), 4)
        elif phase in (sm.SYMBOLIZED, sm.RESET_TO_CIRCLE):
            last_few = i >= char_count - min(SHADOW_MAX_TAIL, tail_length)
            style["shadow"] = last_few and symbolizing_progress > SHADOW_PROGRESS
            style["opacity"] = 0.7 if style["shadow"] else 0.9
            style["legible"] = style["tail"] and symbolizing_progress < TAIL_RELEASE_PROGRESS
        styles.append(style)
    return styles


def derive_visuals(
    *,
    phase: str,
    depth: int,
    char_count: int = 0,
    tail_length: int = 0,
    symbolizing_progress: float = 0.0,
) -> Dict[str, Any]:
    return {
        "circleVisible": phase in CIRCLE_PHASES,
        "breathing": phase in CIRCLE_PHASES,
        "breathingFast": phase == sm.PRESSING,
        "wordShown": phase in WORD_PHASES,
        "shakeIntensity": shake_intensity(depth),
        "charStyles": char_styles(phase, char_count, tail_length, symbolizing_progress),
    }
