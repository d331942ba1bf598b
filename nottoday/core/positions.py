import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from nottoday.core.prng import lcg_value

CENTERED = "translate(-50%, -50%)"

FADE = "fade"
SLIDE = "slide"


@dataclass(frozen=True)
class Position:
    top: str
    left: str
    transform: str = CENTERED
    animationType: str = FADE
    initialX: Optional[int] = None
    initialY: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


# Where the word shows before any word was selected
DEFAULT_POSITION = Position(top="50%", left="50%", transform="translate(-50%, -55%)")

POSITIONS = (
    # fixed, fade in (3x3 grid)
    Position("35%", "30%"),
    Position("35%", "50%"),
    Position("35%", "70%"),
    Position("50%", "25%"),
    Position("50%", "50%"),
    Position("50%", "75%"),
    Position("65%", "30%"),
    Position("65%", "50%"),
    Position("65%", "70%"),
    # slide in from the left
    Position("40%", "50%", animationType=SLIDE, initialX=-200),
    Position("50%", "30%", animationType=SLIDE, initialX=-200),
    Position("60%", "50%", animationType=SLIDE, initialX=-200),
    # from the right
    Position("40%", "50%", animationType=SLIDE, initialX=200),
    Position("50%", "70%", animationType=SLIDE, initialX=200),
    Position("60%", "50%", animationType=SLIDE, initialX=200),
    # drop from the top
    Position("50%", "50%", animationType=SLIDE, initialY=-200),
    Position("50%", "30%", animationType=SLIDE, initialY=-200),
    Position("50%", "70%", animationType=SLIDE, initialY=-200),
    # rise from the bottom
    Position("50%", "50%", animationType=SLIDE, initialY=200),
    Position("50%", "30%", animationType=SLIDE, initialY=200),
    Position("50%", "70%", animationType=SLIDE, initialY=200),
)


def position_seed(word: str, now_ms: int) -> int:
    return now_ms + sum(ord(c) for c in word)


def pick_position(seed: int) -> Position:
    return POSITIONS[int(math.floor(lcg_value(seed) * len(POSITIONS)))]
