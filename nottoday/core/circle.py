"""
The idle control: a frosted circle with 3-7 faint concentric lines that
slowly rotate. Line parameters come from one seeded stream so a given seed
always redraws the same set.
"""
import math
import random
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from nottoday.core.prng import LcgStream

PATH_SEGMENTS = 64
LINE_VARIANCE = 0.015
VIEWBOX_CENTER = 50


@dataclass(frozen=True)
class CircleLine:
    id: int
    radius: float          # fraction of the viewBox half-width
    rotateOffset: float    # degrees
    scaleVariance: float
    duration: float        # seconds per sway
    delay: float
    strokeWidth: float
    pathSeed: float

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["path"] = circle_path(
            VIEWBOX_CENTER, VIEWBOX_CENTER, self.radius * VIEWBOX_CENTER, LINE_VARIANCE, self.pathSeed
        )
        return out


def circle_path(center_x: float, center_y: float, radius: float, variance: float = 0.02, seed: float = 0) -> str:
    """Closed SVG path around the center with per-vertex radial jitter."""
    stream = LcgStream(seed)
    commands = []
    for i in range(PATH_SEGMENTS + 1):
        angle = (i / PATH_SEGMENTS) * math.pi * 2
        r = radius * (1 + (stream.next() - 0.5) * variance)
        x = center_x + math.cos(angle) * r
        y = center_y + math.sin(angle) * r
        commands.append(f"{'M' if i == 0 else 'L'} {x:.2f} {y:.2f}")
    commands.append("Z")
    return " ".join(commands)


def generate_circle_lines(seed: Optional[float] = None) -> List[CircleLine]:
    if seed is None:
        seed = random.random() * 10000
    stream = LcgStream(seed)

    count = int(stream.next() * 5) + 3
    return [
        CircleLine(
            id=i,
            radius=0.35 + (i / count) * 0.3,
            rotateOffset=stream.next() * 360,
            scaleVariance=0.995 + stream.next() * 0.01,
            duration=5 + stream.next() * 2,
            delay=stream.next() * 0.5,
            strokeWidth=1 + stream.next() * 0.5,
            pathSeed=stream.next() * 10000,
        )
        for i in range(count)
    ]
