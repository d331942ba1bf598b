"""
Seeded linear-congruential stream used wherever a visual must be re-derivable
from its seed (line jitter, character corruption, word position).

Not suitable for anything security related.
"""

LCG_MULTIPLIER = 9301
LCG_INCREMENT = 49297
LCG_MODULUS = 233280


class LcgStream:
    """Each instance owns its seed; two streams never share state."""

    def __init__(self, seed):
        self._seed = seed

    @property
    def seed(self):
        return self._seed

    def next(self) -> float:
        """Advance and return a value in [0, 1)."""
        self._seed = (self._seed * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self._seed / LCG_MODULUS

    __call__ = next


def lcg_value(seed) -> float:
    """First draw of a fresh stream seeded with `seed`."""
    return LcgStream(seed).next()
