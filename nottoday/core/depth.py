import random
from typing import Optional

MAX_DEPTH = 3

# pullCount upper bounds (exclusive) for depth 0, 1, 2; anything above is 3
PULL_COUNT_THRESHOLDS = (5, 12, 20)

# Hesitation strictly above this adds one level
HESITATION_BOOST_MS = 4500

B_PATTERN_PROBABILITY = {2: 0.25, 3: 0.6}


def calculate_depth(pull_count: int, hesitation_time: int) -> int:
    depth = len(PULL_COUNT_THRESHOLDS)
    for level, bound in enumerate(PULL_COUNT_THRESHOLDS):
        if pull_count < bound:
            depth = level
            break

    if hesitation_time > HESITATION_BOOST_MS:
        depth += 1

    return min(depth, MAX_DEPTH)


def get_b_pattern_probability(depth: int) -> float:
    if depth < 2:
        return 0.0
    return B_PATTERN_PROBABILITY.get(depth, 0.0)


def should_trigger_b_pattern(depth: int, rng: Optional[random.Random] = None) -> bool:
    """
    One unseeded draw per cycle. Deliberately separate from the seeded visual
    stream: the outcome is fixed as the cycle's pattern flag by the caller.
    """
    if depth < 2:
        return False
    draw = (rng or random).random()
    return draw < get_b_pattern_probability(depth)
