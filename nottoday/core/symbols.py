"""
Character transformations over a word.

- apply_broken_pattern: one-shot corruption shown when the word appears
  already broken (B pattern).
- to_symbol: per-character decay used while symbolizing. A pure function of
  its arguments; the caller re-evaluates it every tick, so a lower progress
  with a different seed bucket can restore a character (flicker is wanted).
"""
import math
from typing import List, Sequence

from nottoday.core.prng import LcgStream

SYMBOLS = ("·", "-", "_", "/", "|", "#", "%", "@", "*")

SPACE = " "

# Below this progress the tail zone stays verbatim
TAIL_RELEASE_PROGRESS = 0.95


def _pick_symbol(stream: LcgStream) -> str:
    return SYMBOLS[int(math.floor(stream.next() * len(SYMBOLS)))]


def broken_symbol_rate(depth: int) -> float:
    return 0.3 if depth == 2 else 0.5


def broken_seed(word: str, depth: int) -> int:
    return len(word) * 1000 + depth * 100


def apply_broken_pattern(word: str, depth: int, seed: int) -> List[str]:
    rate = broken_symbol_rate(depth)
    stream = LcgStream(seed)
    out = []
    for char in word:
        # spaces are structural and do not consume a draw
        if char == SPACE:
            out.append(SPACE)
            continue
        if stream.next() < rate:
            out.append(_pick_symbol(stream))
        else:
            out.append(char)
    return out


def in_tail_zone(index: int, total_length: int, tail_length: int) -> bool:
    return index >= total_length - tail_length


def to_symbol(
    char: str,
    progress: float,
    index: int,
    total_length: int,
    tail_length: int,
    seed: int,
) -> str:
    if char == SPACE:
        return SPACE

    if in_tail_zone(index, total_length, tail_length) and progress < TAIL_RELEASE_PROGRESS:
        return char

    stream = LcgStream(seed + index)
    draw = stream.next()

    # later positions convert more eagerly
    position_factor = index / total_length
    conversion_chance = progress * (0.7 + position_factor * 0.3)

    if draw < conversion_chance:
        return _pick_symbol(stream)
    return char


def symbolize_seed(word: str, progress: float) -> int:
    """Seed depends on word length and a 1% progress bucket, never on tick count."""
    return len(word) * 1000 + int(math.floor(progress * 100))


def symbolize(chars: Sequence[str], progress: float, tail_length: int, seed: int) -> List[str]:
    if progress <= 0:
        return list(chars)
    total = len(chars)
    return [to_symbol(c, progress, i, total, tail_length, seed) for i, c in enumerate(chars)]
