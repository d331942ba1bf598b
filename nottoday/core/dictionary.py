import random
from pathlib import Path
from typing import Optional, Sequence, Tuple

from nottoday.settings import settings

DEFAULT_WORDS = (
    "not today",
    "maybe tomorrow",
    "not yet",
    "almost",
    "try again",
    "still here",
    "let it go",
    "hold on",
    "never mind",
    "somewhere else",
    "no answer",
    "quiet",
    "later",
    "again",
    "breathe",
)


class EmptyDictionaryError(RuntimeError):
    """No word can be chosen; the dictionary collaborator broke its contract."""


def load_dictionary(path: Optional[str] = None) -> Tuple[str, ...]:
    """
    One word per line, UTF-8, blank lines skipped. Inner spaces are kept:
    they are structural delimiters, never transformed.
    """
    path = path if path is not None else settings.WORDS_FILE
    if not path:
        return DEFAULT_WORDS

    lines = Path(path).read_text(encoding="utf-8").splitlines()
    words = tuple(line.strip() for line in lines if line.strip())
    if not words:
        raise EmptyDictionaryError(f"dictionary file {path} has no words")
    return words


def ensure_words(words: Sequence[str]) -> Tuple[str, ...]:
    words = tuple(words)
    if not words:
        raise EmptyDictionaryError("dictionary is empty")
    return words


def choose_word(words: Sequence[str], rng: Optional[random.Random] = None) -> str:
    if not words:
        raise EmptyDictionaryError("dictionary is empty")
    return words[int((rng or random).random() * len(words))]
