"""
Word patterns: the repetition signature of a word, independent of its letters.

Two words share a pattern exactly when a substitution cipher could turn one
into the other, so the pattern is the key of the dictionary's candidate index.
"""
from collections import defaultdict
from typing import Iterable, Iterator

from .utils import invariant


# First symbol of the pattern sequence
PATTERN_START = "A"


def compute_pattern(word: str) -> str:
    """Return the canonical pattern string of word.

    Each distinct letter is replaced, in order of first appearance, by the
    next symbol of A, B, C, ... For example both "SEEN" and "ROOT" yield
    "ABBC".
    """
    symbols = {}
    for letter in word:
        if letter not in symbols:
            symbols[letter] = chr(ord(PATTERN_START) + len(symbols))
    return "".join(symbols[letter] for letter in word)


def compute_pattern_words(words: Iterable[str]) -> dict[str, list[str]]:
    """Group words by pattern, keeping the input order inside each group."""
    pattern_words = defaultdict(list)
    for word in words:
        pattern_words[compute_pattern(word)].append(word)
    return dict(pattern_words)


def zip_words(word1: str, word2: str) -> Iterator[tuple[str, str]]:
    """Yield position-aligned letter pairs of two same-length words."""
    invariant(len(word1) == len(word2),
              f"Expected same length words: {word1!r}, {word2!r}")
    return zip(word1, word2)
