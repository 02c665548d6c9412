"""
Backtracking search for substitution ciphers.

The search keeps an explicit stack of word candidate maps. Each popped map
is pruned by constraint propagation; a map with one candidate per word is
a solution, any other map is partitioned into narrower maps that are
pushed back. The optional wall-clock budget is checked between frames.
"""
import time
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .cipher import compute_cipher, compute_mean_frequency, decrypt
from .dictionary import Dictionary
from .propagation import WordCandidates, prune_word_candidates
from .utils import invariant
from .words import parse_words


@dataclass
class Solution:
    """A decryption of the ciphertext. Identity is the plaintext and cipher."""
    plaintext: str
    cipher: dict[str, str]
    mean_frequency: float = field(default=0.0, compare=False)


@dataclass
class SearchResult:
    """Ranked solutions plus how the search ended.

    exhausted: the whole search space was explored, there are no other
        solutions.
    timed_out: the time budget ran out, other solutions may exist.
    nodes: number of stack frames popped.
    """
    solutions: list[Solution]
    exhausted: bool = False
    timed_out: bool = False
    nodes: int = 0


# =====================================================================
# Section 1 — Search space
# =====================================================================

def find_word_candidates(words, dictionary: Dictionary) -> WordCandidates:
    """Map each ciphertext word to the dictionary words sharing its pattern."""
    return {word: dictionary.candidates(word) for word in sorted(words)}


def partition_word_candidates(word_candidates: Mapping[str, tuple[str, ...]]) -> list[WordCandidates]:
    """Split word_candidates into maps that together cover the same choices.

    For every word with several candidates, in order, one map pins the word
    to its most frequent remaining candidate and that candidate is removed
    from the words' remaining choices. The last map holds what remains.
    Maps are returned from most to least frequent choice.
    """
    partitions = []
    remaining = dict(word_candidates)
    for word, candidate_words in word_candidates.items():
        if len(candidate_words) == 1:
            continue

        pinned, *rest = candidate_words
        remaining[word] = tuple(rest)

        partition = dict(remaining)
        partition[word] = (pinned,)
        partitions.append(partition)

    partitions.append(remaining)
    return partitions


# =====================================================================
# Section 2 — Search
# =====================================================================

def search(ciphertext: str, dictionary: Dictionary, max_solution_count: int,
           timeout_ms: Optional[float] = None) -> SearchResult:
    """Find up to max_solution_count ciphers turning ciphertext into words.

    Stops when enough distinct plaintexts were found, the search space is
    exhausted, or timeout_ms (if given) has elapsed; the clock is checked
    once per popped frame.
    """
    if max_solution_count < 0:
        raise ValueError(f"max_solution_count must not be negative: {max_solution_count}")
    if timeout_ms is not None and timeout_ms <= 0:
        raise ValueError(f"timeout_ms must be positive: {timeout_ms}")
    if max_solution_count == 0:
        return SearchResult(solutions=[])

    start = time.monotonic()
    deadline = None if timeout_ms is None else start + timeout_ms / 1000

    solutions = {}
    words = parse_words(ciphertext, dictionary.alphabet)
    stack = [find_word_candidates(words, dictionary)]
    nodes = 0
    timed_out = False

    while stack:
        nodes += 1
        word_candidates = prune_word_candidates(stack.pop(), dictionary)

        if word_candidates is not None:
            if any(len(candidate_words) > 1 for candidate_words in word_candidates.values()):
                # Most frequent partition popped first
                stack.extend(reversed(partition_word_candidates(word_candidates)))
            else:
                solution = finalize(ciphertext, word_candidates, dictionary)
                solutions.setdefault(solution.plaintext, solution)

        if len(solutions) >= max_solution_count:
            break
        if deadline is not None and time.monotonic() >= deadline:
            timed_out = bool(stack)
            break

    ranked = sorted(solutions.values(),
                    key=lambda s: (-s.mean_frequency, s.plaintext))
    return SearchResult(
        solutions=ranked,
        exhausted=not stack,
        timed_out=timed_out,
        nodes=nodes,
    )


def finalize(ciphertext: str, word_candidates: Mapping[str, tuple[str, ...]],
             dictionary: Dictionary) -> Solution:
    """Build the Solution of a fully resolved word candidate map."""
    word_assignment = {}
    for word, candidate_words in word_candidates.items():
        invariant(len(candidate_words) == 1,
                  f"Expected one candidate for {word!r}, got {len(candidate_words)}")
        word_assignment[word] = candidate_words[0]

    cipher = compute_cipher(word_assignment)
    plaintext = decrypt(ciphertext, cipher)
    return Solution(
        plaintext=plaintext,
        cipher=cipher,
        mean_frequency=compute_mean_frequency(plaintext, dictionary),
    )


def solve(ciphertext: str, dictionary: Dictionary, max_solution_count: int,
          timeout_ms: Optional[float] = None) -> list[Solution]:
    """Ranked solutions of ciphertext, most frequent words first.

    Fewer than max_solution_count solutions means either no more exist or
    the time budget ran out; use search() to tell the two apart.
    """
    return search(ciphertext, dictionary, max_solution_count, timeout_ms).solutions
