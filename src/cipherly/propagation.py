"""
Constraint propagation over word candidates.

Word candidates map each ciphertext word to the dictionary words it may
decrypt to. From them we derive, for every ciphertext letter, the plaintext
letters it may decrypt to, tighten those sets by the pigeonhole principle,
and drop candidate words that are no longer spelled by the surviving letters.
"""
from collections import defaultdict
from typing import Mapping, Optional

from .dictionary import Dictionary
from .pattern import zip_words


# ciphertext word -> candidate plaintext words, most frequent first
WordCandidates = dict[str, tuple[str, ...]]
# ciphertext letter -> candidate plaintext letters
LetterCandidates = dict[str, set[str]]


def compute_letter_candidates(word_candidates: Mapping[str, tuple[str, ...]],
                              dictionary: Dictionary) -> LetterCandidates:
    """Compute the letter candidates implied by word_candidates.

    For example, given:

        MCDMRCNSFX -> DEADWEIGHT, DISDAINFUL, GREGARIOUS, PERPLEXITY
        MSCNPPRX   -> AFLUTTER, BEDROOMS, GORILLAS, PROCEEDS, TYPHOONS

    the first word allows M to be D, G or P, the second A, B, G, P or T.
    Only the intersection G, P keeps both words solvable, so every letter
    gets the intersection of what each word containing it allows. Letters
    that appear in no word start with the whole alphabet.

    Then the pigeonhole principle: if M and L can both only be G or P and
    X can be G, P or W, X cannot be G or P or there would be no letter left
    for one of M and L. Whenever n letters share the same set of n
    candidates, those candidates are removed from every other letter. When
    more than n letters share a set of n candidates there is no solution,
    and the shared candidates are removed from all letters, which empties
    the set for the letters of that group too. This repeats until a full
    pass removes nothing.
    """
    letter_candidates = {letter: set(dictionary.alphabet) for letter in dictionary.alphabet}
    for word, candidate_words in word_candidates.items():
        word_letter_candidates = defaultdict(set)
        for candidate_word in candidate_words:
            for letter, candidate_letter in zip_words(word, candidate_word):
                word_letter_candidates[letter].add(candidate_letter)
        for letter, candidates in word_letter_candidates.items():
            letter_candidates[letter] &= candidates

    changed = True
    while changed:
        changed = False

        # {A, B} -> {X, Y} when X and Y can both only be A or B
        candidates_letters = defaultdict(set)
        for letter, candidates in letter_candidates.items():
            candidates_letters[frozenset(candidates)].add(letter)

        for letter, candidates in letter_candidates.items():
            for shared, letters in candidates_letters.items():
                pigeonholed = (
                    (len(shared) == len(letters) and letter not in letters)
                    or len(shared) < len(letters)
                )
                if pigeonholed and not candidates.isdisjoint(shared):
                    candidates -= shared
                    changed = True

    return letter_candidates


def prune_word_candidates(word_candidates: Mapping[str, tuple[str, ...]],
                          dictionary: Dictionary) -> Optional[WordCandidates]:
    """Return a copy of word_candidates without incompatible candidates.

    Returns None when there are no words or any word is left without a
    candidate: no cipher satisfies this branch.
    """
    letter_candidates = compute_letter_candidates(word_candidates, dictionary)

    pruned = {}
    for word, candidate_words in word_candidates.items():
        remaining = tuple(
            candidate_word
            for candidate_word in candidate_words
            if all(candidate_letter in letter_candidates[letter]
                   for letter, candidate_letter in zip_words(word, candidate_word))
        )
        if not remaining:
            return None
        pruned[word] = remaining

    return pruned or None
