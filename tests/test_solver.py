import random

import pytest

from cipherly.cipher import decrypt
from cipherly.dictionary import build_dictionary
from cipherly.solver import (
    Solution,
    find_word_candidates,
    partition_word_candidates,
    search,
    solve,
)
from cipherly.words import parse_words

from conftest import ALPHABET, RAW_FREQUENCIES, encrypt, random_key


PANGRAM = "THE QUICK BROWN FOX JUMPS OVER THE LAZY DOG"


@pytest.fixture(scope="module")
def cat_dog():
    return build_dictionary({"CAT": 0.5, "DOG": 0.9}, ALPHABET)


def assert_valid_solution(ciphertext, solution, dictionary):
    assert len(solution.plaintext) == len(ciphertext)
    assert decrypt(ciphertext, solution.cipher) == solution.plaintext
    for word in parse_words(solution.plaintext, dictionary.alphabet):
        assert word in dictionary.word_frequencies
    values = list(solution.cipher.values())
    assert len(set(values)) == len(values)
    for letter, plaintext_letter in solution.cipher.items():
        assert letter in dictionary.alphabet
        assert plaintext_letter in dictionary.alphabet


# =====================================================================
# Search space
# =====================================================================

def test_find_word_candidates(dictionary):
    assert find_word_candidates({"XKKZ", "QQ"}, dictionary) == {
        "QQ": (),
        "XKKZ": ("SEEN", "ROOT", "BOOK", "LOOK"),
    }


def test_partition_word_candidates():
    word_candidates = {"W1": ("a", "b", "c"), "W2": ("d",), "W3": ("e", "f")}
    assert partition_word_candidates(word_candidates) == [
        {"W1": ("a",), "W2": ("d",), "W3": ("e", "f")},
        {"W1": ("b", "c"), "W2": ("d",), "W3": ("e",)},
        {"W1": ("b", "c"), "W2": ("d",), "W3": ("f",)},
    ]
    assert word_candidates == {"W1": ("a", "b", "c"), "W2": ("d",), "W3": ("e", "f")}


def test_partitions_do_not_share_state():
    partitions = partition_word_candidates({"W1": ("a", "b"), "W2": ("c", "d")})
    partitions[0]["W2"] = ()
    assert partitions[1]["W2"] == ("c",)
    assert partitions[2]["W2"] == ("d",)


# =====================================================================
# Scenarios
# =====================================================================

def test_single_word(cat_dog):
    solutions = solve("XAT", cat_dog, 5)
    assert [s.plaintext for s in solutions] == ["DOG", "CAT"]
    assert solutions[1].cipher == {"A": "A", "T": "T", "X": "C"}
    assert solutions[0].mean_frequency == 1.0


def test_most_frequent_solution_first(cat_dog):
    assert [s.plaintext for s in solve("XAT", cat_dog, 1)] == ["DOG"]


def test_no_words(dictionary):
    assert solve("123", dictionary, 5) == []
    assert solve("", dictionary, 5) == []
    assert search("12 -- 3", dictionary, 5).exhausted


def test_zero_solutions_requested_does_no_work(dictionary):
    result = search(PANGRAM, dictionary, 0)
    assert result.solutions == []
    assert result.nodes == 0


def test_invalid_arguments(dictionary):
    with pytest.raises(ValueError):
        solve("XAT", dictionary, -1)
    with pytest.raises(ValueError):
        solve("XAT", dictionary, 1, timeout_ms=0)


def test_unsatisfiable(dictionary):
    # No two-letter word in the dictionary is another one reversed
    result = search("XY YX", dictionary, 5)
    assert result.solutions == []
    assert result.exhausted
    assert not result.timed_out


def test_pangram(dictionary):
    ciphertext = encrypt(PANGRAM, random_key(7))
    result = search(ciphertext, dictionary, 1000)
    assert result.exhausted
    assert PANGRAM in [s.plaintext for s in result.solutions]
    for solution in result.solutions:
        assert_valid_solution(ciphertext, solution, dictionary)


def test_case_and_punctuation_are_kept(dictionary):
    ciphertext = encrypt("THE CAT SAT ON THE MAT.", random_key(3)).lower()
    solutions = solve(ciphertext, dictionary, 1000)
    assert "the cat sat on the mat." in [s.plaintext for s in solutions]
    for solution in solutions:
        assert_valid_solution(ciphertext, solution, dictionary)


def test_timeout_returns_partial_result(dictionary):
    result = search(encrypt("THE CAT", random_key(1)), dictionary, 5, timeout_ms=1e-9)
    assert result.nodes == 1
    assert result.timed_out
    assert not result.exhausted


def test_ranking_is_deterministic(dictionary):
    ciphertext = encrypt("THE CAT SAT ON THE MAT", random_key(11))
    first = solve(ciphertext, dictionary, 5)
    assert first == solve(ciphertext, dictionary, 5)
    scores = [s.mean_frequency for s in first]
    assert scores == sorted(scores, reverse=True)


def test_dictionary_is_not_modified(dictionary):
    before = (dict(dictionary.word_frequencies), dict(dictionary.pattern_words))
    solve(encrypt(PANGRAM, random_key(5)), dictionary, 3)
    assert (dict(dictionary.word_frequencies), dict(dictionary.pattern_words)) == before


def test_solution_identity_ignores_score():
    assert Solution("CAT", {"X": "C"}, 0.1) == Solution("CAT", {"X": "C"}, 0.9)


@pytest.mark.parametrize("seed", range(25))
def test_random_cryptograms(dictionary, seed):
    rng = random.Random(seed)
    plaintext = " ".join(rng.choices(sorted(RAW_FREQUENCIES), k=rng.randint(1, 4)))
    ciphertext = encrypt(plaintext, random_key(seed))

    solutions = solve(ciphertext, dictionary, 3)

    assert 1 <= len(solutions) <= 3
    assert len({s.plaintext for s in solutions}) == len(solutions)
    for solution in solutions:
        assert_valid_solution(ciphertext, solution, dictionary)


@pytest.mark.parametrize("ciphertext", ["ﬁ", "ß", "xﬁt ßat"])
def test_multi_letter_uppercase_forms_are_not_solved(cat_dog, ciphertext):
    for solution in solve(ciphertext, cat_dog, 5):
        assert_valid_solution(ciphertext, solution, cat_dog)


def test_ligature_inside_word_is_skipped(cat_dog):
    solutions = solve("xaﬁt", cat_dog, 5)
    assert [s.plaintext for s in solutions] == ["doﬁg", "caﬁt"]
    for solution in solutions:
        assert_valid_solution("xaﬁt", solution, cat_dog)


def test_equal_scores_ordered_by_plaintext():
    dictionary = build_dictionary({"CD": 1, "AB": 1}, ALPHABET)
    assert [s.plaintext for s in solve("XY", dictionary, 5)] == ["AB", "CD"]
