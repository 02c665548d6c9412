import pytest

from cipherly.pattern import compute_pattern, compute_pattern_words, zip_words
from cipherly.utils import InvariantError


@pytest.mark.parametrize("word, expected", [
    ("SEEN", "ABBC"),
    ("ROOT", "ABBC"),
    ("A", "A"),
    ("ABCD", "ABCD"),
    ("AABB", "AABB"),
    ("ZZYZX", "AABAC"),
    ("MISSISSIPPI", "ABCCBCCBDDB"),
])
def test_compute_pattern(word, expected):
    assert compute_pattern(word) == expected


def test_pattern_ignores_actual_letters():
    assert compute_pattern("SEEN") == compute_pattern("ROOT")
    assert compute_pattern("ABCD") != compute_pattern("AABB")
    assert compute_pattern("THAT") != compute_pattern("THEY")


def test_pattern_has_word_length():
    for word in ["X", "HELLO", "BOOKKEEPER"]:
        assert len(compute_pattern(word)) == len(word)


def test_compute_pattern_words_keeps_order():
    grouped = compute_pattern_words(["ROOT", "CAT", "SEEN", "DOG", "BOOK"])
    assert grouped == {
        "ABBC": ["ROOT", "SEEN", "BOOK"],
        "ABC": ["CAT", "DOG"],
    }


def test_zip_words():
    assert list(zip_words("XAT", "CAT")) == [("X", "C"), ("A", "A"), ("T", "T")]


def test_zip_words_rejects_different_lengths():
    with pytest.raises(InvariantError):
        zip_words("CAT", "CATS")
