import random
import string

import pytest

from cipherly.dictionary import build_dictionary, create_alphabet


ALPHABET = create_alphabet()

RAW_FREQUENCIES = {
    "THE": 5000, "OF": 3000, "AND": 2800, "TO": 2600, "A": 2500,
    "IN": 2000, "IS": 1500, "IT": 1400, "YOU": 1300, "THAT": 1200,
    "WAS": 1000, "FOR": 950, "ON": 900, "ARE": 850, "WITH": 800,
    "AS": 750, "HIS": 700, "THEY": 650, "BE": 600, "AT": 580,
    "DOG": 400, "OVER": 300, "CAT": 300, "SAT": 200, "MAT": 150,
    "HAT": 120, "QUICK": 110, "BROWN": 100, "FOX": 90, "JUMPS": 80,
    "LAZY": 70, "SEEN": 60, "ROOT": 50, "BOOK": 45, "LOOK": 40,
    "TREE": 35, "HELLO": 30, "WORLD": 30,
}


def random_key(seed: int) -> dict[str, str]:
    """A random plaintext -> ciphertext substitution over A-Z."""
    letters = list(string.ascii_uppercase)
    shuffled = letters[:]
    random.Random(seed).shuffle(shuffled)
    return dict(zip(letters, shuffled))


def encrypt(plaintext: str, key: dict[str, str]) -> str:
    return "".join(key.get(ch, ch) for ch in plaintext)


@pytest.fixture(scope="session")
def dictionary():
    return build_dictionary(RAW_FREQUENCIES, ALPHABET)


@pytest.fixture
def frequencies_file(tmp_path):
    path = tmp_path / "frequencies.txt"
    path.write_text(
        "".join(f"{word.lower()}\t{count}\n" for word, count in RAW_FREQUENCIES.items()),
        encoding="utf-8",
    )
    return path
