"""
Turning a resolved word assignment into a cipher, a plaintext and a score.
"""
from collections import defaultdict
from typing import Mapping

import numpy as np

from .dictionary import Dictionary
from .pattern import zip_words
from .utils import invariant
from .words import parse_words


def compute_cipher(word_assignment: Mapping[str, str]) -> dict[str, str]:
    """Build the ciphertext -> plaintext letter cipher of word_assignment.

    The assignment maps every ciphertext word to one plaintext word and is
    expected to be consistent: each ciphertext letter must decrypt to a
    single plaintext letter and no two letters may share one.
    """
    letter_plaintexts = defaultdict(set)
    for word, plaintext_word in word_assignment.items():
        for letter, plaintext_letter in zip_words(word, plaintext_word):
            letter_plaintexts[letter].add(plaintext_letter)

    cipher = {}
    for letter in sorted(letter_plaintexts):
        plaintext_letters = letter_plaintexts[letter]
        invariant(len(plaintext_letters) == 1,
                  f"Expected one plaintext letter for {letter!r}, "
                  f"got {sorted(plaintext_letters)}")
        cipher[letter] = next(iter(plaintext_letters))

    invariant(len(set(cipher.values())) == len(cipher),
              f"Expected plaintext letters to be unique: {cipher}")
    return cipher


def decrypt(ciphertext: str, cipher: Mapping[str, str]) -> str:
    """Apply cipher to ciphertext, leaving symbols it does not map untouched.

    Lowercase letters decrypt through their uppercase form and stay
    lowercase.
    """
    chars = []
    for ch in ciphertext:
        if ch in cipher:
            chars.append(cipher[ch])
        elif ch.islower() and ch.upper() in cipher:
            chars.append(cipher[ch.upper()].lower())
        else:
            chars.append(ch)
    return "".join(chars)


def compute_mean_frequency(plaintext: str, dictionary: Dictionary) -> float:
    """Mean dictionary frequency of the distinct words of plaintext."""
    words = parse_words(plaintext, dictionary.alphabet)
    invariant(len(words) > 0, "Expected at least one word")
    return float(np.mean([dictionary.frequency(word) for word in sorted(words)]))
