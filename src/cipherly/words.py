"""
Tokenizer shared by the solver and the scorer.
"""
import re


# Runs of letters; an apostrophe between two runs keeps them one word (DON'T)
WORD_RE = re.compile(r"[^\W\d_]+(?:['’][^\W\d_]+)*")


def parse_words(text: str, alphabet: str) -> set[str]:
    """Return the distinct words of text, uppercased and filtered to alphabet.

    Characters whose uppercase form is not a single alphabet letter (such as
    "ß", which uppercases to "SS") are dropped from each word, so every kept
    character is one a per-letter cipher can map. Words left empty are
    discarded.
    """
    words = set()
    for match in WORD_RE.finditer(text):
        word = "".join(
            upper for upper in (ch.upper() for ch in match.group())
            if len(upper) == 1 and upper in alphabet
        )
        if word:
            words.add(word)
    return words
