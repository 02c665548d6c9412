"""
Dictionary index for the solver.

Reads a two-column word/count table, keeps the words spelled with the
alphabet, normalizes counts into (0, 1] relative to the most common word,
prunes rare words and indexes the rest by pattern. The resulting
Dictionary is immutable and can be shared by any number of solves.
"""
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

import click
import numpy as np
import requests
from tqdm import tqdm

from .config import SolverConfig
from .pattern import compute_pattern, compute_pattern_words
from .utils import timer


# Words whose normalized frequency is not above this are dropped
MIN_FREQUENCY = 0.0001


@dataclass(frozen=True)
class Dictionary:
    """Read-only snapshot consumed by the solver.

    alphabet: letters valid in ciphertext and plaintext, in order.
    word_frequencies: word -> frequency in (0, 1], descending by frequency.
    pattern_words: pattern -> words with that pattern, each tuple in
        descending frequency order, entries ordered by the frequency
        profile of their words.
    """
    alphabet: str
    word_frequencies: Mapping[str, float]
    pattern_words: Mapping[str, tuple[str, ...]]

    def candidates(self, word: str) -> tuple[str, ...]:
        """Dictionary words a ciphertext word could decrypt to."""
        return self.pattern_words.get(compute_pattern(word), ())

    def frequency(self, word: str) -> float:
        return self.word_frequencies.get(word, 0.0)


# =====================================================================
# Section 1 — Frequency table
# =====================================================================

def create_alphabet(first: str = "A", last: str = "Z") -> str:
    """Return the letters from first to last inclusive, in order."""
    if len(first) != 1 or len(last) != 1 or first > last:
        raise ValueError(f"Invalid alphabet bounds: {first!r}..{last!r}")
    return "".join(chr(code) for code in range(ord(first), ord(last) + 1))


def read_word_frequencies(path: Path, alphabet: Optional[str] = None) -> dict[str, int]:
    """Parse a word/count table (tab or comma separated) into {WORD: count}.

    A first line whose count cell is not an integer is taken as a header.
    When alphabet is given, words spelled with other symbols are skipped.
    """
    frequencies = {}
    with open(path, encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue

            cells = line.split("\t" if "\t" in line else ",")
            if len(cells) != 2:
                raise ValueError(
                    f"{path}:{line_number}: expected two cells per line, got {len(cells)}"
                )

            word, count_text = (cell.strip() for cell in cells)
            try:
                count = int(count_text)
            except ValueError:
                if line_number == 1:
                    continue
                raise ValueError(
                    f"{path}:{line_number}: count is not an integer: {count_text!r}"
                ) from None
            if count <= 0:
                raise ValueError(f"{path}:{line_number}: count must be positive")

            word = word.upper()
            if alphabet is not None and not all(letter in alphabet for letter in word):
                continue
            if word in frequencies:
                raise ValueError(f"{path}:{line_number}: duplicate word {word!r}")
            frequencies[word] = count

    return frequencies


def sort_frequencies_descending(frequencies: Mapping[str, float]) -> dict[str, float]:
    """Copy of frequencies ordered by descending count, then by word."""
    return dict(sorted(frequencies.items(), key=lambda item: (-item[1], item[0])))


def normalize_frequencies(frequencies: Mapping[str, float]) -> dict[str, float]:
    """Copy of frequencies divided by the maximum, so values lie in (0, 1]."""
    if not frequencies:
        raise ValueError("No word frequencies to normalize")

    counts = np.fromiter(frequencies.values(), dtype=float, count=len(frequencies))
    max_count = counts.max()
    if max_count <= 0:
        raise ValueError("The maximum frequency must be greater than zero")

    return dict(zip(frequencies, (counts / max_count).tolist()))


# =====================================================================
# Section 2 — Index construction
# =====================================================================

def build_dictionary(raw_frequencies: Mapping[str, float], alphabet: str,
                     min_frequency: float = MIN_FREQUENCY) -> Dictionary:
    """Build a Dictionary from raw word counts.

    Words with a symbol outside the alphabet are ignored, as are words whose
    normalized frequency is not above min_frequency.
    """
    spelled = {
        word: count
        for word, count in raw_frequencies.items()
        if word and all(letter in alphabet for letter in word)
    }
    normalized = normalize_frequencies(sort_frequencies_descending(spelled))
    word_frequencies = {
        word: frequency
        for word, frequency in normalized.items()
        if frequency > min_frequency
    }

    grouped = compute_pattern_words(word_frequencies)
    ordered = sorted(
        grouped.items(),
        key=lambda item: [word_frequencies[word] for word in item[1]],
        reverse=True,
    )

    return Dictionary(
        alphabet=alphabet,
        word_frequencies=MappingProxyType(word_frequencies),
        pattern_words=MappingProxyType(
            {pattern: tuple(words) for pattern, words in ordered}
        ),
    )


@timer
def load_dictionary(config: SolverConfig) -> Dictionary:
    """Load the frequency table named by config and build the index."""
    path = config.frequencies_path
    if not path.exists():
        raise FileNotFoundError(f"Frequency table not found: {path}")

    alphabet = create_alphabet(config.first_letter, config.last_letter)
    return build_dictionary(read_word_frequencies(path, alphabet), alphabet,
                            min_frequency=config.min_frequency)


# =====================================================================
# Section 3 — Download
# =====================================================================

@timer
def download_frequencies(url: str, dest: Path, force: bool = False) -> Path:
    """Download the word/count table to dest, reusing an existing copy."""
    if dest.exists() and not force:
        click.echo(f"    Cache found: {dest}")
        return dest

    dest.parent.mkdir(parents=True, exist_ok=True)
    partial = dest.with_name(dest.name + ".part")
    try:
        resp = requests.get(url, stream=True, timeout=30)
        resp.raise_for_status()
        total = int(resp.headers.get("content-length", 0)) or None
        with open(partial, "wb") as f, \
                tqdm(total=total, desc="  Download", unit="B", unit_scale=True) as bar:
            for chunk in resp.iter_content(chunk_size=1 << 16):
                f.write(chunk)
                bar.update(len(chunk))
    except requests.RequestException as e:
        partial.unlink(missing_ok=True)
        raise click.ClickException(f"Could not download {url}: {e}") from e
    except BaseException:
        partial.unlink(missing_ok=True)
        raise

    partial.replace(dest)
    click.echo(f"    Saved: {dest} ({dest.stat().st_size} bytes)")
    return dest
