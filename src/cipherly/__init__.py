"""
Cipherly - substitution cryptogram solver.
"""
from .dictionary import Dictionary, build_dictionary, load_dictionary
from .pattern import compute_pattern
from .solver import SearchResult, Solution, search, solve
from .utils import InvariantError
from .words import parse_words

__version__ = "0.1.0"
