"""
Wordle Helper - Board Solver
============================

Filters a dictionary against a board of Wordle feedback, ranks next guesses by
expected remaining candidates, and estimates expected guesses to solve with a
time-bounded recursive search.
"""

__version__ = "1.0.0"

from .board import Cell, board_from_guesses
from .constraints import GameResult, LetterConstraints, evaluate_board
from .dictionary import DictionaryProvider, dedupe_words, load_words
from .feedback import get_feedback_pattern, partition
from .ranking import RankingEntry, rank_guesses_by_expected_remaining
from .search import SearchConfig, SearchResult, find_best_guess_recursive
