"""
Guess Ranker
============

Scores each guess in a pool by the number of candidates expected to remain
after playing it, assuming every candidate is equally likely to be the
solution:

    expected_remaining = sum(size^2) / total

over the partitions the guess induces. Lower is better. This orders guesses
the same way as an entropy heuristic but needs nothing beyond partition sizes.
"""

from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np
from numba import jit

from .feedback import N_PATTERNS, clean_words, feedback_matrix


class RankingEntry(NamedTuple):
    word: str
    expected_remaining: float
    partitions: int

    def to_dict(self) -> Dict:
        return {
            'word': self.word,
            'expectedRemaining': self.expected_remaining,
            'partitions': self.partitions,
        }


@jit(nopython=True, cache=True)
def partition_sizes(feedback_rows: np.ndarray) -> np.ndarray:
    """
    Count how many candidates fall into each feedback partition, per guess.

    Args:
        feedback_rows: shape (n_guesses, n_candidates) feedback codes

    Returns:
        shape (n_guesses, 243) partition sizes
    """
    n_guesses = feedback_rows.shape[0]
    n_candidates = feedback_rows.shape[1]
    sizes = np.zeros((n_guesses, N_PATTERNS), dtype=np.int64)
    for i in range(n_guesses):
        for j in range(n_candidates):
            sizes[i, feedback_rows[i, j]] += 1
    return sizes


def score_rows(feedback_rows: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Expected remaining candidates and partition count for each guess row.

    Returns:
        (expected_remaining float64 array, partitions int array)
    """
    total = feedback_rows.shape[1]
    sizes = partition_sizes(np.ascontiguousarray(feedback_rows))
    sum_sq = (sizes * sizes).sum(axis=1)
    n_parts = (sizes > 0).sum(axis=1)
    if total == 0:
        return np.zeros(len(sizes), dtype=np.float64), n_parts
    return sum_sq / total, n_parts


def rank_order(expected: np.ndarray, words: Sequence[str]) -> np.ndarray:
    """Indices sorted by expected remaining, ties broken by the word itself."""
    return np.array(sorted(range(len(words)), key=lambda i: (expected[i], words[i])),
                    dtype=np.int64)


def rank_guesses_by_expected_remaining(candidates: Sequence[str],
                                       guesses: Optional[Sequence[str]] = None,
                                       limit: Optional[int] = None) -> List[RankingEntry]:
    """
    Rank a pool of guesses against a candidate set.

    Args:
        candidates: possible solutions
        guesses: pool to rank; the candidates themselves when empty or None
        limit: keep only the first ``limit`` entries when positive

    Returns:
        RankingEntry list, best (lowest expected remaining) first
    """
    candidates = clean_words(candidates)
    pool = clean_words(guesses) if guesses else list(candidates)

    matrix = feedback_matrix(pool, candidates)
    expected, n_parts = score_rows(matrix)

    order = rank_order(expected, pool)
    if isinstance(limit, int) and limit > 0:
        order = order[:limit]

    return [RankingEntry(pool[i], float(expected[i]), int(n_parts[i])) for i in order]
