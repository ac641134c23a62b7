"""
Recursive Strategy Search
=========================

Estimates the expected number of guesses needed to solve a candidate set and
ranks first guesses by it.

    E(C) = 1                                        if |C| <= 1
    E(C) = min_g  1 + sum_p (|p| / |C|) * E(p)      over partitions p != GGGGG

The all-green partition is solved by the guess itself and adds nothing.

Bounds on the work:
1. Candidates are capped to the first ``candidate_limit`` words
2. At each node only the best ``max_guesses_consider`` guesses (by expected
   remaining candidates) are tried
3. Memoization: identical candidate sets reached by different paths are
   evaluated once
4. A node stops trying guesses once one scores <= 1.01
5. Wall-clock deadline: past it, a node returns 1 + log2(|C|) instead of
   recursing, and the search reports ``aborted``

Words are handled as integer ids into the pool and candidate lists; one
feedback matrix (pool x candidates) is computed up front.
"""

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Sequence

import numpy as np

from .feedback import CORRECT_PATTERN, clean_words, feedback_matrix
from .ranking import rank_order, score_rows

logger = logging.getLogger(__name__)

GOOD_ENOUGH = 1.01


# ============================================================================
# CONFIGURATION / RESULTS
# ============================================================================

@dataclass
class SearchConfig:
    candidate_limit: int = 250
    max_guesses_consider: int = 50
    time_budget_ms: int = 10000


class GuessEstimate(NamedTuple):
    word: str
    expected_steps: float

    def to_dict(self) -> Dict:
        return {'word': self.word, 'expectedSteps': self.expected_steps}


@dataclass
class SearchResult:
    best: List[GuessEstimate] = field(default_factory=list)
    time_ms: float = 0.0
    aborted: bool = False

    def to_dict(self) -> Dict:
        return {
            'best': [b.to_dict() for b in self.best],
            'timeMs': self.time_ms,
            'aborted': self.aborted,
        }


def fallback_estimate(n: int) -> float:
    """Assume every further guess at best halves the set."""
    return 1 + math.log2(max(1, n))


# ============================================================================
# SEARCH
# ============================================================================

class StrategySearch:
    """
    One search invocation: owns the feedback matrix, memo and deadline.
    """

    def __init__(self, candidates: Sequence[str], guesses: Optional[Sequence[str]] = None,
                 config: Optional[SearchConfig] = None):
        """
        Args:
            candidates: possible solutions (capped to ``config.candidate_limit``)
            guesses: guess pool; the capped candidates when empty or None
            config: search bounds
        """
        self.config = config or SearchConfig()

        self.candidates = clean_words(candidates)
        limit = self.config.candidate_limit
        if limit is not None and limit >= 0 and len(self.candidates) > limit:
            self.candidates = self.candidates[:limit]
        self.guesses = clean_words(guesses) if guesses else list(self.candidates)

        self.n_candidates = len(self.candidates)
        self.n_guesses = len(self.guesses)

        # shape (n_guesses, n_candidates)
        self.feedback_matrix = feedback_matrix(self.guesses, self.candidates)
        # Lexicographic position of each guess, for tie-breaks
        self.guess_rank = rank_order(np.zeros(self.n_guesses), self.guesses).argsort()

        self.memo: Dict[bytes, float] = {}
        self.cache_hits = 0
        self.cache_misses = 0
        self.calls = 0
        # Nodes no pool guess could split, valued by the closed-form estimate
        self.unsplit_nodes = 0

        self.aborted = False
        self.deadline = math.inf

    def _past_deadline(self) -> bool:
        if time.monotonic() >= self.deadline:
            self.aborted = True
        return self.aborted

    def _narrow_pool(self, candidates: np.ndarray) -> np.ndarray:
        """Guess ids worth evaluating deeply for ``candidates``."""
        all_guesses = np.arange(self.n_guesses)
        cap = self.config.max_guesses_consider
        if cap is None or cap <= 0 or self.n_guesses <= cap:
            return all_guesses

        expected, _ = score_rows(self.feedback_matrix[:, candidates])
        return np.lexsort((self.guess_rank, expected))[:cap]

    def _partitions(self, guess_idx: int, candidates: np.ndarray) -> List[np.ndarray]:
        """
        Split ``candidates`` by feedback against one guess.

        The all-green partition is left out. Ids inside each partition stay in
        ascending order, so each partition's bytes are a canonical memo key.
        """
        feedback_row = self.feedback_matrix[guess_idx, candidates]
        order = np.argsort(feedback_row, kind='stable')
        patterns = feedback_row[order]
        members = candidates[order]

        starts = np.flatnonzero(np.diff(patterns)) + 1
        parts = []
        for pattern, part in zip(patterns[np.r_[0, starts]], np.split(members, starts)):
            if pattern != CORRECT_PATTERN:
                parts.append(part)
        return parts

    def _evaluate_guess(self, parts: List[np.ndarray], n: int) -> float:
        """1 + weighted expected steps of every partition a guess leaves."""
        total = 1.0
        for part in parts:
            total += len(part) / n * self.expected_steps(part)
        return total

    def expected_steps(self, candidates: np.ndarray) -> float:
        """
        Expected guesses (including the next one) to solve ``candidates``.

        Args:
            candidates: ascending array of candidate ids

        Returns:
            Expected steps; a closed-form estimate once past the deadline
        """
        self.calls += 1
        n = len(candidates)

        if self._past_deadline():
            return fallback_estimate(n)
        if n <= 1:
            return 1.0

        key = candidates.tobytes()
        if key in self.memo:
            self.cache_hits += 1
            return self.memo[key]
        self.cache_misses += 1

        best = math.inf
        for guess_idx in self._narrow_pool(candidates):
            if self._past_deadline():
                break
            parts = self._partitions(guess_idx, candidates)
            if len(parts) == 1 and len(parts[0]) == n:
                continue  # tells nothing apart
            value = self._evaluate_guess(parts, n)
            if value < best:
                best = value
            if best <= GOOD_ENOUGH:
                break

        if math.isinf(best):
            if not self.aborted:
                self.unsplit_nodes += 1
                logger.debug("No guess splits %d candidates; using estimate %.3f",
                             n, fallback_estimate(n))
            return fallback_estimate(n)
        if not self.aborted:
            self.memo[key] = best
        return best

    def run(self, start: Optional[float] = None) -> SearchResult:
        """
        Score every guess of the (narrowed) initial pool.

        Args:
            start: ``time.monotonic()`` reading the budget and ``time_ms`` count
                from; now when None
        """
        if start is None:
            start = time.monotonic()
        self.deadline = start + self.config.time_budget_ms / 1000.0
        self.aborted = False

        results = []
        if self.n_candidates > 0:
            candidates = np.arange(self.n_candidates, dtype=np.int64)
            for guess_idx in self._narrow_pool(candidates):
                # Past the deadline every subtree falls back to the estimate,
                # so the remaining top-level guesses still get a score.
                self._past_deadline()
                parts = self._partitions(guess_idx, candidates)
                value = self._evaluate_guess(parts, self.n_candidates)
                results.append(GuessEstimate(self.guesses[guess_idx], value))

        results.sort(key=lambda r: (r.expected_steps, r.word))
        elapsed_ms = (time.monotonic() - start) * 1000.0

        logger.debug("Search over %d candidates x %d guesses: calls=%d, memo=%d "
                     "(%d hits, %d misses), unsplit=%d, %.1fms, aborted=%s",
                     self.n_candidates, self.n_guesses, self.calls, len(self.memo),
                     self.cache_hits, self.cache_misses, self.unsplit_nodes,
                     elapsed_ms, self.aborted)

        return SearchResult(results, elapsed_ms, self.aborted)


def find_best_guess_recursive(candidates: Sequence[str],
                              guesses: Optional[Sequence[str]] = None,
                              candidate_limit: int = 250,
                              max_guesses_consider: int = 50,
                              time_budget_ms: int = 10000) -> SearchResult:
    """
    Rank first guesses by expected number of guesses to solve.

    Args:
        candidates: possible solutions
        guesses: guess pool; the capped candidates when empty or None
        candidate_limit: only the first this-many candidates are considered
        max_guesses_consider: guesses tried per node
        time_budget_ms: wall-clock budget

    Returns:
        SearchResult with ``best`` sorted ascending by expected steps
    """
    start = time.monotonic()  # the feedback matrix build counts against the budget
    config = SearchConfig(candidate_limit, max_guesses_consider, time_budget_ms)
    return StrategySearch(candidates, guesses, config).run(start)
