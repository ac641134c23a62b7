"""
Constraint Evaluator
====================

Turns a board of feedback cells into letter constraints and filters a
dictionary against them.

Per row, every letter gets a total count and a matched (green + yellow) count.
Across rows:

- min_count[ch]  = max over rows of matched count
- max_count[ch]  = min over rows of matched count, for rows that also grey ch
                   (0 when the row matched ch nowhere)
- banned_at_position[i] collects yellows at i, and greys at i of a letter the
  same row matched elsewhere
- greens[i] is the last green seen at i

Filtering runs over the whole dictionary at once with numpy: one (n, 5)
letter-code array and one (n, 26) letter-count array.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

import numpy as np

from .board import GREEN, GREY, YELLOW, effective_rows
from .dictionary import load_words
from .feedback import WORD_LENGTH, clean_words, words_to_chars

logger = logging.getLogger(__name__)

DISPLAY_LIMIT = 1000
NO_WORDS_MESSAGE = 'no words loaded'


@dataclass
class GameResult:
    possible_words: List[str]
    count: int
    message: Optional[str] = None

    def to_dict(self) -> Dict:
        out = {'possibleWords': list(self.possible_words), 'count': self.count}
        if self.message is not None:
            out['message'] = self.message
        return out


@dataclass
class LetterConstraints:
    """All constraints accumulated from the effective rows of a board."""
    greens: List[Optional[str]] = field(default_factory=lambda: [None] * WORD_LENGTH)
    banned_at_position: List[Set[str]] = field(
        default_factory=lambda: [set() for _ in range(WORD_LENGTH)])
    min_count: Dict[str, int] = field(default_factory=dict)
    max_count: Dict[str, int] = field(default_factory=dict)  # missing key = unbounded
    yellows: List[Tuple[int, str]] = field(default_factory=list)

    @classmethod
    def from_board(cls, board: Iterable[Iterable]) -> 'LetterConstraints':
        cons = cls()
        for row in effective_rows(board):
            cons.add_row(row)
        return cons

    def add_row(self, row) -> None:
        """Fold one normalized row into the constraints."""
        total = Counter(c.letter for c in row if c.is_scored)
        matched = Counter(c.letter for c in row if c.is_matched)

        # Letter counts
        for ch, tot in total.items():
            m = matched[ch]
            if m > self.min_count.get(ch, 0):
                self.min_count[ch] = m
            if tot > m:
                # Some greys: exactly m of this letter (m may be 0)
                prev = self.max_count.get(ch)
                self.max_count[ch] = m if prev is None else min(prev, m)

        # Positions
        for i, cell in enumerate(row):
            if not cell.is_scored:
                continue
            ch = cell.letter
            if cell.color == GREEN:
                self.greens[i] = ch
            elif cell.color == YELLOW:
                self.banned_at_position[i].add(ch)
                self.yellows.append((i, ch))
            elif cell.color == GREY and matched[ch] > 0:
                self.banned_at_position[i].add(ch)

    def mask(self, words: Sequence[str]) -> np.ndarray:
        """
        Boolean mask of which ``words`` satisfy every constraint.

        Args:
            words: already-cleaned five-letter lowercase words

        Returns:
            shape (len(words),) boolean array
        """
        n = len(words)
        keep = np.ones(n, dtype=np.bool_)
        if n == 0:
            return keep

        chars = words_to_chars(words)
        counts = np.zeros((n, 26), dtype=np.int32)
        rows = np.arange(n)
        for i in range(WORD_LENGTH):
            counts[rows, chars[:, i]] += 1

        for i in range(WORD_LENGTH):
            g = self.greens[i]
            if g:
                keep &= chars[:, i] == _code(g)
            for ch in self.banned_at_position[i]:
                keep &= chars[:, i] != _code(ch)

        for ch, m in self.min_count.items():
            if m > 0:
                keep &= counts[:, _code(ch)] >= m
        for ch, m in self.max_count.items():
            keep &= counts[:, _code(ch)] <= m

        # Yellow: present elsewhere, not here
        for i, ch in self.yellows:
            c = _code(ch)
            keep &= (chars[:, i] != c) & (counts[:, c] >= 1)

        return keep

    def filter(self, words: Sequence[str]) -> List[str]:
        """Words (cleaned, dictionary order kept) that satisfy the constraints."""
        words = clean_words(words)
        keep = self.mask(words)
        return [w for w, k in zip(words, keep) if k]

    def allows(self, word: str) -> bool:
        return bool(self.filter([word]))


def _code(ch: str) -> int:
    return ord(ch) - ord('a')


def evaluate_board(board: Iterable[Iterable], words: Optional[Sequence[str]] = None,
                   limit: int = DISPLAY_LIMIT) -> GameResult:
    """
    Candidate solutions for ``board``.

    Args:
        board: rows of five cells
        words: dictionary; loaded from the default provider when None
        limit: cap on returned words (the count is never capped)

    Returns:
        GameResult with at most ``limit`` words in dictionary order
    """
    if words is None:
        words = load_words()
    if not words:
        return GameResult([], 0, NO_WORDS_MESSAGE)

    cons = LetterConstraints.from_board(board)
    candidates = cons.filter(words)
    logger.debug("Board matched %d of %d words", len(candidates), len(words))

    shown = candidates[:limit] if limit and limit > 0 else candidates
    return GameResult(shown, len(candidates))
