"""
Feedback Oracle
===============

Reproduces the game's scoring rule for a guess against a hypothetical
solution.

Two renditions of the same two-pass rule live here:

- ``get_feedback_pattern`` works on plain strings and returns a 5-character
  pattern of ``'2'`` (exact), ``'1'`` (misplaced) and ``'0'`` (absent).
- ``compute_feedback`` / ``compute_feedback_matrix`` work on letter-code arrays
  under numba and return the pattern as a base-3 integer (0-242). Ranking and
  search use the matrix form so every guess/candidate pair is scored once.

Exact matches are always taken before misplaced ones, so a doubled letter in
the guess is only credited as often as it occurs in the solution.
"""

import re
from collections import defaultdict
from typing import Dict, List, Sequence

import numpy as np
from numba import jit, prange


# ============================================================================
# CONSTANTS
# ============================================================================

WORD_LENGTH = 5
CORRECT_PATTERN = 242  # 2 + 2*3 + 2*9 + 2*27 + 2*81 = 242 (all green)
N_PATTERNS = 243  # 3^5 possible feedback patterns

_WORD_RE = re.compile(r'^[a-z]{5}$')
_PATTERN_ALIASES = {
    '0': '0', 'b': '0',
    '1': '1', 'y': '1',
    '2': '2', 'g': '2',
}


def is_valid_word(word) -> bool:
    """True for exactly five lowercase ASCII letters."""
    return isinstance(word, str) and _WORD_RE.match(word) is not None


def clean_words(words: Sequence[str]) -> List[str]:
    """Lowercase ``words`` and drop anything that is not a five-letter word."""
    cleaned = []
    for w in words:
        if not isinstance(w, str):
            continue
        w = w.lower()
        if is_valid_word(w):
            cleaned.append(w)
    return cleaned


# ============================================================================
# STRING FEEDBACK
# ============================================================================

def get_feedback_pattern(guess: str, solution: str) -> str:
    """
    Compute Wordle feedback for a guess against a solution.

    Args:
        guess: five-letter guess (any case)
        solution: five-letter hypothetical solution (any case)

    Returns:
        Pattern string, one of '2' / '1' / '0' per position
    """
    g = guess.lower()
    s = solution.lower()
    pattern = ['0'] * WORD_LENGTH

    remaining = defaultdict(int)
    for ch in s:
        remaining[ch] += 1

    # First pass: mark greens
    for i in range(WORD_LENGTH):
        if g[i] == s[i]:
            pattern[i] = '2'
            remaining[g[i]] -= 1

    # Second pass: mark yellows against what the greens left over
    for i in range(WORD_LENGTH):
        if pattern[i] == '2':
            continue
        if remaining[g[i]] > 0:
            pattern[i] = '1'
            remaining[g[i]] -= 1

    return ''.join(pattern)


def partition(guess: str, candidates: Sequence[str]) -> Dict[str, List[str]]:
    """Group ``candidates`` by the pattern ``guess`` would produce against each."""
    parts: Dict[str, List[str]] = {}
    for sol in candidates:
        parts.setdefault(get_feedback_pattern(guess, sol), []).append(sol)
    return parts


def normalize_pattern(pattern: str) -> str:
    """
    Accept '0/1/2' digits or 'B/Y/G' letters (any case) and return digits.

    Raises:
        ValueError: if the pattern is not five recognised symbols
    """
    if not isinstance(pattern, str) or len(pattern) != WORD_LENGTH:
        raise ValueError(f"Pattern must have {WORD_LENGTH} symbols: {pattern!r}")
    out = []
    for c in pattern.lower():
        if c not in _PATTERN_ALIASES:
            raise ValueError(f"Invalid pattern char: {c}")
        out.append(_PATTERN_ALIASES[c])
    return ''.join(out)


def pattern_to_int(pattern: str) -> int:
    """Convert pattern string (e.g. '00122' or 'BBYGG') to integer (0-242)."""
    result = 0
    multiplier = 1
    for c in normalize_pattern(pattern):
        result += int(c) * multiplier
        multiplier *= 3
    return result


def int_to_pattern(n: int) -> str:
    """Convert integer (0-242) to pattern string."""
    if not 0 <= n < N_PATTERNS:
        raise ValueError(f"Pattern code out of range: {n}")
    chars = []
    for _ in range(WORD_LENGTH):
        chars.append(str(n % 3))
        n //= 3
    return ''.join(chars)


def pattern_to_emoji(pattern: str) -> str:
    """Render a pattern with the game's coloured squares."""
    return ''.join(['⬛', '🟨', '🟩'][int(c)] for c in normalize_pattern(pattern))


# ============================================================================
# NUMBA-ACCELERATED FEEDBACK COMPUTATION
# ============================================================================

def words_to_chars(words: Sequence[str]) -> np.ndarray:
    """Convert words to a (n, 5) array of letter codes (0-25 for a-z)."""
    arr = np.zeros((len(words), WORD_LENGTH), dtype=np.int32)
    for i, w in enumerate(words):
        for j, c in enumerate(w):
            arr[i, j] = ord(c) - ord('a')
    return arr


@jit(nopython=True, cache=True)
def compute_feedback(guess: np.ndarray, answer: np.ndarray) -> int:
    """
    Compute Wordle feedback for a guess against an answer.

    Args:
        guess: shape (5,) array of char codes (0-25 for a-z)
        answer: shape (5,) array of char codes

    Returns:
        Integer feedback pattern (0-242)
    """
    feedback = np.zeros(5, dtype=np.int32)
    answer_counts = np.zeros(26, dtype=np.int32)

    for i in range(5):
        answer_counts[answer[i]] += 1

    for i in range(5):
        if guess[i] == answer[i]:
            feedback[i] = 2
            answer_counts[guess[i]] -= 1

    for i in range(5):
        if feedback[i] == 0:
            c = guess[i]
            if answer_counts[c] > 0:
                feedback[i] = 1
                answer_counts[c] -= 1

    return feedback[0] + 3*feedback[1] + 9*feedback[2] + 27*feedback[3] + 81*feedback[4]


@jit(nopython=True, parallel=True, cache=True)
def compute_feedback_matrix(guess_chars: np.ndarray, answer_chars: np.ndarray) -> np.ndarray:
    """
    Compute feedback for all guess/answer pairs in parallel.

    Args:
        guess_chars: shape (n_guesses, 5) array of char codes
        answer_chars: shape (n_answers, 5) array of char codes

    Returns:
        shape (n_guesses, n_answers) feedback matrix
    """
    n_guesses = guess_chars.shape[0]
    n_answers = answer_chars.shape[0]
    result = np.zeros((n_guesses, n_answers), dtype=np.uint8)

    for i in prange(n_guesses):
        for j in range(n_answers):
            result[i, j] = compute_feedback(guess_chars[i], answer_chars[j])

    return result


def feedback_matrix(guesses: Sequence[str], answers: Sequence[str]) -> np.ndarray:
    """Feedback matrix for two lists of already-cleaned words."""
    return compute_feedback_matrix(words_to_chars(guesses), words_to_chars(answers))
