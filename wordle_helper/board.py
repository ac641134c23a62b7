"""
Board model
===========

A board is a list of rows, each row five ``Cell`` objects of (letter, color).
Callers may hand in cells as ``Cell`` instances, mappings with ``char`` (or
``letter``) and ``color`` keys, or ``(letter, color)`` tuples; ``normalize_board``
turns all of them into ``Cell`` rows.

Anything that is not a single a-z letter becomes an empty cell, and any color
outside green/yellow/grey becomes ``UNSET``. Neither contributes a constraint.
"""

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from .feedback import WORD_LENGTH, is_valid_word, normalize_pattern


GREEN = 'green'
YELLOW = 'yellow'
GREY = 'grey'
UNSET = 'unset'

COLORS = (GREEN, YELLOW, GREY)
_COLOR_ALIASES = {'gray': GREY}
_PATTERN_COLORS = {'2': GREEN, '1': YELLOW, '0': GREY}


@dataclass(frozen=True)
class Cell:
    letter: str = ''
    color: str = UNSET

    @property
    def is_empty(self) -> bool:
        return not self.letter

    @property
    def is_matched(self) -> bool:
        """Green or yellow."""
        return bool(self.letter) and self.color in (GREEN, YELLOW)

    @property
    def is_scored(self) -> bool:
        """Carries a letter and a recognised color."""
        return bool(self.letter) and self.color in COLORS


Row = List[Cell]
Board = List[Row]


def normalize_color(color) -> str:
    if not isinstance(color, str):
        return UNSET
    color = color.strip().lower()
    color = _COLOR_ALIASES.get(color, color)
    return color if color in COLORS else UNSET


def normalize_letter(letter) -> str:
    if not isinstance(letter, str):
        return ''
    letter = letter.strip().lower()
    if len(letter) == 1 and 'a' <= letter <= 'z':
        return letter
    return ''


def to_cell(raw) -> Cell:
    """Coerce one raw cell into a ``Cell``."""
    if isinstance(raw, Cell):
        return Cell(normalize_letter(raw.letter), normalize_color(raw.color))
    if isinstance(raw, dict):
        letter = raw.get('char', raw.get('letter', ''))
        return Cell(normalize_letter(letter), normalize_color(raw.get('color')))
    if isinstance(raw, (tuple, list)) and len(raw) == 2:
        return Cell(normalize_letter(raw[0]), normalize_color(raw[1]))
    return Cell()


def normalize_row(raw_row: Iterable) -> Row:
    """Exactly five cells: extra cells dropped, short rows padded with empties."""
    row = [to_cell(c) for c in list(raw_row)[:WORD_LENGTH]]
    row.extend(Cell() for _ in range(WORD_LENGTH - len(row)))
    return row


def normalize_board(board: Iterable[Iterable]) -> Board:
    return [normalize_row(r) for r in (board or [])]


def effective_rows(board: Iterable[Iterable]) -> Board:
    """Normalized rows that hold at least one letter."""
    return [row for row in normalize_board(board) if any(not c.is_empty for c in row)]


def row_from_guess(guess: str, pattern: str) -> Row:
    """
    Build a scored row from a guess and its feedback pattern.

    Args:
        guess: five-letter word
        pattern: '0/1/2' digits or 'B/Y/G' letters

    Raises:
        ValueError: on a malformed guess or pattern
    """
    word = guess.lower() if isinstance(guess, str) else guess
    if not is_valid_word(word):
        raise ValueError(f"Guess must be five letters a-z: {guess!r}")
    digits = normalize_pattern(pattern)
    return [Cell(ch, _PATTERN_COLORS[d]) for ch, d in zip(word, digits)]


def board_from_guesses(history: Sequence[Tuple[str, str]]) -> Board:
    """Turn ``[(guess, pattern), ...]`` into a board."""
    return [row_from_guess(guess, pattern) for guess, pattern in history]
