"""
Command-line front end.

Boards are given as ``guess:pattern`` pairs, pattern in 0/1/2 or B/Y/G:

    python -m wordle_helper filter crane:00200
    python -m wordle_helper rank crane:00200 --top 10
    python -m wordle_helper search crane:00200 --budget-ms 2000
    python -m wordle_helper feedback allot lowly
    python -m wordle_helper dedupe words5.json
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .board import board_from_guesses
from .constraints import DISPLAY_LIMIT, GameResult, evaluate_board
from .dictionary import dedupe_words, load_words
from .feedback import get_feedback_pattern, is_valid_word, pattern_to_emoji
from .ranking import rank_guesses_by_expected_remaining
from .search import SearchConfig, find_best_guess_recursive

logger = logging.getLogger(__name__)


def _parse_history(parser: argparse.ArgumentParser, items: List[str]):
    history = []
    for item in items:
        guess, sep, pattern = item.partition(':')
        if not sep:
            parser.error(f"expected guess:pattern, got {item!r}")
        history.append((guess, pattern))
    try:
        return board_from_guesses(history)
    except ValueError as e:
        parser.error(str(e))


def _candidates(args, parser):
    """Every word matching the board (uncapped), and the dictionary."""
    board = _parse_history(parser, args.history)
    words = load_words(args.words)
    return evaluate_board(board, words, limit=0), words


def _print_header(title: str):
    print("=" * 50)
    print(title)
    print("=" * 50)


def cmd_filter(args, parser) -> int:
    full, _ = _candidates(args, parser)
    result = GameResult(full.possible_words[:DISPLAY_LIMIT], full.count, full.message)
    if args.json:
        print(json.dumps(result.to_dict()))
        return 0
    if result.message:
        print(f"Error: {result.message}")
        return 1
    _print_header(f"{result.count} possible words")
    shown = result.possible_words[:args.top] if args.top > 0 else result.possible_words
    for w in shown:
        print(f"  {w}")
    if result.count > len(shown):
        print(f"  ... and {result.count - len(shown)} more")
    return 0


def cmd_rank(args, parser) -> int:
    result, words = _candidates(args, parser)
    if result.message:
        print(f"Error: {result.message}")
        return 1
    pool = words if args.pool_all else None
    ranked = rank_guesses_by_expected_remaining(result.possible_words, pool, args.top)
    if args.json:
        print(json.dumps([r.to_dict() for r in ranked]))
        return 0
    _print_header(f"Best guesses for {len(result.possible_words)} candidates")
    for r in ranked:
        print(f"  {r.word}  expected={r.expected_remaining:8.3f}  partitions={r.partitions}")
    return 0


def cmd_search(args, parser) -> int:
    result, words = _candidates(args, parser)
    if result.message:
        print(f"Error: {result.message}")
        return 1
    pool = words if args.pool_all else None
    config = SearchConfig(args.candidate_limit, args.max_guesses, args.budget_ms)
    found = find_best_guess_recursive(result.possible_words, pool,
                                      config.candidate_limit,
                                      config.max_guesses_consider,
                                      config.time_budget_ms)
    if args.json:
        print(json.dumps(found.to_dict()))
        return 0
    _print_header(f"Expected guesses ({found.time_ms:.0f}ms"
                  f"{', budget exhausted' if found.aborted else ''})")
    best = found.best[:args.top] if args.top > 0 else found.best
    for b in best:
        print(f"  {b.word}  {b.expected_steps:.4f}")
    return 0


def cmd_feedback(args, parser) -> int:
    for w in (args.guess, args.solution):
        if not is_valid_word(w.lower()):
            parser.error(f"expected a five-letter word, got {w!r}")
    pattern = get_feedback_pattern(args.guess, args.solution)
    if args.json:
        print(json.dumps({'pattern': pattern}))
    else:
        print(f"{args.guess.lower()} -> {pattern}  {pattern_to_emoji(pattern)}")
    return 0


def cmd_dedupe(args, parser) -> int:
    try:
        original, deduped = dedupe_words(args.path)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"Deduped words written to {args.path}")
    print(f"Original count: {original}")
    print(f"Deduplicated count: {deduped}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='wordle-helper',
        description="Filter, rank and plan Wordle guesses from board feedback")
    parser.add_argument('--words', default=None,
                        help="word list (.json array or .txt); defaults to the bundled list")
    parser.add_argument('--json', action='store_true', help="print machine-readable output")
    parser.add_argument('-v', '--verbose', action='store_true', help="log progress")
    sub = parser.add_subparsers(dest='command', required=True)

    def board_command(name, func, help_text):
        p = sub.add_parser(name, help=help_text)
        p.add_argument('history', nargs='*', metavar='GUESS:PATTERN',
                       help="played guess and its feedback, e.g. crane:00200")
        p.add_argument('--top', type=int, default=20, help="rows to show (0 = all)")
        p.set_defaults(func=func)
        return p

    board_command('filter', cmd_filter, "list words consistent with the board")

    p = board_command('rank', cmd_rank, "rank guesses by expected remaining candidates")
    p.add_argument('--pool-all', action='store_true',
                   help="rank every dictionary word, not only candidates")

    p = board_command('search', cmd_search, "rank guesses by expected guesses to solve")
    p.add_argument('--pool-all', action='store_true',
                   help="consider every dictionary word as a guess")
    p.add_argument('--candidate-limit', type=int, default=SearchConfig.candidate_limit)
    p.add_argument('--max-guesses', type=int, default=SearchConfig.max_guesses_consider,
                   help="guesses tried per node")
    p.add_argument('--budget-ms', type=int, default=SearchConfig.time_budget_ms)

    p = sub.add_parser('feedback', help="score one guess against one solution")
    p.add_argument('guess')
    p.add_argument('solution')
    p.set_defaults(func=cmd_feedback)

    p = sub.add_parser('dedupe', help="lowercase and de-duplicate a JSON word list in place")
    p.add_argument('path')
    p.set_defaults(func=cmd_dedupe)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s')
    return args.func(args, parser)
