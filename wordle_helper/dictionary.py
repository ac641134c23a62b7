"""
Dictionary Provider
===================

Supplies the word list as an ordered list of lowercase strings.

The source is a JSON file holding a flat array of strings (the bundled
``data/words5.json`` by default, or the path in ``WORDLE_HELPER_WORDS``). A
``.txt`` file is read one word per line instead. Malformed entries are left in
place; the evaluator drops them at filter time.

A failed load is logged and yields an empty list. It is not cached, so the
next call tries again.
"""

import json
import logging
import os
import threading
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

ENV_VAR = 'WORDLE_HELPER_WORDS'
DEFAULT_WORDS_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                                  'data', 'words5.json')


def default_path() -> str:
    return os.environ.get(ENV_VAR) or DEFAULT_WORDS_FILE


def read_word_list(filepath: str) -> List[str]:
    """
    Read and lowercase a word list.

    Raises:
        OSError: if the file cannot be read
        ValueError: if a JSON file is malformed or not a flat array
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        if not filepath.endswith('.json'):
            return [line.strip().lower() for line in f if line.strip()]
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of words in {filepath}")
    return [w.lower() for w in data if isinstance(w, str)]


class DictionaryProvider:
    """Loads a word list once and hands out the cached copy afterwards."""

    def __init__(self, filepath: Optional[str] = None):
        self.filepath = filepath
        self._words: Optional[List[str]] = None
        self._lock = threading.Lock()

    @property
    def path(self) -> str:
        return self.filepath or default_path()

    @property
    def loaded(self) -> bool:
        return self._words is not None

    def get(self) -> List[str]:
        if self._words is not None:
            return self._words
        with self._lock:
            if self._words is None:
                path = self.path
                try:
                    words = read_word_list(path)
                except (OSError, ValueError) as e:
                    logger.error("Could not load word list %s: %s", path, e)
                    return []
                logger.info("Loaded %d words from %s", len(words), path)
                self._words = words
        return self._words

    def reset(self) -> None:
        with self._lock:
            self._words = None


_default_provider = DictionaryProvider()


def load_words(filepath: Optional[str] = None) -> List[str]:
    """
    Load words, cached process-wide for the default source.

    Args:
        filepath: explicit word list; read fresh on every call when given

    Returns:
        Lowercased words, or [] if the source could not be read
    """
    if filepath is None:
        return _default_provider.get()
    return DictionaryProvider(filepath).get()


def reset_cache() -> None:
    _default_provider.reset()


def dedupe_words(filepath: str) -> Tuple[int, int]:
    """
    Lowercase, drop empty entries and de-duplicate a JSON word list in place.

    First occurrences keep their position.

    Returns:
        (original_count, deduplicated_count)
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of words in {filepath}")

    seen = set()
    dedup = []
    for w in data:
        if not w:
            continue
        lw = str(w).lower()
        if lw not in seen:
            seen.add(lw)
            dedup.append(lw)

    with open(filepath, 'w', encoding='utf-8') as f:
        f.write(json.dumps(dedup, indent=2) + '\n')

    logger.info("Deduped %s: %d -> %d words", filepath, len(data), len(dedup))
    return len(data), len(dedup)
