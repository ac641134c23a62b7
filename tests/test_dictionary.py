import json
import logging

import pytest

from wordle_helper import dictionary
from wordle_helper.constraints import NO_WORDS_MESSAGE, evaluate_board
from wordle_helper.dictionary import (
    DEFAULT_WORDS_FILE, DictionaryProvider, dedupe_words, load_words,
)
from wordle_helper.feedback import is_valid_word


@pytest.fixture(autouse=True)
def fresh_default_cache():
    dictionary.reset_cache()
    yield
    dictionary.reset_cache()


def write_json(path, words):
    path.write_text(json.dumps(words), encoding="utf-8")
    return str(path)


def test_json_words_are_lowercased(tmp_path):
    path = write_json(tmp_path / "words.json", ["Crane", "SLATE", "mount"])
    assert load_words(path) == ["crane", "slate", "mount"]


def test_txt_word_list(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("Crane\n\nslate\n  mount \n", encoding="utf-8")
    assert load_words(str(path)) == ["crane", "slate", "mount"]


def test_malformed_entries_kept_until_evaluation(tmp_path):
    path = write_json(tmp_path / "words.json", ["crane", "toolong", "ab"])
    assert load_words(path) == ["crane", "toolong", "ab"]


def test_missing_file_logs_and_returns_empty(tmp_path, caplog):
    with caplog.at_level(logging.ERROR, logger="wordle_helper.dictionary"):
        assert load_words(str(tmp_path / "missing.json")) == []
    assert "Could not load word list" in caplog.text


def test_non_list_json_returns_empty(tmp_path):
    path = tmp_path / "words.json"
    path.write_text('{"words": ["crane"]}', encoding="utf-8")
    assert load_words(str(path)) == []
    path.write_text("not json", encoding="utf-8")
    assert load_words(str(path)) == []


def test_provider_loads_once(tmp_path):
    path = tmp_path / "words.json"
    write_json(path, ["crane"])
    provider = DictionaryProvider(str(path))
    assert provider.get() == ["crane"]
    write_json(path, ["slate"])
    assert provider.get() == ["crane"]
    provider.reset()
    assert provider.get() == ["slate"]


def test_failed_load_is_not_cached(tmp_path):
    path = tmp_path / "words.json"
    provider = DictionaryProvider(str(path))
    assert provider.get() == []
    assert not provider.loaded
    write_json(path, ["crane"])
    assert provider.get() == ["crane"]
    assert provider.loaded


def test_env_var_selects_default_source(tmp_path, monkeypatch):
    path = write_json(tmp_path / "words.json", ["crane", "slate"])
    monkeypatch.setenv(dictionary.ENV_VAR, path)
    assert load_words() == ["crane", "slate"]
    assert evaluate_board([]).possible_words == ["crane", "slate"]


def test_evaluator_reports_failed_default_load(tmp_path, monkeypatch):
    monkeypatch.setenv(dictionary.ENV_VAR, str(tmp_path / "missing.json"))
    result = evaluate_board([])
    assert result.count == 0
    assert result.message == NO_WORDS_MESSAGE


def test_bundled_word_list():
    words = DictionaryProvider(DEFAULT_WORDS_FILE).get()
    assert len(words) > 100
    assert all(is_valid_word(w) for w in words)
    assert len(set(words)) == len(words)


def test_dedupe(tmp_path):
    path = write_json(tmp_path / "words.json", ["Crane", "crane", "", "SLATE", "slate", "mount"])
    assert dedupe_words(path) == (6, 3)
    with open(path, encoding="utf-8") as f:
        text = f.read()
    assert text.endswith("\n")
    assert json.loads(text) == ["crane", "slate", "mount"]


def test_dedupe_rejects_non_list(tmp_path):
    path = tmp_path / "words.json"
    path.write_text('"crane"', encoding="utf-8")
    with pytest.raises(ValueError):
        dedupe_words(str(path))
