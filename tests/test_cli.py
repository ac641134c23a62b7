import itertools
import json

import pytest

from wordle_helper.cli import main
from wordle_helper.ranking import rank_guesses_by_expected_remaining

WORDS = ["crane", "plaid", "shaft", "bland", "slate", "mount"]


@pytest.fixture
def words_file(tmp_path):
    path = tmp_path / "words.json"
    path.write_text(json.dumps(WORDS), encoding="utf-8")
    return str(path)


def test_feedback(capsys):
    assert main(["feedback", "allot", "lowly"]) == 0
    assert "01110" in capsys.readouterr().out


def test_filter(words_file, capsys):
    assert main(["--words", words_file, "filter", "crane:BBGBB"]) == 0
    out = capsys.readouterr().out
    assert "2 possible words" in out
    assert "plaid" in out and "shaft" in out
    assert "bland" not in out


def test_filter_json(words_file, capsys):
    assert main(["--words", words_file, "--json", "filter", "crane:00200"]) == 0
    assert json.loads(capsys.readouterr().out) == {"possibleWords": ["plaid", "shaft"], "count": 2}


def test_rank_json(words_file, capsys):
    assert main(["--words", words_file, "--json", "rank", "--top", "0"]) == 0
    ranked = json.loads(capsys.readouterr().out)
    assert sorted(r["word"] for r in ranked) == sorted(WORDS)
    scores = [r["expectedRemaining"] for r in ranked]
    assert scores == sorted(scores)


def test_search_json(words_file, capsys):
    assert main(["--words", words_file, "--json", "search", "crane:00200"]) == 0
    found = json.loads(capsys.readouterr().out)
    assert [b["word"] for b in found["best"]] == ["plaid", "shaft"]
    assert found["aborted"] is False


def test_missing_word_list(tmp_path, capsys):
    assert main(["--words", str(tmp_path / "none.json"), "filter"]) == 1
    assert "no words loaded" in capsys.readouterr().out


def test_bad_pattern_is_a_usage_error(words_file):
    with pytest.raises(SystemExit) as exc:
        main(["--words", words_file, "filter", "crane:00x00"])
    assert exc.value.code == 2


def test_dedupe(tmp_path, capsys):
    path = tmp_path / "words.json"
    path.write_text(json.dumps(["A", "a", "b"]), encoding="utf-8")
    assert main(["dedupe", str(path)]) == 0
    out = capsys.readouterr().out
    assert "Original count: 3" in out
    assert "Deduplicated count: 2" in out


def test_dedupe_missing_file(tmp_path):
    assert main(["dedupe", str(tmp_path / "none.json")]) == 1


@pytest.fixture
def large_words_file(tmp_path):
    # 11^3 = 1331 distinct words, all consistent with an empty board
    words = ["aa" + "".join(t) for t in itertools.product("abcdefghijk", repeat=3)]
    path = tmp_path / "large.json"
    path.write_text(json.dumps(words), encoding="utf-8")
    return str(path), words


def test_filter_json_caps_display_but_not_count(large_words_file, capsys):
    path, words = large_words_file
    assert main(["--words", path, "--json", "filter"]) == 0
    found = json.loads(capsys.readouterr().out)
    assert found["count"] == 1331
    assert found["possibleWords"] == words[:1000]


def test_rank_uses_every_candidate_past_display_cap(large_words_file, capsys):
    path, words = large_words_file
    assert main(["--words", path, "--json", "rank", "--top", "0"]) == 0
    ranked = json.loads(capsys.readouterr().out)
    assert len(ranked) == 1331
    assert {r["word"] for r in ranked} == set(words)
    direct = rank_guesses_by_expected_remaining(words, limit=5)
    assert [r["word"] for r in ranked[:5]] == [r.word for r in direct]
    assert ranked[0]["expectedRemaining"] == pytest.approx(direct[0].expected_remaining)


def test_search_uses_every_candidate_past_display_cap(large_words_file, capsys):
    path, _ = large_words_file
    argv = ["--words", path, "--json", "search", "--candidate-limit", "2000",
            "--max-guesses", "0", "--budget-ms", "0"]
    assert main(argv) == 0
    found = json.loads(capsys.readouterr().out)
    assert len(found["best"]) == 1331
    assert found["aborted"] is True


@pytest.mark.parametrize("word", ["cafés", "éclat", "ab1de"])
def test_feedback_rejects_non_ascii_words(word):
    with pytest.raises(SystemExit) as exc:
        main(["feedback", word, "crane"])
    assert exc.value.code == 2
