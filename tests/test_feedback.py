import pytest

from wordle_helper.feedback import (
    CORRECT_PATTERN, feedback_matrix, get_feedback_pattern, int_to_pattern,
    is_valid_word, normalize_pattern, partition, pattern_to_emoji, pattern_to_int,
)

WORDS = ["allot", "lowly", "speed", "abide", "balls", "lemon", "crane", "slate",
         "mount", "eerie", "total", "atoll", "mamma", "jazzy"]


def test_allot_against_lowly():
    # lowly holds two l's, so both guessed l's are credited
    assert get_feedback_pattern("allot", "lowly") == "01110"


def test_doubled_guess_letter_single_in_solution():
    # one l in lemon: first l misplaced, second absent
    assert get_feedback_pattern("balls", "lemon") == "00100"
    # one e in abide: first e misplaced, second absent
    assert get_feedback_pattern("speed", "abide") == "00101"


def test_exact_match_takes_priority_over_misplaced():
    # the green l at position 3 consumes world's only l
    assert get_feedback_pattern("hello", "world") == "00021"


def test_case_is_normalized():
    assert get_feedback_pattern("CRANE", "crane") == "22222"
    assert get_feedback_pattern("Allot", "LOWLY") == "01110"


def test_green_count_equals_identical_positions():
    for g in WORDS:
        for s in WORDS:
            same = sum(a == b for a, b in zip(g, s))
            assert get_feedback_pattern(g, s).count("2") == same


def test_pattern_int_conversion():
    assert pattern_to_int("22222") == CORRECT_PATTERN
    assert pattern_to_int("00000") == 0
    assert pattern_to_int("BBYGG") == pattern_to_int("00122")
    for p in ["01110", "00101", "21020", "22222"]:
        assert int_to_pattern(pattern_to_int(p)) == p


def test_bad_patterns_raise():
    with pytest.raises(ValueError):
        normalize_pattern("0012")
    with pytest.raises(ValueError):
        pattern_to_int("00z22")
    with pytest.raises(ValueError):
        int_to_pattern(243)


@pytest.mark.parametrize("pattern", ["00x00", "00.00", "0-000"])
def test_only_digits_and_byg_are_pattern_symbols(pattern):
    with pytest.raises(ValueError):
        normalize_pattern(pattern)
    assert normalize_pattern("bYg20") == "01220"


def test_emoji():
    assert pattern_to_emoji("02100") == "⬛🟩🟨⬛⬛"


def test_matrix_agrees_with_string_oracle():
    matrix = feedback_matrix(WORDS, WORDS)
    assert matrix.shape == (len(WORDS), len(WORDS))
    for i, g in enumerate(WORDS):
        for j, s in enumerate(WORDS):
            assert int(matrix[i, j]) == pattern_to_int(get_feedback_pattern(g, s))


def test_partitions_disjoint_and_exhaustive():
    for guess in ["crane", "lowly", "mamma"]:
        parts = partition(guess, WORDS)
        members = [w for part in parts.values() for w in part]
        assert sorted(members) == sorted(WORDS)
        assert len(members) == len(set(members))
        for pattern, part in parts.items():
            assert all(get_feedback_pattern(guess, w) == pattern for w in part)


def test_is_valid_word():
    assert is_valid_word("crane")
    assert not is_valid_word("Crane")
    assert not is_valid_word("cranes")
    assert not is_valid_word("cr4ne")
    assert not is_valid_word(None)
