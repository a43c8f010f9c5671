import random
from collections import Counter

import pytest

from wordlebot.engine import (
    ALL_HIT,
    HIT,
    MISS,
    PRESENT,
    InvalidWordError,
    compute_pattern,
    filter_candidates,
    is_consistent,
    normalize_word,
    pattern_from_str,
    pattern_to_emoji,
    pattern_to_str,
    validate_guess,
)
from wordlebot.engine.scoring import count_hits, count_present, encode_marks, marks

# --- golden tests (duplicates + placements) ---
@pytest.mark.parametrize("guess,secret,expected", [
    ("belle", "level", "-GYYY"),
    ("level", "level", "GGGGG"),
    ("lemon", "level", "GG---"),
    ("cools", "scoop", "YYG-Y"),
    ("scoop", "scoop", "GGGGG"),
    ("crane", "crane", "GGGGG"),
    ("raise", "crane", "YY--G"),
    ("stare", "crane", "--GYG"),
    ("robot", "floor", "YY-G-"),
    ("speed", "erase", "Y-YY-"),
    ("eerie", "there", "Y-Y-G"),
    ("geese", "eerie", "-GY-G"),
])
def test_compute_pattern_golden(guess, secret, expected):
    assert pattern_to_str(compute_pattern(guess, secret)) == expected


def test_speed_erase_value():
    # leftmost tile is the least significant base-3 digit
    assert compute_pattern("speed", "erase") == 1 + 9 + 27


def test_all_hit_value():
    assert ALL_HIT == 242
    assert encode_marks([HIT] * 5) == ALL_HIT


WORDS = ["crane", "speed", "erase", "level", "belle", "geese", "eerie", "llama",
         "allay", "mamma", "robot", "floor", "scoop", "cools", "abbey", "ebbed"]


def test_self_pattern_is_all_hit():
    for w in WORDS:
        assert compute_pattern(w, w) == ALL_HIT


def test_marks_never_exceed_letter_count():
    rng = random.Random(7)
    for _ in range(300):
        g, s = rng.choice(WORDS), rng.choice(WORDS)
        m = marks(compute_pattern(g, s))
        credited = Counter(g[i] for i in range(5) if m[i] != MISS)
        secret_counts = Counter(s)
        for letter, n in credited.items():
            assert n <= secret_counts[letter]
        for i in range(5):
            assert (m[i] == HIT) == (g[i] == s[i])


def test_pattern_text_roundtrip_and_aliases():
    assert pattern_from_str("GY-G-") == pattern_from_str("gy_g_")
    assert pattern_from_str("🟩🟨⬜🟩⬛") == pattern_from_str("GY-G-")
    p = pattern_from_str("Y-YY-")
    assert pattern_to_str(p) == "Y-YY-"
    assert pattern_to_emoji(p) == "🟨⬜🟨🟨⬜"
    assert count_hits(ALL_HIT) == 5
    assert count_present(p) == 3


@pytest.mark.parametrize("bad", ["GGGG", "GGGGGG", "GXY--", ""])
def test_pattern_from_str_rejects(bad):
    with pytest.raises(ValueError):
        pattern_from_str(bad)


def test_marks_rejects_out_of_range():
    with pytest.raises(ValueError):
        marks(243)
    with pytest.raises(ValueError):
        marks(-1)


def test_is_consistent():
    p = compute_pattern("raise", "crane")
    assert is_consistent("crane", "raise", p)
    assert not is_consistent("stare", "raise", p)


def test_filter_candidates_history():
    words = ["crane", "raise", "stare", "trace", "cared", "racer", "scoop"]
    history = [("raise", pattern_from_str("YY--G"))]
    cand = filter_candidates(words, history)
    assert "crane" in cand and "stare" not in cand and "scoop" not in cand


def test_normalize_word():
    assert normalize_word("  CRANE \n") == "crane"
    for bad in ["cranes", "cran", "cr4ne", "crâne", "", None]:
        with pytest.raises(InvalidWordError):
            normalize_word(bad)


def test_invalid_word_error_is_value_error():
    with pytest.raises(ValueError):
        normalize_word("???")


def test_validate_guess():
    allowed = {"crane", "raise", "stare"}
    assert validate_guess("CRANE", allowed) is True
    assert validate_guess("cranes", allowed) is False
    assert validate_guess("???", allowed) is False
    assert validate_guess("slate", allowed) is False
    assert validate_guess("slate") is True
