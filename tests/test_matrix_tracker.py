import numpy as np
import pytest

from wordlebot.engine import (
    ALL_HIT,
    CandidateTracker,
    InvariantViolation,
    compute_pattern,
    filter_candidates,
)
from wordlebot.engine.matrix import PatternMatrix, fingerprint

from conftest import ANSWERS


def test_matrix_matches_scalar_engine(small_lexicon):
    M = small_lexicon.matrix.data
    guesses = small_lexicon.guess_words()
    answers = small_lexicon.answer_words()
    assert M.shape == (len(guesses), len(answers))
    assert M.dtype == np.uint8
    for gi, g in enumerate(guesses):
        for ai, a in enumerate(answers):
            assert M[gi, ai] == compute_pattern(g, a)


def test_matrix_is_read_only(small_lexicon):
    with pytest.raises(ValueError):
        small_lexicon.matrix.data[0, 0] = 0


def test_matrix_build_in_blocks_matches_single_block():
    words = ["speed", "erase", "level", "belle", "geese", "eerie", "crane"]
    small = PatternMatrix.BLOCK_ROWS
    try:
        PatternMatrix.BLOCK_ROWS = 2
        blocked = PatternMatrix.build(words, words).data
    finally:
        PatternMatrix.BLOCK_ROWS = small
    assert (blocked == PatternMatrix.build(words, words).data).all()


def test_fingerprint_depends_on_order():
    assert fingerprint(["crane"], ["slate", "crane"]) != fingerprint(["crane"], ["crane", "slate"])


def test_tracker_starts_full(small_lexicon):
    t = CandidateTracker(small_lexicon)
    assert t.size() == len(ANSWERS)
    assert t.remaining() == tuple(ANSWERS)


def test_filter_is_sound(small_lexicon):
    for secret in ANSWERS:
        t = CandidateTracker(small_lexicon)
        for guess in ("salet", "roate", "dumpy"):
            t.filter(guess, compute_pattern(guess, secret))
            assert secret in t


def test_filter_matches_reference(small_lexicon):
    t = CandidateTracker(small_lexicon)
    history = [("salet", compute_pattern("salet", "crane")),
               ("roate", compute_pattern("roate", "crane"))]
    for g, p in history:
        t.filter(g, p)
    assert list(t.remaining()) == filter_candidates(ANSWERS, history)


def test_filter_is_idempotent(small_lexicon):
    t = CandidateTracker(small_lexicon)
    p = compute_pattern("salet", "trace")
    once = t.filter("salet", p)
    snapshot = t.remaining()
    assert t.filter("salet", p) == once
    assert t.remaining() == snapshot


def test_filter_guess_outside_vocabulary(small_lexicon):
    t = CandidateTracker(small_lexicon)
    p = compute_pattern("quick", "chunk")
    t.filter("quick", p)
    assert list(t.remaining()) == filter_candidates(ANSWERS, [("quick", p)])
    assert "chunk" in t


def test_empty_result_raises_and_keeps_state(small_lexicon):
    t = CandidateTracker(small_lexicon)
    t.filter("salet", compute_pattern("salet", "crane"))
    before = t.remaining()
    with pytest.raises(InvariantViolation):
        t.filter("salet", ALL_HIT)  # salet is not an answer
    assert t.remaining() == before


def test_reset(small_lexicon):
    t = CandidateTracker(small_lexicon)
    t.filter("crane", ALL_HIT)
    assert t.remaining() == ("crane",)
    t.reset()
    assert t.size() == len(ANSWERS)


def test_turns_counts_applied_filters(small_lexicon):
    t = CandidateTracker(small_lexicon)
    assert t.turns == 0
    t.filter("salet", compute_pattern("salet", "crane"))
    assert t.turns == 1
    with pytest.raises(InvariantViolation):
        t.filter("salet", ALL_HIT)
    assert t.turns == 1
    t.reset()
    assert t.turns == 0
