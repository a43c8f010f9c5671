from pathlib import Path

import pytest

from wordlebot.datasets import (
    Lexicon,
    load_lexicon,
    pretty_summary,
    read_words,
    validate_wordlists,
    write_words,
)
from wordlebot.engine import LoadError


def _write(p: Path, lines):
    p.write_text("\n".join(lines) + "\n", encoding="utf-8")


# --- validate_wordlists ---

def test_validate_wordlists_happy_path(tmp_path: Path):
    ans = tmp_path / "answers.txt"
    allw = tmp_path / "allowed.txt"
    _write(ans, ["crane", "raise", "stare"])
    _write(allw, ["crane", "raise", "stare", "trace", "cared"])

    rep = validate_wordlists(str(ans), str(allw))
    assert rep["passed"] is True
    assert rep["answers_subset_allowed"] is True
    assert rep["answers"]["count"] == 3 and rep["allowed"]["count"] == 5
    s = pretty_summary(rep)
    assert "subset=True" in s and s.endswith("OK")


def test_validate_wordlists_flags_errors(tmp_path: Path):
    ans = tmp_path / "answers.txt"
    allw = tmp_path / "allowed.txt"
    # 'raiser' is too long, '???' invalid chars, 'Crane' not lowercase
    ans.write_text("crane\nraiser\n???\nCrane\n", encoding="utf-8")
    allw.write_text("crane\nplane\n", encoding="utf-8")

    rep = validate_wordlists(str(ans), str(allw))
    assert rep["passed"] is False
    assert rep["answers"]["invalid_lines"] == 3
    assert any("invalid" in msg for msg in rep["issues"])
    assert pretty_summary(rep).endswith("FAIL")


def test_validate_wordlists_subset_violation(tmp_path: Path):
    ans = tmp_path / "answers.txt"
    allw = tmp_path / "allowed.txt"
    _write(ans, ["crane", "raise", "stare"])
    _write(allw, ["crane", "stare"])  # missing 'raise'

    rep = validate_wordlists(str(ans), str(allw))
    assert rep["passed"] is False
    assert rep["answers_subset_allowed"] is False
    assert any("subset" in msg for msg in rep["issues"])


def test_validate_wordlists_missing_file(tmp_path: Path):
    allw = tmp_path / "allowed.txt"
    _write(allw, ["crane"])
    rep = validate_wordlists(str(tmp_path / "nope.txt"), str(allw))
    assert rep["passed"] is False
    assert rep["answers"]["exists"] is False


def test_validate_wordlists_duplicates(tmp_path: Path):
    ans = tmp_path / "answers.txt"
    allw = tmp_path / "allowed.txt"
    _write(ans, ["crane", "crane"])
    _write(allw, ["crane"])
    rep = validate_wordlists(str(ans), str(allw))
    assert any("duplicate" in msg for msg in rep["issues"])


# --- read_words / load_lexicon ---

def test_read_words_skips_blanks_and_comments(tmp_path: Path):
    p = tmp_path / "words.txt"
    p.write_text("# header\ncrane\n\n  slate  \n", encoding="utf-8")
    assert read_words(p) == ["crane", "slate"]


def test_load_lexicon(tmp_path: Path):
    ans = tmp_path / "answers.txt"
    allw = tmp_path / "allowed.txt"
    _write(ans, ["CRANE", "slate"])
    _write(allw, ["salet", "crane", "slate"])

    lex = load_lexicon(ans, allw)
    assert lex.answer_words() == ("crane", "slate")
    assert lex.guess_words() == ("salet", "crane", "slate")
    assert "salet" in lex and lex.is_answer("crane") and not lex.is_answer("salet")
    assert lex.guess_to_answer.tolist() == [-1, 0, 1]


def test_load_lexicon_missing_file_is_load_error(tmp_path: Path):
    allw = tmp_path / "allowed.txt"
    _write(allw, ["crane"])
    with pytest.raises(LoadError):
        load_lexicon(tmp_path / "missing.txt", allw)


# --- Lexicon construction ---

def test_lexicon_adds_answers_missing_from_guesses():
    lex = Lexicon(["salet"], ["crane", "slate"])
    assert lex.guess_words() == ("salet", "crane", "slate")
    assert lex.is_guess("crane")


@pytest.mark.parametrize("guesses,answers", [
    (["crane"], []),
    ([], []),
    (["crane"], ["crane", "crane"]),
    (["crane", "crane"], ["crane"]),
    (["crane"], ["cranes"]),
    (["cr4ne"], ["crane"]),
])
def test_lexicon_rejects_bad_lists(guesses, answers):
    with pytest.raises(LoadError):
        Lexicon(guesses, answers)


def test_matrix_cache_roundtrip(tmp_path: Path):
    lex = Lexicon(["salet", "crane"], ["crane", "slate"], cache_dir=tmp_path)
    m1 = lex.matrix.data
    assert list(tmp_path.glob("patterns_*.npy"))

    again = Lexicon(["salet", "crane"], ["crane", "slate"], cache_dir=tmp_path)
    assert (again.matrix.data == m1).all()


def test_write_words_then_validate(tmp_path: Path):
    ans = write_words(["crane", "slate"], tmp_path / "data" / "answers.txt")
    allw = write_words(["salet", "crane", "slate"], tmp_path / "data" / "allowed.txt")
    assert validate_wordlists(ans, allw)["passed"] is True
