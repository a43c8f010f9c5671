"""
Lexicon: the immutable pair of vocabularies every other component reads.

  - guess vocabulary  : every word accepted as a guess (~12,972)
  - answer vocabulary : every word that can be the secret (~2,315)

Built once per process and passed around by reference; nothing mutates it
after construction. Besides the two word tuples it carries index maps and
the (lazily built) PatternMatrix, so scorers can work on integer indices.

Answers are always legal guesses: an answer missing from the guess list is
appended to the guess vocabulary (with a warning) so every candidate has a
matrix row.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

import numpy as np

from wordlebot.engine.errors import InvalidWordError, LoadError
from wordlebot.engine.matrix import PatternMatrix
from wordlebot.engine.validation import normalize_word
from .io import read_words

log = logging.getLogger(__name__)


def _normalize_list(words: Iterable[str], label: str) -> Tuple[str, ...]:
    out = []
    seen = set()
    for lineno, raw in enumerate(words, start=1):
        try:
            w = normalize_word(raw)
        except InvalidWordError as e:
            raise LoadError(f"{label} list, entry {lineno}: {e}") from e
        if w in seen:
            raise LoadError(f"{label} list, entry {lineno}: duplicate word {w!r}")
        seen.add(w)
        out.append(w)
    if not out:
        raise LoadError(f"{label} list is empty")
    return tuple(out)


class Lexicon:
    def __init__(self, guess_words: Iterable[str], answer_words: Iterable[str], *,
                 cache_dir: Optional[Path | str] = None, progress: bool = False):
        answers = _normalize_list(answer_words, "answer")
        guesses = list(_normalize_list(guess_words, "guess"))

        guess_set = set(guesses)
        missing = [a for a in answers if a not in guess_set]
        if missing:
            log.warning("%d answer word(s) missing from the guess list, adding them (e.g. %s)",
                        len(missing), missing[:5])
            guesses.extend(missing)

        self._guesses: Tuple[str, ...] = tuple(guesses)
        self._answers: Tuple[str, ...] = answers
        self._guess_idx: Dict[str, int] = {w: i for i, w in enumerate(self._guesses)}
        self._answer_idx: Dict[str, int] = {w: i for i, w in enumerate(self._answers)}

        # For each guess row: its answer index, or -1 if it can never be the secret
        g2a = np.full(len(self._guesses), -1, dtype=np.int32)
        for w, ai in self._answer_idx.items():
            g2a[self._guess_idx[w]] = ai
        g2a.setflags(write=False)
        self.guess_to_answer = g2a

        self._cache_dir = cache_dir
        self._progress = progress
        self._matrix: Optional[PatternMatrix] = None

        log.info("Lexicon ready: %d guess words, %d answer words",
                 len(self._guesses), len(self._answers))

    # ---- vocabularies ----

    def guess_words(self) -> Tuple[str, ...]:
        return self._guesses

    def answer_words(self) -> Tuple[str, ...]:
        return self._answers

    def guess_index(self, word: str) -> Optional[int]:
        return self._guess_idx.get(word)

    def answer_index(self, word: str) -> Optional[int]:
        return self._answer_idx.get(word)

    def is_guess(self, word: str) -> bool:
        return word in self._guess_idx

    def is_answer(self, word: str) -> bool:
        return word in self._answer_idx

    def __contains__(self, word) -> bool:
        return word in self._guess_idx

    def __repr__(self) -> str:
        return f"Lexicon(guesses={len(self._guesses)}, answers={len(self._answers)})"

    # ---- pattern matrix ----

    @property
    def matrix(self) -> PatternMatrix:
        if self._matrix is None:
            self._matrix = PatternMatrix.load_or_build(
                self._guesses, self._answers, self._cache_dir, progress=self._progress)
        return self._matrix


def load_lexicon(answers_path: Path | str, allowed_path: Path | str, *,
                 cache_dir: Optional[Path | str] = None, progress: bool = False) -> Lexicon:
    """
    Read both word lists from disk and build a Lexicon.

    Any problem (missing file, empty list, bad or duplicate word) surfaces as
    LoadError; there is nothing to retry.
    """
    try:
        answers = read_words(answers_path)
        allowed = read_words(allowed_path)
    except FileNotFoundError as e:
        raise LoadError(f"word list not found: {e}") from e
    except UnicodeDecodeError as e:
        raise LoadError(f"word list is not valid UTF-8: {e}") from e

    log.info("Read %d answers from %s and %d allowed words from %s",
             len(answers), answers_path, len(allowed), allowed_path)
    return Lexicon(allowed, answers, cache_dir=cache_dir, progress=progress)


DEFAULT_ANSWERS = "wordlebot/datasets/data/answers.txt"
DEFAULT_ALLOWED = "wordlebot/datasets/data/allowed.txt"


def default_paths() -> Tuple[str, str]:
    """(answers, allowed) paths; WORDLEBOT_ANSWERS / WORDLEBOT_ALLOWED override the defaults."""
    return (os.environ.get("WORDLEBOT_ANSWERS", DEFAULT_ANSWERS),
            os.environ.get("WORDLEBOT_ALLOWED", DEFAULT_ALLOWED))
