"""
Candidate filtering given game feedback.

Given:
  - a pool of answer words
  - a history of (guess, pattern) pairs

Keep only the words that would have produced exactly those patterns. This is
the core step that turns feedback into a shrinking candidate set.

CandidateTracker owns that set for one game. It starts as the full answer
vocabulary, only ever shrinks, and refuses an update that would empty it
(InvariantViolation) instead of leaving a half-updated state behind.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

import numpy as np

from .errors import InvariantViolation
from .scoring import compute_pattern, pattern_to_str

# History is a sequence of (guess, pattern) tuples produced by the engine.
History = Iterable[Tuple[str, int]]


def filter_candidates(words: Iterable[str], history: History) -> List[str]:
    """
    Keep only words that reproduce every recorded (guess, pattern) pair.

    Order is preserved as in `words`. Words are assumed normalized.
    """
    history = list(history)
    out: List[str] = []
    for w in words:
        if all(compute_pattern(g, w) == patt for g, patt in history):
            out.append(w)
    return out


class CandidateTracker:
    """
    The evolving candidate set of a single game.

    Candidates are held as a sorted int array of answer indices into the
    lexicon, which is what the vectorized scorers consume; `remaining()`
    gives the words back in answer-vocabulary order.
    """

    def __init__(self, lexicon):
        self.lexicon = lexicon
        self._all = np.arange(len(lexicon.answer_words()), dtype=np.int32)
        self._idx = self._all
        self.turns = 0   # filters applied since the last reset

    def reset(self) -> None:
        """Back to the full answer vocabulary (new game only)."""
        self._idx = self._all
        self.turns = 0

    def size(self) -> int:
        return int(self._idx.size)

    def __len__(self) -> int:
        return self.size()

    def indices(self) -> np.ndarray:
        return self._idx

    def remaining(self) -> Tuple[str, ...]:
        answers = self.lexicon.answer_words()
        return tuple(answers[i] for i in self._idx)

    def __contains__(self, word) -> bool:
        ai = self.lexicon.answer_index(word)
        return ai is not None and bool(np.any(self._idx == ai))

    def consistent_with(self, guess: str, pattern: int) -> np.ndarray:
        """Answer indices of the current candidates consistent with (guess, pattern)."""
        gi = self.lexicon.guess_index(guess)
        if gi is not None:
            row = self.lexicon.matrix.data[gi, self._idx]
            return self._idx[row == pattern]

        # Guess outside the vocabulary: fall back to the scalar engine.
        answers = self.lexicon.answer_words()
        keep = [i for i in self._idx if compute_pattern(guess, answers[i]) == pattern]
        return np.asarray(keep, dtype=np.int32)

    def filter(self, guess: str, pattern: int) -> int:
        """
        Narrow the set to words consistent with (guess, pattern); returns the new size.

        Raises InvariantViolation, leaving the set untouched, if nothing would
        survive: the feedback contradicts every remaining candidate.
        """
        kept = self.consistent_with(guess, pattern)
        if kept.size == 0:
            raise InvariantViolation(
                f"no candidate is consistent with {guess!r} -> {pattern_to_str(pattern)} "
                f"({self.size()} candidates before)")
        self._idx = kept
        self.turns += 1
        return self.size()
