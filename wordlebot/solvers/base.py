from __future__ import annotations

import random
from typing import Dict, Optional, Type

from wordlebot.engine.errors import InvariantViolation
from wordlebot.engine.validation import normalize_word
from .metrics import PoolScores, score_pool

# ---- Global solver registry ----
REGISTRY: Dict[str, Type["BaseSolver"]] = {}


def register(cls: Type["BaseSolver"]) -> Type["BaseSolver"]:
    """
    Decorator: @register on a solver class adds it to REGISTRY by its `id`.
    """
    sid = getattr(cls, "id", None)
    if not sid:
        raise ValueError(f"{cls.__name__} must define a non-empty `id`")
    if sid in REGISTRY:
        raise ValueError(f"Duplicate solver id: {sid}")
    REGISTRY[sid] = cls
    return cls


# ---- Base class that solvers inherit ----
class BaseSolver:
    """
    A solver picks the next guess from the current CandidateTracker snapshot.

    Subclasses implement `choose(tracker)`; `next_guess` wraps it with the
    shared rules: an empty candidate set is an InvariantViolation, and on the
    opening turn (no feedback applied yet) the fixed OPENING word is
    played when it is in the guess vocabulary.

    `last_policy` names the policy behind the most recent guess so the game
    loop can record it per turn.
    """
    id = "base"
    name = "Base"
    version = "0.0.0"

    # Fixed opener, chosen for the lowest average guess count (not the max-entropy word).
    OPENING: Optional[str] = "salet"

    def __init__(self, *, opening: Optional[str] = None):
        # None keeps the class default; "" disables the fixed opener
        self.lexicon = None
        self.rng = random.Random()
        if opening is None:
            opening = self.OPENING
        self.opening = normalize_word(opening) if opening else None
        self.last_policy: Optional[str] = None

    def reset(self, *, lexicon, seed: int | None = None) -> None:
        self.lexicon = lexicon
        self.last_policy = None
        if seed is not None:
            self.rng.seed(seed)

    def next_guess(self, tracker) -> str:
        if self.lexicon is None:
            self.lexicon = tracker.lexicon
        if tracker.size() == 0:
            raise InvariantViolation("candidate set is empty; feedback was inconsistent")

        if tracker.turns == 0 and self.opening and self.opening in self.lexicon:
            self.last_policy = "opening"
            return self.opening

        return self.choose(tracker)

    def choose(self, tracker) -> str:
        raise NotImplementedError("Override in subclass")

    # ---- helpers shared by the scoring solvers ----

    def _score_all(self, tracker) -> PoolScores:
        return score_pool(self.lexicon, tracker.indices())

    def _word_at(self, scores: PoolScores, pos: int) -> str:
        return self.lexicon.guess_words()[int(scores.guess_idx[pos])]

    def _random_candidate(self, tracker) -> str:
        idx = tracker.indices()
        pick = int(idx[self.rng.randrange(idx.size)])
        return self.lexicon.answer_words()[pick]
