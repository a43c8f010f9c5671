"""
Adaptive solver: switches tactics as the candidate pool shrinks.

The tier is a pure function of the candidate count at the start of the turn,
re-evaluated every turn. Thresholds cascade with `>`:

    candidates > 100  -> PURE_ENTROPY     max entropy
    candidates > 21   -> ENTROPY_MINIMAX  max entropy, minimax-style tie-breaks
    candidates > 9    -> HYBRID           max int(100*H) - 10*worst
    candidates > 2    -> MINIMAX_FIRST    min worst case, candidate preference
    otherwise         -> RANDOM           uniform among the 1-2 candidates

Tiers 1-4 search the whole guess vocabulary (a non-answer word can split
the pool best); RANDOM only ever plays a candidate. The only randomness is
inside RANDOM and comes from the solver's seeded rng.
"""

from __future__ import annotations

import enum
import logging
from typing import Optional, Tuple

from .base import BaseSolver, register
from . import selection

log = logging.getLogger(__name__)


class Tier(enum.Enum):
    PURE_ENTROPY = 1
    ENTROPY_MINIMAX = 2
    HYBRID = 3
    MINIMAX_FIRST = 4
    RANDOM = 5

    @property
    def label(self) -> str:
        return self.name.lower()


# (pure_entropy, entropy_minimax, hybrid, minimax_first)
DEFAULT_THRESHOLDS: Tuple[int, int, int, int] = (100, 21, 9, 2)


def tier_for(num_candidates: int, thresholds: Tuple[int, int, int, int] = DEFAULT_THRESHOLDS) -> Tier:
    pure, ent_mm, hybrid, mm_first = thresholds
    if num_candidates > pure:
        return Tier.PURE_ENTROPY
    if num_candidates > ent_mm:
        return Tier.ENTROPY_MINIMAX
    if num_candidates > hybrid:
        return Tier.HYBRID
    if num_candidates > mm_first:
        return Tier.MINIMAX_FIRST
    return Tier.RANDOM


@register
class AdaptiveSolver(BaseSolver):
    id = "adaptive"
    name = "Adaptive (entropy -> hybrid -> minimax)"
    version = "1.0.0"

    THRESHOLDS = DEFAULT_THRESHOLDS
    ENTROPY_EPSILON = selection.ENTROPY_EPSILON
    # MINIMAX_FIRST: a candidate guess wins if within this many bits of the best entropy
    CANDIDATE_EPSILON = 0.1

    def __init__(self, *, opening: Optional[str] = None,
                 thresholds: Optional[Tuple[int, int, int, int]] = None,
                 candidate_epsilon: Optional[float] = None):
        super().__init__(opening=opening)
        self.thresholds = tuple(thresholds) if thresholds is not None else self.THRESHOLDS
        if len(self.thresholds) != 4 or list(self.thresholds) != sorted(self.thresholds, reverse=True):
            raise ValueError(f"thresholds must be 4 descending counts, got {self.thresholds}")
        self.candidate_epsilon = (self.CANDIDATE_EPSILON if candidate_epsilon is None
                                  else float(candidate_epsilon))

    def tier(self, num_candidates: int) -> Tier:
        return tier_for(num_candidates, self.thresholds)

    def choose(self, tracker) -> str:
        tier = self.tier(tracker.size())
        self.last_policy = tier.label
        log.debug("%d candidates -> %s", tracker.size(), tier.name)

        if tier is Tier.RANDOM:
            return self._random_candidate(tracker)

        scores = self._score_all(tracker)
        if tier is Tier.PURE_ENTROPY:
            pos = selection.select_max_entropy(scores, self.ENTROPY_EPSILON)
        elif tier is Tier.ENTROPY_MINIMAX:
            pos = selection.select_entropy_minimax(scores, self.ENTROPY_EPSILON)
        elif tier is Tier.HYBRID:
            pos = selection.select_hybrid(scores)
        else:
            pos = selection.select_minimax_first(scores, self.candidate_epsilon, self.ENTROPY_EPSILON)
        return self._word_at(scores, pos)
