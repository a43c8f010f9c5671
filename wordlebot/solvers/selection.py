"""
Selection policies over a scored guess pool.

Every function takes a PoolScores (see metrics.score_pool) and returns the
POSITION of the chosen guess inside that pool. Pools are built in guess
vocabulary order, so "lowest position" is the final, stable tie-break.

Entropy comparisons use a small tolerance: two guesses whose bucket sizes
are the same multiset can differ in the last float bits depending on
summation order, and that noise must not decide the winner.
"""

from __future__ import annotations

import numpy as np

from wordlebot.engine.errors import InvariantViolation
from .metrics import PoolScores

ENTROPY_EPSILON = 1e-9


def _require(scores: PoolScores) -> None:
    if len(scores) == 0:
        raise InvariantViolation("cannot select a guess from an empty pool")


def _entropy_ties(scores: PoolScores, among: np.ndarray, eps: float) -> np.ndarray:
    """Positions in `among` whose entropy is within eps of the best there."""
    best = scores.entropy[among].max()
    return among[scores.entropy[among] >= best - eps]


def select_max_entropy(scores: PoolScores, eps: float = ENTROPY_EPSILON) -> int:
    """Highest entropy; ties go to vocabulary order."""
    _require(scores)
    return int(_entropy_ties(scores, np.arange(len(scores)), eps)[0])


def select_entropy_minimax(scores: PoolScores, eps: float = ENTROPY_EPSILON) -> int:
    """
    Highest entropy, with ties broken by:
      1) lower expected remaining candidates
      2) lower worst case (minimax)
      3) guess is itself a candidate
      4) vocabulary order
    """
    _require(scores)
    tied = _entropy_ties(scores, np.arange(len(scores)), eps)
    # np.lexsort: last key is the primary one
    order = np.lexsort((
        tied,
        ~scores.is_candidate[tied],
        scores.worst[tied],
        scores.expected[tied],
    ))
    return int(tied[order[0]])


def hybrid_score(scores: PoolScores) -> np.ndarray:
    """int(100 * entropy) - 10 * worst case; entropy truncated to centibits."""
    centibits = np.floor(scores.entropy * 100.0 + ENTROPY_EPSILON).astype(np.int64)
    return centibits - 10 * scores.worst


def select_hybrid(scores: PoolScores) -> int:
    """Maximize hybrid_score; ties by lower expected remaining, then vocabulary order."""
    _require(scores)
    hs = hybrid_score(scores)
    tied = np.flatnonzero(hs == hs.max())
    order = np.lexsort((tied, scores.expected[tied]))
    return int(tied[order[0]])


def select_minimax(scores: PoolScores) -> int:
    """Lowest worst case; ties prefer candidate guesses, then vocabulary order."""
    _require(scores)
    tied = np.flatnonzero(scores.worst == scores.worst.min())
    cands = tied[scores.is_candidate[tied]]
    return int(cands[0] if cands.size else tied[0])


def select_minimax_first(scores: PoolScores, candidate_eps: float = 0.1,
                         eps: float = ENTROPY_EPSILON) -> int:
    """
    Lowest worst case first. Among those:
      - if some candidate guess has entropy within `candidate_eps` bits of the
        best entropy in the tied set, take the highest-entropy such candidate;
      - otherwise take the highest-entropy guess overall.
    """
    _require(scores)
    tied = np.flatnonzero(scores.worst == scores.worst.min())
    best = scores.entropy[tied].max()

    near = tied[scores.is_candidate[tied] & (best - scores.entropy[tied] < candidate_eps)]
    if near.size:
        return int(_entropy_ties(scores, near, eps)[0])
    return int(_entropy_ties(scores, tied, eps)[0])
