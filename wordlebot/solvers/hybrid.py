"""
Hybrid Solver: entropy while the pool is large, minimax near the end.

A two-phase ancestor of the adaptive solver, kept as a comparison baseline.
"""

from __future__ import annotations

from typing import Optional

from .base import BaseSolver, register
from . import selection


@register
class HybridSolver(BaseSolver):
    id = "hybrid"
    name = "Hybrid (Entropy, then Minimax)"
    version = "1.0.0"

    # Switch to minimax when candidates <= this
    MINIMAX_THRESHOLD = 5

    def __init__(self, *, opening: Optional[str] = None, minimax_threshold: Optional[int] = None):
        super().__init__(opening=opening)
        self.minimax_threshold = (self.MINIMAX_THRESHOLD if minimax_threshold is None
                                  else int(minimax_threshold))

    def choose(self, tracker) -> str:
        scores = self._score_all(tracker)
        if tracker.size() <= self.minimax_threshold:
            self.last_policy = "minimax"
            pos = selection.select_minimax(scores)
        else:
            self.last_policy = "pure_entropy"
            pos = selection.select_max_entropy(scores)
        return self._word_at(scores, pos)
