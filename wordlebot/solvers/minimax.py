"""
Minimax Solver (minimize the worst case).

Idea:
  For guess g, the worst outcome is the largest bucket of CURRENT candidates
  sharing one feedback pattern. Pick the g whose largest bucket is smallest.
Tie-break: a guess that is itself a candidate (it may win on the spot), then
vocabulary order.
"""

from __future__ import annotations

from .base import BaseSolver, register
from . import selection


@register
class MinimaxSolver(BaseSolver):
    id = "minimax"
    name = "Minimax (Smallest Worst Case)"
    version = "1.0.0"

    def choose(self, tracker) -> str:
        self.last_policy = "minimax"
        scores = self._score_all(tracker)
        return self._word_at(scores, selection.select_minimax(scores))
