"""
Baseline: play a uniformly random word from the current candidate set.

Every guess is still a possible answer, so it never wastes a turn on a
word that cannot win, but it makes no attempt to split the set. Runs are
reproducible per seed through the solver rng; there is no fixed opener.
"""

from __future__ import annotations

from .base import BaseSolver, register


@register
class RandomConsistentSolver(BaseSolver):
    id = "random_consistent"
    name = "Random Consistent"
    version = "2.0.0"

    OPENING = None

    def choose(self, tracker) -> str:
        self.last_policy = "random"
        return self._random_candidate(tracker)
