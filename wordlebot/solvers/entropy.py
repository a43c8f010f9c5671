"""
Entropy Solver (expected information gain).

  - For each guess g in the guess vocabulary, partition CURRENT candidates by
    feedback pattern and compute the Shannon entropy of that partition.
  - Pick the g with max entropy; ties go to vocabulary order.

No pool pre-filtering: the pattern matrix makes a full-vocabulary scan cheap.
"""

from __future__ import annotations

from .base import BaseSolver, register
from . import selection


@register
class EntropySolver(BaseSolver):
    id = "entropy"
    name = "Entropy (Expected Information Gain)"
    version = "2.0.0"

    def choose(self, tracker) -> str:
        self.last_policy = "pure_entropy"
        scores = self._score_all(tracker)
        return self._word_at(scores, selection.select_max_entropy(scores))
