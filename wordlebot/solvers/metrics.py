"""
Guess scoring: entropy (expected information gain) and minimax (worst case).

For a guess g, partition the CURRENT candidates by the pattern g produces
against each of them. With bucket sizes c_i and n candidates:

    entropy            H = -sum (c_i/n) * log2(c_i/n)      (bits, higher is better)
    worst case         W = max c_i                          (lower is better)
    expected remaining E = sum c_i^2 / n                    (lower is better)

Two flavours live here:
  - scalar reference functions (partition / entropy / worst_case / guess_metrics)
    that go through compute_pattern and work on plain word lists;
  - score_pool, which scores many guesses at once from the lexicon's pattern
    matrix with np.bincount. The selectors use this one.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from math import log2
from typing import Dict, Iterable, Optional, Sequence

import numpy as np

from wordlebot.engine.scoring import NUM_PATTERNS, compute_pattern


@dataclass(frozen=True)
class GuessMetrics:
    entropy: float
    expected_remaining: float
    max_partition: int
    num_partitions: int


def partition(guess: str, candidates: Iterable[str]) -> Dict[int, int]:
    """Bucket sizes keyed by pattern; only reachable patterns appear."""
    buckets: Dict[int, int] = defaultdict(int)
    _score = compute_pattern
    for ans in candidates:
        buckets[_score(guess, ans)] += 1
    return dict(buckets)


def metrics_from_counts(counts: Iterable[int]) -> GuessMetrics:
    counts = [c for c in counts if c > 0]
    n = sum(counts)
    if n == 0:
        return GuessMetrics(0.0, 0.0, 0, 0)
    H = 0.0
    for c in counts:
        p = c / n
        H -= p * log2(p)
    return GuessMetrics(
        entropy=H,
        expected_remaining=sum(c * c for c in counts) / n,
        max_partition=max(counts),
        num_partitions=len(counts),
    )


def guess_metrics(guess: str, candidates: Iterable[str]) -> GuessMetrics:
    return metrics_from_counts(partition(guess, candidates).values())


def entropy(guess: str, candidates: Iterable[str]) -> float:
    """Expected information gain in bits; 0.0 for an empty candidate set."""
    return guess_metrics(guess, candidates).entropy


def worst_case(guess: str, candidates: Iterable[str]) -> int:
    """Size of the largest bucket; 0 for an empty candidate set."""
    return guess_metrics(guess, candidates).max_partition


# ---- vectorized pool scoring ----

@dataclass
class PoolScores:
    """Per-guess metrics, aligned with `guess_idx` (rows of the pattern matrix)."""
    guess_idx: np.ndarray
    entropy: np.ndarray
    worst: np.ndarray
    expected: np.ndarray
    is_candidate: np.ndarray

    def __len__(self) -> int:
        return int(self.guess_idx.size)


CHUNK_ROWS = 2048


def _bucket_counts(sub: np.ndarray) -> np.ndarray:
    """(rows, k) pattern block -> (rows, 243) bucket counts, one bincount per block."""
    rows = sub.shape[0]
    offsets = (np.arange(rows, dtype=np.int64) * NUM_PATTERNS)[:, None]
    codes = sub.astype(np.int64) + offsets
    return np.bincount(codes.ravel(), minlength=rows * NUM_PATTERNS).reshape(rows, NUM_PATTERNS)


def score_pool(lexicon, cand_idx: np.ndarray, guess_idx: Optional[np.ndarray] = None,
               chunk_rows: int = CHUNK_ROWS) -> PoolScores:
    """
    Score every guess in `guess_idx` (default: the whole guess vocabulary)
    against the candidates `cand_idx` (answer indices).

    Work is done in row chunks so the (rows x candidates) temporaries stay
    bounded even for the full 12,972 x 2,315 first-turn case.
    """
    M = lexicon.matrix.data
    cand_idx = np.asarray(cand_idx, dtype=np.intp)
    if guess_idx is None:
        guess_idx = np.arange(M.shape[0], dtype=np.intp)
    else:
        guess_idx = np.asarray(guess_idx, dtype=np.intp)

    n_guess = guess_idx.size
    k = cand_idx.size
    ent = np.zeros(n_guess, dtype=np.float64)
    worst = np.zeros(n_guess, dtype=np.int64)
    expected = np.zeros(n_guess, dtype=np.float64)

    if k > 0:
        for s in range(0, n_guess, chunk_rows):
            rows = guess_idx[s:s + chunk_rows]
            counts = _bucket_counts(M[rows][:, cand_idx])
            p = counts / k
            logp = np.zeros_like(p)
            np.log2(p, out=logp, where=counts > 0)
            ent[s:s + rows.size] = -(p * logp).sum(axis=1)
            worst[s:s + rows.size] = counts.max(axis=1)
            expected[s:s + rows.size] = (counts * counts).sum(axis=1) / k

    in_cands = np.zeros(len(lexicon.answer_words()), dtype=bool)
    in_cands[cand_idx] = True
    g2a = lexicon.guess_to_answer[guess_idx]
    is_cand = (g2a >= 0) & in_cands[np.where(g2a >= 0, g2a, 0)]

    return PoolScores(guess_idx=guess_idx, entropy=ent, worst=worst,
                      expected=expected, is_candidate=is_cand)


@dataclass(frozen=True)
class Analysis:
    word: str
    entropy: float
    worst_case: int
    expected_remaining: float
    num_partitions: int
    total_candidates: int


def analyze(word: str, candidates: Sequence[str]) -> Analysis:
    """Diagnostics for one word against a candidate set (introspection commands)."""
    m = guess_metrics(word, candidates)
    return Analysis(word=word, entropy=m.entropy, worst_case=m.max_partition,
                    expected_remaining=m.expected_remaining,
                    num_partitions=m.num_partitions, total_candidates=len(candidates))
