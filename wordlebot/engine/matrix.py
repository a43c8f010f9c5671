"""
Precomputed pattern matrix.

Matrix shape:
    (n_guess_words, n_answer_words), dtype uint8

Cell [g, a] holds compute_pattern(guesses[g], answers[a]) in the same base-3
encoding as engine.scoring (0..242). With the matrix in memory, partitioning
a candidate set by a guess is a column gather plus np.bincount, which is what
lets every turn score the full ~13k guess vocabulary.

The build is vectorized over blocks of guesses (all answers at once), so the
full 12,972 x 2,315 matrix takes seconds rather than the minutes a Python
double loop over compute_pattern would. It can be cached as .npy keyed by a
fingerprint of both word lists.
"""

from __future__ import annotations

import hashlib
import logging
import time
from pathlib import Path
from typing import Optional, Sequence

import numpy as np
from tqdm import tqdm

from .scoring import WORD_LENGTH

log = logging.getLogger(__name__)

_WEIGHTS = np.array([3 ** i for i in range(WORD_LENGTH)], dtype=np.uint16)


def words_to_array(words: Sequence[str]) -> np.ndarray:
    """(n, 5) uint8 array of ASCII codes; words must already be normalized."""
    if not words:
        return np.zeros((0, WORD_LENGTH), dtype=np.uint8)
    raw = "".join(words).encode("ascii")
    return np.frombuffer(raw, dtype=np.uint8).reshape(-1, WORD_LENGTH)


def pattern_block(G: np.ndarray, A: np.ndarray) -> np.ndarray:
    """
    Patterns for every (guess, answer) pair of two letter arrays.

    Same two-pass rule as compute_pattern, vectorized:
      - hits: positionwise equality
      - a non-hit guess letter c at position i is PRESENT iff the answer has
        more non-hit copies of c than the PRESENT marks already handed to c
        at guess positions j < i (left-to-right consumption)
    """
    hits = G[:, None, :] == A[None, :, :]          # (n, m, 5)
    free = ~hits                                     # answer letters not consumed by a hit
    present = np.zeros_like(hits)

    for i in range(WORD_LENGTH):
        c = G[:, i]
        avail = ((A[None, :, :] == c[:, None, None]) & free).sum(axis=2)
        used = np.zeros(avail.shape, dtype=np.int16)
        for j in range(i):
            same_letter = (G[:, j] == c)[:, None]
            used += present[:, :, j] & same_letter
        present[:, :, i] = free[:, :, i] & (used < avail)

    marks = hits.astype(np.uint16) * 2 + present.astype(np.uint16)
    return (marks * _WEIGHTS).sum(axis=2).astype(np.uint8)


def fingerprint(guesses: Sequence[str], answers: Sequence[str]) -> str:
    h = hashlib.sha256()
    h.update("\n".join(guesses).encode("ascii"))
    h.update(b"|")
    h.update("\n".join(answers).encode("ascii"))
    return h.hexdigest()


class PatternMatrix:
    """Read-only guess x answer pattern table."""

    BLOCK_ROWS = 256

    def __init__(self, data: np.ndarray):
        data = np.asarray(data, dtype=np.uint8)
        if data.ndim != 2:
            raise ValueError(f"pattern matrix must be 2-D, got shape {data.shape}")
        data.setflags(write=False)
        self.data = data

    @property
    def shape(self):
        return self.data.shape

    @classmethod
    def build(cls, guesses: Sequence[str], answers: Sequence[str], *,
              progress: bool = False) -> "PatternMatrix":
        G = words_to_array(guesses)
        A = words_to_array(answers)
        out = np.empty((len(G), len(A)), dtype=np.uint8)

        t0 = time.perf_counter()
        starts = range(0, len(G), cls.BLOCK_ROWS)
        if progress:
            starts = tqdm(starts, ncols=80, desc="Pattern matrix", unit="block")
        for s in starts:
            e = min(s + cls.BLOCK_ROWS, len(G))
            out[s:e] = pattern_block(G[s:e], A)

        log.info("Built %dx%d pattern matrix in %.2fs",
                 out.shape[0], out.shape[1], time.perf_counter() - t0)
        return cls(out)

    @classmethod
    def load_or_build(cls, guesses: Sequence[str], answers: Sequence[str],
                      cache_dir: Optional[Path | str] = None, *,
                      progress: bool = False) -> "PatternMatrix":
        """
        Load the cached matrix for exactly these word lists, or build it.

        The cache file name embeds a fingerprint of both lists, so an edited
        list can never be served a stale matrix.
        """
        if cache_dir is None:
            return cls.build(guesses, answers, progress=progress)

        path = Path(cache_dir) / f"patterns_{fingerprint(guesses, answers)[:16]}.npy"
        if path.exists():
            data = np.load(path)
            if data.shape == (len(guesses), len(answers)):
                log.info("Loaded pattern matrix from %s", path)
                return cls(data)
            log.warning("Pattern cache %s has shape %s, expected %s; rebuilding",
                        path, data.shape, (len(guesses), len(answers)))

        matrix = cls.build(guesses, answers, progress=progress)
        path.parent.mkdir(parents=True, exist_ok=True)
        np.save(path, matrix.data)
        log.info("Saved pattern matrix to %s", path)
        return matrix
