"""
Game loop and experiment harness.

- Game:      one game's mutable state (tracker + turn history) behind the narrow
             driver interface: next_guess / apply_feedback / analyze / outcome.
- run_case:  play one game against a known secret with a given solver.
- run_batch: play many secrets, optionally across worker processes.
- summarize: aggregate outcomes into the numbers a benchmark reports.
- Enforces Wordle's 6-turn limit at the harness layer.

Everything here is UI-agnostic: the CLI, the interactive prompt and tests
all drive the same Game object.
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from tqdm import tqdm

from wordlebot.engine import (
    CandidateTracker,
    GameOverError,
    InvalidWordError,
    compute_pattern,
    is_solved,
    normalize_word,
    pattern_from_str,
    pattern_to_str,
)
from wordlebot.engine.scoring import NUM_PATTERNS
from wordlebot.solvers import BaseSolver, create_solver
from wordlebot.solvers.metrics import Analysis, analyze

log = logging.getLogger(__name__)

# Single source of truth for Wordle turn budget.
WORDLE_MAX_TURNS = 6


def _assert_wordle_turns(max_turns: int) -> None:
    """Guardrail: prevent accidental runs with a non-Wordle turn budget."""
    if max_turns != WORDLE_MAX_TURNS:
        raise ValueError(f"max_turns must be {WORDLE_MAX_TURNS} for Wordle-like rules; got {max_turns}")


@dataclass(frozen=True)
class TurnRecord:
    guess: str
    pattern: int
    candidates_before: int
    candidates_after: int
    policy: Optional[str] = None   # which solver policy produced the guess (None if supplied)

    @property
    def pattern_str(self) -> str:
        return pattern_to_str(self.pattern)


@dataclass(frozen=True)
class GameOutcome:
    solved: bool
    turns: int
    secret: Optional[str]
    history: Tuple[TurnRecord, ...]
    time_ms: float = 0.0
    error: Optional[str] = None    # batch entries skipped before playing

    @property
    def failed(self) -> bool:
        return not self.solved


class SecretOracle:
    """Simulated opponent: answers every guess with the pattern against a fixed secret."""

    def __init__(self, secret: str):
        self.secret = normalize_word(secret)

    def __call__(self, guess: str) -> int:
        return compute_pattern(guess, self.secret)


class Game:
    """
    One game in progress.

    The candidate tracker and the turn history are the only cross-turn state;
    the solver scores a fresh snapshot every turn.
    """

    def __init__(self, lexicon, solver: Optional[BaseSolver] = None, *,
                 max_turns: int = WORDLE_MAX_TURNS, seed: int | None = None):
        if max_turns < 1:
            raise ValueError(f"max_turns must be positive, got {max_turns}")
        self.lexicon = lexicon
        self.solver = solver if solver is not None else create_solver()
        self.solver.reset(lexicon=lexicon, seed=seed)
        self.max_turns = max_turns
        self.tracker = CandidateTracker(lexicon)
        self.secret: Optional[str] = None
        self._history: List[TurnRecord] = []
        self._outcome: Optional[GameOutcome] = None
        self._suggested: Optional[Tuple[str, Optional[str]]] = None
        self._pending_ms = 0.0          # solver time for the guess awaiting feedback
        self._turn_ms: List[float] = []  # solver time per recorded turn

    # ---- read views ----

    @property
    def history(self) -> Tuple[TurnRecord, ...]:
        return tuple(self._history)

    @property
    def outcome(self) -> Optional[GameOutcome]:
        return self._outcome

    @property
    def is_over(self) -> bool:
        return self._outcome is not None

    @property
    def turn(self) -> int:
        """1-based number of the turn about to be played."""
        return len(self._history) + 1

    def candidates(self) -> Tuple[str, ...]:
        return self.tracker.remaining()

    @property
    def solver_ms(self) -> float:
        """Solver time spent on the turns currently in the history."""
        return sum(self._turn_ms)

    # ---- driver interface ----

    def next_guess(self) -> str:
        if self.is_over:
            raise GameOverError("game is over; start a new one")
        t0 = time.perf_counter_ns()
        guess = self.solver.next_guess(self.tracker)
        self._pending_ms += (time.perf_counter_ns() - t0) / 1_000_000.0
        self._suggested = (guess, self.solver.last_policy)
        return guess

    def apply_feedback(self, guess: str, pattern) -> TurnRecord:
        """
        Record the feedback `pattern` (int or "GY-G-" text) for `guess`.

        Raises InvalidWordError for a malformed guess, ValueError for a
        malformed pattern and InvariantViolation when the feedback leaves no
        candidate; in every error case the game state is unchanged.
        """
        if self.is_over:
            raise GameOverError("game is over; feedback is no longer accepted")
        guess = normalize_word(guess)
        if isinstance(pattern, str):
            pattern = pattern_from_str(pattern)
        if not 0 <= int(pattern) < NUM_PATTERNS:
            raise ValueError(f"pattern must be in [0, {NUM_PATTERNS - 1}], got {pattern}")
        pattern = int(pattern)

        before = self.tracker.size()
        after = self.tracker.filter(guess, pattern)

        policy = None
        if self._suggested is not None and self._suggested[0] == guess:
            policy = self._suggested[1]
        self._suggested = None

        rec = TurnRecord(guess, pattern, before, after, policy)
        self._history.append(rec)
        self._turn_ms.append(self._pending_ms)
        self._pending_ms = 0.0
        log.debug("turn %d: %s %s (%d -> %d, %s)", len(self._history), guess,
                  rec.pattern_str, before, after, policy)

        if is_solved(pattern):
            self._finish(solved=True, secret=guess)
        elif len(self._history) >= self.max_turns:
            self._finish(solved=False, secret=self.secret)
        return rec

    def analyze(self, word: str) -> Analysis:
        """Entropy / worst-case diagnostics for `word` against the current candidates."""
        return analyze(normalize_word(word), self.tracker.remaining())

    def undo(self) -> Optional[TurnRecord]:
        """Drop the last turn and rebuild the candidate set from the remaining history."""
        if not self._history:
            return None
        last = self._history.pop()
        self._turn_ms.pop()
        self._pending_ms = 0.0
        self.tracker.reset()
        for rec in self._history:
            self.tracker.filter(rec.guess, rec.pattern)
        self._outcome = None
        self._suggested = None
        return last

    def play(self, oracle: Callable[[str], int]) -> GameOutcome:
        """Drive turns until solved or out of turns; `oracle` maps a guess to its pattern."""
        self.secret = getattr(oracle, "secret", self.secret)
        while not self.is_over:
            guess = self.next_guess()
            self.apply_feedback(guess, oracle(guess))
        return self._outcome

    def _finish(self, *, solved: bool, secret: Optional[str]) -> None:
        self._outcome = GameOutcome(
            solved=solved,
            turns=len(self._history),
            secret=secret,
            history=tuple(self._history),
            time_ms=self.solver_ms,
        )


# ---- simulation harness ----

def run_case(
        solver: BaseSolver,
        secret: str,
        lexicon,
        *,
        max_turns: int = WORDLE_MAX_TURNS,
        seed: int | None = None,
) -> GameOutcome:
    """
    Play one game against `secret` until solved or the turn budget runs out.

    The secret must be in the answer vocabulary (otherwise the candidate set
    could never contain it); InvalidWordError otherwise.
    """
    _assert_wordle_turns(max_turns)
    oracle = SecretOracle(secret)
    if not lexicon.is_answer(oracle.secret):
        raise InvalidWordError(secret, "not in the answer list")
    game = Game(lexicon, solver, max_turns=max_turns, seed=seed)
    return game.play(oracle)


def _play_or_record(solver: BaseSolver, secret: str, lexicon, seed: int | None) -> GameOutcome:
    try:
        return run_case(solver, secret, lexicon, seed=seed)
    except InvalidWordError as e:
        log.warning("skipping secret %r: %s", secret, e.reason)
        return GameOutcome(solved=False, turns=0, secret=secret, history=(), error=str(e))


# Per-process state for run_batch workers (set once by the pool initializer).
_WORKER: Dict[str, object] = {}


def _init_worker(lexicon, solver_id: str, solver_kwargs: Dict) -> None:
    _WORKER["lexicon"] = lexicon
    _WORKER["solver"] = create_solver(solver_id, **solver_kwargs)


def _worker_play(secret: str, seed: int | None) -> GameOutcome:
    return _play_or_record(_WORKER["solver"], secret, _WORKER["lexicon"], seed)


def run_batch(
        solver_id: str,
        secrets: Sequence[str],
        lexicon,
        *,
        max_turns: int = WORDLE_MAX_TURNS,
        seed: int | None = None,
        workers: int = 1,
        progress: bool = False,
        solver_kwargs: Optional[Dict] = None,
) -> List[GameOutcome]:
    """
    Run many games back-to-back; results come back in `secrets` order.

    Each case's seed is derived from the base seed (seed + index, 1-based) so
    runs are reproducible but not identical across cases, and independent of
    how games are spread over workers. Secrets that are not valid answers are
    recorded as failed entries with `error` set.
    """
    _assert_wordle_turns(max_turns)
    solver_kwargs = dict(solver_kwargs or {})
    seeds = [None if seed is None else seed + idx for idx in range(1, len(secrets) + 1)]
    log.info("Running %d games with solver=%s workers=%d", len(secrets), solver_id, workers)

    if workers <= 1:
        solver = create_solver(solver_id, **solver_kwargs)
        it: Iterable = zip(secrets, seeds)
        if progress:
            it = tqdm(it, total=len(secrets), ncols=80, desc=solver_id, unit="game")
        return [_play_or_record(solver, s, lexicon, sd) for s, sd in it]

    # Build the matrix once here so workers receive it instead of rebuilding it.
    lexicon.matrix
    with ProcessPoolExecutor(max_workers=workers, initializer=_init_worker,
                             initargs=(lexicon, solver_id, solver_kwargs)) as ex:
        it = ex.map(_worker_play, secrets, seeds, chunksize=16)
        if progress:
            it = tqdm(it, total=len(secrets), ncols=80, desc=solver_id, unit="game")
        return list(it)


def summarize(outcomes: Sequence[GameOutcome]) -> Dict:
    """
    Benchmark numbers: solved/failed counts, average guesses (failures count
    the turns they used), distribution of solved games by turn count.
    """
    played = [o for o in outcomes if o.error is None]
    solved = [o for o in played if o.solved]
    turns = [o.turns for o in played]
    dist = Counter(o.turns for o in solved)
    return {
        "total": len(outcomes),
        "played": len(played),
        "solved": len(solved),
        "failed": len(played) - len(solved),
        "skipped": len(outcomes) - len(played),
        "success_rate": (len(solved) / len(played)) if played else 0.0,
        "average_guesses": (sum(turns) / len(turns)) if turns else 0.0,
        "min_guesses": min(turns) if turns else 0,
        "max_guesses": max(turns) if turns else 0,
        "distribution": {k: dist[k] for k in sorted(dist)},
        "failed_words": [o.secret for o in played if not o.solved],
        "total_time_ms": sum(o.time_ms for o in played),
    }
