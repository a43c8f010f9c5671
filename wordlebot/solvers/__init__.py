from __future__ import annotations
from typing import List
from .base import BaseSolver, REGISTRY, register

from . import adaptive  # noqa: F401
from . import entropy  # noqa: F401
from . import hybrid  # noqa: F401
from . import minimax  # noqa: F401
from . import random_consistent  # noqa: F401

from .adaptive import AdaptiveSolver, Tier, tier_for
from .metrics import Analysis, GuessMetrics, analyze, guess_metrics, score_pool

DEFAULT_SOLVER = "adaptive"


def create_solver(solver_id: str = DEFAULT_SOLVER, **kwargs) -> BaseSolver:
    """
    Factory: instantiate a registered solver by id (kwargs go to its constructor).
    """
    try:
        cls = REGISTRY[solver_id]
    except KeyError as e:
        raise ValueError(
            f"Unknown solver id: {solver_id}. Available: {sorted(REGISTRY.keys())}") from e
    return cls(**kwargs)


def get_solver_ids() -> List[str]:
    """
    Return all registered solver ids (sorted for stable CLI help).
    """
    return sorted(REGISTRY.keys())
