from .scoring import (
    ALL_HIT,
    HIT,
    MISS,
    PRESENT,
    compute_pattern,
    is_consistent,
    is_solved,
    pattern_from_str,
    pattern_to_emoji,
    pattern_to_str,
)
from .constraints import CandidateTracker, filter_candidates
from .errors import GameOverError, InvalidWordError, InvariantViolation, LoadError, WordleError
from .validation import normalize_word, validate_guess

__all__ = [
    "ALL_HIT", "HIT", "MISS", "PRESENT",
    "compute_pattern", "is_consistent", "is_solved",
    "pattern_from_str", "pattern_to_str", "pattern_to_emoji",
    "CandidateTracker", "filter_candidates",
    "WordleError", "LoadError", "InvalidWordError", "InvariantViolation", "GameOverError",
    "normalize_word", "validate_guess",
]
