import pytest

from wordlebot.engine import CandidateTracker, InvariantViolation, compute_pattern
from wordlebot.solvers import AdaptiveSolver, Tier, create_solver, get_solver_ids, tier_for
from wordlebot.solvers.metrics import entropy, worst_case

from conftest import ANSWERS


@pytest.mark.parametrize("n,tier", [
    (2315, Tier.PURE_ENTROPY),
    (101, Tier.PURE_ENTROPY),
    (100, Tier.ENTROPY_MINIMAX),
    (22, Tier.ENTROPY_MINIMAX),
    (21, Tier.HYBRID),
    (10, Tier.HYBRID),
    (9, Tier.MINIMAX_FIRST),
    (3, Tier.MINIMAX_FIRST),
    (2, Tier.RANDOM),
    (1, Tier.RANDOM),
])
def test_tier_boundaries(n, tier):
    assert tier_for(n) is tier
    assert AdaptiveSolver().tier(n) is tier


def test_tier_is_pure_function_of_size():
    s = AdaptiveSolver()
    assert [s.tier(n) for n in range(1, 300)] == [s.tier(n) for n in range(1, 300)]


def test_invalid_thresholds():
    with pytest.raises(ValueError):
        AdaptiveSolver(thresholds=(2, 9, 21, 100))
    with pytest.raises(ValueError):
        AdaptiveSolver(thresholds=(100, 21, 9))


def test_registry():
    assert {"adaptive", "entropy", "minimax", "hybrid", "random_consistent"} <= set(get_solver_ids())
    assert isinstance(create_solver(), AdaptiveSolver)
    with pytest.raises(ValueError):
        create_solver("nope")


def test_opening_on_full_candidate_set(small_lexicon):
    s = create_solver("adaptive")
    s.reset(lexicon=small_lexicon)
    t = CandidateTracker(small_lexicon)
    assert s.next_guess(t) == "salet"
    assert s.last_policy == "opening"

    # no opener once the set has shrunk
    t.filter("salet", compute_pattern("salet", "crane"))
    s.next_guess(t)
    assert s.last_policy != "opening"


def test_opening_disabled(small_lexicon):
    s = create_solver("adaptive", opening="")
    s.reset(lexicon=small_lexicon)
    guess = s.next_guess(CandidateTracker(small_lexicon))
    assert s.last_policy == "entropy_minimax"   # 30 candidates
    best = max(entropy(g, ANSWERS) for g in small_lexicon.guess_words())
    assert entropy(guess, ANSWERS) == pytest.approx(best, abs=1e-9)


def test_opening_not_in_vocabulary_is_skipped(small_lexicon):
    s = create_solver("adaptive", opening="zonal")
    s.reset(lexicon=small_lexicon)
    s.next_guess(CandidateTracker(small_lexicon))
    assert s.last_policy != "opening"


def test_single_candidate_is_played(small_lexicon):
    s = AdaptiveSolver()
    s.reset(lexicon=small_lexicon)
    t = CandidateTracker(small_lexicon)
    t.filter("zesty", compute_pattern("zesty", "zesty"))
    assert s.next_guess(t) == "zesty"
    assert s.last_policy == "random"


def test_random_tier_is_seeded(small_lexicon):
    def pick(seed):
        s = AdaptiveSolver(opening="", thresholds=(100, 60, 50, 40))
        s.reset(lexicon=small_lexicon, seed=seed)
        return s.next_guess(CandidateTracker(small_lexicon))

    assert pick(5) == pick(5)
    assert pick(5) in ANSWERS
    assert len({pick(seed) for seed in range(20)}) > 1


def test_minimax_first_tier_minimizes_worst_case(small_lexicon):
    s = AdaptiveSolver(opening="", thresholds=(100, 60, 50, 2))
    s.reset(lexicon=small_lexicon)
    guess = s.next_guess(CandidateTracker(small_lexicon))
    assert s.last_policy == "minimax_first"
    best = min(worst_case(g, ANSWERS) for g in small_lexicon.guess_words())
    assert worst_case(guess, ANSWERS) == best


def test_empty_candidate_set_raises(small_lexicon):
    class Empty:
        lexicon = small_lexicon

        def size(self):
            return 0

    s = AdaptiveSolver()
    s.reset(lexicon=small_lexicon)
    with pytest.raises(InvariantViolation):
        s.next_guess(Empty())


@pytest.mark.parametrize("solver_id", ["entropy", "minimax", "hybrid", "random_consistent"])
def test_other_solvers_pick_vocabulary_words(small_lexicon, solver_id):
    s = create_solver(solver_id, opening="")
    s.reset(lexicon=small_lexicon, seed=1)
    t = CandidateTracker(small_lexicon)
    t.filter("salet", compute_pattern("salet", "witch"))
    g = s.next_guess(t)
    assert g in small_lexicon
    assert s.last_policy
