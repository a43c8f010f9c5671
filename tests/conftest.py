import os

import pytest

from wordlebot.datasets import Lexicon, load_lexicon

ANSWERS = [
    "crane", "slate", "trace", "cared", "racer", "scoop", "level", "belle",
    "floor", "robot", "erase", "speed", "pilot", "mound", "fuzzy", "gnome",
    "witch", "lymph", "bravo", "chunk", "dwarf", "jumbo", "knelt", "proxy",
    "squad", "vixen", "whelp", "zesty", "amber", "cigar",
]
EXTRA_GUESSES = ["salet", "roate", "tares", "lints", "dumpy", "abbey"]


@pytest.fixture(scope="session")
def small_lexicon():
    return Lexicon(ANSWERS + EXTRA_GUESSES, ANSWERS)


@pytest.fixture(scope="session")
def real_lexicon(tmp_path_factory):
    """The real word lists, when WORDLEBOT_ANSWERS / WORDLEBOT_ALLOWED point at them."""
    answers = os.environ.get("WORDLEBOT_ANSWERS")
    allowed = os.environ.get("WORDLEBOT_ALLOWED")
    if not (answers and allowed):
        pytest.skip("set WORDLEBOT_ANSWERS and WORDLEBOT_ALLOWED to run full-list tests")
    cache = os.environ.get("WORDLEBOT_CACHE_DIR") or tmp_path_factory.mktemp("patterns")
    return load_lexicon(answers, allowed, cache_dir=cache)
