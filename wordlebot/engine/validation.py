"""
Word validation.

A word is acceptable iff, after stripping and lowercasing, it is exactly
5 ASCII letters a-z. `normalize_word` raises InvalidWordError otherwise so
the driver can re-prompt (interactive) or record a failure (batch).

`validate_guess` is the boolean form used where the caller only needs a
yes/no, optionally also requiring membership in a guess vocabulary.
"""

from __future__ import annotations

import string
from typing import Container, Optional

from .errors import InvalidWordError
from .scoring import WORD_LENGTH

_ALPHABET = frozenset(string.ascii_lowercase)


def normalize_word(word) -> str:
    """Return the canonical lowercase form of `word` or raise InvalidWordError."""
    if not isinstance(word, str):
        raise InvalidWordError(word, "not a string")

    w = word.strip().lower()
    if len(w) != WORD_LENGTH:
        raise InvalidWordError(word, f"must be exactly {WORD_LENGTH} letters, got {len(w)}")
    # str.isalpha() accepts non-ASCII letters; the alphabet is fixed to a-z
    if not set(w) <= _ALPHABET:
        raise InvalidWordError(word, "only letters a-z are allowed")
    return w


def validate_guess(word, allowed: Optional[Container[str]] = None) -> bool:
    """
    Return True if `word` is a well-formed guess (and in `allowed`, if given).

    Pass a set (or a Lexicon) as `allowed` when calling in a loop; membership
    is checked with `in` and never copied here.
    """
    try:
        w = normalize_word(word)
    except InvalidWordError:
        return False
    return allowed is None or w in allowed
