"""
Wordle feedback (pattern) computation for a single (guess, secret) pair.

Marks per position:
  - HIT     (2) : correct letter in the correct position   -> 'G'
  - PRESENT (1) : letter is in the secret, wrong position   -> 'Y'
  - MISS    (0) : letter absent (or present fewer times)    -> '-'

A pattern is stored as one int in [0, 242]: position i contributes
mark * 3**i, so the leftmost tile is the least significant digit and the
all-green pattern is 2 + 2*3 + 2*9 + 2*27 + 2*81 = 242.

Algorithm (two-pass, canonical for Wordle):
  1) First pass marks all hits and counts the secret's letters that were
     not consumed by a hit.
  2) Second pass, left to right, marks PRESENT only while the letter still
     has remaining count; everything else stays MISS.
"""

from __future__ import annotations

from collections import Counter
from typing import Tuple

WORD_LENGTH = 5
NUM_PATTERNS = 3 ** WORD_LENGTH  # 243

MISS, PRESENT, HIT = 0, 1, 2
ALL_HIT = NUM_PATTERNS - 1  # 242

_WEIGHTS = tuple(3 ** i for i in range(WORD_LENGTH))

_CHAR_TO_MARK = {
    "G": HIT, "g": HIT, "🟩": HIT,                           # green square
    "Y": PRESENT, "y": PRESENT, "🟨": PRESENT,               # yellow square
    "-": MISS, "_": MISS, "⬜": MISS, "⬛": MISS,            # white/black square
}
_MARK_TO_CHAR = {HIT: "G", PRESENT: "Y", MISS: "-"}
_MARK_TO_EMOJI = {HIT: "🟩", PRESENT: "🟨", MISS: "⬜"}


def compute_pattern(guess: str, secret: str) -> int:
    """
    Compute the feedback pattern for `guess` against `secret`.

    Both words are expected to be normalized (lowercase, 5 letters); callers
    that accept raw input go through engine.validation first.

    Examples:
      pattern_to_str(compute_pattern("speed", "erase")) -> "Y-YY-"
      pattern_to_str(compute_pattern("robot", "floor")) -> "YY-G-"
    """
    result = [MISS] * WORD_LENGTH

    # Pass 1: hits, and the multiset of secret letters left over for pass 2.
    remaining = Counter()
    for i in range(WORD_LENGTH):
        if guess[i] == secret[i]:
            result[i] = HIT
        else:
            remaining[secret[i]] += 1

    # Pass 2: PRESENT only while that letter still has unconsumed copies.
    for i in range(WORD_LENGTH):
        if result[i] == HIT:
            continue
        g = guess[i]
        if remaining[g] > 0:
            result[i] = PRESENT
            remaining[g] -= 1

    return encode_marks(result)


def is_consistent(word: str, guess: str, pattern: int) -> bool:
    """True if `word` could be the secret given that `guess` produced `pattern`."""
    return compute_pattern(guess, word) == pattern


def is_solved(pattern: int) -> bool:
    return pattern == ALL_HIT


# ---- encoding helpers ----

def encode_marks(marks) -> int:
    if len(marks) != WORD_LENGTH:
        raise ValueError(f"pattern needs {WORD_LENGTH} marks, got {len(marks)}")
    return sum(m * w for m, w in zip(marks, _WEIGHTS))


def marks(pattern: int) -> Tuple[int, ...]:
    """Decode a pattern int back into its per-position marks (left to right)."""
    if not 0 <= pattern < NUM_PATTERNS:
        raise ValueError(f"pattern must be in [0, {NUM_PATTERNS - 1}], got {pattern}")
    out = []
    for _ in range(WORD_LENGTH):
        out.append(pattern % 3)
        pattern //= 3
    return tuple(out)


def count_hits(pattern: int) -> int:
    return marks(pattern).count(HIT)


def count_present(pattern: int) -> int:
    return marks(pattern).count(PRESENT)


def pattern_from_str(text: str) -> int:
    """
    Parse "GY-G-" style feedback (also g/y/_ and the colored squares).

    Raises ValueError on wrong length or an unknown character.
    """
    chars = list(text.strip())
    if len(chars) != WORD_LENGTH:
        raise ValueError(f"pattern must have {WORD_LENGTH} marks, got {text!r}")
    try:
        return encode_marks([_CHAR_TO_MARK[c] for c in chars])
    except KeyError as e:
        raise ValueError(f"invalid pattern character {e.args[0]!r} in {text!r}") from e


def pattern_to_str(pattern: int) -> str:
    return "".join(_MARK_TO_CHAR[m] for m in marks(pattern))


def pattern_to_emoji(pattern: int) -> str:
    return "".join(_MARK_TO_EMOJI[m] for m in marks(pattern))
