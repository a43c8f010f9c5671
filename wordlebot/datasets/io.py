"""Plain-text word list files: one word per line, UTF-8, '#' starts a comment line."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List


def read_words(p: Path | str) -> List[str]:
    """
    Raw entries of a word list, whitespace-stripped, blanks and comments dropped.

    No normalization happens here; Lexicon does that so it can report the
    offending entry. Raises FileNotFoundError / UnicodeDecodeError as-is.
    """
    text = Path(p).read_text(encoding="utf-8")
    return [w for w in (ln.strip() for ln in text.splitlines()) if w and not w.startswith("#")]


def write_words(words: Iterable[str], p: Path | str) -> str:
    """Write one word per line (with trailing newline), creating parent dirs; returns the path."""
    p = Path(p)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text("".join(f"{w}\n" for w in words), encoding="utf-8")
    return str(p)
