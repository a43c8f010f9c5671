"""
Dataset validator for wordlebot word lists.

What this module does:
- Validate a pair of word lists: answers.txt (secret pool) and allowed.txt (guess universe).
- Enforce formatting rules (lowercase, a-z only, exactly 5 letters, one per line).
- Detect duplicates and invalid lines; compute SHA-256 of the raw files.
- Check that answers are a subset of allowed.
- Return a machine-readable dict (for run manifests) and a pretty one-line summary.

Unlike datasets.lexicon this never raises on bad content: it reports. The CLI
prints the summary first, then load_lexicon decides whether the lists are usable.
"""

from __future__ import annotations

import hashlib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple

from wordlebot.engine.scoring import WORD_LENGTH


@dataclass
class FileReport:
    """Per-file diagnostics and metadata."""
    path: str
    exists: bool
    count: int = 0           # valid words after cleaning
    unique_count: int = 0
    invalid_lines: int = 0
    sha256: str = ""


@dataclass
class ValidationReport:
    answers: FileReport
    allowed: FileReport
    answers_subset_allowed: bool = False
    passed: bool = False
    issues: List[str] = field(default_factory=list)


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def _load_and_check(path: Path) -> Tuple[List[str], int]:
    """
    Rules: one token per line, already lowercase, a-z only, exact length.
    Blank lines count as invalid. Returns (valid_words, invalid_count).
    """
    valid: List[str] = []
    invalid = 0
    with path.open("r", encoding="utf-8") as f:
        for raw in f:
            w = raw.strip()
            if len(w) == WORD_LENGTH and w.isascii() and w.isalpha() and w.islower():
                valid.append(w)
            else:
                invalid += 1
    return valid, invalid


def _file_report(path: Path) -> Tuple[FileReport, List[str]]:
    if not path.exists():
        return FileReport(str(path), exists=False), []
    words, invalid = _load_and_check(path)
    rep = FileReport(
        path=str(path),
        exists=True,
        count=len(words),
        unique_count=len(set(words)),
        invalid_lines=invalid,
        sha256=_sha256_file(path),
    )
    return rep, words


def validate_wordlists(answers_path: str, allowed_path: str) -> Dict:
    """
    Validate the answers/allowed word lists.

    Returns a JSON-serializable dict (ValidationReport schema). `passed` is
    strict: both files present and non-empty, no invalid or duplicate lines,
    answers subset of allowed.
    """
    ans_rep, answers = _file_report(Path(answers_path))
    all_rep, allowed = _file_report(Path(allowed_path))
    rep = ValidationReport(answers=ans_rep, allowed=all_rep)

    for label, fr in (("answers", ans_rep), ("allowed", all_rep)):
        if not fr.exists:
            rep.issues.append(f"{label} file not found: {fr.path}")
            continue
        if fr.count == 0:
            rep.issues.append(f"{label} file contains 0 valid words")
        if fr.invalid_lines:
            rep.issues.append(f"{label} has {fr.invalid_lines} invalid line(s)")
        if fr.count != fr.unique_count:
            rep.issues.append(f"{label} contains duplicate lines")

    if ans_rep.exists and all_rep.exists:
        missing = sorted(set(answers) - set(allowed))
        rep.answers_subset_allowed = not missing
        if missing:
            rep.issues.append(f"answers not subset of allowed (e.g., {missing[:5]})")

    rep.passed = not rep.issues
    return asdict(rep)


def pretty_summary(report: Dict) -> str:
    """
    Compact one-liner for the console, e.g.
        answers=2315 (uniq=2315, sha=abc123...) | allowed=12972 (uniq=12972, sha=def456...) | subset=True | OK
    """
    a = report["answers"]
    b = report["allowed"]
    status = "OK" if report["passed"] else "FAIL"
    return (
        f"answers={a['count']} (uniq={a['unique_count']}, sha={a['sha256'][:12]}) "
        f"| allowed={b['count']} (uniq={b['unique_count']}, sha={b['sha256'][:12]}) "
        f"| subset={report['answers_subset_allowed']} | {status}"
    )
