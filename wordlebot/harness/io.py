"""
Output files for benchmark runs.

- write_csv:      one row per game, with fixed guess/pattern columns per turn.
- write_manifest: JSON manifest with the run config, word-list report and summary.
- timestamp_id:   compact UTC run ID for filenames.
- git_commit_or_unknown: short commit hash of the working tree, if any.

Patterns are written with a leading apostrophe so spreadsheet apps keep
strings like "-GYY-" as text instead of parsing them as formulas.
"""

from __future__ import annotations

import csv
import datetime as dt
import json
import logging
import subprocess
from pathlib import Path
from typing import Dict, Sequence

from wordlebot.engine import pattern_to_str

log = logging.getLogger(__name__)


def _excel_safe_pattern(patt: str) -> str:
    return "'" + patt if patt else patt


def write_csv(outcomes: Sequence, path: str, *, solver_id: str, max_turns: int) -> str:
    """
    Columns:
      solver, secret, solved, turns, time_ms, error,
      guess_1, patt_1, policy_1, ..., guess_<max_turns>, patt_<max_turns>, policy_<max_turns>
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    fields = ["solver", "secret", "solved", "turns", "time_ms", "error"]
    for i in range(1, max_turns + 1):
        fields += [f"guess_{i}", f"patt_{i}", f"policy_{i}"]

    with p.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fields)
        w.writeheader()
        for o in outcomes:
            row = {
                "solver": solver_id,
                "secret": o.secret or "",
                "solved": o.solved,
                "turns": o.turns,
                "time_ms": round(float(o.time_ms), 3),
                "error": o.error or "",
            }
            for i in range(1, max_turns + 1):
                if i <= len(o.history):
                    rec = o.history[i - 1]
                    row[f"guess_{i}"] = rec.guess
                    row[f"patt_{i}"] = _excel_safe_pattern(pattern_to_str(rec.pattern))
                    row[f"policy_{i}"] = rec.policy or ""
                else:
                    row[f"guess_{i}"] = row[f"patt_{i}"] = row[f"policy_{i}"] = ""
            w.writerow(row)

    log.info("wrote %d rows to %s", len(outcomes), p)
    return str(p)


def write_manifest(manifest: Dict, path: str) -> str:
    """
    Typical keys: run_id, git_commit, config (CLI args), wordlists
    (validate_wordlists report), num_cases, solver_id, summary.
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2, default=str)
    return str(p)


def timestamp_id() -> str:
    """e.g. 20250820T024121Z"""
    return dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def git_commit_or_unknown() -> str:
    try:
        return (
            subprocess.check_output(
                ["git", "rev-parse", "--short", "HEAD"],
                stderr=subprocess.DEVNULL,
            )
            .decode()
            .strip()
        )
    except (OSError, subprocess.CalledProcessError):
        return "unknown"
