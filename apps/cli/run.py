# apps/cli/run.py
"""
CLI entry point for benchmarking wordlebot solvers.

This script:
  1) Validates the word lists (prints counts + SHA, ensures answers ⊆ allowed).
  2) Loads the lexicon (pattern matrix from cache when available).
  3) Plays every answer (or a seeded sample) with the requested solver and
     prints the summary: solved, failures, average guesses, distribution.
  4) Writes:
       - CSV:  per-game results + guess/pattern/policy history columns
       - JSON: manifest with config, word-list hashes, git commit, summary
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path

from wordlebot.datasets import default_paths, load_lexicon, pretty_summary, validate_wordlists
from wordlebot.engine import WordleError
from wordlebot.harness import WORDLE_MAX_TURNS, run_batch, summarize
from wordlebot.harness.io import git_commit_or_unknown, timestamp_id, write_csv, write_manifest
from wordlebot.solvers import DEFAULT_SOLVER, get_solver_ids


def _print_summary(solver_id: str, summary: dict) -> None:
    print(f"solver={solver_id} games={summary['played']} solved={summary['solved']} "
          f"failed={summary['failed']} skipped={summary['skipped']}")
    print(f"average guesses: {summary['average_guesses']:.4f} "
          f"(min {summary['min_guesses']}, max {summary['max_guesses']})")
    width = max(summary["distribution"].values(), default=1)
    for turns, count in summary["distribution"].items():
        bar = "#" * max(1, round(40 * count / width))
        print(f"  {turns}: {count:5d} {bar}")
    if summary["failed_words"]:
        print("failed: " + ", ".join(summary["failed_words"]))


def build_parser() -> argparse.ArgumentParser:
    answers_default, allowed_default = default_paths()
    solver_choices = ", ".join(get_solver_ids())
    ap = argparse.ArgumentParser(description="wordlebot - benchmark solvers over the answer list")
    ap.add_argument("--solver", default=DEFAULT_SOLVER,
                    help=f"solver id (one of: {solver_choices})")
    ap.add_argument("--answers", default=answers_default,
                    help="path to answers list (secret pool); env WORDLEBOT_ANSWERS")
    ap.add_argument("--allowed", default=allowed_default,
                    help="path to allowed guesses; env WORDLEBOT_ALLOWED")
    ap.add_argument("--sample", type=int,
                    help="run only a subset of answers (deterministic by seed)")
    ap.add_argument("--seed", type=int, default=123, help="base RNG seed (for reproducibility)")
    ap.add_argument("--workers", type=int, default=1, help="worker processes for the batch")
    ap.add_argument("--opening", default=None,
                    help="fixed first guess (default: solver's own; '' to compute it)")
    ap.add_argument("--cache-dir", default=".cache",
                    help="directory for the cached pattern matrix ('' to disable)")
    ap.add_argument("--outdir", default="reports", help="directory for output files")
    ap.add_argument(
        "--progress",
        choices=["auto", "bar", "off"],
        default="auto",
        help="Show run progress (auto=bar when stderr is a terminal)."
    )
    ap.add_argument("--log-level", default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        # 1) Validate word lists and print a one-liner summary
        rep = validate_wordlists(args.answers, args.allowed)
        print(pretty_summary(rep))

        # 2) Load lexicon; the matrix is built once and shared by all games
        show_bar = args.progress == "bar" or (args.progress == "auto" and sys.stderr.isatty())
        lexicon = load_lexicon(args.answers, args.allowed,
                               cache_dir=args.cache_dir or None, progress=show_bar)
        lexicon.matrix

        # 3) Choose cases (deterministic sample by seed)
        secrets = list(lexicon.answer_words())
        if args.sample and args.sample < len(secrets):
            rng = random.Random(args.seed)
            rng.shuffle(secrets)
            secrets = secrets[: args.sample]

        solver_kwargs = {} if args.opening is None else {"opening": args.opening}
        outcomes = run_batch(args.solver, secrets, lexicon, seed=args.seed,
                             workers=args.workers, progress=show_bar,
                             solver_kwargs=solver_kwargs)
    except WordleError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    summary = summarize(outcomes)
    _print_summary(args.solver, summary)

    # 4) Write outputs (CSV + manifest)
    run_id = timestamp_id()
    outdir = Path(args.outdir)
    csv_path = outdir / f"run_{run_id}.csv"
    manifest_path = outdir / f"run_{run_id}_manifest.json"

    write_csv(outcomes, str(csv_path), solver_id=args.solver, max_turns=WORDLE_MAX_TURNS)
    manifest = {
        "run_id": run_id,
        "git_commit": git_commit_or_unknown(),
        "config": vars(args),
        "wordlists": rep,
        "num_cases": len(outcomes),
        "solver_id": args.solver,
        "summary": summary,
    }
    write_manifest(manifest, str(manifest_path))

    print(f"Wrote: {csv_path}")
    print(f"Wrote: {manifest_path}")
    return 0 if summary["failed"] == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
