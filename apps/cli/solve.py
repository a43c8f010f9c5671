# apps/cli/solve.py
"""
Interactive and single-word commands.

  solve WORD     watch the solver play against a known secret, turn by turn
  analyze WORD   entropy / worst case of WORD against the full answer list
  play           interactive helper for a real game: the bot suggests a guess,
                 you type the colours Wordle showed (G/Y/-, 'win', 'undo',
                 'new', 'quit')
"""

from __future__ import annotations

import argparse
import logging
import sys

from wordlebot.datasets import default_paths, load_lexicon
from wordlebot.engine import (
    ALL_HIT,
    InvalidWordError,
    InvariantViolation,
    WordleError,
    pattern_from_str,
    pattern_to_emoji,
    pattern_to_str,
    validate_guess,
)
from wordlebot.harness import Game, SecretOracle
from wordlebot.solvers import DEFAULT_SOLVER, create_solver, get_solver_ids

WIN_WORDS = {"win", "correct", "yes", "solved"}


def _print_analysis(a) -> None:
    print(f"{a.word.upper()} against {a.total_candidates} candidates")
    print(f"  entropy:         {a.entropy:.3f} bits ({2 ** a.entropy:.1f}x reduction)")
    print(f"  expected remain: {a.expected_remaining:.1f}")
    print(f"  worst case:      {a.worst_case}")
    print(f"  partitions:      {a.num_partitions}")


def cmd_solve(game: Game, secret: str) -> int:
    oracle = SecretOracle(secret)
    if not game.lexicon.is_answer(oracle.secret):
        raise InvalidWordError(secret, "not in the answer list")
    outcome = game.play(oracle)
    print(f"{'turn':>4}  {'guess':5}  {'pattern':7}  {'before':>6}  {'after':>5}  policy")
    for i, rec in enumerate(outcome.history, 1):
        print(f"{i:>4}  {rec.guess:5}  {pattern_to_str(rec.pattern):7}  "
              f"{rec.candidates_before:>6}  {rec.candidates_after:>5}  {rec.policy or '-'}")
    if outcome.solved:
        print(f"Solved {oracle.secret.upper()} in {outcome.turns} guesses ({outcome.time_ms:.0f} ms)")
        return 0
    print(f"Failed to solve {oracle.secret.upper()} in {outcome.turns} guesses")
    return 1


def cmd_analyze(game: Game, word: str) -> int:
    _print_analysis(game.analyze(word))
    return 0


def _read(prompt: str) -> str:
    try:
        return input(f"{prompt}: ").strip()
    except EOFError:
        return "quit"


def cmd_play(game: Game) -> int:
    print("After each guess, enter the feedback: G/g/🟩 hit, Y/y/🟨 present, -/_/⬜ miss,")
    print("or 'win'. To record a different word than suggested type 'WORD PATTERN'.")
    print("Commands: 'undo', 'new', 'quit'\n")

    while True:
        if game.is_over:
            out = game.outcome
            if out.solved:
                print(f"\nSolved in {out.turns} guesses: {out.secret.upper()}\n")
            else:
                print(f"\nOut of turns after {out.turns} guesses.\n")
            cmd = _read("'new', 'undo' or 'quit'").lower()
            if cmd in ("quit", "q", "exit"):
                return 0
            if cmd in ("undo", "u"):
                game.undo()
            elif cmd in ("new", "n"):
                game = Game(game.lexicon, game.solver, max_turns=game.max_turns)
            continue

        n = game.tracker.size()
        guess = game.next_guess()
        a = game.analyze(guess)
        print("-" * 60)
        print(f"Turn {game.turn}: {n} candidates remaining")
        print(f"Suggested guess: {guess.upper()}  "
              f"({a.entropy:.3f} bits, expect {a.expected_remaining:.1f}, worst {a.worst_case})")
        if n <= 10:
            print("Candidates: " + " ".join(w.upper() for w in game.candidates()))

        while True:
            line = _read("feedback")
            low = line.lower()
            if low in ("quit", "q", "exit"):
                return 0
            if low in ("undo", "u"):
                if game.undo() is None:
                    print("Nothing to undo.")
                    continue
                break
            if low in ("new", "n"):
                game = Game(game.lexicon, game.solver, max_turns=game.max_turns)
                break

            played, text = guess, line
            parts = line.split()
            if len(parts) == 2:
                played, text = parts
                if not validate_guess(played, game.lexicon):
                    print(f"Rejected: {played!r} is not in the guess list")
                    continue
            try:
                pattern = ALL_HIT if text.lower() in WIN_WORDS else pattern_from_str(text)
                rec = game.apply_feedback(played, pattern)
            except (ValueError, InvariantViolation) as e:
                # InvalidWordError is a ValueError too
                print(f"Rejected: {e}")
                continue
            print(f"{rec.guess.upper()} {pattern_to_emoji(rec.pattern)} -> "
                  f"{rec.candidates_after} candidates")
            break


def build_parser() -> argparse.ArgumentParser:
    answers_default, allowed_default = default_paths()
    ap = argparse.ArgumentParser(description="wordlebot - solve, analyze or play interactively")
    ap.add_argument("--answers", default=answers_default)
    ap.add_argument("--allowed", default=allowed_default)
    ap.add_argument("--solver", default=DEFAULT_SOLVER,
                    help=f"solver id (one of: {', '.join(get_solver_ids())})")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--opening", default=None)
    ap.add_argument("--cache-dir", default=".cache")
    ap.add_argument("--log-level", default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])

    sub = ap.add_subparsers(dest="command", required=True)
    p = sub.add_parser("solve", help="solve a known secret and show every turn")
    p.add_argument("word")
    p = sub.add_parser("analyze", help="score one word against all answers")
    p.add_argument("word")
    sub.add_parser("play", help="interactive helper for a live game")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        lexicon = load_lexicon(args.answers, args.allowed,
                               cache_dir=args.cache_dir or None, progress=sys.stderr.isatty())
        solver_kwargs = {} if args.opening is None else {"opening": args.opening}
        game = Game(lexicon, create_solver(args.solver, **solver_kwargs), seed=args.seed)

        if args.command == "solve":
            return cmd_solve(game, args.word)
        if args.command == "analyze":
            return cmd_analyze(game, args.word)
        return cmd_play(game)
    except WordleError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
