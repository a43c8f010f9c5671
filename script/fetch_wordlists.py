"""
Download the Wordle word lists and write clean copies for the lexicon loader.

What it does:
- Downloads the answer list (the classic 2,315 answers) and the list of
  additional accepted guesses.
- Keeps lines that are exactly five letters a-z, lowercases, de-duplicates
  while preserving order.
- Writes answers.txt, and allowed.txt as the union of both lists (answers are
  always legal guesses), so the two files pass validate_wordlists as-is.

Usage:
    python -m script.fetch_wordlists --outdir wordlebot/datasets/data
    python -m script.fetch_wordlists --answers-url URL --allowed-url URL --sort
"""

import argparse
import re
from pathlib import Path

import requests

from wordlebot.datasets import write_words

ANSWERS_URL = ("https://gist.githubusercontent.com/cfreshman/"
               "a03ef2cba789d8cf00c08f767e0fad7b/raw/wordle-answers-alphabetical.txt")
ALLOWED_URL = ("https://gist.githubusercontent.com/cfreshman/"
               "cdcdf777450c5b5301e439061d29694c/raw/wordle-allowed-guesses.txt")
WORD_RE = re.compile(r"^[a-z]{5}$")


def unique_preserve_order(words):
    seen = set()
    out = []
    for w in words:
        if w not in seen:
            seen.add(w)
            out.append(w)
    return out


def fetch_words(url: str) -> list[str]:
    r = requests.get(url, timeout=30)
    r.raise_for_status()
    words = (ln.strip().lower() for ln in r.text.splitlines())
    return unique_preserve_order(w for w in words if WORD_RE.match(w))


def main():
    ap = argparse.ArgumentParser(description="Download the Wordle answer and guess lists")
    ap.add_argument("--answers-url", default=ANSWERS_URL)
    ap.add_argument("--allowed-url", default=ALLOWED_URL)
    ap.add_argument("--outdir", default="wordlebot/datasets/data")
    ap.add_argument("--sort", action="store_true", help="sort both lists alphabetically")
    args = ap.parse_args()

    answers = fetch_words(args.answers_url)
    allowed = unique_preserve_order(fetch_words(args.allowed_url) + answers)
    if args.sort:
        answers, allowed = sorted(answers), sorted(allowed)

    outdir = Path(args.outdir)
    for name, words in (("answers.txt", answers), ("allowed.txt", allowed)):
        path = write_words(words, outdir / name)
        print(f"Wrote {len(words)} words -> {path}")


if __name__ == "__main__":
    main()
