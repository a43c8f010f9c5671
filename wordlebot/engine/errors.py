"""
Error taxonomy shared by every wordlebot layer.

  - LoadError          : word lists are missing, empty or malformed (fatal at startup)
  - InvalidWordError   : a guess/secret is not 5 letters a-z (caller re-prompts or skips)
  - InvariantViolation : the candidate set went empty (inconsistent feedback or a bug)
  - GameOverError      : feedback supplied after the game already ended

Running out of turns is NOT an error; it is a GameOutcome with solved=False.
"""


class WordleError(Exception):
    """Base class so drivers can catch everything wordlebot raises in one place."""


class LoadError(WordleError):
    pass


class InvalidWordError(WordleError, ValueError):
    def __init__(self, word, reason: str = "must be exactly 5 letters a-z"):
        self.word = word
        self.reason = reason
        super().__init__(f"invalid word {word!r}: {reason}")


class InvariantViolation(WordleError, RuntimeError):
    pass


class GameOverError(WordleError, RuntimeError):
    pass
