from .lexicon import Lexicon, default_paths, load_lexicon
from .validator import validate_wordlists, pretty_summary
from .io import read_words, write_words

__all__ = ["Lexicon", "load_lexicon", "default_paths", "validate_wordlists", "pretty_summary",
           "read_words", "write_words"]
