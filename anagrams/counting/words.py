"""Word filtering and canonical anagram keys."""

import re
from typing import Iterator

DEFAULT_MIN_WORD_LENGTH = 4

_ALPHABETIC = re.compile(r"[A-Za-z]+")
# ASCII whitespace only; NBSP and other Unicode spaces stay inside a token
_WHITESPACE = re.compile(r"[ \t\n\x0b\f\r]+")


def canonical_key(word: str) -> str:
    """Return the anagram key of a word: its lower-cased letters, sorted.

    Any two words made of the same letters get the same key, e.g.
    ``canonical_key("Tea") == canonical_key("eat") == "aet"``. The key is
    as long as the word, even where lower-casing a character expands it.
    """
    return "".join(sorted(word.lower()))[: len(word)]


def is_candidate_word(token: str, min_length: int = DEFAULT_MIN_WORD_LENGTH) -> bool:
    """True if the token is long enough and made of ASCII letters only."""
    return len(token) >= min_length and _ALPHABETIC.fullmatch(token) is not None


def iter_words(line: str, min_length: int = DEFAULT_MIN_WORD_LENGTH) -> Iterator[str]:
    """Yield the lower-cased candidate words of a line, in order.

    Tokens are separated by runs of ASCII whitespace.
    """
    for token in _WHITESPACE.split(line):
        if is_candidate_word(token, min_length):
            yield token.lower()
