"""Anagram counting built on the job pipeline."""

from .job import WordFileJob
from .scheduler import DEFAULT_OUTPUT_FILE, AnagramScheduler
from .words import canonical_key, is_candidate_word, iter_words

__all__ = [
    "AnagramScheduler",
    "WordFileJob",
    "canonical_key",
    "is_candidate_word",
    "iter_words",
    "DEFAULT_OUTPUT_FILE",
]
