"""Anagram Counter: a staged job pipeline counting anagram groups in text files."""

__version__ = "1.0.0"
