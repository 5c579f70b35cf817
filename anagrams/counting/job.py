"""Job that reads one text file and emits (anagram key, word) pairs."""

import codecs
from pathlib import Path
from typing import Iterator, Union

from anagrams.framework.exceptions import JobExecutionError
from anagrams.framework.job import BaseJob
from anagrams.framework.models import Pair

from .words import DEFAULT_MIN_WORD_LENGTH, canonical_key, iter_words


class WordFileJob(BaseJob[str, str]):
    """
    Emit ``Pair(canonical_key(word), word)`` for every candidate word in a file.

    The file is only opened when execute() is iterated, so creating the job
    during emission costs nothing.

    Attributes:
        path: Absolute path of the text file
        encoding: Text encoding used to decode the file
        min_length: Shortest word that is counted
    """

    def __init__(
        self,
        path: Union[str, Path],
        encoding: str = "utf-8",
        min_length: int = DEFAULT_MIN_WORD_LENGTH,
    ) -> None:
        """Initialize the job.

        Raises:
            ValueError: If the encoding is unknown or min_length < 1
        """
        try:
            codecs.lookup(encoding)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {encoding}") from e
        if min_length < 1:
            raise ValueError(f"min_length must be at least 1, got: {min_length}")

        self.path = Path(path)
        self.encoding = encoding
        self.min_length = min_length

    def execute(self) -> Iterator[Pair[str, str]]:
        """Yield one pair per candidate word, in file order.

        Raises:
            JobExecutionError: If the file cannot be opened, read or decoded
        """
        try:
            with open(self.path, "r", encoding=self.encoding) as f:
                for line in f:
                    for word in iter_words(line, self.min_length):
                        yield Pair(canonical_key(word), word)
        except (OSError, UnicodeDecodeError) as e:
            raise JobExecutionError(f"Failed to read {self.path}: {e}", job=str(self.path)) from e

    def describe(self) -> str:
        return str(self.path)
