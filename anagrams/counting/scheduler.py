"""Anagram counter: one job per text file, one output line per anagram key."""

from pathlib import Path
from typing import TYPE_CHECKING, Iterator, List, Union

from anagrams.framework.exceptions import EmissionError, OutputError
from anagrams.framework.models import JobFailurePolicy, Pair
from anagrams.framework.scheduler import JobScheduler
from anagrams.logging import get_logger

from .job import WordFileJob
from .words import DEFAULT_MIN_WORD_LENGTH

if TYPE_CHECKING:
    from anagrams.config.models import AppConfig

logger = get_logger(__name__, component="anagrams")

DEFAULT_OUTPUT_FILE = "count_anagrams.txt"
DEFAULT_FILE_SUFFIX = ".txt"


class AnagramScheduler(JobScheduler[str, str]):
    """
    Count the words sharing each anagram key across a directory of text files.

    The output file holds one ``<key> - <count>`` line per key, where count
    is the number of words (not distinct words) found under that key.
    """

    def __init__(
        self,
        input_directory: Union[str, Path],
        output_file: Union[str, Path] = DEFAULT_OUTPUT_FILE,
        file_suffix: str = DEFAULT_FILE_SUFFIX,
        encoding: str = "utf-8",
        min_word_length: int = DEFAULT_MIN_WORD_LENGTH,
        workers: int = 1,
        failure_policy: Union[JobFailurePolicy, str] = JobFailurePolicy.RECORD,
    ):
        """
        Initialize the anagram scheduler.

        Args:
            input_directory: Directory whose files are scanned (not recursively)
            output_file: Where the counts are written; relative paths are
                resolved against the current working directory
            file_suffix: File name suffix selecting input files (case-insensitive)
            encoding: Encoding of the input files
            min_word_length: Shortest word that is counted
            workers: Files processed concurrently
            failure_policy: What to do when a file cannot be read
        """
        super().__init__(workers=workers, failure_policy=failure_policy)
        self.input_directory = Path(input_directory).expanduser().absolute()
        self.output_file = Path(output_file).expanduser().absolute()
        self.file_suffix = file_suffix.lower()
        self.encoding = encoding
        self.min_word_length = min_word_length

    @classmethod
    def from_config(cls, config: "AppConfig") -> "AnagramScheduler":
        """Build a scheduler from a validated AppConfig.

        Raises:
            ValueError: If the config has no input directory
        """
        if not config.input_directory:
            raise ValueError("input_directory is not set")
        return cls(
            input_directory=config.input_directory,
            output_file=config.output_file,
            file_suffix=config.file_suffix,
            encoding=config.encoding,
            min_word_length=config.min_word_length,
            workers=config.workers,
            failure_policy=config.on_job_error,
        )

    def emit(self) -> Iterator[WordFileJob]:
        """Create one WordFileJob per matching file, sorted by file name.

        Raises:
            EmissionError: If the directory is missing or cannot be listed
        """
        directory = self.input_directory
        if not directory.is_dir():
            raise EmissionError(f"Input directory not found or not a directory: {directory}")

        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise EmissionError(f"Cannot list input directory {directory}: {e}") from e

        jobs: List[WordFileJob] = []
        skipped = 0
        for entry in entries:
            if not entry.name.lower().endswith(self.file_suffix) or not entry.is_file():
                skipped += 1
                continue
            jobs.append(
                WordFileJob(entry, encoding=self.encoding, min_length=self.min_word_length)
            )

        logger.info(
            f"Found {len(jobs)} input files in {directory}",
            extra={
                "event": "anagrams.files.enumerated",
                "directory": str(directory),
                "file_count": len(jobs),
                "skipped_count": skipped,
            },
        )
        return iter(jobs)

    def output(self, grouped: List[Pair[str, List[str]]]) -> Path:
        """Write ``<key> - <count>`` lines, replacing any previous file.

        Returns:
            Absolute path of the written file

        Raises:
            OutputError: If the file cannot be created or written
        """
        path = self.output_file
        try:
            with open(path, "w", encoding="utf-8", newline="\n") as f:
                for pair in grouped:
                    f.write(f"{pair.key} - {len(pair.value)}\n")
        except OSError as e:
            raise OutputError(f"Failed to write {path}: {e}", grouped=grouped) from e

        logger.info(
            f"Output written to {path}",
            extra={
                "event": "output.written",
                "path": str(path),
                "line_count": len(grouped),
            },
        )
        return path
