"""Abstract unit of work executed by the compute phase."""

from abc import ABC, abstractmethod
from typing import Generic, Iterator

from .models import K, Pair, V


class BaseJob(ABC, Generic[K, V]):
    """Base class for all jobs.

    A job captures everything it needs in its constructor, so that the emit
    phase can create it and the compute phase can run it later without
    further arguments. Jobs must not touch shared mutable state: the
    scheduler may run several of them at the same time.

    Subclasses implement execute() as a generator.
    """

    @abstractmethod
    def execute(self) -> Iterator[Pair[K, V]]:
        """Produce this job's key/value pairs.

        The returned iterator is finite and is consumed exactly once.

        Raises:
            JobExecutionError: If the job's input cannot be read or parsed
        """
        pass

    def describe(self) -> str:
        """Short identifier used in log lines and failure records."""
        return type(self).__name__

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.describe()}>"
