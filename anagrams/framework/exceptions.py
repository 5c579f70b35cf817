"""Exceptions raised by the job pipeline."""

from typing import Any, List, Optional


class PipelineError(Exception):
    """Base exception for all pipeline errors.

    Catching this catches every failure the scheduler reports, whatever the
    phase it happened in.
    """

    pass


class EmissionError(PipelineError):
    """Jobs could not be enumerated.

    Fatal to the run: when this is raised no job has been computed and
    nothing has been collected or written.
    """

    pass


class JobExecutionError(PipelineError):
    """A single job failed to read or parse its input.

    Recoverable at job granularity; whether the run continues is decided by
    the scheduler's failure policy.
    """

    def __init__(self, message: str, job: Optional[str] = None) -> None:
        """Initialize with the description of the failing job.

        Args:
            message: Human-readable error message
            job: Description of the job that failed (e.g. its input path)
        """
        super().__init__(message)
        self.job = job


class OutputError(PipelineError):
    """The terminal phase could not deliver the result.

    The grouped result that was being written is kept on the exception so
    the caller can still use it.
    """

    def __init__(self, message: str, grouped: Optional[List[Any]] = None) -> None:
        """Initialize with the collected result that was not delivered.

        Args:
            message: Human-readable error message
            grouped: Output of the collect phase
        """
        super().__init__(message)
        self.grouped = grouped if grouped is not None else []
