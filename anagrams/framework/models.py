"""Data models flowing through the job pipeline."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, List, Optional, TypeVar

if TYPE_CHECKING:
    from .job import BaseJob

K = TypeVar("K")
V = TypeVar("V")


@dataclass(frozen=True)
class Pair(Generic[K, V]):
    """Immutable key/value tuple produced by jobs and by the collect phase."""

    key: K
    value: V


class Phase(str, Enum):
    """Scheduler states, in the only order they can occur."""

    IDLE = "idle"
    EMITTING = "emitting"
    COMPUTING = "computing"
    COLLECTING = "collecting"
    OUTPUTTING = "outputting"
    DONE = "done"


class JobFailurePolicy(str, Enum):
    """What the compute phase does when a job raises."""

    RECORD = "record"
    RAISE = "raise"


@dataclass(frozen=True)
class JobFailure:
    """
    Record of a job that contributed no pairs because it failed.

    Attributes:
        job: Description of the job (see BaseJob.describe)
        error_type: Class name of the underlying error
        error_message: Error message
    """

    job: str
    error_type: str
    error_message: str


@dataclass
class JobOutcome(Generic[K, V]):
    """Result of running one job during the compute phase."""

    job: "BaseJob[K, V]"
    pairs: List[Pair[K, V]] = field(default_factory=list)
    failure: Optional[JobFailure] = None

    @property
    def succeeded(self) -> bool:
        return self.failure is None


@dataclass
class PipelineRunResult:
    """
    Summary of one complete execute_phases() call.

    Attributes:
        run_id: Identifier attached to every log line of the run
        run_started_at: UTC timestamp when emission began
        run_finished_at: UTC timestamp when output returned
        total_duration_seconds: Wall time of the run
        job_count: Jobs produced by the emit phase
        failed_job_count: Jobs that failed and contributed no pairs
        pair_count: Pairs that reached the collect phase
        key_count: Distinct keys in the grouped result
        failures: One record per failed job, in emission order
        output_result: Whatever the output phase returned (e.g. a file path)
        had_errors: Whether any job failed
    """

    run_id: str
    run_started_at: datetime
    run_finished_at: datetime
    total_duration_seconds: float = 0.0
    job_count: int = 0
    failed_job_count: int = 0
    pair_count: int = 0
    key_count: int = 0
    failures: List[JobFailure] = field(default_factory=list)
    output_result: Any = None
    had_errors: bool = False

    def __post_init__(self):
        if self.failures and self.failed_job_count == 0:
            self.failed_job_count = len(self.failures)
        self.had_errors = self.had_errors or self.failed_job_count > 0

        if self.total_duration_seconds == 0.0:
            delta = self.run_finished_at - self.run_started_at
            self.total_duration_seconds = delta.total_seconds()
