"""Generic emit → compute → collect → output job pipeline."""

from .exceptions import EmissionError, JobExecutionError, OutputError, PipelineError
from .job import BaseJob
from .models import JobFailure, JobFailurePolicy, JobOutcome, Pair, Phase, PipelineRunResult
from .scheduler import FunctionScheduler, JobScheduler, run_phases

__all__ = [
    # Orchestration
    "JobScheduler",
    "FunctionScheduler",
    "run_phases",
    "BaseJob",
    # Models
    "Pair",
    "Phase",
    "JobFailure",
    "JobFailurePolicy",
    "JobOutcome",
    "PipelineRunResult",
    # Exceptions
    "PipelineError",
    "EmissionError",
    "JobExecutionError",
    "OutputError",
]
