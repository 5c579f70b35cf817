"""Job scheduler: the emit → compute → collect → output driver."""

import threading
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from contextvars import copy_context
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Generic, Iterable, Iterator, List, Union
from uuid import uuid4

from anagrams.logging import get_logger
from anagrams.logging.context import log_context

from .exceptions import EmissionError, JobExecutionError, OutputError, PipelineError
from .job import BaseJob
from .models import (
    JobFailure,
    JobFailurePolicy,
    JobOutcome,
    K,
    Pair,
    Phase,
    PipelineRunResult,
    V,
)

logger = get_logger(__name__, component="scheduler")

Grouped = List[Pair[K, List[V]]]


class JobScheduler(ABC, Generic[K, V]):
    """
    Runs the four pipeline phases in a fixed order.

    Subclasses decide where jobs come from (emit) and what happens to the
    grouped result (output). How jobs are executed (compute) and how their
    pairs are aggregated (collect) is fixed, as is the order of the phases:
    defining execute_phases, compute or collect on a subclass raises
    TypeError when the class is created.

    Attributes:
        workers: Number of jobs computed at the same time (1 = sequential)
        failure_policy: Whether a failing job is recorded or aborts the run
        phase: Phase the scheduler is currently in
    """

    _FROZEN_METHODS = ("execute_phases", "compute", "collect")

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        for name in JobScheduler._FROZEN_METHODS:
            if name in cls.__dict__:
                raise TypeError(
                    f"{cls.__name__} cannot override {name}(); only emit() and output() "
                    f"may be customised"
                )

    def __init__(
        self,
        workers: int = 1,
        failure_policy: Union[JobFailurePolicy, str] = JobFailurePolicy.RECORD,
    ):
        """
        Initialize the scheduler.

        Args:
            workers: Jobs to compute concurrently; 1 runs them in sequence
            failure_policy: "record" to log failed jobs and continue,
                "raise" to abort the run on the first failure

        Raises:
            ValueError: If workers < 1 or the policy is unknown
        """
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got: {workers}")
        self.workers = workers
        self.failure_policy = JobFailurePolicy(failure_policy)
        self.phase = Phase.IDLE
        self._lock = threading.Lock()
        self._reset_run_state()

    @abstractmethod
    def emit(self) -> Iterable[BaseJob[K, V]]:
        """Produce the jobs to run. May be lazy.

        Any exception raised here, or while iterating the returned
        sequence, is reported as EmissionError.
        """
        pass

    @abstractmethod
    def output(self, grouped: Grouped) -> Any:
        """Consume the grouped result. The return value ends up in
        PipelineRunResult.output_result."""
        pass

    def execute_phases(self) -> PipelineRunResult:
        """
        Run emit, compute, collect and output, in that order, exactly once.

        Returns:
            PipelineRunResult with counts, failed jobs and the output result

        Raises:
            EmissionError: If jobs could not be enumerated
            JobExecutionError: If a job failed under the "raise" policy
            OutputError: If the output phase failed (carries the grouped result)
            PipelineError: If this scheduler is already running
        """
        if not self._lock.acquire(blocking=False):
            raise PipelineError(f"{type(self).__name__} is already running")

        run_id = uuid4().hex
        run_started_at = datetime.now(timezone.utc)
        try:
            with log_context(run_id=run_id, scheduler=type(self).__name__):
                self._reset_run_state()
                logger.info(
                    "Pipeline run started",
                    extra={
                        "event": "pipeline.run.started",
                        "workers": self.workers,
                        "failure_policy": self.failure_policy.value,
                    },
                )

                try:
                    # Every job finishes before grouping starts
                    pairs = list(self.compute(self._emit_jobs()))
                    grouped = self.collect(pairs)
                    output_result = self._deliver(grouped)
                except PipelineError as e:
                    logger.error(
                        f"Pipeline run failed during {self.phase.value}: {e}",
                        extra={
                            "event": "pipeline.run.failed",
                            "phase": self.phase.value,
                            "error_type": type(e).__name__,
                        },
                    )
                    raise

                self.phase = Phase.DONE
                result = PipelineRunResult(
                    run_id=run_id,
                    run_started_at=run_started_at,
                    run_finished_at=datetime.now(timezone.utc),
                    job_count=self._job_count,
                    pair_count=self._pair_count,
                    key_count=len(grouped),
                    failures=list(self._failures),
                    output_result=output_result,
                )

                logger.info(
                    "Pipeline run completed",
                    extra={
                        "event": "pipeline.run.completed",
                        "duration_ms": int(result.total_duration_seconds * 1000),
                        "job_count": result.job_count,
                        "failed_job_count": result.failed_job_count,
                        "pair_count": result.pair_count,
                        "key_count": result.key_count,
                        "had_errors": result.had_errors,
                    },
                )
                return result
        finally:
            self._lock.release()

    def compute(self, jobs: Iterable[BaseJob[K, V]]) -> Iterator[Pair[K, V]]:
        """
        Execute every job and flatten their pairs into one sequence.

        Job order and the order of pairs within a job are preserved, also
        when jobs run concurrently. A job's pairs are only released once the
        job has finished, so a failed job contributes nothing.
        """
        self.phase = Phase.COMPUTING
        if self.workers == 1:
            outcomes = (self._run_job(job) for job in jobs)
        else:
            outcomes = self._run_jobs_concurrently(jobs)
        return self._flatten(outcomes)

    def collect(self, pairs: Iterable[Pair[K, V]]) -> Grouped:
        """
        Group pairs by key.

        Returns:
            One Pair(key, values) per distinct key, keys in first-seen order
            and values in the order they were produced
        """
        self.phase = Phase.COLLECTING
        groups: Dict[K, List[V]] = {}
        for pair in pairs:
            groups.setdefault(pair.key, []).append(pair.value)

        grouped = [Pair(key, values) for key, values in groups.items()]
        logger.info(
            f"Collected {self._pair_count} pairs into {len(grouped)} groups",
            extra={
                "event": "pipeline.collect.completed",
                "job_count": self._job_count,
                "pair_count": self._pair_count,
                "key_count": len(grouped),
            },
        )
        return grouped

    def _reset_run_state(self) -> None:
        self._job_count = 0
        self._pair_count = 0
        self._failures: List[JobFailure] = []

    def _emit_jobs(self) -> Iterator[BaseJob[K, V]]:
        self.phase = Phase.EMITTING
        try:
            jobs = iter(self.emit())
        except EmissionError:
            raise
        except Exception as e:
            raise EmissionError(f"Failed to emit jobs: {e}") from e

        logger.debug("Emission started", extra={"event": "pipeline.emit.started"})
        return self._guard_emission(jobs)

    def _guard_emission(self, jobs: Iterator[BaseJob[K, V]]) -> Iterator[BaseJob[K, V]]:
        emitted = 0
        while True:
            try:
                job = next(jobs)
            except StopIteration:
                break
            except EmissionError:
                raise
            except Exception as e:
                raise EmissionError(f"Failed to emit jobs after {emitted} job(s): {e}") from e
            emitted += 1
            yield job

        logger.info(
            f"Emitted {emitted} jobs",
            extra={"event": "pipeline.emit.completed", "job_count": emitted},
        )

    def _run_job(self, job: BaseJob[K, V]) -> JobOutcome[K, V]:
        description = job.describe()
        with log_context(job=description):
            try:
                pairs = list(job.execute())
            except JobExecutionError as e:
                error = e
            except Exception as e:
                # Anything else a job raises is still only that job's failure
                error = JobExecutionError(f"Unexpected error in {description}: {e}", job=description)
                error.__cause__ = e
            else:
                logger.debug(
                    f"Job produced {len(pairs)} pairs",
                    extra={"event": "job.completed", "job": description, "pair_count": len(pairs)},
                )
                return JobOutcome(job=job, pairs=pairs)

            if error.job is None:
                error.job = description

            if self.failure_policy is JobFailurePolicy.RAISE:
                logger.error(
                    f"Job failed, aborting run: {error}",
                    extra={"event": "job.failed", "job": description, "error_type": type(error).__name__},
                )
                raise error

            logger.error(
                f"Job failed and was skipped: {error}",
                extra={"event": "job.failed", "job": description, "error_type": type(error).__name__},
                exc_info=error,
            )
            cause = error.__cause__ or error
            return JobOutcome(
                job=job,
                failure=JobFailure(
                    job=description,
                    error_type=type(cause).__name__,
                    error_message=str(error),
                ),
            )

    def _run_jobs_concurrently(self, jobs: Iterable[BaseJob[K, V]]) -> Iterator[JobOutcome[K, V]]:
        executor = ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="job")
        try:
            # Each task gets its own context copy so worker log lines keep run_id
            futures = [executor.submit(copy_context().run, self._run_job, job) for job in jobs]
            for future in futures:
                yield future.result()
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

    def _flatten(self, outcomes: Iterable[JobOutcome[K, V]]) -> Iterator[Pair[K, V]]:
        for outcome in outcomes:
            self._job_count += 1
            if outcome.failure is not None:
                self._failures.append(outcome.failure)
            self._pair_count += len(outcome.pairs)
            yield from outcome.pairs

    def _deliver(self, grouped: Grouped) -> Any:
        self.phase = Phase.OUTPUTTING
        try:
            return self.output(grouped)
        except OutputError as e:
            if not e.grouped:
                e.grouped = grouped
            raise
        except Exception as e:
            raise OutputError(f"Failed to output results: {e}", grouped=grouped) from e


class FunctionScheduler(JobScheduler[K, V]):
    """Scheduler whose emit and output phases are plain callables.

    Example:
        >>> scheduler = FunctionScheduler(emit=lambda: jobs, output=print)
        >>> scheduler.execute_phases()
    """

    def __init__(
        self,
        emit: Callable[[], Iterable[BaseJob[K, V]]],
        output: Callable[[Grouped], Any],
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._emit = emit
        self._output = output

    def emit(self) -> Iterable[BaseJob[K, V]]:
        return self._emit()

    def output(self, grouped: Grouped) -> Any:
        return self._output(grouped)


def run_phases(
    emit: Callable[[], Iterable[BaseJob[K, V]]],
    output: Callable[[Grouped], Any],
    workers: int = 1,
    failure_policy: Union[JobFailurePolicy, str] = JobFailurePolicy.RECORD,
) -> PipelineRunResult:
    """Run the pipeline once with injected emit/output strategies."""
    scheduler = FunctionScheduler(
        emit=emit, output=output, workers=workers, failure_policy=failure_policy
    )
    return scheduler.execute_phases()
