"""
Status tracker lifecycle.

Owns one SubmissionJob, applies state_machine transitions to it and
manages the timers that drive those transitions. Subclasses decide what
drives the steps (simulated timers or real polling).

Dependencies: estate_portal.core.tracker.scheduler, estate_portal.core.query_cache
System role: Tracker lifecycle, terminal handling and cancellation
"""

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any, Callable, Hashable

from estate_portal.core.exceptions import TrackerStateError
from estate_portal.core.query_cache import QueryCache
from estate_portal.core.tracker import state_machine as sm
from estate_portal.core.tracker.models import SubmissionJob, TerminalState
from estate_portal.core.tracker.presentation import present_step
from estate_portal.core.tracker.scheduler import Callback, Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class StatusTracker(ABC):
    """
    Drives a SubmissionJob from start to a terminal state.

    Terminal states are absorbing: once Completed or Failed every timer is
    cleared and later transitions are ignored. ``cancel`` is the single
    teardown hook; after it nothing the tracker scheduled will mutate state.
    """

    #: Query families to mark stale when the job completes
    invalidates: tuple[tuple[Hashable, ...], ...] = ()

    def __init__(
        self,
        job: SubmissionJob,
        scheduler: Scheduler,
        cache: QueryCache | None = None,
        on_complete: Callable[["StatusTracker"], Any] | None = None,
        owner_id: str | None = None,
    ) -> None:
        self.tracker_id = str(uuid.uuid4())
        self.owner_id = owner_id
        self._job = job
        self._scheduler = scheduler
        self._cache = cache
        self._on_complete = on_complete
        self._timers: set[TimerHandle] = set()
        self._started = False
        self._cancelled = False
        self._completion_handled = False
        self._retrying = False
        self.finished_at: float | None = None

    @property
    def job(self) -> SubmissionJob:
        return self._job

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def kind(self) -> str:
        return type(self).__name__

    @property
    def retry_available(self) -> bool:
        return (
            not self._cancelled
            and not self._retrying
            and self._job.terminal_state is TerminalState.FAILED
        )

    @property
    def active_timers(self) -> int:
        return sum(1 for handle in self._timers if not handle.cancelled)

    # -- operations -----------------------------------------------------

    def start(self, job: SubmissionJob | None = None) -> None:
        """
        Begin the step sequence from the first step.

        Args:
            job: Optional replacement job (e.g. with a new execution handle)

        Raises:
            TrackerStateError: If cancelled, or already running or completed
        """
        if self._cancelled:
            raise TrackerStateError("Tracker was cancelled; start a new one")
        if self._started and self._job.terminal_state is not TerminalState.FAILED:
            raise TrackerStateError("Tracker already started")

        self._clear_timers()
        self._started = True
        self.finished_at = None
        self._job = sm.start(job or self._job)
        logger.info(
            f"{__name__}:start - {self.kind} {self.tracker_id} started",
            extra={
                "tracker_id": self.tracker_id,
                "property_id": self._job.property_id,
                "execution_handle": self._job.execution_handle,
            },
        )
        self._begin()

    def advance(self) -> None:
        """Complete the processing step and promote the next one."""
        self._apply(sm.advance(self._job))

    def complete(self, result: dict | None = None) -> None:
        """Finish the job successfully."""
        self._apply(sm.complete(self._job, result))

    def fail(self, reason: str) -> None:
        """Finish the job with a user-facing failure reason."""
        self._apply(sm.fail(self._job, reason))

    async def retry(self) -> None:
        """
        Restart a failed job from the beginning.

        Raises:
            TrackerStateError: If the tracker is cancelled, not failed, or
                already retrying
        """
        if self._retrying:
            raise TrackerStateError("Retry already in progress")
        if not self.retry_available:
            raise TrackerStateError("Only failed trackers can be retried")
        self._retrying = True
        try:
            job = await self._prepare_retry()
        finally:
            self._retrying = False
        logger.info(f"{__name__}:retry - {self.kind} {self.tracker_id} restarting")
        self.start(job)

    def cancel(self) -> None:
        """Stop observing the job: clear all timers and ignore in-flight results."""
        if self._cancelled:
            return
        self._cancelled = True
        self._clear_timers()
        logger.info(f"{__name__}:cancel - {self.kind} {self.tracker_id} cancelled")

    def snapshot(self) -> dict:
        """Serializable view of the tracker state."""
        return {
            "trackerId": self.tracker_id,
            "kind": self.kind,
            "cancelled": self._cancelled,
            "retryAvailable": self.retry_available,
            **self._job.to_dict(),
            "steps": [present_step(step) for step in self._job.steps],
        }

    # -- subclass hooks ---------------------------------------------------

    @abstractmethod
    def _begin(self) -> None:
        """Schedule whatever drives the first transition."""
        ...

    async def _prepare_retry(self) -> SubmissionJob | None:
        """Return the job to restart with (None keeps the current one)."""
        return None

    def _on_completed(self) -> None:
        """Extra work after the job completes (runs once)."""

    def _on_failed(self) -> None:
        """Extra work after the job fails."""

    # -- internals ---------------------------------------------------------

    def _schedule(self, delay: float, callback: Callback) -> TimerHandle:
        holder: list[TimerHandle] = []

        def _run():
            if holder:
                self._timers.discard(holder[0])
            if self._cancelled:
                return None
            return callback()

        handle = self._scheduler.call_later(delay, _run)
        holder.append(handle)
        self._timers.add(handle)
        return handle

    def _clear_timers(self) -> None:
        for handle in self._timers:
            handle.cancel()
        self._timers.clear()

    def _apply(self, new_job: SubmissionJob) -> None:
        if self._cancelled or self._job.is_terminal:
            return

        self._job = new_job
        if not new_job.is_terminal:
            return

        self._clear_timers()
        self.finished_at = self._scheduler.now()
        if new_job.terminal_state is TerminalState.COMPLETED:
            logger.info(
                f"{__name__}:_apply - {self.kind} {self.tracker_id} completed",
                extra={"tracker_id": self.tracker_id, "property_id": new_job.property_id},
            )
            self._handle_completion()
        else:
            logger.warning(
                f"{__name__}:_apply - {self.kind} {self.tracker_id} failed: {new_job.failure_reason}",
                extra={"tracker_id": self.tracker_id, "property_id": new_job.property_id},
            )
            self._on_failed()

    def _handle_completion(self) -> None:
        if self._completion_handled:
            return
        self._completion_handled = True

        if self._cache is not None:
            for prefix in self.invalidates:
                self._cache.invalidate(*prefix)

        if self._on_complete is not None:
            try:
                self._on_complete(self)
            except Exception as e:
                logger.error(
                    f"{__name__}:_handle_completion - on_complete raised {type(e).__name__}: {e}"
                )
        self._on_completed()
