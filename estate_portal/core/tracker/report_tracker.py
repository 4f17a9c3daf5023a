"""
Report generation tracker.

Polls the report pipeline at a fixed interval until it reports a terminal
status. Polls are strictly serial: the next one is scheduled only after the
previous response has been handled. A poll that raises is logged and the
schedule continues; only a terminal status payload (or the wait bound)
fails the tracker.

Dependencies: estate_portal.core.tracker.base, estate_portal.models.report
System role: Report pipeline polling tracker
"""

import logging
from typing import Any, Awaitable, Callable

from estate_portal.configs.tracker import TrackerSettings
from estate_portal.core.query_cache import QueryCache
from estate_portal.core.tracker import state_machine as sm
from estate_portal.core.tracker.base import StatusTracker
from estate_portal.core.tracker.models import (
    REPORT_GENERATION_STEPS,
    ReportPollState,
    ReportStatus,
    SubmissionJob,
)
from estate_portal.core.tracker.presentation import TIMED_OUT_WAITING, report_failure_message
from estate_portal.core.tracker.scheduler import Scheduler
from estate_portal.models.report import ReportStatusPayload

logger = logging.getLogger(__name__)

StatusFetcher = Callable[[str], Awaitable[ReportStatusPayload]]
Retrigger = Callable[[], Awaitable[str]]


class ReportTracker(StatusTracker):
    """Polling tracker for one report-generation execution."""

    invalidates = (("myReports",),)

    def __init__(
        self,
        property_id: str,
        execution_handle: str | None,
        fetch_status: StatusFetcher,
        scheduler: Scheduler,
        settings: TrackerSettings | None = None,
        retrigger: Retrigger | None = None,
        cache: QueryCache | None = None,
        on_complete: Callable[[StatusTracker], Any] | None = None,
        owner_id: str | None = None,
    ) -> None:
        job = SubmissionJob.new(property_id, execution_handle, REPORT_GENERATION_STEPS)
        super().__init__(job, scheduler, cache=cache, on_complete=on_complete, owner_id=owner_id)
        self._fetch_status = fetch_status
        self._settings = settings or TrackerSettings()
        self._retrigger = retrigger
        self._poll_state = ReportPollState(execution_handle=execution_handle or "")
        self._started_at: float | None = None

    @property
    def poll_state(self) -> ReportPollState:
        return self._poll_state

    @property
    def retry_available(self) -> bool:
        return super().retry_available and self._retrigger is not None

    def finish_with(self, result: dict) -> None:
        """Complete immediately with a report returned synchronously by the trigger."""
        self.complete(result)

    def _begin(self) -> None:
        self._poll_state = ReportPollState(execution_handle=self.job.execution_handle or "")
        self._started_at = self._scheduler.now()
        if self.job.execution_handle:
            self._schedule_poll()

    def _schedule_poll(self) -> None:
        self._schedule(self._settings.poll_interval_seconds, self._poll)

    async def _poll(self) -> None:
        if self.cancelled or self.job.is_terminal:
            return

        handle = self.job.execution_handle
        try:
            payload = await self._fetch_status(handle)
        except Exception as e:
            # Transient: keep the fixed schedule
            logger.warning(
                f"{__name__}:_poll - Status poll failed ({type(e).__name__}: {e}); retrying next interval",
                extra={"tracker_id": self.tracker_id, "execution_handle": handle},
            )
            payload = None

        if self.cancelled or self.job.is_terminal:
            return

        if payload is not None:
            self._poll_state = sm.record_poll(self._poll_state, payload.status, self._scheduler.now())
            logger.debug(
                f"{__name__}:_poll - poll #{self._poll_state.poll_count} status={payload.status.value}",
                extra={"tracker_id": self.tracker_id, "execution_handle": handle},
            )
            if payload.status is ReportStatus.SUCCEEDED:
                self.complete(
                    {
                        "reportId": payload.report_id,
                        "signedUrl": payload.signed_url,
                        "s3Key": payload.s3_key,
                    }
                )
                return
            if payload.status.is_failure:
                if payload.error:
                    logger.error(
                        f"{__name__}:_poll - pipeline error: {payload.error}",
                        extra={"tracker_id": self.tracker_id, "execution_handle": handle},
                    )
                self.fail(report_failure_message(payload.status))
                return

        if self._wait_exceeded():
            self.fail(TIMED_OUT_WAITING)
            return
        self._schedule_poll()

    def _wait_exceeded(self) -> bool:
        limit = self._settings.max_wait_seconds
        if limit is None or self._started_at is None:
            return False
        return self._scheduler.now() - self._started_at >= limit

    async def _prepare_retry(self) -> SubmissionJob:
        new_handle = await self._retrigger()
        return SubmissionJob.new(self.job.property_id, new_handle, REPORT_GENERATION_STEPS)

    def snapshot(self) -> dict:
        data = super().snapshot()
        data["poll"] = self._poll_state.to_dict()
        return data
