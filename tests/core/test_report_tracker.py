"""
Tests for the report generation polling tracker.

Polls run every 3 seconds on a ManualScheduler; the status fetcher is an
AsyncMock returning ReportStatusPayload values.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, call

import pytest

from estate_portal.configs.tracker import TrackerSettings
from estate_portal.core.exceptions import TrackerStateError
from estate_portal.core.query_cache import QueryCache
from estate_portal.core.tracker.models import StepStatus, TerminalState
from estate_portal.core.tracker.presentation import TIMED_OUT_WAITING
from estate_portal.core.tracker.report_tracker import ReportTracker
from estate_portal.models.report import ReportStatus, ReportStatusPayload

RUNNING = ReportStatusPayload(status=ReportStatus.RUNNING)
SUCCEEDED = ReportStatusPayload(
    status=ReportStatus.SUCCEEDED,
    report_id="report-1",
    signed_url="https://reports.example.com/report-1.pdf?sig=abc",
    s3_key="reports/user-1/report-1.pdf",
)


@pytest.fixture
def fetch_status():
    return AsyncMock()


@pytest.fixture
def cache():
    return MagicMock(spec=QueryCache)


@pytest.fixture
def make_tracker(scheduler, tracker_settings, fetch_status, cache):
    def _make(execution_handle="arn-1", retrigger=None, settings=None):
        return ReportTracker(
            property_id="prop-1",
            execution_handle=execution_handle,
            fetch_status=fetch_status,
            scheduler=scheduler,
            settings=settings or tracker_settings,
            retrigger=retrigger,
            cache=cache,
            owner_id="paid-1",
        )

    return _make


@pytest.mark.asyncio
async def test_succeeds_on_third_poll_and_stops(scheduler, make_tracker, fetch_status, cache):
    fetch_status.side_effect = [RUNNING, RUNNING, SUCCEEDED, RUNNING]
    tracker = make_tracker()
    tracker.start()

    await scheduler.advance(2)
    fetch_status.assert_not_called()

    await scheduler.advance(7)
    assert fetch_status.await_count == 3
    assert tracker.job.terminal_state is TerminalState.COMPLETED
    assert tracker.job.result == {
        "reportId": "report-1",
        "signedUrl": SUCCEEDED.signed_url,
        "s3Key": SUCCEEDED.s3_key,
    }
    assert tracker.poll_state.poll_count == 3
    assert tracker.poll_state.status is ReportStatus.SUCCEEDED
    cache.invalidate.assert_called_once_with("myReports")

    await scheduler.advance(60)
    assert fetch_status.await_count == 3
    assert tracker.active_timers == 0


@pytest.mark.asyncio
async def test_polls_use_execution_handle(scheduler, make_tracker, fetch_status):
    fetch_status.return_value = RUNNING
    tracker = make_tracker(execution_handle="arn-xyz")
    tracker.start()

    await scheduler.advance(6)

    assert fetch_status.await_args_list == [call("arn-xyz"), call("arn-xyz")]


@pytest.mark.asyncio
async def test_running_polls_leave_job_unchanged(scheduler, make_tracker, fetch_status):
    fetch_status.return_value = RUNNING
    tracker = make_tracker()
    tracker.start()
    before = tracker.job

    await scheduler.advance(30)

    assert tracker.job == before
    assert tracker.job.steps[0].status is StepStatus.PROCESSING
    assert tracker.poll_state.poll_count == 10


@pytest.mark.asyncio
async def test_failed_status_fails_with_plain_message(scheduler, make_tracker, fetch_status):
    fetch_status.side_effect = [
        RUNNING,
        ReportStatusPayload(status=ReportStatus.FAILED, error="States.TaskFailed: model error"),
    ]
    tracker = make_tracker(retrigger=AsyncMock(return_value="arn-2"))
    tracker.start()

    await scheduler.advance(6)

    assert tracker.job.terminal_state is TerminalState.FAILED
    assert tracker.job.failure_reason == "Report generation failed. Please try again."
    assert tracker.job.steps[0].status is StepStatus.ERROR
    assert tracker.retry_available

    await scheduler.advance(30)
    assert fetch_status.await_count == 2


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status, message",
    [
        (ReportStatus.TIMED_OUT, "Report generation timed out. Please try again."),
        (ReportStatus.ABORTED, "Report generation aborted. Please try again."),
    ],
)
async def test_other_failure_statuses(scheduler, make_tracker, fetch_status, status, message):
    fetch_status.return_value = ReportStatusPayload(status=status)
    tracker = make_tracker()
    tracker.start()

    await scheduler.advance(3)

    assert tracker.job.failure_reason == message


@pytest.mark.asyncio
async def test_poll_error_is_transient(scheduler, make_tracker, fetch_status):
    fetch_status.side_effect = [RuntimeError("network down"), RUNNING, SUCCEEDED]
    tracker = make_tracker()
    tracker.start()

    await scheduler.advance(3)
    assert tracker.job.terminal_state is None
    assert tracker.poll_state.poll_count == 0

    await scheduler.advance(6)
    assert tracker.job.terminal_state is TerminalState.COMPLETED
    assert tracker.poll_state.poll_count == 2


@pytest.mark.asyncio
async def test_cancel_while_poll_in_flight_ignores_response(scheduler, make_tracker, fetch_status, cache):
    holder = {}

    async def cancel_then_succeed(handle):
        holder["tracker"].cancel()
        return SUCCEEDED

    fetch_status.side_effect = cancel_then_succeed
    tracker = make_tracker()
    holder["tracker"] = tracker
    tracker.start()

    await scheduler.advance(30)

    assert fetch_status.await_count == 1
    assert tracker.cancelled
    assert tracker.job.terminal_state is None
    assert tracker.poll_state.poll_count == 0
    assert scheduler.pending == 0
    cache.invalidate.assert_not_called()


@pytest.mark.asyncio
async def test_cancel_stops_polling(scheduler, make_tracker, fetch_status):
    fetch_status.return_value = RUNNING
    tracker = make_tracker()
    tracker.start()
    await scheduler.advance(6)

    tracker.cancel()
    await scheduler.advance(60)

    assert fetch_status.await_count == 2
    assert not tracker.retry_available


@pytest.mark.asyncio
async def test_gives_up_after_max_wait(scheduler, make_tracker, fetch_status):
    fetch_status.return_value = RUNNING
    tracker = make_tracker(settings=TrackerSettings(max_wait_seconds=9))
    tracker.start()

    await scheduler.advance(6)
    assert tracker.job.terminal_state is None

    await scheduler.advance(3)
    assert tracker.job.terminal_state is TerminalState.FAILED
    assert tracker.job.failure_reason == TIMED_OUT_WAITING

    await scheduler.advance(30)
    assert fetch_status.await_count == 3


@pytest.mark.asyncio
async def test_unbounded_wait_keeps_polling(scheduler, make_tracker, fetch_status):
    fetch_status.return_value = RUNNING
    tracker = make_tracker(settings=TrackerSettings(max_wait_seconds=None))
    tracker.start()

    await scheduler.advance(1200)

    assert tracker.job.terminal_state is None
    assert fetch_status.await_count == 400


@pytest.mark.asyncio
async def test_retry_uses_new_execution_handle(scheduler, make_tracker, fetch_status):
    fetch_status.side_effect = [
        ReportStatusPayload(status=ReportStatus.FAILED),
        SUCCEEDED,
    ]
    retrigger = AsyncMock(return_value="arn-2")
    tracker = make_tracker(retrigger=retrigger)
    tracker.start()
    await scheduler.advance(3)
    assert tracker.job.terminal_state is TerminalState.FAILED

    await tracker.retry()

    retrigger.assert_awaited_once()
    assert tracker.job.execution_handle == "arn-2"
    assert tracker.job.terminal_state is None
    assert tracker.poll_state.poll_count == 0
    assert tracker.poll_state.execution_handle == "arn-2"

    await scheduler.advance(3)
    assert fetch_status.await_args == call("arn-2")
    assert tracker.job.terminal_state is TerminalState.COMPLETED


@pytest.mark.asyncio
async def test_concurrent_retry_triggers_backend_once(scheduler, make_tracker, fetch_status):
    fetch_status.return_value = ReportStatusPayload(status=ReportStatus.FAILED)
    gate = asyncio.Event()

    async def _retrigger():
        await gate.wait()
        return "arn-2"

    retrigger = AsyncMock(side_effect=_retrigger)
    tracker = make_tracker(retrigger=retrigger)
    tracker.start()
    await scheduler.advance(3)

    first = asyncio.create_task(tracker.retry())
    await asyncio.sleep(0)
    assert not tracker.retry_available

    with pytest.raises(TrackerStateError):
        await tracker.retry()

    gate.set()
    await first

    retrigger.assert_awaited_once()
    assert tracker.job.execution_handle == "arn-2"
    assert tracker.job.terminal_state is None


@pytest.mark.asyncio
async def test_failed_retrigger_allows_another_retry(scheduler, make_tracker, fetch_status):
    fetch_status.return_value = ReportStatusPayload(status=ReportStatus.FAILED)
    retrigger = AsyncMock(side_effect=[RuntimeError("boom"), "arn-2"])
    tracker = make_tracker(retrigger=retrigger)
    tracker.start()
    await scheduler.advance(3)

    with pytest.raises(RuntimeError):
        await tracker.retry()
    assert tracker.retry_available

    await tracker.retry()

    assert tracker.job.execution_handle == "arn-2"


@pytest.mark.asyncio
async def test_retry_unavailable_without_retrigger(scheduler, make_tracker, fetch_status):
    fetch_status.return_value = ReportStatusPayload(status=ReportStatus.FAILED)
    tracker = make_tracker()
    tracker.start()
    await scheduler.advance(3)

    assert not tracker.retry_available
    with pytest.raises(TrackerStateError):
        await tracker.retry()


def test_finish_with_completes_synchronous_report(scheduler, make_tracker, fetch_status, cache):
    tracker = make_tracker(execution_handle=None)
    tracker.start()
    assert scheduler.pending == 0

    tracker.finish_with({"reportId": "report-9", "signedUrl": None, "s3Key": None})

    assert tracker.job.terminal_state is TerminalState.COMPLETED
    assert tracker.job.result["reportId"] == "report-9"
    fetch_status.assert_not_called()
    cache.invalidate.assert_called_once_with("myReports")


@pytest.mark.asyncio
async def test_late_failure_after_success_is_ignored(scheduler, make_tracker, fetch_status):
    fetch_status.return_value = SUCCEEDED
    tracker = make_tracker()
    tracker.start()
    await scheduler.advance(3)

    tracker.fail("too late")

    assert tracker.job.terminal_state is TerminalState.COMPLETED
    assert tracker.job.failure_reason is None


def test_snapshot_includes_poll_state(make_tracker):
    tracker = make_tracker()
    tracker.start()

    snapshot = tracker.snapshot()

    assert snapshot["kind"] == "ReportTracker"
    assert snapshot["poll"] == {
        "executionHandle": "arn-1",
        "status": "RUNNING",
        "pollCount": 0,
        "lastPolledAt": None,
    }
