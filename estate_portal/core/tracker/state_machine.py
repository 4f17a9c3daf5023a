"""
Pure transition functions for tracked jobs.

Every function takes the current value and returns the next one; none of
them schedule timers or perform I/O. Terminal jobs and terminal poll states
are returned unchanged by every transition.

Dependencies: estate_portal.core.tracker.models
System role: Tracker state machine
"""

from dataclasses import replace

from estate_portal.core.exceptions import TrackerStateError
from estate_portal.core.tracker.models import (
    ReportPollState,
    ReportStatus,
    Step,
    StepStatus,
    SubmissionJob,
    TerminalState,
)


def _progress_for(completed: int, total: int) -> int:
    return (completed * 100) // total


def start(job: SubmissionJob) -> SubmissionJob:
    """
    Reset the job and promote the first step to processing.

    Always restarts from the first step; used for both the initial start
    and a retry after failure.

    Raises:
        TrackerStateError: If the job has no steps
    """
    if not job.steps:
        raise TrackerStateError("Cannot start a job without steps")

    steps = tuple(Step(kind=step.kind) for step in job.steps)
    steps = (replace(steps[0], status=StepStatus.PROCESSING, progress=0),) + steps[1:]
    return replace(
        job,
        steps=steps,
        overall_progress=0,
        terminal_state=None,
        failure_reason=None,
        result=None,
    )


def advance(job: SubmissionJob) -> SubmissionJob:
    """
    Complete the processing step and promote the next pending one.

    Completing the last step completes the job.

    Raises:
        TrackerStateError: If no step is processing on a non-terminal job
    """
    if job.is_terminal:
        return job

    index = job.active_index
    if index is None:
        raise TrackerStateError("No step is processing; call start() first")

    if index == len(job.steps) - 1:
        return complete(job)

    steps = list(job.steps)
    steps[index] = replace(steps[index], status=StepStatus.COMPLETED, progress=100)
    steps[index + 1] = replace(steps[index + 1], status=StepStatus.PROCESSING, progress=0)
    completed = index + 1
    return replace(
        job,
        steps=tuple(steps),
        overall_progress=max(job.overall_progress, _progress_for(completed, len(steps))),
    )


def complete(job: SubmissionJob, result: dict | None = None) -> SubmissionJob:
    """Mark every step completed and the job Completed."""
    if job.is_terminal:
        return job

    steps = tuple(
        replace(step, status=StepStatus.COMPLETED, progress=100) for step in job.steps
    )
    return replace(
        job,
        steps=steps,
        overall_progress=100,
        terminal_state=TerminalState.COMPLETED,
        result=result if result is not None else job.result,
    )


def fail(job: SubmissionJob, reason: str) -> SubmissionJob:
    """Mark the processing step as errored and the job Failed."""
    if job.is_terminal:
        return job

    steps = list(job.steps)
    index = job.active_index
    if index is not None:
        steps[index] = replace(steps[index], status=StepStatus.ERROR)
    return replace(
        job,
        steps=tuple(steps),
        terminal_state=TerminalState.FAILED,
        failure_reason=reason,
    )


def animate(job: SubmissionJob, increment: int = 10, cap: int = 90) -> SubmissionJob:
    """
    Bump the cosmetic progress of the processing step.

    Progress stops at ``cap`` until the step really completes. Overall
    progress is not affected.
    """
    if job.is_terminal:
        return job

    index = job.active_index
    if index is None:
        return job

    current = job.steps[index].progress or 0
    if current >= cap:
        return job

    steps = list(job.steps)
    steps[index] = replace(steps[index], progress=min(current + increment, cap))
    return replace(job, steps=tuple(steps))


def record_poll(
    state: ReportPollState,
    status: ReportStatus,
    polled_at: float,
) -> ReportPollState:
    """Record one poll response; terminal poll states are absorbing."""
    if state.status.is_terminal:
        return state
    return replace(
        state,
        status=status,
        poll_count=state.poll_count + 1,
        last_polled_at=polled_at,
    )
