"""
Submission and report status tracking.

Exports: trackers, scheduler implementations and state types.
"""

from estate_portal.core.tracker.base import StatusTracker
from estate_portal.core.tracker.models import (
    ReportPollState,
    ReportStatus,
    Step,
    StepKind,
    StepStatus,
    SubmissionJob,
    TerminalState,
)
from estate_portal.core.tracker.property_tracker import PropertySubmissionTracker
from estate_portal.core.tracker.report_tracker import ReportTracker
from estate_portal.core.tracker.scheduler import AsyncioScheduler, ManualScheduler, Scheduler

__all__ = [
    "AsyncioScheduler",
    "ManualScheduler",
    "PropertySubmissionTracker",
    "ReportPollState",
    "ReportStatus",
    "ReportTracker",
    "Scheduler",
    "StatusTracker",
    "Step",
    "StepKind",
    "StepStatus",
    "SubmissionJob",
    "TerminalState",
]
