"""
Status tracker state models.

Immutable value types for the submission job, its ordered steps and the
report pipeline poll state. Transition logic lives in state_machine.py.

Dependencies: estate_portal.models.report
System role: Tracker state representation
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from estate_portal.models.report import ReportStatus


class StepKind(str, Enum):
    """Pipeline stage shown to the user."""

    UPLOAD = "upload"
    VALIDATE = "validate"
    PROCESS = "process"
    PERSIST = "persist"
    INDEX = "index"
    GENERATE = "generate"


class StepStatus(str, Enum):
    """Status of a single step."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class TerminalState(str, Enum):
    """Final outcome of a tracked job."""

    COMPLETED = "completed"
    FAILED = "failed"


PROPERTY_SUBMISSION_STEPS: tuple[StepKind, ...] = (
    StepKind.UPLOAD,
    StepKind.VALIDATE,
    StepKind.PROCESS,
    StepKind.PERSIST,
    StepKind.INDEX,
)

REPORT_GENERATION_STEPS: tuple[StepKind, ...] = (StepKind.GENERATE,)


@dataclass(frozen=True)
class Step:
    """One stage of a submission pipeline."""

    kind: StepKind
    status: StepStatus = StepStatus.PENDING
    progress: int | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.kind.value,
            "status": self.status.value,
            "progress": self.progress,
        }


@dataclass(frozen=True)
class SubmissionJob:
    """
    Client-side view of an asynchronous backend job.

    The backend pipeline is the source of truth; this value only records
    what the tracker has observed or simulated so far.
    """

    property_id: str
    execution_handle: str | None
    steps: tuple[Step, ...]
    overall_progress: int = 0
    terminal_state: TerminalState | None = None
    failure_reason: str | None = None
    result: dict[str, Any] | None = field(default=None, compare=False)

    @classmethod
    def new(
        cls,
        property_id: str,
        execution_handle: str | None,
        kinds: tuple[StepKind, ...],
    ) -> "SubmissionJob":
        """Create a job with every step pending."""
        return cls(
            property_id=property_id,
            execution_handle=execution_handle,
            steps=tuple(Step(kind=kind) for kind in kinds),
        )

    @property
    def is_terminal(self) -> bool:
        return self.terminal_state is not None

    @property
    def active_index(self) -> int | None:
        """Index of the step currently processing, if any."""
        for index, step in enumerate(self.steps):
            if step.status is StepStatus.PROCESSING:
                return index
        return None

    @property
    def completed_count(self) -> int:
        return sum(1 for step in self.steps if step.status is StepStatus.COMPLETED)

    def to_dict(self) -> dict:
        return {
            "propertyId": self.property_id,
            "executionHandle": self.execution_handle,
            "steps": [step.to_dict() for step in self.steps],
            "overallProgress": self.overall_progress,
            "terminalState": self.terminal_state.value if self.terminal_state else None,
            "failureReason": self.failure_reason,
            "result": self.result,
        }


@dataclass(frozen=True)
class ReportPollState:
    """Poll bookkeeping for one report-generation execution."""

    execution_handle: str
    status: ReportStatus = ReportStatus.RUNNING
    poll_count: int = 0
    last_polled_at: float | None = None

    def to_dict(self) -> dict:
        return {
            "executionHandle": self.execution_handle,
            "status": self.status.value,
            "pollCount": self.poll_count,
            "lastPolledAt": self.last_polled_at,
        }
