"""
User-facing labels for tracker steps and outcomes.

Dependencies: estate_portal.core.tracker.models
System role: Step/status presentation and plain-language failure messages
"""

from dataclasses import dataclass
from typing import assert_never

from estate_portal.core.tracker.models import ReportStatus, Step, StepKind, StepStatus

TIMED_OUT_WAITING = "Timed out waiting for result. Please try again."


@dataclass(frozen=True)
class StepPresentation:
    title: str
    description: str
    icon: str


def describe_step(kind: StepKind) -> StepPresentation:
    """Title, description and icon name for a step kind."""
    match kind:
        case StepKind.UPLOAD:
            return StepPresentation(
                "Uploading Images", "Uploading property images to secure storage", "upload"
            )
        case StepKind.VALIDATE:
            return StepPresentation(
                "Validating Data", "Checking property information and image formats", "alert-circle"
            )
        case StepKind.PROCESS:
            return StepPresentation(
                "Processing Images", "Optimizing images for different screen sizes", "file-image"
            )
        case StepKind.PERSIST:
            return StepPresentation(
                "Creating Listing", "Saving your property listing to the database", "home"
            )
        case StepKind.INDEX:
            return StepPresentation(
                "Indexing for Search", "Making your listing searchable", "check-circle"
            )
        case StepKind.GENERATE:
            return StepPresentation(
                "Generating Report", "Analyzing the property and writing your AI report", "brain"
            )
        case _:
            assert_never(kind)


def status_tone(status: StepStatus) -> str:
    """Colour token for a step status."""
    match status:
        case StepStatus.COMPLETED:
            return "success"
        case StepStatus.PROCESSING:
            return "active"
        case StepStatus.ERROR:
            return "danger"
        case StepStatus.PENDING:
            return "muted"
        case _:
            assert_never(status)


def present_step(step: Step) -> dict:
    """Serialized step with its title, description, icon and tone."""
    presentation = describe_step(step.kind)
    return {
        **step.to_dict(),
        "title": presentation.title,
        "description": presentation.description,
        "icon": presentation.icon,
        "tone": status_tone(step.status),
    }


def report_failure_message(status: ReportStatus) -> str:
    """
    Plain-language message for a terminal failure status.

    Raises:
        ValueError: If the status is not a failure
    """
    if not status.is_failure:
        raise ValueError(f"{status.value} is not a failure status")
    wording = status.value.lower().replace("_", " ")
    return f"Report generation {wording}. Please try again."
