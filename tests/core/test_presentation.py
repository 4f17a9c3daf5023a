"""Tests for step labels and failure wording."""

import pytest

from estate_portal.core.tracker.models import ReportStatus, Step, StepKind, StepStatus
from estate_portal.core.tracker.presentation import (
    describe_step,
    present_step,
    report_failure_message,
    status_tone,
)


def test_every_step_kind_has_a_presentation():
    for kind in StepKind:
        presentation = describe_step(kind)
        assert presentation.title
        assert presentation.icon


def test_submission_step_titles():
    assert describe_step(StepKind.UPLOAD).title == "Uploading Images"
    assert describe_step(StepKind.INDEX).title == "Indexing for Search"


def test_status_tones():
    assert [status_tone(status) for status in StepStatus] == [
        "muted",
        "active",
        "success",
        "danger",
    ]


@pytest.mark.parametrize(
    "status, message",
    [
        (ReportStatus.FAILED, "Report generation failed. Please try again."),
        (ReportStatus.TIMED_OUT, "Report generation timed out. Please try again."),
        (ReportStatus.ABORTED, "Report generation aborted. Please try again."),
    ],
)
def test_report_failure_message(status, message):
    assert report_failure_message(status) == message


@pytest.mark.parametrize("status", [ReportStatus.RUNNING, ReportStatus.SUCCEEDED])
def test_report_failure_message_rejects_non_failures(status):
    with pytest.raises(ValueError):
        report_failure_message(status)


def test_present_step_adds_labels_and_tone():
    step = Step(kind=StepKind.GENERATE, status=StepStatus.ERROR)

    assert present_step(step) == {
        "id": "generate",
        "status": "error",
        "progress": None,
        "title": "Generating Report",
        "description": "Analyzing the property and writing your AI report",
        "icon": "brain",
        "tone": "danger",
    }
