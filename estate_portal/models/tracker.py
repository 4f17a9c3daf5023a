"""
Tracker response schemas.

Dependencies: pydantic
System role: Tracker API contracts
"""

from typing import Any

from pydantic import Field

from estate_portal.models.common import ApiModel


class TrackerStarted(ApiModel):
    """Returned when a submission or report tracker is created."""

    tracker_id: str
    property_id: str
    kind: str
    execution_handle: str | None = None


class TrackerView(ApiModel):
    """Snapshot of a tracker as served to clients."""

    tracker_id: str
    kind: str
    cancelled: bool
    retry_available: bool
    property_id: str
    execution_handle: str | None = None
    steps: list[dict[str, Any]] = Field(default_factory=list)
    overall_progress: int = 0
    terminal_state: str | None = None
    failure_reason: str | None = None
    result: dict[str, Any] | None = None
    redirect_url: str | None = None
    poll: dict[str, Any] | None = None
