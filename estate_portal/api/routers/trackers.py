"""
Tracker API endpoints.

Routes:
- GET /trackers/{id} - Current tracker snapshot
- POST /trackers/{id}/retry - Restart a failed tracker
- DELETE /trackers/{id} - Cancel (stop observing) a tracker

Cancelling only stops local timers and polling; the backend pipeline keeps
running.

Dependencies: estate_portal.application.services.tracker_registry
System role: Tracker HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from estate_portal.api.deps import get_current_session, get_tracker_registry
from estate_portal.application.services import TrackerRegistry
from estate_portal.core.session import UserSession
from estate_portal.models.tracker import TrackerView

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trackers", tags=["trackers"])


@router.get("/{tracker_id}", response_model=TrackerView)
async def get_tracker(
    tracker_id: str,
    session: UserSession = Depends(get_current_session),
    registry: TrackerRegistry = Depends(get_tracker_registry),
) -> TrackerView:
    """
    Read a tracker's state.

    Raises:
        TrackerNotFoundError (404): Unknown, pruned or another user's tracker
    """
    tracker = registry.get(tracker_id, owner_id=session.user.sub)
    return TrackerView.model_validate(tracker.snapshot())


@router.post("/{tracker_id}/retry", response_model=TrackerView)
async def retry_tracker(
    tracker_id: str,
    session: UserSession = Depends(get_current_session),
    registry: TrackerRegistry = Depends(get_tracker_registry),
) -> TrackerView:
    """
    Restart a failed tracker from the first step.

    Raises:
        TrackerStateError (409): Tracker is not in the failed state
    """
    tracker = registry.get(tracker_id, owner_id=session.user.sub)
    await tracker.retry()
    return TrackerView.model_validate(tracker.snapshot())


@router.delete("/{tracker_id}")
async def cancel_tracker(
    tracker_id: str,
    session: UserSession = Depends(get_current_session),
    registry: TrackerRegistry = Depends(get_tracker_registry),
) -> dict:
    registry.cancel(tracker_id, owner_id=session.user.sub)
    return {"trackerId": tracker_id, "cancelled": True}
