"""
Tracker registry.

Owns every live tracker in the process. Trackers are looked up by id and
owner; finished trackers stay readable for a retention window so clients
can read the final state, then are pruned. Cancelling removes a tracker
immediately.

Dependencies: estate_portal.core.tracker
System role: In-memory tracker ownership
"""

import logging

from estate_portal.core.exceptions import TrackerNotFoundError
from estate_portal.core.tracker.base import StatusTracker
from estate_portal.core.tracker.scheduler import Scheduler

logger = logging.getLogger(__name__)


class TrackerRegistry:
    """In-memory store of trackers keyed by tracker id."""

    def __init__(self, scheduler: Scheduler, retention_seconds: float = 900.0) -> None:
        self._scheduler = scheduler
        self._retention = retention_seconds
        self._trackers: dict[str, StatusTracker] = {}

    def __len__(self) -> int:
        return len(self._trackers)

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    def register(self, tracker: StatusTracker) -> StatusTracker:
        self.prune()
        self._trackers[tracker.tracker_id] = tracker
        logger.debug(
            f"{__name__}:register - {tracker.kind} {tracker.tracker_id}",
            extra={"owner_id": tracker.owner_id, "live": len(self._trackers)},
        )
        return tracker

    def get(self, tracker_id: str, owner_id: str | None = None) -> StatusTracker:
        """
        Look up a tracker.

        Args:
            tracker_id: Tracker id
            owner_id: When given, the tracker must belong to this user

        Raises:
            TrackerNotFoundError: If unknown, pruned or owned by someone else
        """
        tracker = self._trackers.get(tracker_id)
        if tracker is None or (owner_id is not None and tracker.owner_id != owner_id):
            raise TrackerNotFoundError(tracker_id)
        return tracker

    def cancel(self, tracker_id: str, owner_id: str | None = None) -> None:
        """Cancel a tracker and forget it."""
        tracker = self.get(tracker_id, owner_id)
        tracker.cancel()
        del self._trackers[tracker_id]

    def cancel_for_owner(self, owner_id: str) -> int:
        """Cancel every tracker belonging to ``owner_id`` (used on sign-out)."""
        ids = [tid for tid, tracker in self._trackers.items() if tracker.owner_id == owner_id]
        for tracker_id in ids:
            self._trackers.pop(tracker_id).cancel()
        if ids:
            logger.info(f"{__name__}:cancel_for_owner - Cancelled {len(ids)} trackers for {owner_id}")
        return len(ids)

    def cancel_all(self) -> None:
        for tracker in self._trackers.values():
            tracker.cancel()
        count = len(self._trackers)
        self._trackers.clear()
        logger.info(f"{__name__}:cancel_all - Cancelled {count} trackers")

    def prune(self) -> int:
        """Drop trackers that finished more than the retention window ago."""
        now = self._scheduler.now()
        expired = [
            tid
            for tid, tracker in self._trackers.items()
            if tracker.finished_at is not None and now - tracker.finished_at >= self._retention
        ]
        for tracker_id in expired:
            self._trackers.pop(tracker_id).cancel()
        return len(expired)
