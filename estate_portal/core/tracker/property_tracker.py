"""
Property submission tracker.

The data API exposes no step-level status for property processing, so the
five steps advance on fixed local timers with a cosmetic intra-step
progress animation. The progress shown here is perceived feedback only and
says nothing about the real state of the backend queue.

Dependencies: estate_portal.core.tracker.base, estate_portal.core.navigation
System role: Simulated upload/validate/process/persist/index tracker
"""

import logging
from typing import Any, Callable

from estate_portal.configs.tracker import TrackerSettings
from estate_portal.core.navigation import Navigator, build_success_redirect
from estate_portal.core.query_cache import QueryCache
from estate_portal.core.tracker import state_machine as sm
from estate_portal.core.tracker.base import StatusTracker
from estate_portal.core.tracker.models import PROPERTY_SUBMISSION_STEPS, SubmissionJob
from estate_portal.core.tracker.scheduler import Scheduler

logger = logging.getLogger(__name__)


class PropertySubmissionTracker(StatusTracker):
    """Timer-driven tracker shown after a property is submitted."""

    invalidates = (("myProperties",), ("properties",))

    def __init__(
        self,
        property_id: str,
        execution_handle: str | None,
        scheduler: Scheduler,
        settings: TrackerSettings | None = None,
        navigator: Navigator | None = None,
        cache: QueryCache | None = None,
        on_complete: Callable[[StatusTracker], Any] | None = None,
        owner_id: str | None = None,
    ) -> None:
        settings = settings or TrackerSettings()
        if len(settings.step_durations_seconds) != len(PROPERTY_SUBMISSION_STEPS):
            raise ValueError(
                f"Expected {len(PROPERTY_SUBMISSION_STEPS)} step durations, "
                f"got {len(settings.step_durations_seconds)}"
            )
        job = SubmissionJob.new(property_id, execution_handle, PROPERTY_SUBMISSION_STEPS)
        super().__init__(job, scheduler, cache=cache, on_complete=on_complete, owner_id=owner_id)
        self._settings = settings
        self._navigator = navigator
        self.redirect_url: str | None = None

    def _begin(self) -> None:
        self.redirect_url = None
        self._schedule_step_boundary()
        self._schedule_tick()

    def _schedule_step_boundary(self) -> None:
        index = self.job.active_index
        if index is None:
            return
        self._schedule(self._settings.step_durations_seconds[index], self._step_elapsed)

    def _step_elapsed(self) -> None:
        self.advance()
        if not self.job.is_terminal:
            self._schedule_step_boundary()

    def _schedule_tick(self) -> None:
        self._schedule(self._settings.animation_tick_seconds, self._animate)

    def _animate(self) -> None:
        self._apply(
            sm.animate(
                self.job,
                increment=self._settings.animation_increment,
                cap=self._settings.animation_cap,
            )
        )
        if not self.job.is_terminal:
            self._schedule_tick()

    def _on_completed(self) -> None:
        url = build_success_redirect(self._settings.listings_path, self.job.property_id)
        self._schedule(self._settings.redirect_delay_seconds, lambda: self._redirect(url))

    def _redirect(self, url: str) -> None:
        self.redirect_url = url
        logger.info(
            f"{__name__}:_redirect - Redirecting to {url}",
            extra={"tracker_id": self.tracker_id, "property_id": self.job.property_id},
        )
        if self._navigator is not None:
            self._navigator.redirect(url)

    def snapshot(self) -> dict:
        data = super().snapshot()
        data["redirectUrl"] = self.redirect_url
        return data
