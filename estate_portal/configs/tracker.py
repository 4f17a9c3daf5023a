"""
Status tracker configuration settings.

Timing parameters for the submission and report status trackers:
poll interval, polling bound, simulated step durations and redirect delay.

Dependencies: pydantic, pydantic_settings, estate_portal.configs.base
System role: Tracker timing configuration
"""

from pydantic import Field, field_validator
from pydantic_settings import SettingsConfigDict

from estate_portal.configs.base import PortalSettings


class TrackerSettings(PortalSettings):
    """Timing configuration for status trackers."""

    model_config = SettingsConfigDict(env_prefix="TRACKER_")

    poll_interval_seconds: float = Field(
        default=3.0,
        description="Fixed interval between report status polls",
    )
    max_wait_seconds: float | None = Field(
        default=600.0,
        description="Give up polling after this many seconds (None polls forever)",
    )
    step_durations_seconds: list[float] = Field(
        default=[2.0, 3.0, 4.0, 2.0, 1.0],
        description="Simulated duration of each property submission step",
    )
    animation_tick_seconds: float = Field(
        default=0.2,
        description="Interval between cosmetic intra-step progress increments",
    )
    animation_increment: int = Field(default=10, description="Cosmetic progress step (%)")
    animation_cap: int = Field(
        default=90,
        description="Cosmetic progress ceiling until the step really completes",
    )
    redirect_delay_seconds: float = Field(
        default=2.0,
        description="Delay before redirecting after completion (min 1s)",
    )
    listings_path: str = Field(default="/listings", description="Redirect target on success")
    retention_seconds: float = Field(
        default=900.0,
        description="How long finished trackers stay readable before they are pruned",
    )

    @field_validator("redirect_delay_seconds")
    @classmethod
    def _redirect_delay_visible(cls, value: float) -> float:
        if value < 1.0:
            raise ValueError("redirect_delay_seconds must be at least 1 second")
        return value

    @field_validator("poll_interval_seconds", "animation_tick_seconds")
    @classmethod
    def _positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("interval must be positive")
        return value
