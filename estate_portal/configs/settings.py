"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from estate_portal.configs.aws import CognitoSettings, DataApiSettings, S3Settings
from estate_portal.configs.base import BaseSettings
from estate_portal.configs.tracker import TrackerSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    tracker: TrackerSettings = TrackerSettings()
    cognito: CognitoSettings = CognitoSettings()
    data_api: DataApiSettings = DataApiSettings()
    s3: S3Settings = S3Settings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from estate_portal.configs import get_settings
        settings = get_settings()
    """
    return Settings()
