"""
Shared settings foundations.

PortalSettings fixes how every settings class reads its environment:
``.env`` file, case-insensitive keys, unknown keys ignored. Concern
settings subclass it and only set ``env_prefix``. BaseSettings adds the
unprefixed application-wide fields.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class PortalSettings(PydanticBaseSettings):
    """Environment sources common to every estate portal settings class."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class BaseSettings(PortalSettings):
    """Application-wide settings read without a prefix."""

    environment: str = Field(
        default="development",
        description="Deployment stage (development, staging, production)",
    )
    debug: bool = Field(default=False, description="Enable FastAPI debug mode")
    log_level: str = Field(default="INFO", description="Root log level for configure_logging")
