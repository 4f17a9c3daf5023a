"""
AWS collaborator configuration.

Settings for the Cognito user pool, the AppSync GraphQL data API and
the property images and reports buckets.

Dependencies: pydantic_settings, estate_portal.configs.base
System role: External collaborator endpoints and credentials
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from estate_portal.configs.base import PortalSettings


class CognitoSettings(PortalSettings):
    """Cognito user pool configuration."""

    model_config = SettingsConfigDict(env_prefix="COGNITO_")

    region: str = Field(default="us-east-1", description="AWS region of the user pool")
    user_pool_id: str = Field(default="", description="Cognito user pool ID")
    client_id: str = Field(default="", description="Cognito app client ID")
    admin_group: str = Field(default="admin", description="Group granting admin tier")
    paid_group: str = Field(default="paid", description="Group granting paid tier")


class DataApiSettings(PortalSettings):
    """AppSync GraphQL endpoint configuration."""

    model_config = SettingsConfigDict(env_prefix="DATA_API_")

    endpoint: str = Field(
        default="http://localhost:20002/graphql",
        description="GraphQL endpoint URL",
    )
    timeout_seconds: float = Field(default=15.0, description="Per-request timeout")
    retry_attempts: int = Field(
        default=3,
        description="Attempts for transient transport errors (not used for status polls)",
    )


class S3Settings(PortalSettings):
    """Settings for the property images and reports buckets."""

    model_config = SettingsConfigDict(env_prefix="S3_")

    images_bucket: str = Field(
        default="estate-portal-dev-images",
        description="S3 bucket holding property images",
    )
    reports_bucket: str = Field(
        default="estate-portal-dev-reports",
        description="S3 bucket holding generated reports",
    )
    region: str = Field(default="us-east-1", description="AWS region for the buckets")
    presigned_url_expiry: int = Field(
        default=3600,
        description="Presigned URL expiry in seconds",
    )
    max_image_bytes: int = Field(default=10 * 1024 * 1024, description="Max image size")
    upload_timeout_seconds: float = Field(default=60.0, description="PUT timeout per image")
