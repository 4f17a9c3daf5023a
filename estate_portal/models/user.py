"""
User models.

Dependencies: pydantic
System role: User profile contracts
"""

from estate_portal.models.common import ApiModel


class UserDetails(ApiModel):
    """getUserDetails result."""

    user_id: str | None = None
    cognito_user_id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    contact_number: str | None = None
    created_at: str | None = None
    tier: str | None = None


class UpgradeResult(ApiModel):
    """upgradeUserToPaid result."""

    success: bool
    message: str | None = None
    execution_arn: str | None = None
