"""
Moderation service.

Admin review of submitted listings: list pending submissions, approve or
reject them.

Dependencies: estate_portal.boundary.graphql
System role: Admin moderation use cases
"""

import logging

from estate_portal.boundary.graphql.client import DataApiClient
from estate_portal.core.exceptions import AuthorizationError, ValidationError
from estate_portal.core.session import Tier, UserSession
from estate_portal.models.property import PropertyConnection

logger = logging.getLogger(__name__)


class ModerationService:
    """Admin-only listing moderation."""

    def __init__(self, data_api: DataApiClient, session: UserSession) -> None:
        if not session.is_admin:
            raise AuthorizationError("Admin access required", required_tier=Tier.ADMIN.value)
        self._api = data_api
        self._session = session

    async def list_pending(
        self,
        limit: int | None = None,
        next_token: str | None = None,
    ) -> PropertyConnection:
        return await self._api.list_pending_properties(limit, next_token)

    async def approve(self, property_id: str) -> dict:
        result = await self._api.approve_property(property_id)
        self._invalidate(property_id)
        logger.info(
            f"{__name__}:approve - Property {property_id} approved",
            extra={"admin": self._session.user.sub},
        )
        return result

    async def reject(self, property_id: str, reason: str) -> dict:
        """
        Reject a submission.

        Raises:
            ValidationError: If no reason is given
        """
        if not reason or not reason.strip():
            raise ValidationError("Rejection reason is required", field="reason")
        result = await self._api.reject_property(property_id, reason.strip())
        self._invalidate(property_id)
        logger.info(
            f"{__name__}:reject - Property {property_id} rejected",
            extra={"admin": self._session.user.sub},
        )
        return result

    def _invalidate(self, property_id: str) -> None:
        cache = self._session.cache
        cache.invalidate("property", property_id)
        cache.invalidate("properties")
        cache.invalidate("myProperties")
