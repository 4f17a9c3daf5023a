"""
User profile service.

Dependencies: estate_portal.boundary.graphql
System role: Profile lookup and paid-tier upgrade
"""

import logging

from estate_portal.boundary.graphql.client import DataApiClient
from estate_portal.core.session import UserSession
from estate_portal.models.user import UpgradeResult, UserDetails

logger = logging.getLogger(__name__)


class UserService:
    """Profile use cases for the signed-in user."""

    def __init__(self, data_api: DataApiClient, session: UserSession) -> None:
        self._api = data_api
        self._session = session

    async def get_details(self) -> UserDetails | None:
        sub = self._session.user.sub
        return await self._session.cache.get_or_fetch(
            ("userDetails", sub),
            lambda: self._api.get_user_details(sub),
        )

    async def upgrade_to_paid(self) -> UpgradeResult:
        """
        Request the paid tier.

        The upgrade runs asynchronously on the backend; group membership
        (and therefore the tier) changes once the user signs in again.
        """
        sub = self._session.user.sub
        result = await self._api.upgrade_user_to_paid(sub)
        self._session.cache.invalidate("userDetails", sub)
        logger.info(
            f"{__name__}:upgrade_to_paid - Upgrade requested for {sub}",
            extra={"success": result.success, "execution_arn": result.execution_arn},
        )
        return result
