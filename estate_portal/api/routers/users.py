"""
User profile API endpoints.

Routes:
- GET /users/me - Profile of the caller
- POST /users/me/upgrade - Request the paid tier

Dependencies: estate_portal.application.services.user_service
System role: User profile HTTP API
"""

from fastapi import APIRouter, Depends

from estate_portal.api.deps import get_current_session, get_user_service
from estate_portal.application.services import UserService
from estate_portal.core.session import UserSession
from estate_portal.models.user import UpgradeResult

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me")
async def get_me(
    session: UserSession = Depends(get_current_session),
    user_service: UserService = Depends(get_user_service),
) -> dict:
    """Profile details plus the tier resolved from the caller's groups."""
    details = await user_service.get_details()
    return {
        "sub": session.user.sub,
        "email": session.user.email,
        "tier": session.tier.value,
        "isAdmin": session.is_admin,
        "isPaid": session.is_paid,
        "details": details.to_api() if details else None,
    }


@router.post("/me/upgrade", response_model=UpgradeResult)
async def upgrade(user_service: UserService = Depends(get_user_service)) -> UpgradeResult:
    return await user_service.upgrade_to_paid()
