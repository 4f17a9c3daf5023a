"""
Admin moderation API endpoints.

Routes:
- GET /admin/properties/pending - Submissions awaiting review
- POST /admin/properties/{id}/approve - Approve a submission
- POST /admin/properties/{id}/reject - Reject a submission with a reason

Dependencies: estate_portal.application.services.moderation_service
System role: Moderation HTTP API
"""

from fastapi import APIRouter, Depends

from estate_portal.api.deps import get_moderation_service
from estate_portal.application.services import ModerationService
from estate_portal.models.property import PropertyConnection, RejectPropertyRequest

router = APIRouter(prefix="/admin/properties", tags=["admin"])


@router.get("/pending", response_model=PropertyConnection)
async def list_pending(
    limit: int | None = 20,
    next_token: str | None = None,
    moderation: ModerationService = Depends(get_moderation_service),
) -> PropertyConnection:
    return await moderation.list_pending(limit=limit, next_token=next_token)


@router.post("/{property_id}/approve")
async def approve_property(
    property_id: str,
    moderation: ModerationService = Depends(get_moderation_service),
) -> dict:
    return await moderation.approve(property_id)


@router.post("/{property_id}/reject")
async def reject_property(
    property_id: str,
    request: RejectPropertyRequest,
    moderation: ModerationService = Depends(get_moderation_service),
) -> dict:
    return await moderation.reject(property_id, request.reason)
