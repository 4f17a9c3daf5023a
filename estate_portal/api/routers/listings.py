"""
Listings view helpers.

Routes: GET /listings/upload-status?url=... - Read and strip the one-shot
upload success flag from a listings URL

Dependencies: estate_portal.core.navigation
System role: Post-submission navigation contract over HTTP
"""

from fastapi import APIRouter, Query

from estate_portal.core.navigation import consume_upload_status

router = APIRouter(prefix="/listings", tags=["listings"])


@router.get("/upload-status")
async def upload_status(url: str = Query(..., description="Current listings URL")) -> dict:
    banner, cleaned_url = consume_upload_status(url)
    return {
        "banner": (
            {"propertyId": banner.property_id, "message": banner.message} if banner else None
        ),
        "url": cleaned_url,
    }
