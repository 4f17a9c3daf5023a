"""
Health check API endpoints.

Routes: GET /health

Dependencies: estate_portal.api.deps
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from estate_portal.api.deps import get_tracker_registry
from estate_portal.application.services import TrackerRegistry


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
    live_trackers: int


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(registry: TrackerRegistry = Depends(get_tracker_registry)) -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy", live_trackers=len(registry))
