"""
Property API endpoints.

Routes:
- POST /properties - Submit a listing (multipart form + 4 images), start tracker
- GET /properties - Browse listings
- GET /properties/mine - Listings submitted by the caller
- GET /properties/{id} - Listing details
- PATCH /properties/{id} - Update a listing
- DELETE /properties/{id} - Delete a listing

Dependencies: estate_portal.application.services.property_service, estate_portal.models
System role: Property HTTP API
"""

import logging

import pydantic
from fastapi import APIRouter, Depends, File, Form, UploadFile

from estate_portal.api.deps import get_property_service
from estate_portal.api.routers.router_utils import validation_error_from
from estate_portal.application.services import PropertyService
from estate_portal.boundary.aws.image_uploader import ImageFile
from estate_portal.core.exceptions import PropertyNotFoundError
from estate_portal.models.property import (
    ListingType,
    Property,
    PropertyConnection,
    PropertyFilter,
    PropertyForm,
    PropertyStatus,
    PropertyType,
    PropertyUpdate,
)
from estate_portal.models.tracker import TrackerStarted

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/properties", tags=["properties"])


@router.post("", response_model=TrackerStarted, status_code=202)
async def submit_property(
    form: str = Form(..., description="Listing form as JSON"),
    images: list[UploadFile] = File(..., description="Exactly four listing images"),
    property_service: PropertyService = Depends(get_property_service),
) -> TrackerStarted:
    """
    Submit a listing and start its submission tracker.

    Args:
        form: JSON-encoded PropertyForm
        images: Uploaded image files
        property_service: Injected PropertyService

    Returns:
        TrackerStarted: Tracker id to poll via /trackers/{id}

    Raises:
        ValidationError (400): Invalid form or images
        UploadError / TriggerError (502): Upload or createProperty failed
    """
    try:
        listing_form = PropertyForm.model_validate_json(form)
    except pydantic.ValidationError as e:
        raise validation_error_from(e) from e

    files = [
        ImageFile(
            file_name=upload.filename or f"image-{index}",
            content_type=upload.content_type or "application/octet-stream",
            data=await upload.read(),
        )
        for index, upload in enumerate(images)
    ]
    tracker = await property_service.submit(listing_form, files)
    return TrackerStarted(
        tracker_id=tracker.tracker_id,
        property_id=tracker.job.property_id,
        kind=tracker.kind,
        execution_handle=tracker.job.execution_handle,
    )


@router.get("", response_model=PropertyConnection)
async def list_properties(
    city: str | None = None,
    state: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    min_bedrooms: int | None = None,
    min_bathrooms: float | None = None,
    property_type: PropertyType | None = None,
    listing_type: ListingType | None = None,
    status: PropertyStatus | None = None,
    limit: int | None = 20,
    next_token: str | None = None,
    property_service: PropertyService = Depends(get_property_service),
) -> PropertyConnection:
    """Browse listings with optional filters."""
    filters = PropertyFilter(
        city=city,
        state=state,
        min_price=min_price,
        max_price=max_price,
        min_bedrooms=min_bedrooms,
        min_bathrooms=min_bathrooms,
        property_type=property_type,
        listing_type=listing_type,
        status=status,
    )
    return await property_service.list_properties(
        filters if filters.to_api() else None,
        limit=limit,
        next_token=next_token,
    )


@router.get("/mine", response_model=PropertyConnection)
async def list_my_properties(
    limit: int | None = 20,
    next_token: str | None = None,
    property_service: PropertyService = Depends(get_property_service),
) -> PropertyConnection:
    return await property_service.list_my_properties(limit=limit, next_token=next_token)


@router.get("/{property_id}", response_model=Property)
async def get_property(
    property_id: str,
    property_service: PropertyService = Depends(get_property_service),
) -> Property:
    listing = await property_service.get_property(property_id)
    if listing is None:
        raise PropertyNotFoundError(property_id)
    return listing


@router.patch("/{property_id}", response_model=Property)
async def update_property(
    property_id: str,
    update: PropertyUpdate,
    property_service: PropertyService = Depends(get_property_service),
) -> Property:
    return await property_service.update_property(property_id, update)


@router.delete("/{property_id}")
async def delete_property(
    property_id: str,
    property_service: PropertyService = Depends(get_property_service),
) -> dict:
    deleted_id = await property_service.delete_property(property_id)
    return {"id": deleted_id, "message": "Property deleted"}
