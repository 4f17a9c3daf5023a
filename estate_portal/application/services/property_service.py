"""
Property service orchestrator.

Coordinates listing submission (image upload, createProperty, submission
tracker) and the cached property reads and writes for one user session.

Dependencies: estate_portal.boundary.graphql, estate_portal.boundary.aws,
    estate_portal.core.tracker
System role: Property use case orchestration
"""

import logging

from estate_portal.application.services.tracker_registry import TrackerRegistry
from estate_portal.boundary.aws.image_uploader import ImageFile, ImageUploader, validate_image_set
from estate_portal.boundary.aws.s3_client import S3MediaClient
from estate_portal.boundary.graphql.client import DataApiClient
from estate_portal.configs.settings import Settings
from estate_portal.core.exceptions import DataApiError, TriggerError
from estate_portal.core.session import UserSession
from estate_portal.core.tracker.property_tracker import PropertySubmissionTracker
from estate_portal.models.property import (
    Property,
    PropertyConnection,
    PropertyFilter,
    PropertyForm,
    PropertyUpdate,
)

logger = logging.getLogger(__name__)


class PropertyService:
    """Property use cases for one signed-in user."""

    def __init__(
        self,
        data_api: DataApiClient,
        session: UserSession,
        registry: TrackerRegistry,
        uploader: ImageUploader,
        settings: Settings,
        media: S3MediaClient | None = None,
    ) -> None:
        """
        Initialize property service.

        Args:
            data_api: Data API client bound to the user's token
            session: Signed-in user's session (identity and query cache)
            registry: Process-wide tracker registry
            uploader: Image uploader for presigned PUTs
            settings: Application settings
            media: Signs image keys when the API returns no image URLs
        """
        self._api = data_api
        self._session = session
        self._registry = registry
        self._uploader = uploader
        self._settings = settings
        self._media = media

    @property
    def _cache(self):
        return self._session.cache

    async def submit(self, form: PropertyForm, images: list[ImageFile]) -> PropertySubmissionTracker:
        """
        Submit a new listing and start its status tracker.

        Args:
            form: Validated listing form
            images: Listing images (exactly four)

        Returns:
            PropertySubmissionTracker: Started, registered tracker

        Raises:
            ValidationError: If the image set is invalid
            UploadError: If any image upload fails
            TriggerError: If createProperty fails (no tracker is created)
        """
        validate_image_set(images, max_bytes=self._settings.s3.max_image_bytes)
        image_keys = await self._uploader.upload_all(images, self._api.get_upload_url)

        try:
            created = await self._api.create_property(form.to_create_input(image_keys))
        except DataApiError as e:
            logger.error(
                f"{__name__}:submit - createProperty failed: {e}",
                extra={"user": self._session.user.sub, "images": len(image_keys)},
            )
            raise TriggerError(e.message, details=e.details) from e

        logger.info(
            f"{__name__}:submit - Property {created.property_id} queued",
            extra={"queue_message_id": created.queue_message_id},
        )
        tracker = PropertySubmissionTracker(
            property_id=created.property_id,
            execution_handle=created.queue_message_id,
            scheduler=self._registry.scheduler,
            settings=self._settings.tracker,
            cache=self._cache,
            owner_id=self._session.user.sub,
        )
        self._registry.register(tracker)
        tracker.start()
        return tracker

    async def list_properties(
        self,
        filters: PropertyFilter | None = None,
        limit: int | None = None,
        next_token: str | None = None,
    ) -> PropertyConnection:
        filter_key = tuple(sorted(filters.to_api().items())) if filters else ()
        return await self._cache.get_or_fetch(
            ("properties", filter_key, limit, next_token),
            lambda: self._api.list_properties(filters, limit, next_token),
        )

    async def list_my_properties(
        self,
        limit: int | None = None,
        next_token: str | None = None,
    ) -> PropertyConnection:
        user_id = self._session.user.sub
        return await self._cache.get_or_fetch(
            ("myProperties", user_id, limit, next_token),
            lambda: self._api.list_my_properties(user_id, limit, next_token),
        )

    async def get_property(self, property_id: str) -> Property | None:
        """Fetch one listing, signing image keys if the API returned no URLs."""
        listing = await self._cache.get_or_fetch(
            ("property", property_id),
            lambda: self._api.get_property(property_id),
        )
        if listing is not None and not listing.image_urls and listing.images and self._media:
            listing = listing.model_copy(update={"image_urls": self._media.sign_keys(listing.images)})
        return listing

    async def update_property(self, property_id: str, update: PropertyUpdate) -> Property:
        updated = await self._api.update_property(property_id, update)
        self._invalidate(property_id)
        logger.info(f"{__name__}:update_property - Updated {property_id}")
        return updated

    async def delete_property(self, property_id: str) -> str:
        deleted_id = await self._api.delete_property(property_id)
        self._invalidate(property_id)
        logger.info(f"{__name__}:delete_property - Deleted {property_id}")
        return deleted_id

    def _invalidate(self, property_id: str) -> None:
        self._cache.invalidate("property", property_id)
        self._cache.invalidate("myProperties")
        self._cache.invalidate("properties")
