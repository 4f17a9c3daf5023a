"""
Direct image upload to presigned S3 URLs.

Each image gets its own upload URL from the data API and is PUT straight
to the object store. Uploads for one submission run concurrently in a
TaskGroup; the first failure cancels the remaining uploads and fails the
whole batch.

Dependencies: httpx
System role: Listing image upload
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable

import httpx

from estate_portal.core.exceptions import UploadError, ValidationError
from estate_portal.models.property import UploadUrl

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/webp"})
DEFAULT_MAX_IMAGE_BYTES = 10 * 1024 * 1024
REQUIRED_IMAGE_COUNT = 4

UploadUrlFactory = Callable[[str, str], Awaitable[UploadUrl]]


@dataclass(frozen=True)
class ImageFile:
    """An image received from the client, held in memory until uploaded."""

    file_name: str
    content_type: str
    data: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.data)


def validate_image_file(image: ImageFile, max_bytes: int = DEFAULT_MAX_IMAGE_BYTES) -> None:
    """
    Check type and size of one image.

    Raises:
        ValidationError: If the type is not allowed or the file is too large
    """
    if image.content_type not in ALLOWED_IMAGE_TYPES:
        raise ValidationError(
            "Invalid file type. Please upload JPG, PNG, or WEBP images.",
            field="images",
            details={"file_name": image.file_name, "content_type": image.content_type},
        )
    if image.size > max_bytes:
        max_mb = max_bytes // (1024 * 1024)
        raise ValidationError(
            f"File too large. Maximum size is {max_mb}MB.",
            field="images",
            details={"file_name": image.file_name, "size": image.size},
        )


def validate_image_set(
    images: list[ImageFile],
    max_bytes: int = DEFAULT_MAX_IMAGE_BYTES,
    required: int = REQUIRED_IMAGE_COUNT,
) -> None:
    """Validate the image count and every image in a submission."""
    if len(images) != required:
        raise ValidationError(
            f"Please upload exactly {required} images",
            field="images",
            details={"received": len(images)},
        )
    for image in images:
        validate_image_file(image, max_bytes)


class ImageUploader:
    """PUTs image bytes to presigned URLs."""

    def __init__(self, http_client: httpx.AsyncClient, timeout_seconds: float = 60.0) -> None:
        self._http = http_client
        self._timeout = timeout_seconds

    async def put(self, upload_url: str, image: ImageFile) -> None:
        """
        Upload one image.

        Raises:
            UploadError: On transport failure or a non-2xx response
        """
        try:
            response = await self._http.put(
                upload_url,
                content=image.data,
                headers={"Content-Type": image.content_type},
                timeout=self._timeout,
            )
        except httpx.HTTPError as e:
            raise UploadError("Upload failed", file_name=image.file_name) from e

        if not response.is_success:
            raise UploadError(
                f"Upload failed with status {response.status_code}",
                file_name=image.file_name,
            )

    async def upload_one(self, image: ImageFile, get_upload_url: UploadUrlFactory) -> str:
        """Obtain an upload URL for ``image``, upload it and return its file key."""
        target = await get_upload_url(image.file_name, image.content_type)
        await self.put(target.upload_url, image)
        logger.debug(
            f"{__name__}:upload_one - Uploaded {image.file_name}",
            extra={"file_key": target.file_key, "size": image.size},
        )
        return target.file_key

    async def upload_all(
        self,
        images: list[ImageFile],
        get_upload_url: UploadUrlFactory,
    ) -> list[str]:
        """
        Upload images concurrently.

        Returns:
            list[str]: File keys in the same order as ``images``

        Raises:
            UploadError: If any upload fails (siblings are cancelled)
        """
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [
                    group.create_task(self.upload_one(image, get_upload_url)) for image in images
                ]
        except ExceptionGroup as eg:
            logger.warning(
                f"{__name__}:upload_all - {len(eg.exceptions)} of {len(images)} uploads failed"
            )
            raise eg.exceptions[0]

        keys = [task.result() for task in tasks]
        logger.info(f"{__name__}:upload_all - Uploaded {len(keys)} images")
        return keys
