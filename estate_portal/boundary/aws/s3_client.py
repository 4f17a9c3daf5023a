"""
S3 client for property media and report objects.

Signs read URLs for stored listing images and generated reports when the
data API returns only object keys. Uploads are not handled here: upload
URLs come from the data API's getUploadUrl mutation.

Dependencies: boto3
System role: Presigned download URLs for images and reports
"""

import logging
from datetime import datetime, timedelta, timezone

import boto3
from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)


class S3MediaClient:
    """Read-side S3 access for one bucket (presigned GET URLs only)."""

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        expires_in: int = 3600,
        client=None,
    ) -> None:
        """
        Initialize S3 client for a media bucket.

        Args:
            bucket: S3 bucket name
            region: AWS region for the bucket
            expires_in: Default URL expiry in seconds
            client: Optional pre-built boto3 S3 client
        """
        self._bucket = bucket
        self._expires_in = expires_in
        self._s3_client = client or boto3.client("s3", region_name=region)

    @property
    def bucket(self) -> str:
        return self._bucket

    def generate_presigned_download_url(
        self,
        s3_key: str,
        expires_in: int | None = None,
    ) -> tuple[str, datetime]:
        """
        Generate a presigned URL for viewing an object.

        Args:
            s3_key: Object key in the bucket
            expires_in: URL expiry in seconds (defaults to the client setting)

        Returns:
            tuple[str, datetime]: (presigned_url, expires_at)

        Raises:
            ClientError: If presigned URL generation fails
        """
        ttl = expires_in or self._expires_in
        presigned_url = self._s3_client.generate_presigned_url(
            ClientMethod="get_object",
            Params={"Bucket": self._bucket, "Key": s3_key},
            ExpiresIn=ttl,
        )
        return presigned_url, datetime.now(timezone.utc) + timedelta(seconds=ttl)

    def sign_keys(self, s3_keys: list[str]) -> list[str]:
        """Presigned URLs for ``s3_keys``; keys that fail to sign are skipped."""
        urls = []
        for key in s3_keys:
            try:
                url, _ = self.generate_presigned_download_url(key)
            except ClientError as e:
                logger.warning(f"{__name__}:sign_keys - Could not sign {key}: {e}")
                continue
            urls.append(url)
        return urls

    def file_exists(self, s3_key: str) -> bool:
        """
        Check if an object exists.

        Raises:
            ClientError: For errors other than a missing object
        """
        try:
            self._s3_client.head_object(Bucket=self._bucket, Key=s3_key)
            return True
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("404", "NoSuchKey", "NotFound"):
                return False
            raise
