"""AWS boundary adapters: identity, object storage and image upload."""

from estate_portal.boundary.aws.cognito_client import CognitoIdentityClient
from estate_portal.boundary.aws.image_uploader import ImageFile, ImageUploader
from estate_portal.boundary.aws.s3_client import S3MediaClient

__all__ = ["CognitoIdentityClient", "ImageFile", "ImageUploader", "S3MediaClient"]
