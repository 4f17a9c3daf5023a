"""
Dependency injection container.

Factory functions for FastAPI dependencies. Long-lived collaborators (HTTP
client, AWS clients, tracker registry, session store) live in a process-wide
ServiceCache; per-request services are built around the caller's session.

Dependencies: estate_portal.configs, estate_portal.application, estate_portal.boundary
System role: DI container for service injection
"""

import logging
from functools import lru_cache

import httpx
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from estate_portal.application.services import (
    AuthService,
    ModerationService,
    PropertyService,
    ReportService,
    TrackerRegistry,
    UserService,
)
from estate_portal.boundary.aws.cognito_client import CognitoIdentityClient
from estate_portal.boundary.aws.image_uploader import ImageUploader
from estate_portal.boundary.aws.s3_client import S3MediaClient
from estate_portal.boundary.graphql.client import DataApiClient
from estate_portal.configs import Settings, get_settings
from estate_portal.core.exceptions import AuthenticationError
from estate_portal.core.session import SessionStore, UserSession
from estate_portal.core.tracker.scheduler import AsyncioScheduler

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


class ServiceCache:
    """Container for process-wide collaborator instances."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._http_client = None
        self._data_api = None
        self._identity = None
        self._image_media = None
        self._report_media = None
        self._uploader = None
        self._registry = None
        self._sessions = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Shared outbound HTTP client (data API and presigned uploads)."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient()
        return self._http_client

    @property
    def data_api(self) -> DataApiClient:
        """Unauthenticated data API client; bind per user with for_user()."""
        if self._data_api is None:
            self._data_api = DataApiClient(self.settings.data_api, self.http_client)
        return self._data_api

    @property
    def identity(self) -> CognitoIdentityClient:
        if self._identity is None:
            self._identity = CognitoIdentityClient(self.settings.cognito)
        return self._identity

    @property
    def image_media(self) -> S3MediaClient:
        if self._image_media is None:
            s3 = self.settings.s3
            self._image_media = S3MediaClient(
                bucket=s3.images_bucket,
                region=s3.region,
                expires_in=s3.presigned_url_expiry,
            )
        return self._image_media

    @property
    def report_media(self) -> S3MediaClient:
        if self._report_media is None:
            s3 = self.settings.s3
            self._report_media = S3MediaClient(
                bucket=s3.reports_bucket,
                region=s3.region,
                expires_in=s3.presigned_url_expiry,
            )
        return self._report_media

    @property
    def uploader(self) -> ImageUploader:
        if self._uploader is None:
            self._uploader = ImageUploader(
                self.http_client,
                timeout_seconds=self.settings.s3.upload_timeout_seconds,
            )
        return self._uploader

    @property
    def registry(self) -> TrackerRegistry:
        if self._registry is None:
            self._registry = TrackerRegistry(
                AsyncioScheduler(),
                retention_seconds=self.settings.tracker.retention_seconds,
            )
        return self._registry

    @property
    def sessions(self) -> SessionStore:
        if self._sessions is None:
            self._sessions = SessionStore()
            self._sessions.on_teardown(self.registry.cancel_for_owner)
        return self._sessions

    async def aclose(self) -> None:
        """Cancel live trackers, end sessions and close the HTTP client."""
        if self._registry is not None:
            self._registry.cancel_all()
        if self._sessions is not None:
            self._sessions.close_all()
        if self._http_client is not None:
            await self._http_client.aclose()
        self.clear()

    def clear(self) -> None:
        """Clear all cached instances."""
        self._http_client = None
        self._data_api = None
        self._identity = None
        self._image_media = None
        self._report_media = None
        self._uploader = None
        self._registry = None
        self._sessions = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_tracker_registry(cache: ServiceCache = Depends(get_service_cache)) -> TrackerRegistry:
    return cache.registry


def get_auth_service(cache: ServiceCache = Depends(get_service_cache)) -> AuthService:
    return AuthService(identity=cache.identity, sessions=cache.sessions)


async def get_current_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserSession:
    """
    Resolve the bearer access token into the caller's session.

    Raises:
        AuthenticationError: If no token is sent or it is not accepted
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Please sign in to continue")
    return await auth_service.authenticate(credentials.credentials)


def get_user_data_api(
    session: UserSession = Depends(get_current_session),
    cache: ServiceCache = Depends(get_service_cache),
) -> DataApiClient:
    """Data API client authorized as the calling user."""
    return cache.data_api.for_user(session.user.access_token)


def get_property_service(
    session: UserSession = Depends(get_current_session),
    data_api: DataApiClient = Depends(get_user_data_api),
    cache: ServiceCache = Depends(get_service_cache),
) -> PropertyService:
    return PropertyService(
        data_api=data_api,
        session=session,
        registry=cache.registry,
        uploader=cache.uploader,
        settings=cache.settings,
        media=cache.image_media,
    )


def get_report_service(
    session: UserSession = Depends(get_current_session),
    data_api: DataApiClient = Depends(get_user_data_api),
    cache: ServiceCache = Depends(get_service_cache),
) -> ReportService:
    return ReportService(
        data_api=data_api,
        session=session,
        registry=cache.registry,
        settings=cache.settings,
        media=cache.report_media,
    )


def get_moderation_service(
    session: UserSession = Depends(get_current_session),
    data_api: DataApiClient = Depends(get_user_data_api),
) -> ModerationService:
    """
    Get moderation service.

    Raises:
        AuthorizationError: If the caller is not an admin
    """
    return ModerationService(data_api=data_api, session=session)


def get_user_service(
    session: UserSession = Depends(get_current_session),
    data_api: DataApiClient = Depends(get_user_data_api),
) -> UserService:
    return UserService(data_api=data_api, session=session)
