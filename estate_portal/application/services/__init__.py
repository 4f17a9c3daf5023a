"""Use case orchestrators."""

from estate_portal.application.services.auth_service import AuthService
from estate_portal.application.services.moderation_service import ModerationService
from estate_portal.application.services.property_service import PropertyService
from estate_portal.application.services.report_service import ReportService
from estate_portal.application.services.tracker_registry import TrackerRegistry
from estate_portal.application.services.user_service import UserService

__all__ = [
    "AuthService",
    "ModerationService",
    "PropertyService",
    "ReportService",
    "TrackerRegistry",
    "UserService",
]
