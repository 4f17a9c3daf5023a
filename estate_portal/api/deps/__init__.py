"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    ServiceCache,
    get_auth_service,
    get_current_session,
    get_moderation_service,
    get_property_service,
    get_report_service,
    get_service_cache,
    get_settings_dependency,
    get_tracker_registry,
    get_user_data_api,
    get_user_service,
)

__all__ = [
    "ServiceCache",
    "get_auth_service",
    "get_current_session",
    "get_moderation_service",
    "get_property_service",
    "get_report_service",
    "get_service_cache",
    "get_settings_dependency",
    "get_tracker_registry",
    "get_user_data_api",
    "get_user_service",
]
