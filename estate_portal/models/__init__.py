"""Data API contracts and HTTP schemas."""

from estate_portal.models.common import ApiModel
from estate_portal.models.property import (
    ListingType,
    Property,
    PropertyConnection,
    PropertyFilter,
    PropertyForm,
    PropertyStatus,
    PropertyType,
    PropertyUpdate,
    PropertyUploadResponse,
    RejectPropertyRequest,
    UploadUrl,
)
from estate_portal.models.report import (
    GenerateReportInput,
    GenerateReportRequest,
    PropertyReport,
    ReportConnection,
    ReportStatus,
    ReportStatusPayload,
    ReportType,
    UserReport,
)
from estate_portal.models.tracker import TrackerStarted, TrackerView
from estate_portal.models.user import UpgradeResult, UserDetails

__all__ = [
    "ApiModel",
    "GenerateReportInput",
    "GenerateReportRequest",
    "ListingType",
    "Property",
    "PropertyConnection",
    "PropertyFilter",
    "PropertyForm",
    "PropertyReport",
    "PropertyStatus",
    "PropertyType",
    "PropertyUpdate",
    "PropertyUploadResponse",
    "RejectPropertyRequest",
    "ReportConnection",
    "ReportStatus",
    "ReportStatusPayload",
    "ReportType",
    "TrackerStarted",
    "TrackerView",
    "UpgradeResult",
    "UploadUrl",
    "UserDetails",
]
