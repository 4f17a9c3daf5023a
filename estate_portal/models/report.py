"""
Report domain models and schemas.

Contracts for generatePropertyReport, getReportStatus and listMyReports,
plus the defaults applied when a property is missing fields the report
pipeline requires.

Dependencies: pydantic
System role: Report API contracts
"""

from enum import Enum
from typing import Any

from pydantic import Field

from estate_portal.models.common import ApiModel
from estate_portal.models.property import (
    ListingType,
    Property,
    PropertyType,
    map_listing_type,
    map_property_type,
)


class ReportStatus(str, Enum):
    """Execution status reported by the report pipeline."""

    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    TIMED_OUT = "TIMED_OUT"
    ABORTED = "ABORTED"

    @property
    def is_terminal(self) -> bool:
        return self is not ReportStatus.RUNNING

    @property
    def is_failure(self) -> bool:
        return self in (ReportStatus.FAILED, ReportStatus.TIMED_OUT, ReportStatus.ABORTED)


class ReportType(str, Enum):
    MARKET_ANALYSIS = "MARKET_ANALYSIS"
    INVESTMENT_ANALYSIS = "INVESTMENT_ANALYSIS"
    COMPARATIVE_MARKET_ANALYSIS = "COMPARATIVE_MARKET_ANALYSIS"
    LISTING_OPTIMIZATION = "LISTING_OPTIMIZATION"
    CUSTOM = "CUSTOM"


DEFAULT_TITLE = "Untitled Property"
DEFAULT_DESCRIPTION = "No description available"
DEFAULT_ADDRESS = "Address not specified"
DEFAULT_CITY = "Unknown City"
DEFAULT_STATE = "Unknown State"
DEFAULT_ZIP = "00000"


class GenerateReportInput(ApiModel):
    """
    Denormalized property snapshot sent to generatePropertyReport.

    Fields the listing lacks are filled with fixed placeholders so the
    report pipeline always receives a complete record.
    """

    title: str = DEFAULT_TITLE
    description: str = DEFAULT_DESCRIPTION
    price: float = 0
    address: str = DEFAULT_ADDRESS
    city: str = DEFAULT_CITY
    state: str = DEFAULT_STATE
    zip_code: str = DEFAULT_ZIP
    bedrooms: int = 0
    bathrooms: float = 0
    square_feet: float = 0
    property_type: PropertyType = PropertyType.OTHER
    listing_type: ListingType = ListingType.FOR_SALE
    year_built: int | None = None
    lot_size: float | None = None
    amenities: list[str] = Field(default_factory=list)
    report_type: ReportType = ReportType.MARKET_ANALYSIS
    additional_context: str | None = None
    include_detailed_amenities: bool = True
    cognito_user_id: str | None = None

    @classmethod
    def from_listing(
        cls,
        listing: Property | dict[str, Any],
        report_type: ReportType = ReportType.MARKET_ANALYSIS,
        additional_context: str | None = None,
        cognito_user_id: str | None = None,
    ) -> "GenerateReportInput":
        """Build report input from a listing, filling blanks with defaults."""
        data = listing.to_api() if isinstance(listing, Property) else dict(listing)
        return cls(
            title=data.get("title") or DEFAULT_TITLE,
            description=data.get("description") or DEFAULT_DESCRIPTION,
            price=data.get("price") or 0,
            address=data.get("address") or DEFAULT_ADDRESS,
            city=data.get("city") or DEFAULT_CITY,
            state=data.get("state") or DEFAULT_STATE,
            zip_code=data.get("zipCode") or DEFAULT_ZIP,
            bedrooms=data.get("bedrooms") or 0,
            bathrooms=data.get("bathrooms") or 0,
            square_feet=data.get("squareFeet") or 0,
            property_type=map_property_type(data.get("propertyType")),
            listing_type=map_listing_type(data.get("listingType")),
            year_built=data.get("yearBuilt") or None,
            lot_size=data.get("lotSize") or None,
            amenities=data.get("amenities") or data.get("features") or [],
            report_type=report_type,
            additional_context=additional_context,
            cognito_user_id=cognito_user_id,
        )


class ReportMetadata(ApiModel):
    model_used: str | None = None
    generation_time_ms: int | None = None
    word_count: int | None = None


class PropertyReport(ApiModel):
    """generatePropertyReport result."""

    report_id: str | None = None
    report_type: ReportType | None = None
    generated_at: str | None = None
    content: str | None = None
    property_title: str | None = None
    executive_summary: str | None = None
    market_insights: str | None = None
    recommendations: str | None = None
    metadata: ReportMetadata | None = None
    signed_url: str | None = None
    s3_key: str | None = None
    execution_arn: str | None = None

    @property
    def is_synchronous(self) -> bool:
        """True when the server returned a finished report instead of a handle."""
        return not self.execution_arn and bool(self.report_id)


class ReportStatusPayload(ApiModel):
    """getReportStatus result."""

    status: ReportStatus
    report_id: str | None = None
    signed_url: str | None = None
    s3_key: str | None = None
    error: str | None = None


class UserReport(ApiModel):
    report_id: str
    file_name: str | None = None
    report_type: str | None = None
    property_title: str | None = None
    created_at: str | None = None
    size: int | None = None
    signed_url: str | None = None
    s3_key: str | None = None


class ReportConnection(ApiModel):
    items: list[UserReport] = Field(default_factory=list)
    next_token: str | None = None


class GenerateReportRequest(ApiModel):
    """HTTP request body for starting a report."""

    property_id: str
    report_type: ReportType = ReportType.MARKET_ANALYSIS
    additional_context: str | None = None
