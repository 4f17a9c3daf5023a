"""
Property domain models and schemas.

Data API contracts for listings plus the submission form with its
validation rules.

Dependencies: pydantic
System role: Property API contracts
"""

import re
from datetime import date
from enum import Enum

from pydantic import Field, field_validator

from estate_portal.models.common import ApiModel


class PropertyType(str, Enum):
    SINGLE_FAMILY = "SINGLE_FAMILY"
    CONDO = "CONDO"
    TOWNHOUSE = "TOWNHOUSE"
    MULTI_FAMILY = "MULTI_FAMILY"
    LAND = "LAND"
    COMMERCIAL = "COMMERCIAL"
    OTHER = "OTHER"


class ListingType(str, Enum):
    FOR_SALE = "FOR_SALE"
    FOR_RENT = "FOR_RENT"
    SOLD = "SOLD"
    RENTED = "RENTED"


class PropertyStatus(str, Enum):
    PENDING_REVIEW = "PENDING_REVIEW"
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    REJECTED = "REJECTED"


# Display labels used by listing forms and cards
_PROPERTY_TYPE_LABELS: dict[str, PropertyType] = {
    "house": PropertyType.SINGLE_FAMILY,
    "single family": PropertyType.SINGLE_FAMILY,
    "villa": PropertyType.SINGLE_FAMILY,
    "apartment": PropertyType.CONDO,
    "condo": PropertyType.CONDO,
    "studio": PropertyType.CONDO,
    "penthouse": PropertyType.CONDO,
    "townhouse": PropertyType.TOWNHOUSE,
    "duplex": PropertyType.MULTI_FAMILY,
    "multi family": PropertyType.MULTI_FAMILY,
    "land": PropertyType.LAND,
    "commercial": PropertyType.COMMERCIAL,
    "other": PropertyType.OTHER,
}

_LISTING_TYPE_LABELS: dict[str, ListingType] = {
    "for sale": ListingType.FOR_SALE,
    "for rent": ListingType.FOR_RENT,
    "sold": ListingType.SOLD,
    "rented": ListingType.RENTED,
}

US_STATES = frozenset({
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
    "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
    "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
    "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
    "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY",
})

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def map_property_type(value: str | PropertyType | None) -> PropertyType:
    """Map an enum value or display label to PropertyType (OTHER if unknown)."""
    if isinstance(value, PropertyType):
        return value
    if not value:
        return PropertyType.OTHER
    try:
        return PropertyType(value)
    except ValueError:
        return _PROPERTY_TYPE_LABELS.get(value.strip().lower(), PropertyType.OTHER)


def map_listing_type(value: str | ListingType | None) -> ListingType:
    """Map an enum value or display label to ListingType (FOR_SALE if unknown)."""
    if isinstance(value, ListingType):
        return value
    if not value:
        return ListingType.FOR_SALE
    try:
        return ListingType(value)
    except ValueError:
        return _LISTING_TYPE_LABELS.get(value.strip().lower(), ListingType.FOR_SALE)


class Property(ApiModel):
    """Listing as returned by the data API."""

    id: str
    title: str
    description: str = ""
    price: float = 0
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    bedrooms: int = 0
    bathrooms: float = 0
    square_feet: float = 0
    property_type: PropertyType = PropertyType.OTHER
    listing_type: ListingType = ListingType.FOR_SALE
    images: list[str] = Field(default_factory=list)
    image_urls: list[str] | None = None
    submitted_by: str | None = None
    submitted_at: str | None = None
    updated_at: str | None = None
    status: PropertyStatus = PropertyStatus.PENDING_REVIEW
    contact_name: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    amenities: list[str] | None = None
    year_built: int | None = None
    lot_size: float | None = None
    parking_spaces: int | None = None
    is_public: bool = False


class PropertyConnection(ApiModel):
    """Paginated property list."""

    items: list[Property] = Field(default_factory=list)
    next_token: str | None = None


class PropertyFilter(ApiModel):
    """Filter accepted by listProperties."""

    city: str | None = None
    state: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    min_bedrooms: int | None = None
    min_bathrooms: float | None = None
    property_type: PropertyType | None = None
    listing_type: ListingType | None = None
    status: PropertyStatus | None = None


class PropertyUploadResponse(ApiModel):
    """createProperty result; queue_message_id doubles as execution handle."""

    property_id: str
    message: str = ""
    queue_message_id: str | None = None


class UploadUrl(ApiModel):
    """getUploadUrl result."""

    upload_url: str
    file_key: str


class PropertyForm(ApiModel):
    """Listing submission form (images are validated separately)."""

    title: str = Field(min_length=10, max_length=100)
    description: str = Field(min_length=50, max_length=1000)
    price: float = Field(gt=0)
    property_type: PropertyType
    bedrooms: int | None = Field(default=None, ge=0, le=20)
    bathrooms: float | None = Field(default=None, ge=0, le=20)
    area: float | None = Field(default=None, gt=0)
    listing_type: ListingType
    amenities: list[str] = Field(default_factory=list)
    year_built: int | None = Field(default=None, ge=1800)
    lot_size: float | None = Field(default=None, ge=0)
    parking_spaces: int | None = Field(default=None, ge=0, le=20)
    address: str = Field(min_length=5, max_length=200)
    city: str = Field(min_length=2, max_length=100, pattern=r"^[a-zA-Z\s-]+$")
    state: str
    zip_code: str = Field(pattern=r"^\d{5}(-\d{4})?$")
    contact_name: str = Field(min_length=2, max_length=100, pattern=r"^[a-zA-Z\s'-]+$")
    contact_email: str = Field(min_length=1)
    contact_phone: str = Field(
        pattern=r"^[+]?[(]?[0-9]{3}[)]?[-\s.]?[0-9]{3}[-\s.]?[0-9]{4,6}$"
    )

    @field_validator("property_type", mode="before")
    @classmethod
    def _map_property_type(cls, value):
        return map_property_type(value)

    @field_validator("listing_type")
    @classmethod
    def _sale_or_rent(cls, value: ListingType) -> ListingType:
        if value not in (ListingType.FOR_SALE, ListingType.FOR_RENT):
            raise ValueError("Please select a listing type")
        return value

    @field_validator("year_built")
    @classmethod
    def _not_future(cls, value: int | None) -> int | None:
        if value is not None and value > date.today().year + 1:
            raise ValueError("Year cannot be in the future")
        return value

    @field_validator("state")
    @classmethod
    def _known_state(cls, value: str) -> str:
        if value.upper() not in US_STATES:
            raise ValueError("Please select a state")
        return value.upper()

    @field_validator("contact_email")
    @classmethod
    def _email(cls, value: str) -> str:
        if not _EMAIL_RE.match(value):
            raise ValueError("Please enter a valid email address")
        return value

    def to_create_input(self, image_keys: list[str]) -> dict:
        """Build the createProperty input from the form and uploaded image keys."""
        payload = {
            "title": self.title,
            "description": self.description,
            "price": self.price,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "zipCode": self.zip_code,
            "bedrooms": self.bedrooms or 0,
            "bathrooms": self.bathrooms or 0,
            "squareFeet": self.area or 0,
            "propertyType": self.property_type.value,
            "listingType": self.listing_type.value,
            "images": image_keys,
            "contactName": self.contact_name,
            "contactEmail": self.contact_email,
            "contactPhone": self.contact_phone,
            "amenities": self.amenities,
            "yearBuilt": self.year_built,
            "lotSize": self.lot_size,
            "parkingSpaces": self.parking_spaces,
        }
        return {key: value for key, value in payload.items() if value is not None}


class PropertyUpdate(ApiModel):
    """Partial update accepted by updateProperty."""

    title: str | None = Field(default=None, min_length=10, max_length=100)
    description: str | None = Field(default=None, min_length=50, max_length=1000)
    price: float | None = Field(default=None, gt=0)
    bedrooms: int | None = Field(default=None, ge=0, le=20)
    bathrooms: float | None = Field(default=None, ge=0, le=20)
    square_feet: float | None = Field(default=None, gt=0)
    listing_type: ListingType | None = None
    status: PropertyStatus | None = None
    amenities: list[str] | None = None
    contact_name: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    is_public: bool | None = None


class RejectPropertyRequest(ApiModel):
    reason: str = Field(min_length=1)

    @field_validator("reason")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Rejection reason is required")
        return value.strip()
