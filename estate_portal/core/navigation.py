"""
Post-submission navigation contract.

A completed property submission redirects to the listings view with
``uploadStatus=success&propertyId=<id>``. The listings view reads those
parameters once and strips them so a refresh does not show the banner again.

Dependencies: urllib.parse
System role: Redirect construction and one-shot status consumption
"""

from dataclasses import dataclass
from typing import Protocol
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

UPLOAD_STATUS_PARAM = "uploadStatus"
PROPERTY_ID_PARAM = "propertyId"
SUCCESS = "success"


class Navigator(Protocol):
    """Receives redirects issued by trackers."""

    def redirect(self, url: str) -> None:
        ...


@dataclass(frozen=True)
class UploadBanner:
    """One-shot success banner shown on the listings view."""

    property_id: str | None
    message: str


def build_success_redirect(listings_path: str, property_id: str) -> str:
    """Listings URL signalling a successful submission."""
    query = urlencode({UPLOAD_STATUS_PARAM: SUCCESS, PROPERTY_ID_PARAM: property_id})
    return f"{listings_path}?{query}"


def consume_upload_status(url: str) -> tuple[UploadBanner | None, str]:
    """
    Read the upload status flag from a listings URL.

    Args:
        url: Current listings URL (absolute or path-only)

    Returns:
        tuple: (banner or None, URL with both parameters removed)
    """
    parts = urlsplit(url)
    params = parse_qsl(parts.query, keep_blank_values=True)
    values = dict(params)

    banner = None
    if values.get(UPLOAD_STATUS_PARAM) == SUCCESS:
        banner = UploadBanner(
            property_id=values.get(PROPERTY_ID_PARAM) or None,
            message="Your property has been submitted successfully and is pending review.",
        )

    remaining = [
        (key, value)
        for key, value in params
        if key not in (UPLOAD_STATUS_PARAM, PROPERTY_ID_PARAM)
    ]
    cleaned = urlunsplit(parts._replace(query=urlencode(remaining)))
    return banner, cleaned
