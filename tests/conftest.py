"""
Shared test fixtures and configuration for entire test suite.

Provides: Virtual-clock scheduler, settings, sessions and sample listings
Dependencies: pytest, estate_portal
System role: Test infrastructure and fixture management
"""

import pytest

from estate_portal.application.services import TrackerRegistry
from estate_portal.configs import Settings
from estate_portal.configs.tracker import TrackerSettings
from estate_portal.core.query_cache import QueryCache
from estate_portal.core.session import AuthUser, Tier, UserSession
from estate_portal.core.tracker.scheduler import ManualScheduler
from estate_portal.models.property import Property


def make_user(sub: str = "user-1", tier: Tier = Tier.USER) -> AuthUser:
    """Build an identity as the auth layer would resolve it."""
    groups = (tier.value,) if tier is not Tier.USER else ()
    return AuthUser(
        sub=sub,
        username=f"{sub}@example.com",
        access_token=f"token-{sub}",
        email=f"{sub}@example.com",
        groups=groups,
        tier=tier,
    )


def make_session(sub: str = "user-1", tier: Tier = Tier.USER) -> UserSession:
    return UserSession(cache=QueryCache()).init(make_user(sub, tier))


class RecordingNavigator:
    """Navigator that remembers every redirect a tracker issues."""

    def __init__(self) -> None:
        self.history: list[str] = []

    def redirect(self, url: str) -> None:
        self.history.append(url)


@pytest.fixture
def navigator():
    return RecordingNavigator()


@pytest.fixture
def scheduler():
    """Virtual clock; advance it explicitly with ``await scheduler.advance(s)``."""
    return ManualScheduler()


@pytest.fixture
def tracker_settings():
    return TrackerSettings()


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def registry(scheduler):
    return TrackerRegistry(scheduler, retention_seconds=900.0)


@pytest.fixture
def session_factory():
    """Factory for sessions with a chosen sub and tier."""
    return make_session


@pytest.fixture
def user_session():
    return make_session("user-1", Tier.USER)


@pytest.fixture
def paid_session():
    return make_session("paid-1", Tier.PAID)


@pytest.fixture
def admin_session():
    return make_session("admin-1", Tier.ADMIN)


@pytest.fixture
def sample_property():
    """A listing as returned by getProperty."""
    return Property(
        id="prop-1",
        title="Sunny family home",
        description="Three bedroom home close to parks, schools and transit lines.",
        price=450000,
        address="12 Elm Street",
        city="Austin",
        state="TX",
        zip_code="78701",
        bedrooms=3,
        bathrooms=2,
        square_feet=1800,
        images=["properties/prop-1/a.jpg"],
        amenities=["Garage", "Pool"],
        year_built=2004,
        submitted_by="user-1",
    )


@pytest.fixture
def valid_form_data():
    """Listing form payload that passes every field rule."""
    return {
        "title": "Sunny family home",
        "description": "Three bedroom home close to parks, schools and transit lines.",
        "price": 450000,
        "propertyType": "house",
        "bedrooms": 3,
        "bathrooms": 2,
        "area": 1800,
        "listingType": "FOR_SALE",
        "amenities": ["Garage"],
        "yearBuilt": 2004,
        "address": "12 Elm Street",
        "city": "Austin",
        "state": "tx",
        "zipCode": "78701",
        "contactName": "Jane Doe",
        "contactEmail": "jane@example.com",
        "contactPhone": "512-555-0100",
    }
