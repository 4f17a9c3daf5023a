"""
API test fixtures.

Provides: TestClient over the full app and session overrides
Dependencies: fastapi
"""

import pytest
from fastapi.testclient import TestClient

from estate_portal.api.deps import get_current_session
from estate_portal.api.main import create_app


@pytest.fixture
def client():
    app = create_app()
    return TestClient(app)


@pytest.fixture
def as_user(client):
    """Authenticate every request as the given session."""

    def _as(session):
        client.app.dependency_overrides[get_current_session] = lambda: session
        return session

    return _as
