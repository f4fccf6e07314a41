"""
Common fixtures for API unit tests.

Provides shared test utilities:
- FastAPI TestClient wired to the in-memory QuoteEngineService
- Identity header sets for each role
- A created quote request id
"""

import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import get_quote_engine_service
from src.api.main import app


@pytest.fixture
def client(service):
    """
    FastAPI TestClient for testing endpoints.

    The cached process-wide service is replaced by the per-test `service`
    fixture so every test starts with empty stores.
    """
    app.dependency_overrides[get_quote_engine_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user_headers():
    return {"X-User-Id": "user-1", "X-User-Role": "user"}


@pytest.fixture
def other_user_headers():
    return {"X-User-Id": "user-2", "X-User-Role": "user"}


@pytest.fixture
def contractor_a_headers():
    return {"X-User-Id": "contractor-a", "X-User-Role": "contractor"}


@pytest.fixture
def contractor_b_headers():
    return {"X-User-Id": "contractor-b", "X-User-Role": "contractor"}


@pytest.fixture
def admin_headers():
    return {"X-User-Id": "admin-1", "X-User-Role": "admin"}


@pytest.fixture
def request_id(client, user_headers):
    """Pending request owned by user-1, inviting contractors A and B."""
    response = client.post(
        "/api/quote-requests",
        json={
            "system_size_kwp": 10,
            "location": "Riyadh, Al Olaya",
            "contractor_ids": ["contractor-a", "contractor-b"],
        },
        headers=user_headers,
    )
    assert response.status_code == 201
    return response.json()["id"]
