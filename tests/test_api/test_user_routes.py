from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_user_service
from api.main import app
from domain.exceptions.currency import UserNotFoundError
from domain.models.currency import UserProfile

USER_ID = "2b1c5a8e-8f0e-4a0b-9a55-3c3f3b8f7a11"
NEW_USER_ID = "9f0d7a34-1c2b-4e5f-8a9b-0c1d2e3f4a5b"
NOW = datetime(2025, 11, 5, 10, 0, 0, tzinfo=UTC)


def make_profile(user_id=USER_ID, **overrides):
    values = {
        "user_id": user_id,
        "base_currency": "USD",
        "favorites": [],
        "created_at": NOW,
        "updated_at": NOW,
    }
    values.update(overrides)
    return UserProfile(**values)


@pytest.fixture
def mock_user_service():
    mock_service = MagicMock()
    mock_service.create_user = AsyncMock(return_value=make_profile(NEW_USER_ID))
    mock_service.get_user = AsyncMock(return_value=make_profile(favorites=["EUR"]))
    mock_service.update_user = AsyncMock(return_value=None)
    return mock_service


@pytest.fixture
def client(mock_user_service):
    app.dependency_overrides[get_user_service] = lambda: mock_user_service
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def test_get_user_without_id_creates_user(client, mock_user_service):
    response = client.get("/api/user")

    assert response.status_code == 200
    data = response.json()
    assert data["user_id"] == NEW_USER_ID
    assert data["base_currency"] == "USD"
    assert data["favorites"] == []
    assert response.headers["x-user-id"] == NEW_USER_ID
    assert response.cookies.get("user_id") == NEW_USER_ID
    mock_user_service.create_user.assert_awaited_once_with()


def test_get_user_by_header(client, mock_user_service):
    response = client.get("/api/user", headers={"x-user-id": USER_ID})

    assert response.status_code == 200
    assert response.json()["favorites"] == ["EUR"]
    mock_user_service.get_user.assert_awaited_once_with(USER_ID)
    mock_user_service.create_user.assert_not_awaited()


def test_get_user_by_cookie(client, mock_user_service):
    client.cookies.set("user_id", USER_ID)

    response = client.get("/api/user")

    assert response.status_code == 200
    mock_user_service.get_user.assert_awaited_once_with(USER_ID)


def test_get_user_invalid_id(client):
    response = client.get("/api/user", headers={"x-user-id": "not-a-uuid"})

    assert response.status_code == 400
    assert response.json() == {"detail": "Invalid x-user-id"}


def test_get_user_unknown(client, mock_user_service):
    mock_user_service.get_user.side_effect = UserNotFoundError(f"User {USER_ID} not found")

    response = client.get("/api/user", headers={"x-user-id": USER_ID})

    assert response.status_code == 404


def test_update_user_success(client, mock_user_service):
    response = client.post(
        "/api/user",
        headers={"x-user-id": USER_ID},
        json={"base_currency": "eur", "favorites": ["usd", "gbp"]},
    )

    assert response.status_code == 204
    mock_user_service.update_user.assert_awaited_once_with(
        USER_ID, base_currency="EUR", favorites=["USD", "GBP"]
    )


def test_update_user_partial_body(client, mock_user_service):
    response = client.post("/api/user", headers={"x-user-id": USER_ID}, json={"favorites": ["JPY"]})

    assert response.status_code == 204
    mock_user_service.update_user.assert_awaited_once_with(USER_ID, base_currency=None, favorites=["JPY"])


def test_update_user_without_id(client, mock_user_service):
    response = client.post("/api/user", json={"base_currency": "EUR"})

    assert response.status_code == 401
    mock_user_service.update_user.assert_not_awaited()


def test_update_user_invalid_id(client):
    response = client.post("/api/user", headers={"x-user-id": "1234"}, json={"base_currency": "EUR"})

    assert response.status_code == 400


def test_update_user_unknown(client, mock_user_service):
    mock_user_service.update_user.side_effect = UserNotFoundError(f"User {USER_ID} not found")

    response = client.post("/api/user", headers={"x-user-id": USER_ID}, json={"base_currency": "EUR"})

    assert response.status_code == 404
