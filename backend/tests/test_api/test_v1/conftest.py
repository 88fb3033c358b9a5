"""Shared fixtures for API endpoint tests."""

import pytest
from fastapi.testclient import TestClient

from app.core.security import create_access_token
from app.db.mongodb import get_database
from app.main import app
from app.models.user import User
from tests.mocks.teams import OWNER_ID, PLAYER_ID


@pytest.fixture
def owner_user():
    return User(id=OWNER_ID, full_name="Olivia Owner", email="owner@example.com")


@pytest.fixture
def player_user():
    return User(id=PLAYER_ID, full_name="Pat Player", email="player@example.com")


@pytest.fixture
def client(memory_db):
    """Test client whose database dependency resolves to memory_db."""

    async def override_get_database():
        return memory_db

    app.dependency_overrides[get_database] = override_get_database
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(user_id):
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return _headers
