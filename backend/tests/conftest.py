"""
Shared test fixtures and configuration.

Environment variables are set BEFORE any app imports to prevent
accidental connections to real databases.
"""

import os
import sys

# Ensure the backend app is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Override settings before any app code imports the settings singleton
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests"
os.environ["ALGORITHM"] = "HS256"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "15"
os.environ["MONGODB_URL"] = "mongodb://localhost:27017"
os.environ["DATABASE_NAME"] = "test_sportsbro"
os.environ["TEAM_UPDATE_MAX_RETRIES"] = "5"
os.environ["DIRECT_JOIN_REQUIRES_PUBLIC"] = "false"

import pytest  # noqa: E402

from tests.mocks.mongodb import InMemoryDatabase  # noqa: E402
from tests.mocks.teams import (  # noqa: E402
    OTHER_PLAYER_ID,
    OWNER_ID,
    PLAYER_ID,
    make_team,
    make_user_doc,
)


@pytest.fixture
def user_docs():
    return [
        make_user_doc(OWNER_ID, "Olivia Owner"),
        make_user_doc(PLAYER_ID, "Pat Player"),
        make_user_doc(OTHER_PLAYER_ID, "Otto Other"),
    ]


@pytest.fixture
def memory_db(user_docs):
    """In-memory database seeded with users and no teams."""
    return InMemoryDatabase(users=user_docs, teams=[])


@pytest.fixture
def seed_team(memory_db):
    """Store a team in memory_db and return it."""

    def _seed(**overrides):
        team = make_team(**overrides)
        memory_db["teams"].docs[team.id] = team.model_dump(by_alias=True)
        return team

    return _seed


@pytest.fixture
def team_create_payload():
    return {
        "name": "Evening Hoopers",
        "sport": "Basketball",
        "city": "Austin",
        "state": "Texas",
        "skillLevel": "Beginner",
        "maxSize": 2,
        "description": "Pickup games after work",
        "contactDetails": "hoopers@example.com",
    }
