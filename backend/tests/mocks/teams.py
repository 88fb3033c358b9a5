"""Factories for team and user test data."""

from app.models.team import Team

OWNER_ID = "user-owner"
PLAYER_ID = "user-player"
OTHER_PLAYER_ID = "user-other"


def make_team(**overrides) -> Team:
    """Create a Team with sensible defaults, owned by OWNER_ID."""
    data = {
        "id": "team-1",
        "name": "Sunday Strikers",
        "sport": "Football",
        "city": "Pune",
        "state": "Maharashtra",
        "skill_level": "Intermediate",
        "description": "Casual Sunday morning football",
        "contact_details": "captain@example.com",
        "max_size": 5,
        "members": [OWNER_ID],
        "join_requests": [],
        "created_by": OWNER_ID,
    }
    data.update(overrides)
    return Team(**data)


def make_user_doc(user_id: str, full_name: str, **extra) -> dict:
    """Create a raw user document as the auth service stores it."""
    doc = {
        "_id": user_id,
        "fullName": full_name,
        "email": f"{user_id}@example.com",
        "profilePhoto": None,
        "isActive": True,
    }
    doc.update(extra)
    return doc
