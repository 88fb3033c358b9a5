"""
Team Helper Functions

Read-side projection of teams: resolves the user ids stored on a team
into lightweight profiles for API responses.
"""

from typing import Any, Dict, Iterable, List

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.models.team import Team
from app.repositories import UserRepository
from app.schemas.team import TeamResponse, UserProfile


def referenced_user_ids(teams: Iterable[Team]) -> List[str]:
    """Collect owner, member and requester ids of the given teams, without duplicates."""
    ids: Dict[str, None] = {}
    for team in teams:
        ids[team.created_by] = None
        for user_id in team.members + team.join_requests:
            ids[user_id] = None
    return list(ids)


def build_team_response(team: Team, profiles: Dict[str, UserProfile]) -> TeamResponse:
    """
    Assemble a TeamResponse from a team and a map of known profiles.

    Ids without a user document still appear, as a bare ``{"id": ...}``
    profile, so the membership state stays visible.
    """

    def profile(user_id: str) -> UserProfile:
        return profiles.get(user_id) or UserProfile(id=user_id)

    data: Dict[str, Any] = team.model_dump(exclude={"members", "join_requests", "created_by", "version"})
    return TeamResponse(
        **data,
        created_by=profile(team.created_by),
        members=[profile(u) for u in team.members],
        join_requests=[profile(u) for u in team.join_requests],
    )


async def load_profiles(user_ids: Iterable[str], db: AsyncIOMotorDatabase) -> Dict[str, UserProfile]:
    user_repo = UserRepository(db)
    docs = await user_repo.find_profiles_by_ids(user_ids)
    return {doc["_id"]: UserProfile.model_validate(doc) for doc in docs}


async def enrich_team(team: Team, db: AsyncIOMotorDatabase) -> TeamResponse:
    """
    Enrich a single team with owner, member and requester profiles.

    Args:
        team: Team as returned by the membership service
        db: Database instance

    Returns:
        Enriched TeamResponse
    """
    profiles = await load_profiles(referenced_user_ids([team]), db)
    return build_team_response(team, profiles)


async def enrich_teams(teams: List[Team], db: AsyncIOMotorDatabase) -> List[TeamResponse]:
    """Enrich a list of teams with a single users query."""
    profiles = await load_profiles(referenced_user_ids(teams), db)
    return [build_team_response(team, profiles) for team in teams]
