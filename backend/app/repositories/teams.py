"""
Team Repository

Centralizes all database operations for teams.
"""

import logging
from typing import Any, Dict, List, Optional

from pymongo import DESCENDING, ReturnDocument

from app.models.team import Team
from app.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


def version_filter(version: int) -> Any:
    """Match a stored version counter; legacy documents have none and count as 0."""
    if version == 0:
        return {"$in": [0, None]}
    return version


class TeamRepository(BaseRepository[Team]):
    """Repository for team database operations."""

    collection_name = "teams"
    model_class = Team

    async def list_newest_first(self, query: Dict[str, Any], limit: int = 200) -> List[Team]:
        """Find teams matching query, most recently created first."""
        return await self.find_many(query, limit=limit, sort=("createdAt", DESCENDING))

    async def replace_if_version(self, team: Team, expected_version: int) -> Optional[Team]:
        """
        Persist a full team state only if nobody wrote it since it was read.

        The stored document must still carry ``expected_version``; the new
        state is written with ``team.version`` (the caller bumps it).

        Args:
            team: The complete new team state
            expected_version: Version the caller based its changes on

        Returns:
            The stored team, or None if the document changed or disappeared
        """
        doc = team.model_dump(by_alias=True)
        doc.pop("_id")
        # createdBy never changes; matching on it guards against id reuse
        data = await self.collection.find_one_and_update(
            {
                "_id": team.id,
                "createdBy": team.created_by,
                "version": version_filter(expected_version),
            },
            {"$set": doc},
            return_document=ReturnDocument.AFTER,
        )
        if data is None:
            logger.debug(f"Version check failed for team {team.id} (expected {expected_version})")
        return self._to_model(data)

    async def delete_owned(self, team_id: str, owner_id: str) -> bool:
        """Delete a team only while it is still owned by owner_id."""
        result = await self.collection.delete_one({"_id": team_id, "createdBy": owner_id})
        return result.deleted_count > 0
