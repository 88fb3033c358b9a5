"""
User Repository

Read-only access to user documents owned by the authentication service.
"""

from typing import Any, Dict, Iterable, List

from app.core.constants import USER_PROFILE_PROJECTION
from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for user database operations."""

    collection_name = "users"
    model_class = User

    async def find_profiles_by_ids(self, user_ids: Iterable[str]) -> List[Dict[str, Any]]:
        """Get the public profile fields of every listed user that exists."""
        ids = list(dict.fromkeys(user_ids))
        if not ids:
            return []
        cursor = self.collection.find({"_id": {"$in": ids}}, USER_PROFILE_PROJECTION)
        return await cursor.to_list(len(ids))
