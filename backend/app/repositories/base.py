"""
Base Repository

Generic access to one MongoDB collection whose documents map onto a
pydantic model with camelCase aliases and an ``_id`` primary key.
"""

from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """
    Shared lookups and inserts for team and user documents.

    Usage:
        class TeamRepository(BaseRepository[Team]):
            collection_name = "teams"
            model_class = Team
    """

    collection_name: str
    model_class: Type[T]

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection: AsyncIOMotorCollection = db[self.collection_name]

    def _to_model(self, data: Optional[Dict[str, Any]]) -> Optional[T]:
        if data is None:
            return None
        return self.model_class(**data)

    async def get_by_id(self, id: str) -> Optional[T]:
        data = await self.collection.find_one({"_id": id})
        return self._to_model(data)

    async def get_raw_by_id(self, id: str) -> Optional[Dict[str, Any]]:
        """Fetch the stored document as-is, e.g. to test for existence."""
        return await self.collection.find_one({"_id": id})

    async def find_many(
        self,
        query: Dict[str, Any],
        limit: int,
        sort: Optional[Tuple[str, int]] = None,
        projection: Optional[Dict[str, int]] = None,
    ) -> List[T]:
        """Find up to ``limit`` documents, optionally sorted by ``(field, direction)``."""
        cursor = self.collection.find(query, projection)
        if sort:
            cursor = cursor.sort(*sort)
        docs = await cursor.limit(limit).to_list(limit)
        return [self.model_class(**doc) for doc in docs]

    async def create(self, model: T) -> T:
        await self.collection.insert_one(model.model_dump(by_alias=True))
        return model
