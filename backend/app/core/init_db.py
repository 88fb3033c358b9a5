import logging

import pymongo

from app.core.constants import TEAM_TEXT_SEARCH_FIELDS
from app.db.mongodb import get_database

logger = logging.getLogger(__name__)


async def create_indexes(db):
    """Creates indexes for the collections this service reads and writes."""
    logger.info("Creating database indexes...")

    # Users (owned by the auth service, looked up by id and email)
    await db["users"].create_index("email", unique=True)

    # Teams
    await db["teams"].create_index("createdBy")
    await db["teams"].create_index("members")
    await db["teams"].create_index("joinRequests")
    await db["teams"].create_index([("createdAt", pymongo.DESCENDING)])
    await db["teams"].create_index("sport")
    await db["teams"].create_index("skillLevel")
    # Backs the free-text "search" filter of the teams listing
    await db["teams"].create_index(
        [(field, pymongo.TEXT) for field in TEAM_TEXT_SEARCH_FIELDS],
        name="teams_text_search",
    )

    logger.info("Database indexes created")


async def init_db():
    db = await get_database()
    await create_indexes(db)
