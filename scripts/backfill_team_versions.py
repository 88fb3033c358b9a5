#!/usr/bin/env python3
"""
Migration script: add optimistic-concurrency versions to existing teams

Teams created before membership writes became version-checked carry no
``version`` field. The service already treats a missing version as 0, but
backfilling it keeps the stored documents uniform and lets the indexes
below cover every team.

Steps:
1. Count teams without a ``version`` field
2. Set ``version: 0`` on each of them
3. Create the teams indexes

Usage:
    python scripts/backfill_team_versions.py [--dry-run]
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from motor.motor_asyncio import AsyncIOMotorClient

from app.core.config import settings
from app.core.init_db import create_indexes

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

MISSING_VERSION = {"version": {"$exists": False}}


async def backfill_versions(db, dry_run: bool) -> int:
    pending = await db.teams.count_documents(MISSING_VERSION)
    logger.info(f"Found {pending} team(s) without a version")

    if dry_run or pending == 0:
        return pending

    result = await db.teams.update_many(MISSING_VERSION, {"$set": {"version": 0}})
    logger.info(f"Backfilled version on {result.modified_count} team(s)")
    return result.modified_count


async def main(dry_run: bool) -> None:
    client = AsyncIOMotorClient(settings.MONGODB_URL)
    db = client[settings.DATABASE_NAME]
    try:
        await backfill_versions(db, dry_run)
        if dry_run:
            logger.info("Dry run: no changes written")
        else:
            await create_indexes(db)
    finally:
        client.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--dry-run", action="store_true", help="Only report what would change")
    args = parser.parse_args()
    asyncio.run(main(args.dry_run))
