"""
Repository Pattern for Database Access

Provides a clean abstraction layer over MongoDB collections,
centralizing database operations and reducing code duplication.
"""

from app.repositories.base import BaseRepository
from app.repositories.teams import TeamRepository
from app.repositories.users import UserRepository

__all__ = [
    "BaseRepository",
    "TeamRepository",
    "UserRepository",
]
