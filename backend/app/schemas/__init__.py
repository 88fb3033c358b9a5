"""
Schema Exports

Request, response and envelope models of the teams API.
"""

from app.schemas.response import ApiResponse, ErrorResponse
from app.schemas.team import (
    TeamCreate,
    TeamDeleted,
    TeamFilters,
    TeamResponse,
    TeamUpdate,
    UserProfile,
)

__all__ = [
    # Envelopes
    "ApiResponse",
    "ErrorResponse",
    # Teams
    "TeamCreate",
    "TeamUpdate",
    "TeamFilters",
    "TeamResponse",
    "TeamDeleted",
    "UserProfile",
]
