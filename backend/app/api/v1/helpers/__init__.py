"""
API v1 Helper Functions

Shared helper functions extracted from endpoint modules for better
code organization and reusability.
"""

from app.api.v1.helpers.responses import (
    RESP_400,
    RESP_401,
    RESP_403,
    RESP_404,
    RESP_409,
    RESP_500,
    RESP_AUTH_400_404,
    RESP_OWNER_400_404,
    success,
)
from app.api.v1.helpers.teams import (
    build_team_response,
    enrich_team,
    enrich_teams,
    load_profiles,
    referenced_user_ids,
)

__all__ = [
    # Responses
    "RESP_400",
    "RESP_401",
    "RESP_403",
    "RESP_404",
    "RESP_409",
    "RESP_500",
    "RESP_AUTH_400_404",
    "RESP_OWNER_400_404",
    "success",
    # Teams
    "build_team_response",
    "enrich_team",
    "enrich_teams",
    "load_profiles",
    "referenced_user_ids",
]
