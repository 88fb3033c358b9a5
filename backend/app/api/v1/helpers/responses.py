"""
Shared OpenAPI response definitions and the success envelope builder.

Usage:
    from app.api.v1.helpers.responses import RESP_AUTH_400_404, success

    @router.post("/items/{item_id}", responses={**RESP_AUTH_400_404})
    async def act_on_item(...):
        return success(data, "Item updated")
"""

from typing import Any

from app.schemas.response import ApiResponse, ErrorResponse

# Atomic response definitions
RESP_400 = {400: {"model": ErrorResponse, "description": "Rule violation or invalid input"}}
RESP_401 = {401: {"model": ErrorResponse, "description": "Not authenticated"}}
RESP_403 = {403: {"model": ErrorResponse, "description": "Not the team owner"}}
RESP_404 = {404: {"model": ErrorResponse, "description": "Team or user not found"}}
RESP_409 = {409: {"model": ErrorResponse, "description": "Concurrent modification, retry"}}
RESP_500 = {500: {"model": ErrorResponse, "description": "Internal server error"}}

# Common composites
RESP_AUTH_400_404 = {**RESP_400, **RESP_401, **RESP_404, **RESP_409}
RESP_OWNER_400_404 = {**RESP_AUTH_400_404, **RESP_403}


def success(data: Any, message: str) -> ApiResponse:
    return ApiResponse(success=True, message=message, data=data)
