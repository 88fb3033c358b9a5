from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.api import deps
from app.api.v1.helpers import (
    RESP_401,
    RESP_403,
    RESP_404,
    RESP_500,
    RESP_AUTH_400_404,
    RESP_OWNER_400_404,
    enrich_team,
    enrich_teams,
    success,
)
from app.db.mongodb import get_database
from app.models.user import User
from app.schemas.response import ApiResponse
from app.schemas.team import TeamCreate, TeamDeleted, TeamFilters, TeamResponse
from app.services.teams import TeamMembershipService

router = APIRouter()


@router.get("/", response_model=ApiResponse[List[TeamResponse]], responses={**RESP_500})
async def read_teams(
    sport: Optional[str] = None,
    city: Optional[str] = None,
    state: Optional[str] = None,
    district: Optional[str] = None,
    skill_level: Optional[str] = Query(None, alias="skillLevel"),
    search: Optional[str] = None,
    service: TeamMembershipService = Depends(deps.get_team_service),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    List teams, newest first. Public.
    """
    filters = TeamFilters(
        sport=sport,
        city=city,
        state=state,
        district=district,
        skill_level=skill_level,
        search=search,
    )
    teams = await service.list_teams(filters)
    return success(await enrich_teams(teams, db), "Teams retrieved successfully")


@router.get("/{team_id}", response_model=ApiResponse[TeamResponse], responses={**RESP_404})
async def read_team(
    team_id: str,
    service: TeamMembershipService = Depends(deps.get_team_service),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Get team details. Public.
    """
    team = await service.get_team(team_id)
    return success(await enrich_team(team, db), "Team retrieved successfully")


@router.post(
    "/",
    response_model=ApiResponse[TeamResponse],
    status_code=status.HTTP_201_CREATED,
    responses={**RESP_AUTH_400_404},
)
async def create_team(
    team_in: TeamCreate,
    current_user: User = Depends(deps.get_current_active_user),
    service: TeamMembershipService = Depends(deps.get_team_service),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Create a new team. The creator becomes its owner and first member.
    """
    team = await service.create_team(current_user.id, team_in)
    return success(await enrich_team(team, db), "Team created successfully")


@router.put("/{team_id}", response_model=ApiResponse[TeamResponse], responses={**RESP_OWNER_400_404})
async def update_team(
    team_id: str,
    team_in: Dict[str, Any] = Body(..., description="TeamUpdate fields to replace"),
    current_user: User = Depends(deps.get_current_active_user),
    service: TeamMembershipService = Depends(deps.get_team_service),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Update team details. Owner only. Keys left out of the body are not changed.

    The body is validated as a TeamUpdate only after ownership is confirmed,
    so non-owners get 403 whatever they send.
    """
    team = await service.update_team_attributes(team_id, current_user.id, team_in)
    return success(await enrich_team(team, db), "Team updated successfully")


@router.delete(
    "/{team_id}",
    response_model=ApiResponse[TeamDeleted],
    responses={**RESP_401, **RESP_403, **RESP_404},
)
async def delete_team(
    team_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    service: TeamMembershipService = Depends(deps.get_team_service),
):
    """
    Delete a team permanently. Owner only.
    """
    deleted_id = await service.delete_team(team_id, current_user.id)
    return success(TeamDeleted(id=deleted_id), "Team deleted successfully")


@router.post("/{team_id}/request", response_model=ApiResponse[TeamResponse], responses={**RESP_AUTH_400_404})
async def request_to_join_team(
    team_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    service: TeamMembershipService = Depends(deps.get_team_service),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Ask to join a public team.
    """
    team = await service.request_to_join(team_id, current_user.id)
    return success(await enrich_team(team, db), "Join request sent successfully")


@router.post(
    "/{team_id}/cancel-request",
    response_model=ApiResponse[TeamResponse],
    responses={**RESP_AUTH_400_404},
)
async def cancel_join_request(
    team_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    service: TeamMembershipService = Depends(deps.get_team_service),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Withdraw the current user's pending join request.
    """
    team = await service.cancel_join_request(team_id, current_user.id)
    return success(await enrich_team(team, db), "Join request canceled successfully")


@router.post(
    "/{team_id}/accept/{user_id}",
    response_model=ApiResponse[TeamResponse],
    responses={**RESP_OWNER_400_404},
)
async def accept_join_request(
    team_id: str,
    user_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    service: TeamMembershipService = Depends(deps.get_team_service),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Accept a pending join request. Owner only.
    """
    team = await service.accept_join_request(team_id, current_user.id, user_id)
    return success(await enrich_team(team, db), "Join request accepted successfully")


@router.post(
    "/{team_id}/reject/{user_id}",
    response_model=ApiResponse[TeamResponse],
    responses={**RESP_OWNER_400_404},
)
async def reject_join_request(
    team_id: str,
    user_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    service: TeamMembershipService = Depends(deps.get_team_service),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Reject a pending join request. Owner only.
    """
    team = await service.reject_join_request(team_id, current_user.id, user_id)
    return success(await enrich_team(team, db), "Join request rejected successfully")


@router.post("/{team_id}/join", response_model=ApiResponse[TeamResponse], responses={**RESP_AUTH_400_404})
async def join_team(
    team_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    service: TeamMembershipService = Depends(deps.get_team_service),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Join a team directly, without owner approval.
    """
    team = await service.join_directly(team_id, current_user.id)
    return success(await enrich_team(team, db), "Successfully joined team")


@router.post("/{team_id}/leave", response_model=ApiResponse[TeamResponse], responses={**RESP_AUTH_400_404})
async def leave_team(
    team_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    service: TeamMembershipService = Depends(deps.get_team_service),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Leave a team. The owner cannot leave.
    """
    team = await service.leave_team(team_id, current_user.id)
    return success(await enrich_team(team, db), "Successfully left team")


@router.post(
    "/{team_id}/remove/{user_id}",
    response_model=ApiResponse[TeamResponse],
    responses={**RESP_OWNER_400_404},
)
async def remove_member(
    team_id: str,
    user_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    service: TeamMembershipService = Depends(deps.get_team_service),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Remove a member from the team. Owner only; the owner cannot be removed.
    """
    team = await service.remove_member(team_id, current_user.id, user_id)
    return success(await enrich_team(team, db), "Member removed successfully")
