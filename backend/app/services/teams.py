"""
TeamMembershipService - owns the lifecycle of teams and their membership.

This service handles:
- Creating, editing and deleting teams (owner only)
- Join requests: request, cancel, accept, reject
- Direct joins, leaving and member removal
- Filtered team discovery

Every mutation re-reads the team, applies a rule from
``app.services.membership_rules`` to a copy and writes the result back only
if the stored version is still the one that was read. When another request
got there first the rule is re-evaluated against the fresh document.
"""

import logging
import re
from typing import Any, Callable, Dict, List, Optional, Union

from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError

from app.core import utc_now
from app.core.config import settings
from app.core.exceptions import (
    Conflict,
    TeamInvariantError,
    TeamNotFound,
    TeamValidationError,
    UserNotFound,
)
from app.models.team import Team
from app.repositories import TeamRepository, UserRepository
from app.schemas.team import TeamCreate, TeamFilters, TeamUpdate
from app.services import membership_rules as rules

logger = logging.getLogger(__name__)

TeamRule = Callable[[Team], None]


def build_team_query(filters: TeamFilters) -> Dict[str, Any]:
    """
    Build the MongoDB query for team discovery.

    ``sport`` and ``skillLevel`` match exactly, location fields match a
    case-insensitive substring and ``search`` uses the teams text index.
    """
    query: Dict[str, Any] = {}
    if filters.sport:
        query["sport"] = filters.sport
    for field in ("city", "state", "district"):
        value = getattr(filters, field)
        if value:
            query[field] = {"$regex": re.escape(value), "$options": "i"}
    if filters.skill_level:
        query["skillLevel"] = filters.skill_level
    if filters.search:
        query["$text"] = {"$search": filters.search}
    return query


def _validation_error(exc: ValidationError) -> TeamValidationError:
    details = [
        {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]
    if any(err["type"] == "missing" for err in exc.errors()):
        message = "Please provide all required fields"
    else:
        message = f"Invalid team data: {details[0]['message']}"
    return TeamValidationError(message, details=details)


class TeamMembershipService:
    """
    Mediates every change to a team's members and join requests.

    Usage:
        service = TeamMembershipService(db)
        team = await service.request_to_join(team_id, current_user.id)
    """

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        max_retries: Optional[int] = None,
        direct_join_requires_public: Optional[bool] = None,
    ):
        self.teams = TeamRepository(db)
        self.users = UserRepository(db)
        self.max_retries = max_retries or settings.TEAM_UPDATE_MAX_RETRIES
        if direct_join_requires_public is None:
            direct_join_requires_public = settings.DIRECT_JOIN_REQUIRES_PUBLIC
        self.direct_join_requires_public = direct_join_requires_public

    async def get_team(self, team_id: str) -> Team:
        team = await self.teams.get_by_id(team_id)
        if team is None:
            raise TeamNotFound()
        return team

    async def list_teams(self, filters: Optional[TeamFilters] = None) -> List[Team]:
        query = build_team_query(filters or TeamFilters())
        return await self.teams.list_newest_first(query, limit=settings.TEAM_LIST_LIMIT)

    async def create_team(self, owner_id: str, attributes: Union[TeamCreate, Dict[str, Any]]) -> Team:
        """Create a team owned by owner_id, who becomes its first member."""
        if not isinstance(attributes, TeamCreate):
            try:
                attributes = TeamCreate.model_validate(attributes)
            except ValidationError as exc:
                raise _validation_error(exc) from exc

        data = attributes.model_dump(exclude_none=True)
        data["is_public"] = True if attributes.is_public is None else attributes.is_public
        team = Team(
            **data,
            members=[owner_id],
            join_requests=[],
            created_by=owner_id,
        )
        self._check_invariants(team)

        await self.teams.create(team)
        logger.info(f"Team {team.id} ({team.name}) created by {owner_id}")
        return team

    async def update_team_attributes(
        self, team_id: str, requester_id: str, patch: Union[TeamUpdate, Dict[str, Any]]
    ) -> Team:
        if not isinstance(patch, TeamUpdate):
            # Ownership is settled before the body is judged
            rules.require_owner(await self.get_team(team_id), requester_id)
            try:
                patch = TeamUpdate.model_validate(patch)
            except ValidationError as exc:
                raise _validation_error(exc) from exc

        changes = patch.model_dump(exclude_unset=True)
        return await self._mutate(
            team_id,
            lambda team: rules.apply_attribute_patch(team, requester_id, changes),
            action="update",
            actor_id=requester_id,
        )

    async def delete_team(self, team_id: str, requester_id: str) -> str:
        team = await self.get_team(team_id)
        rules.require_owner(team, requester_id)

        if not await self.teams.delete_owned(team_id, requester_id):
            # Gone between the read and the delete
            raise TeamNotFound()
        logger.info(f"Team {team_id} deleted by {requester_id}")
        return team_id

    async def request_to_join(self, team_id: str, requester_id: str) -> Team:
        return await self._mutate(
            team_id,
            lambda team: rules.request_to_join(team, requester_id),
            action="request",
            actor_id=requester_id,
        )

    async def cancel_join_request(self, team_id: str, requester_id: str) -> Team:
        return await self._mutate(
            team_id,
            lambda team: rules.cancel_join_request(team, requester_id),
            action="cancel-request",
            actor_id=requester_id,
        )

    async def accept_join_request(self, team_id: str, owner_id: str, target_user_id: str) -> Team:
        async def target_exists(team: Team) -> None:
            # Only checked once the request itself is known to be acceptable
            if await self.users.get_raw_by_id(target_user_id) is None:
                raise UserNotFound()

        return await self._mutate(
            team_id,
            lambda team: rules.accept_join_request(team, owner_id, target_user_id),
            action="accept",
            actor_id=owner_id,
            target_id=target_user_id,
            before_write=target_exists,
        )

    async def reject_join_request(self, team_id: str, owner_id: str, target_user_id: str) -> Team:
        return await self._mutate(
            team_id,
            lambda team: rules.reject_join_request(team, owner_id, target_user_id),
            action="reject",
            actor_id=owner_id,
            target_id=target_user_id,
        )

    async def join_directly(self, team_id: str, requester_id: str) -> Team:
        # Private teams are joinable here unless DIRECT_JOIN_REQUIRES_PUBLIC is set;
        # join requests always honour is_public.
        return await self._mutate(
            team_id,
            lambda team: rules.join_directly(
                team, requester_id, require_public=self.direct_join_requires_public
            ),
            action="join",
            actor_id=requester_id,
        )

    async def leave_team(self, team_id: str, requester_id: str) -> Team:
        return await self._mutate(
            team_id,
            lambda team: rules.leave_team(team, requester_id),
            action="leave",
            actor_id=requester_id,
        )

    async def remove_member(self, team_id: str, owner_id: str, target_user_id: str) -> Team:
        return await self._mutate(
            team_id,
            lambda team: rules.remove_member(team, owner_id, target_user_id),
            action="remove",
            actor_id=owner_id,
            target_id=target_user_id,
        )

    async def _mutate(
        self,
        team_id: str,
        rule: TeamRule,
        action: str,
        actor_id: str,
        target_id: Optional[str] = None,
        before_write=None,
    ) -> Team:
        """
        Read, apply rule to a copy, and write back conditionally on the version read.

        Raises:
            TeamNotFound: team does not exist (or vanished while retrying)
            TeamServiceError: whatever rule the current state violates
            Conflict: the team kept changing for max_retries attempts
        """
        for attempt in range(1, self.max_retries + 1):
            current = await self.get_team(team_id)

            candidate = current.model_copy(deep=True)
            rule(candidate)
            if before_write is not None:
                await before_write(candidate)

            candidate.version = current.version + 1
            candidate.updated_at = utc_now()
            self._check_invariants(candidate, baseline=current)

            saved = await self.teams.replace_if_version(candidate, expected_version=current.version)
            if saved is not None:
                logger.info(
                    f"Team {team_id}: {action} by {actor_id}"
                    + (f" on {target_id}" if target_id else "")
                    + f" (version {saved.version})"
                )
                return saved

            logger.info(
                f"Team {team_id} changed during {action} (attempt {attempt}/{self.max_retries}), retrying"
            )

        logger.warning(f"Giving up on {action} for team {team_id} after {self.max_retries} attempts")
        raise Conflict()

    @staticmethod
    def _check_invariants(team: Team, baseline: Optional[Team] = None) -> None:
        violations = team.invariant_violations()
        if baseline is not None:
            # Stored documents may predate these checks; only refuse what this change adds
            already_broken = set(baseline.invariant_violations())
            violations = [v for v in violations if v not in already_broken]
        if violations:
            raise TeamInvariantError(team.id, violations)

