"""
Team Membership Rules

Pure state transitions for a team's ``members`` and ``joinRequests``.

Every rule receives a private copy of the freshly loaded team plus the
acting user, checks its preconditions in a fixed order and only then
mutates the copy. A rule that raises leaves nothing to persist. None of
these functions touch the database, so they are safe to re-run when a
concurrent write forces the caller to reload the team.
"""

from typing import Any, Dict

from app.core.exceptions import (
    AlreadyMember,
    AlreadyRequested,
    CannotRemoveOwner,
    Forbidden,
    NoPendingRequest,
    NotAcceptingRequests,
    NotAMember,
    OwnerCannotLeave,
    TeamFull,
    TeamValidationError,
)
from app.models.team import Team


def require_owner(team: Team, actor_id: str) -> None:
    if not team.is_owner(actor_id):
        raise Forbidden()


def apply_attribute_patch(team: Team, actor_id: str, changes: Dict[str, Any]) -> None:
    """Replace each attribute named in changes; membership fields are never touched."""
    require_owner(team, actor_id)

    new_max_size = changes.get("max_size", team.max_size)
    if new_max_size < len(team.members):
        raise TeamValidationError(
            f"Team size cannot be lower than the current number of members ({len(team.members)})",
            details={"field": "maxSize"},
        )

    for field, value in changes.items():
        setattr(team, field, value)


def request_to_join(team: Team, actor_id: str) -> None:
    if not team.is_public:
        raise NotAcceptingRequests()
    if team.is_full:
        raise TeamFull()
    if team.is_member(actor_id):
        raise AlreadyMember()
    if team.has_requested(actor_id):
        raise AlreadyRequested()

    team.join_requests.append(actor_id)


def cancel_join_request(team: Team, actor_id: str) -> None:
    if not team.has_requested(actor_id):
        raise NoPendingRequest("You have not requested to join this team")

    team.join_requests.remove(actor_id)


def accept_join_request(team: Team, actor_id: str, target_user_id: str) -> None:
    require_owner(team, actor_id)
    # Capacity may have shrunk or filled up since the request was filed
    if team.is_full:
        raise TeamFull()
    if not team.has_requested(target_user_id):
        raise NoPendingRequest()

    team.join_requests.remove(target_user_id)
    team.members.append(target_user_id)


def reject_join_request(team: Team, actor_id: str, target_user_id: str) -> None:
    require_owner(team, actor_id)
    if not team.has_requested(target_user_id):
        raise NoPendingRequest()

    team.join_requests.remove(target_user_id)


def join_directly(team: Team, actor_id: str, require_public: bool = False) -> None:
    """
    Add the actor straight to ``members`` without owner approval.

    Unlike ``request_to_join`` this does not look at ``is_public`` unless
    ``require_public`` is set (see ``DIRECT_JOIN_REQUIRES_PUBLIC``).
    A pending request from the actor is dropped in the same change.
    """
    if require_public and not team.is_public:
        raise NotAcceptingRequests()
    if team.is_full:
        raise TeamFull()
    if team.is_member(actor_id):
        raise AlreadyMember()

    if team.has_requested(actor_id):
        team.join_requests.remove(actor_id)
    team.members.append(actor_id)


def leave_team(team: Team, actor_id: str) -> None:
    if not team.is_member(actor_id):
        raise NotAMember("You are not a member of this team")
    if team.is_owner(actor_id):
        raise OwnerCannotLeave()

    team.members.remove(actor_id)


def remove_member(team: Team, actor_id: str, target_user_id: str) -> None:
    # Owner protection is checked before ownership and membership, so removing
    # the owner fails with CannotRemoveOwner whoever asks, even a non-owner.
    if team.is_owner(target_user_id):
        raise CannotRemoveOwner()
    require_owner(team, actor_id)
    if not team.is_member(target_user_id):
        raise NotAMember()

    team.members.remove(target_user_id)
