"""
Team Service Errors

Expected, recoverable business errors raised by the team membership core.
Each error carries the kind reported to clients (``code``), the HTTP status
the API layer maps it to and a human-readable default message.
"""

from typing import Any, Optional


class TeamServiceError(Exception):
    """Base exception for rule violations in the teams domain."""

    code: str = "TeamServiceError"
    status_code: int = 400
    default_message: str = "Team operation failed"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_error(self) -> dict:
        error = {"code": self.code}
        if self.details is not None:
            error["details"] = self.details
        return error


class NotFound(TeamServiceError):
    code = "NotFound"
    status_code = 404
    default_message = "Resource not found"


class TeamNotFound(NotFound):
    default_message = "Team not found"


class UserNotFound(NotFound):
    default_message = "User not found"


class Forbidden(TeamServiceError):
    code = "Forbidden"
    status_code = 403
    default_message = "You are not authorized to manage this team"


class TeamFull(TeamServiceError):
    code = "TeamFull"
    default_message = "This team is already full"


class AlreadyMember(TeamServiceError):
    code = "AlreadyMember"
    default_message = "You are already a member of this team"


class AlreadyRequested(TeamServiceError):
    code = "AlreadyRequested"
    default_message = "You have already requested to join this team"


class NoPendingRequest(TeamServiceError):
    code = "NoPendingRequest"
    default_message = "No pending join request found for this user"


class NotAMember(TeamServiceError):
    code = "NotAMember"
    default_message = "User is not a member of this team"


class NotAcceptingRequests(TeamServiceError):
    code = "NotAcceptingRequests"
    default_message = "This team is not accepting join requests"


class OwnerCannotLeave(TeamServiceError):
    code = "OwnerCannotLeave"
    default_message = (
        "Team creator cannot leave the team. Transfer ownership or delete the team instead."
    )


class CannotRemoveOwner(TeamServiceError):
    code = "CannotRemoveOwner"
    default_message = "Cannot remove the team creator"


class TeamValidationError(TeamServiceError):
    code = "ValidationError"
    default_message = "Please provide all required fields"


class Conflict(TeamServiceError):
    """The team kept changing underneath us; safe for the client to retry."""

    code = "Conflict"
    status_code = 409
    default_message = "The team was modified concurrently, please retry"


class TeamInvariantError(Exception):
    """A computed team state violates a membership invariant.

    Raised only when rule code is wrong; never mapped to a 4xx.
    """

    def __init__(self, team_id: str, violations: list):
        self.team_id = team_id
        self.violations = violations
        super().__init__(f"Team {team_id} violates invariants: {'; '.join(violations)}")
