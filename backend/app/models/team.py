import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.core import ensure_utc, utc_now
from app.core.config import settings
from app.core.constants import MIN_TEAM_SIZE, SKILL_LEVEL_BEGINNER


class Team(BaseModel):
    """Team document as stored in the ``teams`` collection (camelCase keys)."""

    model_config = ConfigDict(
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), alias="_id")
    name: str
    sport: str
    city: str
    state: str
    district: Optional[str] = None
    skill_level: str = SKILL_LEVEL_BEGINNER
    description: str
    contact_details: str
    image_url: Optional[str] = Field(default_factory=lambda: settings.DEFAULT_TEAM_IMAGE_URL)
    max_size: int
    members: List[str] = []
    join_requests: List[str] = []
    created_by: str
    is_public: bool = True
    version: int = 0
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _as_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    @field_validator("version", mode="before")
    @classmethod
    def _legacy_version(cls, v):
        # Documents written before versioning carry no counter
        return 0 if v is None else v

    def is_member(self, user_id: str) -> bool:
        return user_id in self.members

    def has_requested(self, user_id: str) -> bool:
        return user_id in self.join_requests

    def is_owner(self, user_id: str) -> bool:
        return self.created_by == user_id

    @property
    def is_full(self) -> bool:
        return len(self.members) >= self.max_size

    def invariant_violations(self) -> List[str]:
        """List every membership invariant this team currently breaks."""
        violations = []
        if len(set(self.members)) != len(self.members):
            violations.append("members contains duplicates")
        if len(set(self.join_requests)) != len(self.join_requests):
            violations.append("joinRequests contains duplicates")
        if self.max_size < MIN_TEAM_SIZE:
            violations.append(f"maxSize is below {MIN_TEAM_SIZE}")
        if len(self.members) > self.max_size:
            violations.append("members exceeds maxSize")
        if set(self.members) & set(self.join_requests):
            violations.append("joinRequests overlaps members")
        if self.created_by not in self.members:
            violations.append("owner is not a member")
        if self.created_by in self.join_requests:
            violations.append("owner has a pending join request")
        return violations
