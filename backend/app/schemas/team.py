from datetime import datetime
from typing import Annotated, List, Literal, Optional

from pydantic import (
    AfterValidator,
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    model_validator,
)
from pydantic.alias_generators import to_camel

from app.core.constants import (
    MIN_TEAM_SIZE,
    SKILL_LEVEL_ADVANCED,
    SKILL_LEVEL_BEGINNER,
    SKILL_LEVEL_INTERMEDIATE,
    TEAM_REQUIRED_ATTRIBUTES,
)

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
SkillLevel = Literal[SKILL_LEVEL_BEGINNER, SKILL_LEVEL_INTERMEDIATE, SKILL_LEVEL_ADVANCED]


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


def _blank_to_none(v: Optional[str]) -> Optional[str]:
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v


OptionalText = Annotated[Optional[str], AfterValidator(_blank_to_none)]


class TeamCreate(CamelModel):
    name: RequiredText
    sport: RequiredText
    city: RequiredText
    state: RequiredText
    district: OptionalText = None
    skill_level: SkillLevel
    max_size: int = Field(..., ge=MIN_TEAM_SIZE)
    description: RequiredText
    contact_details: RequiredText
    image_url: OptionalText = None
    is_public: Optional[bool] = None


class TeamUpdate(CamelModel):
    """
    Partial update of a team's descriptive attributes.

    A key present in the request replaces the stored value, even when it is
    null or empty; a key that is absent leaves the stored value unchanged.
    Use ``model_fields_set`` (or ``model_dump(exclude_unset=True)``) to tell
    the two apart.
    """

    name: Optional[RequiredText] = None
    sport: Optional[RequiredText] = None
    city: Optional[RequiredText] = None
    state: Optional[RequiredText] = None
    district: OptionalText = None
    skill_level: Optional[SkillLevel] = None
    max_size: Optional[int] = Field(None, ge=MIN_TEAM_SIZE)
    description: Optional[RequiredText] = None
    contact_details: Optional[RequiredText] = None
    image_url: OptionalText = None
    is_public: Optional[bool] = None

    @model_validator(mode="after")
    def _required_fields_not_cleared(self):
        cleared = [
            to_camel(field)
            for field in TEAM_REQUIRED_ATTRIBUTES + ["is_public"]
            if field in self.model_fields_set and getattr(self, field) is None
        ]
        if cleared:
            raise ValueError(f"Cannot clear required fields: {', '.join(cleared)}")
        return self


class TeamFilters(BaseModel):
    sport: OptionalText = None
    city: OptionalText = None
    state: OptionalText = None
    district: OptionalText = None
    skill_level: OptionalText = None
    search: OptionalText = None


class UserProfile(CamelModel):
    """Lightweight projection of a user embedded in team responses."""

    id: str = Field(..., validation_alias=AliasChoices("_id", "id"))
    full_name: Optional[str] = None
    email: Optional[str] = None
    profile_photo: Optional[str] = None


class TeamResponse(CamelModel):
    id: str = Field(..., validation_alias=AliasChoices("_id", "id"))
    name: str
    sport: str
    city: str
    state: str
    district: OptionalText = None
    skill_level: str
    description: str
    contact_details: str
    image_url: Optional[str] = None
    max_size: int
    members: List[UserProfile]
    join_requests: List[UserProfile]
    created_by: UserProfile
    is_public: bool
    created_at: datetime
    updated_at: datetime


class TeamDeleted(BaseModel):
    id: str
