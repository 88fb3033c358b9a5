"""
Shared Constants

Centralized constants used across the application to ensure consistency.
"""

from typing import List

# Skill levels a team can advertise
SKILL_LEVEL_BEGINNER = "Beginner"
SKILL_LEVEL_INTERMEDIATE = "Intermediate"
SKILL_LEVEL_ADVANCED = "Advanced"

MIN_TEAM_SIZE = 2

# Team attributes that can never be cleared (snake_case model field names)
TEAM_REQUIRED_ATTRIBUTES: List[str] = [
    "name",
    "sport",
    "city",
    "state",
    "skill_level",
    "max_size",
    "description",
    "contact_details",
]

# Fields of a user document exposed when enriching teams
USER_PROFILE_PROJECTION = {"_id": 1, "fullName": 1, "email": 1, "profilePhoto": 1}

# Fields searched by the teams text index
TEAM_TEXT_SEARCH_FIELDS: List[str] = [
    "name",
    "description",
    "city",
    "state",
    "district",
    "sport",
]
