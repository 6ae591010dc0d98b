"""Pydantic schemas for user profiles and the game catalog."""
from datetime import datetime

from pydantic import Field

from learnbuddy.models.game import ScoringMode
from learnbuddy.schemas.base import CamelSchema


class UserCreateSchema(CamelSchema):
    name: str = Field(min_length=1, max_length=255)
    avatar: str | None = None
    age: int | None = Field(default=None, ge=1, le=18)
    parent_email: str | None = None


class UserOutSchema(CamelSchema):
    id: str
    name: str
    avatar: str | None = None
    age: int | None = None
    parent_email: str | None = None
    created_at: datetime | None = None


class GameOutSchema(CamelSchema):
    id: str
    title: str
    description: str
    icon: str
    category: str
    difficulty: int
    is_active: bool
    scoring_mode: ScoringMode
