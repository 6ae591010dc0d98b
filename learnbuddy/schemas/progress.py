"""Pydantic schemas for per-game progress updates and records."""
from datetime import datetime

from pydantic import Field

from learnbuddy.schemas.base import CamelSchema
from learnbuddy.schemas.achievement import AchievementOutSchema


class ProgressUpdateSchema(CamelSchema):
    user_id: str = Field(min_length=1)
    game_id: str = Field(min_length=1)
    score: int = Field(ge=0)
    level: int | None = Field(default=None, ge=1)


class TotalUpdateSchema(CamelSchema):
    user_id: str = Field(min_length=1)
    game_id: str = Field(min_length=1)
    points_to_add: int = Field(ge=0)


class ProgressOutSchema(CamelSchema):
    user_id: str
    game_id: str
    level: int
    score: int
    best_score: int
    total_score: int
    times_played: int
    last_played_at: datetime | None = None


class ProgressUpdateOutSchema(ProgressOutSchema):
    achievements: list[AchievementOutSchema] = []


class TotalOutSchema(CamelSchema):
    total_score: int
