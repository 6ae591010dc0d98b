"""Pydantic schemas for achievements and the per-game tier overview."""
from datetime import datetime

from pydantic import Field

from learnbuddy.models.achievement import AchievementTier
from learnbuddy.schemas.base import CamelSchema


class AchievementCreateSchema(CamelSchema):
    user_id: str = Field(min_length=1)
    game_id: str | None = None
    title: str = Field(min_length=1)
    description: str
    icon: str
    tier: AchievementTier | None = None


class AchievementOutSchema(CamelSchema):
    id: str
    user_id: str
    game_id: str | None
    title: str
    description: str
    icon: str
    tier: AchievementTier | None = None
    unlocked_at: datetime | None = None


class TierStatusSchema(CamelSchema):
    tier: AchievementTier
    threshold: int
    unlocked: bool


class GameTierOverviewSchema(CamelSchema):
    game_id: str
    title: str
    icon: str
    total_score: int
    tiers: list[TierStatusSchema]
