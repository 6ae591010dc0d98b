"""Pydantic schemas for subitizing rounds: tokens, round specs, requests and responses."""
import enum
from typing import Literal

from pydantic import Field

from learnbuddy.schemas.base import CamelSchema

Size = Literal["small", "medium", "large"]


class Arrangement(str, enum.Enum):
    RANDOM = "random"
    LINE = "line"
    CIRCLE = "circle"
    DICE_PATTERN = "dice_pattern"


class VisualToken(CamelSchema):
    """One on-screen object. Coordinates are percentages of the canvas."""

    x: float = Field(ge=0, le=100)
    y: float = Field(ge=0, le=100)
    color: str
    shape: str
    size: Size | None = None

    class Config:
        frozen = True


class RoundSpec(CamelSchema):
    count: int = Field(gt=0)
    arrangement: Arrangement = Arrangement.RANDOM
    time_limit_ms: int = Field(gt=0)

    class Config:
        frozen = True


class PatternRequestSchema(CamelSchema):
    user_age: int
    difficulty: int = Field(default=1, ge=1)
    question_number: int = Field(default=1, ge=1)
    previous_correct: bool | None = None


class PatternResponseSchema(CamelSchema):
    objects: list[VisualToken]
    correct_answer: int
    difficulty: int
    time_limit: int
    educational_tip: str | None = None
    encouragement: str | None = None


class AdvisorSuggestion(CamelSchema):
    """What the remote content source proposes; clamped locally before use."""

    num_objects: int = Field(ge=1)
    arrangement: str = Arrangement.RANDOM.value
    time_limit: int | None = Field(default=None, gt=0)
    educational_tip: str | None = None
    encouragement: str | None = None
