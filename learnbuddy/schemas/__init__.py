from learnbuddy.schemas.pattern import (
    Arrangement,
    PatternRequestSchema,
    PatternResponseSchema,
    RoundSpec,
    VisualToken,
)
from learnbuddy.schemas.progress import ProgressOutSchema, ProgressUpdateSchema, TotalUpdateSchema
from learnbuddy.schemas.achievement import AchievementCreateSchema, AchievementOutSchema

__all__ = [
    "Arrangement",
    "PatternRequestSchema",
    "PatternResponseSchema",
    "RoundSpec",
    "VisualToken",
    "ProgressOutSchema",
    "ProgressUpdateSchema",
    "TotalUpdateSchema",
    "AchievementCreateSchema",
    "AchievementOutSchema",
]
