from learnbuddy.models.user import User
from learnbuddy.models.game import Game, ScoringMode
from learnbuddy.models.progress import GameProgress
from learnbuddy.models.achievement import Achievement, AchievementTier

__all__ = ["User", "Game", "ScoringMode", "GameProgress", "Achievement", "AchievementTier"]
