from learnbuddy.services.patterns import generate_pattern
from learnbuddy.services.difficulty import DifficultyScheduler
from learnbuddy.services.progress import add_to_total, record_round
from learnbuddy.services.achievements import unlock_achievement, unlock_earned_achievements
from learnbuddy.services.seeding import seed_games

__all__ = [
    "generate_pattern",
    "DifficultyScheduler",
    "add_to_total",
    "record_round",
    "unlock_achievement",
    "unlock_earned_achievements",
    "seed_games",
]
