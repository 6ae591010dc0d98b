"""SQLAlchemy declarative base with every model imported so metadata is complete."""
from learnbuddy.db.session import Base

# Import all models so create_all sees them
from learnbuddy.models.achievement import Achievement  # noqa: F401
from learnbuddy.models.game import Game  # noqa: F401
from learnbuddy.models.progress import GameProgress  # noqa: F401
from learnbuddy.models.user import User  # noqa: F401

__all__ = ["Base", "User", "Game", "GameProgress", "Achievement"]
