"""Achievement model: one-time unlock per (user, game, title), with a structured tier."""
import enum
import uuid

from sqlalchemy import Column, DateTime, Enum, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from learnbuddy.db.session import Base


class AchievementTier(str, enum.Enum):
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"


class Achievement(Base):
    __tablename__ = "achievements"
    __table_args__ = (
        UniqueConstraint("user_id", "game_id", "title", name="uq_achievements_user_game_title"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    # Null for achievements not tied to one game
    game_id = Column(String(36), ForeignKey("games.id"), nullable=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    icon = Column(String(32), nullable=False)
    tier = Column(
        Enum(AchievementTier, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=True,
    )
    unlocked_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="achievements")
    game = relationship("Game", back_populates="achievements")
