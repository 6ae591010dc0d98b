"""GameProgress model: one per (user, game). Last/best/lifetime scores and play count."""
import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from learnbuddy.db.session import Base


class GameProgress(Base):
    __tablename__ = "game_progress"
    __table_args__ = (UniqueConstraint("user_id", "game_id", name="uq_game_progress_user_game"),)

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    game_id = Column(String(36), ForeignKey("games.id"), nullable=False, index=True)

    level = Column(Integer, nullable=False, default=1)
    score = Column(Integer, nullable=False, default=0)  # latest round only
    best_score = Column(Integer, nullable=False, default=0)
    total_score = Column(Integer, nullable=False, default=0)  # lifetime, never decreases
    times_played = Column(Integer, nullable=False, default=0)
    last_played_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)

    user = relationship("User", back_populates="progress")
    game = relationship("Game", back_populates="progress")
