"""Game model: one catalog entry. scoring_mode decides which path feeds total_score."""
import enum
import uuid

from sqlalchemy import Boolean, Column, DateTime, Enum, Integer, String, Text
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from learnbuddy.db.session import Base


class ScoringMode(str, enum.Enum):
    ROUND = "round"  # one lump sum when the round completes
    INCREMENTAL = "incremental"  # one point per correct answer, live


class Game(Base):
    __tablename__ = "games"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), unique=True, nullable=False)
    description = Column(Text, nullable=False)
    icon = Column(String(32), nullable=False)
    category = Column(String(64), nullable=False)
    difficulty = Column(Integer, nullable=False, default=1)
    is_active = Column(Boolean, nullable=False, default=True)
    scoring_mode = Column(
        Enum(ScoringMode, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ScoringMode.ROUND,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)

    progress = relationship("GameProgress", back_populates="game")
    achievements = relationship("Achievement", back_populates="game")
