"""User model: a child profile picked on the selection screen (no login)."""
import uuid

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from learnbuddy.db.session import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    avatar = Column(String(255), nullable=True)
    age = Column(Integer, nullable=True)
    parent_email = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)

    progress = relationship("GameProgress", back_populates="user", uselist=True)
    achievements = relationship("Achievement", back_populates="user", uselist=True)
