"""SQLAlchemy model for the user table."""

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from forum_admin.domain.entities import ROLE_USER
from forum_admin.infrastructure.database import Base
from forum_admin.utils import now_in_app_naive_datetime


class UserModel(Base):
    """Database representation of a forum member."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=True)
    email = Column(String(120), nullable=False, unique=True, index=True)
    role = Column(String(20), nullable=False, default=ROLE_USER, index=True)
    image = Column(String(255), nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)

    questions = relationship("QuestionModel", back_populates="author")


__all__ = ["UserModel"]
