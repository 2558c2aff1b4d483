"""SQLAlchemy model for forum questions."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from forum_admin.infrastructure.database import Base
from forum_admin.utils import now_in_app_naive_datetime

from .tag import question_tag_table


class QuestionModel(Base):
    """Database representation of a question."""

    __tablename__ = "question"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    image_url = Column(String(255), nullable=True)
    author_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )

    author = relationship("UserModel", back_populates="questions", lazy="joined")
    tags = relationship("TagModel", secondary=question_tag_table, lazy="selectin")


__all__ = ["QuestionModel"]
