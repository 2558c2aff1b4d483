"""SQLAlchemy model for comments on questions."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text

from forum_admin.infrastructure.database import Base
from forum_admin.utils import now_in_app_naive_datetime


class CommentModel(Base):
    """Database representation of a comment."""

    __tablename__ = "comment"

    id = Column(Integer, primary_key=True, index=True)
    content = Column(Text, nullable=False)
    author_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    question_id = Column(Integer, ForeignKey("question.id"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["CommentModel"]
