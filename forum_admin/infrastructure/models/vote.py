"""SQLAlchemy model for votes on questions."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    UniqueConstraint,
)

from forum_admin.infrastructure.database import Base
from forum_admin.utils import now_in_app_naive_datetime


class VoteModel(Base):
    """Database representation of a single vote; ``value`` is ``1`` or ``-1``."""

    __tablename__ = "vote"
    __table_args__ = (
        UniqueConstraint("user_id", "question_id", name="uq_vote_user_question"),
        CheckConstraint("value IN (-1, 1)", name="ck_vote_value"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    question_id = Column(Integer, ForeignKey("question.id"), nullable=False, index=True)
    value = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["VoteModel"]
