"""SQLAlchemy models for tags and the question/tag association."""

from sqlalchemy import Column, ForeignKey, Integer, String, Table

from forum_admin.infrastructure.database import Base

question_tag_table = Table(
    "question_tag",
    Base.metadata,
    Column("question_id", Integer, ForeignKey("question.id"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tag.id"), primary_key=True, index=True),
)


class TagModel(Base):
    """Database representation of a tag."""

    __tablename__ = "tag"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False, unique=True)


__all__ = ["TagModel", "question_tag_table"]
