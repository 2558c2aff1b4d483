"""Repository implementations for infrastructure layer."""

from .forum_repository import SqlAlchemyForumRepository

__all__ = ["SqlAlchemyForumRepository"]
