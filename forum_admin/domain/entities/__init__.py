"""Domain entities exposed by the application."""

from .comment import Comment
from .notification import Notification
from .question import Question, QuestionAuthor
from .role import ROLE_ADMIN, ROLE_USER, ROLES
from .tag import Tag
from .user import User
from .vote import DOWNVOTE, UPVOTE, Vote

__all__ = [
    "Comment",
    "DOWNVOTE",
    "Notification",
    "Question",
    "QuestionAuthor",
    "ROLE_ADMIN",
    "ROLE_USER",
    "ROLES",
    "Tag",
    "UPVOTE",
    "User",
    "Vote",
]
