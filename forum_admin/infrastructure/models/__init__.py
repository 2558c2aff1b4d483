"""ORM models used by the application infrastructure."""

from .comment import CommentModel
from .notification import NotificationModel
from .question import QuestionModel
from .tag import TagModel, question_tag_table
from .user import UserModel
from .vote import VoteModel

__all__ = [
    "CommentModel",
    "NotificationModel",
    "QuestionModel",
    "TagModel",
    "UserModel",
    "VoteModel",
    "question_tag_table",
]
