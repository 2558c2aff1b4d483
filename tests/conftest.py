"""Shared fixtures: a throw-away SQLite database and small data builders."""

from __future__ import annotations

import os
import sys
import tempfile
from datetime import timedelta
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "forum_admin_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["APP_TIMEZONE"] = "UTC"

from forum_admin.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from forum_admin.domain.entities import ROLE_ADMIN, ROLE_USER, UPVOTE  # noqa: E402
from forum_admin.domain.queries import AdminContext  # noqa: E402
from forum_admin.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from forum_admin.infrastructure.models import (  # noqa: E402
    CommentModel,
    NotificationModel,
    QuestionModel,
    TagModel,
    UserModel,
    VoteModel,
)
from forum_admin.infrastructure.repositories import SqlAlchemyForumRepository  # noqa: E402
from forum_admin.utils import now_in_app_naive_datetime  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    """Start every test from empty tables."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session():
    with SessionLocal() as db:
        yield db


@pytest.fixture()
def repository(session):
    return SqlAlchemyForumRepository(session)


@pytest.fixture()
def admin_context() -> AdminContext:
    return AdminContext(actor_id=1, is_admin=True)


class ForumBuilder:
    """Insert rows with sensible defaults; ``days_ago`` sets ``created_at``."""

    def __init__(self, session) -> None:
        self.session = session
        self.now = now_in_app_naive_datetime()
        self._sequence = 0

    def _ago(self, days_ago: float):
        return self.now - timedelta(days=days_ago)

    def _add(self, model):
        self.session.add(model)
        self.session.commit()
        return model.id

    def user(self, name=None, *, role=ROLE_USER, email=None, days_ago=100) -> int:
        self._sequence += 1
        return self._add(
            UserModel(
                name=name or f"User {self._sequence}",
                email=email or f"user{self._sequence}@example.com",
                role=role,
                created_at=self._ago(days_ago),
            )
        )

    def admin(self, name="Admin", **kwargs) -> int:
        return self.user(name, role=ROLE_ADMIN, **kwargs)

    def tag(self, name: str) -> int:
        return self._add(TagModel(name=name))

    def question(self, author_id, title="A question", *, tag_ids=(), days_ago=50) -> int:
        question = QuestionModel(
            title=title,
            content="Body",
            author_id=author_id,
            created_at=self._ago(days_ago),
            updated_at=self._ago(days_ago),
        )
        question.tags = [self.session.get(TagModel, tag_id) for tag_id in tag_ids]
        return self._add(question)

    def comment(self, author_id, question_id, *, days_ago=40) -> int:
        return self._add(
            CommentModel(
                content="A comment",
                author_id=author_id,
                question_id=question_id,
                created_at=self._ago(days_ago),
            )
        )

    def vote(self, user_id, question_id, value=UPVOTE, *, days_ago=40) -> int:
        return self._add(
            VoteModel(
                user_id=user_id,
                question_id=question_id,
                value=value,
                created_at=self._ago(days_ago),
            )
        )

    def notification(self, user_id, *, read=False, days_ago=10) -> int:
        return self._add(
            NotificationModel(
                user_id=user_id,
                message="Something happened",
                created_at=self._ago(days_ago),
                read_at=self._ago(days_ago / 2) if read else None,
            )
        )


@pytest.fixture()
def forum(session) -> ForumBuilder:
    return ForumBuilder(session)
