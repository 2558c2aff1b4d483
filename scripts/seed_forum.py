"""Utility script to fill a development database with a small forum dataset."""

from __future__ import annotations

import argparse
from datetime import timedelta

from sqlalchemy.exc import SQLAlchemyError

from forum_admin.domain.entities import DOWNVOTE, ROLE_ADMIN, ROLE_USER, UPVOTE
from forum_admin.infrastructure.database import SessionLocal, initialize_database
from forum_admin.infrastructure.models import (
    CommentModel,
    NotificationModel,
    QuestionModel,
    TagModel,
    UserModel,
    VoteModel,
)
from forum_admin.infrastructure.security import create_access_token
from forum_admin.utils import now_in_app_naive_datetime

TAG_NAMES = ("python", "sql", "fastapi", "testing", "deployment")


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for seeding."""

    parser = argparse.ArgumentParser(
        description="Seed the forum database with demo users, questions and activity.",
    )
    parser.add_argument(
        "--admin-email",
        default="admin@example.com",
        help="Email of the administrator account (default: admin@example.com)",
    )
    parser.add_argument(
        "--users",
        type=int,
        default=12,
        help="Number of regular members to create (default: 12)",
    )
    parser.add_argument(
        "--idle-users",
        type=int,
        default=3,
        help="Members created long ago without any activity (default: 3)",
    )
    return parser.parse_args()


def seed(session, *, admin_email: str, members: int, idle_members: int) -> UserModel:
    now = now_in_app_naive_datetime()

    admin = UserModel(
        name="Administrator",
        email=admin_email,
        role=ROLE_ADMIN,
        created_at=now - timedelta(days=365),
    )
    session.add(admin)

    tags = [TagModel(name=name) for name in TAG_NAMES]
    session.add_all(tags)

    users = [
        UserModel(
            name=f"Member {index}",
            email=f"member{index}@example.com",
            role=ROLE_USER,
            created_at=now - timedelta(days=5 * index),
        )
        for index in range(1, members + 1)
    ]
    session.add_all(users)

    session.add_all(
        UserModel(
            name=f"Idle {index}",
            email=f"idle{index}@example.com",
            role=ROLE_USER,
            created_at=now - timedelta(days=120 + index),
        )
        for index in range(1, idle_members + 1)
    )
    session.flush()

    questions = []
    for index, author in enumerate(users):
        question = QuestionModel(
            title=f"How do I solve problem #{index + 1}?",
            content="Details of the problem and what was already tried.",
            author_id=author.id,
            created_at=author.created_at + timedelta(days=1),
            updated_at=author.created_at + timedelta(days=1),
        )
        question.tags = list(
            dict.fromkeys([tags[index % len(tags)], tags[(index * 2 + 1) % len(tags)]])
        )
        questions.append(question)
    session.add_all(questions)
    session.flush()

    for index, question in enumerate(questions):
        for offset, voter in enumerate(users[: index % 5 + 1]):
            if voter.id == question.author_id:
                continue
            session.add(
                VoteModel(
                    user_id=voter.id,
                    question_id=question.id,
                    value=DOWNVOTE if offset % 4 == 3 else UPVOTE,
                )
            )
        commenter = users[(index + 1) % len(users)]
        session.add(
            CommentModel(
                content="Have you checked the documentation?",
                author_id=commenter.id,
                question_id=question.id,
            )
        )
        session.add(
            NotificationModel(
                user_id=question.author_id,
                message=f"New comment on question {question.id}",
                created_at=now - timedelta(days=45 if index % 2 else 2),
                read_at=now - timedelta(days=40) if index % 2 else None,
            )
        )

    session.commit()
    return admin


def main() -> None:
    """Seed the database configured through ``DATABASE_URL``."""

    args = parse_args()
    initialize_database()

    session = SessionLocal()
    try:
        admin = seed(
            session,
            admin_email=args.admin_email,
            members=max(args.users, 1),
            idle_members=max(args.idle_users, 0),
        )
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not seed the database: {exc}") from exc
    else:
        token = create_access_token(
            {"sub": str(admin.id), "role": ROLE_ADMIN}, expires_delta=timedelta(hours=12)
        )
        print(
            "Database seeded:\n"
            f"  Admin ID: {admin.id}\n"
            f"  Admin email: {admin.email}\n"
            f"  Admin token (12h): {token}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
