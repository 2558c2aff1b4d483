"""SQLAlchemy implementation of the forum repository port."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from forum_admin.domain.entities import (
    ROLE_ADMIN,
    Comment,
    Notification,
    Question,
    QuestionAuthor,
    Tag,
    User,
    Vote,
)
from forum_admin.domain.errors import RepositoryUnavailable, ValidationError
from forum_admin.domain.queries import (
    CASCADE_ORDER,
    CascadeResult,
    CascadeStage,
    EntityType,
    FilterKey,
    GroupKey,
    SortField,
    SortOrder,
    SortSpec,
)
from forum_admin.domain.repositories import Filters, ForumRepository
from forum_admin.infrastructure.models import (
    CommentModel,
    NotificationModel,
    QuestionModel,
    TagModel,
    UserModel,
    VoteModel,
    question_tag_table,
)
from forum_admin.utils import ensure_app_naive_datetime, ensure_app_timezone

logger = logging.getLogger(__name__)

_MODELS = {
    EntityType.USERS: UserModel,
    EntityType.QUESTIONS: QuestionModel,
    EntityType.COMMENTS: CommentModel,
    EntityType.TAGS: TagModel,
    EntityType.VOTES: VoteModel,
    EntityType.NOTIFICATIONS: NotificationModel,
}

_SEARCH_COLUMNS = {
    EntityType.USERS: (UserModel.name, UserModel.email),
    EntityType.QUESTIONS: (QuestionModel.title, QuestionModel.content),
    EntityType.COMMENTS: (CommentModel.content,),
    EntityType.TAGS: (TagModel.name,),
}

_AUTHOR_COLUMNS = {
    EntityType.QUESTIONS: QuestionModel.author_id,
    EntityType.COMMENTS: CommentModel.author_id,
    EntityType.VOTES: VoteModel.user_id,
    EntityType.NOTIFICATIONS: NotificationModel.user_id,
}

_QUESTION_COLUMNS = {
    EntityType.COMMENTS: CommentModel.question_id,
    EntityType.VOTES: VoteModel.question_id,
}

_GROUP_COLUMNS = {
    (EntityType.USERS, GroupKey.ROLE): UserModel.role,
    (EntityType.QUESTIONS, GroupKey.AUTHOR): QuestionModel.author_id,
    (EntityType.COMMENTS, GroupKey.AUTHOR): CommentModel.author_id,
    (EntityType.VOTES, GroupKey.AUTHOR): VoteModel.user_id,
    (EntityType.COMMENTS, GroupKey.QUESTION): CommentModel.question_id,
    (EntityType.VOTES, GroupKey.QUESTION): VoteModel.question_id,
    (EntityType.NOTIFICATIONS, GroupKey.AUTHOR): NotificationModel.user_id,
}


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqlAlchemyForumRepository(ForumRepository):
    """Serve counts, windows, aggregates and cascades from a SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    # -- reads -------------------------------------------------------------

    def count(self, entity: EntityType, filters: Filters | None = None) -> int:
        model = _MODELS[entity]
        clauses = self._criteria(entity, filters)
        with self._guard("count", entity):
            total = self.session.query(func.count(model.id)).filter(*clauses).scalar()
        return int(total or 0)

    def fetch(
        self,
        entity: EntityType,
        filters: Filters | None,
        sort: SortSpec,
        offset: int,
        limit: int,
    ) -> list[Any]:
        model = _MODELS[entity]
        query, sort_columns, to_entity = self._listing_query(entity)
        sort_column = sort_columns.get(sort.field)
        if sort_column is None:
            raise ValidationError(
                "InvalidSortField",
                f"Cannot sort {entity.value} by {sort.field.value}",
                field="sortBy",
            )
        ordering = sort_column.asc() if sort.order is SortOrder.ASC else sort_column.desc()
        query = (
            query.filter(*self._criteria(entity, filters))
            .order_by(ordering, model.id.asc())
            .offset(max(offset, 0))
            .limit(max(limit, 0))
        )
        with self._guard("fetch", entity):
            rows = query.all()
        return [to_entity(row) for row in rows]

    def aggregate_count(self, entity: EntityType, group_by: GroupKey) -> dict[Any, int]:
        if (entity, group_by) == (EntityType.QUESTIONS, GroupKey.TAG):
            query = self.session.query(
                question_tag_table.c.tag_id,
                func.count(question_tag_table.c.question_id),
            ).group_by(question_tag_table.c.tag_id)
        else:
            column = _GROUP_COLUMNS.get((entity, group_by))
            if column is None:
                raise ValidationError(
                    "UnsupportedAggregation",
                    f"Cannot group {entity.value} by {group_by.value}",
                )
            model = _MODELS[entity]
            query = self.session.query(column, func.count(model.id)).group_by(column)
        with self._guard("aggregate_count", entity):
            rows = query.all()
        return {key: int(value) for key, value in rows}

    def aggregate_sum(self, entity: EntityType, group_by: GroupKey) -> dict[Any, int]:
        column = _GROUP_COLUMNS.get((entity, group_by))
        if entity is not EntityType.VOTES or column is None:
            raise ValidationError(
                "UnsupportedAggregation",
                f"Cannot sum {entity.value} by {group_by.value}",
            )
        query = self.session.query(column, func.sum(VoteModel.value)).group_by(column)
        with self._guard("aggregate_sum", entity):
            rows = query.all()
        return {key: int(value or 0) for key, value in rows}

    def list_ids(self, entity: EntityType) -> list[int]:
        model = _MODELS[entity]
        with self._guard("list_ids", entity):
            rows = self.session.query(model.id).order_by(model.id.asc()).all()
        return [row_id for (row_id,) in rows]

    def get_many(self, entity: EntityType, ids: Sequence[int]) -> dict[int, Any]:
        if not ids:
            return {}
        model = _MODELS[entity]
        unique_ids = {int(item) for item in ids}
        if entity in (EntityType.VOTES, EntityType.NOTIFICATIONS):
            query = self.session.query(model)
            to_entity = self._simple_converter(entity)
        else:
            query, _, to_entity = self._listing_query(entity)
        with self._guard("get_many", entity):
            rows = query.filter(model.id.in_(unique_ids)).all()
        records = [to_entity(row) for row in rows]
        return {record.id: record for record in records}

    def find_inactive_user_ids(
        self, cutoff: datetime, *, include_dormant: bool = False
    ) -> list[int]:
        naive_cutoff = ensure_app_naive_datetime(cutoff)

        def no_activity(model, owner_column):
            activity = select(model.id).where(owner_column == UserModel.id)
            if include_dormant:
                activity = activity.where(model.created_at >= naive_cutoff)
            return ~activity.exists()

        query = (
            self.session.query(UserModel.id)
            .filter(
                UserModel.created_at < naive_cutoff,
                UserModel.role != ROLE_ADMIN,
                no_activity(QuestionModel, QuestionModel.author_id),
                no_activity(CommentModel, CommentModel.author_id),
                no_activity(VoteModel, VoteModel.user_id),
            )
            .order_by(UserModel.id.asc())
        )
        with self._guard("find_inactive_user_ids", EntityType.USERS):
            rows = query.all()
        return [user_id for (user_id,) in rows]

    @contextmanager
    def snapshot(self) -> Iterator["SqlAlchemyForumRepository"]:
        """Run the block's reads inside one transaction.

        Backends with repeatable-read or snapshot isolation give a single
        point-in-time view. Under read-committed isolation the tolerated
        staleness window is the duration of the block.
        """

        with self._guard("snapshot", None):
            self.session.connection()
        try:
            yield self
        finally:
            self.session.rollback()

    def describe(self) -> dict[str, Any]:
        bind = self.session.get_bind()
        return {
            "backend": bind.dialect.name,
            "driver": bind.dialect.driver,
            "tables": sorted(model.__tablename__ for model in _MODELS.values()),
        }

    # -- writes ------------------------------------------------------------

    def delete_where(self, entity: EntityType, predicate: Filters) -> int:
        clauses = self._criteria(entity, predicate)
        if not clauses:
            raise ValidationError(
                "EmptyPredicate", f"Refusing to delete every {entity.value} record"
            )
        model = _MODELS[entity]
        statement = (
            delete(model)
            .where(*clauses)
            .execution_options(synchronize_session=False)
        )
        with self._guard("delete_where", entity):
            result = self.session.execute(statement)
            self.session.commit()
        return int(result.rowcount or 0)

    def delete_cascade(self, user_id: int) -> CascadeResult:
        result = CascadeResult()
        stage = CASCADE_ORDER[0]
        try:
            for stage in CASCADE_ORDER:
                result.counts[stage.value] = self._delete_stage(stage, user_id)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error(
                "Cascade delete of user %s failed at stage %s: %s", user_id, stage.value, exc
            )
            raise RepositoryUnavailable(
                f"Cascade delete of user {user_id} failed at stage {stage.value}",
                operation="delete_cascade",
                entity=EntityType.USERS.value,
                stage=stage.value,
            ) from exc
        return result

    def _delete_stage(self, stage: CascadeStage, user_id: int) -> int:
        owned_questions = select(QuestionModel.id).where(QuestionModel.author_id == user_id)

        if stage is CascadeStage.VOTES:
            statement = delete(VoteModel).where(
                or_(VoteModel.user_id == user_id, VoteModel.question_id.in_(owned_questions))
            )
        elif stage is CascadeStage.COMMENTS:
            statement = delete(CommentModel).where(
                or_(
                    CommentModel.author_id == user_id,
                    CommentModel.question_id.in_(owned_questions),
                )
            )
        elif stage is CascadeStage.QUESTIONS:
            self.session.execute(
                delete(question_tag_table).where(
                    question_tag_table.c.question_id.in_(owned_questions)
                )
            )
            statement = delete(QuestionModel).where(QuestionModel.author_id == user_id)
        elif stage is CascadeStage.NOTIFICATIONS:
            statement = delete(NotificationModel).where(NotificationModel.user_id == user_id)
        else:
            statement = delete(UserModel).where(UserModel.id == user_id)

        outcome = self.session.execute(
            statement.execution_options(synchronize_session=False)
        )
        return int(outcome.rowcount or 0)

    # -- helpers -----------------------------------------------------------

    @contextmanager
    def _guard(self, operation: str, entity: EntityType | None) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.session.rollback()
            entity_name = entity.value if entity is not None else None
            logger.error("Repository %s failed for %s: %s", operation, entity_name, exc)
            raise RepositoryUnavailable(
                f"Repository {operation} failed for {entity_name or 'dataset'}",
                operation=operation,
                entity=entity_name,
            ) from exc

    def _criteria(self, entity: EntityType, filters: Filters | None) -> list:
        model = _MODELS[entity]
        clauses = []
        for key, value in (filters or {}).items():
            if value is None:
                continue
            clause = None
            if key is FilterKey.SEARCH and entity in _SEARCH_COLUMNS:
                pattern = f"%{_escape_like(str(value))}%"
                clause = or_(
                    *(column.ilike(pattern, escape="\\") for column in _SEARCH_COLUMNS[entity])
                )
            elif key is FilterKey.ROLE and entity is EntityType.USERS:
                clause = UserModel.role == value
            elif key is FilterKey.AUTHOR_ID and entity in _AUTHOR_COLUMNS:
                clause = _AUTHOR_COLUMNS[entity] == value
            elif key is FilterKey.QUESTION_ID and entity in _QUESTION_COLUMNS:
                clause = _QUESTION_COLUMNS[entity] == value
            elif key is FilterKey.TAG_ID and entity is EntityType.QUESTIONS:
                clause = QuestionModel.id.in_(
                    select(question_tag_table.c.question_id).where(
                        question_tag_table.c.tag_id == value
                    )
                )
            elif key is FilterKey.CREATED_SINCE and hasattr(model, "created_at"):
                clause = model.created_at >= ensure_app_naive_datetime(value)
            elif key is FilterKey.CREATED_BEFORE and hasattr(model, "created_at"):
                clause = model.created_at < ensure_app_naive_datetime(value)
            elif key is FilterKey.IS_READ and entity is EntityType.NOTIFICATIONS:
                clause = (
                    NotificationModel.read_at.isnot(None)
                    if value
                    else NotificationModel.read_at.is_(None)
                )
            if clause is None:
                raise ValidationError(
                    "InvalidFilterKey",
                    f"Filter {key.value} is not supported for {entity.value}",
                    field=key.value,
                )
            clauses.append(clause)
        return clauses

    def _listing_query(self, entity: EntityType) -> tuple[Query, dict, Any]:
        """Return the base query, sortable columns and row converter for ``entity``."""

        if entity is EntityType.USERS:
            question_count = self._owned_count(QuestionModel, QuestionModel.author_id)
            comment_count = self._owned_count(CommentModel, CommentModel.author_id)
            vote_count = self._owned_count(VoteModel, VoteModel.user_id)
            query = self.session.query(UserModel, question_count, comment_count, vote_count)
            sorts = {
                SortField.CREATED_AT: UserModel.created_at,
                SortField.NAME: UserModel.name,
                SortField.EMAIL: UserModel.email,
                SortField.ROLE: UserModel.role,
            }
            return query, sorts, self._user_from_row

        if entity is EntityType.QUESTIONS:
            votes = (
                select(
                    VoteModel.question_id.label("question_id"),
                    func.sum(VoteModel.value).label("score"),
                    func.count(VoteModel.id).label("vote_count"),
                )
                .group_by(VoteModel.question_id)
                .subquery()
            )
            comments = (
                select(
                    CommentModel.question_id.label("question_id"),
                    func.count(CommentModel.id).label("comment_count"),
                )
                .group_by(CommentModel.question_id)
                .subquery()
            )
            score = func.coalesce(votes.c.score, 0)
            query = (
                self.session.query(
                    QuestionModel,
                    score,
                    func.coalesce(votes.c.vote_count, 0),
                    func.coalesce(comments.c.comment_count, 0),
                )
                .outerjoin(votes, votes.c.question_id == QuestionModel.id)
                .outerjoin(comments, comments.c.question_id == QuestionModel.id)
            )
            sorts = {
                SortField.CREATED_AT: QuestionModel.created_at,
                SortField.UPDATED_AT: QuestionModel.updated_at,
                SortField.TITLE: QuestionModel.title,
                SortField.VOTE_SCORE: score,
            }
            return query, sorts, self._question_from_row

        if entity is EntityType.TAGS:
            question_count = (
                select(func.count(question_tag_table.c.question_id))
                .where(question_tag_table.c.tag_id == TagModel.id)
                .correlate(TagModel)
                .scalar_subquery()
            )
            query = self.session.query(TagModel, question_count)
            sorts = {SortField.NAME: TagModel.name, SortField.QUESTION_COUNT: question_count}
            return query, sorts, self._tag_from_row

        if entity is EntityType.COMMENTS:
            query = self.session.query(CommentModel)
            sorts = {SortField.CREATED_AT: CommentModel.created_at}
            return query, sorts, self._simple_converter(entity)

        raise ValidationError("InvalidEntityType", f"{entity.value} cannot be listed")

    @staticmethod
    def _owned_count(model, owner_column):
        return (
            select(func.count(model.id))
            .where(owner_column == UserModel.id)
            .correlate(UserModel)
            .scalar_subquery()
        )

    @staticmethod
    def _user_from_row(row) -> User:
        model, question_count, comment_count, vote_count = row
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            role=model.role,
            image=model.image,
            created_at=ensure_app_timezone(model.created_at),
            question_count=int(question_count or 0),
            comment_count=int(comment_count or 0),
            vote_count=int(vote_count or 0),
        )

    @staticmethod
    def _question_from_row(row) -> Question:
        model, score, vote_count, comment_count = row
        author = model.author
        return Question(
            id=model.id,
            title=model.title,
            content=model.content,
            image_url=model.image_url,
            author=(
                QuestionAuthor(
                    id=author.id, name=author.name, email=author.email, image=author.image
                )
                if author is not None
                else None
            ),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            tags=sorted(
                (Tag(id=tag.id, name=tag.name) for tag in model.tags),
                key=lambda tag: (tag.name, tag.id),
            ),
            comment_count=int(comment_count or 0),
            vote_count=int(vote_count or 0),
            vote_score=int(score or 0),
        )

    @staticmethod
    def _tag_from_row(row) -> Tag:
        model, question_count = row
        return Tag(id=model.id, name=model.name, question_count=int(question_count or 0))

    @staticmethod
    def _simple_converter(entity: EntityType):
        if entity is EntityType.COMMENTS:
            return lambda model: Comment(
                id=model.id,
                content=model.content,
                author_id=model.author_id,
                question_id=model.question_id,
                created_at=ensure_app_timezone(model.created_at),
            )
        if entity is EntityType.VOTES:
            return lambda model: Vote(
                id=model.id,
                user_id=model.user_id,
                question_id=model.question_id,
                value=model.value,
                created_at=ensure_app_timezone(model.created_at),
            )
        return lambda model: Notification(
            id=model.id,
            user_id=model.user_id,
            message=model.message,
            created_at=ensure_app_timezone(model.created_at),
            read_at=ensure_app_timezone(model.read_at),
        )


__all__ = ["SqlAlchemyForumRepository"]
