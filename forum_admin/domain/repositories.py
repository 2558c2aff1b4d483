"""Repository port consumed by the administrative engine.

Use cases depend only on this abstraction; the SQLAlchemy adapter in
``forum_admin.infrastructure.repositories`` is the production implementation.
Every method is expected to be individually consistent. Adapters translate
their own failures into :class:`~forum_admin.domain.errors.RepositoryUnavailable`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from contextlib import AbstractContextManager
from datetime import datetime
from typing import Any

from .queries import CascadeResult, EntityType, FilterKey, GroupKey, SortSpec

Filters = Mapping[FilterKey, Any]


class ForumRepository(ABC):
    """Read/write interface over the forum dataset."""

    @abstractmethod
    def count(self, entity: EntityType, filters: Filters | None = None) -> int:
        """Return how many ``entity`` records match ``filters``."""
        raise NotImplementedError

    @abstractmethod
    def fetch(
        self,
        entity: EntityType,
        filters: Filters | None,
        sort: SortSpec,
        offset: int,
        limit: int,
    ) -> list[Any]:
        """Return one window of matching records.

        The entity id ascending is always applied as secondary sort key.
        """
        raise NotImplementedError

    @abstractmethod
    def aggregate_count(self, entity: EntityType, group_by: GroupKey) -> dict[Any, int]:
        """Return ``{group value: record count}`` for non-empty groups."""
        raise NotImplementedError

    @abstractmethod
    def aggregate_sum(self, entity: EntityType, group_by: GroupKey) -> dict[Any, int]:
        """Return ``{group value: sum of the entity measure}`` (vote values)."""
        raise NotImplementedError

    @abstractmethod
    def list_ids(self, entity: EntityType) -> list[int]:
        """Return every id of ``entity`` in ascending order."""
        raise NotImplementedError

    @abstractmethod
    def get_many(self, entity: EntityType, ids: Sequence[int]) -> dict[int, Any]:
        """Return the records with the given ids, keyed by id."""
        raise NotImplementedError

    @abstractmethod
    def find_inactive_user_ids(
        self, cutoff: datetime, *, include_dormant: bool = False
    ) -> list[int]:
        """Return non-admin users created before ``cutoff`` without activity.

        With ``include_dormant`` false only users that never posted a
        question, comment or vote qualify. With it true users whose last
        activity precedes ``cutoff`` qualify as well.
        """
        raise NotImplementedError

    @abstractmethod
    def delete_where(self, entity: EntityType, predicate: Filters) -> int:
        """Delete matching records and return the number removed."""
        raise NotImplementedError

    @abstractmethod
    def delete_cascade(self, user_id: int) -> CascadeResult:
        """Remove a user and every dependent row atomically.

        Stages run in :data:`~forum_admin.domain.queries.CASCADE_ORDER`. A
        failure rolls the user back and raises ``RepositoryUnavailable`` with
        ``stage`` set. A missing user yields an all-zero result.
        """
        raise NotImplementedError

    @abstractmethod
    def snapshot(self) -> AbstractContextManager["ForumRepository"]:
        """Group the reads performed inside the block into one consistent view."""
        raise NotImplementedError

    @abstractmethod
    def describe(self) -> dict[str, Any]:
        """Return backend diagnostics for system reports."""
        raise NotImplementedError


__all__ = ["Filters", "ForumRepository"]
