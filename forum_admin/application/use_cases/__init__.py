"""Aggregate application use cases."""

from .actions import AdminAction, dispatch_action
from .analytics import get_overview
from .queries import build_query, execute_query, list_records

__all__ = [
    "AdminAction",
    "build_query",
    "dispatch_action",
    "execute_query",
    "get_overview",
    "list_records",
]
