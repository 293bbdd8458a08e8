"""View state: sort/filter projections and debounced search."""

from __future__ import annotations

from .engine import SortFilterEngine, matches_query, partition_entries, sort_group
from .search import SEARCH_DEBOUNCE_SECONDS, SearchCoordinator, normalize_query

__all__ = [
    "SortFilterEngine",
    "matches_query",
    "partition_entries",
    "sort_group",
    "SEARCH_DEBOUNCE_SECONDS",
    "SearchCoordinator",
    "normalize_query",
]
