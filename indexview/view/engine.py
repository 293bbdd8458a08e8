"""Sorted and filtered projections of a parsed listing.

Rows are always grouped as ``parent + dirs + files``. Directories and files
are sorted independently, so a directory never follows a file under any sort
key or direction.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from functools import cmp_to_key

from ..listing.types import SORT_DIRECTIONS, SORT_KEYS, Entry, SortDirection, SortKey


def _compare(left: object, right: object) -> int:
    return (left > right) - (left < right)


COMPARATORS: dict[str, Callable[[Entry, Entry], int]] = {
    "name": lambda a, b: _compare(a.name.lower(), b.name.lower()),
    "size": lambda a, b: _compare(a.size.bytes, b.size.bytes),
    "date": lambda a, b: _compare(a.date.timestamp, b.date.timestamp),
}


def matches_query(entry: Entry, query: str) -> bool:
    """Case-insensitive substring match; the parent row never matches."""
    return not entry.is_parent and query.lower() in entry.name.lower()


def partition_entries(entries: Iterable[Entry]) -> tuple[list[Entry], list[Entry], list[Entry]]:
    """Split into ``(parent, dirs, files)`` keeping encounter order."""
    parents: list[Entry] = []
    dirs: list[Entry] = []
    files: list[Entry] = []
    for entry in entries:
        if entry.is_parent:
            parents.append(entry)
        elif entry.is_dir:
            dirs.append(entry)
        else:
            files.append(entry)
    return parents, dirs, files


def sort_group(entries: list[Entry], key: SortKey, direction: SortDirection) -> list[Entry]:
    compare = COMPARATORS[key]
    if direction == "descending":
        return sorted(entries, key=cmp_to_key(lambda a, b: -compare(a, b)))
    return sorted(entries, key=cmp_to_key(compare))


class SortFilterEngine:
    """Owns the loaded entries plus sort and search state."""

    def __init__(
        self,
        entries: Iterable[Entry] = (),
        sort_key: SortKey = "name",
        sort_direction: SortDirection = "ascending",
    ) -> None:
        if sort_key not in SORT_KEYS:
            raise ValueError(f"unknown sort key: {sort_key!r}")
        if sort_direction not in SORT_DIRECTIONS:
            raise ValueError(f"unknown sort direction: {sort_direction!r}")
        self.entries: list[Entry] = list(entries)
        self.sort_key: SortKey = sort_key
        self.sort_direction: SortDirection = sort_direction
        self.query = ""

    @property
    def ascending(self) -> bool:
        return self.sort_direction == "ascending"

    def load(self, entries: Iterable[Entry]) -> None:
        self.entries = list(entries)

    def set_sort(self, key: SortKey) -> None:
        """Flip direction for the active key, else switch key and sort ascending."""
        if key not in SORT_KEYS:
            raise ValueError(f"unknown sort key: {key!r}")
        if key == self.sort_key:
            self.sort_direction = "descending" if self.ascending else "ascending"
        else:
            self.sort_key = key
            self.sort_direction = "ascending"

    def set_query(self, query: str) -> None:
        self.query = query

    def project(self) -> list[Entry]:
        """Return the rows to render, in order."""
        if self.query:
            visible = [entry for entry in self.entries if matches_query(entry, self.query)]
        else:
            visible = self.entries
        parents, dirs, files = partition_entries(visible)
        return (
            parents[:1]
            + sort_group(dirs, self.sort_key, self.sort_direction)
            + sort_group(files, self.sort_key, self.sort_direction)
        )


__all__ = [
    "COMPARATORS",
    "matches_query",
    "partition_entries",
    "sort_group",
    "SortFilterEngine",
]
