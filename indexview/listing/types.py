"""Domain datatypes for parsed directory-listing rows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

UNKNOWN_SIZE = -1
UNKNOWN_TIMESTAMP = 0

SortKey = Literal["name", "size", "date"]
SortDirection = Literal["ascending", "descending"]
PreviewCategory = Literal["image", "video", "audio", "pdf", "text", "none"]

SORT_KEYS: tuple[str, ...] = ("name", "size", "date")
SORT_DIRECTIONS: tuple[str, ...] = ("ascending", "descending")


@dataclass(frozen=True)
class SizeInfo:
    """Size column as shown in the listing plus its decoded byte count.

    ``bytes`` is ``UNKNOWN_SIZE`` for directories and unparseable tokens.
    """

    raw: str
    bytes: int = UNKNOWN_SIZE

    @property
    def known(self) -> bool:
        return self.bytes != UNKNOWN_SIZE


@dataclass(frozen=True)
class DateInfo:
    """Date column as shown in the listing plus epoch milliseconds."""

    raw: str
    timestamp: int = UNKNOWN_TIMESTAMP


@dataclass(frozen=True)
class Entry:
    """One listing row: a file, a directory, or the parent-navigation link."""

    href: str
    name: str
    is_dir: bool
    is_parent: bool
    size: SizeInfo
    date: DateInfo


__all__ = [
    "UNKNOWN_SIZE",
    "UNKNOWN_TIMESTAMP",
    "SortKey",
    "SortDirection",
    "PreviewCategory",
    "SORT_KEYS",
    "SORT_DIRECTIONS",
    "SizeInfo",
    "DateInfo",
    "Entry",
]
