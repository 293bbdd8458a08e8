"""Listing ingestion: document loading, markup parsing, and entry datatypes."""

from __future__ import annotations

from .breadcrumb import build_breadcrumbs, format_breadcrumbs
from .parser import extract_pre_block, parse_date_to_timestamp, parse_line, parse_listing, parse_size_to_bytes
from .source import ListingDocument, ListingLoadError, load_listing_document
from .types import (
    SORT_DIRECTIONS,
    SORT_KEYS,
    UNKNOWN_SIZE,
    UNKNOWN_TIMESTAMP,
    DateInfo,
    Entry,
    PreviewCategory,
    SizeInfo,
    SortDirection,
    SortKey,
)

__all__ = [
    "DateInfo",
    "Entry",
    "SizeInfo",
    "SortKey",
    "SortDirection",
    "PreviewCategory",
    "SORT_KEYS",
    "SORT_DIRECTIONS",
    "UNKNOWN_SIZE",
    "UNKNOWN_TIMESTAMP",
    "parse_listing",
    "parse_line",
    "parse_size_to_bytes",
    "parse_date_to_timestamp",
    "extract_pre_block",
    "ListingDocument",
    "ListingLoadError",
    "load_listing_document",
    "build_breadcrumbs",
    "format_breadcrumbs",
]
