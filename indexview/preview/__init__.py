"""Preview support: category tables, text fetching, and the session state machine."""

from __future__ import annotations

from .classify import classify, classify_entry, file_extension, file_kind
from .fetcher import TextFetchResult, TextFetchScheduler, fetch_text_bytes
from .session import TEXT_PREVIEW_MAX_BYTES, PreviewManager, PreviewSession, truncate_text
from .types import (
    FetchError,
    FetchFailure,
    HttpStatusFailure,
    PreviewFailed,
    PreviewIdle,
    PreviewLoaded,
    PreviewLoading,
    PreviewNotSupportedError,
    PreviewStatus,
    TransportFailure,
)

__all__ = [
    "classify",
    "classify_entry",
    "file_extension",
    "file_kind",
    "fetch_text_bytes",
    "TextFetchResult",
    "TextFetchScheduler",
    "TEXT_PREVIEW_MAX_BYTES",
    "PreviewManager",
    "PreviewSession",
    "truncate_text",
    "FetchError",
    "FetchFailure",
    "HttpStatusFailure",
    "TransportFailure",
    "PreviewIdle",
    "PreviewLoading",
    "PreviewLoaded",
    "PreviewFailed",
    "PreviewStatus",
    "PreviewNotSupportedError",
]
