"""Single active preview session with cancellable text loading.

``PreviewManager`` owns at most one ``PreviewSession``. Opening a new preview
closes the previous one; fetch results that belong to a closed session are
discarded when drained.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from ..listing.source import read_text_bytes
from ..listing.types import Entry, PreviewCategory
from .classify import classify_entry
from .fetcher import TextFetchResult, TextFetchScheduler
from .types import (
    PreviewFailed,
    PreviewIdle,
    PreviewLoaded,
    PreviewLoading,
    PreviewNotSupportedError,
    PreviewStatus,
    TransportFailure,
)

logger = logging.getLogger(__name__)

TEXT_PREVIEW_MAX_BYTES = 100 * 1024
MEDIA_CATEGORIES = frozenset({"image", "video", "audio", "pdf"})


def truncate_text(data: bytes, max_bytes: int = TEXT_PREVIEW_MAX_BYTES) -> tuple[str, bool]:
    """Clip ``data`` to ``max_bytes`` and decode it.

    Returns ``(text, truncated)``. A multi-byte UTF-8 sequence split by the cut
    is dropped instead of decoding to a replacement character.
    """
    if len(data) <= max_bytes:
        return read_text_bytes(data), False

    clipped = data[:max_bytes]
    for trim in range(4):
        try:
            return clipped[: len(clipped) - trim].decode("utf-8"), True
        except UnicodeDecodeError:
            continue
    return read_text_bytes(clipped), True


@dataclass
class PreviewSession:
    """One open preview. ``status`` is only changed by ``PreviewManager``."""

    entry: Entry
    category: PreviewCategory
    session_id: int
    url: str
    status: PreviewStatus = field(default_factory=PreviewIdle)
    closed: bool = False

    @property
    def is_loading(self) -> bool:
        return isinstance(self.status, PreviewLoading)


class PreviewManager:
    def __init__(
        self,
        scheduler: TextFetchScheduler | None = None,
        resolve_url: Callable[[str], str] | None = None,
        max_bytes: int = TEXT_PREVIEW_MAX_BYTES,
    ) -> None:
        self._scheduler = scheduler if scheduler is not None else TextFetchScheduler()
        self._resolve_url = resolve_url if resolve_url is not None else (lambda href: href)
        self.max_bytes = max_bytes
        self._session: PreviewSession | None = None
        self._ids = itertools.count(1)

    @property
    def session(self) -> PreviewSession | None:
        return self._session

    def set_resolver(self, resolve_url: Callable[[str], str]) -> None:
        self._resolve_url = resolve_url

    def open(self, entry: Entry) -> PreviewSession:
        """Open ``entry``, replacing any current session.

        Raises ``PreviewNotSupportedError`` for entries without a preview
        category.
        """
        category = classify_entry(entry)
        if category == "none":
            raise PreviewNotSupportedError(f"no preview available for {entry.name!r}")

        self.close()
        session = PreviewSession(
            entry=entry,
            category=category,
            session_id=next(self._ids),
            url=self._resolve_url(entry.href),
        )
        self._session = session

        if category in MEDIA_CATEGORIES:
            session.status = PreviewLoaded(content=None, truncated=False)
            logger.debug("preview %d: %s loaded by reference", session.session_id, category)
            return session

        session.status = PreviewLoading()
        logger.debug("preview %d: loading %s", session.session_id, session.url)
        self._scheduler.submit(session.session_id, session.url, self.max_bytes)
        return session

    def close(self) -> None:
        """Discard the current session and cancel its fetch, if any."""
        session = self._session
        if session is None:
            return
        self._session = None
        session.closed = True
        if session.is_loading:
            self._scheduler.cancel(session.session_id)
        logger.debug("preview %d: closed", session.session_id)

    def apply_result(self, result: TextFetchResult) -> bool:
        """Apply a finished fetch to the live session.

        Returns ``False`` and leaves state untouched when the result belongs to
        a closed or superseded session.
        """
        session = self._session
        if session is None or session.session_id != result.request.session_id or not session.is_loading:
            logger.debug("preview: discarding stale fetch result %d", result.request.session_id)
            return False

        if result.failure is not None:
            session.status = PreviewFailed(reason=result.failure)
        elif result.data is None:
            session.status = PreviewFailed(reason=TransportFailure("empty response"))
        else:
            content, truncated = truncate_text(result.data, self.max_bytes)
            session.status = PreviewLoaded(content=content, truncated=truncated)
        logger.debug("preview %d: %s", session.session_id, type(session.status).__name__)
        return True

    def drain(self) -> bool:
        """Apply all completed fetches; return whether the live session changed."""
        changed = False
        for result in self._scheduler.drain_results():
            changed = self.apply_result(result) or changed
        return changed


__all__ = [
    "TEXT_PREVIEW_MAX_BYTES",
    "MEDIA_CATEGORIES",
    "truncate_text",
    "PreviewSession",
    "PreviewManager",
]
