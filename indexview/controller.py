"""Single owner of listing view state, search debounce, and the active preview.

The presentation layer drives the controller from one thread: input handlers
call ``search_input``/``sort_by``/``open_preview`` and the event loop calls
``tick`` to fire debounced searches and apply finished preview downloads.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable

from .listing.breadcrumb import build_breadcrumbs
from .listing.parser import parse_listing
from .listing.source import ListingDocument
from .listing.types import Entry, SortKey
from .preview.session import PreviewManager, PreviewSession
from .render import empty_state_message
from .view.engine import SortFilterEngine
from .view.search import SEARCH_DEBOUNCE_SECONDS, SearchCoordinator

logger = logging.getLogger(__name__)

PREVIEW_POLL_SECONDS = 0.02


class BrowserController:
    def __init__(
        self,
        engine: SortFilterEngine | None = None,
        preview: PreviewManager | None = None,
        debounce: float = SEARCH_DEBOUNCE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        on_view_changed: Callable[[list[Entry]], None] | None = None,
    ) -> None:
        self.engine = engine if engine is not None else SortFilterEngine()
        self.preview = preview if preview is not None else PreviewManager()
        self.search = SearchCoordinator(self._apply_query, delay=debounce, clock=clock)
        self.document: ListingDocument | None = None
        self.rows: list[Entry] = []
        self._on_view_changed = on_view_changed

    def _refresh(self) -> list[Entry]:
        self.rows = self.engine.project()
        if self._on_view_changed is not None:
            self._on_view_changed(self.rows)
        return self.rows

    def _apply_query(self, query: str) -> None:
        self.engine.set_query(query)
        self._refresh()

    def load_document(self, document: ListingDocument) -> list[Entry]:
        """Parse ``document`` and replace the loaded entries."""
        self.document = document
        self.preview.set_resolver(document.resolve)
        entries = parse_listing(document.text)
        logger.debug("loaded %d listing entries", len(entries))
        return self.load_entries(entries)

    def load_entries(self, entries: Iterable[Entry]) -> list[Entry]:
        self.preview.close()
        self.search.cancel()
        self.engine.load(entries)
        return self._refresh()

    def view(self) -> list[Entry]:
        return list(self.rows)

    def empty_state(self) -> str | None:
        return empty_state_message(self.rows, self.engine.query)

    def breadcrumbs(self) -> list[tuple[str, str | None]]:
        base_path = self.document.base_path if self.document is not None else "/"
        return build_breadcrumbs(base_path)

    def search_input(self, raw: str, now: float | None = None) -> bool:
        """Feed raw search-box text; returns whether the view refreshed immediately."""
        return self.search.input(raw, now)

    def sort_by(self, key: SortKey) -> list[Entry]:
        self.engine.set_sort(key)
        return self._refresh()

    def find_entry(self, name_or_href: str) -> Entry | None:
        """Look up a loaded entry by href, falling back to display name.

        Hrefs are unique; display names are not (``foo/`` and ``foo`` both show
        as ``foo``), so a name match prefers files over directories.
        """
        for entry in self.engine.entries:
            if entry.href == name_or_href:
                return entry
        named = [entry for entry in self.engine.entries if entry.name == name_or_href]
        for entry in named:
            if not entry.is_dir:
                return entry
        return named[0] if named else None

    def open_preview(self, target: Entry | str) -> PreviewSession:
        """Open a preview for an entry (or an entry name/href).

        Raises ``KeyError`` for unknown names and ``PreviewNotSupportedError``
        for entries that cannot be previewed.
        """
        entry = target if isinstance(target, Entry) else self.find_entry(target)
        if entry is None:
            raise KeyError(target)
        return self.preview.open(entry)

    def close_preview(self) -> None:
        self.preview.close()

    def tick(self, now: float | None = None) -> bool:
        """Fire a due debounced search and apply finished downloads."""
        fired = self.search.poll(now)
        changed = self.preview.drain()
        return fired or changed

    def wait_for_preview(self, timeout: float, poll_interval: float = PREVIEW_POLL_SECONDS) -> PreviewSession | None:
        """Block the caller until the active preview stops loading or ``timeout`` passes."""
        deadline = time.monotonic() + timeout
        session = self.preview.session
        while session is not None and session.is_loading:
            self.tick()
            if not session.is_loading or time.monotonic() >= deadline:
                break
            time.sleep(poll_interval)
        return self.preview.session


__all__ = ["PREVIEW_POLL_SECONDS", "BrowserController"]
