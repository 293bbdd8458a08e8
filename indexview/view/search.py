"""Trailing-edge debounce for search-box input.

The coordinator keeps a deadline instead of a timer thread; the owning event
loop calls ``poll`` to fire it.
"""

from __future__ import annotations

import time
from collections.abc import Callable

SEARCH_DEBOUNCE_SECONDS = 0.150


def normalize_query(raw: str) -> str:
    return (raw or "").strip().lower()


class SearchCoordinator:
    def __init__(
        self,
        on_query: Callable[[str], None],
        delay: float = SEARCH_DEBOUNCE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._on_query = on_query
        self.delay = delay
        self._clock = clock
        self._pending_query: str | None = None
        self._deadline: float | None = None

    @property
    def pending(self) -> bool:
        return self._deadline is not None

    @property
    def deadline(self) -> float | None:
        return self._deadline

    def input(self, raw: str, now: float | None = None) -> bool:
        """Handle one input event; return whether ``on_query`` fired right away.

        Any pending schedule is discarded. An empty query fires immediately,
        anything else is scheduled ``delay`` seconds out.
        """
        self.cancel()
        query = normalize_query(raw)
        if not query:
            self._on_query("")
            return True
        current = self._clock() if now is None else now
        self._pending_query = query
        self._deadline = current + self.delay
        return False

    def cancel(self) -> None:
        self._pending_query = None
        self._deadline = None

    def time_until_due(self, now: float | None = None) -> float | None:
        """Seconds until the pending query fires, ``None`` when idle."""
        if self._deadline is None:
            return None
        current = self._clock() if now is None else now
        return max(0.0, self._deadline - current)

    def poll(self, now: float | None = None) -> bool:
        """Fire the pending query if its quiet period has elapsed."""
        if self._deadline is None:
            return False
        current = self._clock() if now is None else now
        if current < self._deadline:
            return False
        query = self._pending_query or ""
        self.cancel()
        self._on_query(query)
        return True


__all__ = ["SEARCH_DEBOUNCE_SECONDS", "normalize_query", "SearchCoordinator"]
