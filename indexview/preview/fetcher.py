"""Background worker for text-preview downloads."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from queue import Empty, Queue
from urllib.parse import urlparse
from urllib.request import url2pathname

import requests

from .types import FetchError, FetchFailure, HttpStatusFailure, TransportFailure

logger = logging.getLogger(__name__)

FETCH_CHUNK_BYTES = 16 * 1024
DEFAULT_FETCH_TIMEOUT_SECONDS = 10.0

FetchTransport = Callable[[str, int, float], bytes]


def is_success_status(status_code: int) -> bool:
    return 200 <= status_code < 400


def fetch_text_bytes(url: str, max_bytes: int, timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS) -> bytes:
    """Read at most ``max_bytes + 1`` bytes from ``url``.

    The extra byte lets the caller tell a file of exactly ``max_bytes`` from a
    larger one. ``file://`` URLs are read from disk. Failures raise
    ``FetchError``.
    """
    limit = max_bytes + 1
    parsed = urlparse(url)
    if parsed.scheme == "file":
        try:
            with Path(url2pathname(parsed.path)).open("rb") as handle:
                return handle.read(limit)
        except OSError as exc:
            raise FetchError(TransportFailure(str(exc))) from exc

    try:
        with requests.get(url, stream=True, timeout=timeout) as response:
            if not is_success_status(response.status_code):
                raise FetchError(HttpStatusFailure(response.status_code))
            chunks: list[bytes] = []
            total = 0
            for chunk in response.iter_content(chunk_size=FETCH_CHUNK_BYTES):
                chunks.append(chunk)
                total += len(chunk)
                if total >= limit:
                    break
            return b"".join(chunks)[:limit]
    except requests.RequestException as exc:
        raise FetchError(TransportFailure(str(exc))) from exc


@dataclass(frozen=True)
class TextFetchRequest:
    """One text-preview download job, keyed by the owning session id."""

    session_id: int
    url: str
    max_bytes: int
    timeout: float


@dataclass(frozen=True)
class TextFetchResult:
    """Completed download: either ``data`` or ``failure`` is set."""

    request: TextFetchRequest
    data: bytes | None = None
    failure: FetchFailure | None = None


class TextFetchScheduler:
    """Single-worker, latest-request-wins downloader with cancellation.

    Results are queued and only become visible through ``drain_results``, so
    the owner applies them on its own thread. Cancelled requests never show up
    in ``drain_results``.
    """

    def __init__(
        self,
        transport: FetchTransport = fetch_text_bytes,
        timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
    ) -> None:
        self._transport = transport
        self._timeout = timeout
        self._lock = threading.Lock()
        self._pending: TextFetchRequest | None = None
        self._in_flight: int | None = None
        self._cancelled: set[int] = set()
        self._running = False
        self._results: Queue[TextFetchResult] = Queue()

    def _run(self, request: TextFetchRequest) -> TextFetchResult:
        logger.debug("fetching preview text %s", request.url)
        try:
            data = self._transport(request.url, request.max_bytes, request.timeout)
        except FetchError as exc:
            logger.warning("preview fetch failed for %s: %s", request.url, exc)
            return TextFetchResult(request=request, failure=exc.failure)
        except Exception as exc:
            logger.warning("preview fetch crashed for %s: %s", request.url, exc)
            return TextFetchResult(request=request, failure=TransportFailure(str(exc)))
        return TextFetchResult(request=request, data=data)

    def _worker(self) -> None:
        while True:
            with self._lock:
                request = self._pending
                self._pending = None
                if request is None:
                    self._running = False
                    self._in_flight = None
                    return
                self._in_flight = request.session_id

            result = self._run(request)
            with self._lock:
                self._in_flight = None
                if request.session_id in self._cancelled:
                    self._cancelled.discard(request.session_id)
                    logger.debug("dropping cancelled preview fetch %d", request.session_id)
                    continue
            self._results.put(result)

    def submit(self, session_id: int, url: str, max_bytes: int) -> TextFetchRequest:
        """Queue a download, replacing any request that has not started yet."""
        request = TextFetchRequest(
            session_id=session_id,
            url=url,
            max_bytes=max_bytes,
            timeout=self._timeout,
        )
        with self._lock:
            self._pending = request
            if self._running:
                return request
            self._running = True

        worker = threading.Thread(
            target=self._worker,
            name="indexview-preview-fetch",
            daemon=True,
        )
        worker.start()
        return request

    def cancel(self, session_id: int) -> None:
        """Forget the request for ``session_id`` whether queued or running."""
        with self._lock:
            if self._pending is not None and self._pending.session_id == session_id:
                self._pending = None
            if self._in_flight == session_id:
                self._cancelled.add(session_id)

    def drain_results(self) -> list[TextFetchResult]:
        """Drain all completed, non-cancelled results."""
        out: list[TextFetchResult] = []
        while True:
            try:
                out.append(self._results.get_nowait())
            except Empty:
                break
        return out


__all__ = [
    "FETCH_CHUNK_BYTES",
    "DEFAULT_FETCH_TIMEOUT_SECONDS",
    "FetchTransport",
    "is_success_status",
    "fetch_text_bytes",
    "TextFetchRequest",
    "TextFetchResult",
    "TextFetchScheduler",
]
