"""Load listing documents from URLs, local files, or stdin."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote, urljoin, urlparse

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0
STDIN_SOURCE = "-"


class ListingLoadError(Exception):
    """Raised when the listing document itself cannot be obtained."""


@dataclass(frozen=True)
class ListingDocument:
    """Raw listing markup plus the URL that relative hrefs resolve against."""

    text: str
    base_url: str | None = None

    @property
    def base_path(self) -> str:
        """Decoded URL path of the listing, used for breadcrumbs."""
        if self.base_url is None:
            return "/"
        return unquote(urlparse(self.base_url).path) or "/"

    def resolve(self, href: str) -> str:
        """Resolve an entry href against the listing location."""
        if self.base_url is None:
            return href
        return urljoin(self.base_url, href)


def is_remote(source: str) -> bool:
    return urlparse(source).scheme in {"http", "https"}


def read_text_bytes(data: bytes, encoding: str | None = None) -> str:
    """Decode bytes with the same tolerant fallback order used for local files."""
    candidates = [encoding] if encoding else []
    candidates.extend(["utf-8", "utf-8-sig", "latin-1"])
    for candidate in candidates:
        try:
            return data.decode(candidate)
        except (UnicodeDecodeError, LookupError):
            continue
    return data.decode("utf-8", errors="replace")


def load_listing_document(source: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> ListingDocument:
    """Fetch or read a listing document.

    ``source`` may be an ``http(s)`` URL, a local file path, or ``-`` for
    stdin. Errors are reported as ``ListingLoadError``.
    """
    if source == STDIN_SOURCE:
        return ListingDocument(text=sys.stdin.read(), base_url=None)

    if is_remote(source):
        logger.debug("fetching listing %s", source)
        try:
            response = requests.get(source, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise ListingLoadError(f"Could not fetch listing {source}: {exc}") from exc
        return ListingDocument(
            text=read_text_bytes(response.content, response.encoding),
            base_url=response.url or source,
        )

    path = Path(source)
    if path.is_dir():
        path = path / "index.html"
    if not path.exists():
        raise ListingLoadError(f"Path not found: {path}")
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise ListingLoadError(f"Could not read listing {path}: {exc}") from exc
    return ListingDocument(text=read_text_bytes(data), base_url=path.resolve().parent.as_uri() + "/")


__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "STDIN_SOURCE",
    "ListingLoadError",
    "ListingDocument",
    "is_remote",
    "read_text_bytes",
    "load_listing_document",
]
