"""Preview-session status values and fetch failure reasons."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HttpStatusFailure:
    """The server answered with a non-success status code."""

    status_code: int

    def describe(self) -> str:
        return f"Failed to load file (HTTP {self.status_code})"


@dataclass(frozen=True)
class TransportFailure:
    """The request never produced a response (DNS, connection, timeout...)."""

    message: str

    def describe(self) -> str:
        if self.message:
            return f"Network error: {self.message}"
        return "Network error"


FetchFailure = HttpStatusFailure | TransportFailure


@dataclass(frozen=True)
class PreviewIdle:
    pass


@dataclass(frozen=True)
class PreviewLoading:
    pass


@dataclass(frozen=True)
class PreviewLoaded:
    """Preview ready. ``content`` is ``None`` for media shown by reference."""

    content: str | None
    truncated: bool = False


@dataclass(frozen=True)
class PreviewFailed:
    reason: FetchFailure


PreviewStatus = PreviewIdle | PreviewLoading | PreviewLoaded | PreviewFailed


class FetchError(Exception):
    """Raised by fetch transports; carries the failure reason."""

    def __init__(self, failure: FetchFailure) -> None:
        super().__init__(failure.describe())
        self.failure = failure


class PreviewNotSupportedError(ValueError):
    """Raised when opening a preview for an entry with no preview category."""


__all__ = [
    "HttpStatusFailure",
    "TransportFailure",
    "FetchFailure",
    "PreviewIdle",
    "PreviewLoading",
    "PreviewLoaded",
    "PreviewFailed",
    "PreviewStatus",
    "FetchError",
    "PreviewNotSupportedError",
]
