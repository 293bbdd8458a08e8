"""Breadcrumb trail for the directory a listing describes."""

from __future__ import annotations

from urllib.parse import quote, unquote

ROOT_LABEL = "Root"


def build_breadcrumbs(path: str) -> list[tuple[str, str | None]]:
    """Return ``(label, href)`` crumbs from the root to ``path``.

    The last crumb is the current directory and has no href.
    """
    parts = [part for part in unquote(path or "/").split("/") if part]
    if not parts:
        return [(ROOT_LABEL, None)]

    crumbs: list[tuple[str, str | None]] = [(ROOT_LABEL, "/")]
    accumulated = "/"
    for index, part in enumerate(parts):
        accumulated += quote(part) + "/"
        is_last = index == len(parts) - 1
        crumbs.append((part, None if is_last else accumulated))
    return crumbs


def format_breadcrumbs(crumbs: list[tuple[str, str | None]], separator: str = " / ") -> str:
    return separator.join(label for label, _href in crumbs)


__all__ = ["ROOT_LABEL", "build_breadcrumbs", "format_breadcrumbs"]
