"""Plain-text rendering of listing projections and preview sessions."""

from __future__ import annotations

from collections.abc import Sequence

from .highlight import colorize_text, sanitize_terminal_text
from .listing.types import Entry
from .preview.classify import file_kind
from .preview.session import PreviewSession
from .preview.types import PreviewFailed, PreviewLoaded, PreviewLoading
from .ui_theme import PLAIN_THEME, UITheme

PARENT_LABEL = ".."
EMPTY_DIRECTORY_MESSAGE = "This directory is empty"
NO_MATCHES_MESSAGE = "No matching files"
LOADING_MESSAGE = "Loading..."
NAME_COLUMN_MAX = 60
SORT_MARKERS = {"ascending": "▲", "descending": "▼"}


def empty_state_message(rows: Sequence[Entry], query: str) -> str | None:
    """Pick the empty-state line for a projection, or ``None`` when rows exist."""
    if query:
        return NO_MATCHES_MESSAGE if not rows else None
    if all(entry.is_parent for entry in rows):
        return EMPTY_DIRECTORY_MESSAGE
    return None


def display_name(entry: Entry) -> str:
    if entry.is_parent:
        return PARENT_LABEL
    if entry.is_dir:
        return entry.name + "/"
    return entry.name


def _clip(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: max(0, width - 1)] + "…"


def _header(sort_key: str | None, sort_direction: str, theme: UITheme, name_width: int) -> str:
    def label(key: str, text: str) -> str:
        marker = SORT_MARKERS.get(sort_direction, "") if key == sort_key else ""
        return f"{text} {marker}".rstrip()

    cells = (
        label("name", "Name").ljust(name_width),
        label("size", "Size").rjust(8),
        label("date", "Modified"),
    )
    return theme.heading + "  ".join(cells) + theme.reset


def render_listing(
    rows: Sequence[Entry],
    query: str = "",
    theme: UITheme = PLAIN_THEME,
    sort_key: str | None = None,
    sort_direction: str = "ascending",
    title: str | None = None,
) -> str:
    """Render rows as an aligned table followed by an optional empty-state line."""
    names = [sanitize_terminal_text(display_name(entry)) for entry in rows]
    name_width = min(NAME_COLUMN_MAX, max([len("Name") + 2, *(len(name) for name in names)]))

    lines: list[str] = []
    if title:
        lines.append(f"{theme.heading}{title}{theme.reset}")
    lines.append(_header(sort_key, sort_direction, theme, name_width))
    for entry, name in zip(rows, names):
        color = theme.parent if entry.is_parent else theme.for_kind(file_kind(entry.name, entry.is_dir))
        name_cell = _clip(name, name_width).ljust(name_width)
        size_cell = sanitize_terminal_text(entry.size.raw).rjust(8)
        date_cell = sanitize_terminal_text(entry.date.raw)
        lines.append(f"{color}{name_cell}{theme.reset}  {size_cell}  {theme.dim}{date_cell}{theme.reset}")

    message = empty_state_message(rows, query)
    if message is not None:
        lines.append(f"{theme.dim}{message}{theme.reset}")
    return "\n".join(lines) + "\n"


def render_preview(
    session: PreviewSession,
    theme: UITheme = PLAIN_THEME,
    style: str = "monokai",
    color: bool = False,
) -> str:
    """Render the current state of a preview session."""
    entry = session.entry
    lines = [f"{theme.heading}{sanitize_terminal_text(entry.name)}{theme.reset}"]
    status = session.status

    if isinstance(status, PreviewLoading):
        lines.append(LOADING_MESSAGE)
    elif isinstance(status, PreviewFailed):
        lines.append(f"{theme.error}{status.reason.describe()}{theme.reset}")
    elif isinstance(status, PreviewLoaded):
        if status.content is None:
            lines.append(f"<{session.category} preview> {session.url}")
        else:
            if color:
                body = colorize_text(status.content, entry.name, style)
            else:
                body = sanitize_terminal_text(status.content)
            lines.append(body.rstrip("\n"))
            if status.truncated:
                lines.append(
                    f"{theme.warning}File is large; only the first part is shown. "
                    f"Download it to see the full content: {session.url}{theme.reset}"
                )
    return "\n".join(lines) + "\n"


__all__ = [
    "PARENT_LABEL",
    "EMPTY_DIRECTORY_MESSAGE",
    "NO_MATCHES_MESSAGE",
    "LOADING_MESSAGE",
    "empty_state_message",
    "display_name",
    "render_listing",
    "render_preview",
]
