"""ANSI palettes for listing rows, keyed by file kind."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    heading: str
    dim: str
    parent: str
    folder: str
    archive: str
    image: str
    video: str
    audio: str
    code: str
    pdf: str
    document: str
    file: str
    warning: str
    error: str

    def for_kind(self, kind: str) -> str:
        return getattr(self, kind, self.file)


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    heading="\033[1;38;5;81m",
    dim="\033[2;38;5;250m",
    parent="\033[38;5;250m",
    folder="\033[1;34m",
    archive="\033[38;5;214m",
    image="\033[38;5;42m",
    video="\033[38;5;203m",
    audio="\033[38;5;141m",
    code="\033[38;5;44m",
    pdf="\033[38;5;203m",
    document="\033[38;5;105m",
    file="\033[38;5;252m",
    warning="\033[38;5;214m",
    error="\033[1;31m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    heading="",
    dim="",
    parent="",
    folder="",
    archive="",
    image="",
    video="",
    audio="",
    code="",
    pdf="",
    document="",
    file="",
    warning="",
    error="",
)


def theme_for(color: bool) -> UITheme:
    return DEFAULT_THEME if color else PLAIN_THEME


__all__ = ["UITheme", "DEFAULT_THEME", "PLAIN_THEME", "theme_for"]
