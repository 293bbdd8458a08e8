"""Command-line front door for indexview.

Loads a directory-index document, applies sort and search options, and prints
the listing. ``--preview`` opens one entry and prints its preview instead.
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import config
from .controller import BrowserController
from .listing.breadcrumb import format_breadcrumbs
from .listing.source import ListingLoadError, load_listing_document
from .listing.types import SORT_KEYS
from .preview.fetcher import TextFetchScheduler
from .preview.session import PreviewManager
from .preview.types import PreviewLoaded, PreviewNotSupportedError
from .render import render_listing, render_preview
from .ui_theme import theme_for
from .view.engine import SortFilterEngine


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _positive_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse a web-server directory index: sort, search, and preview files."
    )
    parser.add_argument("source", help="Listing URL, local index.html path, or '-' for stdin.")
    parser.add_argument("--sort", choices=SORT_KEYS, default=None, help="Sort column (default from config, else name).")
    parser.add_argument("--desc", action="store_true", help="Sort descending.")
    parser.add_argument("--search", default="", help="Only show entries whose name contains this text.")
    parser.add_argument("--preview", metavar="NAME", help="Preview the entry with this name or href and exit.")
    parser.add_argument("--style", default=None, help="Pygments style name for text previews.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument(
        "--max-preview-bytes",
        type=_positive_int,
        default=None,
        help="Text preview size limit in bytes (default 102400).",
    )
    parser.add_argument("--timeout", type=_positive_float, default=None, help="Network timeout in seconds.")
    parser.add_argument("--save-sort", action="store_true", help="Remember the chosen sort as the default.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr.")
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments, load the listing, and print the listing or a preview."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    saved_key, saved_direction = config.load_sort()
    sort_key = args.sort or saved_key
    if args.sort is not None or args.desc:
        sort_direction = "descending" if args.desc else "ascending"
    else:
        sort_direction = saved_direction
    timeout = args.timeout if args.timeout is not None else config.load_request_timeout()
    max_bytes = args.max_preview_bytes or config.load_text_preview_max_bytes()
    style = args.style or config.load_style()
    color = not args.no_color and sys.stdout.isatty()
    theme = theme_for(color)

    if args.save_sort:
        config.save_sort(sort_key, sort_direction)

    try:
        document = load_listing_document(args.source, timeout=timeout)
    except ListingLoadError as exc:
        raise SystemExit(str(exc)) from exc

    controller = BrowserController(
        engine=SortFilterEngine(sort_key=sort_key, sort_direction=sort_direction),
        preview=PreviewManager(TextFetchScheduler(timeout=timeout), max_bytes=max_bytes),
        debounce=config.load_search_debounce_seconds(),
    )
    controller.load_document(document)

    if args.preview is not None:
        try:
            controller.open_preview(args.preview)
        except KeyError as exc:
            raise SystemExit(f"No entry named {args.preview!r} in listing.") from exc
        except PreviewNotSupportedError as exc:
            raise SystemExit(f"Cannot preview {args.preview!r}: unsupported file type.") from exc
        session = controller.wait_for_preview(timeout + 1.0)
        if session is None:
            return 1
        sys.stdout.write(render_preview(session, theme, style=style, color=color))
        controller.close_preview()
        return 0 if isinstance(session.status, PreviewLoaded) else 1

    # no event loop here, so bypass the debounce window
    if args.search:
        controller.search_input(args.search, now=0.0)
        controller.tick(now=controller.search.delay)

    title = format_breadcrumbs(controller.breadcrumbs())
    sys.stdout.write(
        render_listing(
            controller.view(),
            query=controller.engine.query,
            theme=theme,
            sort_key=controller.engine.sort_key,
            sort_direction=controller.engine.sort_direction,
            title=title,
        )
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
