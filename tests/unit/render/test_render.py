"""Tests for listing tables, empty states, and preview output."""

from __future__ import annotations

import unittest
from dataclasses import replace

from indexview.listing import parse_listing
from indexview.preview import HttpStatusFailure, PreviewFailed, PreviewLoaded, PreviewLoading
from indexview.preview.session import PreviewSession
from indexview.render import (
    EMPTY_DIRECTORY_MESSAGE,
    NO_MATCHES_MESSAGE,
    empty_state_message,
    render_listing,
    render_preview,
)

LISTING = "\n".join(
    [
        '<a href="../">../</a>',
        '<a href="docs/">docs/</a>   19-Oct-2026 11:51   -',
        '<a href="notes.txt">notes.txt</a>   02-Mar-2024 10:15   1.2K',
    ]
)


class EmptyStateTests(unittest.TestCase):
    def test_messages_distinguish_empty_directory_from_no_matches(self) -> None:
        parent, docs, _notes = parse_listing(LISTING)

        self.assertEqual(empty_state_message([], ""), EMPTY_DIRECTORY_MESSAGE)
        self.assertEqual(empty_state_message([parent], ""), EMPTY_DIRECTORY_MESSAGE)
        self.assertEqual(empty_state_message([], "zzz"), NO_MATCHES_MESSAGE)
        self.assertIsNone(empty_state_message([parent, docs], ""))
        self.assertIsNone(empty_state_message([docs], "doc"))


class RenderListingTests(unittest.TestCase):
    def test_rows_show_names_sizes_and_dates(self) -> None:
        output = render_listing(parse_listing(LISTING), sort_key="name", title="Root / pub")
        lines = output.splitlines()

        self.assertEqual(lines[0], "Root / pub")
        self.assertTrue(lines[1].startswith("Name ▲"))
        self.assertTrue(lines[2].startswith(".."))
        self.assertIn("docs/", lines[3])
        self.assertIn("19-Oct-2026 11:51", lines[3])
        self.assertIn("notes.txt", lines[4])
        self.assertIn("1.2K", lines[4])
        self.assertEqual(len(lines), 5)

    def test_empty_projection_gets_message(self) -> None:
        output = render_listing([], query="zzz")

        self.assertTrue(output.rstrip("\n").endswith(NO_MATCHES_MESSAGE))


class RenderPreviewTests(unittest.TestCase):
    def _session(self, name: str, category: str, status) -> PreviewSession:
        entry = next(entry for entry in parse_listing(LISTING) if entry.name == "notes.txt")
        entry = replace(entry, href=name, name=name)
        return PreviewSession(entry=entry, category=category, session_id=1, url="https://x/" + name, status=status)

    def test_loaded_text_with_truncation_notice(self) -> None:
        session = self._session("notes.txt", "text", PreviewLoaded(content="hello\x07\n", truncated=True))

        output = render_preview(session)

        self.assertIn("hello\\x07", output)
        self.assertIn("only the first part is shown", output)

    def test_media_shows_url(self) -> None:
        session = self._session("photo.png", "image", PreviewLoaded(content=None))

        self.assertIn("<image preview> https://x/photo.png", render_preview(session))

    def test_loading_and_failed_states(self) -> None:
        self.assertIn("Loading...", render_preview(self._session("a.txt", "text", PreviewLoading())))
        failed = self._session("a.txt", "text", PreviewFailed(reason=HttpStatusFailure(403)))
        self.assertIn("Failed to load file (HTTP 403)", render_preview(failed))

    def test_colored_text_is_highlighted(self) -> None:
        session = self._session("main.py", "text", PreviewLoaded(content="def f():\n    return 1\n"))

        self.assertIn("\x1b[", render_preview(session, color=True))


if __name__ == "__main__":
    unittest.main()
