"""Tests for autoindex markup parsing and size/date decoding."""

from __future__ import annotations

import calendar
import unittest

from indexview.listing import UNKNOWN_SIZE, UNKNOWN_TIMESTAMP, parse_listing
from indexview.listing.parser import extract_pre_block, parse_date_to_timestamp, parse_line, parse_size_to_bytes

NGINX_PAGE = """<html>
<head><title>Index of /pub/</title></head>
<body>
<h1>Index of /pub/</h1><hr><pre><a href="../">../</a>
<a href="docs/">docs/</a>                                              19-Oct-2026 11:51                   -
<a href="notes.txt">notes.txt</a>                                          02-Mar-2024 10:15                1.2K
<a href="Big%20Movie.mp4">Big Movie.mp4</a>                                      05-May-2023 22:40                3.5M
<a href="archive.zip">archive.zip</a>                                        19-Oct-2026 09:00                 512
</pre><hr></body>
</html>
"""


class SizeDecodeTests(unittest.TestCase):
    def test_decodes_binary_magnitudes_truncating_fractions(self) -> None:
        self.assertEqual(parse_size_to_bytes("1.2K"), 1228)
        self.assertEqual(parse_size_to_bytes("3.5M"), 3670016)
        self.assertEqual(parse_size_to_bytes("512"), 512)
        self.assertEqual(parse_size_to_bytes("2G"), 2 * 1024**3)
        self.assertEqual(parse_size_to_bytes("1t"), 1024**4)

    def test_unknown_and_garbage_sizes_use_sentinel(self) -> None:
        self.assertEqual(parse_size_to_bytes("-"), UNKNOWN_SIZE)
        self.assertEqual(parse_size_to_bytes(""), UNKNOWN_SIZE)
        self.assertEqual(parse_size_to_bytes("lots"), UNKNOWN_SIZE)
        self.assertEqual(parse_size_to_bytes("1.2.3K"), UNKNOWN_SIZE)


class DateDecodeTests(unittest.TestCase):
    def test_nginx_format_is_read_as_utc_milliseconds(self) -> None:
        expected = calendar.timegm((2026, 10, 19, 11, 51, 0)) * 1000
        self.assertEqual(parse_date_to_timestamp("19-Oct-2026 11:51"), expected)

    def test_apache_and_locale_formats_are_tolerated(self) -> None:
        expected = calendar.timegm((2026, 10, 19, 11, 51, 0)) * 1000
        self.assertEqual(parse_date_to_timestamp("2026-10-19 11:51"), expected)
        self.assertEqual(parse_date_to_timestamp("Oct 19 2026 11:51"), expected)

    def test_offset_dates_at_datetime_limits_do_not_overflow(self) -> None:
        self.assertEqual(
            parse_date_to_timestamp("0001-01-01 00:00+05:00"),
            (calendar.timegm((1, 1, 1, 0, 0, 0)) - 5 * 3600) * 1000,
        )
        self.assertEqual(
            parse_date_to_timestamp("9999-12-31 23:59-05:00"),
            (calendar.timegm((9999, 12, 31, 23, 59, 0)) + 5 * 3600) * 1000,
        )

    def test_offset_dates_are_converted_to_utc(self) -> None:
        expected = calendar.timegm((2026, 10, 19, 9, 51, 0)) * 1000
        self.assertEqual(parse_date_to_timestamp("2026-10-19T11:51:00+02:00"), expected)

    def test_unparseable_dates_use_sentinel(self) -> None:
        self.assertEqual(parse_date_to_timestamp("-"), UNKNOWN_TIMESTAMP)
        self.assertEqual(parse_date_to_timestamp(""), UNKNOWN_TIMESTAMP)
        self.assertEqual(parse_date_to_timestamp("xx yy"), UNKNOWN_TIMESTAMP)


class ParseListingTests(unittest.TestCase):
    def test_parses_rows_in_document_order(self) -> None:
        entries = parse_listing(NGINX_PAGE)

        self.assertEqual([entry.href for entry in entries], ["../", "docs/", "notes.txt", "Big%20Movie.mp4", "archive.zip"])
        self.assertEqual([entry.name for entry in entries], ["..", "docs", "notes.txt", "Big Movie.mp4", "archive.zip"])

    def test_parent_and_directory_flags(self) -> None:
        parent, docs, notes, *_rest = parse_listing(NGINX_PAGE)

        self.assertTrue(parent.is_parent)
        self.assertTrue(parent.is_dir)
        self.assertFalse(docs.is_parent)
        self.assertTrue(docs.is_dir)
        self.assertFalse(notes.is_dir)
        self.assertFalse(notes.is_parent)

    def test_directories_always_have_unknown_size(self) -> None:
        line = '<a href="docs/">docs/</a>   19-Oct-2026 11:51   4.0K'
        entry = parse_line(line)

        assert entry is not None
        self.assertEqual(entry.size.bytes, UNKNOWN_SIZE)
        self.assertEqual(entry.size.raw, "-")

    def test_file_sizes_and_dates_are_decoded(self) -> None:
        entries = {entry.name: entry for entry in parse_listing(NGINX_PAGE)}

        self.assertEqual(entries["notes.txt"].size.raw, "1.2K")
        self.assertEqual(entries["notes.txt"].size.bytes, 1228)
        self.assertEqual(entries["Big Movie.mp4"].size.bytes, 3670016)
        self.assertEqual(entries["archive.zip"].size.bytes, 512)
        self.assertEqual(entries["notes.txt"].date.raw, "02-Mar-2024 10:15")
        self.assertEqual(entries["notes.txt"].date.timestamp, calendar.timegm((2024, 3, 2, 10, 15, 0)) * 1000)

    def test_garbage_lines_are_dropped(self) -> None:
        markup = "\n".join(
            [
                "Index of /files/",
                '<a href="a.txt">a.txt</a>   19-Oct-2026 11:51   10',
                "<b>not a row</b>",
                "",
                '<a href="b.txt">b.txt</a>',
                '<a href="c.txt">c.txt</a>   19-Oct-2026 11:52   20',
                "------",
            ]
        )

        entries = parse_listing(markup)

        self.assertEqual([entry.name for entry in entries], ["a.txt", "c.txt"])

    def test_empty_and_link_free_documents_yield_nothing(self) -> None:
        self.assertEqual(parse_listing(""), [])
        self.assertEqual(parse_listing("<html><body><pre>nothing here</pre></body></html>"), [])

    def test_duplicate_hrefs_keep_first_occurrence(self) -> None:
        markup = "\n".join(
            [
                '<a href="a.txt">a.txt</a>   19-Oct-2026 11:51   10',
                '<a href="a.txt">a copy</a>   19-Oct-2026 11:51   99',
            ]
        )

        entries = parse_listing(markup)

        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].size.bytes, 10)

    def test_extreme_date_does_not_abort_listing(self) -> None:
        markup = "\n".join(
            [
                '<a href="old.txt">old.txt</a>   0001-01-01 00:00+05:00   10',
                '<a href="new.txt">new.txt</a>   19-Oct-2026 11:51   20',
            ]
        )

        entries = parse_listing(markup)

        self.assertEqual([entry.name for entry in entries], ["old.txt", "new.txt"])
        self.assertEqual(entries[1].date.timestamp, calendar.timegm((2026, 10, 19, 11, 51, 0)) * 1000)

    def test_second_parent_link_is_dropped(self) -> None:
        markup = "\n".join(
            [
                '<a href="../">../</a>',
                '<a href="/pub/">../</a>   19-Oct-2026 11:51   -',
                '<a href="a.txt">a.txt</a>   19-Oct-2026 11:51   10',
            ]
        )

        entries = parse_listing(markup)

        self.assertEqual([(entry.href, entry.is_parent) for entry in entries], [("../", True), ("a.txt", False)])

    def test_html_entities_in_names_are_unescaped_but_href_is_kept(self) -> None:
        entry = parse_line('<a href="a%26b.txt">a&amp;b.txt</a>   19-Oct-2026 11:51   10')

        assert entry is not None
        self.assertEqual(entry.name, "a&b.txt")
        self.assertEqual(entry.href, "a%26b.txt")

    def test_apache_plain_rows_with_icons_are_parsed(self) -> None:
        line = '<img src="/icons/text.gif" alt="[TXT]"> <a href="readme.txt">readme.txt</a>   2026-10-19 11:51  1.0K  '
        entry = parse_line(line)

        assert entry is not None
        self.assertEqual(entry.name, "readme.txt")
        self.assertEqual(entry.size.bytes, 1024)

    def test_extract_pre_block_falls_back_to_whole_document(self) -> None:
        self.assertEqual(extract_pre_block("<pre>body</pre>"), "body")
        self.assertEqual(extract_pre_block("no pre"), "no pre")


if __name__ == "__main__":
    unittest.main()
