"""Tests for config persistence and input sanitization.

Malformed or out-of-range values must fall back to defaults on load.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from indexview import config


class ConfigBehaviorTests(unittest.TestCase):
    def test_missing_config_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("indexview.config.CONFIG_PATH", Path(tmp) / "config.json"):
                self.assertEqual(config.load_config(), {})
                self.assertEqual(config.load_sort(), ("name", "ascending"))
                self.assertAlmostEqual(config.load_search_debounce_seconds(), 0.150)
                self.assertEqual(config.load_text_preview_max_bytes(), 102400)
                self.assertEqual(config.load_request_timeout(), 10.0)
                self.assertEqual(config.load_style(), "monokai")

    def test_sort_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("indexview.config.CONFIG_PATH", Path(tmp) / "nested" / "config.json"):
                config.save_sort("date", "descending")

                self.assertEqual(config.load_sort(), ("date", "descending"))

    def test_malformed_json_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("{not json", encoding="utf-8")
            with mock.patch("indexview.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})

    def test_invalid_values_fall_back_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("indexview.config.CONFIG_PATH", Path(tmp) / "config.json"):
                config.save_config(
                    {
                        "sort_key": "colour",
                        "sort_direction": "sideways",
                        "search_debounce_ms": True,
                        "text_preview_max_bytes": 12.5,
                        "request_timeout": -1,
                        "style": "   ",
                    }
                )

                self.assertEqual(config.load_sort(), ("name", "ascending"))
                self.assertAlmostEqual(config.load_search_debounce_seconds(), 0.150)
                self.assertEqual(config.load_text_preview_max_bytes(), 102400)
                self.assertEqual(config.load_request_timeout(), 10.0)
                self.assertEqual(config.load_style(), "monokai")

    def test_valid_values_are_used(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("indexview.config.CONFIG_PATH", Path(tmp) / "config.json"):
                config.save_config(
                    {
                        "search_debounce_ms": 300,
                        "text_preview_max_bytes": 2048,
                        "request_timeout": 2.5,
                        "style": "friendly",
                    }
                )

                self.assertAlmostEqual(config.load_search_debounce_seconds(), 0.3)
                self.assertEqual(config.load_text_preview_max_bytes(), 2048)
                self.assertEqual(config.load_request_timeout(), 2.5)
                self.assertEqual(config.load_style(), "friendly")


if __name__ == "__main__":
    unittest.main()
