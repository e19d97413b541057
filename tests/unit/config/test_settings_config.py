"""Tests for settings persistence and input sanitization."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from symboljump import config


class SettingsConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = Path(self._tmp.name) / "nested" / "config.json"
        patcher = mock.patch("symboljump.config.CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

    def test_missing_config_yields_defaults(self) -> None:
        settings = config.load_settings()

        self.assertEqual(settings, config.GoToSymbolSettings())
        self.assertEqual(settings.preview_delay_ms, 30)
        self.assertAlmostEqual(settings.preview_delay, 0.03)
        self.assertEqual(settings.suspended_package, "linter")

    def test_malformed_config_yields_defaults(self) -> None:
        self.config_path.parent.mkdir(parents=True)
        self.config_path.write_text("{not json", encoding="utf-8")

        self.assertEqual(config.load_config(), {})
        self.assertEqual(config.load_settings(), config.GoToSymbolSettings())

    def test_non_object_config_yields_defaults(self) -> None:
        self.config_path.parent.mkdir(parents=True)
        self.config_path.write_text("[1, 2]", encoding="utf-8")

        self.assertEqual(config.load_config(), {})

    def test_invalid_values_fall_back_per_key(self) -> None:
        config.save_config(
            {
                "preview_delay_ms": True,
                "suspended_package": "   ",
                "highlight_class": 12,
                "picker_result_limit": 50,
            }
        )

        settings = config.load_settings()

        self.assertEqual(settings.preview_delay_ms, config.DEFAULT_PREVIEW_DELAY_MS)
        self.assertEqual(settings.suspended_package, config.DEFAULT_SUSPENDED_PACKAGE)
        self.assertEqual(settings.highlight_class, config.DEFAULT_HIGHLIGHT_CLASS)
        self.assertEqual(settings.picker_result_limit, 50)

    def test_out_of_range_delay_falls_back(self) -> None:
        config.save_config({"preview_delay_ms": config.MAX_PREVIEW_DELAY_MS + 1})
        self.assertEqual(config.load_settings().preview_delay_ms, config.DEFAULT_PREVIEW_DELAY_MS)

    def test_null_suspended_package_disables_suspension(self) -> None:
        config.save_suspended_package(None)

        self.assertIsNone(config.load_config()["suspended_package"])
        self.assertIsNone(config.load_settings().suspended_package)

    def test_preview_delay_round_trips_clamped(self) -> None:
        config.save_preview_delay_ms(120)
        self.assertEqual(config.load_settings().preview_delay_ms, 120)

        config.save_preview_delay_ms(-5)
        self.assertEqual(config.load_settings().preview_delay_ms, 0)

    def test_save_preserves_unrelated_keys(self) -> None:
        config.save_config({"highlight_class": "mine"})
        config.save_preview_delay_ms(45)

        saved = config.load_config()
        self.assertEqual(saved, {"highlight_class": "mine", "preview_delay_ms": 45})
        self.assertEqual(config.load_settings().highlight_class, "mine")


if __name__ == "__main__":
    unittest.main()
