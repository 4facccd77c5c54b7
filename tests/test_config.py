from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from headingnav.navigator import PanelDimensions
from headingnav.runtime import config
from headingnav.viewport import Alignment, AlignmentPolicy


class ConfigLoadingTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.path = Path(self._tmp.name) / "config.json"

    def _write(self, data: object) -> None:
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def test_missing_file_yields_defaults(self) -> None:
        loaded = config.load_app_config(self.path)

        self.assertEqual(loaded, config.AppConfig())
        self.assertEqual(loaded.style, "monokai")

    def test_default_path_is_used_when_none_given(self) -> None:
        self._write({"style": "friendly"})
        with mock.patch("headingnav.runtime.config.CONFIG_PATH", self.path):
            self.assertEqual(config.load_app_config().style, "friendly")

    def test_malformed_json_is_logged_and_ignored(self) -> None:
        self.path.write_text("{not json", encoding="utf-8")
        with self.assertLogs("headingnav.runtime.config", level="WARNING"):
            self.assertEqual(config.load_config(self.path), {})

    def test_non_object_json_is_ignored(self) -> None:
        self._write([1, 2, 3])

        self.assertEqual(config.load_config(self.path), {})

    def test_panel_settings_are_normalized_with_warnings(self) -> None:
        self._write({"panel_width": 9000, "panel_max_height_percentage": 10})
        with self.assertLogs("headingnav.runtime.config", level="WARNING") as captured:
            loaded = config.load_app_config(self.path)

        self.assertEqual(loaded.dimensions, PanelDimensions(width=640, max_height_ratio=0.4))
        self.assertIn("Invalid panel width setting detected. Using 640px.", "\n".join(captured.output))

    def test_valid_panel_settings_are_kept(self) -> None:
        self._write({"panel_width": 400, "panel_max_height_percentage": 60})

        self.assertEqual(config.load_app_config(self.path).dimensions, PanelDimensions(width=400, max_height_ratio=0.6))

    def test_scroll_policy_overrides(self) -> None:
        self._write(
            {
                "scroll": {
                    "tolerance": 2,
                    "max_attempts": 50,
                    "settle_checks": 0,
                    "delays": [0, 0.1],
                    "preview_alignment": "Center",
                    "confirm_alignment": "top",
                }
            }
        )
        policy = config.load_app_config(self.path).policy

        self.assertEqual(policy.tolerance, 2.0)
        self.assertEqual(policy.max_attempts, config.MAX_SCROLL_ATTEMPTS)
        self.assertEqual(policy.settle_checks, 0)
        self.assertEqual(policy.delays, (0.0, 0.1))
        self.assertIs(policy.preview_alignment, Alignment.CENTER)
        self.assertIs(policy.confirm_alignment, Alignment.TOP)

    def test_invalid_scroll_values_fall_back(self) -> None:
        self._write(
            {
                "scroll": {
                    "tolerance": "big",
                    "max_attempts": True,
                    "delays": [0.1, -1],
                    "preview_alignment": "sideways",
                }
            }
        )
        with self.assertLogs("headingnav.runtime.config", level="WARNING"):
            policy = config.load_app_config(self.path).policy

        self.assertEqual(policy, config.DEFAULT_ALIGNMENT_POLICY)

    def test_default_tolerance_is_measured_in_rows(self) -> None:
        policy = config.load_app_config(self.path).policy

        self.assertEqual(policy.tolerance, config.ROW_TOLERANCE)
        self.assertLess(policy.tolerance, 1)
        self.assertEqual(policy.max_attempts, AlignmentPolicy().max_attempts)

    def test_blank_style_uses_default(self) -> None:
        self._write({"style": "   "})

        self.assertEqual(config.load_app_config(self.path).style, config.DEFAULT_STYLE)


if __name__ == "__main__":
    unittest.main()
