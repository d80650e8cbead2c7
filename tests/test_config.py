from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from millercd import config
from millercd.config import NavigatorConfig
from millercd.errors import ConfigError


class ConfigFileTests(unittest.TestCase):
    def test_missing_or_malformed_file_gives_empty_dict(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("millercd.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})
                config_path.write_text("{not json", encoding="utf-8")
                self.assertEqual(config.load_config(), {})
                config_path.write_text("[1, 2]", encoding="utf-8")
                self.assertEqual(config.load_config(), {})

    def test_file_values_are_type_checked(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text(
                json.dumps({"show_index": True, "view_file_contents": "yes", "style": "native", "log": 1}),
                encoding="utf-8",
            )
            with mock.patch("millercd.config.CONFIG_PATH", config_path):
                loaded = config.load_navigator_config(environ={})

        self.assertTrue(loaded.show_index)
        self.assertFalse(loaded.view_file_contents)
        self.assertFalse(loaded.log)
        self.assertEqual(loaded.style, "native")


class EnvironmentTests(unittest.TestCase):
    def test_integer_switches(self) -> None:
        environ = {
            "MILLERCD_VIEW_FILE_CONTENTS": "1",
            "MILLERCD_SHOW_INDEX": "0",
            "MILLERCD_SET_BG": "2",
            "MILLERCD_PWD": " 1 ",
            "MILLERCD_LOG": "",
        }
        updated = config.apply_environment(NavigatorConfig(show_index=True), environ)

        self.assertTrue(updated.view_file_contents)
        self.assertFalse(updated.show_index)
        self.assertFalse(updated.set_background)
        self.assertTrue(updated.print_pwd)
        self.assertFalse(updated.log)

    def test_non_integer_switch_raises(self) -> None:
        with self.assertRaises(ConfigError) as ctx:
            config.apply_environment(NavigatorConfig(), {"MILLERCD_SHOW_INDEX": "yes"})
        self.assertIn("MILLERCD_SHOW_INDEX", str(ctx.exception))

    def test_style_and_no_color(self) -> None:
        updated = config.apply_environment(NavigatorConfig(), {"MILLERCD_STYLE": "native", "NO_COLOR": "1"})
        self.assertEqual(updated.style, "native")
        self.assertTrue(updated.no_color)

    def test_environment_overrides_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text(json.dumps({"show_index": True}), encoding="utf-8")
            with mock.patch("millercd.config.CONFIG_PATH", config_path):
                loaded = config.load_navigator_config(environ={"MILLERCD_SHOW_INDEX": "0"})
        self.assertFalse(loaded.show_index)


class DescribeConfigTests(unittest.TestCase):
    def test_lists_every_option(self) -> None:
        lines = config.describe_config(NavigatorConfig(view_file_contents=True))
        self.assertIn("MILLERCD_VIEW_FILE_CONTENTS = 1", lines)
        self.assertIn("MILLERCD_SHOW_INDEX = 0", lines)
        self.assertIn("MILLERCD_STYLE = monokai", lines)
        self.assertIn("NO_COLOR = 0", lines)
        self.assertTrue(lines[-1].startswith("config file = "))


if __name__ == "__main__":
    unittest.main()
