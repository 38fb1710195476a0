import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from config import YamlConfig
from settings_schema import AnalyticsSettings, validate_settings


class SettingsTest(unittest.TestCase):
    def setUp(self) -> None:
        self.path = "test_analytics.yaml"
        if os.path.exists(self.path):
            os.remove(self.path)

    def tearDown(self) -> None:
        if os.path.exists(self.path):
            os.remove(self.path)
        os.environ.pop("ANALYTICS_SETTINGS", None)

    def test_defaults(self) -> None:
        s = AnalyticsSettings()
        self.assertEqual(s.min_weight, 45.0)
        self.assertEqual(s.load_increment, 2.5)
        self.assertEqual(s.trend_window, 10)
        self.assertEqual(s.low_recovery_threshold, 40)
        self.assertEqual(s.high_recovery_threshold, 85)
        self.assertEqual(s.default_effort_factor, 0.5)

    def test_missing_file(self) -> None:
        cfg = YamlConfig(self.path)
        self.assertEqual(cfg.load(), {})
        self.assertEqual(cfg.load_settings(), AnalyticsSettings())

    def test_save_and_load(self) -> None:
        cfg = YamlConfig(self.path)
        cfg.save({"weight_unit": "kg", "trend_window": 6})
        settings = cfg.load_settings()
        self.assertEqual(settings.weight_unit, "kg")
        self.assertEqual(settings.trend_window, 6)
        self.assertEqual(settings.min_weight, 45.0)

    def test_env_path(self) -> None:
        os.environ["ANALYTICS_SETTINGS"] = self.path
        self.assertEqual(YamlConfig().path, self.path)

    def test_invalid(self) -> None:
        with self.assertRaises(ValueError):
            validate_settings({"load_increment": 0})
        with self.assertRaises(ValueError):
            validate_settings({"weight_unit": "stone"})
        with self.assertRaises(ValueError):
            YamlConfig(self.path).save({"trend_window": -1})
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("- just\n- a list\n")
        with self.assertRaises(ValueError):
            YamlConfig(self.path).load()


if __name__ == "__main__":
    unittest.main()
