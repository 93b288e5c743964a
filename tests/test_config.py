import os
import tempfile
import unittest

from lecturegrid.config import RunConfig, load_config
from lecturegrid.errors import ConfigurationError


class RunConfigTests(unittest.TestCase):
    def test_defaults(self):
        cfg = RunConfig().validate()
        self.assertEqual(cfg.days, 5)
        self.assertIsNone(cfg.rooms)
        self.assertEqual(cfg.periods, 200)

    def test_derived_periods_follow_slot_budget(self):
        self.assertEqual(RunConfig(days=3).periods, 333)
        self.assertEqual(RunConfig(days=7, slot_budget=50).periods, 7)

    def test_explicit_periods_win(self):
        self.assertEqual(RunConfig(days=3, periods_per_day=8).periods, 8)

    def test_invalid_values(self):
        bad = [
            RunConfig(days=0),
            RunConfig(days=8),
            RunConfig(days=5, rooms=0),
            RunConfig(days=5, periods_per_day=0),
            RunConfig(days=5, slot_budget=4),
        ]
        for cfg in bad:
            with self.assertRaises(ConfigurationError, msg=repr(cfg)):
                cfg.validate()

    def test_from_dict_ignores_unknown_keys(self):
        cfg = RunConfig.from_dict({"days": 2, "rooms": 3, "colour": "blue"})
        self.assertEqual((cfg.days, cfg.rooms), (2, 3))


class LoadConfigTests(unittest.TestCase):
    def test_missing_file_gives_defaults(self):
        self.assertEqual(load_config("/nonexistent/run.yaml"), RunConfig())

    def test_yaml_file(self):
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "run.yaml")
            with open(path, "w") as f:
                f.write("days: 4\nrooms: 2\nperiods_per_day: 6\n")
            cfg = load_config(path)
        self.assertEqual(cfg, RunConfig(days=4, rooms=2, periods_per_day=6))

    def test_yaml_must_be_a_mapping(self):
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "run.yaml")
            with open(path, "w") as f:
                f.write("- 1\n- 2\n")
            with self.assertRaises(ConfigurationError):
                load_config(path)


class RequiredConfigTests(unittest.TestCase):
    def test_missing_required_file_is_an_error(self):
        with self.assertRaises(ConfigurationError):
            load_config("/nonexistent/run.yaml", required=True)


if __name__ == "__main__":
    unittest.main()
