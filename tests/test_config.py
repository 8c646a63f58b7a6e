"""
Unit tests for poker_equity/config.py and poker_equity/logging_config.py
"""
import logging
import os
import tempfile
import unittest
from unittest.mock import patch

from poker_equity.config import load_config
from poker_equity.errors import ConfigError
from poker_equity.logging_config import configure_logging, get_logger


class TestLoadConfig(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "config.yaml")

    def tearDown(self):
        self.tmp.cleanup()

    def _write(self, text):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(text)

    def test_missing_file_gives_defaults(self):
        config = load_config(os.path.join(self.tmp.name, "nope.yaml"), use_env=False)
        self.assertEqual(config.simulation.iterations, 100_000)
        self.assertEqual(config.simulation.workers, 1)
        self.assertIsNone(config.simulation.seed)
        self.assertEqual(config.logging.level, "INFO")
        self.assertEqual(config.situation, {})

    def test_reads_sections_and_ignores_unknown_keys(self):
        self._write(
            "simulation:\n"
            "  iterations: 500\n"
            "  workers: 2\n"
            "  seed: 7\n"
            "  colour: blue\n"
            "situation:\n"
            "  board: [Qs, Kd]\n"
            "  players:\n"
            "    - [Qh, Qd]\n"
            "    - null\n"
        )
        config = load_config(self.path, use_env=False)
        self.assertEqual(config.simulation.iterations, 500)
        self.assertEqual(config.simulation.workers, 2)
        self.assertEqual(config.simulation.seed, 7)
        self.assertEqual(config.situation["board"], ["Qs", "Kd"])
        self.assertEqual(config.situation["players"], [["Qh", "Qd"], None])

    def test_environment_overrides(self):
        self._write("simulation:\n  iterations: 500\n")
        env = {"POKER_EQUITY_ITERATIONS": "42", "POKER_EQUITY_SEED": "3", "POKER_EQUITY_LOG_LEVEL": "DEBUG"}
        with patch.dict(os.environ, env):
            config = load_config(self.path)
        self.assertEqual(config.simulation.iterations, 42)
        self.assertEqual(config.simulation.seed, 3)
        self.assertEqual(config.logging.level, "DEBUG")

    def test_bad_environment_value(self):
        with patch.dict(os.environ, {"POKER_EQUITY_WORKERS": "many"}):
            with self.assertRaises(ConfigError):
                load_config(self.path)

    def test_section_must_be_mapping(self):
        self._write("simulation: 12\n")
        with self.assertRaises(ConfigError):
            load_config(self.path, use_env=False)

    def test_invalid_yaml(self):
        self._write("simulation: [unclosed\n")
        with self.assertRaises(ConfigError):
            load_config(self.path, use_env=False)

    def test_shipped_config_loads(self):
        config = load_config(use_env=False)
        self.assertEqual(len(config.situation["players"]), 2)


class TestLoggingConfig(unittest.TestCase):
    def test_configure_logging_writes_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = configure_logging("DEBUG", log_dir=tmp, log_to_file=True)
            get_logger("poker_equity.test").debug("hello")
            self.assertTrue(os.path.exists(path))
            self.assertEqual(logging.getLogger().level, logging.DEBUG)
            # release the file handle before the directory is removed
            configure_logging("WARNING", log_to_file=False)

    def test_no_file_when_disabled(self):
        self.assertIsNone(configure_logging("INFO", log_to_file=False))


if __name__ == '__main__':
    unittest.main()
