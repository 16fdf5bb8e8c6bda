import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resumeiq.core.scoring import (  # noqa: E402
    get_scoring_config,
    get_scoring_value,
    reset_scoring_config_cache,
)


class ScoringConfigTests(unittest.TestCase):
    def test_loader_and_value_lookup(self):
        config = get_scoring_config()
        self.assertIsInstance(config, dict)
        self.assertEqual(get_scoring_value("fallback.score.base"), 45)
        self.assertEqual(get_scoring_value("fallback.score.per_word"), 0.12)
        self.assertEqual(get_scoring_value("fallback.roles.min_keyword_hits"), 2)

    def test_missing_path_returns_default(self):
        self.assertEqual(get_scoring_value("fallback.score.unknown", 7), 7)
        self.assertEqual(get_scoring_value("fallback.score.base.deeper", "x"), "x")
        self.assertIsNone(get_scoring_value(""))


class ScoringConfigOverrideTests(unittest.TestCase):
    def setUp(self):
        reset_scoring_config_cache()
        self.addCleanup(reset_scoring_config_cache)
        temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(temp_dir.cleanup)
        self.temp_dir = Path(temp_dir.name)

    def test_env_path_override_is_read_after_reset(self):
        custom = self.temp_dir / "scoring.yaml"
        custom.write_text("fallback:\n  score:\n    base: 30\n", encoding="utf-8")

        with mock.patch.dict(os.environ, {"SCORING_CONFIG_PATH": str(custom)}):
            self.assertEqual(get_scoring_value("fallback.score.base"), 30)
            self.assertIsNone(get_scoring_value("fallback.score.per_word"))

            # The cached copy wins until the cache is reset.
            custom.write_text("fallback:\n  score:\n    base: 31\n", encoding="utf-8")
            self.assertEqual(get_scoring_value("fallback.score.base"), 30)
            reset_scoring_config_cache()
            self.assertEqual(get_scoring_value("fallback.score.base"), 31)

    def test_missing_override_file_raises(self):
        missing = self.temp_dir / "absent.yaml"
        with mock.patch.dict(os.environ, {"SCORING_CONFIG_PATH": str(missing)}):
            with self.assertRaises(RuntimeError):
                get_scoring_config()

    def test_non_mapping_override_raises(self):
        custom = self.temp_dir / "scoring.yaml"
        custom.write_text("- just\n- a list\n", encoding="utf-8")
        with mock.patch.dict(os.environ, {"SCORING_CONFIG_PATH": str(custom)}):
            with self.assertRaises(RuntimeError):
                get_scoring_config()


if __name__ == "__main__":
    unittest.main()
