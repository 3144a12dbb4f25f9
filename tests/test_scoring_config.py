import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from unittest.mock import patch

from ats_engine.core.config import scoring  # noqa: E402
from ats_engine.core.config.scoring import (  # noqa: E402
    clear_scoring_config_cache,
    get_scoring_config,
    get_scoring_float,
    get_scoring_value,
)


class ScoringConfigTests(unittest.TestCase):
    def tearDown(self):
        clear_scoring_config_cache()

    def test_loader_and_value_lookup(self):
        config = get_scoring_config()
        self.assertIsInstance(config, dict)
        self.assertEqual(get_scoring_value("recruiter_search.weights.keyword_match"), 0.40)
        self.assertEqual(get_scoring_value("knockouts.experience.overlap_discount"), 0.7)
        self.assertEqual(get_scoring_value("knockouts.experience.suppression_gap_years"), 2)

    def test_recruiter_and_semantic_weights_sum_to_one(self):
        for section in ("recruiter_search.weights", "semantic.weights"):
            weights = get_scoring_value(section)
            self.assertAlmostEqual(sum(weights.values()), 1.0, places=6)

    def test_missing_path_returns_default(self):
        self.assertEqual(get_scoring_value("does.not.exist", "fallback"), "fallback")
        self.assertEqual(get_scoring_float("coverage.floor.nested", 3.5), 3.5)

    def test_default_file_ships_inside_package(self):
        default = scoring.scoring_config_path()
        self.assertTrue(default.exists())
        self.assertEqual(default.resolve().parent, Path(scoring.__file__).resolve().parent)

    def test_missing_file_raises_runtime_error(self):
        clear_scoring_config_cache()
        with patch.object(scoring, "scoring_config_path", return_value=PROJECT_ROOT / "config" / "absent.yaml"):
            with self.assertRaises(RuntimeError):
                get_scoring_config()


if __name__ == "__main__":
    unittest.main()
