import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from glyphart_core.performance import PerformanceController, PerformanceTargets


class PerformanceTests(unittest.TestCase):
    def test_within_budget_keeps_width(self):
        ctl = PerformanceController(PerformanceTargets(run_ms_max=1000.0, rss_mb_max=1e6))
        status = ctl.sample(run_ms=5.0, target_width=120)
        self.assertFalse(status.overloaded)
        self.assertIsNone(status.warning)
        self.assertEqual(status.recommended_width, 120)
        self.assertGreater(status.rss_mb, 0.0)

    def test_slow_run_steps_width_down(self):
        ctl = PerformanceController(PerformanceTargets(run_ms_max=10.0, rss_mb_max=1e6))
        status = ctl.sample(run_ms=500.0, target_width=100)
        self.assertTrue(status.overloaded)
        self.assertEqual(status.warning, "slow_generation")
        self.assertEqual(status.recommended_width, 90)

    def test_recommendation_never_below_minimum(self):
        ctl = PerformanceController(PerformanceTargets(run_ms_max=10.0, rss_mb_max=1e6))
        self.assertEqual(ctl.sample(run_ms=500.0, target_width=50).recommended_width, 50)


if __name__ == "__main__":
    unittest.main()
