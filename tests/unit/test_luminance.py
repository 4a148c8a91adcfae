import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

import numpy as np

from glyphart_renderer.luminance import effective_luminance, luminance, luminance_rows
from glyphart_renderer.models import SampledGrid


def grid_of(rows):
    pixels = np.array(rows, dtype=np.uint8)
    return SampledGrid(width=pixels.shape[1], height=pixels.shape[0], pixels=pixels)


class LuminanceTests(unittest.TestCase):
    def test_perceptual_weights(self):
        self.assertAlmostEqual(luminance(255, 0, 0), 76.245)
        self.assertAlmostEqual(luminance(0, 255, 0), 149.685)
        self.assertAlmostEqual(luminance(0, 0, 255), 29.07)
        self.assertAlmostEqual(luminance(255, 255, 255), 255.0)

    def test_invert(self):
        self.assertEqual(effective_luminance(100.0, invert=True), 155.0)
        self.assertEqual(effective_luminance(100.0, invert=False), 100.0)

    def test_rows_match_scalar_path(self):
        samples = [(0, 0, 0), (12, 200, 37), (255, 128, 1), (90, 90, 90), (255, 255, 255)]
        grid = grid_of([[(r, g, b, 255) for r, g, b in samples]])
        (values,) = list(luminance_rows(grid, invert=False))
        expected = [min(255.0, luminance(r, g, b)) for r, g, b in samples]
        self.assertEqual(values, expected)

    def test_rows_inverted(self):
        grid = grid_of([[(255, 0, 0, 255), (0, 0, 0, 255)]])
        (values,) = list(luminance_rows(grid, invert=True))
        self.assertAlmostEqual(values[0], 178.755)
        self.assertEqual(values[1], 255.0)

    def test_alpha_ignored(self):
        grid = grid_of([[(10, 20, 30, 0), (10, 20, 30, 255)]])
        (values,) = list(luminance_rows(grid, invert=False))
        self.assertEqual(values[0], values[1])

    def test_values_stay_in_range(self):
        grid = grid_of([[(255, 255, 255, 255), (0, 0, 0, 255)]])
        for invert in (False, True):
            for row in luminance_rows(grid, invert=invert):
                for value in row:
                    self.assertGreaterEqual(value, 0.0)
                    self.assertLessEqual(value, 255.0)

    def test_rows_in_source_order(self):
        grid = grid_of([[(0, 0, 0, 255)], [(255, 255, 255, 255)]])
        rows = list(luminance_rows(grid, invert=False))
        self.assertEqual(rows, [[0.0], [255.0]])


if __name__ == "__main__":
    unittest.main()
