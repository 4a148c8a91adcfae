"""Perceptual luminance of sampled pixels."""

from __future__ import annotations

from typing import Iterator

import numpy as np

from .models import SampledGrid

RED_WEIGHT = 0.299
GREEN_WEIGHT = 0.587
BLUE_WEIGHT = 0.114
MAX_LUMINANCE = 255.0


def luminance(r: float, g: float, b: float) -> float:
    return RED_WEIGHT * r + GREEN_WEIGHT * g + BLUE_WEIGHT * b


def effective_luminance(value: float, invert: bool) -> float:
    return MAX_LUMINANCE - value if invert else value


def luminance_rows(grid: SampledGrid, invert: bool) -> Iterator[list[float]]:
    """Yield effective luminance per row, top to bottom.

    Evaluated in the same operation order as ``luminance``. Rounding in the
    weighted sum can overshoot 255 slightly, so values are clipped to
    [0, 255] before inversion.
    """
    for row in grid.pixels:
        rgb = row[:, :3].astype(np.float64)
        values = RED_WEIGHT * rgb[:, 0] + GREEN_WEIGHT * rgb[:, 1] + BLUE_WEIGHT * rgb[:, 2]
        values = np.clip(values, 0.0, MAX_LUMINANCE)
        if invert:
            values = MAX_LUMINANCE - values
        yield values.tolist()
