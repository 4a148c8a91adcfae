"""Generation budget sampling and target width hints."""

from __future__ import annotations

from dataclasses import dataclass

import psutil

from glyphart_renderer.models import MIN_TARGET_WIDTH

WIDTH_STEP = 10


@dataclass(frozen=True)
class PerformanceTargets:
    run_ms_max: float = 250.0
    rss_mb_max: float = 300.0


@dataclass(frozen=True)
class BudgetStatus:
    cpu_percent: float
    rss_mb: float
    run_ms: float
    overloaded: bool
    warning: str | None
    recommended_width: int


class PerformanceController:
    def __init__(self, targets: PerformanceTargets | None = None) -> None:
        self.targets = targets or PerformanceTargets()
        self._process = psutil.Process()
        # Prime non-blocking CPU measurement.
        self._process.cpu_percent(interval=None)

    def sample(self, run_ms: float, target_width: int) -> BudgetStatus:
        cpu = float(self._process.cpu_percent(interval=None))
        rss_mb = float(self._process.memory_info().rss) / (1024 * 1024)

        warning = None
        width = target_width
        if rss_mb > self.targets.rss_mb_max:
            warning = "resource_overload"
        elif run_ms > self.targets.run_ms_max:
            warning = "slow_generation"

        if warning is not None:
            # Snap down to the slider grid, one step below the current width.
            width = max(MIN_TARGET_WIDTH, ((target_width - 1) // WIDTH_STEP) * WIDTH_STEP)

        return BudgetStatus(
            cpu_percent=cpu,
            rss_mb=rss_mb,
            run_ms=float(run_ms),
            overloaded=warning is not None,
            warning=warning,
            recommended_width=width,
        )
