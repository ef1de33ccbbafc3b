from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class RegressionResult:
    slope: float
    intercept: float
    r_squared: float
    trend: str
    rate_per_unit: float
    predictions: List[dict[str, float]] = field(default_factory=list)


class TrendAnalyzer:
    """Rolling averages and least-squares trendlines over ordered series."""

    SUPPORTED_WINDOWS: tuple[int, ...] = (3, 7, 14, 30)
    STABLE_THRESHOLD: float = 0.05

    @staticmethod
    def rolling_average(
        points: List[dict[str, float]], window: int
    ) -> List[dict[str, float]]:
        """Return the trailing mean of up to ``window`` points for every point.

        Points carrying a ``date`` key are ordered by it first. Windows are
        partial until ``window`` points are available.
        """
        if not points or window <= 0:
            return []
        key = "date" if all("date" in p for p in points) else None
        ordered = sorted(points, key=lambda p: p[key]) if key else list(points)
        series = pd.Series([float(p["value"]) for p in ordered])
        means = series.rolling(window=window, min_periods=1).mean()
        result: List[dict[str, float]] = []
        for point, avg in zip(ordered, means):
            item = {k: v for k, v in point.items() if k != "value"}
            item["value"] = round(float(avg), 2)
            result.append(item)
        return result

    @classmethod
    def linear_regression(
        cls, points: List[dict[str, float]]
    ) -> Optional[RegressionResult]:
        """Fit ``y = slope * x + intercept`` by ordinary least squares.

        Returns None for fewer than two points or when every x is identical.
        """
        if len(points) < 2:
            return None
        x = np.array([float(p["x"]) for p in points])
        y = np.array([float(p["y"]) for p in points])
        if float(np.ptp(x)) == 0.0:
            return None
        x_mean = float(np.mean(x))
        y_mean = float(np.mean(y))
        den = float(np.sum((x - x_mean) ** 2))
        if den == 0.0:
            return None
        slope = float(np.sum((x - x_mean) * (y - y_mean))) / den
        intercept = y_mean - slope * x_mean

        pred = slope * x + intercept
        ss_res = float(np.sum((y - pred) ** 2))
        ss_tot = float(np.sum((y - y_mean) ** 2))
        r_squared = 1.0 if ss_tot == 0 else 1.0 - ss_res / ss_tot
        r_squared = max(0.0, min(1.0, r_squared))

        y_range = float(np.ptp(y))
        total_change = slope * float(np.ptp(x))
        relative = abs(total_change) / y_range if y_range > 0 else 0.0
        if relative < cls.STABLE_THRESHOLD:
            trend = "stable"
        elif slope > 0:
            trend = "increasing"
        else:
            trend = "decreasing"

        return RegressionResult(
            slope=slope,
            intercept=intercept,
            r_squared=r_squared,
            trend=trend,
            rate_per_unit=slope,
            predictions=[
                {"x": float(xi), "y": float(yi)} for xi, yi in zip(x, pred)
            ],
        )
