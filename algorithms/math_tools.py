import math

import numpy as np


class MathTools:
    """Provides essential mathematical utilities for workout calculations."""

    EPLEY_CONSTANT: float = 30.0

    @staticmethod
    def clamp(value: float, min_value: float, max_value: float) -> float:
        """Clamp ``value`` to the inclusive range [min_value, max_value]."""
        if min_value > max_value:
            raise ValueError("min_value must not exceed max_value")
        return max(min_value, min(value, max_value))

    @staticmethod
    def safe_number(value: float | int | None) -> float:
        """Return ``value`` as a float, treating None, NaN, inf and negatives as 0."""
        if value is None:
            return 0.0
        try:
            number = float(value)
        except (TypeError, ValueError):
            return 0.0
        if not math.isfinite(number) or number < 0:
            return 0.0
        return number

    @staticmethod
    def round_half_up(value: float) -> int:
        """Round to the nearest integer with halves rounded up."""
        return int(math.floor(value + 0.5))

    @classmethod
    def epley_1rm(cls, weight: float, reps: int, constant: float | None = None) -> float:
        """Return the estimated one-rep max using the Epley formula."""
        k = constant or cls.EPLEY_CONSTANT
        if reps <= 0 or weight <= 0:
            return 0.0
        if reps == 1:
            return float(weight)
        return weight * (1 + reps / k)

    @classmethod
    def weight_at_reps(
        cls, one_rep_max: float, reps: int, constant: float | None = None
    ) -> float:
        """Return the weight achievable for ``reps`` given a one-rep max."""
        k = constant or cls.EPLEY_CONSTANT
        if reps <= 0 or one_rep_max <= 0:
            return 0.0
        if reps == 1:
            return float(one_rep_max)
        return one_rep_max / (1 + reps / k)

    @staticmethod
    def weighted_mean(values: list[float], weights: list[float]) -> float:
        """Return the weighted mean or 0 when the weights sum to zero."""
        if not values or len(values) != len(weights):
            return 0.0
        w_arr = np.array(weights, dtype=float)
        if float(np.sum(w_arr)) <= 0:
            return 0.0
        return float(np.average(np.array(values, dtype=float), weights=w_arr))
