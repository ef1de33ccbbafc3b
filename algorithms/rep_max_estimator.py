from __future__ import annotations

import datetime
import logging
import math
from typing import Iterable, List, Optional

from models import FailureSetData, RepMaxEstimate, TopSet
from .math_tools import MathTools

logger = logging.getLogger(__name__)


class RepMaxEstimator:
    """Estimate a personalised strength curve from historical top sets.

    Uses the Epley decay ``weight(reps) = 1RM / (1 + reps / k)`` with the
    fatigue constant ``k`` back-solved from the lifter's own sets.
    """

    TARGET_REPS: tuple[int, ...] = (1, 5, 10, 15, 20, 25)
    DEFAULT_FATIGUE_CONSTANT: float = 30.0
    MIN_FATIGUE_CONSTANT: float = 15.0
    MAX_FATIGUE_CONSTANT: float = 60.0

    @staticmethod
    def recency_weight(
        timestamp: datetime.datetime, now: datetime.datetime
    ) -> float:
        """Return the weight of a set in the fatigue average based on its age."""
        if timestamp.tzinfo is None and now.tzinfo is not None:
            timestamp = timestamp.astimezone()
        elif timestamp.tzinfo is not None and now.tzinfo is None:
            now = now.astimezone()
        age_days = (now - timestamp).total_seconds() / 86400
        if age_days <= 90:
            return 1.0
        if age_days <= 180:
            return 0.8
        if age_days <= 365:
            return 0.5
        return 0.2

    @classmethod
    def _back_solve(cls, one_rep_max: float, weight: float, reps: int) -> Optional[float]:
        """Return the clamped constant implied by one set, or None."""
        if reps == 1 or weight <= 0:
            return None
        denominator = one_rep_max / weight - 1
        if not math.isfinite(denominator) or denominator <= 0:
            return None
        calculated = reps / denominator
        if not math.isfinite(calculated) or calculated <= 0:
            return None
        return MathTools.clamp(
            calculated, cls.MIN_FATIGUE_CONSTANT, cls.MAX_FATIGUE_CONSTANT
        )

    @classmethod
    def fatigue_constant(
        cls,
        one_rep_max: float,
        best_set_weight: float,
        best_set_reps: int,
        top_sets: Optional[List[TopSet]] = None,
        now: Optional[datetime.datetime] = None,
    ) -> float:
        if top_sets:
            now = now or datetime.datetime.now()
            constants: list[float] = []
            weights: list[float] = []
            for top in top_sets:
                k = cls._back_solve(one_rep_max, top.weight, top.reps)
                if k is None:
                    continue
                constants.append(k)
                weights.append(cls.recency_weight(top.timestamp, now))
            if constants:
                return MathTools.weighted_mean(constants, weights)
            logger.debug("no top set yields a fatigue constant, using default")
            return cls.DEFAULT_FATIGUE_CONSTANT

        k = cls._back_solve(one_rep_max, best_set_weight, best_set_reps)
        if k is None:
            logger.debug("best set yields no fatigue constant, using default")
            return cls.DEFAULT_FATIGUE_CONSTANT
        return k

    @classmethod
    def estimate(
        cls,
        one_rep_max: float,
        best_set_weight: float,
        best_set_reps: int,
        top_sets: Optional[List[TopSet]] = None,
        overrides: Optional[dict[int, float]] = None,
        now: Optional[datetime.datetime] = None,
    ) -> Optional[List[RepMaxEstimate]]:
        """Return estimates for :attr:`TARGET_REPS`, or None for invalid input.

        The curve never exceeds ``one_rep_max`` and never increases with reps.
        Manual ``overrides`` replace computed values before that is enforced.
        """
        one_rep_max = MathTools.safe_number(one_rep_max)
        best_set_weight = MathTools.safe_number(best_set_weight)
        best_set_reps = int(MathTools.safe_number(best_set_reps))
        if one_rep_max <= 0 or best_set_weight <= 0 or best_set_reps <= 0:
            return None

        k = cls.fatigue_constant(
            one_rep_max, best_set_weight, best_set_reps, top_sets, now
        )
        # malformed or non-positive overrides are ignored
        overrides = {
            reps: MathTools.safe_number(value)
            for reps, value in (overrides or {}).items()
            if MathTools.safe_number(value) > 0
        }

        estimates: List[RepMaxEstimate] = []
        previous = math.inf
        for reps in cls.TARGET_REPS:
            if reps in overrides:
                weight = overrides[reps]
            elif reps == 1:
                weight = one_rep_max
            else:
                weight = MathTools.weight_at_reps(one_rep_max, reps, k)
            weight = min(weight, one_rep_max, previous)
            weight = MathTools.round_half_up(weight)
            estimates.append(RepMaxEstimate(reps=reps, weight=weight))
            previous = weight
        return estimates

    @staticmethod
    def failure_data_points(
        failure_sets: Iterable[FailureSetData],
    ) -> List[RepMaxEstimate]:
        """Return observed failure sets as curve markers."""
        return [
            RepMaxEstimate(
                reps=f.reps,
                weight=MathTools.round_half_up(f.weight),
                is_actual_data=True,
                timestamp=f.timestamp,
            )
            for f in failure_sets
        ]
