import dataclasses
import logging
from typing import Optional

from algorithms import MathTools
from models import AutoProgressionConfig, AutoProgressionResult, LoggedSet, SetType

logger = logging.getLogger(__name__)


class AutoProgressionAdvisor:
    """Suggest rep targets for the next session of an exercise.

    The advisor only raises the rep floor and then adds a single rep to one
    set. Sets above ``max_reps`` are left alone and instead trigger a weight
    increase suggestion.
    """

    @staticmethod
    def valid_rep_range(config: AutoProgressionConfig) -> bool:
        if not config.enabled:
            return False
        if config.min_reps is None or config.max_reps is None:
            return False
        return 1 <= config.min_reps <= config.max_reps

    @staticmethod
    def _reps(logged: LoggedSet) -> int:
        """Return the rep count with malformed values read as 0."""
        return int(MathTools.safe_number(logged.reps))

    @staticmethod
    def _working(sets: list[LoggedSet]) -> list[int]:
        return [i for i, s in enumerate(sets) if s.set_type != SetType.WARMUP]

    @classmethod
    def increase_weight_suggestion(
        cls, sets: list[LoggedSet], config: AutoProgressionConfig
    ) -> bool:
        """Return True when the lifter has outgrown the rep ceiling."""
        if not cls.valid_rep_range(config):
            return False
        reps = [cls._reps(sets[i]) for i in cls._working(sets)]
        if not reps:
            return False
        if any(r > config.max_reps for r in reps):
            return True
        return all(r >= config.max_reps for r in reps)

    @classmethod
    def apply(
        cls, sets: list[LoggedSet], config: AutoProgressionConfig
    ) -> AutoProgressionResult:
        if not cls.valid_rep_range(config):
            logger.debug("auto-progression inactive for config %s", config)
            return AutoProgressionResult(list(sets), False, False)

        result = list(sets)
        working = cls._working(result)
        changed = False
        for i in working:
            if cls._reps(result[i]) < config.min_reps:
                result[i] = dataclasses.replace(result[i], reps=config.min_reps)
                changed = True

        eligible = [
            i
            for i in working
            if config.min_reps <= cls._reps(result[i]) < config.max_reps
        ]
        if eligible:
            lowest = min(cls._reps(result[i]) for i in eligible)
            target = [i for i in eligible if cls._reps(result[i]) == lowest][-1]
            result[target] = dataclasses.replace(result[target], reps=lowest + 1)
            changed = True

        return AutoProgressionResult(
            result, changed, cls.increase_weight_suggestion(result, config)
        )

    @staticmethod
    def config_for(
        settings: Optional[dict] = None,
        enabled: Optional[bool] = None,
        min_reps: Optional[int] = None,
        max_reps: Optional[int] = None,
        use_default_range: bool = True,
    ) -> AutoProgressionConfig:
        """Merge an exercise's own settings over the app-wide defaults.

        ``settings`` is a validated settings dict. When ``use_default_range``
        is set the exercise takes the default rep range.
        """
        settings = settings or {}
        if enabled is None:
            enabled = bool(settings.get("auto_progression_enabled", False))
        if use_default_range:
            min_reps = settings.get("auto_progression_min_reps", min_reps)
            max_reps = settings.get("auto_progression_max_reps", max_reps)
        return AutoProgressionConfig(
            enabled=enabled, min_reps=min_reps, max_reps=max_reps
        )
