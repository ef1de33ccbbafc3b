from __future__ import annotations

from typing import Iterable, Optional

from models import ExerciseMechanicsType, LoggedExercise, LoggedSet, SetType, Workout
from .math_tools import MathTools


class VolumeCalculator:
    """Turn logged sets into effective resistance and training volume.

    All inputs are coerced with :meth:`MathTools.safe_number`, so malformed
    numbers count as zero and no method raises.
    """

    @staticmethod
    def is_counted(logged: LoggedSet) -> bool:
        """Return True for sets that count towards volume, PRs and muscle totals."""
        if not logged.completed or logged.set_type == SetType.WARMUP:
            return False
        return MathTools.safe_number(logged.reps) > 0

    @staticmethod
    def effective_weight(
        weight: float,
        mechanics: Optional[ExerciseMechanicsType],
        body_weight: float,
    ) -> float:
        """Return the resistance a single repetition represents.

        ``doubled`` movements report the load of one limb here; the second
        limb is only added when computing volume.
        """
        weight = MathTools.safe_number(weight)
        body_weight = MathTools.safe_number(body_weight)
        if mechanics == ExerciseMechanicsType.BODYWEIGHT:
            return body_weight
        if mechanics == ExerciseMechanicsType.WEIGHTED_BODYWEIGHT:
            return body_weight + weight
        if mechanics == ExerciseMechanicsType.ASSISTED_BODYWEIGHT:
            return max(0.0, body_weight - weight)
        return weight

    @classmethod
    def volume_of(
        cls,
        reps: float,
        weight: float,
        mechanics: Optional[ExerciseMechanicsType],
        body_weight: float,
    ) -> float:
        reps = MathTools.safe_number(reps)
        resistance = cls.effective_weight(weight, mechanics, body_weight)
        if mechanics == ExerciseMechanicsType.DOUBLED:
            return reps * resistance * 2
        return reps * resistance

    @classmethod
    def set_volume(
        cls,
        logged: LoggedSet,
        mechanics: Optional[ExerciseMechanicsType],
        body_weight: float,
    ) -> float:
        """Return the volume of one set, or 0 for warmup and incomplete sets."""
        if not cls.is_counted(logged):
            return 0.0
        return cls.volume_of(logged.reps, logged.weight, mechanics, body_weight)

    @classmethod
    def sets_volume(
        cls,
        sets: Iterable[LoggedSet],
        mechanics: Optional[ExerciseMechanicsType],
        body_weight: float,
    ) -> float:
        return sum(cls.set_volume(s, mechanics, body_weight) for s in sets)

    @classmethod
    def exercise_volume(cls, exercise: LoggedExercise, body_weight: float) -> float:
        return cls.sets_volume(exercise.sets, exercise.mechanics, body_weight)

    @classmethod
    def workout_volume(cls, workout: Workout, body_weight: float) -> float:
        return sum(cls.exercise_volume(ex, body_weight) for ex in workout.exercises)

    @classmethod
    def template_exercise_volume(
        cls,
        sets: Iterable[LoggedSet],
        mechanics: Optional[ExerciseMechanicsType],
        body_weight: float,
    ) -> float:
        """Return planned volume, counting every non-warmup set."""
        total = 0.0
        for s in sets:
            if s.set_type == SetType.WARMUP:
                continue
            total += cls.volume_of(s.reps, s.weight, mechanics, body_weight)
        return total
