from __future__ import annotations

import logging
from typing import Dict, List, Optional

from algorithms import MathTools, VolumeCalculator
from body_weight_service import BodyWeightHistory
from models import (
    ExerciseMechanicsType,
    FailureSetData,
    LoggedSet,
    PersonalRecord,
    PRType,
    SetType,
    TopSet,
    Workout,
)

logger = logging.getLogger(__name__)


class PRDetector:
    """Detect personal records by comparing a workout against history.

    Every historical set is evaluated with the mechanics type recorded on its
    own exercise entry, so later changes to an exercise's type do not
    reinterpret old sets.
    """

    def __init__(
        self,
        body_weight: float = BodyWeightHistory.DEFAULT_BODY_WEIGHT_KG,
        body_weights: Optional[BodyWeightHistory] = None,
    ) -> None:
        self.body_weight = body_weight
        self.body_weights = body_weights

    def _body_weight_for(self, workout: Workout) -> float:
        if self.body_weights is not None:
            return self.body_weights.weight_for_date(workout.start_time)
        return self.body_weight

    def _counted_sets(
        self,
        name: str,
        workouts: List[Workout],
        fallback: Optional[ExerciseMechanicsType] = None,
    ) -> List[tuple[LoggedSet, ExerciseMechanicsType, float, Workout]]:
        rows = []
        for workout in workouts:
            bw = self._body_weight_for(workout)
            for ex in workout.exercises:
                if ex.name != name:
                    continue
                mechanics = ex.mechanics_type or fallback or ex.mechanics
                for s in ex.sets:
                    if VolumeCalculator.is_counted(s):
                        rows.append((s, mechanics, bw, workout))
        return rows

    @staticmethod
    def _maxima(rows) -> tuple[float, float]:
        weight = max(
            VolumeCalculator.effective_weight(s.weight, mech, bw)
            for s, mech, bw, _w in rows
        )
        volume = max(
            VolumeCalculator.set_volume(s, mech, bw) for s, mech, bw, _w in rows
        )
        return weight, volume

    def detect(
        self, workout: Workout, history: List[Workout]
    ) -> List[PersonalRecord]:
        """Return heaviest-weight and highest-volume PRs set in ``workout``.

        ``history`` may include ``workout`` itself; it is excluded by id.
        """
        prior = [w for w in history if w.id != workout.id]
        records: List[PersonalRecord] = []
        seen: list[str] = []
        for exercise in workout.exercises:
            if exercise.name in seen:
                continue
            seen.append(exercise.name)
            mechanics = exercise.mechanics
            current = self._counted_sets(exercise.name, [workout], mechanics)
            if not current:
                continue
            cur_weight, cur_volume = self._maxima(current)
            past = self._counted_sets(exercise.name, prior, mechanics)

            if not past:
                if cur_weight > 0 or mechanics == ExerciseMechanicsType.BODYWEIGHT:
                    records.append(
                        PersonalRecord(exercise.name, PRType.HEAVIEST_WEIGHT, cur_weight)
                    )
                    records.append(
                        PersonalRecord(exercise.name, PRType.HIGHEST_VOLUME, cur_volume)
                    )
                continue

            past_weight, past_volume = self._maxima(past)
            if cur_weight > past_weight:
                records.append(
                    PersonalRecord(exercise.name, PRType.HEAVIEST_WEIGHT, cur_weight)
                )
            if cur_volume > past_volume:
                records.append(
                    PersonalRecord(exercise.name, PRType.HIGHEST_VOLUME, cur_volume)
                )
        logger.debug("workout %s produced %d PRs", workout.id, len(records))
        return records

    def exercise_records(
        self,
        name: str,
        workouts: List[Workout],
        mechanics: Optional[ExerciseMechanicsType] = None,
    ) -> Dict[str, float]:
        """Return all-time bests for an exercise.

        ``mechanics`` forces one type for every set instead of the recorded one.
        """
        rows = self._counted_sets(name, workouts)
        result = {
            "pr_weight": 0.0,
            "pr_reps": 0,
            "estimated_1rm": 0.0,
            "best_set_weight": 0.0,
            "best_set_reps": 0,
        }
        best_volume = -1.0
        for s, recorded, bw, _w in rows:
            mech = mechanics or recorded
            eff = VolumeCalculator.effective_weight(s.weight, mech, bw)
            reps = int(MathTools.safe_number(s.reps))
            result["pr_weight"] = max(result["pr_weight"], eff)
            result["pr_reps"] = max(result["pr_reps"], reps)
            result["estimated_1rm"] = max(
                result["estimated_1rm"], MathTools.epley_1rm(eff, reps)
            )
            if eff * reps > best_volume:
                best_volume = eff * reps
                result["best_set_weight"] = eff
                result["best_set_reps"] = reps
        return result

    def top_sets(
        self, name: str, workouts: List[Workout], limit: int = 5
    ) -> List[TopSet]:
        """Return the heaviest sets by effective weight, ties broken by reps."""
        tops = [
            TopSet(
                weight=VolumeCalculator.effective_weight(s.weight, mech, bw),
                reps=int(MathTools.safe_number(s.reps)),
                timestamp=s.timestamp or w.end_time,
            )
            for s, mech, bw, w in self._counted_sets(name, workouts)
        ]
        tops.sort(key=lambda t: (t.weight, t.reps), reverse=True)
        return tops[:limit]

    def failure_sets(self, name: str, workouts: List[Workout]) -> List[FailureSetData]:
        return [
            FailureSetData(
                reps=int(MathTools.safe_number(s.reps)),
                weight=VolumeCalculator.effective_weight(s.weight, mech, bw),
                timestamp=s.timestamp or w.end_time,
                workout_id=w.id,
            )
            for s, mech, bw, w in self._counted_sets(name, workouts)
            if s.set_type == SetType.FAILURE
        ]
