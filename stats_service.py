from __future__ import annotations

import datetime
from typing import Dict, List, Optional

import exercise_catalog
from algorithms import DateTools, MathTools, RepMaxEstimator, TrendAnalyzer, VolumeCalculator
from body_weight_service import BodyWeightHistory
from models import (
    ExerciseMechanicsType,
    ExerciseMetadata,
    LoggedExercise,
    Workout,
)
from muscle_contribution import MuscleContributionModel
from personal_record_service import PRDetector
from settings_schema import validate_settings


class StatisticsService:
    """Compute workout statistics for analysis.

    Everything is recomputed from ``workouts`` on each call. Dates passed as
    ``start_date``/``end_date`` are ISO strings compared against the local
    date a workout started on.
    """

    def __init__(
        self,
        workouts: List[Workout],
        body_weights: Optional[BodyWeightHistory] = None,
        customizations: Optional[Dict[str, dict]] = None,
        custom_exercises: Optional[Dict[str, ExerciseMetadata]] = None,
        settings: Optional[dict] = None,
    ) -> None:
        self.workouts = sorted(workouts, key=lambda w: w.start_time)
        self.settings = validate_settings(settings or {})
        self.body_weights = body_weights or BodyWeightHistory(
            [], self.settings["default_body_weight"]
        )
        self.customizations = customizations or {}
        self.custom_exercises = custom_exercises or {}
        self.records = PRDetector(body_weights=self.body_weights)

    @staticmethod
    def _date(workout: Workout) -> str:
        return DateTools.to_local(workout.start_time).date().isoformat()

    def _filtered(
        self, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> List[Workout]:
        result = []
        for w in self.workouts:
            d = self._date(w)
            if start_date and d < start_date:
                continue
            if end_date and d > end_date:
                continue
            result.append(w)
        return result

    def _body_weight(self, workout: Workout) -> float:
        return self.body_weights.weight_for_date(workout.start_time)

    def _metadata(self, exercise: LoggedExercise) -> Optional[ExerciseMetadata]:
        custom = self.custom_exercises.get(exercise.name)
        return MuscleContributionModel.effective_muscles(
            exercise.exercise_id or exercise.name,
            self.customizations,
            is_custom_exercise=custom is not None,
            custom_definition=custom,
            logged=exercise,
        )

    def _mechanics(self, exercise: LoggedExercise) -> ExerciseMechanicsType:
        if exercise.mechanics_type is not None:
            return exercise.mechanics_type
        meta = self._metadata(exercise)
        if meta is not None:
            return meta.mechanics_type
        return ExerciseMechanicsType.WEIGHTED

    def exercise_history(
        self,
        exercise: str,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> List[Dict[str, float]]:
        history = []
        for w in self._filtered(start_date, end_date):
            bw = self._body_weight(w)
            for ex in w.exercises:
                if ex.name != exercise:
                    continue
                mechanics = self._mechanics(ex)
                for s in ex.sets:
                    if not VolumeCalculator.is_counted(s):
                        continue
                    eff = VolumeCalculator.effective_weight(s.weight, mechanics, bw)
                    history.append(
                        {
                            "workout_id": w.id,
                            "date": self._date(w),
                            "reps": int(s.reps),
                            "weight": float(s.weight),
                            "effective_weight": eff,
                            "set_type": s.set_type.value,
                            "volume": VolumeCalculator.set_volume(s, mechanics, bw),
                            "est_1rm": MathTools.epley_1rm(eff, int(s.reps)),
                        }
                    )
        return history

    def exercise_summary(
        self,
        exercise: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> List[Dict[str, float]]:
        stats: Dict[str, Dict[str, float]] = {}
        for w in self._filtered(start_date, end_date):
            bw = self._body_weight(w)
            for ex in w.exercises:
                if exercise and ex.name != exercise:
                    continue
                mechanics = self._mechanics(ex)
                item = stats.setdefault(
                    ex.name,
                    {"volume": 0.0, "sets": 0, "max_weight": 0.0, "max_1rm": 0.0},
                )
                for s in ex.sets:
                    if not VolumeCalculator.is_counted(s):
                        continue
                    eff = VolumeCalculator.effective_weight(s.weight, mechanics, bw)
                    item["volume"] += VolumeCalculator.set_volume(s, mechanics, bw)
                    item["sets"] += 1
                    item["max_weight"] = max(item["max_weight"], eff)
                    item["max_1rm"] = max(
                        item["max_1rm"], MathTools.epley_1rm(eff, int(s.reps))
                    )
        result = []
        for name, data in stats.items():
            if not data["sets"]:
                continue
            result.append(
                {
                    "exercise": name,
                    "volume": round(data["volume"], 2),
                    "sets": int(data["sets"]),
                    "max_weight": round(data["max_weight"], 2),
                    "max_1rm": round(data["max_1rm"], 2),
                }
            )
        return sorted(result, key=lambda x: x["exercise"])

    def exercise_detail(self, exercise: str, top_limit: int = 5) -> Dict[str, object]:
        """Return heaviest set, best sets and top sets for one exercise."""
        history = self.exercise_history(exercise)
        detail: Dict[str, object] = {
            "exercise": exercise,
            "total_volume": round(sum(h["volume"] for h in history), 2),
            "total_sets": len(history),
            "heaviest_weight": 0.0,
            "best_set_by_weight": None,
            "best_set_by_volume": None,
            "best_set_by_reps": None,
            "top_sets": [],
        }
        if not history:
            return detail

        def pick(key):
            best = max(history, key=key)
            return {"weight": best["effective_weight"], "reps": best["reps"]}

        detail["best_set_by_weight"] = pick(
            lambda h: (h["effective_weight"], h["reps"])
        )
        detail["best_set_by_volume"] = pick(lambda h: h["volume"])
        detail["best_set_by_reps"] = pick(lambda h: (h["reps"], h["effective_weight"]))
        detail["heaviest_weight"] = detail["best_set_by_weight"]["weight"]
        detail["top_sets"] = [
            {"weight": t.weight, "reps": t.reps, "timestamp": t.timestamp.isoformat()}
            for t in self.records.top_sets(exercise, self.workouts, top_limit)
        ]
        return detail

    def rep_max_estimates(
        self,
        exercise: str,
        overrides: Optional[dict[int, float]] = None,
        now: Optional[datetime.datetime] = None,
    ) -> Dict[str, list]:
        """Return the rep-max curve and observed failure sets for an exercise."""
        records = self.records.exercise_records(exercise, self.workouts)
        estimates = RepMaxEstimator.estimate(
            records["estimated_1rm"],
            records["best_set_weight"],
            records["best_set_reps"],
            top_sets=self.records.top_sets(exercise, self.workouts),
            overrides=overrides,
            now=now,
        )
        failures = RepMaxEstimator.failure_data_points(
            self.records.failure_sets(exercise, self.workouts)
        )
        return {"estimates": estimates or [], "failure_points": failures}

    def progression(
        self,
        exercise: str,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> List[Dict[str, float]]:
        history = self.exercise_history(exercise, start_date, end_date)
        by_date: Dict[str, float] = {}
        for item in history:
            date = item["date"]
            est = item["est_1rm"]
            if date not in by_date or est > by_date[date]:
                by_date[date] = est
        return [{"date": d, "est_1rm": round(by_date[d], 2)} for d in sorted(by_date)]

    def daily_volume(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> List[Dict[str, float]]:
        """Return total volume and set count per day."""
        by_date: Dict[str, Dict[str, float]] = {}
        for w in self._filtered(start_date, end_date):
            stats = self.workout_stats(w)
            entry = by_date.setdefault(self._date(w), {"volume": 0.0, "sets": 0})
            entry["volume"] += stats["volume"]
            entry["sets"] += stats["sets"]
        return [
            {"date": d, "volume": round(by_date[d]["volume"], 2), "sets": by_date[d]["sets"]}
            for d in sorted(by_date)
        ]

    def weekly_volume(
        self,
        week_start_day: Optional[int] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> List[Dict[str, float]]:
        """Return volume, sets and workout count per calendar week."""
        if week_start_day is None:
            week_start_day = self.settings["week_start_day"]
        by_week: Dict[str, Dict[str, float]] = {}
        for w in self._filtered(start_date, end_date):
            start = DateTools.week_start(w.start_time, week_start_day).isoformat()
            stats = self.workout_stats(w)
            entry = by_week.setdefault(start, {"volume": 0.0, "sets": 0, "workouts": 0})
            entry["volume"] += stats["volume"]
            entry["sets"] += stats["sets"]
            entry["workouts"] += 1
        return [
            {
                "week_start": k,
                "volume": round(by_week[k]["volume"], 2),
                "sets": by_week[k]["sets"],
                "workouts": by_week[k]["workouts"],
            }
            for k in sorted(by_week)
        ]

    def muscle_volume(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> List[Dict[str, float]]:
        """Return per-muscle volume, set credit and share of total volume."""
        items = []
        for w in self._filtered(start_date, end_date):
            bw = self._body_weight(w)
            for ex in w.exercises:
                meta = self._metadata(ex)
                if meta is None:
                    continue
                mechanics = ex.mechanics_type or meta.mechanics_type
                counted = [s for s in ex.sets if VolumeCalculator.is_counted(s)]
                if not counted:
                    continue
                items.append(
                    {
                        "contributions": MuscleContributionModel.contributions_for(meta),
                        "primary_muscle": meta.primary_muscle,
                        "volume": VolumeCalculator.sets_volume(counted, mechanics, bw),
                        "sets": len(counted),
                    }
                )
        data = MuscleContributionModel.aggregate_muscle_data(items)
        total = sum(data["volume"].values())
        result = []
        for muscle, vol in data["volume"].items():
            result.append(
                {
                    "muscle": muscle.value,
                    "volume": round(vol, 2),
                    "sets": round(data["sets"].get(muscle, 0.0), 2),
                    "percentage": round(vol / total * 100, 2) if total > 0 else 0.0,
                }
            )
        return sorted(result, key=lambda x: (-x["volume"], x["muscle"]))

    def workout_stats(self, workout: Workout) -> Dict[str, float]:
        bw = self._body_weight(workout)
        volume = 0.0
        sets = 0
        for ex in workout.exercises:
            mechanics = self._mechanics(ex)
            volume += VolumeCalculator.sets_volume(ex.sets, mechanics, bw)
            sets += sum(1 for s in ex.sets if VolumeCalculator.is_counted(s))
        duration = (workout.end_time - workout.start_time).total_seconds() / 60
        return {
            "volume": round(volume, 2),
            "sets": sets,
            "exercises": len(workout.exercises),
            "duration_minutes": round(max(0.0, duration), 2),
        }

    def overview(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> Dict[str, float]:
        workouts = self._filtered(start_date, end_date)
        if not workouts:
            return {"workouts": 0, "volume": 0.0, "sets": 0, "avg_duration": 0.0}
        stats = [self.workout_stats(w) for w in workouts]
        return {
            "workouts": len(workouts),
            "volume": round(sum(s["volume"] for s in stats), 2),
            "sets": sum(s["sets"] for s in stats),
            "avg_duration": round(
                sum(s["duration_minutes"] for s in stats) / len(stats), 2
            ),
        }

    def _trend(
        self, points: List[Dict[str, float]], window: Optional[int]
    ) -> Dict[str, object]:
        window = window or self.settings["rolling_window"]
        trendline = None
        if self.settings["show_trendline"] and points:
            first = datetime.date.fromisoformat(points[0]["date"]).toordinal()
            trendline = TrendAnalyzer.linear_regression(
                [
                    {
                        "x": datetime.date.fromisoformat(p["date"]).toordinal() - first,
                        "y": p["value"],
                    }
                    for p in points
                ]
            )
        return {
            "points": points,
            "rolling": TrendAnalyzer.rolling_average(points, window),
            "trendline": trendline,
        }

    def volume_trend(
        self,
        window: Optional[int] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> Dict[str, object]:
        points = [
            {"date": d["date"], "value": d["volume"]}
            for d in self.daily_volume(start_date, end_date)
        ]
        return self._trend(points, window)

    def body_weight_history(self, unit: Optional[str] = None) -> List[Dict[str, float]]:
        return self.body_weights.history(unit or self.settings["weight_unit"])

    def body_weight_trend(
        self, window: Optional[int] = None, unit: Optional[str] = None
    ) -> Dict[str, object]:
        return self._trend(self.body_weight_history(unit), window)

    def weight_stats(self, unit: Optional[str] = None) -> Dict[str, float]:
        history = self.body_weight_history(unit)
        if not history:
            return {"avg": 0.0, "min": 0.0, "max": 0.0}
        weights = [h["value"] for h in history]
        return {
            "avg": round(sum(weights) / len(weights), 2),
            "min": min(weights),
            "max": max(weights),
        }

    def moving_average_progress(
        self, exercise: str, window: Optional[int] = None
    ) -> List[Dict[str, float]]:
        """Return the rolling average of the per-day best estimated 1RM."""
        points = [
            {"date": p["date"], "value": p["est_1rm"]}
            for p in self.progression(exercise)
        ]
        return TrendAnalyzer.rolling_average(
            points, window or self.settings["rolling_window"]
        )

    def exercise_names(self) -> List[str]:
        """Return logged exercise names followed by unused predefined ones."""
        logged = sorted({ex.name for w in self.workouts for ex in w.exercises})
        extra = [n for n in exercise_catalog.exercise_names() if n not in logged]
        return logged + extra
