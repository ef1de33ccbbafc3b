import os
import sys
import datetime
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from body_weight_service import BodyWeightHistory
from models import (
    BodyWeightLog,
    ExerciseMechanicsType,
    LoggedExercise,
    LoggedSet,
    MuscleGroup,
    SetType,
    Workout,
)
from stats_service import StatisticsService


def make_workout(wid, day, exercises, minutes=60):
    start = datetime.datetime(2024, 5, day, 18)
    return Workout(
        id=wid,
        start_time=start,
        end_time=start + datetime.timedelta(minutes=minutes),
        exercises=exercises,
    )


class StatisticsServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        # 2024-05-13 is a Monday
        self.workouts = [
            make_workout(
                "w1",
                13,
                [
                    LoggedExercise(
                        "Bench Press (Barbell)",
                        [
                            LoggedSet(5, 40, set_type=SetType.WARMUP),
                            LoggedSet(10, 100),
                            LoggedSet(8, 100, set_type=SetType.FAILURE),
                        ],
                    ),
                    LoggedExercise("Push-up", [LoggedSet(20, 0)]),
                ],
            ),
            make_workout(
                "w2",
                15,
                [LoggedExercise("Bench Press (Barbell)", [LoggedSet(5, 110)])],
                minutes=30,
            ),
            make_workout(
                "w3",
                20,
                [LoggedExercise("Squat", [LoggedSet(5, 140), LoggedSet(5, 140)])],
            ),
        ]
        self.body_weights = BodyWeightHistory(
            [
                BodyWeightLog(datetime.date(2024, 5, 1), 80),
                BodyWeightLog(datetime.date(2024, 5, 10), 176.37, "lbs"),
                BodyWeightLog(datetime.date(2024, 5, 17), 79),
            ]
        )
        self.stats = StatisticsService(
            self.workouts, self.body_weights, settings={"rolling_window": 3}
        )

    def test_workout_stats_resolves_catalog_mechanics(self) -> None:
        stats = self.stats.workout_stats(self.workouts[0])
        # push-up is bodyweight in the catalog; body weight 176.37 lbs ~ 80 kg
        self.assertAlmostEqual(stats["volume"], 1000 + 800 + 20 * 80, delta=0.1)
        self.assertEqual(stats["sets"], 3)
        self.assertEqual(stats["duration_minutes"], 60)

    def test_exercise_history_skips_warmups(self) -> None:
        history = self.stats.exercise_history("Bench Press (Barbell)")
        self.assertEqual(len(history), 3)
        self.assertEqual(history[0]["date"], "2024-05-13")
        self.assertEqual(
            self.stats.exercise_history("Bench Press (Barbell)", start_date="2024-05-14")[0]["weight"],
            110,
        )

    def test_exercise_summary(self) -> None:
        summary = self.stats.exercise_summary()
        self.assertEqual(
            [s["exercise"] for s in summary],
            ["Bench Press (Barbell)", "Push-up", "Squat"],
        )
        bench = summary[0]
        self.assertEqual(bench["sets"], 3)
        self.assertEqual(bench["volume"], 1000 + 800 + 550)
        self.assertEqual(bench["max_weight"], 110)

    def test_exercise_detail(self) -> None:
        detail = self.stats.exercise_detail("Bench Press (Barbell)")
        self.assertEqual(detail["heaviest_weight"], 110)
        self.assertEqual(detail["best_set_by_volume"], {"weight": 100, "reps": 10})
        self.assertEqual(detail["best_set_by_reps"], {"weight": 100, "reps": 10})
        self.assertEqual(detail["top_sets"][0]["weight"], 110)
        empty = self.stats.exercise_detail("Deadlift")
        self.assertEqual(empty["total_sets"], 0)
        self.assertIsNone(empty["best_set_by_weight"])

    def test_rep_max_estimates(self) -> None:
        result = self.stats.rep_max_estimates(
            "Bench Press (Barbell)", now=datetime.datetime(2024, 6, 1)
        )
        weights = [e.weight for e in result["estimates"]]
        self.assertEqual(len(weights), 6)
        self.assertEqual(weights, sorted(weights, reverse=True))
        self.assertEqual(len(result["failure_points"]), 1)
        self.assertEqual(self.stats.rep_max_estimates("Deadlift")["estimates"], [])

    def test_progression(self) -> None:
        progression = self.stats.progression("Bench Press (Barbell)")
        self.assertEqual([p["date"] for p in progression], ["2024-05-13", "2024-05-15"])
        self.assertAlmostEqual(progression[0]["est_1rm"], 133.33)

    def test_daily_and_weekly_volume(self) -> None:
        daily = self.stats.daily_volume()
        self.assertEqual(len(daily), 3)
        self.assertEqual(daily[2], {"date": "2024-05-20", "volume": 1400, "sets": 2})
        weekly = self.stats.weekly_volume()
        self.assertEqual([w["week_start"] for w in weekly], ["2024-05-13", "2024-05-20"])
        self.assertEqual(weekly[0]["workouts"], 2)
        sunday_weeks = self.stats.weekly_volume(week_start_day=0)
        self.assertEqual([w["week_start"] for w in sunday_weeks], ["2024-05-12", "2024-05-19"])

    def test_muscle_volume(self) -> None:
        muscles = {m["muscle"]: m for m in self.stats.muscle_volume(start_date="2024-05-20")}
        self.assertAlmostEqual(muscles["quadriceps"]["volume"], 700)
        self.assertAlmostEqual(muscles["gluteal"]["volume"], 420)
        self.assertEqual(muscles["quadriceps"]["sets"], 2)
        self.assertAlmostEqual(muscles["hamstring"]["sets"], 0.4)
        self.assertAlmostEqual(sum(m["percentage"] for m in muscles.values()), 100, delta=0.05)

    def test_overview(self) -> None:
        overview = self.stats.overview()
        self.assertEqual(overview["workouts"], 3)
        self.assertEqual(overview["sets"], 6)
        self.assertEqual(overview["avg_duration"], 50)
        self.assertEqual(self.stats.overview(start_date="2025-01-01")["workouts"], 0)

    def test_volume_trend(self) -> None:
        trend = self.stats.volume_trend()
        self.assertEqual(len(trend["rolling"]), 3)
        self.assertIsNotNone(trend["trendline"])
        hidden = StatisticsService(self.workouts, settings={"show_trendline": False})
        self.assertIsNone(hidden.volume_trend()["trendline"])

    def test_body_weight(self) -> None:
        history = self.stats.body_weight_history()
        self.assertEqual(history[1], {"date": "2024-05-10", "value": 80.0})
        self.assertEqual(self.stats.body_weight_history("lbs")[0]["value"], 176.37)
        stats = self.stats.weight_stats()
        self.assertEqual(stats["min"], 79)
        self.assertEqual(stats["max"], 80)
        trend = self.stats.body_weight_trend()
        self.assertEqual(trend["trendline"].trend, "decreasing")

    def test_moving_average_progress(self) -> None:
        points = self.stats.moving_average_progress("Bench Press (Barbell)", window=7)
        self.assertEqual(len(points), 2)

    def test_invalid_settings(self) -> None:
        with self.assertRaises(ValueError):
            StatisticsService([], settings={"rolling_window": 5})

    def test_explicit_mechanics_kept(self) -> None:
        workout = make_workout(
            "w9",
            21,
            [
                LoggedExercise(
                    "Push-up",
                    [LoggedSet(10, 10)],
                    mechanics_type=ExerciseMechanicsType.WEIGHTED_BODYWEIGHT,
                )
            ],
        )
        stats = StatisticsService([workout], self.body_weights)
        self.assertEqual(stats.workout_stats(workout)["volume"], 10 * 89)

    def test_captured_muscles_keep_catalog_mechanics(self) -> None:
        workout = make_workout(
            "w10",
            22,
            [
                LoggedExercise(
                    "Pull-up",
                    [LoggedSet(10, 0)],
                    primary_muscle=MuscleGroup.LATS,
                    secondary_muscles=[],
                )
            ],
        )
        stats = StatisticsService([workout])
        self.assertEqual(stats.workout_stats(workout)["volume"], 700)
        muscles = stats.muscle_volume()
        self.assertEqual(len(muscles), 1)
        self.assertEqual(muscles[0]["muscle"], "lats")
        self.assertEqual(muscles[0]["volume"], 700)


if __name__ == "__main__":
    unittest.main()
