import os
import sys
import datetime
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from achievement_service import (
    ACHIEVEMENTS,
    AchievementEvaluator,
    achievement_definition,
    has_break_return,
    max_consecutive_run,
    unique_workout_days,
    workout_streak,
)
from models import LoggedExercise, LoggedSet, SetType, UnlockedAchievement, Workout

# 2024-01-01 is a Monday
BASE = datetime.datetime(2024, 1, 1, 12)


def workout(day_offset, hour=12, exercises=None, wid=None):
    end = BASE.replace(hour=hour) + datetime.timedelta(days=day_offset)
    return Workout(
        id=wid or f"w{day_offset}-{hour}",
        start_time=end - datetime.timedelta(minutes=45),
        end_time=end,
        exercises=exercises or [],
    )


class StreakTestCase(unittest.TestCase):
    def test_max_consecutive_run(self) -> None:
        self.assertEqual(max_consecutive_run([1, 2, 3, 4, 5]), 5)
        self.assertEqual(max_consecutive_run([1, 2, 3, 4, 5, 6, 7]), 7)
        self.assertEqual(max_consecutive_run([1, 2, 4, 5, 6, 9]), 3)
        self.assertEqual(max_consecutive_run([]), 0)

    def test_unique_days_collapse_same_day(self) -> None:
        days = unique_workout_days([workout(0, 9), workout(0, 18), workout(1)])
        self.assertEqual(len(days), 2)

    def test_break_return(self) -> None:
        self.assertTrue(has_break_return([workout(0), workout(14)]))
        self.assertFalse(has_break_return([workout(0), workout(13)]))

    def test_workout_streak(self) -> None:
        workouts = [workout(d) for d in (0, 1, 2, 5, 6)]
        today = (BASE + datetime.timedelta(days=7)).date()
        self.assertEqual(workout_streak(workouts, today), {"current": 2, "record": 3})
        later = (BASE + datetime.timedelta(days=9)).date()
        self.assertEqual(workout_streak(workouts, later), {"current": 0, "record": 3})
        self.assertEqual(workout_streak([], today), {"current": 0, "record": 0})


class AchievementEvaluatorTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.evaluator = AchievementEvaluator()

    def test_thirteen_definitions(self) -> None:
        self.assertEqual(len(ACHIEVEMENTS), 13)
        self.assertEqual(len({a.id for a in ACHIEVEMENTS}), 13)
        self.assertEqual(achievement_definition("flex_god").title, "Flex God")
        self.assertIsNone(achievement_definition("nope"))

    def test_first_workout(self) -> None:
        ids = self.evaluator.newly_unlocked_ids([workout(0)], [])
        self.assertEqual(ids, ["origin_story"])

    def test_already_unlocked_not_repeated(self) -> None:
        unlocked = [UnlockedAchievement("origin_story", BASE)]
        self.assertEqual(self.evaluator.newly_unlocked_ids([workout(0)], unlocked), [])

    def test_time_of_day_and_weekend(self) -> None:
        ids = self.evaluator.newly_unlocked_ids(
            [workout(0, hour=5), workout(1, hour=22), workout(5)], []
        )
        self.assertIn("up_like_marcus", ids)
        self.assertIn("i_never_sleep", ids)
        self.assertIn("weekend_warrior", ids)

    def test_streak_achievements(self) -> None:
        five = [workout(d) for d in range(5)]
        ids = self.evaluator.newly_unlocked_ids(five, [])
        self.assertIn("five_day_streak", ids)
        self.assertNotIn("no_off_day_week", ids)
        seven = [workout(d) for d in range(7)]
        self.assertIn("no_off_day_week", self.evaluator.newly_unlocked_ids(seven, []))

    def test_distinct_exercises_are_normalised(self) -> None:
        names = [f"Exercise {i}" for i in range(9)] + ["  exercise 0 "]
        w = workout(0, exercises=[LoggedExercise(n, []) for n in names])
        self.assertNotIn("master_of_the_craft", self.evaluator.newly_unlocked_ids([w], []))
        w = workout(0, exercises=[LoggedExercise(n, []) for n in names + ["Other"]])
        self.assertIn("master_of_the_craft", self.evaluator.newly_unlocked_ids([w], []))

    def test_high_rep_set(self) -> None:
        ignored = [
            LoggedSet(25, 10, set_type=SetType.WARMUP),
            LoggedSet(25, 10, completed=False),
            LoggedSet(25, 10, is_reps_placeholder=True),
        ]
        w = workout(0, exercises=[LoggedExercise("Curl", ignored)])
        self.assertNotIn("you_ok_bro", self.evaluator.newly_unlocked_ids([w], []))
        w = workout(0, exercises=[LoggedExercise("Curl", [LoggedSet(20, 10)])])
        self.assertIn("you_ok_bro", self.evaluator.newly_unlocked_ids([w], []))

    def test_first_run_is_silent(self) -> None:
        workouts = [workout(d) for d in range(5)]
        records, notify = self.evaluator.unlock(workouts, [], BASE, first_run=True)
        self.assertEqual(notify, [])
        self.assertIn("comin_up", [r.id for r in records])
        more = workouts + [workout(30)]
        records2, notify2 = self.evaluator.unlock(more, records, BASE)
        self.assertEqual([d.id for d in notify2], ["back_from_the_dead"])
        self.assertEqual(records2[: len(records)], records)

    def test_clean_unlocked(self) -> None:
        raw = [
            {"id": "origin_story", "unlocked_at": 1704067200000},
            {"id": "origin_story", "unlocked_at": 1704067200000},
            {"id": "unknown", "unlocked_at": 1},
            {"id": "comin_up", "unlocked_at": "2024-01-05T10:00:00"},
            {"id": "flex_god", "unlocked_at": "yesterday"},
            "garbage",
        ]
        cleaned = self.evaluator.clean_unlocked(raw)
        self.assertEqual([u.id for u in cleaned], ["origin_story", "comin_up"])
        self.assertEqual(self.evaluator.clean_unlocked(None), [])


if __name__ == "__main__":
    unittest.main()
