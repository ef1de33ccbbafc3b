import datetime
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from algorithms import DateTools
from models import SetType, UnlockedAchievement, Workout

logger = logging.getLogger(__name__)

BREAK_RETURN_DAYS = 14


def unique_workout_days(workouts: list[Workout]) -> list[int]:
    """Return sorted distinct local day numbers of workout end times."""
    return sorted({DateTools.local_day_number(w.end_time) for w in workouts})


def max_consecutive_run(days: list[int]) -> int:
    if not days:
        return 0
    best = run = 1
    for prev, cur in zip(days, days[1:]):
        if cur == prev + 1:
            run += 1
            best = max(best, run)
        else:
            run = 1
    return best


def has_break_return(workouts: list[Workout], min_gap_days: int = BREAK_RETURN_DAYS) -> bool:
    days = unique_workout_days(workouts)
    return any(cur - prev >= min_gap_days for prev, cur in zip(days, days[1:]))


def workout_streak(
    workouts: list[Workout], today: Optional[datetime.date] = None
) -> dict[str, int]:
    """Return current and record workout streak lengths."""
    days = unique_workout_days(workouts)
    if not days:
        return {"current": 0, "record": 0}
    record = max_consecutive_run(days)
    current = 1
    for i in range(len(days) - 1, 0, -1):
        if days[i] - days[i - 1] != 1:
            break
        current += 1
    today = today or datetime.date.today()
    if today.toordinal() - days[-1] > 1:
        current = 0
    return {"current": current, "record": record}


def _unique_exercise_count(workouts: list[Workout]) -> int:
    names = set()
    for w in workouts:
        for ex in w.exercises:
            name = (ex.name or "").strip().lower()
            if name:
                names.add(name)
    return len(names)


def _has_set_with_reps(workouts: list[Workout], min_reps: int) -> bool:
    for w in workouts:
        for ex in w.exercises:
            for s in ex.sets:
                if (
                    s.completed
                    and not s.is_reps_placeholder
                    and s.set_type != SetType.WARMUP
                    and s.reps >= min_reps
                ):
                    return True
    return False


def _local_end_times(workouts: list[Workout]) -> Iterable[datetime.datetime]:
    return (DateTools.to_local(w.end_time) for w in workouts)


@dataclass(frozen=True)
class AchievementDefinition:
    id: str
    title: str
    description: str
    message: str
    predicate: Callable[[list[Workout]], bool]

    def is_unlocked(self, workouts: list[Workout]) -> bool:
        return self.predicate(workouts)


def _count_at_least(n: int) -> Callable[[list[Workout]], bool]:
    return lambda workouts: len(workouts) >= n


def _streak_at_least(n: int) -> Callable[[list[Workout]], bool]:
    return lambda workouts: max_consecutive_run(unique_workout_days(workouts)) >= n


ACHIEVEMENTS: list[AchievementDefinition] = [
    AchievementDefinition(
        "origin_story", "Origin Story", "Log your first workout",
        "Log your first workout", _count_at_least(1),
    ),
    AchievementDefinition(
        "comin_up", "The Come Up", "Complete 5 workouts",
        "Complete 5 workouts", _count_at_least(5),
    ),
    AchievementDefinition(
        "addicted_to_iron", "Addicted to Iron", "Complete 25 workouts",
        "Complete 25 workouts", _count_at_least(25),
    ),
    AchievementDefinition(
        "triple_digit_demon", "One Hunnid", "Complete 100 workouts",
        "Complete 100 workouts", _count_at_least(100),
    ),
    AchievementDefinition(
        "flex_god", "Flex God", "Complete 300 workouts",
        "Complete 300 workouts", _count_at_least(300),
    ),
    AchievementDefinition(
        "up_like_marcus", "Up Like Marcus", "Complete a workout before 6am",
        "Complete a workout before 6am",
        lambda workouts: any(t.hour < 6 for t in _local_end_times(workouts)),
    ),
    AchievementDefinition(
        "i_never_sleep", "I Never Sleep", "Complete a workout after 10pm",
        "Complete a workout after 10pm",
        lambda workouts: any(t.hour >= 22 for t in _local_end_times(workouts)),
    ),
    AchievementDefinition(
        "five_day_streak", "One, two, three, fo, fif!", "Work out 5 days in a row",
        "Work out 5 days in a row", _streak_at_least(5),
    ),
    AchievementDefinition(
        "no_off_day_week", "No Off Days", "Work out every day in a week",
        "Work out every day in a week", _streak_at_least(7),
    ),
    AchievementDefinition(
        "weekend_warrior", "Weekend Warrior", "Complete a workout on the weekend",
        "Complete a workout on the weekend",
        lambda workouts: any(t.weekday() >= 5 for t in _local_end_times(workouts)),
    ),
    AchievementDefinition(
        "back_from_the_dead", "Back from the Dead", "Return after a 2-week break",
        "Return after a 2-week break", has_break_return,
    ),
    AchievementDefinition(
        "master_of_the_craft", "Master of the Craft", "Log 10 different exercises",
        "Log 10 different exercises",
        lambda workouts: _unique_exercise_count(workouts) >= 10,
    ),
    AchievementDefinition(
        "you_ok_bro", "You OK Bro?", "Log a set with 20 or more reps",
        "Log a set with 20 or more reps",
        lambda workouts: _has_set_with_reps(workouts, 20),
    ),
]

ACHIEVEMENT_IDS = [a.id for a in ACHIEVEMENTS]


def achievement_definition(achievement_id: str) -> Optional[AchievementDefinition]:
    for definition in ACHIEVEMENTS:
        if definition.id == achievement_id:
            return definition
    return None


class AchievementEvaluator:
    """Evaluate achievements against the full workout history.

    Unlocks are append-only; ids already present in ``unlocked`` are never
    evaluated again.
    """

    def __init__(self, definitions: Optional[list[AchievementDefinition]] = None) -> None:
        self.definitions = definitions if definitions is not None else ACHIEVEMENTS

    def newly_unlocked(
        self, workouts: list[Workout], unlocked: Iterable[UnlockedAchievement]
    ) -> list[AchievementDefinition]:
        have = {u.id for u in unlocked}
        return [
            d for d in self.definitions if d.id not in have and d.is_unlocked(workouts)
        ]

    def newly_unlocked_ids(
        self, workouts: list[Workout], unlocked: Iterable[UnlockedAchievement]
    ) -> list[str]:
        return [d.id for d in self.newly_unlocked(workouts, unlocked)]

    def unlock(
        self,
        workouts: list[Workout],
        unlocked: list[UnlockedAchievement],
        now: Optional[datetime.datetime] = None,
        first_run: bool = False,
    ) -> tuple[list[UnlockedAchievement], list[AchievementDefinition]]:
        """Return the extended unlock list and the achievements to announce.

        On the first evaluation of existing history nothing is announced.
        """
        now = now or datetime.datetime.now()
        fresh = self.newly_unlocked(workouts, unlocked)
        records = list(unlocked) + [UnlockedAchievement(d.id, now) for d in fresh]
        if first_run:
            logger.debug("backfilled %d achievements silently", len(fresh))
            return records, []
        return records, fresh

    def clean_unlocked(self, raw: Optional[list]) -> list[UnlockedAchievement]:
        """Parse persisted unlock entries, dropping unknown or malformed ones.

        Each entry is a dict with ``id`` and ``unlocked_at`` given as a
        datetime, an ISO string or epoch milliseconds.
        """
        known = {d.id for d in self.definitions}
        cleaned: list[UnlockedAchievement] = []
        seen: set[str] = set()
        for entry in raw or []:
            if not isinstance(entry, dict):
                logger.debug("dropping malformed achievement entry %r", entry)
                continue
            achievement_id = entry.get("id")
            if achievement_id not in known or achievement_id in seen:
                logger.debug("dropping achievement entry %r", entry)
                continue
            unlocked_at = _parse_timestamp(entry.get("unlocked_at"))
            if unlocked_at is None:
                logger.debug("dropping achievement entry %r", entry)
                continue
            seen.add(achievement_id)
            cleaned.append(UnlockedAchievement(achievement_id, unlocked_at))
        return cleaned


def _parse_timestamp(value) -> Optional[datetime.datetime]:
    if isinstance(value, datetime.datetime):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.datetime.fromtimestamp(value / 1000.0)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        try:
            return datetime.datetime.fromisoformat(value)
        except ValueError:
            return None
    return None
