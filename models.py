"""Value objects shared by the metrics engine."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class SetType(str, Enum):
    WORKING = "working"
    WARMUP = "warmup"
    FAILURE = "failure"


class ExerciseMechanicsType(str, Enum):
    """How a set's ``weight`` combines with body weight."""

    WEIGHTED = "weighted"
    BODYWEIGHT = "bodyweight"
    WEIGHTED_BODYWEIGHT = "weighted-bodyweight"
    ASSISTED_BODYWEIGHT = "assisted-bodyweight"
    DOUBLED = "doubled"


class MuscleGroup(str, Enum):
    CHEST = "chest"
    DELTOIDS_FRONT = "deltoids-front"
    DELTOIDS_SIDE = "deltoids-side"
    DELTOIDS_REAR = "deltoids-rear"
    BICEPS = "biceps"
    ABS = "abs"
    OBLIQUES = "obliques"
    FOREARMS = "forearms"
    TRAPEZIUS = "trapezius"
    UPPER_BACK = "upper-back"
    LOWER_BACK = "lower-back"
    TRICEPS = "triceps"
    LATS = "lats"
    QUADRICEPS = "quadriceps"
    ADDUCTORS = "adductors"
    TIBIALIS = "tibialis"
    KNEES = "knees"
    GLUTEAL = "gluteal"
    HAMSTRING = "hamstring"
    CALVES = "calves"
    NECK = "neck"
    HANDS = "hands"
    FEET = "feet"
    ANKLES = "ankles"
    HEAD = "head"
    HAIR = "hair"


class PRType(str, Enum):
    HEAVIEST_WEIGHT = "heaviest_weight"
    HIGHEST_VOLUME = "highest_volume"


@dataclass(frozen=True)
class LoggedSet:
    reps: int
    weight: float
    set_type: SetType = SetType.WORKING
    completed: bool = True
    timestamp: Optional[datetime.datetime] = None
    is_reps_placeholder: bool = False


@dataclass(frozen=True)
class LoggedExercise:
    """An exercise as logged in a workout.

    Muscle metadata captured at logging time takes precedence over the
    current exercise definition when attributing volume.
    """

    name: str
    sets: list[LoggedSet] = field(default_factory=list)
    mechanics_type: Optional[ExerciseMechanicsType] = None
    exercise_id: Optional[str] = None
    primary_muscle: Optional[MuscleGroup] = None
    secondary_muscles: Optional[list[MuscleGroup]] = None
    muscle_contributions: Optional[dict[MuscleGroup, float]] = None

    @property
    def mechanics(self) -> ExerciseMechanicsType:
        return self.mechanics_type or ExerciseMechanicsType.WEIGHTED


@dataclass(frozen=True)
class Workout:
    id: str
    start_time: datetime.datetime
    end_time: datetime.datetime
    exercises: list[LoggedExercise] = field(default_factory=list)
    name: str = ""


@dataclass(frozen=True)
class ExerciseMetadata:
    name: str
    primary_muscle: MuscleGroup
    mechanics_type: ExerciseMechanicsType = ExerciseMechanicsType.WEIGHTED
    secondary_muscles: list[MuscleGroup] = field(default_factory=list)
    muscle_contributions: Optional[dict[MuscleGroup, float]] = None
    id: Optional[str] = None


@dataclass(frozen=True)
class TopSet:
    weight: float
    reps: int
    timestamp: datetime.datetime


@dataclass(frozen=True)
class FailureSetData:
    reps: int
    weight: float
    timestamp: datetime.datetime
    workout_id: str


@dataclass(frozen=True)
class RepMaxEstimate:
    reps: int
    weight: float
    is_actual_data: bool = False
    timestamp: Optional[datetime.datetime] = None


@dataclass(frozen=True)
class PersonalRecord:
    exercise_name: str
    pr_type: PRType
    value: float


@dataclass(frozen=True)
class AutoProgressionConfig:
    enabled: bool = False
    min_reps: Optional[int] = None
    max_reps: Optional[int] = None


@dataclass(frozen=True)
class AutoProgressionResult:
    sets: list
    did_change: bool
    suggest_increase_weight: bool


@dataclass(frozen=True)
class UnlockedAchievement:
    id: str
    unlocked_at: datetime.datetime


@dataclass(frozen=True)
class BodyWeightLog:
    date: datetime.date
    weight: float
    unit: str = "kg"
