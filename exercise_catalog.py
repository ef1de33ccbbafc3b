"""Predefined exercises and muscle group reference data."""

from __future__ import annotations

import logging
from typing import Optional

from models import ExerciseMechanicsType, ExerciseMetadata, MuscleGroup

logger = logging.getLogger(__name__)

M = MuscleGroup
W = ExerciseMechanicsType.WEIGHTED
BW = ExerciseMechanicsType.BODYWEIGHT
WBW = ExerciseMechanicsType.WEIGHTED_BODYWEIGHT
ABW = ExerciseMechanicsType.ASSISTED_BODYWEIGHT
DBL = ExerciseMechanicsType.DOUBLED

MUSCLE_GROUPS: list[MuscleGroup] = list(MuscleGroup)

PRIMARY_MUSCLE_GROUPS: list[MuscleGroup] = [
    M.CHEST,
    M.DELTOIDS_FRONT,
    M.DELTOIDS_SIDE,
    M.DELTOIDS_REAR,
    M.BICEPS,
    M.TRICEPS,
    M.FOREARMS,
    M.TRAPEZIUS,
    M.UPPER_BACK,
    M.LOWER_BACK,
    M.LATS,
    M.ABS,
    M.OBLIQUES,
    M.QUADRICEPS,
    M.HAMSTRING,
    M.GLUTEAL,
    M.CALVES,
    M.ADDUCTORS,
    M.TIBIALIS,
    M.NECK,
]

MUSCLE_GROUP_DISPLAY_NAMES: dict[MuscleGroup, str] = {
    M.CHEST: "Chest",
    M.DELTOIDS_FRONT: "Front delts",
    M.DELTOIDS_SIDE: "Side delts",
    M.DELTOIDS_REAR: "Rear delts",
    M.BICEPS: "Biceps",
    M.ABS: "Abs",
    M.OBLIQUES: "Obliques",
    M.FOREARMS: "Forearms",
    M.TRAPEZIUS: "Trapezius",
    M.UPPER_BACK: "Upper Back",
    M.LOWER_BACK: "Lower Back",
    M.TRICEPS: "Triceps",
    M.LATS: "Lats",
    M.QUADRICEPS: "Quadriceps",
    M.ADDUCTORS: "Adductors",
    M.TIBIALIS: "Tibialis",
    M.KNEES: "Knees",
    M.GLUTEAL: "Glutes",
    M.HAMSTRING: "Hamstrings",
    M.CALVES: "Calves",
    M.NECK: "Neck",
    M.HANDS: "Hands",
    M.FEET: "Feet",
    M.ANKLES: "Ankles",
    M.HEAD: "Head",
    M.HAIR: "Hair",
}

# Names used by earlier data versions and legacy slugs.
MUSCLE_GROUP_MIGRATION_MAP: dict[str, list[MuscleGroup]] = {
    "Chest": [M.CHEST],
    "Back": [M.UPPER_BACK],
    "Lats": [M.LATS],
    "Shoulders": [M.DELTOIDS_FRONT],
    "Deltoids": [M.DELTOIDS_FRONT],
    "deltoids": [M.DELTOIDS_FRONT],
    "Biceps": [M.BICEPS],
    "Triceps": [M.TRICEPS],
    "Forearms": [M.FOREARMS],
    "forearm": [M.FOREARMS],
    "Quads": [M.QUADRICEPS],
    "Hamstrings": [M.HAMSTRING],
    "Glutes": [M.GLUTEAL],
    "Calves": [M.CALVES],
    "Core": [M.ABS, M.OBLIQUES],
    "Traps": [M.TRAPEZIUS],
}


def exercise_id_from_name(name: str) -> str:
    """Return the deterministic ``ex_xxxxxx`` id for an exercise name."""
    value = 0
    for ch in name.lower():
        value = ((value << 5) - value + ord(ch)) & 0xFFFFFFFF
    if value >= 2**31:
        value -= 2**32
    value = abs(value)
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    encoded = ""
    while value:
        value, rem = divmod(value, 36)
        encoded = digits[rem] + encoded
    return "ex_" + (encoded or "0").rjust(6, "0")[:6]


def _exercise(
    name: str,
    primary: MuscleGroup,
    secondary: list[MuscleGroup],
    mechanics: ExerciseMechanicsType,
    contributions: dict[MuscleGroup, float],
) -> ExerciseMetadata:
    return ExerciseMetadata(
        name=name,
        primary_muscle=primary,
        mechanics_type=mechanics,
        secondary_muscles=secondary,
        muscle_contributions=contributions,
        id=exercise_id_from_name(name),
    )


PREDEFINED_EXERCISES: list[ExerciseMetadata] = [
    # Chest
    _exercise("Bench Press (Barbell)", M.CHEST, [M.TRICEPS], W, {M.CHEST: 70, M.TRICEPS: 30}),
    _exercise("Bench Press (Dumbbell)", M.CHEST, [M.TRICEPS], W, {M.CHEST: 70, M.TRICEPS: 30}),
    _exercise("Bench Press (Incline)", M.CHEST, [M.DELTOIDS_FRONT], W, {M.CHEST: 65, M.DELTOIDS_FRONT: 35}),
    _exercise("Bench Press (Smith)", M.CHEST, [M.DELTOIDS_FRONT], W, {M.CHEST: 70, M.DELTOIDS_FRONT: 30}),
    _exercise("Cable Fly", M.CHEST, [], W, {M.CHEST: 100}),
    _exercise("Chest Press (Machine)", M.CHEST, [M.TRICEPS], W, {M.CHEST: 70, M.TRICEPS: 30}),
    _exercise("Pec Deck", M.CHEST, [], W, {M.CHEST: 100}),
    _exercise("Push-up", M.CHEST, [M.TRICEPS], BW, {M.CHEST: 70, M.TRICEPS: 30}),
    # Back
    _exercise("Back Extension", M.LOWER_BACK, [M.GLUTEAL, M.HAMSTRING], W, {M.LOWER_BACK: 60, M.GLUTEAL: 20, M.HAMSTRING: 20}),
    _exercise("Deadlift", M.LOWER_BACK, [M.HAMSTRING, M.GLUTEAL], W, {M.LOWER_BACK: 50, M.HAMSTRING: 30, M.GLUTEAL: 20}),
    _exercise("Lat Pulldown (Cable)", M.LATS, [M.BICEPS, M.UPPER_BACK], W, {M.LATS: 70, M.BICEPS: 20, M.UPPER_BACK: 10}),
    _exercise("Lat Pulldown (Machine)", M.LATS, [M.BICEPS, M.UPPER_BACK], W, {M.LATS: 70, M.BICEPS: 20, M.UPPER_BACK: 10}),
    _exercise("Pull-up", M.LATS, [M.BICEPS, M.UPPER_BACK], BW, {M.LATS: 60, M.UPPER_BACK: 10, M.BICEPS: 30}),
    _exercise("Pull-up (Assisted)", M.LATS, [M.UPPER_BACK, M.BICEPS], ABW, {M.LATS: 60, M.UPPER_BACK: 10, M.BICEPS: 30}),
    _exercise("Pull-up (Weighted)", M.LATS, [M.BICEPS, M.UPPER_BACK], WBW, {M.LATS: 60, M.UPPER_BACK: 10, M.BICEPS: 30}),
    _exercise("Row (Barbell)", M.UPPER_BACK, [M.BICEPS, M.LATS], W, {M.UPPER_BACK: 50, M.BICEPS: 25, M.LATS: 25}),
    _exercise("Row (Dumbbell)", M.UPPER_BACK, [M.BICEPS, M.LATS], DBL, {M.UPPER_BACK: 50, M.BICEPS: 25, M.LATS: 25}),
    _exercise("Row (Seated Cable)", M.LATS, [M.UPPER_BACK, M.BICEPS], W, {M.LATS: 60, M.UPPER_BACK: 20, M.BICEPS: 20}),
    # Shoulders
    _exercise("Face Pull", M.DELTOIDS_REAR, [M.UPPER_BACK], W, {M.DELTOIDS_REAR: 60, M.UPPER_BACK: 40}),
    _exercise("Front Raise", M.DELTOIDS_FRONT, [], W, {M.DELTOIDS_FRONT: 100}),
    _exercise("Lateral Raise (Dumbbell)", M.DELTOIDS_SIDE, [], DBL, {M.DELTOIDS_SIDE: 100}),
    _exercise("Lateral Raise (Cable)", M.DELTOIDS_SIDE, [], DBL, {M.DELTOIDS_SIDE: 100}),
    _exercise("Rear Delt Fly", M.DELTOIDS_REAR, [M.UPPER_BACK], W, {M.DELTOIDS_REAR: 70, M.UPPER_BACK: 30}),
    _exercise("Shoulder Press (Dumbbell)", M.DELTOIDS_FRONT, [M.TRICEPS, M.DELTOIDS_SIDE], W, {M.DELTOIDS_FRONT: 50, M.DELTOIDS_SIDE: 20, M.TRICEPS: 30}),
    _exercise("Shoulder Press (Machine)", M.DELTOIDS_FRONT, [M.TRICEPS, M.DELTOIDS_SIDE], W, {M.DELTOIDS_FRONT: 50, M.DELTOIDS_SIDE: 20, M.TRICEPS: 30}),
    _exercise("Shrug", M.TRAPEZIUS, [], W, {M.TRAPEZIUS: 100}),
    # Arms
    _exercise("Bicep Curl (Barbell)", M.BICEPS, [], W, {M.BICEPS: 100}),
    _exercise("Bicep Curl (Dumbbell)", M.BICEPS, [], DBL, {M.BICEPS: 100}),
    _exercise("Bicep Curl (Machine)", M.BICEPS, [], W, {M.BICEPS: 100}),
    _exercise("Chin-up (Assisted)", M.BICEPS, [M.UPPER_BACK, M.LATS], ABW, {M.BICEPS: 50, M.UPPER_BACK: 25, M.LATS: 25}),
    _exercise("Dip (Assisted)", M.TRICEPS, [M.CHEST], ABW, {M.TRICEPS: 65, M.CHEST: 35}),
    _exercise("Hammer Curl (Dumbbell)", M.BICEPS, [M.FOREARMS], DBL, {M.BICEPS: 85, M.FOREARMS: 15}),
    _exercise("Preacher Curl", M.BICEPS, [], W, {M.BICEPS: 100}),
    _exercise("Tricep Dip", M.TRICEPS, [M.CHEST], BW, {M.TRICEPS: 65, M.CHEST: 35}),
    _exercise("Tricep Pushdown", M.TRICEPS, [], W, {M.TRICEPS: 100}),
    # Legs
    _exercise("Calf Raise", M.CALVES, [], W, {M.CALVES: 100}),
    _exercise("Hip Abduction (Machine)", M.GLUTEAL, [], W, {M.GLUTEAL: 100}),
    _exercise("Hip Adduction (Machine)", M.ADDUCTORS, [M.QUADRICEPS], W, {M.ADDUCTORS: 80, M.QUADRICEPS: 20}),
    _exercise("Kettlebell Swing", M.GLUTEAL, [M.HAMSTRING, M.LOWER_BACK, M.ABS], W, {M.GLUTEAL: 40, M.HAMSTRING: 30, M.LOWER_BACK: 20, M.ABS: 10}),
    _exercise("Leg Curl (Lying)", M.HAMSTRING, [], W, {M.HAMSTRING: 100}),
    _exercise("Leg Curl (Seated)", M.HAMSTRING, [M.CALVES], W, {M.HAMSTRING: 85, M.CALVES: 15}),
    _exercise("Leg Extension", M.QUADRICEPS, [], W, {M.QUADRICEPS: 100}),
    _exercise("Leg Press", M.QUADRICEPS, [M.GLUTEAL, M.HAMSTRING], W, {M.QUADRICEPS: 60, M.GLUTEAL: 25, M.HAMSTRING: 15}),
    _exercise("Lunge", M.QUADRICEPS, [M.GLUTEAL, M.HAMSTRING], W, {M.QUADRICEPS: 50, M.GLUTEAL: 30, M.HAMSTRING: 20}),
    _exercise("Squat", M.QUADRICEPS, [M.GLUTEAL, M.HAMSTRING], W, {M.QUADRICEPS: 50, M.GLUTEAL: 30, M.HAMSTRING: 20}),
    _exercise("Goblet Squat", M.QUADRICEPS, [M.GLUTEAL, M.ABS], W, {M.QUADRICEPS: 60, M.GLUTEAL: 25, M.ABS: 15}),
    # Core
    _exercise("Ab Wheel Rollout", M.ABS, [], BW, {M.ABS: 100}),
    _exercise("Crunch (Machine)", M.ABS, [], W, {M.ABS: 100}),
    _exercise("Crunch", M.ABS, [], BW, {M.ABS: 100}),
    _exercise("Hanging Leg Raise", M.ABS, [], BW, {M.ABS: 100}),
    _exercise("Plank", M.ABS, [M.OBLIQUES], BW, {M.ABS: 70, M.OBLIQUES: 30}),
    _exercise("Russian Twist", M.OBLIQUES, [M.ABS], BW, {M.OBLIQUES: 70, M.ABS: 30}),
    _exercise("Torso Rotation Machine", M.OBLIQUES, [], W, {M.OBLIQUES: 100}),
]


def exercise_names() -> list[str]:
    return [ex.name for ex in PREDEFINED_EXERCISES]


def find_by_id(exercise_id: str) -> Optional[ExerciseMetadata]:
    for ex in PREDEFINED_EXERCISES:
        if ex.id == exercise_id:
            return ex
    return None


def find_by_name(name: str) -> Optional[ExerciseMetadata]:
    """Case-insensitive lookup of a predefined exercise."""
    lowered = name.lower()
    for ex in PREDEFINED_EXERCISES:
        if ex.name.lower() == lowered:
            return ex
    return None


def find_by_name_or_id(name_or_id: str) -> Optional[ExerciseMetadata]:
    if name_or_id.startswith("ex_"):
        found = find_by_id(name_or_id)
        if found is not None:
            return found
    return find_by_name(name_or_id)


def display_name(muscle: MuscleGroup) -> str:
    return MUSCLE_GROUP_DISPLAY_NAMES[muscle]


def migrate_muscle_group(old_name: str) -> list[MuscleGroup]:
    """Map a legacy muscle name to current groups; unknown names map to []."""
    try:
        return [MuscleGroup(old_name)]
    except ValueError:
        pass
    mapped = MUSCLE_GROUP_MIGRATION_MAP.get(old_name)
    if mapped is None:
        logger.debug("unknown muscle group in migration: %s", old_name)
        return []
    return list(mapped)
