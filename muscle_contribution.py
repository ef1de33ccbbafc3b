"""Split exercise volume across the muscles it trains."""

from __future__ import annotations

import dataclasses
from typing import Dict, List, Optional

import exercise_catalog
from models import ExerciseMechanicsType, ExerciseMetadata, LoggedExercise, MuscleGroup

CONTRIBUTION_TOLERANCE = 0.01


class MuscleContributionModel:
    """Resolve muscle metadata for exercises and attribute volume to muscles.

    ``customizations`` map a predefined exercise id or name to a dict with
    any of ``primary_muscle``, ``secondary_muscles``, ``muscle_contributions``
    and ``mechanics_type``.
    """

    PRIMARY_SHARE: float = 70.0

    @classmethod
    def calculate_default_contributions(
        cls,
        primary: MuscleGroup,
        secondaries: Optional[List[MuscleGroup]] = None,
    ) -> Dict[MuscleGroup, float]:
        """Return the primary's dominant share with the rest split evenly."""
        others: list[MuscleGroup] = []
        for muscle in secondaries or []:
            if muscle != primary and muscle not in others:
                others.append(muscle)
        if not others:
            return {primary: 100.0}
        share = (100.0 - cls.PRIMARY_SHARE) / len(others)
        result = {primary: cls.PRIMARY_SHARE}
        for muscle in others:
            result[muscle] = share
        return result

    @staticmethod
    def validate_contributions(
        contributions: Dict[MuscleGroup, float],
        muscles: Optional[List[MuscleGroup]] = None,
    ) -> bool:
        """Return True when the contributions sum to 100 within tolerance."""
        if muscles is not None:
            total = sum(contributions.get(m, 0.0) for m in muscles)
        else:
            total = sum(contributions.values())
        return abs(total - 100.0) < CONTRIBUTION_TOLERANCE

    @classmethod
    def ensure_valid_contributions(
        cls,
        primary: MuscleGroup,
        secondaries: List[MuscleGroup],
        contributions: Dict[MuscleGroup, float],
    ) -> None:
        """Validate an edited contribution map before it is stored."""
        muscles = [primary] + [m for m in secondaries if m != primary]
        if any(contributions.get(m, 0.0) < 0 for m in muscles):
            raise ValueError("contributions must be non-negative")
        if not cls.validate_contributions(contributions, muscles):
            raise ValueError("contributions must sum to 100")

    @staticmethod
    def _apply_customization(
        base: ExerciseMetadata, custom: dict
    ) -> ExerciseMetadata:
        primary = custom.get("primary_muscle") or base.primary_muscle
        secondaries = custom.get("secondary_muscles") or base.secondary_muscles
        contributions = custom.get("muscle_contributions")
        # a muscle change without explicit contributions falls back to defaults
        if contributions is None and (
            primary == base.primary_muscle and secondaries == base.secondary_muscles
        ):
            contributions = base.muscle_contributions
        return dataclasses.replace(
            base,
            primary_muscle=primary,
            secondary_muscles=list(secondaries or []),
            muscle_contributions=contributions,
            mechanics_type=custom.get("mechanics_type") or base.mechanics_type,
        )

    @classmethod
    def effective_muscles(
        cls,
        name_or_id: str,
        customizations: Optional[Dict[str, dict]] = None,
        is_custom_exercise: bool = False,
        custom_definition: Optional[ExerciseMetadata] = None,
        logged: Optional[LoggedExercise] = None,
    ) -> Optional[ExerciseMetadata]:
        """Resolve the muscle metadata to attribute an exercise's volume with.

        Order: metadata captured on the logged exercise, a user customisation
        of a predefined exercise, the predefined default, then the custom
        exercise definition. Custom exercises skip the predefined lookups.
        Captured muscles without a captured mechanics type take the type of
        the current definition.
        """
        definition = custom_definition
        if not is_custom_exercise:
            customizations = customizations or {}
            predefined = exercise_catalog.find_by_name_or_id(name_or_id)
            if predefined is not None:
                definition = predefined
                for key in (predefined.id, predefined.name):
                    if key in customizations:
                        definition = cls._apply_customization(
                            predefined, customizations[key]
                        )
                        break

        if logged is not None and logged.primary_muscle is not None:
            mechanics = logged.mechanics_type
            if mechanics is None:
                mechanics = (
                    definition.mechanics_type
                    if definition is not None
                    else ExerciseMechanicsType.WEIGHTED
                )
            return ExerciseMetadata(
                name=logged.name,
                primary_muscle=logged.primary_muscle,
                mechanics_type=mechanics,
                secondary_muscles=list(logged.secondary_muscles or []),
                muscle_contributions=logged.muscle_contributions,
                id=logged.exercise_id,
            )
        return definition

    @classmethod
    def contributions_for(
        cls, metadata: ExerciseMetadata
    ) -> Dict[MuscleGroup, float]:
        if metadata.muscle_contributions:
            return dict(metadata.muscle_contributions)
        return cls.calculate_default_contributions(
            metadata.primary_muscle, metadata.secondary_muscles
        )

    @staticmethod
    def weighted_volume(
        volume: float, contributions: Dict[MuscleGroup, float]
    ) -> Dict[MuscleGroup, float]:
        return {m: volume * pct / 100.0 for m, pct in contributions.items()}

    @staticmethod
    def weighted_sets(
        set_count: float,
        contributions: Dict[MuscleGroup, float],
        primary: MuscleGroup,
    ) -> Dict[MuscleGroup, float]:
        """Primary muscles get every set; secondaries get a fractional share."""
        result: Dict[MuscleGroup, float] = {}
        for muscle, pct in contributions.items():
            if muscle == primary:
                result[muscle] = float(set_count)
            else:
                result[muscle] = set_count * pct / 100.0
        return result

    @classmethod
    def aggregate_muscle_data(
        cls, exercise_data: List[dict]
    ) -> Dict[str, Dict[MuscleGroup, float]]:
        """Sum volume and set credit per muscle.

        Each item holds ``contributions``, ``primary_muscle``, ``volume`` and
        ``sets``.
        """
        volume_per_muscle: Dict[MuscleGroup, float] = {}
        sets_per_muscle: Dict[MuscleGroup, float] = {}
        for item in exercise_data:
            contributions = item["contributions"]
            for muscle, vol in cls.weighted_volume(item["volume"], contributions).items():
                volume_per_muscle[muscle] = volume_per_muscle.get(muscle, 0.0) + vol
            weighted = cls.weighted_sets(
                item["sets"], contributions, item["primary_muscle"]
            )
            for muscle, count in weighted.items():
                sets_per_muscle[muscle] = sets_per_muscle.get(muscle, 0.0) + count
        return {"volume": volume_per_muscle, "sets": sets_per_muscle}
