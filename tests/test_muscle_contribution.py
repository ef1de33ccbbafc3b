import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
import exercise_catalog
from models import ExerciseMechanicsType, ExerciseMetadata, LoggedExercise, MuscleGroup
from muscle_contribution import MuscleContributionModel

M = MuscleGroup


class DefaultContributionTestCase(unittest.TestCase):
    def test_primary_only(self) -> None:
        self.assertEqual(
            MuscleContributionModel.calculate_default_contributions(M.CHEST, []),
            {M.CHEST: 100.0},
        )

    def test_split_across_secondaries(self) -> None:
        contribs = MuscleContributionModel.calculate_default_contributions(
            M.CHEST, [M.TRICEPS, M.DELTOIDS_FRONT, M.CHEST, M.TRICEPS]
        )
        self.assertEqual(contribs[M.CHEST], 70.0)
        self.assertAlmostEqual(contribs[M.TRICEPS], 15.0)
        self.assertAlmostEqual(contribs[M.DELTOIDS_FRONT], 15.0)
        self.assertTrue(MuscleContributionModel.validate_contributions(contribs))

    def test_ensure_valid(self) -> None:
        with self.assertRaises(ValueError):
            MuscleContributionModel.ensure_valid_contributions(
                M.CHEST, [M.TRICEPS], {M.CHEST: 60, M.TRICEPS: 30}
            )
        with self.assertRaises(ValueError):
            MuscleContributionModel.ensure_valid_contributions(
                M.CHEST, [M.TRICEPS], {M.CHEST: 110, M.TRICEPS: -10}
            )
        MuscleContributionModel.ensure_valid_contributions(
            M.CHEST, [M.TRICEPS], {M.CHEST: 80, M.TRICEPS: 20}
        )


class EffectiveMusclesTestCase(unittest.TestCase):
    def test_predefined_lookup(self) -> None:
        meta = MuscleContributionModel.effective_muscles("squat")
        self.assertEqual(meta.primary_muscle, M.QUADRICEPS)
        by_id = MuscleContributionModel.effective_muscles(meta.id)
        self.assertEqual(by_id.name, "Squat")

    def test_customization_wins(self) -> None:
        custom = {"Squat": {"primary_muscle": M.GLUTEAL, "secondary_muscles": [M.QUADRICEPS]}}
        meta = MuscleContributionModel.effective_muscles("Squat", custom)
        self.assertEqual(meta.primary_muscle, M.GLUTEAL)
        self.assertEqual(meta.secondary_muscles, [M.QUADRICEPS])
        self.assertEqual(
            MuscleContributionModel.contributions_for(meta),
            {M.GLUTEAL: 70.0, M.QUADRICEPS: 30.0},
        )

    def test_customization_by_name_found_from_id(self) -> None:
        squat_id = exercise_catalog.exercise_id_from_name("Squat")
        custom = {"Squat": {"mechanics_type": ExerciseMechanicsType.DOUBLED}}
        meta = MuscleContributionModel.effective_muscles(squat_id, custom)
        self.assertEqual(meta.mechanics_type, ExerciseMechanicsType.DOUBLED)
        self.assertEqual(meta.muscle_contributions[M.QUADRICEPS], 50)

    def test_logged_metadata_wins(self) -> None:
        logged = LoggedExercise(
            "Squat", [], primary_muscle=M.HAMSTRING, secondary_muscles=[]
        )
        meta = MuscleContributionModel.effective_muscles("Squat", logged=logged)
        self.assertEqual(meta.primary_muscle, M.HAMSTRING)

    def test_custom_exercise_skips_predefined(self) -> None:
        definition = ExerciseMetadata("Squat", M.CALVES)
        meta = MuscleContributionModel.effective_muscles(
            "Squat", is_custom_exercise=True, custom_definition=definition
        )
        self.assertEqual(meta.primary_muscle, M.CALVES)

    def test_none_secondaries_keep_predefined(self) -> None:
        custom = {"Squat": {"secondary_muscles": None}}
        meta = MuscleContributionModel.effective_muscles("Squat", custom)
        self.assertEqual(meta.secondary_muscles, [M.GLUTEAL, M.HAMSTRING])
        self.assertEqual(meta.muscle_contributions[M.GLUTEAL], 30)

    def test_captured_muscles_take_definition_mechanics(self) -> None:
        logged = LoggedExercise("Pull-up", [], primary_muscle=M.LATS)
        meta = MuscleContributionModel.effective_muscles("Pull-up", logged=logged)
        self.assertEqual(meta.mechanics_type, ExerciseMechanicsType.BODYWEIGHT)
        self.assertEqual(meta.primary_muscle, M.LATS)
        unknown = LoggedExercise("Moon Lift", [], primary_muscle=M.CHEST)
        meta = MuscleContributionModel.effective_muscles("Moon Lift", logged=unknown)
        self.assertEqual(meta.mechanics_type, ExerciseMechanicsType.WEIGHTED)

    def test_unknown(self) -> None:
        self.assertIsNone(MuscleContributionModel.effective_muscles("Moon Lift"))


class AggregationTestCase(unittest.TestCase):
    def test_weighted_sets(self) -> None:
        sets = MuscleContributionModel.weighted_sets(
            3, {M.CHEST: 70, M.TRICEPS: 30}, M.CHEST
        )
        self.assertEqual(sets[M.CHEST], 3.0)
        self.assertAlmostEqual(sets[M.TRICEPS], 0.9)

    def test_aggregate(self) -> None:
        bench = exercise_catalog.find_by_name("Bench Press (Barbell)")
        data = MuscleContributionModel.aggregate_muscle_data(
            [
                {
                    "contributions": MuscleContributionModel.contributions_for(bench),
                    "primary_muscle": bench.primary_muscle,
                    "volume": 1000,
                    "sets": 2,
                },
                {
                    "contributions": {M.TRICEPS: 100.0},
                    "primary_muscle": M.TRICEPS,
                    "volume": 200,
                    "sets": 1,
                },
            ]
        )
        self.assertAlmostEqual(data["volume"][M.CHEST], 700)
        self.assertAlmostEqual(data["volume"][M.TRICEPS], 500)
        self.assertAlmostEqual(data["sets"][M.TRICEPS], 1.6)


class CatalogTestCase(unittest.TestCase):
    def test_ids_are_stable(self) -> None:
        ex_id = exercise_catalog.exercise_id_from_name("Squat")
        self.assertTrue(ex_id.startswith("ex_"))
        self.assertEqual(len(ex_id), 9)
        self.assertEqual(ex_id, exercise_catalog.exercise_id_from_name("squat"))

    def test_mechanics(self) -> None:
        self.assertEqual(
            exercise_catalog.find_by_name("Pull-up (Assisted)").mechanics_type,
            ExerciseMechanicsType.ASSISTED_BODYWEIGHT,
        )

    def test_migrate_muscle_group(self) -> None:
        self.assertEqual(exercise_catalog.migrate_muscle_group("Core"), [M.ABS, M.OBLIQUES])
        self.assertEqual(exercise_catalog.migrate_muscle_group("chest"), [M.CHEST])
        self.assertEqual(exercise_catalog.migrate_muscle_group("tail"), [])


if __name__ == "__main__":
    unittest.main()
