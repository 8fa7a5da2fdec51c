import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from algorithms.nutrition_tools import NutritionTools


class MacroTargetsTestCase(unittest.TestCase):
    def test_bmr(self) -> None:
        self.assertEqual(NutritionTools.bmr(80, 180, 30, "male"), 1780)
        self.assertAlmostEqual(NutritionTools.bmr(60, 165, 30, "female"), 1320.25)
        self.assertEqual(NutritionTools.bmr(60, 165, 30, None), 1225)
        self.assertEqual(NutritionTools.bmr(0, 165, 30, "male"), 0)

    def test_muscle_gain_workout_day(self) -> None:
        targets = NutritionTools.macro_targets(80, 180, 30, "male", "muscle_gain", True)
        self.assertEqual(targets.protein, 176)
        self.assertEqual(targets.fats, 94)
        self.assertEqual(targets.carbs, 456)
        self.assertEqual(targets.protein_per_kg, 2.2)

    def test_calorie_invariant(self) -> None:
        for goal in ("muscle_gain", "fat_loss", "recomposition", "maintenance"):
            for workout in (True, False):
                for activity in ("low", "moderate", "high"):
                    t = NutritionTools.macro_targets(72.5, 170, 28, "female", goal, workout, activity)
                    self.assertEqual(t.daily_calories, t.protein * 4 + t.carbs * 4 + t.fats * 9)

    def test_minimum_carbs(self) -> None:
        t = NutritionTools.macro_targets(150, 180, 30, None, "fat_loss", False, "low")
        self.assertEqual(t.carbs, 50)
        self.assertEqual(t.daily_calories, t.protein * 4 + 50 * 4 + t.fats * 9)

    def test_workout_day_adds_calories(self) -> None:
        rest = NutritionTools.macro_targets(80, 180, 30, "male", "maintenance", False)
        train = NutritionTools.macro_targets(80, 180, 30, "male", "maintenance", True)
        self.assertGreater(train.daily_calories, rest.daily_calories)

    def test_unknown_goal_falls_back(self) -> None:
        t = NutritionTools.macro_targets(80, 180, 30, "male", "bulk", False)
        self.assertEqual(t.protein_per_kg, 1.8)

    def test_zero_weight(self) -> None:
        t = NutritionTools.macro_targets(0, 180, 30, "male", "muscle_gain", True)
        self.assertEqual((t.daily_calories, t.protein, t.carbs, t.fats), (0, 0, 0, 0))


class HydrationTestCase(unittest.TestCase):
    def test_targets(self) -> None:
        self.assertEqual(NutritionTools.hydration_target(80, 180, "muscle_gain"), 3600)
        self.assertEqual(NutritionTools.hydration_target(80, 185, "muscle_gain"), 4000)
        self.assertEqual(NutritionTools.hydration_target(70, 160, "fat_loss"), 2700)
        self.assertEqual(NutritionTools.hydration_target(0, 160, "fat_loss"), 0)

    def test_multiple_of_100(self) -> None:
        for weight in (48.3, 61, 77.7, 93.2, 120):
            for height in (150, 172, 195):
                for goal in ("muscle_gain", "fat_loss", "recomposition", None):
                    self.assertEqual(NutritionTools.hydration_target(weight, height, goal) % 100, 0)

    def test_recommendation(self) -> None:
        rec = NutritionTools.hydration_recommendation(80, 180, "muscle_gain")
        self.assertEqual(rec.daily_liters, 3.6)
        self.assertEqual(rec.per_kg_ml, 45)
        self.assertEqual(len(rec.tips), 5)
        self.assertIn("80kg", rec.reason)


class MealDistributionTestCase(unittest.TestCase):
    def test_meal_counts(self) -> None:
        workout = NutritionTools.meal_distribution(3000, 180, 350, 80, True)
        rest = NutritionTools.meal_distribution(3000, 180, 350, 80, False)
        self.assertEqual(len(workout), 5)
        self.assertEqual(len(rest), 4)
        self.assertEqual(workout[3].type, "post_workout")
        self.assertEqual(workout[0].calories, 750)

    def test_decision(self) -> None:
        decision = NutritionTools.nutrition_decision(80, "muscle_gain", True, "high")
        self.assertEqual(len(decision.meal_distribution), 5)
        self.assertEqual(decision.hydration_target % 100, 0)
        self.assertEqual(
            decision.daily_calories,
            decision.protein * 4 + decision.carbs * 4 + decision.fats * 9,
        )
        again = NutritionTools.nutrition_decision(80, "muscle_gain", True, "high")
        self.assertEqual(decision.to_dict(), again.to_dict())


if __name__ == "__main__":
    unittest.main()
