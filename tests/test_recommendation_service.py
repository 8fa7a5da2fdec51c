import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from recommendation_service import RecommendationService
from schemas import DailyPlanInput
from settings_schema import EngineSettings


class SupplementDecisionTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.service = RecommendationService()

    def test_muscle_gain_workout_day(self) -> None:
        decision = self.service.supplement_decision("muscle_gain", True, 8)
        names = [r.name for r in decision.recommendations]
        self.assertEqual(decision.total_supplements, 6)
        self.assertEqual(
            names,
            [
                "Creatine Monohydrate",
                "Impact Whey Protein",
                "THE Pre-Workout",
                "Omega 3",
                "Casein Gold Standard",
                "Vitamin D3",
            ],
        )
        self.assertEqual(decision.recommendations[1].timing, "post_workout")

    def test_fat_loss_rest_day_poor_sleep(self) -> None:
        decision = self.service.supplement_decision("fat_loss", False, 5)
        names = [r.name for r in decision.recommendations]
        self.assertEqual(names, ["Creatine Monohydrate", "Omega 3", "ZMA", "Vitamin D3"])

    def test_whey_with_meal_on_rest_day(self) -> None:
        decision = self.service.supplement_decision("muscle_gain", False, 8)
        whey = decision.recommendations[1]
        self.assertEqual(whey.timing, "with_meal")
        self.assertEqual(whey.priority, "essential")

    def test_helpers(self) -> None:
        recs = self.service.supplement_decision("muscle_gain", True, 5).recommendations
        before_bed = RecommendationService.supplements_by_timing(recs, "before_bed")
        self.assertEqual([r.name for r in before_bed], ["ZMA", "Casein Gold Standard"])
        essential = RecommendationService.essential_supplements(recs)
        self.assertEqual(len(essential), 2)


class HabitRecommendationTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.service = RecommendationService()

    def test_muscle_gain_defaults(self) -> None:
        habits = self.service.habit_recommendations(80, 180, "muscle_gain")
        self.assertEqual(len(habits), 8)
        self.assertEqual(habits[0].name, "Drink 3.6L of water")
        self.assertEqual([h.priority for h in habits], [10, 9, 8, 8, 7, 7, 6, 6])
        self.assertEqual(habits[2].category, "nutrition")
        self.assertEqual(habits[3].category, "training")

    def test_conditional_blocks(self) -> None:
        habits = self.service.habit_recommendations(
            100, 175, "fat_loss", experience_level="advanced", sleep_quality=5, stress_level=8
        )
        categories = [h.category for h in habits]
        self.assertEqual(len(habits), 11)
        self.assertIn("mindset", categories)
        self.assertEqual(categories.count("recovery"), 3)
        priorities = [h.priority for h in habits]
        self.assertEqual(priorities, sorted(priorities, reverse=True))

    def test_water_intake(self) -> None:
        self.assertEqual(RecommendationService.water_intake_liters(80, 180, "muscle_gain"), 3.6)


class TrainingDecisionTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.service = RecommendationService()

    def test_readiness(self) -> None:
        self.assertAlmostEqual(self.service.readiness_score(8, 9, 2, 2, "intermediate"), 8.4)
        self.assertAlmostEqual(self.service.readiness_score(8, 9, 2, 2, "beginner"), 7.56)
        self.assertEqual(self.service.readiness_score(8, 10, 0, 0, "advanced"), 10)

    def test_scheduled_day(self) -> None:
        great = self.service.training_decision(8, 9, 2, 2, True, "intermediate")
        self.assertEqual((great.recommendation, great.intensity_modifier), ("full_workout", 1.1))
        good = self.service.training_decision(8, 9, 2, 2, True, "beginner")
        self.assertEqual((good.recommendation, good.intensity_modifier), ("full_workout", 1.0))
        poor = self.service.training_decision(6, 4, 7, 7, True, "intermediate")
        self.assertEqual(poor.recommendation, "active_recovery")
        self.assertFalse(poor.should_train)

    def test_hard_rest_rules(self) -> None:
        self.assertEqual(self.service.training_decision(4, 9, 2, 2, True).recommendation, "rest")
        stress = self.service.training_decision(8, 9, 9, 2, True)
        self.assertEqual((stress.recommendation, stress.intensity_modifier), ("active_recovery", 0.3))
        self.assertEqual(self.service.training_decision(8, 9, 2, 9, True).recommendation, "rest")
        streak = self.service.training_decision(8, 9, 2, 2, True, consecutive_workout_days=5)
        self.assertEqual(streak.recommendation, "rest")

    def test_unscheduled_day(self) -> None:
        light = self.service.training_decision(8, 9, 2, 2, False, "intermediate", days_since_last_workout=2)
        self.assertEqual((light.recommendation, light.intensity_modifier), ("light_workout", 0.6))
        rest = self.service.training_decision(8, 9, 2, 2, False, "intermediate", days_since_last_workout=1)
        self.assertEqual(rest.recommendation, "rest")


class PrioritiesTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.service = RecommendationService()

    def test_workout_day_muscle_gain(self) -> None:
        priorities = self.service.priorities_decision(True, 50, 8, 3, 80, "muscle_gain")
        self.assertEqual([p.order for p in priorities], [1, 2, 3])
        self.assertEqual(priorities[0].category, "training")
        self.assertEqual(priorities[1].title, "Eat 160g of protein")
        self.assertEqual(priorities[2].category, "supplements")

    def test_rest_day_poor_sleep(self) -> None:
        priorities = self.service.priorities_decision(False, 50, 5, 3, 80, "muscle_gain")
        self.assertEqual(priorities[0].category, "recovery")
        self.assertEqual(priorities[2].category, "sleep")

    def test_goal_specific_third_priority(self) -> None:
        fat_loss = self.service.priorities_decision(True, 40, 8, 3, 90, "fat_loss")
        self.assertEqual(fat_loss[2].category, "hydration")
        self.assertEqual(fat_loss[1].title, "Eat 198g of protein")
        stressed = self.service.priorities_decision(True, 80, 8, 8, 70, "maintenance")
        self.assertEqual(stressed[2].category, "mindset")
        self.assertFalse(stressed[2].completed)
        calm = self.service.priorities_decision(True, 80, 8, 3, 70, "maintenance")
        self.assertTrue(calm[2].completed)

    def test_default_weight_from_settings(self) -> None:
        service = RecommendationService(EngineSettings(default_weight_kg=100))
        priorities = service.priorities_decision(True, 50, 8, 3)
        self.assertEqual(priorities[1].title, "Eat 200g of protein")


class RecoveryDecisionTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.service = RecommendationService()

    def test_hard_session(self) -> None:
        rec = self.service.recovery_decision(75, 7, 20, "muscle_gain", 80)
        self.assertEqual(rec.hydration.during_workout, 938)
        self.assertEqual(rec.hydration.post_workout, 800)
        self.assertEqual(rec.hydration.daily_total, 3040)
        self.assertEqual(rec.nutrition.protein_grams, 32)
        self.assertEqual(rec.nutrition.carbs_grams, 64)
        self.assertEqual(len(rec.supplements), 4)
        self.assertEqual(rec.recovery.rest_hours, 48)
        self.assertEqual(rec.recovery.muscle_recovery_days, 2)
        self.assertEqual(rec.recovery.sleep_hours, 8)
        self.assertIn("0.9L", rec.hydration.tip)

    def test_light_session(self) -> None:
        rec = self.service.recovery_decision(30, 3, 9, "fat_loss", 70)
        self.assertEqual(rec.hydration.post_workout, 600)
        self.assertEqual(rec.nutrition.protein_grams, 28)
        self.assertEqual(rec.nutrition.carbs_grams, 21)
        self.assertEqual(len(rec.supplements), 2)
        self.assertEqual(rec.recovery.rest_hours, 24)
        self.assertEqual(rec.recovery.sleep_hours, 7)


class DailyPlanTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.service = RecommendationService()

    def test_computed_energy(self) -> None:
        self.assertEqual(RecommendationService.computed_energy(8, 8, 3, 3), 7)
        self.assertEqual(RecommendationService.computed_energy(8, 10, 0, 0), 10)
        self.assertEqual(RecommendationService.computed_energy(0, 0, 10, 10), 1)

    def test_training_day_plan(self) -> None:
        plan = self.service.daily_plan(
            DailyPlanInput(
                sleep_hours=8, sleep_quality=9, stress_level=2, soreness_level=2,
                weight_kg=80, fitness_goal="muscle_gain", experience_level="intermediate",
                is_workout_day=True,
            )
        )
        self.assertFalse(plan.should_rest)
        self.assertEqual(plan.training.recommendation, "full_workout")
        self.assertEqual(len(plan.nutrition.meal_distribution), 5)
        self.assertEqual(plan.supplements.total_supplements, 6)
        self.assertEqual(len(plan.priorities), 3)
        self.assertEqual(plan.computed_energy, 8)

    def test_rest_plan(self) -> None:
        inp = DailyPlanInput(
            sleep_hours=4, sleep_quality=9, stress_level=2, soreness_level=2,
            weight_kg=80, is_workout_day=True,
        )
        plan = self.service.daily_plan(inp)
        self.assertTrue(plan.should_rest)
        self.assertEqual(len(plan.nutrition.meal_distribution), 4)
        self.assertEqual(plan.supplements.total_supplements, 4)
        self.assertEqual(plan.priorities[0].category, "recovery")
        self.assertEqual(plan.to_dict(), self.service.daily_plan(inp).to_dict())

    def test_plan_input_fields(self) -> None:
        self.assertEqual(
            set(DailyPlanInput.model_fields),
            {
                "sleep_hours", "sleep_quality", "stress_level", "soreness_level",
                "weight_kg", "fitness_goal", "experience_level", "is_workout_day",
                "hydration_progress", "days_since_last_workout", "consecutive_workout_days",
            },
        )


if __name__ == "__main__":
    unittest.main()
