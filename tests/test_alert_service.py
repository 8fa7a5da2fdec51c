import os
import sys
import datetime
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from alert_service import HydrationReminder, ProactiveAlertService, is_training_day
from schemas import ExerciseMaxRecord, Profile, Schedule, WorkoutSession
from settings_schema import EngineSettings

NOW = datetime.datetime(2024, 5, 8, 15, 0)


def session(day, completed=True, feeling=None, sid=None):
    date = datetime.date(2024, 5, day) if isinstance(day, int) else day
    return WorkoutSession(
        id=sid or f"s{date.isoformat()}",
        date=date,
        completed_at=datetime.datetime.combine(date, datetime.time(19)) if completed else None,
        feeling=feeling,
    )


def max_record(exercise_id, streak=0, feeling=None, progress=False):
    return ExerciseMaxRecord(
        exercise_id=exercise_id,
        functional_max_kg=80,
        best_weight_kg=80,
        best_reps=8,
        consecutive_successful_sessions=streak,
        last_feeling=feeling,
        should_progress=progress,
    )


class TrainingDayTestCase(unittest.TestCase):
    def test_default_schedule(self) -> None:
        self.assertTrue(is_training_day(None, datetime.date(2024, 5, 6)))
        self.assertFalse(is_training_day(Schedule(), datetime.date(2024, 5, 8)))

    def test_custom_schedule(self) -> None:
        schedule = Schedule(preferred_workout_days=["Wednesday", "saturday"])
        self.assertTrue(is_training_day(schedule, datetime.date(2024, 5, 8)))
        self.assertTrue(is_training_day(schedule, datetime.date(2024, 5, 11)))
        self.assertFalse(is_training_day(schedule, datetime.date(2024, 5, 6)))


class HydrationReminderTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.reminder = HydrationReminder()

    def test_quiet_hours(self) -> None:
        self.assertFalse(self.reminder.evaluate(0, 3000, 23).show)
        self.assertFalse(self.reminder.evaluate(0, 3000, 6).show)
        self.assertFalse(self.reminder.evaluate(0, 3000, 22).show)

    def test_goal_reached(self) -> None:
        self.assertFalse(self.reminder.evaluate(3000, 3000, 15).show)

    def test_morning(self) -> None:
        result = self.reminder.evaluate(300, 3000, 8)
        self.assertTrue(result.show)
        self.assertEqual(result.urgency, "low")

    def test_pre_workout(self) -> None:
        result = self.reminder.evaluate(300, 3000, 10)
        self.assertEqual(result.urgency, "medium")
        self.assertIn("before training", result.message)

    def test_far_behind(self) -> None:
        result = self.reminder.evaluate(600, 3000, 15)
        self.assertEqual(result.urgency, "high")
        self.assertIn("37%", result.message)
        self.assertEqual(self.reminder.evaluate(0, 0, 15).urgency, "high")

    def test_moderately_behind(self) -> None:
        result = self.reminder.evaluate(1300, 3000, 15)
        self.assertEqual(result.urgency, "medium")

    def test_even_hour_nudge(self) -> None:
        result = self.reminder.evaluate(1300, 3000, 14)
        self.assertTrue(result.show)
        self.assertEqual(result.urgency, "low")

    def test_on_track(self) -> None:
        self.assertFalse(self.reminder.evaluate(1200, 3000, 13).show)

    def test_evening_catch_up(self) -> None:
        result = self.reminder.evaluate(2340, 3000, 19)
        self.assertEqual(result.urgency, "medium")
        self.assertIn("0.7L", result.message)

    def test_expected_progress_is_linear(self) -> None:
        self.assertEqual(self.reminder.expected_progress(7), 0)
        self.assertEqual(self.reminder.expected_progress(14), 50)
        self.assertEqual(self.reminder.expected_progress(21), 100)


class ConsistencyAlertTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.service = ProactiveAlertService()

    def test_low_consistency(self) -> None:
        alerts = self.service.consistency_alerts(4, [session(6), session(7, completed=False)], NOW)
        self.assertEqual(len(alerts), 1)
        alert = alerts[0]
        self.assertEqual(alert.id, "consistency-low")
        self.assertEqual((alert.priority, alert.color), ("high", "yellow"))
        self.assertEqual(alert.action_path, "/entreno")
        self.assertEqual(alert.created_at, NOW)
        self.assertEqual(alert.metadata["completed_this_week"], 1)

    def test_perfect_week(self) -> None:
        sessions = [session(d) for d in (1, 3, 6, 7)]
        alerts = self.service.consistency_alerts(4, sessions, NOW)
        self.assertEqual(alerts[0].id, "consistency-perfect")
        self.assertEqual(alerts[0].color, "green")

    def test_window_excludes_old_sessions(self) -> None:
        sessions = [session(datetime.date(2024, 4, 30)), session(1), session(6), session(7)]
        self.assertEqual(self.service.consistency_alerts(4, sessions, NOW), [])

    def test_no_schedule(self) -> None:
        self.assertEqual(self.service.consistency_alerts(0, [], NOW), [])


class ExerciseAlertTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.service = ProactiveAlertService()

    def test_stagnation_and_progress(self) -> None:
        records = [
            max_record("squat", feeling="hard"),
            max_record("bench", feeling="hard"),
            max_record("row", streak=2, feeling="easy", progress=True),
        ]
        alerts = self.service.stagnation_alerts(records, {"squat": "Squat"}, NOW)
        self.assertEqual([a.id for a in alerts], ["stagnation-multiple", "progress-ready"])
        self.assertTrue(alerts[0].description.startswith("Squat, Exercise"))
        self.assertEqual(alerts[0].metadata["exercise_ids"], ["squat", "bench"])
        self.assertEqual(alerts[1].color, "green")

    def test_single_stagnant_exercise_is_quiet(self) -> None:
        alerts = self.service.stagnation_alerts([max_record("squat", feeling="hard")], {}, NOW)
        self.assertEqual(alerts, [])

    def test_fatigue(self) -> None:
        sessions = [
            session(1, feeling="correct"),
            session(3, feeling="hard"),
            session(6, feeling="hard"),
        ]
        alerts = self.service.fatigue_alerts(sessions, NOW)
        self.assertEqual(alerts[0].color, "purple")
        self.assertEqual(alerts[0].metadata, {"hard_sessions": 2, "total_sessions": 3})

    def test_fatigue_uses_latest_sessions(self) -> None:
        sessions = [
            session(6, feeling="correct"),
            session(1, feeling="hard"),
            session(2, feeling="hard"),
            session(3, feeling="easy"),
            session(7, feeling="hard"),
        ]
        self.assertEqual(self.service.fatigue_alerts(sessions, NOW), [])


class NutritionAlertTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.service = ProactiveAlertService()

    def test_protein(self) -> None:
        alerts = self.service.nutrition_alerts(40, 180, NOW)
        self.assertEqual(alerts[0].id, "nutrition-protein-low")
        self.assertEqual(alerts[0].color, "red")
        self.assertEqual(alerts[0].description, "40g / 180g - add a protein-rich meal")
        self.assertEqual(self.service.nutrition_alerts(40, 180, NOW.replace(hour=11)), [])
        self.assertEqual(self.service.nutrition_alerts(40, 180, NOW.replace(hour=13)), [])
        self.assertEqual(self.service.nutrition_alerts(120, 180, NOW), [])

    def test_hydration(self) -> None:
        alerts = self.service.hydration_alerts(900, 3000, NOW)
        self.assertEqual(alerts[0].color, "blue")
        self.assertEqual(alerts[0].metadata["remaining"], 2.1)
        self.assertIn("2.1L", alerts[0].description)
        self.assertEqual(self.service.hydration_alerts(900, 3000, NOW.replace(hour=9)), [])
        self.assertEqual(self.service.hydration_alerts(900, 3000, NOW.replace(hour=11)), [])

    def test_weight_change(self) -> None:
        good = self.service.weight_change_alerts(80, 79, "muscle_gain", NOW)
        self.assertEqual((good[0].priority, good[0].color), ("low", "green"))
        self.assertEqual(good[0].title, "Weight up 1.0kg")
        self.assertEqual(good[0].id, "weight_change-up")
        bad = self.service.weight_change_alerts(80, 79, "fat_loss", NOW)
        self.assertEqual((bad[0].priority, bad[0].color), ("medium", "yellow"))
        lost = self.service.weight_change_alerts(78.5, 80, "fat_loss", NOW)
        self.assertEqual(lost[0].title, "Weight down 1.5kg")
        self.assertEqual(self.service.weight_change_alerts(80, 79.7, "fat_loss", NOW), [])
        self.assertEqual(self.service.weight_change_alerts(80, None, "fat_loss", NOW), [])


class AllAlertsTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.service = ProactiveAlertService()
        self.kwargs = dict(
            now=NOW,
            scheduled_days_per_week=4,
            sessions=[session(6, feeling="hard"), session(7, feeling="hard")],
            max_records=[max_record("row", streak=2, feeling="easy", progress=True)],
            exercise_names={"row": "Row"},
            protein_g=40,
            target_protein_g=180,
            consumed_ml=900,
            target_ml=3000,
            current_weight_kg=80,
            previous_weight_kg=79,
            fitness_goal="muscle_gain",
        )

    def test_collects_in_generation_order(self) -> None:
        alerts = self.service.all_alerts(**self.kwargs)
        self.assertEqual(
            [a.type for a in alerts],
            ["progress", "nutrition", "hydration", "weight_change", "fatigue"],
        )
        again = self.service.all_alerts(**self.kwargs)
        self.assertEqual([a.to_dict() for a in alerts], [a.to_dict() for a in again])

    def test_rank_alerts(self) -> None:
        self.kwargs["sessions"] = [session(7, feeling="hard")]
        alerts = self.service.all_alerts(**self.kwargs)
        ranked = self.service.rank_alerts(alerts)
        self.assertEqual(len(ranked), 3)
        self.assertEqual([a.type for a in ranked], ["consistency", "nutrition", "hydration"])
        self.assertEqual(len(self.service.rank_alerts(alerts, limit=10)), len(alerts))
        limited = ProactiveAlertService(EngineSettings(alert_limit=1))
        self.assertEqual(len(limited.rank_alerts(alerts)), 1)

    def test_alerts_for_profile(self) -> None:
        profile = Profile(weight_kg=80, height_cm=180, gender="male", fitness_goal="muscle_gain")
        alerts = self.service.alerts_for_profile(
            NOW, profile, None, [session(6), session(7)], [], {}, protein_g=20, consumed_ml=2500
        )
        self.assertEqual([a.type for a in alerts], ["nutrition"])
        self.assertIn("/ 176g", alerts[0].description)

    def test_profile_water_target(self) -> None:
        profile = Profile(weight_kg=60, height_cm=170, gender="female", fitness_goal="muscle_gain")
        alerts = self.service.alerts_for_profile(
            NOW, profile, None, [session(6), session(7)], [], {}, protein_g=500, consumed_ml=900
        )
        hydration = [a for a in alerts if a.type == "hydration"]
        self.assertEqual(len(hydration), 1)
        self.assertEqual(hydration[0].metadata["target_ml"], 2700)
        self.assertEqual(hydration[0].metadata["remaining"], 1.8)

    def test_explicit_water_target_wins(self) -> None:
        profile = Profile(weight_kg=60, height_cm=170, gender="female", fitness_goal="muscle_gain")
        alerts = self.service.alerts_for_profile(
            NOW, profile, None, [session(6), session(7)], [], {},
            protein_g=500, consumed_ml=900, target_ml=1500,
        )
        self.assertEqual([a for a in alerts if a.type == "hydration"], [])


if __name__ == "__main__":
    unittest.main()
