import os
import sys
import datetime
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from algorithms.exercise_progression import ExerciseProgression
from schemas import ExerciseLogEntry


def sets(weight, reps_list, warmup=False):
    return [
        ExerciseLogEntry(weight_kg=weight, reps_completed=reps, is_warmup=warmup, set_number=i)
        for i, reps in enumerate(reps_list, start=1)
    ]


class IncrementTestCase(unittest.TestCase):
    def test_categories(self) -> None:
        self.assertEqual(ExerciseProgression.increment_for("Sentadilla trasera"), 5.0)
        self.assertEqual(ExerciseProgression.increment_for("Romanian Deadlift"), 5.0)
        self.assertEqual(ExerciseProgression.increment_for("Curl de bíceps"), 1.25)
        self.assertEqual(ExerciseProgression.increment_for("Press banca"), 2.5)

    def test_explicit_category_wins(self) -> None:
        self.assertEqual(ExerciseProgression.increment_for("Squat", category="isolation"), 1.25)
        self.assertEqual(ExerciseProgression.increment_for("Squat", category="unknown"), 5.0)

    def test_suggested_weight_for_exercise(self) -> None:
        self.assertEqual(ExerciseProgression.suggested_weight_for_exercise("Squat", 100, True), 105)
        self.assertEqual(ExerciseProgression.suggested_weight_for_exercise("Squat", 100, False), 100)
        self.assertEqual(ExerciseProgression.suggested_weight_for_exercise("Squat", 0, True), 0)


class ProgressionDecisionTestCase(unittest.TestCase):
    def test_all_sets_completed(self) -> None:
        result = ExerciseProgression.progression_decision("Press banca", 8, 10, 3, sets(80, [10, 10, 10]))
        self.assertTrue(result.should_progress)
        self.assertEqual(result.current_weight, 80)
        self.assertEqual(result.suggested_weight, 82.5)
        self.assertEqual(result.progression_amount, 2.5)
        self.assertEqual(result.confidence, "high")
        self.assertEqual(result.streak, 1)

    def test_streak_counts_previous_session(self) -> None:
        result = ExerciseProgression.progression_decision(
            "Press banca", 8, 10, 3, sets(80, [10, 10, 10]), sets(77.5, [10, 10, 11])
        )
        self.assertEqual(result.streak, 2)
        partial = ExerciseProgression.progression_decision(
            "Press banca", 8, 10, 3, sets(80, [10, 10, 10]), sets(77.5, [10, 8, 7])
        )
        self.assertEqual(partial.streak, 1)

    def test_micro_progression(self) -> None:
        result = ExerciseProgression.progression_decision(
            "Press banca", 8, 10, 5, sets(60, [10, 10, 10, 10, 8])
        )
        self.assertTrue(result.should_progress)
        self.assertEqual(result.progression_amount, 1.25)
        self.assertEqual(result.suggested_weight, 61.25)
        self.assertEqual(result.confidence, "medium")

    def test_hold_when_few_sets_completed(self) -> None:
        result = ExerciseProgression.progression_decision("Press banca", 8, 10, 3, sets(80, [10, 7, 6]))
        self.assertFalse(result.should_progress)
        self.assertEqual(result.suggested_weight, 80)
        self.assertEqual(result.progression_amount, 0)
        self.assertEqual(result.confidence, "high")

    def test_hold_when_almost_there(self) -> None:
        result = ExerciseProgression.progression_decision(
            "Press banca", 8, 10, 4, sets(80, [10, 10, 9, 8])
        )
        self.assertFalse(result.should_progress)
        self.assertEqual(result.confidence, "medium")

    def test_warmups_are_ignored(self) -> None:
        logs = sets(40, [10], warmup=True) + sets(80, [10, 10, 8])
        result = ExerciseProgression.progression_decision("Press banca", 8, 10, 3, logs)
        self.assertFalse(result.should_progress)
        self.assertEqual(result.current_weight, 80)
        only_warmups = ExerciseProgression.progression_decision(
            "Press banca", 8, 10, 3, sets(40, [10, 10], warmup=True)
        )
        self.assertFalse(only_warmups.should_progress)
        self.assertEqual(only_warmups.confidence, "low")
        self.assertEqual(only_warmups.suggested_weight, 0)

    def test_no_weights_logged(self) -> None:
        result = ExerciseProgression.progression_decision("Dominadas", 8, 10, 3, sets(0, [10, 10, 10]))
        self.assertFalse(result.should_progress)
        self.assertEqual(result.confidence, "low")

    def test_idempotent(self) -> None:
        logs = sets(80, [10, 10, 10])
        first = ExerciseProgression.progression_decision("Press banca", 8, 10, 3, logs)
        second = ExerciseProgression.progression_decision("Press banca", 8, 10, 3, logs)
        self.assertEqual(first.to_dict(), second.to_dict())


class FunctionalMaxTestCase(unittest.TestCase):
    day1 = datetime.date(2024, 3, 4)
    day2 = datetime.date(2024, 3, 7)

    def test_easy_sessions_unlock_progress(self) -> None:
        rec = ExerciseProgression.update_functional_max(None, "ex1", 80, 8, "easy", self.day1)
        self.assertEqual(rec.consecutive_successful_sessions, 1)
        self.assertFalse(rec.should_progress)
        rec = ExerciseProgression.update_functional_max(rec, "ex1", 80, 8, "easy", self.day2)
        self.assertEqual(rec.consecutive_successful_sessions, 2)
        self.assertTrue(rec.should_progress)
        suggestion = ExerciseProgression.suggested_weight(rec, "Press banca")
        self.assertEqual(suggestion.weight, 82.5)

    def test_same_day_does_not_extend_streak(self) -> None:
        rec = ExerciseProgression.update_functional_max(None, "ex1", 80, 8, "easy", self.day1)
        rec = ExerciseProgression.update_functional_max(rec, "ex1", 80, 8, "easy", self.day1)
        self.assertEqual(rec.consecutive_successful_sessions, 1)
        self.assertFalse(rec.should_progress)

    def test_correct_never_progresses(self) -> None:
        rec = None
        for day in (self.day1, self.day2, datetime.date(2024, 3, 9)):
            rec = ExerciseProgression.update_functional_max(rec, "ex1", 80, 8, "correct", day)
        self.assertEqual(rec.consecutive_successful_sessions, 3)
        self.assertFalse(rec.should_progress)

    def test_hard_resets(self) -> None:
        rec = ExerciseProgression.update_functional_max(None, "ex1", 80, 8, "easy", self.day1)
        rec = ExerciseProgression.update_functional_max(rec, "ex1", 85, 5, "hard", self.day2)
        self.assertEqual(rec.consecutive_successful_sessions, 0)
        self.assertEqual(rec.functional_max_kg, 80)
        self.assertEqual(rec.best_weight_kg, 85)
        suggestion = ExerciseProgression.suggested_weight(rec, "Press banca")
        self.assertEqual(suggestion.weight, 80)

    def test_notes_are_capped(self) -> None:
        rec = None
        start = datetime.date(2024, 1, 1)
        for i in range(12):
            day = start + datetime.timedelta(days=i)
            rec = ExerciseProgression.update_functional_max(rec, "ex1", 60 + i, 8, "correct", day)
        self.assertEqual(len(rec.notes.split("\n")), 10)
        self.assertTrue(rec.notes.endswith("71kg x8 (correct)"))

    def test_invalid_inputs(self) -> None:
        empty = ExerciseProgression.update_functional_max(None, "ex1", 0, 8, "easy", self.day1)
        self.assertEqual(empty.functional_max_kg, 0)
        rec = ExerciseProgression.update_functional_max(None, "ex1", 80, 8, "easy", self.day1)
        unchanged = ExerciseProgression.update_functional_max(rec, "ex1", 90, 8, "great", self.day2)
        self.assertEqual(unchanged, rec)
        self.assertEqual(ExerciseProgression.suggested_weight(None, "Squat").weight, 0)


if __name__ == "__main__":
    unittest.main()
