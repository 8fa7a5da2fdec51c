import datetime
import logging
import math
from typing import Iterable

from localization import translator
from schemas import (
    ExerciseLogEntry,
    ExerciseMaxRecord,
    ProgressionSuggestion,
    WeightSuggestion,
)
from .math_tools import MathTools

logger = logging.getLogger(__name__)
_ = translator.gettext


class ExerciseProgression:
    """Decide load progression from the sets logged in recent sessions."""

    INCREMENTS: dict[str, float] = {
        "compound_lower": 5.0,
        "compound_upper": 2.5,
        "isolation": 1.25,
        "default": 2.5,
    }
    COMPOUND_LOWER_KEYWORDS: tuple[str, ...] = (
        "sentadilla", "peso muerto", "prensa", "hip thrust",
        "squat", "deadlift", "leg press",
    )
    ISOLATION_KEYWORDS: tuple[str, ...] = (
        "curl", "extension", "elevacion", "face pull", "apertura",
        "lateral raise", "fly", "kickback",
    )
    MICRO_PROGRESSION_RATIO: float = 0.8
    PROGRESS_STREAK: int = 2
    NOTE_HISTORY: int = 10

    @classmethod
    def exercise_category(cls, exercise_name: str, category: str | None = None) -> str:
        """Return the increment category for an exercise.

        An explicit ``category`` tag wins over name matching.
        """
        if category in cls.INCREMENTS:
            return category
        name = (exercise_name or "").lower()
        if any(k in name for k in cls.COMPOUND_LOWER_KEYWORDS):
            return "compound_lower"
        if any(k in name for k in cls.ISOLATION_KEYWORDS):
            return "isolation"
        return "default"

    @classmethod
    def increment_for(cls, exercise_name: str, category: str | None = None) -> float:
        return cls.INCREMENTS[cls.exercise_category(exercise_name, category)]

    @staticmethod
    def working_sets(logs: Iterable[ExerciseLogEntry]) -> list[ExerciseLogEntry]:
        return [log for log in logs if not log.is_warmup]

    @staticmethod
    def _completed(sets: list[ExerciseLogEntry], target_reps_max: int) -> list[ExerciseLogEntry]:
        return [s for s in sets if (s.reps_completed or 0) >= target_reps_max]

    @classmethod
    def progression_decision(
        cls,
        exercise_name: str,
        target_reps_min: int,
        target_reps_max: int,
        target_sets: int,
        last_session_logs: list[ExerciseLogEntry],
        previous_session_logs: list[ExerciseLogEntry] | None = None,
        category: str | None = None,
    ) -> ProgressionSuggestion:
        """Suggest the next working weight from the last session's sets."""
        working = cls.working_sets(last_session_logs)
        if not working:
            return ProgressionSuggestion(
                should_progress=False,
                current_weight=0,
                suggested_weight=0,
                progression_amount=0,
                reason=_("No data from the last session"),
                confidence="low",
            )

        weights = [s.weight_kg for s in working if s.weight_kg is not None and s.weight_kg > 0]
        if not weights:
            return ProgressionSuggestion(
                should_progress=False,
                current_weight=0,
                suggested_weight=0,
                progression_amount=0,
                reason=_("No weight records"),
                confidence="low",
            )

        current_weight = max(weights)
        increment = cls.increment_for(exercise_name, category)
        completed = len(cls._completed(working, target_reps_max))

        streak = 0
        if previous_session_logs:
            prev_completed = cls._completed(cls.working_sets(previous_session_logs), target_reps_max)
            if len(prev_completed) >= target_sets:
                streak = 1

        if completed >= target_sets:
            logger.debug("%s: all %d sets completed, +%s kg", exercise_name, completed, increment)
            return ProgressionSuggestion(
                should_progress=True,
                current_weight=current_weight,
                suggested_weight=current_weight + increment,
                progression_amount=increment,
                reason=_("All sets completed with {reps} reps!").format(reps=target_reps_max),
                confidence="high",
                streak=streak + 1,
            )

        if completed >= math.ceil(target_sets * cls.MICRO_PROGRESSION_RATIO):
            half = increment / 2
            return ProgressionSuggestion(
                should_progress=True,
                current_weight=current_weight,
                suggested_weight=current_weight + half,
                progression_amount=half,
                reason=_(
                    "{done}/{total} sets at the top of the range. Micro-progression suggested."
                ).format(done=completed, total=target_sets),
                confidence="medium",
            )

        if completed < target_sets / 2:
            return ProgressionSuggestion(
                should_progress=False,
                current_weight=current_weight,
                suggested_weight=current_weight,
                progression_amount=0,
                reason=_("Keep {weight}kg until all sets are completed").format(
                    weight=MathTools.format_number(current_weight)
                ),
                confidence="high",
            )

        return ProgressionSuggestion(
            should_progress=False,
            current_weight=current_weight,
            suggested_weight=current_weight,
            progression_amount=0,
            reason=_("{done}/{total} sets completed. Almost there!").format(
                done=completed, total=target_sets
            ),
            confidence="medium",
        )

    @classmethod
    def suggested_weight_for_exercise(
        cls, exercise_name: str, last_weight: float, all_sets_completed: bool
    ) -> float:
        if not all_sets_completed or last_weight == 0:
            return last_weight
        return last_weight + cls.increment_for(exercise_name)

    @classmethod
    def update_functional_max(
        cls,
        record: ExerciseMaxRecord | None,
        exercise_id: str,
        weight_kg: float,
        reps: int,
        feeling: str,
        today: datetime.date,
    ) -> ExerciseMaxRecord:
        """Fold one session's top set and its feeling into the autopilot state.

        ``easy`` and ``correct`` extend the success streak (once per day) and
        may raise the functional max; only ``easy`` with a streak of 2+
        unlocks progression. ``hard`` resets the streak and caps the max.
        """
        if weight_kg <= 0 or reps <= 0:
            logger.warning("ignoring non-positive set for %s: %s x %s", exercise_id, weight_kg, reps)
            if record is not None:
                return record.model_copy()
            return ExerciseMaxRecord(
                exercise_id=exercise_id, functional_max_kg=0, best_weight_kg=0, best_reps=0
            )
        if record is None:
            record = ExerciseMaxRecord(
                exercise_id=exercise_id,
                functional_max_kg=weight_kg,
                best_weight_kg=weight_kg,
                best_reps=reps,
            )
        same_day = record.last_session_date == today
        streak = record.consecutive_successful_sessions
        functional_max = record.functional_max_kg or weight_kg
        best_weight = record.best_weight_kg or weight_kg
        best_reps = record.best_reps or reps
        should_progress = False

        if weight_kg > best_weight or (weight_kg == best_weight and reps > best_reps):
            best_weight = weight_kg
            best_reps = reps

        if feeling == "easy":
            if not same_day:
                streak += 1
            should_progress = streak >= cls.PROGRESS_STREAK
            functional_max = max(functional_max, weight_kg)
        elif feeling == "correct":
            if not same_day:
                streak += 1
            functional_max = max(functional_max, weight_kg)
        elif feeling == "hard":
            streak = 0
        else:
            logger.warning("unknown set feeling %r for %s", feeling, exercise_id)
            return record.model_copy()

        entry = f"{today.isoformat()}: {MathTools.format_number(weight_kg)}kg x{reps} ({feeling})"
        lines = (record.notes.split("\n") if record.notes else []) + [entry]
        return record.model_copy(
            update={
                "functional_max_kg": functional_max,
                "best_weight_kg": best_weight,
                "best_reps": best_reps,
                "consecutive_successful_sessions": streak,
                "last_feeling": feeling,
                "last_session_date": today,
                "should_progress": should_progress,
                "notes": "\n".join(lines[-cls.NOTE_HISTORY:]),
            }
        )

    @classmethod
    def suggested_weight(
        cls, record: ExerciseMaxRecord | None, exercise_name: str
    ) -> WeightSuggestion:
        """Next-session weight from the autopilot state."""
        if record is None:
            return WeightSuggestion(weight=0, reason=_("No previous history"))
        increment = cls.increment_for(exercise_name)
        fmax = record.functional_max_kg
        sessions = record.consecutive_successful_sessions
        if record.should_progress and record.last_feeling == "easy":
            return WeightSuggestion(
                weight=fmax + increment,
                reason=_("Add {increment}kg! {sessions} perfect sessions").format(
                    increment=MathTools.format_number(increment), sessions=sessions
                ),
            )
        if record.last_feeling == "hard":
            return WeightSuggestion(
                weight=fmax,
                reason=_("Keep {weight}kg until you own the weight").format(
                    weight=MathTools.format_number(fmax)
                ),
            )
        if record.last_feeling == "correct":
            reason = _("{sessions}/2 sessions before adding weight").format(sessions=sessions)
        else:
            reason = _("Suggested weight based on history")
        return WeightSuggestion(weight=fmax, reason=reason)
