from __future__ import annotations
import datetime
import logging
from typing import Iterable

from algorithms.math_tools import MathTools
from algorithms.nutrition_tools import NutritionTools
from localization import translator
from schemas import (
    ExerciseMaxRecord,
    HydrationReminderResult,
    ProactiveAlert,
    Profile,
    Schedule,
    WorkoutSession,
)
from settings_schema import EngineSettings

logger = logging.getLogger(__name__)
_ = translator.gettext

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}


def is_training_day(schedule: Schedule | None, today: datetime.date) -> bool:
    """True when today's weekday is one of the preferred workout days."""
    days = (schedule or Schedule()).preferred_workout_days
    return WEEKDAYS[today.weekday()] in [d.lower() for d in days]


class HydrationReminder:
    """Time-of-day aware nudge to keep water intake on schedule."""

    PRE_WORKOUT_HOURS = (10, 17, 18)
    MORNING_END_HOUR = 10
    MORNING_MIN_PROGRESS = 15
    EVENING_START_HOUR = 18
    EVENING_MIN_PROGRESS = 80

    def __init__(self, settings: EngineSettings | None = None) -> None:
        self.settings = settings or EngineSettings()

    def expected_progress(self, hour: int) -> float:
        start = self.settings.hydration_start_hour
        total = self.settings.hydration_end_hour - start
        return max(0, hour - start) / total * 100

    def evaluate(self, consumed_ml: float, target_ml: float, hour: int) -> HydrationReminderResult:
        """Decide whether to show a reminder at ``hour`` (0-23)."""
        hidden = HydrationReminderResult(show=False, message="", urgency="low")
        start = self.settings.hydration_start_hour
        if hour >= self.settings.quiet_start_hour or hour < start:
            return hidden

        progress = consumed_ml / target_ml * 100 if target_ml > 0 else 0
        if progress >= 100:
            return hidden
        expected = self.expected_progress(hour)
        behind = expected - progress

        if start <= hour < self.MORNING_END_HOUR and progress < self.MORNING_MIN_PROGRESS:
            return HydrationReminderResult(
                show=True,
                message=_("💧 Start the day with a glass of water to wake up your metabolism"),
                urgency="low",
            )
        if hour in self.PRE_WORKOUT_HOURS and progress < expected - 10:
            return HydrationReminderResult(
                show=True,
                message=_("💪 Hydrate well before training to perform at your best"),
                urgency="medium",
            )
        if behind > 20:
            return HydrationReminderResult(
                show=True,
                message=_("⚠️ You are {behind}% behind the ideal water intake for this time").format(
                    behind=MathTools.round_half_up(behind)
                ),
                urgency="high",
            )
        if behind > 10:
            return HydrationReminderResult(
                show=True,
                message=_("💧 A couple more glasses would get you back on track"),
                urgency="medium",
            )
        if hour % 2 == 0 and hour >= 12 and progress < expected:
            return HydrationReminderResult(
                show=True,
                message=_("💧 Have you had water recently?"),
                urgency="low",
            )
        if (
            self.EVENING_START_HOUR <= hour < self.settings.hydration_end_hour
            and progress < self.EVENING_MIN_PROGRESS
        ):
            liters = (target_ml - consumed_ml) / 1000
            return HydrationReminderResult(
                show=True,
                message=_("🌙 {liters}L left before bed - start finishing up").format(
                    liters=f"{liters:.1f}"
                ),
                urgency="high" if behind > 15 else "medium",
            )
        return hidden


class ProactiveAlertService:
    """Builds user-facing alerts from training, nutrition and body data.

    Alerts are request scoped: ids are derived from type and reason so the
    same inputs always give the same list.
    """

    CONSISTENCY_WINDOW_DAYS = 7
    LOW_CONSISTENCY_RATE = 0.5
    STAGNANT_EXERCISES = 2
    NAMES_SHOWN = 3
    NUTRITION_START_HOUR = 12
    NUTRITION_ALERT_HOUR = 14
    PROTEIN_EXPECTED_RATIO = 0.5
    HYDRATION_START_HOUR = 10
    HYDRATION_ALERT_HOUR = 12
    HYDRATION_EXPECTED_RATIO = 0.6
    WEIGHT_CHANGE_KG = 0.5
    FATIGUE_WINDOW = 3
    FATIGUE_HARD_SESSIONS = 2

    def __init__(self, settings: EngineSettings | None = None) -> None:
        self.settings = settings or EngineSettings()

    def _expected_progress(self, hour: int) -> float:
        start = self.settings.hydration_start_hour
        return (hour - start) / (self.settings.hydration_end_hour - start) * 100

    @staticmethod
    def _alert(now: datetime.datetime, alert_type: str, suffix: str, **fields) -> ProactiveAlert:
        return ProactiveAlert(
            id=f"{alert_type}-{suffix}", type=alert_type, created_at=now, **fields
        )

    def consistency_alerts(
        self,
        scheduled_days_per_week: int,
        sessions: Iterable[WorkoutSession],
        now: datetime.datetime,
    ) -> list[ProactiveAlert]:
        week_ago = now.date() - datetime.timedelta(days=self.CONSISTENCY_WINDOW_DAYS)
        completed = sum(
            1 for s in sessions if s.date >= week_ago and s.completed_at is not None
        )
        if scheduled_days_per_week <= 0:
            return []
        rate = completed / scheduled_days_per_week
        if rate < self.LOW_CONSISTENCY_RATE:
            return [
                self._alert(
                    now, "consistency", "low",
                    priority="high",
                    title=_("Training below target"),
                    description=_(
                        "Only {done}/{planned} sessions this week. Shall we adjust the plan?"
                    ).format(done=completed, planned=scheduled_days_per_week),
                    action_label=_("Adjust plan"),
                    action_path="/entreno",
                    icon="⚠️",
                    color="yellow",
                    metadata={
                        "completed_this_week": completed,
                        "scheduled_days_per_week": scheduled_days_per_week,
                        "completion_rate": rate,
                    },
                )
            ]
        if rate >= 1:
            return [
                self._alert(
                    now, "consistency", "perfect",
                    priority="low",
                    title=_("Perfect week! 🎯"),
                    description=_("You completed {done}/{planned} workouts. Keep it up!").format(
                        done=completed, planned=scheduled_days_per_week
                    ),
                    icon="🏆",
                    color="green",
                    metadata={
                        "completed_this_week": completed,
                        "scheduled_days_per_week": scheduled_days_per_week,
                    },
                )
            ]
        return []

    def _names(self, records: list[ExerciseMaxRecord], exercise_names: dict[str, str]) -> str:
        return ", ".join(
            exercise_names.get(r.exercise_id, _("Exercise")) for r in records[: self.NAMES_SHOWN]
        )

    def stagnation_alerts(
        self,
        records: list[ExerciseMaxRecord],
        exercise_names: dict[str, str],
        now: datetime.datetime,
    ) -> list[ProactiveAlert]:
        alerts: list[ProactiveAlert] = []
        stagnant = [
            r for r in records
            if r.consecutive_successful_sessions == 0 and r.last_feeling == "hard"
        ]
        if len(stagnant) >= self.STAGNANT_EXERCISES:
            alerts.append(
                self._alert(
                    now, "stagnation", "multiple",
                    priority="medium",
                    title=_("Possible stagnation detected"),
                    description=_("{names} - consider changing variations or adjusting volume").format(
                        names=self._names(stagnant, exercise_names)
                    ),
                    action_label=_("See suggestions"),
                    action_path="/entreno",
                    icon="📊",
                    color="yellow",
                    metadata={"exercise_ids": [r.exercise_id for r in stagnant]},
                )
            )
        ready = [r for r in records if r.should_progress]
        if ready:
            alerts.append(
                self._alert(
                    now, "progress", "ready",
                    priority="low",
                    title=_("💪 Ready to add weight!"),
                    description=_("{names} - time to increase the load").format(
                        names=self._names(ready, exercise_names)
                    ),
                    icon="📈",
                    color="green",
                    metadata={"exercise_ids": [r.exercise_id for r in ready]},
                )
            )
        return alerts

    def nutrition_alerts(
        self, protein_g: float, target_protein_g: float, now: datetime.datetime
    ) -> list[ProactiveAlert]:
        hour = now.hour
        if hour < self.NUTRITION_START_HOUR:
            return []
        percentage = protein_g / target_protein_g * 100 if target_protein_g > 0 else 0
        expected = self._expected_progress(hour)
        if hour >= self.NUTRITION_ALERT_HOUR and percentage < expected * self.PROTEIN_EXPECTED_RATIO:
            return [
                self._alert(
                    now, "nutrition", "protein-low",
                    priority="medium",
                    title=_("Protein below target"),
                    description=_("{eaten}g / {target}g - add a protein-rich meal").format(
                        eaten=MathTools.format_number(protein_g),
                        target=MathTools.format_number(target_protein_g),
                    ),
                    action_label=_("See suggestions"),
                    action_path="/nutricion",
                    icon="🥩",
                    color="red",
                    metadata={
                        "today_protein_grams": protein_g,
                        "target_protein_grams": target_protein_g,
                        "percentage": percentage,
                    },
                )
            ]
        return []

    def hydration_alerts(
        self, consumed_ml: float, target_ml: float, now: datetime.datetime
    ) -> list[ProactiveAlert]:
        hour = now.hour
        if hour < self.HYDRATION_START_HOUR:
            return []
        percentage = consumed_ml / target_ml * 100 if target_ml > 0 else 0
        expected = self._expected_progress(hour)
        if hour >= self.HYDRATION_ALERT_HOUR and percentage < expected * self.HYDRATION_EXPECTED_RATIO:
            remaining = MathTools.round_half_up((target_ml - consumed_ml) / 1000, 1)
            return [
                self._alert(
                    now, "hydration", "low",
                    priority="medium",
                    title=_("💧 Low hydration"),
                    description=_("{liters}L left to reach your goal. Drink water!").format(
                        liters=MathTools.format_number(remaining)
                    ),
                    action_label=_("Log"),
                    action_path="/nutricion",
                    icon="💧",
                    color="blue",
                    metadata={
                        "consumed_ml": consumed_ml,
                        "target_ml": target_ml,
                        "remaining": remaining,
                    },
                )
            ]
        return []

    def weight_change_alerts(
        self,
        current_weight_kg: float | None,
        previous_weight_kg: float | None,
        fitness_goal: str | None,
        now: datetime.datetime,
    ) -> list[ProactiveAlert]:
        if not current_weight_kg or not previous_weight_kg:
            return []
        change = current_weight_kg - previous_weight_kg
        if abs(change) < self.WEIGHT_CHANGE_KG:
            return []
        gained = change > 0
        good = (fitness_goal == "muscle_gain" and gained) or (
            fitness_goal == "fat_loss" and not gained
        )
        title = _("Weight up {kg}kg") if gained else _("Weight down {kg}kg")
        return [
            self._alert(
                now, "weight_change", "up" if gained else "down",
                priority="low" if good else "medium",
                title=title.format(kg=f"{abs(change):.1f}"),
                description=(
                    _("Great progress! Your macros have been adjusted automatically.")
                    if good
                    else _("Macros recalculated for your new weight.")
                ),
                icon="⬆️" if gained else "⬇️",
                color="green" if good else "yellow",
                metadata={
                    "current_weight_kg": current_weight_kg,
                    "previous_weight_kg": previous_weight_kg,
                    "change": change,
                },
            )
        ]

    def fatigue_alerts(
        self, sessions: Iterable[WorkoutSession], now: datetime.datetime
    ) -> list[ProactiveAlert]:
        """Flag when at least 2 of the 3 most recent sessions felt hard."""
        recent = sorted(sessions, key=lambda s: s.date)[-self.FATIGUE_WINDOW:]
        hard = sum(1 for s in recent if s.feeling == "hard")
        if hard < self.FATIGUE_HARD_SESSIONS:
            return []
        return [
            self._alert(
                now, "fatigue", "high",
                priority="medium",
                title=_("Signs of fatigue detected"),
                description=_(
                    "Your last workouts have been tough. Consider an extra rest day."
                ),
                icon="😴",
                color="purple",
                metadata={"hard_sessions": hard, "total_sessions": len(recent)},
            )
        ]

    def all_alerts(
        self,
        now: datetime.datetime,
        scheduled_days_per_week: int,
        sessions: list[WorkoutSession],
        max_records: list[ExerciseMaxRecord],
        exercise_names: dict[str, str],
        protein_g: float,
        target_protein_g: float,
        consumed_ml: float,
        target_ml: float,
        current_weight_kg: float | None,
        previous_weight_kg: float | None,
        fitness_goal: str | None,
    ) -> list[ProactiveAlert]:
        """Every alert that applies, in generation order; see ``rank_alerts``."""
        alerts = [
            *self.consistency_alerts(scheduled_days_per_week, sessions, now),
            *self.stagnation_alerts(max_records, exercise_names, now),
            *self.nutrition_alerts(protein_g, target_protein_g, now),
            *self.hydration_alerts(consumed_ml, target_ml, now),
            *self.weight_change_alerts(current_weight_kg, previous_weight_kg, fitness_goal, now),
            *self.fatigue_alerts(sessions, now),
        ]
        logger.debug("emitted alerts: %s", [a.id for a in alerts])
        return alerts

    def alerts_for_profile(
        self,
        now: datetime.datetime,
        profile: Profile,
        schedule: Schedule | None,
        sessions: list[WorkoutSession],
        max_records: list[ExerciseMaxRecord],
        exercise_names: dict[str, str],
        protein_g: float,
        consumed_ml: float,
        target_ml: float | None = None,
        previous_weight_kg: float | None = None,
    ) -> list[ProactiveAlert]:
        """Fill in targets from the profile, then collect every alert."""
        schedule = schedule or Schedule()
        settings = self.settings
        age = (
            MathTools.age_from_birth_date(profile.date_of_birth, now.date(), settings.default_age)
            if profile.date_of_birth
            else settings.default_age
        )
        goal = profile.fitness_goal or "muscle_gain"
        weight = profile.weight_kg or settings.default_weight_kg
        height = profile.height_cm or settings.default_height_cm
        if target_ml is None:
            target_ml = NutritionTools.hydration_target(weight, height, goal)
        targets = NutritionTools.macro_targets(
            weight,
            height,
            age,
            profile.gender or "male",
            goal,
            is_training_day(schedule, now.date()),
        )
        return self.all_alerts(
            now,
            schedule.workout_days_per_week,
            sessions,
            max_records,
            exercise_names,
            protein_g,
            targets.protein,
            consumed_ml,
            target_ml,
            profile.weight_kg,
            previous_weight_kg,
            goal,
        )

    def rank_alerts(
        self, alerts: list[ProactiveAlert], limit: int | None = None
    ) -> list[ProactiveAlert]:
        """High before medium before low, stable, truncated to the alert limit."""
        ranked = sorted(alerts, key=lambda a: PRIORITY_ORDER[a.priority])
        return ranked[: limit if limit is not None else self.settings.alert_limit]
