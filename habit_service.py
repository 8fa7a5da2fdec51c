from __future__ import annotations
import datetime
import logging
from dataclasses import dataclass, field
from functools import singledispatch
from typing import Callable, Union

from localization import translator
from schemas import HabitChecklist, HabitChecklistItem, WorkoutSession
from settings_schema import EngineSettings

logger = logging.getLogger(__name__)
_ = translator.gettext


@dataclass(frozen=True)
class HabitContext:
    """Everything a system habit needs to decide whether it is done today."""

    today: datetime.date
    sessions: list[WorkoutSession] = field(default_factory=list)
    weight_kg: float | None = None
    protein_consumed_g: float = 0
    hydration_consumed_ml: float = 0
    hydration_target_ml: float | None = None
    habit_logs: dict[str, bool] = field(default_factory=dict)


@dataclass(frozen=True)
class SystemHabit:
    """Auto-completing habit computed from other state."""

    id: str
    name: str
    icon: str
    category: str
    check: Callable[[HabitContext], bool]


@dataclass(frozen=True)
class UserHabit:
    """Manually toggled habit; its state lives in the day's habit logs."""

    id: str
    name: str
    icon: str | None = None
    category: str | None = None


Habit = Union[SystemHabit, UserHabit]

GOAL_COMPLETION_RATIO = 0.8
PROTEIN_PER_KG_TARGET = 2.0
DEFAULT_HYDRATION_TARGET_ML = 3000


def trained_today(ctx: HabitContext) -> bool:
    return any(s.date == ctx.today and s.completed_at is not None for s in ctx.sessions)


def protein_goal_met(ctx: HabitContext, default_weight_kg: float = 75.0) -> bool:
    target = (ctx.weight_kg or default_weight_kg) * PROTEIN_PER_KG_TARGET
    return ctx.protein_consumed_g >= target * GOAL_COMPLETION_RATIO


def hydration_goal_met(ctx: HabitContext) -> bool:
    target = ctx.hydration_target_ml or DEFAULT_HYDRATION_TARGET_ML
    return ctx.hydration_consumed_ml >= target * GOAL_COMPLETION_RATIO


@singledispatch
def is_completed(habit, ctx: HabitContext) -> bool:
    raise TypeError(f"unsupported habit type: {type(habit).__name__}")


@is_completed.register
def _system_completed(habit: SystemHabit, ctx: HabitContext) -> bool:
    return bool(habit.check(ctx))


@is_completed.register
def _user_completed(habit: UserHabit, ctx: HabitContext) -> bool:
    return ctx.habit_logs.get(habit.id, False)


@singledispatch
def can_toggle(habit) -> bool:
    raise TypeError(f"unsupported habit type: {type(habit).__name__}")


@can_toggle.register
def _system_toggle(habit: SystemHabit) -> bool:
    return False


@can_toggle.register
def _user_toggle(habit: UserHabit) -> bool:
    return True


class HabitService:
    def __init__(self, settings: EngineSettings | None = None) -> None:
        self.settings = settings or EngineSettings()

    def system_habits(self) -> list[SystemHabit]:
        default_weight = self.settings.default_weight_kg
        return [
            SystemHabit("system-training", _("Train"), "🏋️", "training", trained_today),
            SystemHabit(
                "system-protein",
                _("Protein goal met"),
                "🍽️",
                "nutrition",
                lambda ctx: protein_goal_met(ctx, default_weight),
            ),
            SystemHabit("system-hydration", _("Hydration"), "💧", "hydration", hydration_goal_met),
        ]

    def daily_checklist(
        self, user_habits: list[UserHabit], ctx: HabitContext
    ) -> HabitChecklist:
        """System habits first, then the user's own, with today's progress."""
        habits: list[Habit] = [*self.system_habits(), *user_habits]
        items = [
            HabitChecklistItem(
                id=h.id,
                name=h.name,
                icon=h.icon,
                category=h.category,
                completed=is_completed(h, ctx),
                is_system=not can_toggle(h),
            )
            for h in habits
        ]
        done = sum(1 for i in items if i.completed)
        total = len(items)
        return HabitChecklist(
            date=ctx.today,
            items=items,
            completed_count=done,
            total_count=total,
            progress_percent=done / total * 100 if total else 0.0,
        )

    def toggle(self, habit: Habit, ctx: HabitContext) -> dict[str, bool]:
        """Return the habit logs after flipping ``habit``.

        System habits are read-only; their logs come back unchanged.
        """
        logs = dict(ctx.habit_logs)
        if not can_toggle(habit):
            logger.debug("habit %s is computed and cannot be toggled", habit.id)
            return logs
        logs[habit.id] = not is_completed(habit, ctx)
        return logs
