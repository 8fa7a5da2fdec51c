from __future__ import annotations
import logging
from typing import NamedTuple

from alert_service import WEEKDAYS
from algorithms.math_tools import MathTools
from localization import translator
from schemas import (
    ExternalActivity,
    RoutineDay,
    RoutineExercise,
    RoutineInput,
    RoutineRecommendation,
)

logger = logging.getLogger(__name__)
_ = translator.gettext


class ExerciseTemplate(NamedTuple):
    name: str
    muscle_group: str
    sets: int
    reps_min: int
    reps_max: int
    rest: int
    compound: bool
    priority: int


class ActivityImpact(NamedTuple):
    high: tuple[str, ...]
    moderate: tuple[str, ...]
    cardio: str


class BodyAnalysis(NamedTuple):
    bmi: float
    category: str
    volume_multiplier: float
    rest_adjustment: int
    rep_adjustment: int
    notes: list[str]


class FatigueAnalysis(NamedTuple):
    load_by_day: dict[str, ActivityImpact]
    cardio_load: int
    blocked_days: list[str]
    recommendations: list[str]


class SplitTemplate(NamedTuple):
    name: str
    split_type: str
    days: tuple[str, ...]


PUSH_EXERCISES = (
    ExerciseTemplate("Bench Press", "chest", 4, 5, 8, 180, True, 1),
    ExerciseTemplate("Incline Dumbbell Press", "chest", 3, 8, 12, 90, True, 2),
    ExerciseTemplate("Dumbbell Flyes", "chest", 3, 10, 15, 60, False, 4),
    ExerciseTemplate("Overhead Press", "shoulders", 4, 6, 10, 120, True, 1),
    ExerciseTemplate("Lateral Raises", "shoulders", 4, 12, 15, 45, False, 3),
    ExerciseTemplate("Front Raises", "shoulders", 3, 12, 15, 45, False, 5),
    ExerciseTemplate("Parallel Bar Dips", "triceps", 3, 8, 12, 90, True, 2),
    ExerciseTemplate("Triceps Pushdown", "triceps", 3, 10, 15, 60, False, 3),
    ExerciseTemplate("Skull Crushers", "triceps", 3, 10, 12, 60, False, 4),
    ExerciseTemplate("Triceps Kickback", "triceps", 3, 12, 15, 45, False, 5),
)

PULL_EXERCISES = (
    ExerciseTemplate("Pull-ups", "back", 4, 6, 10, 120, True, 1),
    ExerciseTemplate("Barbell Row", "back", 4, 5, 8, 180, True, 1),
    ExerciseTemplate("Lat Pulldown", "back", 3, 10, 12, 90, True, 2),
    ExerciseTemplate("Dumbbell Row", "back", 3, 10, 12, 90, True, 3),
    ExerciseTemplate("Face Pulls", "shoulders", 4, 15, 20, 45, False, 2),
    ExerciseTemplate("Barbell Curl", "biceps", 3, 8, 12, 60, False, 2),
    ExerciseTemplate("Hammer Curl", "biceps", 3, 10, 12, 60, False, 3),
    ExerciseTemplate("Concentration Curl", "biceps", 3, 10, 15, 45, False, 4),
    ExerciseTemplate("Preacher Curl", "biceps", 3, 10, 12, 60, False, 5),
)

LEG_EXERCISES = (
    ExerciseTemplate("Squat", "quadriceps", 4, 5, 8, 180, True, 1),
    ExerciseTemplate("Romanian Deadlift", "hamstrings", 4, 8, 10, 120, True, 1),
    ExerciseTemplate("Leg Press", "quadriceps", 4, 10, 12, 90, True, 2),
    ExerciseTemplate("Lunges", "quadriceps", 3, 10, 12, 90, True, 3),
    ExerciseTemplate("Leg Extensions", "quadriceps", 3, 12, 15, 60, False, 4),
    ExerciseTemplate("Leg Curl", "hamstrings", 3, 10, 15, 60, False, 3),
    ExerciseTemplate("Hip Thrust", "glutes", 4, 10, 12, 90, True, 2),
    ExerciseTemplate("Calf Raises", "calves", 4, 15, 20, 45, False, 3),
    ExerciseTemplate("Bulgarian Split Squat", "quadriceps", 3, 8, 12, 90, True, 4),
)

ACTIVITY_MUSCLE_IMPACT: dict[str, ActivityImpact] = {
    "climbing": ActivityImpact(("back", "biceps", "forearms", "core"), ("shoulders",), "moderate"),
    "swimming": ActivityImpact(("back", "shoulders"), ("chest", "triceps", "core"), "high"),
    "running": ActivityImpact(("quadriceps", "hamstrings", "calves"), ("glutes", "core"), "high"),
    "boxing": ActivityImpact(("shoulders", "core"), ("chest", "triceps", "back"), "high"),
    "cycling": ActivityImpact(("quadriceps", "hamstrings", "glutes"), ("calves", "core"), "high"),
    "yoga": ActivityImpact((), ("core",), "low"),
    "martial_arts": ActivityImpact(("core", "shoulders"), ("quadriceps", "hamstrings", "back"), "high"),
    "basketball": ActivityImpact(("quadriceps", "calves"), ("shoulders", "core"), "high"),
    "soccer": ActivityImpact(("quadriceps", "hamstrings", "calves"), ("glutes", "core"), "high"),
    "tennis": ActivityImpact(("shoulders", "forearms"), ("core", "quadriceps"), "moderate"),
    "other": ActivityImpact((), (), "moderate"),
}

# Routine day name -> kind of session.
DAY_KINDS: dict[str, str] = {
    "Push": "push",
    "Push 2": "push",
    "Pull": "pull",
    "Pull 2": "pull",
    "Legs": "legs",
    "Legs 2": "legs",
    "Upper": "upper",
    "Upper A": "upper",
    "Upper B": "upper",
    "Lower": "legs",
    "Lower A": "legs",
    "Lower B": "legs",
    "Full Body A": "full_body",
    "Full Body B": "full_body",
    "Full Body C": "full_body",
    "Chest": "chest",
    "Back": "back",
    "Shoulders": "shoulders",
    "Arms": "arms",
    "Chest/Back": "chest_back",
    "Chest/Back 2": "chest_back",
    "Shoulders/Arms": "shoulders_arms",
    "Shoulders/Arms 2": "shoulders_arms",
    "Upper Power": "upper_power",
    "Lower Power": "lower_power",
    "Back/Shoulders": "back_shoulders",
    "Legs Hypertrophy": "legs_hypertrophy",
    "Chest/Arms": "chest_arms",
}

LEG_FOCUS = ["quadriceps", "hamstrings", "glutes", "calves"]
UPPER_FOCUS = ["chest", "back", "shoulders", "biceps", "triceps"]
KIND_FOCUS: dict[str, list[str]] = {
    "push": ["chest", "shoulders", "triceps"],
    "pull": ["back", "biceps"],
    "legs": LEG_FOCUS,
    "lower_power": LEG_FOCUS,
    "legs_hypertrophy": LEG_FOCUS,
    "upper": UPPER_FOCUS,
    "upper_power": UPPER_FOCUS,
    "full_body": ["full_body"],
    "chest": ["chest", "triceps"],
    "back": ["back", "biceps"],
    "shoulders": ["shoulders"],
    "arms": ["biceps", "triceps"],
    "chest_back": ["chest", "back"],
    "shoulders_arms": ["shoulders", "biceps", "triceps"],
    "back_shoulders": ["back", "shoulders"],
    "chest_arms": ["chest", "biceps", "triceps"],
}

ROUTINE_TEMPLATES: dict[str, SplitTemplate] = {
    "ppl": SplitTemplate("Push/Pull/Legs", "push_pull_legs", ("Push", "Pull", "Legs")),
    "ppl_6": SplitTemplate(
        "PPL x2", "push_pull_legs", ("Push", "Pull", "Legs", "Push 2", "Pull 2", "Legs 2")
    ),
    "upper_lower": SplitTemplate(
        "Upper/Lower", "upper_lower", ("Upper A", "Lower A", "Upper B", "Lower B")
    ),
    "upper_lower_ppl": SplitTemplate(
        "Upper/Lower + PPL", "custom", ("Upper", "Lower", "Push", "Pull", "Legs")
    ),
    "full_body": SplitTemplate(
        "Full Body", "full_body", ("Full Body A", "Full Body B", "Full Body C")
    ),
    "bro_split": SplitTemplate(
        "Bro Split", "bro_split", ("Chest", "Back", "Shoulders", "Legs", "Arms")
    ),
    "arnold": SplitTemplate(
        "Arnold Split",
        "custom",
        ("Chest/Back", "Shoulders/Arms", "Legs", "Chest/Back 2", "Shoulders/Arms 2", "Legs 2"),
    ),
    "phat": SplitTemplate(
        "PHAT",
        "custom",
        ("Upper Power", "Lower Power", "Back/Shoulders", "Legs Hypertrophy", "Chest/Arms"),
    ),
}

FULL_BODY_DAYS = ("Full Body A", "Full Body B", "Full Body C")
UPPER_LOWER_DAYS = ("Upper A", "Lower A", "Upper B", "Lower B")
PPL_DAYS = ("Push", "Pull", "Legs", "Push 2", "Pull 2", "Legs 2")

GOAL_LABELS = {
    "muscle_gain": "Hypertrophy",
    "fat_loss": "Fat Loss",
    "recomposition": "Recomposition",
    "maintenance": "Maintenance",
}
GOAL_EMOJI = {"muscle_gain": "💪", "fat_loss": "🔥", "recomposition": "⚡", "maintenance": "✅"}
LEVEL_LABELS = {"beginner": "Fundamental", "intermediate": "Advanced", "advanced": "Elite"}
SPLIT_LABELS = {
    "push_pull_legs": "Push/Pull/Legs",
    "upper_lower": "Upper/Lower",
    "full_body": "Full Body",
    "bro_split": "Bro Split",
    "custom": "Hybrid",
}


def _unique(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


def _heavier(templates) -> list[ExerciseTemplate]:
    return [
        t._replace(sets=t.sets + 1, reps_min=3, reps_max=5, rest=180)
        for t in templates
    ]


def _by_muscle(templates, *muscles: str) -> list[ExerciseTemplate]:
    return [t for t in templates if t.muscle_group in muscles]


def _by_priority(templates, limit: int) -> list[ExerciseTemplate]:
    return [t for t in templates if t.priority <= limit]


class PlannerService:
    """Builds weekly training routines from goal, experience and schedule."""

    MAX_EXERCISES = {"beginner": 5, "intermediate": 7, "advanced": 8}
    BLOCKING_DURATION_MIN = 60
    HIGH_CARDIO_LOAD = 4
    SIGNIFICANT_ACTIVITY_DAYS = 2

    @staticmethod
    def analyze_body(
        weight_kg: float | None,
        height_cm: float | None,
        gender: str | None,
        age: int | None,
        body_fat_percentage: float | None,
    ) -> BodyAnalysis:
        """Volume, rest and rep adjustments from body composition and age.

        Body fat drives the category when known, BMI otherwise. Without
        weight and height no adjustment is made at all.
        """
        if not weight_kg or not height_cm:
            return BodyAnalysis(22.0, "average", 1.0, 0, 0, [])
        bmi = MathTools.bmi(weight_kg, height_cm)
        notes: list[str] = []
        volume = 1.0
        rest = 0
        reps = 0
        intensity_note = _("💪 Focus on intensity over total volume")
        longer_rest_note = _("⏱️ Longer rests to optimize performance")

        if body_fat_percentage is not None:
            bf = body_fat_percentage
            if gender == "male":
                if bf < 10:
                    category, volume, reps, rest = "light", 1.1, 1, -10
                    notes.append(_("🎯 Low body fat - prioritize strength and moderate-high volume"))
                elif bf > 25:
                    category, volume, rest = "heavy", 0.9, 20
                    notes.append(longer_rest_note)
                    notes.append(_("🔥 Consider adding 15-20 min of LISS cardio after training"))
                elif bf > 18:
                    category, volume, rest = "overweight", 0.95, 10
                    notes.append(intensity_note)
                elif bf < 12:
                    category, volume = "light", 1.05
                    notes.append(_("📈 Good body fat level to maximize gains"))
                else:
                    category = "average"
            else:
                if bf < 18:
                    category, volume = "light", 1.05
                    notes.append(_("🎯 Excellent body fat level"))
                elif bf > 35:
                    category, volume, rest = "heavy", 0.9, 20
                    notes.append(_("🔥 Consider adding LISS cardio after training"))
                elif bf > 28:
                    category, volume, rest = "overweight", 0.95, 10
                    notes.append(intensity_note)
                else:
                    category = "average"
        elif bmi < 18.5:
            category, volume, reps = "underweight", 0.85, -1
            notes.append(_("🎯 Focus on heavy compound lifts with long rests"))
            notes.append(_("🍽️ Prioritize a calorie surplus to maximize gains"))
        elif bmi < 21:
            category, volume, reps, rest = "light", 1.1, 1, -10
            notes.append(_("📈 Moderate-high volume to maximize the growth stimulus"))
        elif bmi >= 27:
            category, volume, rest = "heavy", 0.9, 20
            notes.append(longer_rest_note)
            notes.append(_("🔥 Consider adding 10-15 min of cardio after training"))
        elif bmi >= 25:
            category, volume, rest = "overweight", 0.95, 10
            notes.append(intensity_note)
        else:
            category = "average"

        if age and age > 40:
            rest += 15
            notes.append(_("🕐 Extended warm-up recommended (10-15 min)"))
        if age and age < 25:
            volume *= 1.05
        if gender == "female":
            notes.append(_("🎯 Emphasis on glutes and hamstrings for muscle balance"))
        return BodyAnalysis(bmi, category, volume, rest, reps, notes)

    @classmethod
    def analyze_fatigue(cls, activities: dict[str, ExternalActivity]) -> FatigueAnalysis:
        """Muscle load per weekday from outside activities.

        Long high-cardio sessions (60 min or more) block the gym that day.
        """
        load_by_day: dict[str, ActivityImpact] = {}
        blocked: list[str] = []
        cardio_load = 0
        for day, activity in activities.items():
            impact = ACTIVITY_MUSCLE_IMPACT.get(activity.activity)
            if impact is None:
                logger.warning("unknown outside activity %s", activity.activity)
                continue
            day = day.lower()
            load_by_day[day] = impact
            if impact.cardio == "high" and activity.duration >= cls.BLOCKING_DURATION_MIN:
                blocked.append(day)
            if impact.cardio == "high":
                cardio_load += 2
            elif impact.cardio == "moderate":
                cardio_load += 1

        frequency: dict[str, int] = {}
        for impact in load_by_day.values():
            for muscle in impact.high:
                frequency[muscle] = frequency.get(muscle, 0) + 1
        recommendations = [
            _("⚠️ {muscle} worked {times}x/week in outside activities - reduce gym volume").format(
                muscle=muscle, times=times
            )
            for muscle, times in frequency.items()
            if times >= 2
        ]
        if cardio_load >= cls.HIGH_CARDIO_LOAD:
            recommendations.append(_("🫀 High weekly cardio volume - add 200-300 kcal"))
        return FatigueAnalysis(load_by_day, cardio_load, blocked, recommendations)

    @staticmethod
    def select_split(
        gym_days: int,
        significant_external_load: bool,
        experience_level: str,
        fitness_goal: str,
    ) -> tuple[str, list[str]]:
        """Pick a split for the number of free gym days."""
        if experience_level == "beginner":
            if gym_days <= 3:
                return "full_body", list(FULL_BODY_DAYS[:gym_days])
            return "upper_lower", list(UPPER_LOWER_DAYS[:gym_days])
        if significant_external_load and gym_days <= 3:
            return "full_body", list(FULL_BODY_DAYS[:gym_days])
        if fitness_goal == "fat_loss" and gym_days <= 4:
            return "upper_lower", list(UPPER_LOWER_DAYS[:gym_days])
        if gym_days >= 5:
            return "push_pull_legs", list(PPL_DAYS[:gym_days])
        if gym_days >= 4:
            return "upper_lower", list(UPPER_LOWER_DAYS)
        if gym_days == 3:
            return "push_pull_legs", list(PPL_DAYS[:3])
        return "full_body", list(FULL_BODY_DAYS[:2])

    @staticmethod
    def adjust_exercise(
        template: ExerciseTemplate,
        body: BodyAnalysis,
        fitness_goal: str,
        experience_level: str,
    ) -> RoutineExercise:
        sets, reps_min, reps_max, rest = (
            template.sets, template.reps_min, template.reps_max, template.rest
        )
        if fitness_goal == "muscle_gain":
            if template.compound:
                sets = min(sets + 1, 5)
                rest = min(rest + 30, 180)
            else:
                reps_min, reps_max = 10, 15
        elif fitness_goal == "fat_loss":
            reps_min = max(reps_min, 12)
            reps_max = min(reps_max + 3, 20)
            rest = max(rest - 30, 30)
            sets = max(sets - 1, 2)
        elif fitness_goal == "recomposition":
            reps_min, reps_max = 8, 12
        elif fitness_goal == "maintenance":
            sets = max(sets - 1, 2)

        if experience_level == "beginner":
            sets = max(sets - 1, 2)
            rest = min(rest + 30, 180)
        elif experience_level == "advanced":
            sets = min(sets + 1, 6)

        sets = int(MathTools.clamp(MathTools.round_half_up(sets * body.volume_multiplier), 2, 6))
        return RoutineExercise(
            name=_(template.name),
            muscle_group=template.muscle_group,
            sets=sets,
            reps_min=reps_min,
            reps_max=reps_max + body.rep_adjustment,
            rest_seconds=int(MathTools.clamp(rest + body.rest_adjustment, 30, 300)),
        )

    @staticmethod
    def templates_for(kind: str) -> list[ExerciseTemplate]:
        if kind == "push":
            return list(PUSH_EXERCISES)
        if kind == "pull":
            return list(PULL_EXERCISES)
        if kind == "legs":
            return list(LEG_EXERCISES)
        if kind == "upper_power":
            return _heavier([t for t in PUSH_EXERCISES + PULL_EXERCISES if t.compound])
        if kind == "lower_power":
            return _heavier([t for t in LEG_EXERCISES if t.compound])
        if kind == "upper":
            return sorted(
                _by_priority(PUSH_EXERCISES, 3) + _by_priority(PULL_EXERCISES, 3),
                key=lambda t: t.priority,
            )
        if kind == "full_body":
            return sorted(
                _by_priority(LEG_EXERCISES, 2)
                + _by_priority(PUSH_EXERCISES, 2)
                + _by_priority(PULL_EXERCISES, 2),
                key=lambda t: t.priority,
            )
        if kind == "chest_back":
            return _by_muscle(PUSH_EXERCISES, "chest") + _by_muscle(PULL_EXERCISES, "back")
        if kind == "shoulders_arms":
            return _by_muscle(PUSH_EXERCISES, "shoulders", "triceps") + _by_muscle(
                PULL_EXERCISES, "biceps"
            )
        if kind == "chest":
            return _by_muscle(PUSH_EXERCISES, "chest") + _by_muscle(PUSH_EXERCISES, "triceps")[:2]
        if kind == "back":
            return _by_muscle(PULL_EXERCISES, "back") + _by_muscle(PULL_EXERCISES, "biceps")[:2]
        if kind == "shoulders":
            return _by_muscle(PUSH_EXERCISES, "shoulders") + [
                t for t in PULL_EXERCISES if t.name == "Face Pulls"
            ]
        if kind == "arms":
            return _by_muscle(PUSH_EXERCISES, "triceps") + _by_muscle(PULL_EXERCISES, "biceps")
        if kind == "back_shoulders":
            return _by_muscle(PULL_EXERCISES, "back", "shoulders") + _by_muscle(
                PUSH_EXERCISES, "shoulders"
            )
        if kind == "chest_arms":
            return _by_muscle(PUSH_EXERCISES, "chest", "triceps") + _by_muscle(
                PULL_EXERCISES, "biceps"
            )
        if kind == "legs_hypertrophy":
            return [t._replace(reps_min=10, reps_max=15, rest=60) for t in LEG_EXERCISES]
        return []

    @classmethod
    def exercises_for_day(
        cls,
        day_name: str,
        body: BodyAnalysis,
        fitness_goal: str,
        experience_level: str,
        avoid_muscles: list[str],
        reduce_muscles: list[str],
    ) -> list[RoutineExercise]:
        """Exercises for one routine day, skipping muscles tired by outside activity."""
        templates = [
            t._replace(sets=max(t.sets - 1, 2)) if t.muscle_group in reduce_muscles else t
            for t in cls.templates_for(DAY_KINDS.get(day_name, ""))
            if t.muscle_group not in avoid_muscles
        ]
        templates.sort(key=lambda t: t.priority)
        limit = cls.MAX_EXERCISES.get(experience_level, cls.MAX_EXERCISES["advanced"])
        return [
            cls.adjust_exercise(t, body, fitness_goal, experience_level)
            for t in templates[:limit]
        ]

    @classmethod
    def routine_decision(cls, inp: RoutineInput) -> RoutineRecommendation:
        """Generate a weekly routine: split, weekday assignment and exercises."""
        body = cls.analyze_body(
            inp.weight_kg, inp.height_cm, inp.gender, inp.age, inp.body_fat_percentage
        )
        fatigue = cls.analyze_fatigue(inp.external_activities)

        if inp.preferred_gym_days:
            preferred = _unique([d.lower() for d in inp.preferred_gym_days])
            gym_days = [d for d in preferred if d in WEEKDAYS and d not in fatigue.blocked_days]
        else:
            gym_days = [d for d in WEEKDAYS if d not in fatigue.blocked_days][: inp.days_per_week]
        gym_days.sort(key=WEEKDAYS.index)
        significant_load = len(inp.external_activities) >= cls.SIGNIFICANT_ACTIVITY_DAYS

        template = ROUTINE_TEMPLATES.get(inp.template)
        if template is not None:
            split_type, routine_days = template.split_type, list(template.days)
        else:
            if inp.template != "auto":
                logger.warning("unknown routine template %s, selecting automatically", inp.template)
            split_type, routine_days = cls.select_split(
                len(gym_days), significant_load, inp.experience_level, inp.fitness_goal
            )

        days: list[RoutineDay] = []
        schedule: dict[str, str] = {}
        for day_name, weekday in zip(routine_days, gym_days):
            idx = WEEKDAYS.index(weekday)
            prev_day = WEEKDAYS[(idx - 1) % 7]
            next_day = WEEKDAYS[(idx + 1) % 7]
            avoid: list[str] = []
            reduce: list[str] = []
            if prev_day in fatigue.load_by_day:
                avoid.extend(fatigue.load_by_day[prev_day].high)
                reduce.extend(fatigue.load_by_day[prev_day].moderate)
            if next_day in fatigue.load_by_day:
                reduce.extend(fatigue.load_by_day[next_day].high)
            avoid = _unique(avoid)
            exercises = cls.exercises_for_day(
                day_name,
                body,
                inp.fitness_goal,
                inp.experience_level,
                avoid,
                _unique(reduce),
            )
            notes = None
            if avoid:
                notes = _("⚡ Reduced volume after {day}'s activity").format(
                    day=_(prev_day.capitalize())
                )
            days.append(
                RoutineDay(
                    name=_(day_name),
                    focus=list(KIND_FOCUS.get(DAY_KINDS.get(day_name, ""), ["full_body"])),
                    exercises=exercises,
                    assigned_day=weekday,
                    notes=notes,
                    avoid_muscles=avoid,
                )
            )
            schedule[weekday] = _(day_name)

        goal_label = _(GOAL_LABELS[inp.fitness_goal])
        split_label = _(SPLIT_LABELS[split_type])
        emoji = GOAL_EMOJI[inp.fitness_goal]
        if significant_load:
            name = _("{emoji} {goal} + Active Athlete").format(emoji=emoji, goal=goal_label)
        elif len(gym_days) <= 3:
            name = _("{emoji} {goal} Express ({days}d)").format(
                emoji=emoji, goal=goal_label, days=len(gym_days)
            )
        elif template is not None:
            name = f"{emoji} {_(template.name)} - {goal_label}"
        else:
            name = f"{emoji} {_(LEVEL_LABELS[inp.experience_level])} {split_label}"

        description = _("{split} designed for {goal}.").format(
            split=split_label, goal=goal_label.lower()
        )
        if inp.weight_kg and inp.height_cm:
            description += " " + _("Adjusted to your build ({weight}kg).").format(
                weight=MathTools.format_number(inp.weight_kg)
            )
        description += " " + _("Days: {days}.").format(
            days=", ".join(_(d.assigned_day.capitalize()) for d in days)
        )

        personal_notes = list(body.notes)
        if inp.external_activities:
            personal_notes.append(_("📅 Adapted to your outside sports"))
        logger.debug("routine %s with %d days", split_type, len(days))
        return RoutineRecommendation(
            name=name,
            description=description,
            split_type=split_type,
            days=days,
            weekly_schedule=schedule,
            external_activity_notes=fatigue.recommendations,
            personal_notes=personal_notes,
        )
