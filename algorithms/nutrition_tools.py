import logging

from localization import translator
from schemas import (
    HydrationRecommendation,
    MacroTargets,
    MealMacros,
    NutritionDecision,
)
from .math_tools import MathTools

logger = logging.getLogger(__name__)
_ = translator.gettext


class NutritionTools:
    """Macro, calorie and hydration targets from a body profile."""

    GOAL_MULTIPLIERS: dict[str, float] = {
        "muscle_gain": 1.15,
        "fat_loss": 0.80,
        "recomposition": 1.0,
        "maintenance": 1.0,
    }
    PROTEIN_PER_KG: dict[str, float] = {
        "muscle_gain": 2.2,
        "fat_loss": 2.4,
        "recomposition": 2.0,
        "maintenance": 1.8,
    }
    FAT_SHARE: dict[str, float] = {
        "muscle_gain": 0.25,
        "fat_loss": 0.28,
        "recomposition": 0.27,
        "maintenance": 0.28,
    }
    ACTIVITY_MULTIPLIERS: dict[str, float] = {
        "low": 1.2,
        "moderate": 1.55,
        "high": 1.725,
    }
    HYDRATION_ML_PER_KG: dict[str, int] = {
        "muscle_gain": 5,
        "fat_loss": 3,
        "recomposition": 4,
    }
    BASE_ML_PER_KG: int = 40
    WORKOUT_DAY_BONUS_KCAL: int = 200
    MIN_CARBS_G: int = 50
    DEFAULT_GOAL: str = "maintenance"

    # (name, type, calories, protein, carbs, fats, time) as fractions of the day
    WORKOUT_DAY_MEALS: tuple = (
        ("Breakfast", "breakfast", 0.25, 0.25, 0.25, 0.25, "08:00"),
        ("Lunch", "lunch", 0.25, 0.25, 0.20, 0.30, "13:00"),
        ("Pre-workout", "pre_workout", 0.10, 0.10, 0.20, 0.05, "17:00"),
        ("Post-workout", "post_workout", 0.20, 0.25, 0.25, 0.10, "19:30"),
        ("Dinner", "dinner", 0.20, 0.15, 0.10, 0.30, "21:00"),
    )
    REST_DAY_MEALS: tuple = (
        ("Breakfast", "breakfast", 0.25, 0.25, 0.30, 0.25, "08:00"),
        ("Lunch", "lunch", 0.30, 0.30, 0.30, 0.30, "13:00"),
        ("Snack", "snack", 0.15, 0.15, 0.20, 0.15, "17:00"),
        ("Dinner", "dinner", 0.30, 0.30, 0.20, 0.30, "20:00"),
    )

    @classmethod
    def _goal(cls, goal: str | None) -> str:
        if goal in cls.GOAL_MULTIPLIERS:
            return goal
        if goal is not None:
            logger.warning("unknown fitness goal %r, using %s", goal, cls.DEFAULT_GOAL)
        return cls.DEFAULT_GOAL

    @staticmethod
    def bmr(weight_kg: float, height_cm: float, age: int, gender: str | None) -> float:
        """Basal metabolic rate (Mifflin-St Jeor).

        Without a known gender the simplified ``10W + 625`` estimate is used.
        """
        if weight_kg <= 0:
            return 0.0
        base = 10 * weight_kg + 6.25 * height_cm - 5 * age
        if gender == "male":
            return base + 5
        if gender == "female":
            return base - 161
        return 10 * weight_kg + 625

    @classmethod
    def tdee(cls, bmr: float, activity_level: str) -> float:
        return bmr * cls.ACTIVITY_MULTIPLIERS.get(activity_level, cls.ACTIVITY_MULTIPLIERS["moderate"])

    @classmethod
    def macro_targets(
        cls,
        weight_kg: float,
        height_cm: float,
        age: int,
        gender: str | None,
        fitness_goal: str | None,
        is_workout_day: bool,
        activity_level: str = "moderate",
    ) -> MacroTargets:
        """Daily calories and macro grams.

        Calories are recomputed from the rounded grams so the displayed total
        always equals ``protein*4 + carbs*4 + fats*9``.
        """
        goal = cls._goal(fitness_goal)
        if weight_kg <= 0:
            return MacroTargets(
                bmr=0, tdee=0, daily_calories=0, protein=0, carbs=0, fats=0,
                protein_per_kg=cls.PROTEIN_PER_KG[goal],
            )
        bmr = cls.bmr(weight_kg, height_cm, age, gender)
        tdee = cls.tdee(bmr, activity_level)
        calories = MathTools.round_half_up(tdee * cls.GOAL_MULTIPLIERS[goal])
        if is_workout_day:
            calories += cls.WORKOUT_DAY_BONUS_KCAL

        protein_per_kg = cls.PROTEIN_PER_KG[goal]
        protein = MathTools.round_half_up(weight_kg * protein_per_kg)
        fats = MathTools.round_half_up(calories * cls.FAT_SHARE[goal] / 9)
        carbs = max(
            cls.MIN_CARBS_G,
            MathTools.round_half_up((calories - protein * 4 - fats * 9) / 4),
        )
        return MacroTargets(
            bmr=round(bmr, 2),
            tdee=round(tdee, 2),
            daily_calories=protein * 4 + carbs * 4 + fats * 9,
            protein=protein,
            carbs=carbs,
            fats=fats,
            protein_per_kg=protein_per_kg,
        )

    @classmethod
    def hydration_ml_per_kg(cls, fitness_goal: str | None) -> int:
        return cls.BASE_ML_PER_KG + cls.HYDRATION_ML_PER_KG.get(fitness_goal or "", 0)

    @staticmethod
    def height_multiplier(height_cm: float) -> float:
        if height_cm > 180:
            return 1.1
        if height_cm < 165:
            return 0.9
        return 1.0

    @classmethod
    def hydration_target(cls, weight_kg: float, height_cm: float, fitness_goal: str | None) -> int:
        """Daily water target in ml, always a multiple of 100."""
        if weight_kg <= 0:
            return 0
        total = weight_kg * cls.hydration_ml_per_kg(fitness_goal) * cls.height_multiplier(height_cm)
        return MathTools.round_half_up(total / 100) * 100

    @classmethod
    def hydration_recommendation(
        cls, weight_kg: float, height_cm: float, fitness_goal: str | None
    ) -> HydrationRecommendation:
        target_ml = cls.hydration_target(weight_kg, height_cm, fitness_goal)
        liters = target_ml / 1000
        per_kg = MathTools.round_half_up(target_ml / weight_kg) if weight_kg > 0 else 0
        tips = [
            _("Drink a glass right after waking up"),
            _("Carry a bottle with you at all times"),
            _("Drink before you feel thirsty"),
        ]
        if fitness_goal == "muscle_gain":
            tips.append(_("Drink more during and after training"))
            tips.append(_("Consider adding electrolytes after training"))
            goal_label = _("muscle gain")
        elif fitness_goal == "fat_loss":
            tips.append(_("Drink a glass before every meal"))
            tips.append(_("Water with lemon can help with satiety"))
            goal_label = _("fat loss")
        else:
            goal_label = _("maintenance")
        reason = _("Based on your weight ({weight}kg), height ({height}cm) and {goal} goal").format(
            weight=MathTools.format_number(weight_kg),
            height=MathTools.format_number(height_cm),
            goal=goal_label,
        )
        return HydrationRecommendation(
            daily_liters=liters, per_kg_ml=per_kg, reason=reason, tips=tips
        )

    @classmethod
    def meal_distribution(
        cls, calories: int, protein: int, carbs: int, fats: int, is_workout_day: bool
    ) -> list[MealMacros]:
        """Split the day's macros over 5 meals (training day) or 4 (rest day)."""
        table = cls.WORKOUT_DAY_MEALS if is_workout_day else cls.REST_DAY_MEALS
        r = MathTools.round_half_up
        return [
            MealMacros(
                name=_(name),
                type=meal_type,
                calories=r(calories * c),
                protein=r(protein * p),
                carbs=r(carbs * cb),
                fats=r(fats * f),
                time=time,
            )
            for name, meal_type, c, p, cb, f, time in table
        ]

    @classmethod
    def nutrition_decision(
        cls,
        weight_kg: float,
        fitness_goal: str | None,
        is_workout_day: bool,
        activity_level: str = "moderate",
        height_cm: float = 175.0,
        age: int = 25,
        gender: str | None = None,
    ) -> NutritionDecision:
        targets = cls.macro_targets(
            weight_kg, height_cm, age, gender, fitness_goal, is_workout_day, activity_level
        )
        return NutritionDecision(
            daily_calories=targets.daily_calories,
            protein=targets.protein,
            carbs=targets.carbs,
            fats=targets.fats,
            protein_per_kg=targets.protein_per_kg,
            meal_distribution=cls.meal_distribution(
                targets.daily_calories,
                targets.protein,
                targets.carbs,
                targets.fats,
                is_workout_day,
            ),
            hydration_target=cls.hydration_target(weight_kg, height_cm, fitness_goal),
        )
