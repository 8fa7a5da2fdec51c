from __future__ import annotations
import logging
from typing import Callable, NamedTuple

from algorithms.math_tools import MathTools
from algorithms.nutrition_tools import NutritionTools
from localization import translator
from schemas import (
    DailyPlan,
    DailyPlanInput,
    DailyPriority,
    HydrationPlan,
    PostWorkoutNutrition,
    RecommendedHabit,
    RecoveryPlan,
    RecoveryRecommendation,
    RecoverySupplement,
    SupplementDecision,
    SupplementRecommendation,
    TrainingDecision,
)
from settings_schema import EngineSettings

logger = logging.getLogger(__name__)
_ = translator.gettext


class SupplementInput(NamedTuple):
    fitness_goal: str
    is_workout_day: bool
    sleep_quality: float


class HabitInput(NamedTuple):
    weight_kg: float
    height_cm: float
    fitness_goal: str
    experience_level: str
    sleep_quality: float
    stress_level: float
    bmi: float


def _creatine(_inp: SupplementInput) -> SupplementRecommendation:
    return SupplementRecommendation(
        name=_("Creatine Monohydrate"),
        brand="MyProtein",
        timing="morning",
        dosage="5g",
        priority="essential",
        reason=_("Improves strength and performance. Take daily."),
    )


def _whey(inp: SupplementInput) -> SupplementRecommendation:
    return SupplementRecommendation(
        name=_("Impact Whey Protein"),
        brand="MyProtein",
        timing="post_workout" if inp.is_workout_day else "with_meal",
        dosage="25-30g",
        priority="essential",
        reason=(
            _("Post-workout recovery. Take within 2h after training.")
            if inp.is_workout_day
            else _("Completes your daily protein.")
        ),
    )


def _pre_workout(_inp: SupplementInput) -> SupplementRecommendation:
    return SupplementRecommendation(
        name=_("THE Pre-Workout"),
        brand="MyProtein",
        timing="pre_workout",
        dosage=_("1 scoop"),
        priority="recommended",
        reason=_("Energy and focus for training. Take 30min before."),
    )


def _omega3(_inp: SupplementInput) -> SupplementRecommendation:
    return SupplementRecommendation(
        name="Omega 3",
        brand="MyProtein",
        timing="with_meal",
        dosage=_("2 capsules"),
        priority="recommended",
        reason=_("Cardiovascular health and anti-inflammatory."),
    )


def _zma(_inp: SupplementInput) -> SupplementRecommendation:
    return SupplementRecommendation(
        name="ZMA",
        brand="Optimum Nutrition",
        timing="before_bed",
        dosage=_("3 capsules"),
        priority="recommended",
        reason=_("Improves sleep quality and recovery."),
    )


def _casein(_inp: SupplementInput) -> SupplementRecommendation:
    return SupplementRecommendation(
        name=_("Casein Gold Standard"),
        brand="Optimum Nutrition",
        timing="before_bed",
        dosage=_("1 scoop"),
        priority="optional",
        reason=_("Slow-release protein for the night."),
    )


def _vitamin_d(_inp: SupplementInput) -> SupplementRecommendation:
    return SupplementRecommendation(
        name=_("Vitamin D3"),
        brand="HSN",
        timing="morning",
        dosage=_("1 capsule"),
        priority="optional",
        reason=_("Immune system and energy. Especially in winter."),
    )


# Evaluated in order; every matching rule contributes one recommendation.
SUPPLEMENT_RULES: list[
    tuple[Callable[[SupplementInput], bool], Callable[[SupplementInput], SupplementRecommendation]]
] = [
    (lambda i: True, _creatine),
    (lambda i: i.is_workout_day or i.fitness_goal == "muscle_gain", _whey),
    (lambda i: i.is_workout_day, _pre_workout),
    (lambda i: True, _omega3),
    (lambda i: i.sleep_quality < 7, _zma),
    (lambda i: i.is_workout_day and i.fitness_goal == "muscle_gain", _casein),
    (lambda i: True, _vitamin_d),
]


def _habit(name, description, icon, category, priority, reason) -> RecommendedHabit:
    return RecommendedHabit(
        name=name,
        description=description,
        icon=icon,
        category=category,
        priority=priority,
        reason=reason,
    )


def _hydration_habits(inp: HabitInput) -> list[RecommendedHabit]:
    liters = RecommendationService.water_intake_liters(
        inp.weight_kg, inp.height_cm, inp.fitness_goal
    )
    return [
        _habit(
            _("Drink {liters}L of water").format(liters=f"{liters:.1f}"),
            _("Daily hydration tailored to your weight and goal"),
            "💧", "hydration", 10,
            _("Hydration is fundamental for performance and health"),
        )
    ]


def _muscle_gain_habits(_inp: HabitInput) -> list[RecommendedHabit]:
    return [
        _habit(
            _("Eat protein at every meal"),
            _("Include 25-40g of protein per meal to maximize protein synthesis"),
            "🥩", "nutrition", 9,
            _("Spreading protein optimizes muscle gain"),
        ),
        _habit(
            _("Never skip the post-workout meal"),
            _("Protein + carbs within 2h of training"),
            "🍌", "nutrition", 8,
            _("Maximizes recovery and muscle growth"),
        ),
    ]


def _fat_loss_habits(_inp: HabitInput) -> list[RecommendedHabit]:
    return [
        _habit(
            _("Log your meals"),
            _("Track what you eat to keep the deficit"),
            "📝", "nutrition", 9,
            _("Tracking is key to keeping a calorie deficit"),
        ),
        _habit(
            _("Eat slowly"),
            _("Take at least 20 minutes per meal"),
            "🍽️", "nutrition", 7,
            _("Improves satiety and reduces overeating"),
        ),
    ]


def _sleep_habits(_inp: HabitInput) -> list[RecommendedHabit]:
    return [
        _habit(
            _("Sleep 7-8 hours"),
            _("Go to bed and get up at the same time every day"),
            "😴", "recovery", 10,
            _("Your sleep quality is low - it is crucial for recovery"),
        ),
        _habit(
            _("No screens 1h before bed"),
            _("Avoid blue light to improve sleep quality"),
            "📵", "recovery", 8,
            _("Improves melatonin production"),
        ),
    ]


def _mindset_habits(_inp: HabitInput) -> list[RecommendedHabit]:
    return [
        _habit(
            _("10 min of meditation"),
            _("Guided meditation or deep breathing every day"),
            "🧘", "mindset", 9,
            _("Your stress level is high - it affects cortisol and recovery"),
        )
    ]


def _warmup_habits(_inp: HabitInput) -> list[RecommendedHabit]:
    return [
        _habit(
            _("Warm up 5-10 min"),
            _("Light cardio + mobility before training"),
            "🔥", "training", 7,
            _("Prevents injuries and improves performance"),
        )
    ]


def _logging_habits(_inp: HabitInput) -> list[RecommendedHabit]:
    return [
        _habit(
            _("Log your training weights"),
            _("Write down sets, reps and weight to progress"),
            "📊", "training", 8,
            _("Logged progression is key to improving"),
        )
    ]


def _skin_habits(_inp: HabitInput) -> list[RecommendedHabit]:
    return [
        _habit(
            _("Daily sunscreen"),
            _("SPF 30+ even on cloudy days"),
            "☀️", "skin", 6,
            _("Protects the skin from premature aging"),
        )
    ]


def _steps_habits(_inp: HabitInput) -> list[RecommendedHabit]:
    return [
        _habit(
            _("Walk 10,000 steps"),
            _("Extra NEAT to burn calories effortlessly"),
            "🚶", "training", 8,
            _("Daily steps raise energy expenditure significantly"),
        )
    ]


def _wellness_habits(_inp: HabitInput) -> list[RecommendedHabit]:
    return [
        _habit(
            _("Stretch after training"),
            _("5-10 min of post-workout stretching"),
            "🧘‍♂️", "recovery", 6,
            _("Improves flexibility and reduces soreness"),
        ),
        _habit(
            _("Take your supplements"),
            _("Creatine, vitamin D and omega-3 daily"),
            "💊", "nutrition", 7,
            _("Basic supplements with proven benefits"),
        ),
    ]


HABIT_RULES: list[
    tuple[Callable[[HabitInput], bool], Callable[[HabitInput], list[RecommendedHabit]]]
] = [
    (lambda i: True, _hydration_habits),
    (lambda i: i.fitness_goal == "muscle_gain", _muscle_gain_habits),
    (lambda i: i.fitness_goal == "fat_loss", _fat_loss_habits),
    (lambda i: i.sleep_quality < 6, _sleep_habits),
    (lambda i: i.stress_level > 6, _mindset_habits),
    (lambda i: True, _warmup_habits),
    (lambda i: i.experience_level != "advanced", _logging_habits),
    (lambda i: True, _skin_habits),
    (lambda i: i.bmi > 25 or i.fitness_goal == "fat_loss", _steps_habits),
    (lambda i: True, _wellness_habits),
]


class RecommendationService:
    """Deterministic daily recommendations derived from a user's state."""

    PRIORITY_PROTEIN_PER_KG: dict[str, float] = {
        "muscle_gain": 2.0,
        "recomposition": 1.8,
        "fat_loss": 2.2,
        "maintenance": 1.6,
    }
    EXPERIENCE_MODIFIERS: dict[str, float] = {
        "beginner": 0.9,
        "intermediate": 1.0,
        "advanced": 1.1,
    }

    def __init__(self, settings: EngineSettings | None = None) -> None:
        self.settings = settings or EngineSettings()

    # ------------------------------------------------------------ supplements

    def supplement_decision(
        self, fitness_goal: str, is_workout_day: bool, sleep_quality: float
    ) -> SupplementDecision:
        inp = SupplementInput(fitness_goal, is_workout_day, sleep_quality)
        recs = [build(inp) for applies, build in SUPPLEMENT_RULES if applies(inp)]
        return SupplementDecision(recommendations=recs, total_supplements=len(recs))

    @staticmethod
    def supplements_by_timing(
        recommendations: list[SupplementRecommendation], timing: str
    ) -> list[SupplementRecommendation]:
        return [r for r in recommendations if r.timing == timing]

    @staticmethod
    def essential_supplements(
        recommendations: list[SupplementRecommendation],
    ) -> list[SupplementRecommendation]:
        return [r for r in recommendations if r.priority == "essential"]

    # ---------------------------------------------------------------- habits

    @staticmethod
    def water_intake_liters(weight_kg: float, height_cm: float, fitness_goal: str) -> float:
        """Daily water in litres rounded to 0.1."""
        ml = NutritionTools.hydration_target(weight_kg, height_cm, fitness_goal)
        return ml / 1000

    def habit_recommendations(
        self,
        weight_kg: float,
        height_cm: float,
        fitness_goal: str,
        experience_level: str = "beginner",
        sleep_quality: float = 7,
        stress_level: float = 5,
    ) -> list[RecommendedHabit]:
        """Return habits ordered by priority, highest first."""
        inp = HabitInput(
            weight_kg,
            height_cm,
            fitness_goal,
            experience_level,
            sleep_quality,
            stress_level,
            MathTools.bmi(weight_kg, height_cm),
        )
        habits: list[RecommendedHabit] = []
        for applies, build in HABIT_RULES:
            if applies(inp):
                habits.extend(build(inp))
        return sorted(habits, key=lambda h: h.priority, reverse=True)

    # -------------------------------------------------------------- training

    def readiness_score(
        self,
        sleep_hours: float,
        sleep_quality: float,
        stress_level: float,
        soreness_level: float,
        experience_level: str,
    ) -> float:
        sleep_score = min(sleep_hours / 8, 1) * (sleep_quality / 10)
        stress_score = (10 - stress_level) / 10
        soreness_score = (10 - soreness_level) / 10
        raw = (sleep_score * 0.4 + stress_score * 0.35 + soreness_score * 0.25) * 10
        modifier = self.EXPERIENCE_MODIFIERS.get(experience_level, 1.0)
        return min(10.0, raw * modifier)

    def training_decision(
        self,
        sleep_hours: float,
        sleep_quality: float,
        stress_level: float,
        soreness_level: float,
        is_scheduled_workout_day: bool,
        experience_level: str = "beginner",
        days_since_last_workout: int = 1,
        consecutive_workout_days: int = 0,
    ) -> TrainingDecision:
        """Decide whether to train today and at which intensity."""
        readiness = self.readiness_score(
            sleep_hours, sleep_quality, stress_level, soreness_level, experience_level
        )
        if sleep_hours < 5:
            return TrainingDecision(
                should_train=False,
                recommendation="rest",
                reason=_("Less than 5 hours of sleep. Your body needs to recover."),
                intensity_modifier=0,
            )
        if stress_level >= 9:
            return TrainingDecision(
                should_train=False,
                recommendation="active_recovery",
                reason=_("Very high stress. Active recovery is better today."),
                intensity_modifier=0.3,
                suggested_focus=_("Stretching and mobility"),
            )
        if soreness_level >= 9:
            return TrainingDecision(
                should_train=False,
                recommendation="rest",
                reason=_("Severe soreness. Give your muscles time."),
                intensity_modifier=0,
            )
        if consecutive_workout_days >= 5:
            return TrainingDecision(
                should_train=False,
                recommendation="rest",
                reason=_("5 training days in a row. Rest is mandatory."),
                intensity_modifier=0,
            )
        if not is_scheduled_workout_day:
            if readiness >= 8 and days_since_last_workout >= 2:
                return TrainingDecision(
                    should_train=True,
                    recommendation="light_workout",
                    reason=_("Not a training day, but you feel great. Do something light."),
                    intensity_modifier=0.6,
                    suggested_focus=_("Light cardio or accessories"),
                )
            return TrainingDecision(
                should_train=False,
                recommendation="rest",
                reason=_("Scheduled rest day. Recover for tomorrow."),
                intensity_modifier=0,
            )
        if readiness >= 8:
            return TrainingDecision(
                should_train=True,
                recommendation="full_workout",
                reason=_("You are at your best! Go all out."),
                intensity_modifier=1.1,
            )
        if readiness >= 6:
            return TrainingDecision(
                should_train=True,
                recommendation="full_workout",
                reason=_("Good shape. Normal session."),
                intensity_modifier=1.0,
            )
        if readiness >= 4:
            return TrainingDecision(
                should_train=True,
                recommendation="light_workout",
                reason=_("You are not at 100%. Lower the intensity today."),
                intensity_modifier=0.7,
            )
        return TrainingDecision(
            should_train=False,
            recommendation="active_recovery",
            reason=_("Your body is asking for rest. Active recovery is better."),
            intensity_modifier=0.3,
            suggested_focus=_("Stretching and mobility"),
        )

    # ------------------------------------------------------------ priorities

    def priorities_decision(
        self,
        is_workout_day: bool,
        hydration_progress: float,
        sleep_quality: float,
        stress_level: float,
        weight_kg: float | None = None,
        fitness_goal: str | None = None,
    ) -> list[DailyPriority]:
        """Return the three ordered priorities for today."""
        weight = weight_kg or self.settings.default_weight_kg
        goal = fitness_goal or "muscle_gain"
        protein = MathTools.round_half_up(weight * self.PRIORITY_PROTEIN_PER_KG.get(goal, 1.8))
        priorities: list[DailyPriority] = []

        if is_workout_day:
            descriptions = {
                "muscle_gain": _("Train hard, aim for controlled muscular failure"),
                "fat_loss": _("Keep the intensity up to burn calories"),
                "recomposition": _("Strength + cardio to transform your body"),
                "maintenance": _("Maintenance session, enjoy the process"),
            }
            priorities.append(
                DailyPriority(
                    order=1,
                    title=_("Complete your workout"),
                    description=descriptions.get(goal, _("Follow today's plan")),
                    category="training",
                    icon="💪",
                    completed=False,
                )
            )
        else:
            priorities.append(
                DailyPriority(
                    order=1,
                    title=_("Recovery day"),
                    description=(
                        _("Prioritize 8h of sleep tonight")
                        if sleep_quality < 6
                        else _("Gentle stretching and active rest")
                    ),
                    category="recovery",
                    icon="🧘",
                    completed=False,
                )
            )

        protein_descriptions = {
            "muscle_gain": _("Eat {g}g of protein to build muscle"),
            "fat_loss": _("{g}g of protein to preserve muscle"),
            "recomposition": _("{g}g of protein for recomposition"),
            "maintenance": _("Keep {g}g of protein daily"),
        }
        priorities.append(
            DailyPriority(
                order=2,
                title=_("Eat {g}g of protein").format(g=protein),
                description=protein_descriptions.get(goal, _("Target: {g}g")).format(g=protein),
                category="protein",
                icon="🥩",
                completed=False,
            )
        )
        priorities.append(self._third_priority(goal, sleep_quality, hydration_progress, stress_level))
        return priorities

    @staticmethod
    def _third_priority(
        goal: str, sleep_quality: float, hydration_progress: float, stress_level: float
    ) -> DailyPriority:
        if goal == "muscle_gain":
            if sleep_quality < 7:
                return DailyPriority(
                    order=3, title=_("Sleep at least 8 hours"),
                    description=_("Muscle grows while you sleep"),
                    category="sleep", icon="😴", completed=False,
                )
            return DailyPriority(
                order=3, title=_("Take creatine (5g)"),
                description=_("Improves strength and muscle volume"),
                category="supplements", icon="💊", completed=False,
            )
        if goal == "fat_loss":
            if hydration_progress < 60:
                return DailyPriority(
                    order=3, title=_("Drink 3L of water"),
                    description=_("Speeds up metabolism and reduces hunger"),
                    category="hydration", icon="💧", completed=False,
                )
            return DailyPriority(
                order=3, title=_("Walk 10,000 steps"),
                description=_("NEAT: burn calories effortlessly"),
                category="training", icon="🚶", completed=False,
            )
        if goal == "recomposition":
            return DailyPriority(
                order=3, title=_("Slight deficit (-300kcal)"),
                description=_("Lose fat while you build muscle"),
                category="nutrition", icon="⚖️", completed=False,
            )
        if stress_level >= 7:
            return DailyPriority(
                order=3, title=_("Manage stress"),
                description=_("10 min of breathing or meditation"),
                category="mindset", icon="🧠", completed=False,
            )
        return DailyPriority(
            order=3, title=_("Stay consistent"),
            description=_("You are doing well. Stick to the plan."),
            category="mindset", icon="🔥", completed=True,
        )

    # -------------------------------------------------------------- recovery

    def recovery_decision(
        self,
        workout_duration_minutes: float,
        exercise_count: int,
        total_sets: int,
        fitness_goal: str,
        body_weight_kg: float,
    ) -> RecoveryRecommendation:
        """Post-workout hydration, nutrition, supplement and rest advice."""
        r = MathTools.round_half_up
        intensity = int(
            MathTools.clamp(
                (1 if exercise_count >= 6 else 0)
                + (1 if total_sets >= 15 else 0)
                + (1 if workout_duration_minutes >= 60 else 0)
                + 1,
                1,
                3,
            )
        )
        during = r(workout_duration_minutes / 60 * 750)
        post = 500 + intensity * 100
        daily = r(body_weight_kg * 38)

        protein = r(body_weight_kg * 0.4)
        carbs_per_kg, tip = {
            "muscle_gain": (0.8, _("Prioritize fast carbs + protein to maximize muscle synthesis.")),
            "fat_loss": (0.3, _("Focus on protein with moderate carbs to keep muscle.")),
            "recomposition": (0.5, _("Balance protein and carbs for optimal recovery.")),
        }.get(fitness_goal, (0.5, _("Keep your usual post-workout macros.")))
        carbs = r(body_weight_kg * carbs_per_kg)

        supplements = [
            RecoverySupplement(
                name=_("Whey Protein"),
                dosage=f"{protein}g",
                timing=_("Within 30-60 min after training"),
                reason=_("Speeds up muscle protein synthesis and recovery."),
            ),
            RecoverySupplement(
                name=_("Creatine Monohydrate"),
                dosage="5g",
                timing=_("With your post-workout shake"),
                reason=_("Improves recovery, strength and performance in upcoming sessions."),
            ),
        ]
        if fitness_goal == "muscle_gain":
            supplements.append(
                RecoverySupplement(
                    name=_("Carbohydrates (Maltodextrin/Cyclodextrin)"),
                    dosage=f"{carbs}g",
                    timing=_("With your post-workout shake"),
                    reason=_("Refills muscle glycogen and boosts protein uptake."),
                )
            )
        if intensity >= 2:
            supplements.append(
                RecoverySupplement(
                    name=_("Electrolytes"),
                    dosage=_("1 sachet"),
                    timing=_("During or after training"),
                    reason=_("Replaces minerals lost through heavy sweating."),
                )
            )

        rest_hours = 48 if intensity >= 2 else 24
        if intensity >= 3:
            recovery_tip = _(
                "Hard session. Prioritize quality sleep and avoid the same muscles for 48-72h."
            )
        elif intensity >= 2:
            recovery_tip = _("Good session. Rest at least 48h before training these muscles again.")
        else:
            recovery_tip = _("Light session. You can train again tomorrow if you feel recovered.")

        return RecoveryRecommendation(
            hydration=HydrationPlan(
                during_workout=during,
                post_workout=post,
                daily_total=daily,
                tip=_("Bring {liters}L of water to the gym. Drink {post}ml right after.").format(
                    liters=MathTools.format_number(MathTools.round_half_up(during / 1000, 1)),
                    post=post,
                ),
            ),
            nutrition=PostWorkoutNutrition(
                protein_grams=protein,
                carbs_grams=carbs,
                timing=_("Within 30-60 minutes after training"),
                tip=tip,
            ),
            supplements=supplements,
            recovery=RecoveryPlan(
                rest_hours=rest_hours,
                muscle_recovery_days=r(rest_hours / 24),
                sleep_hours=8 if fitness_goal == "muscle_gain" else 7,
                tip=recovery_tip,
            ),
        )

    # ------------------------------------------------------------ daily plan

    @staticmethod
    def computed_energy(
        sleep_hours: float, sleep_quality: float, stress_level: float, soreness_level: float
    ) -> int:
        """Overall energy score 1-10 shown on the daily plan."""
        sleep_score = min(sleep_hours / 8, 1) * (sleep_quality / 10)
        stress_impact = (10 - stress_level) / 10
        soreness_impact = (10 - soreness_level) / 10
        raw = sleep_score * 0.4 + stress_impact * 0.3 + soreness_impact * 0.3
        return int(MathTools.clamp(MathTools.round_half_up(raw * 10), 1, 10))

    def daily_plan(self, inp: DailyPlanInput) -> DailyPlan:
        """Chain training, nutrition, supplement and priority decisions."""
        training = self.training_decision(
            inp.sleep_hours,
            inp.sleep_quality,
            inp.stress_level,
            inp.soreness_level,
            inp.is_workout_day,
            inp.experience_level,
            inp.days_since_last_workout,
            inp.consecutive_workout_days,
        )
        nutrition = NutritionTools.nutrition_decision(
            inp.weight_kg,
            inp.fitness_goal,
            training.should_train,
            activity_level="high" if training.should_train else "moderate",
            height_cm=self.settings.default_height_cm,
            age=self.settings.default_age,
        )
        supplements = self.supplement_decision(
            inp.fitness_goal, training.should_train, inp.sleep_quality
        )
        priorities = self.priorities_decision(
            training.should_train,
            inp.hydration_progress,
            inp.sleep_quality,
            inp.stress_level,
            inp.weight_kg,
            inp.fitness_goal,
        )
        logger.debug("daily plan: %s", training.recommendation)
        return DailyPlan(
            training=training,
            nutrition=nutrition,
            supplements=supplements,
            priorities=priorities,
            computed_energy=self.computed_energy(
                inp.sleep_hours, inp.sleep_quality, inp.stress_level, inp.soreness_level
            ),
            should_rest=not training.should_train,
        )
