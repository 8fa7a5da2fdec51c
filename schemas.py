from __future__ import annotations
import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

FitnessGoal = Literal["muscle_gain", "fat_loss", "recomposition", "maintenance"]
ExperienceLevel = Literal["beginner", "intermediate", "advanced"]
Confidence = Literal["high", "medium", "low"]
PlateauStatus = Literal["progressing", "stalling", "plateaued", "declining"]
SetFeeling = Literal["easy", "correct", "hard"]


class Record(BaseModel):
    """Base for output records: plain values, JSON-serializable."""

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")


# ---------------------------------------------------------------- inputs


class ExerciseLogEntry(BaseModel):
    """A logged set as stored by the logging UI."""

    model_config = ConfigDict(frozen=True)

    weight_kg: Optional[float] = None
    reps_completed: Optional[int] = None
    is_warmup: bool = False
    set_number: int = 1
    created_at: Optional[datetime.datetime] = None
    workout_session_id: Optional[str] = None
    exercise_id: Optional[str] = None

    @field_validator("is_warmup", mode="before")
    @classmethod
    def _null_warmup(cls, value: Any) -> Any:
        return False if value is None else value


class WorkoutSession(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    date: datetime.date
    completed_at: Optional[datetime.datetime] = None
    feeling: Optional[str] = None


class ExerciseInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    name_es: Optional[str] = None
    primary_muscle: Optional[str] = None
    secondary_muscles: list[str] = Field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.name_es or self.name


class Profile(BaseModel):
    weight_kg: Optional[float] = None
    height_cm: Optional[float] = None
    date_of_birth: Optional[datetime.date] = None
    gender: Optional[str] = None
    fitness_goal: Optional[str] = None
    body_fat_percentage: Optional[float] = None
    experience_level: Optional[str] = None


class Schedule(BaseModel):
    preferred_workout_days: list[str] = Field(
        default_factory=lambda: ["monday", "tuesday", "thursday", "friday"]
    )
    workout_days_per_week: int = 4


class ExerciseMaxRecord(BaseModel):
    """Per-exercise autopilot state: functional max and success streak."""

    exercise_id: str
    functional_max_kg: float
    best_weight_kg: float
    best_reps: int
    consecutive_successful_sessions: int = 0
    last_feeling: Optional[SetFeeling] = None
    last_session_date: Optional[datetime.date] = None
    should_progress: bool = False
    notes: Optional[str] = None


class DailyPlanInput(BaseModel):
    sleep_hours: float
    sleep_quality: float
    stress_level: float
    soreness_level: float
    weight_kg: float
    fitness_goal: str = "muscle_gain"
    experience_level: str = "beginner"
    is_workout_day: bool
    hydration_progress: float = 0
    days_since_last_workout: int = 1
    consecutive_workout_days: int = 0


# ----------------------------------------------------------- calculators


class OneRMRow(Record):
    percentage: int
    weight: float
    reps: int


class PersonalRecord(Record):
    exercise_id: Optional[str] = None
    exercise_name: Optional[str] = None
    weight: float
    reps: int
    estimated_1rm: float
    date: Optional[str] = None


class PlateBreakdown(Record):
    per_side: float
    plates: list[float]
    remaining: float
    exact: bool


class WarmupSet(Record):
    set_number: int
    percentage: int
    weight: float
    reps: int
    rest: str


# ----------------------------------------------------------- progression


class ProgressionSuggestion(Record):
    should_progress: bool
    current_weight: float
    suggested_weight: float
    progression_amount: float
    reason: str
    confidence: Confidence
    streak: Optional[int] = None


class WeightSuggestion(Record):
    weight: float
    reason: str


# --------------------------------------------------------------- plateau


class SessionSummary(Record):
    """Best working set of one exercise in one session."""

    date: datetime.date
    weight: float
    reps: int
    sets: int
    volume: float
    session_id: Optional[str] = None


class ExerciseProgress(Record):
    exercise_id: str
    exercise_name: str
    history: list[SessionSummary]


class BestSet(Record):
    weight: float
    reps: int
    date: datetime.date


class PlateauAnalysis(Record):
    exercise_id: str
    exercise_name: str
    status: PlateauStatus
    weeks_since_progress: int
    trend_percent: float
    weight_change_percent: float = 0.0
    predicted_plateau_in_weeks: Optional[int] = None
    recommendation: str
    suggested_changes: list[str]
    personal_record: Optional[BestSet] = None
    confidence: float = 0.0


class OverallProgressAnalysis(Record):
    plateau_risk: Literal["low", "medium", "high"]
    exercises_at_risk: list[PlateauAnalysis]
    overall_trend: Literal["improving", "maintaining", "declining"]
    recommendations: list[str]
    weekly_volume_change: float


class StagnationSuggestion(Record):
    type: Literal["increase_volume", "change_exercise", "deload", "increase_intensity"]
    title: str
    description: str
    action_label: str
    priority: Literal["high", "medium", "low"]


class StagnationAnalysis(Record):
    exercise_id: str
    exercise_name: str
    is_stagnant: bool
    weeks_since_progress: int
    current_weight: float
    max_weight: float
    suggestion: Optional[StagnationSuggestion] = None
    trend: Literal["improving", "stable", "declining"]
    confidence: Confidence


class ExerciseAlternative(Record):
    id: str
    name: str
    name_es: Optional[str] = None
    primary_muscle: str
    reason: str


class VolumeChange(Record):
    sets: int
    reps_min: int
    reps_max: int
    change: str


# ------------------------------------------------------------- nutrition


class MacroTargets(Record):
    bmr: float
    tdee: float
    daily_calories: int
    protein: int
    carbs: int
    fats: int
    protein_per_kg: float


class MealMacros(Record):
    name: str
    type: Literal["breakfast", "lunch", "snack", "dinner", "pre_workout", "post_workout"]
    calories: int
    protein: int
    carbs: int
    fats: int
    time: str


class NutritionDecision(Record):
    daily_calories: int
    protein: int
    carbs: int
    fats: int
    protein_per_kg: float
    meal_distribution: list[MealMacros]
    hydration_target: int


class HydrationRecommendation(Record):
    daily_liters: float
    per_kg_ml: int
    reason: str
    tips: list[str]


class SupplementRecommendation(Record):
    name: str
    brand: str
    timing: Literal[
        "morning", "pre_workout", "intra_workout", "post_workout", "with_meal", "before_bed"
    ]
    dosage: str
    priority: Literal["essential", "recommended", "optional"]
    reason: str


class SupplementDecision(Record):
    recommendations: list[SupplementRecommendation]
    total_supplements: int


class RecommendedHabit(Record):
    name: str
    description: str
    icon: str
    category: Literal["hydration", "nutrition", "recovery", "mindset", "training", "skin"]
    priority: int
    reason: str


# --------------------------------------------------------- daily planning


class TrainingDecision(Record):
    should_train: bool
    recommendation: Literal["full_workout", "light_workout", "active_recovery", "rest"]
    reason: str
    intensity_modifier: float
    suggested_focus: Optional[str] = None


class DailyPriority(Record):
    order: int
    title: str
    description: str
    category: Literal[
        "training", "nutrition", "hydration", "supplements",
        "recovery", "mindset", "protein", "sleep",
    ]
    icon: str
    completed: bool


class DailyPlan(Record):
    training: TrainingDecision
    nutrition: NutritionDecision
    supplements: SupplementDecision
    priorities: list[DailyPriority]
    computed_energy: int
    should_rest: bool


class HydrationPlan(Record):
    during_workout: int
    post_workout: int
    daily_total: int
    tip: str


class PostWorkoutNutrition(Record):
    protein_grams: int
    carbs_grams: int
    timing: str
    tip: str


class RecoverySupplement(Record):
    name: str
    dosage: str
    timing: str
    reason: str


class RecoveryPlan(Record):
    rest_hours: int
    muscle_recovery_days: int
    sleep_hours: int
    tip: str


class RecoveryRecommendation(Record):
    hydration: HydrationPlan
    nutrition: PostWorkoutNutrition
    supplements: list[RecoverySupplement]
    recovery: RecoveryPlan


# ---------------------------------------------------------------- alerts


class HydrationReminderResult(Record):
    show: bool
    message: str
    urgency: Literal["low", "medium", "high"]


class ProactiveAlert(Record):
    id: str
    type: Literal[
        "stagnation", "consistency", "fatigue", "nutrition",
        "progress", "hydration", "weight_change",
    ]
    priority: Literal["high", "medium", "low"]
    title: str
    description: str
    action_label: Optional[str] = None
    action_path: Optional[str] = None
    icon: str
    color: Literal["red", "yellow", "blue", "green", "purple"]
    dismissible: bool = True
    created_at: datetime.datetime
    metadata: dict[str, Any] = Field(default_factory=dict)


# ------------------------------------------------------------ statistics


class MuscleVolume(Record):
    muscle: str
    sets: int
    volume: int
    status: Literal["low", "optimal", "high"]


class WeeklyVolume(Record):
    muscle_volumes: list[MuscleVolume]
    total_sets: int
    total_volume: int
    week_start: Optional[datetime.date] = None
    week_end: Optional[datetime.date] = None


# ---------------------------------------------------------------- habits


class HabitChecklistItem(Record):
    id: str
    name: str
    icon: Optional[str] = None
    category: Optional[str] = None
    completed: bool
    is_system: bool


class HabitChecklist(Record):
    date: datetime.date
    items: list[HabitChecklistItem]
    completed_count: int
    total_count: int
    progress_percent: float


# --------------------------------------------------------------- routines


class ExternalActivity(BaseModel):
    """A non-gym activity the user does on a given weekday."""

    model_config = ConfigDict(frozen=True)

    activity: str
    time: Optional[str] = None
    duration: int = 60
    notes: Optional[str] = None


class RoutineInput(BaseModel):
    fitness_goal: FitnessGoal = "muscle_gain"
    experience_level: ExperienceLevel = "beginner"
    days_per_week: int = Field(3, ge=1, le=7)
    external_activities: dict[str, ExternalActivity] = Field(default_factory=dict)
    preferred_gym_days: list[str] = Field(default_factory=list)
    weight_kg: Optional[float] = None
    height_cm: Optional[float] = None
    gender: Optional[str] = None
    age: Optional[int] = None
    body_fat_percentage: Optional[float] = None
    template: str = "auto"


class RoutineExercise(Record):
    name: str
    muscle_group: str
    sets: int
    reps_min: int
    reps_max: int
    rest_seconds: int


class RoutineDay(Record):
    name: str
    focus: list[str]
    exercises: list[RoutineExercise]
    assigned_day: str
    notes: Optional[str] = None
    avoid_muscles: list[str] = Field(default_factory=list)


class RoutineRecommendation(Record):
    name: str
    description: str
    split_type: Literal["push_pull_legs", "upper_lower", "full_body", "bro_split", "custom"]
    days: list[RoutineDay]
    weekly_schedule: dict[str, str]
    external_activity_notes: list[str]
    personal_notes: list[str]
