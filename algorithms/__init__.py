from .math_tools import MathTools
from .bar_loading import BarLoading
from .exercise_progression import ExerciseProgression
from .plateau_detector import PlateauDetector, StagnationDetector
from .nutrition_tools import NutritionTools

__all__ = [
    "MathTools",
    "BarLoading",
    "ExerciseProgression",
    "PlateauDetector",
    "StagnationDetector",
    "NutritionTools",
]
