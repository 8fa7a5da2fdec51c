from typing import Sequence

from schemas import PlateBreakdown, WarmupSet
from settings_schema import EngineSettings
from .math_tools import MathTools


class BarLoading:
    """Barbell loading helpers: per-side plates and warm-up ramps."""

    PLATES_KG: tuple[float, ...] = (25.0, 20.0, 15.0, 10.0, 5.0, 2.5, 1.25)
    BAR_WEIGHT_KG: float = 20.0
    INEXACT_TOLERANCE: float = 0.01
    WARMUP_ROUNDING: float = 2.5
    HEAVY_LADDER: tuple[int, ...] = (0, 40, 55, 70, 80, 90)
    MEDIUM_LADDER: tuple[int, ...] = (0, 50, 70, 85)
    LIGHT_LADDER: tuple[int, ...] = (0, 60, 80)

    @classmethod
    def bar_weight_for(
        cls, bar_weight: float | None, settings: EngineSettings | None
    ) -> float:
        if bar_weight is not None:
            return bar_weight
        return settings.bar_weight_kg if settings else cls.BAR_WEIGHT_KG

    @classmethod
    def plate_breakdown(
        cls,
        target_weight: float,
        bar_weight: float | None = None,
        plates: Sequence[float] | None = None,
        settings: EngineSettings | None = None,
    ) -> PlateBreakdown:
        """Greedy largest-first plates to load on each side of the bar.

        Bar and plate set come from the arguments, then ``settings``, then
        the class defaults.

        The remainder is rounded to 2 decimals after every subtraction so
        float drift never leaves a phantom ``0.0000001`` kg. A remainder
        above 0.01 kg marks the load as inexact.
        """
        bar_weight = cls.bar_weight_for(bar_weight, settings)
        if plates is None:
            plates = settings.plates_kg if settings else cls.PLATES_KG
        if target_weight <= bar_weight:
            return PlateBreakdown(
                per_side=0.0,
                plates=[],
                remaining=0.0,
                exact=target_weight == bar_weight,
            )
        available = sorted(plates, reverse=True)
        per_side = (target_weight - bar_weight) / 2
        remaining = per_side
        loaded: list[float] = []
        for plate in available:
            while remaining >= plate:
                loaded.append(plate)
                remaining = MathTools.round_half_up(remaining - plate, 2)
        if remaining > cls.INEXACT_TOLERANCE:
            return PlateBreakdown(
                per_side=per_side, plates=loaded, remaining=remaining, exact=False
            )
        return PlateBreakdown(per_side=per_side, plates=loaded, remaining=0.0, exact=True)

    @classmethod
    def warmup_ladder(cls, working_weight: float) -> tuple[int, ...]:
        if working_weight > 100:
            return cls.HEAVY_LADDER
        if working_weight > 60:
            return cls.MEDIUM_LADDER
        return cls.LIGHT_LADDER

    @staticmethod
    def _warmup_reps(percentage: int) -> int:
        if percentage == 0:
            return 10
        if percentage <= 50:
            return 8
        if percentage <= 70:
            return 5
        if percentage <= 85:
            return 3
        return 2

    @staticmethod
    def _warmup_rest(percentage: int) -> str:
        if percentage == 0:
            return "30s"
        if percentage <= 70:
            return "60s"
        return "90s"

    @classmethod
    def warmup_sets(
        cls,
        working_weight: float,
        bar_weight: float | None = None,
        settings: EngineSettings | None = None,
    ) -> list[WarmupSet]:
        """Return the warm-up ramp leading to ``working_weight``.

        The 0 % step is the empty bar; other steps snap to 2.5 kg.
        """
        bar_weight = cls.bar_weight_for(bar_weight, settings)
        if working_weight <= bar_weight:
            return []
        sets: list[WarmupSet] = []
        for idx, pct in enumerate(cls.warmup_ladder(working_weight), start=1):
            if pct == 0:
                weight = bar_weight
            else:
                weight = (
                    MathTools.round_half_up(working_weight * pct / 100 / cls.WARMUP_ROUNDING)
                    * cls.WARMUP_ROUNDING
                )
            sets.append(
                WarmupSet(
                    set_number=idx,
                    percentage=pct,
                    weight=weight,
                    reps=cls._warmup_reps(pct),
                    rest=cls._warmup_rest(pct),
                )
            )
        return sets

    @staticmethod
    def warmup_volume(sets: list[WarmupSet]) -> float:
        return MathTools.volume([(s.reps, s.weight) for s in sets])
