import math
import datetime
from typing import Iterable

import numpy as np

from schemas import OneRMRow, PersonalRecord


class MathTools:
    """Provides essential mathematical utilities for workout calculations."""

    BRZYCKI_NUMERATOR: float = 36.0
    BRZYCKI_DENOMINATOR: float = 37.0
    BRZYCKI_MAX_REPS: int = 12
    LINEAR_REP_DIVISOR: float = 30.0
    ONE_RM_PERCENTAGES: tuple[int, ...] = (100, 95, 90, 85, 80, 75, 70, 65, 60)
    ONE_RM_REPS: tuple[int, ...] = (1, 2, 3, 5, 6, 8, 10, 12, 15)
    DAYS_PER_YEAR: float = 365.25

    @staticmethod
    def clamp(value: float, min_value: float, max_value: float) -> float:
        """Clamp ``value`` to the inclusive range [min_value, max_value]."""
        if min_value > max_value:
            raise ValueError("min_value must not exceed max_value")
        return max(min_value, min(value, max_value))

    @staticmethod
    def round_half_up(value: float, ndigits: int = 0) -> float:
        """Round with halves going up (``2.5 -> 3``, ``-2.5 -> -2``).

        Python's ``round`` uses banker's rounding which would turn
        ``112.5`` into ``112``; every displayed figure here rounds half up.
        """
        if ndigits == 0:
            return int(math.floor(value + 0.5))
        factor = 10**ndigits
        return math.floor(value * factor + 0.5) / factor

    @staticmethod
    def format_number(value: float) -> str:
        """Render ``value`` without a trailing ``.0``."""
        return f"{value:g}"

    @staticmethod
    def average(values: Iterable[float]) -> float:
        data = list(values)
        if not data:
            return 0.0
        return float(np.mean(np.array(data, dtype=float)))

    @staticmethod
    def percent_change(recent: float, previous: float) -> float:
        """Relative change in percent; 0.0 when ``previous`` is not positive."""
        if previous <= 0:
            return 0.0
        return (recent - previous) / previous * 100

    @staticmethod
    def volume(sets: list[tuple[int, float]]) -> float:
        """Compute training volume as the sum of reps times weight."""
        vol = 0.0
        for reps, weight in sets:
            vol += reps * weight
        return vol

    @classmethod
    def one_rep_max(cls, weight: float, reps: int) -> float:
        """Return the estimated one-rep max using the Brzycki formula.

        Single reps return ``weight`` unchanged. Above 12 reps Brzycki
        degrades so a linear ``weight * (1 + reps / 30)`` estimate is used
        instead; that branch is not rounded. Non-positive input yields 0.
        """
        if weight <= 0 or reps <= 0:
            return 0
        if reps == 1:
            return weight
        if reps > cls.BRZYCKI_MAX_REPS:
            return weight * (1 + reps / cls.LINEAR_REP_DIVISOR)
        return cls.round_half_up(
            weight * (cls.BRZYCKI_NUMERATOR / (cls.BRZYCKI_DENOMINATOR - reps))
        )

    @classmethod
    def is_pr(
        cls,
        new_weight: float,
        new_reps: int,
        current_best: PersonalRecord | None,
    ) -> bool:
        """Return ``True`` when the set beats ``current_best`` strictly."""
        if new_weight <= 0 or new_reps <= 0:
            return False
        if current_best is None:
            return True
        return cls.one_rep_max(new_weight, new_reps) > current_best.estimated_1rm

    @classmethod
    def one_rm_table(cls, weight: float, reps: int) -> list[OneRMRow]:
        """Return training loads at common percentages of the estimated 1RM."""
        if weight <= 0 or reps <= 0:
            return []
        orm = cls.one_rep_max(weight, reps)
        return [
            OneRMRow(
                percentage=pct,
                weight=cls.round_half_up(orm * pct / 100 * 2) / 2,
                reps=est_reps,
            )
            for pct, est_reps in zip(cls.ONE_RM_PERCENTAGES, cls.ONE_RM_REPS)
        ]

    @staticmethod
    def bmi(weight_kg: float, height_cm: float) -> float:
        """Body mass index; 0.0 when either input is not positive."""
        if weight_kg <= 0 or height_cm <= 0:
            return 0.0
        height_m = height_cm / 100
        return weight_kg / (height_m * height_m)

    @classmethod
    def age_from_birth_date(
        cls, birth_date: datetime.date | None, today: datetime.date, default: int = 25
    ) -> int:
        if birth_date is None:
            return default
        days = (today - birth_date).days
        if days < 0:
            return default
        return int(math.floor(days / cls.DAYS_PER_YEAR))
