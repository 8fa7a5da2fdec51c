from __future__ import annotations
import datetime
import logging
import math
from typing import Iterable

from localization import translator
from schemas import (
    BestSet,
    ExerciseAlternative,
    ExerciseInfo,
    ExerciseLogEntry,
    ExerciseProgress,
    OverallProgressAnalysis,
    PlateauAnalysis,
    SessionSummary,
    StagnationAnalysis,
    StagnationSuggestion,
    VolumeChange,
)
from .math_tools import MathTools

logger = logging.getLogger(__name__)
_ = translator.gettext


class PlateauDetector:
    """Classify per-exercise trends and predict upcoming plateaus.

    ``weeks_since_progress`` counts consecutive non-increasing *session*
    steps from the most recent session backwards, not calendar weeks. The
    stalling/plateau thresholds are tuned against that step count.
    """

    MIN_HISTORY: int = 3
    RECENT_WINDOW: int = 8
    WEIGHT_THRESHOLD: float = 5.0
    VOLUME_THRESHOLD: float = 10.0
    PLATEAU_STEPS: int = 4
    STALL_STEPS: int = 2
    SLOW_GROWTH_PERCENT: float = 5.0
    HIGH_RISK_SHARE: float = 0.4
    MEDIUM_RISK_SHARE: float = 0.2
    IMPROVING_SHARE: float = 0.6
    DECLINING_SHARE: float = 0.3
    WEEKLY_WINDOW: int = 4

    SUGGESTED_CHANGES: dict[str, tuple[str, ...]] = {
        "progressing": (
            "Keep adding weight progressively",
            "Make sure you rest enough between sessions",
        ),
        "stalling": (
            "Add 1-2 reps before adding weight",
            "Consider changing the rep range",
            "Add an intensity technique (pauses, tempo)",
            "Review your execution technique",
        ),
        "plateaued": (
            "Temporarily swap in a variation of the exercise",
            "Run a deload week (50-60% volume)",
            "Change the rep range (e.g. from 8-12 to 6-8)",
            "Increase the weekly frequency for the muscle group",
            "Review your nutrition and sleep",
        ),
        "declining": (
            "Take 4-5 days off this exercise",
            "Cut total volume by 30%",
            "Improve sleep quality (7-9 hours)",
            "Eat more if you are in a deficit",
            "Consider a possible injury or accumulated fatigue",
        ),
    }
    RECOMMENDATIONS: dict[str, str] = {
        "progressing": "Great progress on {name}! Keep it up.",
        "stalling": "{name} shows signs of stalling. Act now.",
        "plateaued": "You are on a plateau in {name}. Changes needed.",
        "declining": "{name} is going backwards. Prioritize recovery.",
    }

    @staticmethod
    def _sorted_desc(history: Iterable[SessionSummary]) -> list[SessionSummary]:
        return sorted(history, key=lambda h: h.date, reverse=True)

    @classmethod
    def _recommendations(cls, status: str, exercise_name: str) -> tuple[str, list[str]]:
        text = _(cls.RECOMMENDATIONS[status]).format(name=exercise_name)
        return text, [_(c) for c in cls.SUGGESTED_CHANGES[status]]

    @staticmethod
    def weeks_since_progress(sorted_desc: list[SessionSummary]) -> int:
        """Count steps back from the latest session without a volume gain."""
        steps = 0
        for newer, older in zip(sorted_desc, sorted_desc[1:]):
            if newer.volume <= older.volume:
                steps += 1
            else:
                break
        return steps

    @classmethod
    def classify(cls, weight_change: float, volume_change: float, weeks: int) -> str:
        if weight_change > cls.WEIGHT_THRESHOLD or volume_change > cls.VOLUME_THRESHOLD:
            return "progressing"
        if weight_change < -cls.WEIGHT_THRESHOLD or volume_change < -cls.VOLUME_THRESHOLD:
            return "declining"
        if weeks >= cls.PLATEAU_STEPS:
            return "plateaued"
        if weeks >= cls.STALL_STEPS:
            return "stalling"
        return "progressing"

    @classmethod
    def analyze_exercise_progress(
        cls,
        exercise_id: str,
        history: list[SessionSummary],
        exercise_name: str | None = None,
    ) -> PlateauAnalysis:
        """Return the plateau analysis for one exercise's session history."""
        name = exercise_name or exercise_id
        if len(history) < cls.MIN_HISTORY:
            return PlateauAnalysis(
                exercise_id=exercise_id,
                exercise_name=name,
                status="progressing",
                weeks_since_progress=0,
                trend_percent=0.0,
                recommendation=_("You need more data to analyze your progress"),
                suggested_changes=[_("Keep training and logging your sets")],
                confidence=0.0,
            )

        ordered = cls._sorted_desc(history)
        best = max(ordered, key=lambda h: h.weight)
        personal_record = BestSet(weight=best.weight, reps=best.reps, date=best.date)

        cut = min(cls.RECENT_WINDOW, len(ordered))
        recent, old = ordered[:cut], ordered[cut:]
        recent_volume = MathTools.average(h.volume for h in recent)
        recent_weight = MathTools.average(h.weight for h in recent)
        old_volume = MathTools.average(h.volume for h in old) if old else recent_volume
        old_weight = MathTools.average(h.weight for h in old) if old else recent_weight
        volume_change = MathTools.percent_change(recent_volume, old_volume)
        weight_change = MathTools.percent_change(recent_weight, old_weight)

        weeks = cls.weeks_since_progress(ordered)
        status = cls.classify(weight_change, volume_change, weeks)

        predicted: int | None = None
        if status == "progressing" and 0 < volume_change < cls.SLOW_GROWTH_PERCENT:
            predicted = MathTools.round_half_up(4 - volume_change / 2)
        elif status == "stalling":
            predicted = 1

        recommendation, changes = cls._recommendations(status, name)
        logger.debug(
            "%s: %s (volume %+.1f%%, weight %+.1f%%, %d flat steps)",
            name, status, volume_change, weight_change, weeks,
        )
        return PlateauAnalysis(
            exercise_id=exercise_id,
            exercise_name=name,
            status=status,
            weeks_since_progress=weeks,
            trend_percent=volume_change,
            weight_change_percent=weight_change,
            predicted_plateau_in_weeks=predicted,
            recommendation=recommendation,
            suggested_changes=changes,
            personal_record=personal_record,
            confidence=round(min(len(history) / cls.RECENT_WINDOW, 1.0), 2),
        )

    @classmethod
    def weekly_volume_change(cls, exercises: list[ExerciseProgress]) -> float:
        """Compare summed volume of the latest 4 sessions with the 4 before."""
        recent_total = 0.0
        old_total = 0.0
        w = cls.WEEKLY_WINDOW
        for ep in exercises:
            ordered = cls._sorted_desc(ep.history)
            recent_total += sum(h.volume for h in ordered[:w])
            old_total += sum(h.volume for h in ordered[w : 2 * w])
        return MathTools.percent_change(recent_total, old_total)

    @classmethod
    def analyze_overall_progress(
        cls, exercises: list[ExerciseProgress]
    ) -> OverallProgressAnalysis:
        analyses = [
            cls.analyze_exercise_progress(ep.exercise_id, ep.history, ep.exercise_name)
            for ep in exercises
        ]
        counts = {"progressing": 0, "stalling": 0, "plateaued": 0, "declining": 0}
        for a in analyses:
            counts[a.status] += 1
        total = len(analyses)

        if counts["progressing"] > total * cls.IMPROVING_SHARE:
            trend = "improving"
        elif counts["declining"] > total * cls.DECLINING_SHARE:
            trend = "declining"
        else:
            trend = "maintaining"

        at_risk_count = counts["stalling"] + counts["plateaued"]
        if at_risk_count > total * cls.HIGH_RISK_SHARE:
            risk = "high"
        elif at_risk_count > total * cls.MEDIUM_RISK_SHARE:
            risk = "medium"
        else:
            risk = "low"

        at_risk = [
            a
            for a in analyses
            if a.status in ("stalling", "plateaued") or a.predicted_plateau_in_weeks
        ]
        return OverallProgressAnalysis(
            plateau_risk=risk,
            exercises_at_risk=at_risk,
            overall_trend=trend,
            recommendations=cls.overall_recommendations(risk, trend, at_risk),
            weekly_volume_change=cls.weekly_volume_change(exercises),
        )

    @staticmethod
    def overall_recommendations(
        risk: str, trend: str, at_risk: list[PlateauAnalysis]
    ) -> list[str]:
        recs: list[str] = []
        if risk == "high":
            recs.append(_("High plateau risk - consider a deload week"))
            recs.append(_("Review your training plan with the routine generator"))
        if trend == "declining":
            recs.append(_("Progress is declining - prioritize rest and recovery"))
            recs.append(_("Get 7-9 hours of quality sleep"))
            recs.append(_("Review your calorie and protein intake"))
        if at_risk:
            names = ", ".join(a.exercise_name for a in at_risk[:3])
            recs.append(_("Focus on improving: {names}").format(names=names))
        if trend == "improving" and risk == "low":
            recs.append(_("Excellent progress! Stay consistent"))
            recs.append(_("Consider raising the intensity slightly"))
        if not recs:
            recs.append(_("Continue with your current plan and monitor your progress"))
        return recs


class StagnationDetector:
    """Calendar-based stagnation check on session max weights."""

    MIN_LOGS: int = 4
    TREND_WINDOW: int = 3
    TREND_PERCENT: float = 2.0
    ALTERNATIVES: int = 3

    @staticmethod
    def _as_utc(ts: datetime.datetime) -> datetime.datetime:
        if ts.tzinfo is None:
            return ts.replace(tzinfo=datetime.timezone.utc)
        return ts.astimezone(datetime.timezone.utc)

    @classmethod
    def session_max_weights(
        cls, logs: list[ExerciseLogEntry]
    ) -> list[tuple[datetime.datetime, float]]:
        """Max weight per session, oldest first; dated by its first log."""
        sessions: dict[str | None, list] = {}
        for log in logs:
            weight = log.weight_kg or 0
            if weight <= 0 or log.created_at is None:
                continue
            entry = sessions.get(log.workout_session_id)
            if entry is None:
                sessions[log.workout_session_id] = [cls._as_utc(log.created_at), weight]
            else:
                entry[1] = max(entry[1], weight)
        return sorted(((d, w) for d, w in sessions.values()), key=lambda s: s[0])

    @staticmethod
    def weeks_since_progress(
        session_maxes: list[tuple[datetime.datetime, float]], now: datetime.datetime
    ) -> int:
        if len(session_maxes) < 2:
            return 0
        latest = session_maxes[-1][1]
        since = session_maxes[0][0]
        for i in range(len(session_maxes) - 2, -1, -1):
            if session_maxes[i][1] < latest:
                since = session_maxes[i + 1][0]
                break
        elapsed = StagnationDetector._as_utc(now) - since
        return math.floor(elapsed.total_seconds() / (7 * 24 * 3600))

    @classmethod
    def trend(cls, session_maxes: list[tuple[datetime.datetime, float]]) -> str:
        if len(session_maxes) < cls.TREND_WINDOW:
            return "stable"
        recent = session_maxes[-cls.TREND_WINDOW:]
        change = MathTools.percent_change(recent[-1][1], recent[0][1])
        if change >= cls.TREND_PERCENT:
            return "improving"
        if change <= -cls.TREND_PERCENT:
            return "declining"
        return "stable"

    @staticmethod
    def suggestion(weeks: int, trend: str, session_count: int) -> StagnationSuggestion | None:
        if weeks < 2:
            return None
        if trend == "declining":
            return StagnationSuggestion(
                type="deload",
                title=_("Deload week recommended"),
                description=_(
                    "Your performance dropped. A week at 60% intensity can help you recover."
                ),
                action_label=_("Schedule deload"),
                priority="high",
            )
        if weeks >= 4:
            return StagnationSuggestion(
                type="change_exercise",
                title=_("Change exercise"),
                description=_(
                    "4+ weeks without progress. Changing the exercise can trigger new gains."
                ),
                action_label=_("See alternatives"),
                priority="high",
            )
        if session_count >= 4:
            return StagnationSuggestion(
                type="increase_volume",
                title=_("Increase volume"),
                description=_("Add 1-2 extra sets for 2 weeks to break the stall."),
                action_label=_("Apply change"),
                priority="medium",
            )
        return StagnationSuggestion(
            type="increase_intensity",
            title=_("Intensify training"),
            description=_("Try intensity techniques such as drop sets or rest-pause."),
            action_label=_("See techniques"),
            priority="low",
        )

    @classmethod
    def analyze_exercise_stagnation(
        cls,
        exercise_id: str,
        exercise_name: str,
        logs: list[ExerciseLogEntry],
        now: datetime.datetime,
    ) -> StagnationAnalysis:
        if len(logs) < cls.MIN_LOGS:
            return StagnationAnalysis(
                exercise_id=exercise_id,
                exercise_name=exercise_name,
                is_stagnant=False,
                weeks_since_progress=0,
                current_weight=(logs[-1].weight_kg or 0) if logs else 0,
                max_weight=max((log.weight_kg or 0 for log in logs), default=0),
                trend="stable",
                confidence="low",
            )
        maxes = cls.session_max_weights(logs)
        weeks = cls.weeks_since_progress(maxes, now)
        trend = cls.trend(maxes)
        if len(maxes) >= 8:
            confidence = "high"
        elif len(maxes) >= 5:
            confidence = "medium"
        else:
            confidence = "low"
        return StagnationAnalysis(
            exercise_id=exercise_id,
            exercise_name=exercise_name,
            is_stagnant=weeks >= 2 or trend == "declining",
            weeks_since_progress=weeks,
            current_weight=maxes[-1][1] if maxes else 0,
            max_weight=max((w for _d, w in maxes), default=0),
            suggestion=cls.suggestion(weeks, trend, len(maxes)),
            trend=trend,
            confidence=confidence,
        )

    @classmethod
    def find_alternative_exercises(
        cls,
        current_exercise_id: str,
        current_muscle: str,
        all_exercises: list[ExerciseInfo],
        exclude_ids: Iterable[str] = (),
    ) -> list[ExerciseAlternative]:
        excluded = {current_exercise_id, *exclude_ids}
        matches = [
            e for e in all_exercises
            if e.primary_muscle == current_muscle and e.id not in excluded
        ]
        return [
            ExerciseAlternative(
                id=e.id,
                name=e.name,
                name_es=e.name_es,
                primary_muscle=current_muscle,
                reason=_("Same muscle group ({muscle})").format(muscle=current_muscle),
            )
            for e in matches[: cls.ALTERNATIVES]
        ]

    @staticmethod
    def suggest_volume_change(
        current_sets: int, reps_min: int, reps_max: int, stagnation_weeks: int
    ) -> VolumeChange:
        if stagnation_weeks >= 3:
            return VolumeChange(
                sets=min(current_sets + 2, 6),
                reps_min=reps_min,
                reps_max=reps_max + 2,
                change=_("+2 sets, +2 max reps"),
            )
        if stagnation_weeks >= 2:
            return VolumeChange(
                sets=min(current_sets + 1, 5),
                reps_min=reps_min,
                reps_max=reps_max,
                change=_("+1 set"),
            )
        return VolumeChange(
            sets=current_sets, reps_min=reps_min, reps_max=reps_max, change=_("No changes")
        )
