from __future__ import annotations
import datetime
import logging
from typing import Dict, List, Optional

import pandas as pd

from algorithms.exercise_progression import ExerciseProgression
from algorithms.math_tools import MathTools
from algorithms.plateau_detector import PlateauDetector
from localization import translator
from schemas import (
    ExerciseInfo,
    ExerciseLogEntry,
    ExerciseProgress,
    MuscleVolume,
    OverallProgressAnalysis,
    PersonalRecord,
    ProgressionSuggestion,
    SessionSummary,
    WeeklyVolume,
    WorkoutSession,
)

logger = logging.getLogger(__name__)
_ = translator.gettext


class StatisticsService:
    """Aggregate raw set logs into per-session summaries and statistics."""

    RECOMMENDED_SETS: Dict[str, tuple[int, int]] = {
        "chest": (10, 20),
        "back": (10, 20),
        "shoulders": (8, 16),
        "biceps": (8, 14),
        "triceps": (8, 14),
        "quadriceps": (10, 20),
        "hamstrings": (8, 16),
        "glutes": (8, 16),
        "calves": (8, 16),
        "core": (6, 12),
    }
    DEFAULT_RECOMMENDED_SETS: tuple[int, int] = (8, 16)
    SECONDARY_CREDIT: float = 0.5

    def __init__(self, exercises: Optional[List[ExerciseInfo]] = None) -> None:
        self.exercises: Dict[str, ExerciseInfo] = {e.id: e for e in exercises or []}

    def exercise_name(self, exercise_id: str) -> str:
        info = self.exercises.get(exercise_id)
        return info.display_name if info else _("Exercise")

    @staticmethod
    def _session_dates(
        sessions: Optional[List[WorkoutSession]],
    ) -> Dict[str, datetime.date]:
        return {s.id: s.date for s in sessions or []}

    @staticmethod
    def _log_date(
        log: ExerciseLogEntry, dates: Dict[str, datetime.date]
    ) -> Optional[datetime.date]:
        if log.workout_session_id in dates:
            return dates[log.workout_session_id]
        if log.created_at is not None:
            return log.created_at.date()
        return None

    def _working_frame(
        self,
        logs: List[ExerciseLogEntry],
        sessions: Optional[List[WorkoutSession]] = None,
    ) -> pd.DataFrame:
        """One row per dated working set."""
        dates = self._session_dates(sessions)
        rows = []
        skipped = 0
        for log in logs:
            if log.is_warmup:
                continue
            date = self._log_date(log, dates)
            if date is None or log.exercise_id is None:
                skipped += 1
                continue
            rows.append(
                {
                    "exercise_id": log.exercise_id,
                    "session": log.workout_session_id or date.isoformat(),
                    "date": date,
                    "weight": float(log.weight_kg or 0),
                    "reps": int(log.reps_completed or 0),
                }
            )
        if skipped:
            logger.warning("skipped %d logs without exercise or date", skipped)
        return pd.DataFrame(rows, columns=["exercise_id", "session", "date", "weight", "reps"])

    def session_summaries(
        self,
        logs: List[ExerciseLogEntry],
        sessions: Optional[List[WorkoutSession]] = None,
    ) -> Dict[str, List[SessionSummary]]:
        """Best working set per (exercise, session), oldest session first.

        The best set is the heaviest one; ties go to the set with more reps.
        Sessions whose working sets carry no weight are dropped.
        """
        df = self._working_frame(logs, sessions)
        if df.empty:
            return {}
        df = df.sort_values(
            ["exercise_id", "session", "weight", "reps"],
            ascending=[True, True, False, False],
            kind="mergesort",
        )
        best = (
            df.groupby(["exercise_id", "session"], sort=False)
            .agg(
                date=("date", "first"),
                weight=("weight", "first"),
                reps=("reps", "first"),
                sets=("weight", "count"),
            )
            .reset_index()
        )
        best = best[best["weight"] > 0].sort_values(["date", "session"], kind="mergesort")

        summaries: Dict[str, List[SessionSummary]] = {}
        for row in best.itertuples(index=False):
            weight = float(row.weight)
            reps = int(row.reps)
            sets = int(row.sets)
            summaries.setdefault(row.exercise_id, []).append(
                SessionSummary(
                    date=row.date,
                    weight=weight,
                    reps=reps,
                    sets=sets,
                    volume=weight * reps * sets,
                    session_id=row.session,
                )
            )
        return summaries

    def exercise_progress(
        self,
        logs: List[ExerciseLogEntry],
        sessions: Optional[List[WorkoutSession]] = None,
        min_sessions: int = PlateauDetector.MIN_HISTORY,
    ) -> List[ExerciseProgress]:
        """Session histories for exercises with at least ``min_sessions``."""
        return [
            ExerciseProgress(
                exercise_id=exercise_id,
                exercise_name=self.exercise_name(exercise_id),
                history=history,
            )
            for exercise_id, history in self.session_summaries(logs, sessions).items()
            if len(history) >= min_sessions
        ]

    def plateau_analysis(
        self,
        logs: List[ExerciseLogEntry],
        sessions: Optional[List[WorkoutSession]] = None,
    ) -> Optional[OverallProgressAnalysis]:
        progress = self.exercise_progress(logs, sessions)
        if not progress:
            return None
        return PlateauDetector.analyze_overall_progress(progress)

    def personal_records(
        self,
        logs: List[ExerciseLogEntry],
        sessions: Optional[List[WorkoutSession]] = None,
    ) -> List[PersonalRecord]:
        """Return the best set for each exercise based on estimated 1RM."""
        dates = self._session_dates(sessions)
        records: Dict[str, PersonalRecord] = {}
        for log in logs:
            if log.is_warmup or log.exercise_id is None:
                continue
            weight = log.weight_kg or 0
            reps = log.reps_completed or 0
            if weight <= 0 or reps <= 0:
                continue
            est = MathTools.one_rep_max(weight, reps)
            current = records.get(log.exercise_id)
            if current is None or est > current.estimated_1rm:
                date = self._log_date(log, dates)
                records[log.exercise_id] = PersonalRecord(
                    exercise_id=log.exercise_id,
                    exercise_name=self.exercise_name(log.exercise_id),
                    weight=weight,
                    reps=reps,
                    estimated_1rm=round(est, 2),
                    date=date.isoformat() if date else None,
                )
        return sorted(records.values(), key=lambda r: r.exercise_name or "")

    @classmethod
    def volume_status(cls, muscle: str, sets: float) -> str:
        low, high = cls.RECOMMENDED_SETS.get(muscle, cls.DEFAULT_RECOMMENDED_SETS)
        if sets < low:
            return "low"
        if sets > high:
            return "high"
        return "optimal"

    def weekly_volume(
        self,
        logs: List[ExerciseLogEntry],
        sessions: List[WorkoutSession],
        week_of: datetime.date,
    ) -> WeeklyVolume:
        """Working sets per muscle for the Monday-Sunday week of ``week_of``.

        The primary muscle gets a full set and each secondary muscle half.
        """
        start = week_of - datetime.timedelta(days=week_of.weekday())
        end = start + datetime.timedelta(days=6)
        dates = self._session_dates(sessions)
        totals: Dict[str, list[float]] = {}
        for log in logs:
            if log.is_warmup:
                continue
            date = dates.get(log.workout_session_id or "")
            if date is None or not start <= date <= end:
                continue
            info = self.exercises.get(log.exercise_id or "")
            if info is None:
                continue
            volume = (log.weight_kg or 0) * (log.reps_completed or 0)
            if info.primary_muscle:
                item = totals.setdefault(info.primary_muscle, [0.0, 0.0])
                item[0] += 1
                item[1] += volume
            for muscle in info.secondary_muscles:
                item = totals.setdefault(muscle, [0.0, 0.0])
                item[0] += self.SECONDARY_CREDIT
                item[1] += volume * self.SECONDARY_CREDIT

        muscles = [
            MuscleVolume(
                muscle=muscle,
                sets=MathTools.round_half_up(sets),
                volume=MathTools.round_half_up(volume),
                status=self.volume_status(muscle, MathTools.round_half_up(sets)),
            )
            for muscle, (sets, volume) in totals.items()
        ]
        muscles.sort(key=lambda m: m.sets, reverse=True)
        return WeeklyVolume(
            muscle_volumes=muscles,
            total_sets=sum(m.sets for m in muscles),
            total_volume=sum(m.volume for m in muscles),
            week_start=start,
            week_end=end,
        )

    @staticmethod
    def last_two_sessions(
        exercise_id: str,
        logs: List[ExerciseLogEntry],
        sessions: List[WorkoutSession],
    ) -> tuple[List[ExerciseLogEntry], List[ExerciseLogEntry]]:
        """Logs of the two most recent completed sessions with this exercise."""
        completed = sorted(
            (s for s in sessions if s.completed_at is not None),
            key=lambda s: (s.date, s.completed_at),
            reverse=True,
        )
        found: List[List[ExerciseLogEntry]] = []
        for session in completed:
            session_logs = [
                log for log in logs
                if log.workout_session_id == session.id and log.exercise_id == exercise_id
            ]
            if session_logs:
                found.append(sorted(session_logs, key=lambda log: log.set_number))
            if len(found) == 2:
                break
        last = found[0] if found else []
        previous = found[1] if len(found) > 1 else []
        return last, previous

    def progression_suggestion(
        self,
        exercise_id: str,
        target_reps_min: int,
        target_reps_max: int,
        target_sets: int,
        logs: List[ExerciseLogEntry],
        sessions: List[WorkoutSession],
    ) -> ProgressionSuggestion:
        """Run the progression decision on the exercise's latest sessions."""
        last, previous = self.last_two_sessions(exercise_id, logs, sessions)
        info = self.exercises.get(exercise_id)
        return ExerciseProgression.progression_decision(
            info.name if info else "",
            target_reps_min,
            target_reps_max,
            target_sets,
            last,
            previous or None,
        )
