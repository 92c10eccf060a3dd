"""Exercise history store: per-workout snapshots and the lookups built on them.

Snapshots are keyed by exact exercise name, so "Bench Press" and
"bench press" are different histories.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import DEFAULT_PREVIOUS_PERFORMANCE_LIMIT, DEFAULT_TREND_WINDOW_SECONDS
from app.core.timeutils import as_utc, utcnow
from app.models.history import ExerciseHistory
from app.models.workout import Exercise, Workout
from app.schemas.history import HistoricalSet


def build_snapshot(exercise: Exercise, workout: Workout) -> ExerciseHistory:
    """Freeze the exercise's current sets (in set order) into a history row."""
    historical_sets = [
        HistoricalSet(weight=s.weight or 0.0, reps=s.reps or 0, is_completed=bool(s.is_completed))
        for s in exercise.sorted_sets
    ]
    return ExerciseHistory(
        exercise_name=exercise.name,
        workout_date=workout.date,
        workout=workout,
        sets=historical_sets,
    )


def record_snapshot(db: AsyncSession, exercise: Exercise, workout: Workout) -> ExerciseHistory:
    """
    Add one snapshot for ``exercise`` to the session.

    Nothing is flushed or committed here: the row persists together with the
    workout's completion, or not at all.
    """
    history = build_snapshot(exercise, workout)
    db.add(history)
    return history


def record_workout_snapshots(db: AsyncSession, workout: Workout) -> list[ExerciseHistory]:
    return [record_snapshot(db, exercise, workout) for exercise in workout.sorted_exercises]


async def previous_performances(
    db: AsyncSession,
    exercise_name: str,
    limit: int = DEFAULT_PREVIOUS_PERFORMANCE_LIMIT,
) -> list[ExerciseHistory]:
    """Up to ``limit`` snapshots for this exercise, newest workout first."""
    result = await db.execute(
        select(ExerciseHistory)
        .where(ExerciseHistory.exercise_name == exercise_name)
        .order_by(ExerciseHistory.workout_date.desc())
        .limit(limit)
    )
    return list(result.scalars().all())


async def last_performance(db: AsyncSession, exercise_name: str) -> ExerciseHistory | None:
    rows = await previous_performances(db, exercise_name, limit=1)
    return rows[0] if rows else None


async def progress_trend(
    db: AsyncSession,
    exercise_name: str,
    window_seconds: float = DEFAULT_TREND_WINDOW_SECONDS,
    now: datetime | None = None,
) -> list[ExerciseHistory]:
    """Snapshots within the trailing window (default 90 days), oldest first."""
    since = as_utc(now or utcnow()) - timedelta(seconds=window_seconds)
    result = await db.execute(
        select(ExerciseHistory)
        .where(
            ExerciseHistory.exercise_name == exercise_name,
            ExerciseHistory.workout_date >= since,
        )
        .order_by(ExerciseHistory.workout_date.asc())
    )
    return list(result.scalars().all())


async def personal_record(db: AsyncSession, exercise_name: str) -> ExerciseHistory | None:
    """
    Snapshot whose best set has the highest volume. A tie keeps the first one
    encountered (oldest workout). Rows with no sets count as volume 0.
    """
    result = await db.execute(
        select(ExerciseHistory)
        .where(ExerciseHistory.exercise_name == exercise_name)
        .order_by(ExerciseHistory.workout_date.asc())
    )
    rows = list(result.scalars().all())
    if not rows:
        return None
    return max(rows, key=_best_set_volume)


def _best_set_volume(history: ExerciseHistory) -> float:
    best = history.best_set
    return best.volume if best is not None else 0.0


async def suggested_starting_weight(db: AsyncSession, exercise_name: str) -> float | None:
    last = await last_performance(db, exercise_name)
    best = last.best_set if last is not None else None
    return best.weight if best is not None else None


async def suggested_starting_reps(db: AsyncSession, exercise_name: str) -> int | None:
    last = await last_performance(db, exercise_name)
    best = last.best_set if last is not None else None
    return best.reps if best is not None else None
