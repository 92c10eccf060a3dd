"""Exercise history - previous performances, trends and personal records by exercise name."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.constants import SECONDS_PER_DAY
from app.db.session import get_db
from app.schemas.history import ExerciseHistoryRead, StartingSuggestionRead
from app.services import history as history_store
from app.services.progression import format_previous_performance

router = APIRouter()


@router.get("/{exercise_name}", response_model=list[ExerciseHistoryRead])
async def previous_performances(
    exercise_name: str,
    limit: int | None = Query(None, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    """Most recent snapshots for this exercise, newest first."""
    rows = await history_store.previous_performances(
        db, exercise_name, limit=limit or get_settings().previous_performance_limit
    )
    return [ExerciseHistoryRead.from_history(h) for h in rows]


@router.get("/{exercise_name}/last", response_model=ExerciseHistoryRead | None)
async def last_performance(
    exercise_name: str,
    db: AsyncSession = Depends(get_db),
):
    """The last time this exercise was done, or null."""
    h = await history_store.last_performance(db, exercise_name)
    return ExerciseHistoryRead.from_history(h) if h else None


@router.get("/{exercise_name}/trend", response_model=list[ExerciseHistoryRead])
async def progress_trend(
    exercise_name: str,
    days: int | None = Query(None, ge=1, le=3650),
    db: AsyncSession = Depends(get_db),
):
    """Snapshots in the trailing window (default 90 days), oldest first."""
    window_days = days or get_settings().progress_trend_days
    rows = await history_store.progress_trend(
        db, exercise_name, window_seconds=window_days * SECONDS_PER_DAY
    )
    return [ExerciseHistoryRead.from_history(h) for h in rows]


@router.get("/{exercise_name}/personal-record", response_model=ExerciseHistoryRead | None)
async def personal_record(
    exercise_name: str,
    db: AsyncSession = Depends(get_db),
):
    """The snapshot holding the highest-volume single set ever, or null."""
    h = await history_store.personal_record(db, exercise_name)
    return ExerciseHistoryRead.from_history(h) if h else None


@router.get("/{exercise_name}/suggestion", response_model=StartingSuggestionRead)
async def starting_suggestion(
    exercise_name: str,
    db: AsyncSession = Depends(get_db),
):
    """Weight and reps to start from next time (best set of the last performance)."""
    last = await history_store.last_performance(db, exercise_name)
    return StartingSuggestionRead(
        exercise_name=exercise_name,
        weight=await history_store.suggested_starting_weight(db, exercise_name),
        reps=await history_store.suggested_starting_reps(db, exercise_name),
        previous_best=format_previous_performance(last) if last is not None else None,
    )
