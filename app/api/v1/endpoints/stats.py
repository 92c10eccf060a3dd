"""Dashboard statistics: streaks, weekly/monthly counts and range summaries."""

from datetime import date, datetime, time, timedelta, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.enums import StatsRange
from app.core.timeutils import local_today
from app.db.session import get_db
from app.models.workout import Workout
from app.schemas.stats import MuscleGroupCount, StatsSummaryRead, StreakRead
from app.services.aggregation import (
    completed_in_range,
    current_streak,
    format_duration,
    last_workout_date,
    longest_streak,
    muscle_group_breakdown,
    range_start,
    summarize,
    workouts_this_month,
    workouts_this_week,
)

router = APIRouter()

# Limit scan to last ~14 months so the query stays fast with large history
STREAK_LOOKBACK_DAYS = 430


async def _completed_workouts(db: AsyncSession, since: date | None = None) -> list[Workout]:
    stmt = select(Workout).where(Workout.is_completed.is_(True))
    if since is not None:
        # One extra day of slack: stored instants are UTC, days are local
        cutoff = datetime.combine(since - timedelta(days=1), time.min, tzinfo=timezone.utc)
        stmt = stmt.where(Workout.date >= cutoff)
    result = await db.execute(stmt.order_by(Workout.date.desc()))
    return list(result.scalars().all())


@router.get("/streak", response_model=StreakRead)
async def get_streak(db: AsyncSession = Depends(get_db)):
    """
    Current streak (consecutive days with a completed workout, today or
    yesterday counting as current), longest streak in the lookback window,
    last workout date, and this week's / month's workout counts.
    """
    today = local_today()
    workouts = await _completed_workouts(db, today - timedelta(days=STREAK_LOOKBACK_DAYS))
    return StreakRead(
        current_streak=current_streak(workouts, today),
        longest_streak=longest_streak(workouts),
        last_workout_date=last_workout_date(workouts),
        workouts_this_week=workouts_this_week(workouts, today, get_settings().first_weekday),
        workouts_this_month=workouts_this_month(workouts, today),
    )


@router.get("/summary", response_model=StatsSummaryRead)
async def get_summary(
    range: StatsRange = StatsRange.WEEK,
    db: AsyncSession = Depends(get_db),
):
    """Totals, averages and muscle-group breakdown for this week, month, year or all time."""
    today = local_today()
    first_weekday = get_settings().first_weekday
    start = range_start(range, today, first_weekday)
    workouts = completed_in_range(await _completed_workouts(db, start), range, today, first_weekday)
    summary = summarize(workouts)
    return StatsSummaryRead(
        range=range,
        from_date=start,
        workout_count=summary.workout_count,
        total_volume=summary.total_volume,
        total_sets=summary.total_sets,
        total_duration=summary.total_duration,
        total_work_time=summary.total_work_time,
        average_duration=summary.average_duration,
        average_exercises=summary.average_exercises,
        average_sets=summary.average_sets,
        formatted_total_duration=format_duration(summary.total_duration),
        muscle_groups=[
            MuscleGroupCount(muscle_group=group, count=count)
            for group, count in muscle_group_breakdown(workouts)
        ],
    )
