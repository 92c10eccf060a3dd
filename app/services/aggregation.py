"""Workout aggregation: volume, set counts, elapsed/work time, streaks and summary stats.

Everything here is a pure, read-only function over already-loaded workouts.
Nothing mutates the workout or touches the database, so dashboards can call
these as often as they like. ``now`` / ``today`` are injectable for tests;
they default to the current UTC instant and the device-local date.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from app.core.constants import ELAPSED_TIME_CAP_SECONDS
from app.core.enums import StatsRange
from app.core.timeutils import local_date, local_today, seconds_between, utcnow
from app.models.workout import Workout


def total_volume(workout: Workout) -> float:
    """Sum of reps × weight over every set, completed or not."""
    return sum(s.volume for e in workout.exercises for s in e.sets)


def total_sets(workout: Workout) -> int:
    return sum(len(e.sets) for e in workout.exercises)


def elapsed_time(
    workout: Workout,
    now: datetime | None = None,
    cap_seconds: float = ELAPSED_TIME_CAP_SECONDS,
) -> float:
    """Seconds since the session started, clamped to ``cap_seconds``.

    The cap keeps a session left open overnight from reporting a 14-hour
    workout; it does not end the session.
    """
    elapsed = seconds_between(workout.start_date, now or utcnow())
    return min(max(elapsed, 0.0), cap_seconds)


def total_work_time(workout: Workout, now: datetime | None = None) -> float:
    """Committed set work time plus any open set timers (not committed)."""
    now = now or utcnow()
    return sum(s.current_work_time(now) for e in workout.exercises for s in e.sets)


def format_duration(seconds: float) -> str:
    hours = int(seconds) // 3600
    minutes = int(seconds) // 60 % 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes} min"


def formatted_duration(workout: Workout) -> str:
    """``"1h 12m"``, or ``"12 min"`` when under an hour."""
    return format_duration(workout.duration or 0)


# ---------------------------------------------------------------------------
# Calendar counts
# ---------------------------------------------------------------------------


def _completed_days(workouts: Iterable[Workout]) -> set[date]:
    return {local_date(w.date) for w in workouts if w.is_completed and w.date is not None}


def current_streak(workouts: Iterable[Workout], today: date | None = None) -> int:
    """Consecutive local calendar days, ending today, with a completed workout.

    If today has none yet, yesterday is checked once: a workout yesterday keeps
    the streak alive at yesterday's count, otherwise the streak is 0.
    """
    days = _completed_days(workouts)
    day = today or local_today()
    if day not in days:
        day -= timedelta(days=1)
        if day not in days:
            return 0
    streak = 0
    while day in days:
        streak += 1
        day -= timedelta(days=1)
    return streak


def longest_streak(workouts: Iterable[Workout]) -> int:
    """Longest run of consecutive days with a completed workout, ever."""
    days = sorted(_completed_days(workouts))
    if not days:
        return 0
    longest = 1
    run = 1
    for i in range(1, len(days)):
        if days[i] == days[i - 1] + timedelta(days=1):
            run += 1
            longest = max(longest, run)
        else:
            run = 1
    return longest


def last_workout_date(workouts: Iterable[Workout]) -> date | None:
    days = _completed_days(workouts)
    return max(days) if days else None


def start_of_week(today: date, first_weekday: int = 0) -> date:
    """First day of the calendar week containing ``today`` (0 = Monday ... 6 = Sunday)."""
    offset = (today.weekday() - first_weekday) % 7
    return today - timedelta(days=offset)


def range_start(stats_range: StatsRange, today: date, first_weekday: int = 0) -> date | None:
    if stats_range == StatsRange.WEEK:
        return start_of_week(today, first_weekday)
    if stats_range == StatsRange.MONTH:
        return today.replace(day=1)
    if stats_range == StatsRange.YEAR:
        return today.replace(month=1, day=1)
    return None


def completed_in_range(
    workouts: Iterable[Workout],
    stats_range: StatsRange,
    today: date | None = None,
    first_weekday: int = 0,
) -> list[Workout]:
    """Completed workouts dated on or after the start of the current week/month/year."""
    start = range_start(stats_range, today or local_today(), first_weekday)
    return [
        w
        for w in workouts
        if w.is_completed and (start is None or local_date(w.date) >= start)
    ]


def workouts_this_week(
    workouts: Iterable[Workout], today: date | None = None, first_weekday: int = 0
) -> int:
    return len(completed_in_range(workouts, StatsRange.WEEK, today, first_weekday))


def workouts_this_month(workouts: Iterable[Workout], today: date | None = None) -> int:
    return len(completed_in_range(workouts, StatsRange.MONTH, today))


# ---------------------------------------------------------------------------
# Summaries
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WorkoutsSummary:
    workout_count: int
    total_volume: float
    total_sets: int
    total_duration: float
    total_work_time: float
    average_duration: float
    average_exercises: float
    average_sets: float


def summarize(workouts: Iterable[Workout]) -> WorkoutsSummary:
    """Totals and per-workout averages over the completed workouts given."""
    completed = [w for w in workouts if w.is_completed]
    count = len(completed)
    volume = sum(total_volume(w) for w in completed)
    sets = sum(total_sets(w) for w in completed)
    duration = sum(w.duration or 0 for w in completed)
    work_time = sum(w.saved_work_time or 0 for w in completed)
    exercises = sum(len(w.exercises) for w in completed)
    return WorkoutsSummary(
        workout_count=count,
        total_volume=volume,
        total_sets=sets,
        total_duration=duration,
        total_work_time=work_time,
        average_duration=duration / count if count else 0.0,
        average_exercises=exercises / count if count else 0.0,
        average_sets=sets / count if count else 0.0,
    )


def muscle_group_breakdown(workouts: Iterable[Workout]) -> list[tuple[str, int]]:
    """Exercise count per muscle group across completed workouts, most frequent first."""
    counts: Counter[str] = Counter()
    for w in workouts:
        if not w.is_completed:
            continue
        for e in w.exercises:
            if e.muscle_group:
                counts[e.muscle_group] += 1
    return sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
