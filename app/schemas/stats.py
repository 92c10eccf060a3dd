"""Dashboard statistics schemas."""

from datetime import date

from pydantic import BaseModel

from app.core.enums import StatsRange


class StreakRead(BaseModel):
    current_streak: int
    longest_streak: int
    last_workout_date: date | None = None
    workouts_this_week: int
    workouts_this_month: int


class MuscleGroupCount(BaseModel):
    muscle_group: str
    count: int


class StatsSummaryRead(BaseModel):
    range: StatsRange
    from_date: date | None = None
    workout_count: int
    total_volume: float
    total_sets: int
    total_duration: float
    total_work_time: float
    average_duration: float
    average_exercises: float
    average_sets: float
    formatted_total_duration: str
    muscle_groups: list[MuscleGroupCount] = []
