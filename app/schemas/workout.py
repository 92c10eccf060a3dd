"""Workout, Exercise and ExerciseSet schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from app.core.enums import SuggestionType
from app.core.timeutils import as_utc
from app.models.workout import TimerRunning


class ExerciseSetBase(BaseModel):
    reps: int = Field(0, ge=0)
    weight: float = Field(0.0, ge=0, allow_inf_nan=False)


class ExerciseSetCreate(ExerciseSetBase):
    pass


class ExerciseSetUpdate(BaseModel):
    reps: int | None = Field(None, ge=0)
    weight: float | None = Field(None, ge=0, allow_inf_nan=False)
    is_completed: bool | None = None


class ExerciseSetRead(ExerciseSetBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    exercise_id: UUID | None = None
    order: int
    is_completed: bool
    previous_weight: float | None = None
    previous_reps: int | None = None
    work_time: float = 0.0
    work_start_time: datetime | None = None
    volume: float = 0.0
    is_timer_running: bool = False

    @computed_field
    @property
    def current_work_time(self) -> float:
        """Committed work time plus the open timer, as of now."""
        if self.work_start_time is None:
            return self.work_time
        return self.work_time + TimerRunning(self.work_start_time).elapsed(datetime.now().astimezone())


class ExerciseBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    muscle_group: str = ""
    target_sets: int | None = Field(None, ge=0)
    target_reps: int | None = Field(None, ge=0)


class ExerciseCreate(ExerciseBase):
    pass


class ExerciseUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    muscle_group: str | None = None
    target_sets: int | None = Field(None, ge=0)
    target_reps: int | None = Field(None, ge=0)
    duration: float | None = Field(None, ge=0, allow_inf_nan=False)


class ExerciseRead(ExerciseBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    workout_id: UUID | None = None
    order: int
    previous_best: str | None = None
    suggestion_note: str | None = None
    duration: float = 0.0
    is_cardio: bool = False
    has_progression: bool = False
    sets: list[ExerciseSetRead] = []


class ReorderRequest(BaseModel):
    """Full list of child ids in their new order."""

    ids: list[UUID]


class WorkoutBase(BaseModel):
    name: str = Field("Workout", min_length=1, max_length=255)
    notes: str = ""


class WorkoutCreate(WorkoutBase):
    pass


class WorkoutUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    notes: str | None = None
    date: datetime | None = None

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime | None) -> datetime | None:
        # SQLite drops the offset, so store the UTC instant
        return as_utc(v) if v is not None else None


class WorkoutRead(WorkoutBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    date: datetime
    start_date: datetime
    duration: float = 0.0
    saved_work_time: float = 0.0
    is_completed: bool = False
    template_id: UUID | None = None
    template_name: str | None = None
    repeated_from_workout_id: UUID | None = None
    used_template: bool = False
    exercises: list[ExerciseRead] = []


class WorkoutSummaryRead(BaseModel):
    """Derived numbers for one workout."""

    workout_id: UUID
    total_volume: float
    total_sets: int
    elapsed_time: float
    total_work_time: float
    formatted_duration: str


class ProgressionSuggestionRead(BaseModel):
    exercise_id: UUID
    exercise_name: str
    type: SuggestionType
    amount: float
    message: str


class WorkoutCompletionRead(BaseModel):
    workout: WorkoutRead
    suggestions: list[ProgressionSuggestionRead] = []
