"""Workout template schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.core.constants import DEFAULT_REST_SECONDS, DEFAULT_TARGET_REPS, DEFAULT_TARGET_SETS


class TemplateExerciseBase(BaseModel):
    exercise_name: str = Field(..., min_length=1, max_length=255)
    muscle_group: str = ""
    order: int = 0
    target_sets: int = Field(DEFAULT_TARGET_SETS, ge=0)
    target_reps: int = Field(DEFAULT_TARGET_REPS, ge=0)
    rest_seconds: int = Field(DEFAULT_REST_SECONDS, ge=0)
    notes: str = ""


class TemplateExerciseCreate(TemplateExerciseBase):
    pass


class TemplateExerciseRead(TemplateExerciseBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    template_id: UUID


class WorkoutTemplateBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    category: str = "Total Body"
    is_custom: bool = True


class WorkoutTemplateCreate(WorkoutTemplateBase):
    exercises: list[TemplateExerciseCreate] = []


class WorkoutTemplateUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    category: str | None = None


class WorkoutTemplateRead(WorkoutTemplateBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    created_date: datetime
    last_used: datetime | None = None
    times_used: int = 0
    estimated_duration: float = 0.0
    exercises: list[TemplateExerciseRead] = []
