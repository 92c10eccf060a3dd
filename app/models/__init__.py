"""ORM models - import all so Base.metadata is complete for migrations."""

from app.models.history import ExerciseHistory
from app.models.template import TemplateExercise, WorkoutTemplate
from app.models.workout import Exercise, ExerciseSet, TimerIdle, TimerRunning, Workout

__all__ = [
    "Exercise",
    "ExerciseHistory",
    "ExerciseSet",
    "TemplateExercise",
    "TimerIdle",
    "TimerRunning",
    "Workout",
    "WorkoutTemplate",
]
