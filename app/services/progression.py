"""Progression suggestions: when every set hit its rep target, suggest the next step up."""

from __future__ import annotations

from dataclasses import dataclass

from app.core.enums import ExerciseType, SuggestionType
from app.models.history import ExerciseHistory
from app.models.workout import Exercise
from app.services.exercise_classifier import classify_exercise


@dataclass(frozen=True)
class ProgressionSuggestion:
    type: SuggestionType
    amount: float  # lbs for weight, reps for reps
    message: str


_WEIGHT_FREE = ProgressionSuggestion(
    type=SuggestionType.WEIGHT,
    amount=5,
    message="Great work! Try adding 5 lbs next session.",
)
_REPS_BODYWEIGHT = ProgressionSuggestion(
    type=SuggestionType.REPS,
    amount=1,
    message="Awesome! Try adding 1 rep per set next time.",
)
_WEIGHT_STACK = ProgressionSuggestion(
    type=SuggestionType.WEIGHT,
    amount=10,
    message="Nice! Consider adding 5-10 lbs next session.",
)

SUGGESTIONS_BY_TYPE: dict[ExerciseType, ProgressionSuggestion] = {
    ExerciseType.BARBELL: _WEIGHT_FREE,
    ExerciseType.DUMBBELL: _WEIGHT_FREE,
    ExerciseType.BODYWEIGHT: _REPS_BODYWEIGHT,
    ExerciseType.MACHINE: _WEIGHT_STACK,
    ExerciseType.CABLE: _WEIGHT_STACK,
}


def evaluate_progression(exercise: Exercise) -> ProgressionSuggestion | None:
    """
    Suggest a weight or rep increase for a finished exercise.

    Returns None (no feedback, not an error) unless the exercise has at least
    one set, every set is completed, a target rep count is set, and every set
    reached it.
    """
    sets = list(exercise.sets)
    if not sets or not all(s.is_completed for s in sets):
        return None
    target_reps = exercise.target_reps
    if target_reps is None:
        return None
    if not all(s.reps >= target_reps for s in sets):
        return None
    return SUGGESTIONS_BY_TYPE[classify_exercise(exercise.name)]


def format_previous_performance(history: ExerciseHistory | None) -> str:
    """Best set of a snapshot as ``"225 lbs × 5"``."""
    best = history.best_set if history is not None else None
    if best is None:
        return "No previous data"
    return f"{int(best.weight)} lbs × {best.reps}"
