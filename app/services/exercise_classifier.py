"""Classify an exercise name into a training modality by keyword.

Rules are evaluated top to bottom and the first match wins. Many names hit
more than one keyword set ("Dumbbell Bench Press", "Cable Pushdown"), so the
order of ``CLASSIFICATION_RULES`` is part of the behaviour.
"""

from __future__ import annotations

from collections.abc import Callable

from app.core.enums import ExerciseType

BARBELL_KEYWORDS = ("barbell", "squat", "deadlift", "bench press", "overhead press", "row")
DUMBBELL_KEYWORDS = ("dumbbell", "db ")
BODYWEIGHT_KEYWORDS = ("pull-up", "chin-up", "push-up", "dip", "plank")
CABLE_KEYWORDS = ("cable", "rope", "pulldown", "pushdown")
MACHINE_KEYWORDS = ("machine", "leg press", "leg curl", "leg extension", "pec deck")

DEFAULT_EXERCISE_TYPE = ExerciseType.BARBELL


def _contains_any(keywords: tuple[str, ...]) -> Callable[[str], bool]:
    return lambda name: any(k in name for k in keywords)


def _is_barbell(name: str) -> bool:
    return _contains_any(BARBELL_KEYWORDS)(name) and "dumbbell" not in name


CLASSIFICATION_RULES: list[tuple[Callable[[str], bool], ExerciseType]] = [
    (_is_barbell, ExerciseType.BARBELL),
    (_contains_any(DUMBBELL_KEYWORDS), ExerciseType.DUMBBELL),
    (_contains_any(BODYWEIGHT_KEYWORDS), ExerciseType.BODYWEIGHT),
    (_contains_any(CABLE_KEYWORDS), ExerciseType.CABLE),
    (_contains_any(MACHINE_KEYWORDS), ExerciseType.MACHINE),
]


def classify_exercise(name: str | None) -> ExerciseType:
    """Map a free-text exercise name to its modality. Unknown names default to barbell."""
    lowered = (name or "").lower()
    for matches, exercise_type in CLASSIFICATION_RULES:
        if matches(lowered):
            return exercise_type
    return DEFAULT_EXERCISE_TYPE
