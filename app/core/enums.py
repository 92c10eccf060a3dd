"""Shared enums for models and API."""

from enum import Enum


class ExerciseType(str, Enum):
    """Training modality inferred from an exercise name."""

    BARBELL = "barbell"
    DUMBBELL = "dumbbell"
    BODYWEIGHT = "bodyweight"
    CABLE = "cable"
    MACHINE = "machine"


class SuggestionType(str, Enum):
    """What a progression suggestion asks the lifter to increase."""

    WEIGHT = "weight"
    REPS = "reps"


class StatsRange(str, Enum):
    """Time window for summary statistics."""

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


class MuscleGroup(str, Enum):
    """Built-in muscle group labels. Exercises may carry any free-text label."""

    CHEST = "Chest"
    BACK = "Back"
    SHOULDERS = "Shoulders"
    BICEPS = "Biceps"
    TRICEPS = "Triceps"
    LEGS = "Legs"
    CORE = "Core"
    CARDIO = "Cardio"
    FULL_BODY = "Full Body"
