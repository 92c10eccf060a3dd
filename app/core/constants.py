"""Application constants."""

# Workout clock
ELAPSED_TIME_CAP_SECONDS = 7200  # 2 hours
SECONDS_PER_DAY = 86400
DEFAULT_TREND_WINDOW_SECONDS = 90 * SECONDS_PER_DAY

# History lookups
DEFAULT_PREVIOUS_PERFORMANCE_LIMIT = 3

# Template duration estimate (seconds)
AVERAGE_SECONDS_PER_SET = 45.0
AVERAGE_REST_BETWEEN_SETS = 90.0

# Template exercise defaults
DEFAULT_TARGET_SETS = 3
DEFAULT_TARGET_REPS = 10
DEFAULT_REST_SECONDS = 90

# Session limits
MAX_EXERCISES_PER_SESSION = 20
MAX_SETS_PER_EXERCISE_PER_SESSION = 10
