"""
Domain models for FitGuide.

Pure pydantic records independent of storage, transport and UI:
- Exercise: an immutable catalog entry
- UserProfile: body metrics and training preferences
- WorkoutLog: a completed exercise with its sync state

Usage:
    >>> from domain.models import Exercise, UserProfile, WorkoutLog

    >>> profile = UserProfile(
    ...     first_name="Ada",
    ...     last_name="Lovelace",
    ...     height=170,
    ...     weight=60,
    ...     location="Gym",
    ...     available_equipment=["Dumbbells"],
    ... )
"""

from domain.models.exercise import (
    Difficulty,
    Exercise,
    ExerciseCategory,
    WorkoutLocation,
)
from domain.models.profile import (
    BMICategory,
    BMIInfo,
    FitnessGoal,
    Gender,
    UserProfile,
)
from domain.models.workout_log import (
    MANUAL_LOG_EXERCISE_ID,
    TEMP_ID_PREFIX,
    InvalidSyncTransition,
    SyncState,
    WorkoutLog,
    generate_temp_id,
    is_temp_id,
)

__all__ = [
    # Catalog
    "Exercise",
    "ExerciseCategory",
    "WorkoutLocation",
    "Difficulty",
    # Profile
    "UserProfile",
    "Gender",
    "FitnessGoal",
    "BMICategory",
    "BMIInfo",
    # Logs
    "WorkoutLog",
    "SyncState",
    "InvalidSyncTransition",
    "MANUAL_LOG_EXERCISE_ID",
    "TEMP_ID_PREFIX",
    "generate_temp_id",
    "is_temp_id",
]
