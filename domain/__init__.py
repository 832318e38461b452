"""
Domain layer for FitGuide.

This package contains pure domain models and services that are independent
of infrastructure concerns (database, local storage, API, AI services).
"""

from domain.models import (
    BMICategory,
    Exercise,
    ExerciseCategory,
    UserProfile,
    WorkoutLocation,
    WorkoutLog,
)

__all__ = [
    "BMICategory",
    "Exercise",
    "ExerciseCategory",
    "UserProfile",
    "WorkoutLocation",
    "WorkoutLog",
]
