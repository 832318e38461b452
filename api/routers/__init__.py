"""
Router package for FitGuide API.

This package contains all API routers organized by domain:
- health: Liveness and readiness
- profile: Onboarding profile and BMI
- exercises: Resolved exercise plans and the equipment list
- workout_logs: Offline-first workout history
- identity: Anonymous-to-user history migration
- nutrition: Calorie and macro targets
- coach: AI coaching copy with static fallbacks
"""

from api.routers.health import router as health_router
from api.routers.profile import router as profile_router
from api.routers.exercises import router as exercises_router
from api.routers.workout_logs import router as workout_logs_router
from api.routers.identity import router as identity_router
from api.routers.nutrition import router as nutrition_router
from api.routers.coach import router as coach_router

__all__ = [
    "health_router",
    "profile_router",
    "exercises_router",
    "workout_logs_router",
    "identity_router",
    "nutrition_router",
    "coach_router",
]
