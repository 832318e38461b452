"""
API package for FitGuide.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_supabase_client,
    get_local_cache,
    get_workout_log_repo,
    get_profile_repo,
    get_workout_log_store,
    get_device_identity,
    get_profile_service,
    get_catalog,
    get_exercise_resolver,
    get_content_generator,
    get_coach_service,
    get_current_user_id,
    get_current_profile,
)

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    # Storage
    "get_local_cache",
    "get_workout_log_repo",
    "get_profile_repo",
    "get_workout_log_store",
    # Services
    "get_device_identity",
    "get_profile_service",
    "get_catalog",
    "get_exercise_resolver",
    "get_content_generator",
    "get_coach_service",
    # Identity
    "get_current_user_id",
    "get_current_profile",
]
