"""
FastAPI Dependency Providers for FitGuide.

Each provider returns a port type (a Protocol) or a use case built on
ports, so routers never see Supabase, the cache file or OpenAI directly
and tests swap any of them for fakes.

Architecture:
- Settings, Supabase client, local cache and the workout log store are
  cached per-process (lru_cache); the store owns background sync threads
- Services without state are created per-request
- The acting user comes from the X-User-Id header, or the device identity
  when the caller is anonymous

Usage in routers:
    from api.deps import get_workout_log_store, get_current_user_id

    @router.get("/workout-logs")
    def list_logs(
        user_id: str = Depends(get_current_user_id),
        store: WorkoutLogStore = Depends(get_workout_log_store),
    ):
        return store.load_all(user_id)

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_workout_log_store] = lambda: store_with_fakes
"""

import logging
from functools import lru_cache
from typing import Optional, Tuple

from fastapi import Depends, Header, HTTPException
from supabase import Client, create_client

from application.ports import ContentGenerator, LocalCache, ProfileRepository, WorkoutLogRepository
from application.use_cases import (
    CoachService,
    DeviceIdentityService,
    ProfileService,
    RemoteCaller,
    WorkoutLogStore,
)
from backend.core.catalog import load_catalog
from backend.settings import Settings, get_settings as _get_settings
from domain.models import Exercise, UserProfile
from domain.services import ExerciseResolver
from infrastructure import (
    JsonFileCache,
    OpenAIContentGenerator,
    SupabaseProfileRepository,
    SupabaseWorkoutLogRepository,
    UnconfiguredWorkoutLogRepository,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """Settings as a dependency, so tests can override them per app."""
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Returns None if credentials are not configured; the app then runs on
    the local cache alone.
    """
    settings = _get_settings()

    if not settings.supabase_configured:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


# =============================================================================
# Storage Providers
# =============================================================================


@lru_cache
def get_local_cache() -> LocalCache:
    """Get the device-local JSON cache (cached)."""
    return JsonFileCache(_get_settings().local_cache_path)


def get_workout_log_repo() -> WorkoutLogRepository:
    """
    Get the remote workout log repository.

    Falls back to an always-unavailable stand-in when Supabase is not
    configured.
    """
    client = get_supabase_client()
    if client is None:
        return UnconfiguredWorkoutLogRepository()
    return SupabaseWorkoutLogRepository(client)


def get_profile_repo() -> Optional[ProfileRepository]:
    client = get_supabase_client()
    if client is None:
        return None
    return SupabaseProfileRepository(client)


@lru_cache
def get_workout_log_store() -> WorkoutLogStore:
    """
    Get the process-wide WorkoutLogStore (cached).

    A single instance owns the cache lock and the background sync pool.
    """
    settings = _get_settings()
    return WorkoutLogStore(
        remote=get_workout_log_repo(),
        cache=get_local_cache(),
        read_timeout=settings.remote_read_timeout_seconds,
        write_timeout=settings.remote_write_timeout_seconds,
    )


def shutdown_workout_log_store() -> None:
    """Flush and close the store if it was ever created."""
    if get_workout_log_store.cache_info().currsize:
        get_workout_log_store().close()
        get_workout_log_store.cache_clear()


# =============================================================================
# Service Providers
# =============================================================================


@lru_cache
def get_remote_caller() -> RemoteCaller:
    """Shared pool for bounded remote calls made by per-request services."""
    return RemoteCaller(thread_name_prefix="api_remote_")


def get_device_identity(
    cache: LocalCache = Depends(get_local_cache),
) -> DeviceIdentityService:
    return DeviceIdentityService(cache)


def get_profile_service(
    cache: LocalCache = Depends(get_local_cache),
    profile_repo: Optional[ProfileRepository] = Depends(get_profile_repo),
    settings: Settings = Depends(get_settings),
) -> ProfileService:
    return ProfileService(
        cache,
        profile_repo,
        timeout=settings.remote_write_timeout_seconds,
        remote_caller=get_remote_caller(),
    )


@lru_cache
def get_catalog() -> Tuple[Exercise, ...]:
    return load_catalog()


def get_exercise_resolver(
    settings: Settings = Depends(get_settings),
) -> ExerciseResolver:
    return ExerciseResolver(get_catalog(), page_size=settings.exercises_page_size)


def get_content_generator() -> Optional[ContentGenerator]:
    """OpenAI generator when an API key is set, otherwise None (fallback copy)."""
    settings = _get_settings()
    if not settings.openai_api_key:
        return None
    return OpenAIContentGenerator(
        api_key=settings.openai_api_key,
        model=settings.ai_model,
        vision_model=settings.ai_vision_model,
    )


def get_coach_service(
    generator: Optional[ContentGenerator] = Depends(get_content_generator),
) -> CoachService:
    return CoachService(generator)


# =============================================================================
# Identity Providers
# =============================================================================


def get_current_user_id(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
    identity: DeviceIdentityService = Depends(get_device_identity),
) -> str:
    """
    Resolve the acting user.

    Signed-in callers send their user id; anonymous callers act as the
    device identity, which is created on first use.
    """
    if x_user_id and x_user_id.strip():
        return x_user_id.strip()
    return identity.get_or_create()


def get_current_profile(
    user_id: str = Depends(get_current_user_id),
    profile_service: ProfileService = Depends(get_profile_service),
) -> UserProfile:
    """
    Get the acting user's profile.

    Raises:
        HTTPException: 404 if onboarding has not been completed
    """
    lookup_id = None if DeviceIdentityService.is_anonymous(user_id) else user_id
    profile = profile_service.load(lookup_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found. Complete onboarding first.")
    return profile


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
    "shutdown_workout_log_store",
    # Services
    "get_remote_caller",
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
