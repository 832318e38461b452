"""
Application Use Cases for FitGuide.

Use cases orchestrate domain logic and coordinate between ports/adapters.
Dependencies are injected via constructors for testability, and results
are returned as dataclasses rather than API responses.

Usage:
    from application.use_cases import WorkoutLogStore, DeviceIdentityService

    store = WorkoutLogStore(remote=workout_log_repo, cache=local_cache)
    entry = store.record(user_id="user-123", exercise=exercise)
    snapshot = store.load_all("user-123")

    identity = DeviceIdentityService(local_cache)
    owner = identity.get_or_create()
"""

from application.use_cases.coach_service import ChatMessage, CoachService
from application.use_cases.device_identity import (
    DEVICE_ID_PREFIX,
    DeviceIdentityService,
    generate_device_id,
    is_anonymous_id,
)
from application.use_cases.profile_service import ProfileService, SaveProfileResult
from application.use_cases.remote_call import RemoteCaller
from application.use_cases.workout_log_store import (
    EVENT_LOGS_CLEARED,
    EVENT_WORKOUT_LOGGED,
    EVENT_WORKOUTS_MIGRATED,
    ClearResult,
    LogSnapshot,
    MigrationResult,
    RemoteStatus,
    WorkoutLogStore,
    merge_logs,
)

__all__ = [
    # WorkoutLogStore
    "WorkoutLogStore",
    "LogSnapshot",
    "RemoteStatus",
    "MigrationResult",
    "ClearResult",
    "merge_logs",
    "EVENT_WORKOUT_LOGGED",
    "EVENT_WORKOUTS_MIGRATED",
    "EVENT_LOGS_CLEARED",
    # Identity
    "DeviceIdentityService",
    "DEVICE_ID_PREFIX",
    "generate_device_id",
    "is_anonymous_id",
    # Profile
    "ProfileService",
    "SaveProfileResult",
    # Coach
    "CoachService",
    "ChatMessage",
    # Remote calls
    "RemoteCaller",
]
