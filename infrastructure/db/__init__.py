"""
Infrastructure Database Layer.

Supabase-backed implementations of the repository interfaces defined in
application.ports. The client is injected so adapters can be built
against a mocked client in tests.

Usage:
    from supabase import create_client
    from infrastructure.db import SupabaseWorkoutLogRepository, SupabaseProfileRepository

    client = create_client(SUPABASE_URL, SUPABASE_KEY)
    workout_log_repo = SupabaseWorkoutLogRepository(client)
    profile_repo = SupabaseProfileRepository(client)
"""

from infrastructure.db.workout_log_repository import (
    SupabaseWorkoutLogRepository,
    UnconfiguredWorkoutLogRepository,
)
from infrastructure.db.profile_repository import SupabaseProfileRepository

__all__ = [
    "SupabaseWorkoutLogRepository",
    "UnconfiguredWorkoutLogRepository",
    "SupabaseProfileRepository",
]
