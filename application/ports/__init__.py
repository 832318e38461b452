"""
Repository Interfaces (Ports) for FitGuide.

This package defines abstract interfaces that decouple the use cases from
infrastructure (Supabase, the device-local cache, the AI model).
Implementations are provided in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the use cases need)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import WorkoutLogRepository, LocalCache

    class WorkoutLogStore:
        def __init__(self, remote: WorkoutLogRepository, cache: LocalCache):
            self._remote = remote
            self._cache = cache
"""

# Workout log persistence
from application.ports.workout_log_repository import WorkoutLogRepository

# Device-local storage
from application.ports.local_cache import LocalCache

# Profiles
from application.ports.profile_repository import ProfileRepository

# Generative content
from application.ports.content_generator import ContentGenerator

__all__ = [
    "WorkoutLogRepository",
    "LocalCache",
    "ProfileRepository",
    "ContentGenerator",
]
