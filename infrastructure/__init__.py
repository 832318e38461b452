"""
Infrastructure Layer for FitGuide.

Concrete implementations of the application ports:
- db/: Supabase repositories for workout logs and profiles
- local/: JSON-file device cache
- ai/: OpenAI content generator
"""

from infrastructure.ai import OpenAIContentGenerator
from infrastructure.db import (
    SupabaseProfileRepository,
    SupabaseWorkoutLogRepository,
    UnconfiguredWorkoutLogRepository,
)
from infrastructure.local import JsonFileCache

__all__ = [
    "SupabaseWorkoutLogRepository",
    "SupabaseProfileRepository",
    "UnconfiguredWorkoutLogRepository",
    "JsonFileCache",
    "OpenAIContentGenerator",
]
