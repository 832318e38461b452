"""
Fake Implementations for Testing.

In-memory fakes of the application ports for fast, isolated tests, plus
builders for the domain records the tests need.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Failure and latency knobs for the degraded paths

Usage:
    from tests.fakes import FakeWorkoutLogRepository, FakeLocalCache, make_exercise

    repo = FakeWorkoutLogRepository()
    repo.fail_with = RemoteUnavailableError("down")
    store = WorkoutLogStore(remote=repo, cache=FakeLocalCache())
"""
from datetime import datetime, timezone
from typing import List, Optional

from domain.models import Exercise, UserProfile, WorkoutLog

from tests.fakes.workout_log_repository import FakeWorkoutLogRepository
from tests.fakes.local_cache import FakeLocalCache
from tests.fakes.profile_repository import FakeProfileRepository
from tests.fakes.content_generator import FakeContentGenerator


# =============================================================================
# Builders
# =============================================================================


def make_exercise(
    exercise_id: str,
    *,
    category: str = "Strength",
    location: Optional[List[str]] = None,
    muscles: Optional[List[str]] = None,
    difficulty: str = "Beginner",
    equipment_required: Optional[str] = None,
    replaces_id: Optional[str] = None,
) -> Exercise:
    """Build a catalog exercise with sensible defaults."""
    return Exercise(
        id=exercise_id,
        name=exercise_id.replace("_", " ").title(),
        muscles=muscles or ["Chest"],
        sets=3,
        reps="10",
        category=category,
        location=location or ["Gym", "Home"],
        difficulty=difficulty,
        equipment_required=equipment_required,
        is_replacement=replaces_id is not None,
        replaces_id=replaces_id,
    )


def make_profile(
    *,
    location: str = "Gym",
    height: float = 175,
    weight: float = 70,
    equipment: Optional[List[str]] = None,
    user_id: Optional[str] = None,
    age: Optional[int] = 30,
    gender: Optional[str] = "Male",
    goal: Optional[str] = "Stay Fit",
) -> UserProfile:
    """Build a profile. Defaults give a Normal BMI (22.9)."""
    return UserProfile(
        id=user_id,
        first_name="Test",
        last_name="User",
        age=age,
        gender=gender,
        height=height,
        weight=weight,
        goal=goal,
        location=location,
        available_equipment=equipment or [],
    )


def make_log(
    log_id: str,
    *,
    user_id: str = "user-1",
    completed_at: Optional[datetime] = None,
    exercise: Optional[Exercise] = None,
) -> WorkoutLog:
    """Build a log entry; pass a ``local_`` id for a pending one."""
    return WorkoutLog.snapshot(
        exercise or make_exercise("chest_4"),
        user_id=user_id,
        completed_at=completed_at or datetime(2025, 1, 15, 10, 0, tzinfo=timezone.utc),
        log_id=log_id,
    )


__all__ = [
    # Fakes
    "FakeWorkoutLogRepository",
    "FakeLocalCache",
    "FakeProfileRepository",
    "FakeContentGenerator",
    # Builders
    "make_exercise",
    "make_profile",
    "make_log",
]
