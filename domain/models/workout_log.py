"""
Workout log entries and their sync lifecycle.

An entry is created locally with a temporary id (prefix ``local_``) and is
PENDING until the remote store accepts it and hands back a permanent id,
at which point it becomes SYNCED. Remote ids never carry the temporary
prefix, so the two id spaces cannot collide.
"""

import secrets
import time
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.models.exercise import Exercise, ExerciseCategory

TEMP_ID_PREFIX = "local_"
MANUAL_LOG_EXERCISE_ID = "manual_log"


class SyncState(str, Enum):
    """Where an entry is durable."""

    PENDING = "pending"  # local cache only, temporary id
    SYNCED = "synced"  # local cache and remote store, remote id


class InvalidSyncTransition(ValueError):
    """Raised when an entry cannot move from PENDING to SYNCED."""


def generate_temp_id(now: Optional[datetime] = None) -> str:
    """Generate a temporary id: ``local_<epoch-ms>_<9 hex chars>``."""
    millis = int((now.timestamp() if now else time.time()) * 1000)
    return f"{TEMP_ID_PREFIX}{millis}_{secrets.token_hex(5)[:9]}"


def is_temp_id(log_id: str) -> bool:
    return log_id.startswith(TEMP_ID_PREFIX)


class WorkoutLog(BaseModel):
    """
    A completed exercise.

    The exercise fields are a snapshot taken at completion time so history
    survives later catalog edits. `completed_at` is the sort and grouping
    key and never changes after the entry is created.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    exercise_id: str
    exercise_name: str
    category: ExerciseCategory
    muscles: List[str] = Field(default_factory=list)
    sets: int = Field(..., ge=1)
    reps: str
    completed_at: datetime
    created_at: Optional[datetime] = None
    duration: Optional[int] = Field(default=None, ge=0, description="Seconds spent")

    @field_validator("completed_at", "created_at")
    @classmethod
    def ensure_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        """Naive timestamps are treated as UTC."""
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @classmethod
    def snapshot(
        cls,
        exercise: Exercise,
        *,
        user_id: str,
        completed_at: datetime,
        log_id: Optional[str] = None,
    ) -> "WorkoutLog":
        """Build a pending entry from a catalog exercise."""
        return cls(
            id=log_id or generate_temp_id(completed_at),
            user_id=user_id,
            exercise_id=exercise.id,
            exercise_name=exercise.name,
            category=exercise.category,
            muscles=list(exercise.muscles),
            sets=exercise.sets,
            reps=exercise.reps,
            completed_at=completed_at,
            created_at=completed_at,
        )

    @classmethod
    def session(
        cls,
        category: ExerciseCategory,
        duration_minutes: int,
        *,
        user_id: str,
        completed_at: datetime,
        log_id: Optional[str] = None,
    ) -> "WorkoutLog":
        """
        Build a pending entry for a manually logged session.

        Sessions are not tied to a catalog exercise: they count as a single
        set of the given category, with the time spent as the reps label.
        """
        category = ExerciseCategory(category)
        return cls(
            id=log_id or generate_temp_id(completed_at),
            user_id=user_id,
            exercise_id=MANUAL_LOG_EXERCISE_ID,
            exercise_name=f"Quick {category.value} Session",
            category=category,
            muscles=[],
            sets=1,
            reps=f"{duration_minutes} mins",
            completed_at=completed_at,
            created_at=completed_at,
            duration=duration_minutes * 60,
        )

    @property
    def is_manual(self) -> bool:
        return self.exercise_id == MANUAL_LOG_EXERCISE_ID

    @property
    def sync_state(self) -> SyncState:
        return SyncState.PENDING if is_temp_id(self.id) else SyncState.SYNCED

    @property
    def completed_on(self):
        """Calendar day of completion (in the timestamp's own offset)."""
        return self.completed_at.date()

    def mark_synced(self, remote_id: str) -> "WorkoutLog":
        """Return the SYNCED copy of this entry under its remote id."""
        if self.sync_state is not SyncState.PENDING:
            raise InvalidSyncTransition(f"Log {self.id} is already synced")
        if not remote_id or is_temp_id(remote_id):
            raise InvalidSyncTransition(f"Invalid remote id for log {self.id}: {remote_id!r}")
        return self.model_copy(update={"id": remote_id})

    def reassigned_to(self, user_id: str) -> "WorkoutLog":
        return self.model_copy(update={"user_id": user_id})

    def to_record(self) -> dict:
        """JSON-safe dict for storage."""
        return self.model_dump(mode="json", exclude_none=True)

    def to_remote_record(self) -> dict:
        """Row payload for the remote store (the remote assigns the id)."""
        record = self.to_record()
        record.pop("id", None)
        record.pop("created_at", None)
        return record
