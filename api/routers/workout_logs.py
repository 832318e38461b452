"""
Workout logs router.

Recording returns as soon as the entry is cached on the device; the
remote sync happens in the background. Listing merges local and remote
history and reports whether the remote half was reachable.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from api.deps import get_catalog, get_current_user_id, get_workout_log_store
from application.use_cases import WorkoutLogStore
from backend.core.catalog import lookup
from domain.models import Exercise, ExerciseCategory, WorkoutLog
from domain.services import Period, filter_by_period, summarize

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/workout-logs",
    tags=["Workout Logs"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class RecordWorkoutRequest(BaseModel):
    exercise_id: str = Field(..., min_length=1, description="Catalog id of the completed exercise")


class RecordSessionRequest(BaseModel):
    category: ExerciseCategory = Field(..., description="Strength, Cardio or Core")
    duration_minutes: int = Field(..., ge=0, le=1440, description="Time spent in minutes")


class DailyGroupResponse(BaseModel):
    date: str
    count: int
    entries: List[WorkoutLog]


class StatsResponse(BaseModel):
    total: int
    strength: int
    cardio: int
    core: int


class WorkoutLogListResponse(BaseModel):
    entries: List[WorkoutLog]
    groups: List[DailyGroupResponse]
    stats: StatsResponse
    status: str
    local_count: int
    remote_count: int


class ClearResponse(BaseModel):
    remote_cleared: bool
    remote_deleted: int = 0
    error: Optional[str] = None


# =============================================================================
# Endpoints
# =============================================================================


@router.post("", response_model=WorkoutLog, status_code=201)
def record_workout(
    request: RecordWorkoutRequest,
    user_id: str = Depends(get_current_user_id),
    catalog: Tuple[Exercise, ...] = Depends(get_catalog),
    store: WorkoutLogStore = Depends(get_workout_log_store),
):
    """
    Record a completed exercise.

    Raises LocalPersistenceError (mapped to 507) when the device cache
    cannot be written.
    """
    exercise = lookup(catalog, request.exercise_id)
    if exercise is None:
        raise HTTPException(status_code=404, detail=f"Exercise '{request.exercise_id}' not found")
    return store.record(user_id, exercise)


@router.post("/session", response_model=WorkoutLog, status_code=201)
def record_session(
    request: RecordSessionRequest,
    user_id: str = Depends(get_current_user_id),
    store: WorkoutLogStore = Depends(get_workout_log_store),
):
    """Record a quick session that is not tied to a catalog exercise."""
    return store.record_session(user_id, request.category, request.duration_minutes)


@router.get("", response_model=WorkoutLogListResponse)
def list_workout_logs(
    period: Period = Query(Period.ALL, description="today, week, month or all"),
    user_id: str = Depends(get_current_user_id),
    store: WorkoutLogStore = Depends(get_workout_log_store),
):
    snapshot = store.load_all(user_id)
    today = datetime.now(timezone.utc).date()
    groups = filter_by_period(snapshot.groups, period, today)
    stats = summarize(entry for group in groups for entry in group.entries)

    return WorkoutLogListResponse(
        entries=[entry for group in groups for entry in group.entries],
        groups=[
            DailyGroupResponse(date=g.date.isoformat(), count=g.count, entries=g.entries)
            for g in groups
        ],
        stats=StatsResponse(
            total=stats.total,
            strength=stats.strength,
            cardio=stats.cardio,
            core=stats.core,
        ),
        status=snapshot.status.value,
        local_count=snapshot.local_count,
        remote_count=snapshot.remote_count,
    )


@router.delete("", response_model=ClearResponse)
def clear_workout_logs(
    user_id: str = Depends(get_current_user_id),
    store: WorkoutLogStore = Depends(get_workout_log_store),
):
    result = store.clear_all(user_id)
    return ClearResponse(
        remote_cleared=result.remote_cleared,
        remote_deleted=result.remote_deleted,
        error=result.error,
    )
