"""
Identity router.

Moves anonymous (device-owned) workout history to a signed-in user.
"""
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from api.deps import get_device_identity, get_workout_log_store
from application.use_cases import DeviceIdentityService, WorkoutLogStore

router = APIRouter(
    prefix="/identity",
    tags=["Identity"],
)


class MigrateRequest(BaseModel):
    user_id: str = Field(..., min_length=1, description="Signed-in user id to migrate to")


class MigrateResponse(BaseModel):
    success: bool
    migrated_count: int
    from_user_id: Optional[str] = None
    to_user_id: Optional[str] = None
    error: Optional[str] = None


class DeviceResponse(BaseModel):
    device_id: Optional[str] = None


@router.get("/device", response_model=DeviceResponse)
def current_device(identity: DeviceIdentityService = Depends(get_device_identity)):
    return DeviceResponse(device_id=identity.current())


@router.post("/migrate", response_model=MigrateResponse)
def migrate(
    request: MigrateRequest,
    store: WorkoutLogStore = Depends(get_workout_log_store),
):
    """Promote the device identity's history to `user_id`. Safe to repeat."""
    result = store.promote_device(request.user_id)
    return MigrateResponse(
        success=result.success,
        migrated_count=result.migrated_count,
        from_user_id=result.from_user_id,
        to_user_id=result.to_user_id,
        error=result.error,
    )
