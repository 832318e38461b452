"""
Profile router.

Onboarding data for the acting user, plus the BMI view derived from it.
"""
import logging
from typing import Optional, Tuple

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.deps import get_current_profile, get_current_user_id, get_profile_service
from application.use_cases import DeviceIdentityService, ProfileService
from domain.models import UserProfile
from domain.services import bmi_info, recommended_category

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/profile",
    tags=["Profile"],
)


class SaveProfileResponse(BaseModel):
    profile: UserProfile
    remote_saved: bool
    error: Optional[str] = None


class BMIResponse(BaseModel):
    score: float
    category: str
    ideal_range: Tuple[float, float]
    message: str
    recommended_category: str


@router.get("", response_model=UserProfile)
def get_profile(profile: UserProfile = Depends(get_current_profile)):
    return profile


@router.put("", response_model=SaveProfileResponse)
def save_profile(
    profile: UserProfile,
    user_id: str = Depends(get_current_user_id),
    profile_service: ProfileService = Depends(get_profile_service),
):
    """
    Save the onboarding profile.

    Signed-in users get their id stamped on the profile so it is mirrored
    remotely; anonymous profiles stay on the device.
    """
    if not DeviceIdentityService.is_anonymous(user_id):
        profile = profile.model_copy(update={"id": user_id})
    result = profile_service.save(profile)
    return SaveProfileResponse(
        profile=result.profile,
        remote_saved=result.remote_saved,
        error=result.error,
    )


@router.get("/bmi", response_model=BMIResponse)
def get_bmi(profile: UserProfile = Depends(get_current_profile)):
    info = bmi_info(profile)
    return BMIResponse(
        score=round(info.score, 1),
        category=info.category.value,
        ideal_range=info.ideal_range,
        message=info.message,
        recommended_category=recommended_category(info.category),
    )
