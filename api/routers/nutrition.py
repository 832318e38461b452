"""
Nutrition router.

Daily calorie and macro targets, and intake tracking against them.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from api.deps import get_current_profile
from domain.models import UserProfile
from domain.services import MealEntry, NutritionTargets, daily_targets, summarize_intake

router = APIRouter(
    prefix="/nutrition",
    tags=["Nutrition"],
)


class TargetsResponse(BaseModel):
    calories: int
    protein: int
    carbs: int
    fats: int

    @classmethod
    def from_targets(cls, targets: NutritionTargets) -> "TargetsResponse":
        return cls(
            calories=targets.calories,
            protein=targets.protein,
            carbs=targets.carbs,
            fats=targets.fats,
        )


class MealRequest(BaseModel):
    name: str
    calories: int = Field(0, ge=0)
    protein: int = Field(0, ge=0)
    carbs: int = Field(0, ge=0)
    fats: int = Field(0, ge=0)


class IntakeRequest(BaseModel):
    meals: List[MealRequest] = Field(default_factory=list)


class IntakeResponse(BaseModel):
    targets: TargetsResponse
    consumed: TargetsResponse
    remaining: TargetsResponse


def _targets_for(profile: UserProfile) -> NutritionTargets:
    try:
        return daily_targets(profile)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/targets", response_model=TargetsResponse)
def get_targets(profile: UserProfile = Depends(get_current_profile)):
    return TargetsResponse.from_targets(_targets_for(profile))


@router.post("/intake", response_model=IntakeResponse)
def summarize_meals(
    request: IntakeRequest,
    profile: UserProfile = Depends(get_current_profile),
):
    targets = _targets_for(profile)
    summary = summarize_intake(
        [MealEntry(**meal.model_dump()) for meal in request.meals],
        targets,
    )
    return IntakeResponse(
        targets=TargetsResponse.from_targets(targets),
        consumed=TargetsResponse.from_targets(summary.consumed),
        remaining=TargetsResponse.from_targets(summary.remaining),
    )
