"""
Coach router.

AI coaching copy. Every endpoint answers 200 with text: when the model is
unavailable the CoachService substitutes static fallback copy.
"""
import base64
import binascii
from typing import List, Literal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from api.deps import get_coach_service, get_current_profile
from application.use_cases import ChatMessage, CoachService
from domain.models import UserProfile

router = APIRouter(
    prefix="/coach",
    tags=["Coach"],
)

MAX_IMAGE_BYTES = 5 * 1024 * 1024


class CoachTextResponse(BaseModel):
    text: str


class ChatTurn(BaseModel):
    role: Literal["user", "model"]
    message: str = Field(..., min_length=1)


class ChatRequest(BaseModel):
    history: List[ChatTurn] = Field(..., min_length=1)


class ScanRequest(BaseModel):
    image_base64: str = Field(..., min_length=1)
    mime_type: Literal["image/jpeg", "image/png", "image/webp"] = "image/jpeg"


@router.get("/insight", response_model=CoachTextResponse)
def insight(
    profile: UserProfile = Depends(get_current_profile),
    coach: CoachService = Depends(get_coach_service),
):
    return CoachTextResponse(text=coach.fitness_insight(profile))


@router.get("/routine", response_model=CoachTextResponse)
def routine(
    profile: UserProfile = Depends(get_current_profile),
    coach: CoachService = Depends(get_coach_service),
):
    return CoachTextResponse(text=coach.workout_routine(profile))


@router.get("/meal-plan", response_model=CoachTextResponse)
def meal_plan(
    profile: UserProfile = Depends(get_current_profile),
    coach: CoachService = Depends(get_coach_service),
):
    return CoachTextResponse(text=coach.meal_plan(profile))


@router.post("/chat", response_model=CoachTextResponse)
def chat(
    request: ChatRequest,
    coach: CoachService = Depends(get_coach_service),
):
    history = [ChatMessage(role=turn.role, message=turn.message) for turn in request.history]
    return CoachTextResponse(text=coach.chat(history))


@router.post("/scan", response_model=CoachTextResponse)
def scan_equipment(
    request: ScanRequest,
    coach: CoachService = Depends(get_coach_service),
):
    try:
        image = base64.b64decode(request.image_base64, validate=True)
    except (binascii.Error, ValueError):
        raise HTTPException(status_code=422, detail="image_base64 is not valid base64")
    if len(image) > MAX_IMAGE_BYTES:
        raise HTTPException(status_code=413, detail="Image must be 5MB or smaller")
    return CoachTextResponse(text=coach.identify_equipment(image, request.mime_type))
