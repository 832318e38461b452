"""
Exercises router.

Paginated exercise plans resolved against the acting user's profile, and
the equipment list used by onboarding.
"""
from typing import List, Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from api.deps import get_current_profile, get_exercise_resolver
from backend.core.catalog import load_equipment, lookup
from domain.models import Exercise, UserProfile
from domain.services import ExerciseResolver

router = APIRouter(
    prefix="/exercises",
    tags=["Exercises"],
)

CategoryFilter = Literal["All", "Strength", "Cardio", "Core"]


class ExercisePageResponse(BaseModel):
    """One page of the resolved exercise plan."""
    items: List[Exercise] = Field(default_factory=list)
    total_count: int
    total_pages: int
    page: int
    page_size: int


class EquipmentResponse(BaseModel):
    id: str
    name: str


@router.get("", response_model=ExercisePageResponse)
def list_exercises(
    category: CategoryFilter = Query("All", description="Exercise category filter"),
    muscle: str = Query("", description="Muscle, difficulty or 'home' search text"),
    page: int = Query(1, ge=1, description="1-based page number"),
    profile: UserProfile = Depends(get_current_profile),
    resolver: ExerciseResolver = Depends(get_exercise_resolver),
):
    result = resolver.resolve(
        profile,
        category=category,
        muscle_query=muscle.strip() or None,
        page=page,
    )
    return ExercisePageResponse(
        items=result.items,
        total_count=result.total_count,
        total_pages=result.total_pages,
        page=result.page,
        page_size=result.page_size,
    )


@router.get("/equipment", response_model=List[EquipmentResponse])
def list_equipment():
    return [EquipmentResponse(**item) for item in load_equipment()]


@router.get("/{exercise_id}", response_model=Exercise)
def get_exercise(
    exercise_id: str,
    resolver: ExerciseResolver = Depends(get_exercise_resolver),
):
    exercise = lookup(resolver.catalog, exercise_id)
    if exercise is None:
        raise HTTPException(status_code=404, detail=f"Exercise '{exercise_id}' not found")
    return exercise
