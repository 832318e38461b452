"""
User profile and BMI value objects.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from domain.models.exercise import WorkoutLocation


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class FitnessGoal(str, Enum):
    WEIGHT_LOSS = "Weight Loss"
    MUSCLE_GAIN = "Muscle Gain"
    STAY_FIT = "Stay Fit"


class BMICategory(str, Enum):
    """
    Weight-for-height classification.

    OBESE is part of the vocabulary but the threshold derivation in
    domain.services.bmi never produces it.
    """

    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"


class UserProfile(BaseModel):
    """
    Body metrics and training preferences captured during onboarding.

    Range checks mirror the onboarding form: height 100-250 cm,
    weight 30-300 kg, age 13-100.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    email: Optional[str] = None
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    age: Optional[int] = Field(default=None, ge=13, le=100)
    gender: Optional[Gender] = None
    height: float = Field(..., ge=100, le=250, description="Height in cm")
    weight: float = Field(..., ge=30, le=300, description="Weight in kg")
    goal: Optional[FitnessGoal] = None
    location: WorkoutLocation
    available_equipment: List[str] = Field(
        default_factory=list,
        description="Equipment tags the user can access (ignored at Home)",
    )


@dataclass(frozen=True)
class BMIInfo:
    """BMI score with its category and the ideal range shown to the user."""

    score: float
    category: BMICategory
    ideal_range: Tuple[float, float] = (18.5, 24.9)
    message: str = "Based on your height and weight, this workout plan is recommended for you."
