"""
Exercise value object for the static exercise catalog.

Catalog entries are immutable: the catalog is loaded once at startup and
shared by every resolver call.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ExerciseCategory(str, Enum):
    """Training category an exercise belongs to."""

    STRENGTH = "Strength"
    CARDIO = "Cardio"
    CORE = "Core"


class WorkoutLocation(str, Enum):
    """Where a user trains."""

    GYM = "Gym"
    HOME = "Home"


class Difficulty(str, Enum):
    """Exercise difficulty level."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class Exercise(BaseModel):
    """
    Value object representing a catalog exercise.

    Machine-bound exercises set `equipment_required`. A replacement exercise
    (`is_replacement=True`) names the machine exercise it stands in for via
    `replaces_id`; the resolver swaps it in when the user's gym lacks that
    machine.

    Examples:
        >>> Exercise(
        ...     id="leg_2",
        ...     name="Leg Press",
        ...     muscles=["Legs"],
        ...     sets=3,
        ...     reps="12",
        ...     category="Strength",
        ...     location=["Gym"],
        ...     difficulty="Beginner",
        ...     equipment_required="Leg Press",
        ... )
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1, description="Unique catalog id")
    name: str = Field(..., min_length=1)
    muscles: List[str] = Field(..., min_length=1, description="Muscle-group tags")
    sets: int = Field(..., ge=1)
    reps: str = Field(..., description="Rep descriptor, e.g. '10–12' or '60s'")
    instruction: Optional[str] = None
    image: Optional[str] = None
    category: ExerciseCategory
    location: List[WorkoutLocation] = Field(..., min_length=1)
    difficulty: Difficulty

    equipment_required: Optional[str] = Field(
        default=None, description="Equipment tag of the machine this exercise needs"
    )
    is_replacement: bool = False
    replaces_id: Optional[str] = Field(
        default=None, description="Id of the machine exercise this one replaces"
    )

    @model_validator(mode="after")
    def validate_replacement(self) -> "Exercise":
        """A replacement must point at another exercise, and only replacements may."""
        if self.is_replacement and not self.replaces_id:
            raise ValueError(f"Replacement exercise '{self.id}' must set replaces_id")
        if self.replaces_id and not self.is_replacement:
            raise ValueError(f"Exercise '{self.id}' sets replaces_id but is not a replacement")
        if self.replaces_id == self.id:
            raise ValueError(f"Exercise '{self.id}' cannot replace itself")
        return self

    @property
    def requires_equipment(self) -> bool:
        return self.equipment_required is not None

    def is_available_at(self, location: str) -> bool:
        """Case-insensitive check against the eligible-location set."""
        wanted = str(getattr(location, "value", location)).lower()
        return any(loc.value.lower() == wanted for loc in self.location)
