"""
Daily nutrition targets.

Calories come from the Mifflin-St Jeor basal metabolic rate scaled by a
moderate activity factor and adjusted for the user's goal. Macros are
split from the calorie target, except protein which scales with body
weight.
"""

from dataclasses import dataclass
from typing import Iterable

from domain.models import FitnessGoal, Gender, UserProfile

ACTIVITY_FACTOR = 1.55
GOAL_ADJUSTMENT = {
    FitnessGoal.WEIGHT_LOSS: -500,
    FitnessGoal.MUSCLE_GAIN: 300,
}
PROTEIN_PER_KG = 1.6
CARB_CALORIE_SHARE = 0.45
FAT_CALORIE_SHARE = 0.25
CALORIES_PER_GRAM_CARB = 4
CALORIES_PER_GRAM_FAT = 9


@dataclass(frozen=True)
class NutritionTargets:
    calories: int
    protein: int
    carbs: int
    fats: int


@dataclass(frozen=True)
class MealEntry:
    name: str
    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fats: int = 0


@dataclass(frozen=True)
class IntakeSummary:
    consumed: NutritionTargets
    remaining: NutritionTargets


def basal_metabolic_rate(profile: UserProfile) -> float:
    if profile.age is None:
        raise ValueError("Age is required to calculate nutrition targets")

    bmr = 10 * profile.weight + 6.25 * profile.height - 5 * profile.age
    return bmr + 5 if profile.gender is Gender.MALE else bmr - 161


def daily_targets(profile: UserProfile) -> NutritionTargets:
    """
    Daily calorie and macro targets for a profile.

    Raises:
        ValueError: If the profile has no age
    """
    calories = basal_metabolic_rate(profile) * ACTIVITY_FACTOR
    calories += GOAL_ADJUSTMENT.get(profile.goal, 0)

    return NutritionTargets(
        calories=round(calories),
        protein=round(profile.weight * PROTEIN_PER_KG),
        carbs=round(calories * CARB_CALORIE_SHARE / CALORIES_PER_GRAM_CARB),
        fats=round(calories * FAT_CALORIE_SHARE / CALORIES_PER_GRAM_FAT),
    )


def summarize_intake(meals: Iterable[MealEntry], targets: NutritionTargets) -> IntakeSummary:
    """
    Totals eaten so far and what is left of each target.

    Remaining values go negative once a target is exceeded.
    """
    meals = list(meals)
    consumed = NutritionTargets(
        calories=sum(m.calories for m in meals),
        protein=sum(m.protein for m in meals),
        carbs=sum(m.carbs for m in meals),
        fats=sum(m.fats for m in meals),
    )
    remaining = NutritionTargets(
        calories=targets.calories - consumed.calories,
        protein=targets.protein - consumed.protein,
        carbs=targets.carbs - consumed.carbs,
        fats=targets.fats - consumed.fats,
    )
    return IntakeSummary(consumed=consumed, remaining=remaining)
