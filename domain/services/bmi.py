"""BMI calculation and the training bias derived from it."""

from domain.models.exercise import ExerciseCategory
from domain.models.profile import BMICategory, BMIInfo, UserProfile

UNDERWEIGHT_THRESHOLD = 18.5
OVERWEIGHT_THRESHOLD = 25.0


def calculate_bmi(height_cm: float, weight_kg: float) -> float:
    """Body-mass index: weight (kg) / height (m) squared."""
    if height_cm <= 0 or weight_kg <= 0:
        raise ValueError(
            f"Height and weight must be positive, got height={height_cm}, weight={weight_kg}"
        )
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def bmi_category(score: float) -> BMICategory:
    """
    Classify a BMI score.

    Only two thresholds are applied, so OBESE is never returned.
    """
    if score < UNDERWEIGHT_THRESHOLD:
        return BMICategory.UNDERWEIGHT
    if score < OVERWEIGHT_THRESHOLD:
        return BMICategory.NORMAL
    return BMICategory.OVERWEIGHT


def profile_bmi_category(profile: UserProfile) -> BMICategory:
    return bmi_category(calculate_bmi(profile.height, profile.weight))


def bmi_info(profile: UserProfile) -> BMIInfo:
    score = calculate_bmi(profile.height, profile.weight)
    return BMIInfo(score=score, category=bmi_category(score))


def recommended_category(category: BMICategory) -> str:
    """Category filter suggested on the dashboard for a BMI category."""
    if category is BMICategory.UNDERWEIGHT:
        return ExerciseCategory.STRENGTH.value
    if category is BMICategory.OVERWEIGHT:
        return ExerciseCategory.CARDIO.value
    return "All"
