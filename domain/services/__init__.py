"""
Pure domain services.

No I/O, no clocks, no randomness: every function takes its inputs
explicitly so the same arguments always give the same result.
"""

from domain.services.bmi import (
    bmi_category,
    bmi_info,
    calculate_bmi,
    profile_bmi_category,
    recommended_category,
)
from domain.services.exercise_resolver import (
    DEFAULT_PAGE_SIZE,
    ExercisePage,
    ExerciseResolver,
)
from domain.services.nutrition import (
    IntakeSummary,
    MealEntry,
    NutritionTargets,
    daily_targets,
    summarize_intake,
)
from domain.services.progress import (
    DailyLogGroup,
    Period,
    WorkoutStats,
    filter_by_period,
    group_by_date,
    summarize,
)

__all__ = [
    # BMI
    "calculate_bmi",
    "bmi_category",
    "bmi_info",
    "profile_bmi_category",
    "recommended_category",
    # Resolver
    "ExerciseResolver",
    "ExercisePage",
    "DEFAULT_PAGE_SIZE",
    # Progress
    "DailyLogGroup",
    "Period",
    "WorkoutStats",
    "group_by_date",
    "filter_by_period",
    "summarize",
    # Nutrition
    "NutritionTargets",
    "MealEntry",
    "IntakeSummary",
    "daily_targets",
    "summarize_intake",
]
