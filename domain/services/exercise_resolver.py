"""
Exercise resolution for a user profile.

Turns the static catalog plus a profile into the ordered, paginated list of
exercises the user can actually do. The pipeline is:

1. location filter
2. equipment substitution (Gym only, single replacement hop)
3. muscle / difficulty / "home" query filter
4. BMI priority sort (stable partition)
5. category filter
6. pagination

Stage order matters: the substitution pass walks the full catalog and then
re-applies the location filter, and the category filter runs after the
sort so the BMI bias never depends on it.

Everything here is pure: no I/O, no randomness, no mutable state.
"""

import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from domain.models import (
    BMICategory,
    Exercise,
    ExerciseCategory,
    UserProfile,
    WorkoutLocation,
)
from domain.services.bmi import profile_bmi_category

DEFAULT_PAGE_SIZE = 8
ALL_CATEGORIES = "All"
HOME_QUERY = "home"


@dataclass
class ExercisePage:
    """One page of resolved exercises."""

    items: List[Exercise] = field(default_factory=list)
    total_count: int = 0
    total_pages: int = 0
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def is_empty(self) -> bool:
        return self.total_count == 0


def filter_by_location(exercises: Iterable[Exercise], location: str) -> List[Exercise]:
    return [ex for ex in exercises if ex.is_available_at(location)]


def substitute_equipment(
    catalog: Sequence[Exercise],
    available_equipment: Iterable[str],
) -> List[Exercise]:
    """
    Swap machine exercises the user cannot do for their replacement.

    Walks the full catalog in order. An exercise whose equipment is
    available (or that needs none) is kept unless it is itself a
    replacement. An exercise needing missing equipment is replaced by the
    first catalog entry whose replaces_id points at it, or dropped when
    there is none.
    """
    available = set(available_equipment or [])
    pool: List[Exercise] = []

    for ex in catalog:
        is_available = ex.equipment_required in available if ex.requires_equipment else True

        if is_available and not ex.is_replacement:
            pool.append(ex)
        elif ex.requires_equipment and not is_available:
            replacement = next((rep for rep in catalog if rep.replaces_id == ex.id), None)
            if replacement is not None:
                pool.append(replacement)

    return pool


def filter_by_query(exercises: Iterable[Exercise], query: Optional[str]) -> List[Exercise]:
    """
    Case-insensitive filter on one free-text box.

    An exercise matches when any muscle tag contains the query, when its
    difficulty equals the query, or when the query is "home" and the
    exercise can be done at home. "beginner" therefore matches by
    difficulty, not by muscle.
    """
    if not query:
        return list(exercises)

    search = query.lower()
    matched = []
    for ex in exercises:
        matches_muscle = any(search in muscle.lower() for muscle in ex.muscles)
        matches_difficulty = ex.difficulty.value.lower() == search
        matches_location = search == HOME_QUERY and WorkoutLocation.HOME in ex.location
        if matches_muscle or matches_difficulty or matches_location:
            matched.append(ex)
    return matched


def prioritize_for_bmi(exercises: Iterable[Exercise], category: BMICategory) -> List[Exercise]:
    """
    Move the category that suits the BMI to the front.

    Underweight favours Strength, Overweight favours Cardio. This is a
    stable partition: order inside each half is preserved.
    """
    exercises = list(exercises)
    if category is BMICategory.UNDERWEIGHT:
        preferred = ExerciseCategory.STRENGTH
    elif category is BMICategory.OVERWEIGHT:
        preferred = ExerciseCategory.CARDIO
    else:
        return exercises

    first = [ex for ex in exercises if ex.category is preferred]
    rest = [ex for ex in exercises if ex.category is not preferred]
    return first + rest


def filter_by_category(exercises: Iterable[Exercise], category: Optional[str]) -> List[Exercise]:
    if not category or category == ALL_CATEGORIES:
        return list(exercises)
    return [ex for ex in exercises if ex.category.value == category]


def paginate(exercises: Sequence[Exercise], page: int, page_size: int) -> ExercisePage:
    """Slice a 1-based page. Pages past the end are empty, not errors."""
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")

    start = (page - 1) * page_size
    return ExercisePage(
        items=list(exercises[start:start + page_size]),
        total_count=len(exercises),
        total_pages=math.ceil(len(exercises) / page_size),
        page=page,
        page_size=page_size,
    )


class ExerciseResolver:
    """
    Resolves the catalog against a user profile.

    The catalog is injected so tests can use small hand-built catalogs.

    Usage:
        >>> resolver = ExerciseResolver(load_catalog())
        >>> page = resolver.resolve(profile, category="Strength", page=1)
        >>> page.items, page.total_pages
    """

    def __init__(self, catalog: Sequence[Exercise], page_size: int = DEFAULT_PAGE_SIZE):
        self._catalog = tuple(catalog)
        self._page_size = page_size

    @property
    def catalog(self):
        return self._catalog

    def resolve_all(
        self,
        profile: UserProfile,
        category: Optional[str] = ALL_CATEGORIES,
        muscle_query: Optional[str] = None,
    ) -> List[Exercise]:
        """Full filtered and sorted list, before pagination."""
        location = profile.location
        pool = filter_by_location(self._catalog, location)

        # Home-eligible exercises need no equipment, so only Gym substitutes
        if location is WorkoutLocation.GYM:
            pool = substitute_equipment(self._catalog, profile.available_equipment)
            pool = filter_by_location(pool, location)

        pool = filter_by_query(pool, muscle_query)
        pool = prioritize_for_bmi(pool, profile_bmi_category(profile))
        return filter_by_category(pool, category)

    def resolve(
        self,
        profile: UserProfile,
        category: Optional[str] = ALL_CATEGORIES,
        muscle_query: Optional[str] = None,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> ExercisePage:
        """
        Resolve one page of exercises for a profile.

        Args:
            profile: The user's profile (location, equipment, body metrics)
            category: "All" or an exercise category name
            muscle_query: Optional muscle / difficulty / "home" search text
            page: 1-based page number
            page_size: Overrides the resolver's page size

        Returns:
            ExercisePage with the page slice and totals. An empty result is
            a normal page with total_count == 0.
        """
        exercises = self.resolve_all(profile, category=category, muscle_query=muscle_query)
        return paginate(exercises, page, page_size or self._page_size)
