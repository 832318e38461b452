"""
Progress views over workout history.

Grouping by calendar day, period filters and per-category counts used by
the progress screen.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Dict, Iterable, List, Sequence

from domain.models import ExerciseCategory, WorkoutLog


class Period(str, Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    ALL = "all"


PERIOD_DAYS = {
    Period.WEEK: 7,
    Period.MONTH: 30,
}


@dataclass
class DailyLogGroup:
    """All entries completed on one calendar day."""

    date: date
    entries: List[WorkoutLog] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.entries)


@dataclass
class WorkoutStats:
    total: int = 0
    strength: int = 0
    cardio: int = 0
    core: int = 0


def group_by_date(entries: Iterable[WorkoutLog]) -> List[DailyLogGroup]:
    """
    Bucket entries by completion day, newest day first.

    Entries keep their input order inside each group, so a list already
    sorted newest-first stays newest-first per day.
    """
    groups: Dict[date, DailyLogGroup] = {}
    for entry in entries:
        day = entry.completed_on
        if day not in groups:
            groups[day] = DailyLogGroup(date=day)
        groups[day].entries.append(entry)

    return sorted(groups.values(), key=lambda g: g.date, reverse=True)


def filter_by_period(
    groups: Sequence[DailyLogGroup],
    period: Period,
    today: date,
) -> List[DailyLogGroup]:
    """Keep the day groups that fall inside `period` counted back from `today`."""
    period = Period(period)
    if period is Period.ALL:
        return list(groups)
    if period is Period.TODAY:
        return [g for g in groups if g.date == today]

    cutoff = today - timedelta(days=PERIOD_DAYS[period])
    return [g for g in groups if g.date >= cutoff]


def summarize(entries: Iterable[WorkoutLog]) -> WorkoutStats:
    stats = WorkoutStats()
    for entry in entries:
        stats.total += 1
        if entry.category is ExerciseCategory.STRENGTH:
            stats.strength += 1
        elif entry.category is ExerciseCategory.CARDIO:
            stats.cardio += 1
        elif entry.category is ExerciseCategory.CORE:
            stats.core += 1
    return stats
