"""Alignment between a projected wealth curve and a client's goals."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence

from backend.core.projection import ProjectionPoint, value_at_year


@dataclass(frozen=True)
class Goal:
    target_value: float
    target_date: date
    title: Optional[str] = None

    @property
    def target_year(self) -> int:
        return self.target_date.year


@dataclass(frozen=True)
class AlignmentCategory:
    key: str
    label: str
    lower_bound: float  # exclusive


# Highest band first; a score falls in the first band whose lower bound it exceeds.
ALIGNMENT_CATEGORIES: List[AlignmentCategory] = [
    AlignmentCategory(key="green", label="Well aligned", lower_bound=90.0),
    AlignmentCategory(key="yellow-light", label="Moderately aligned", lower_bound=70.0),
    AlignmentCategory(key="yellow-dark", label="Poorly aligned", lower_bound=50.0),
]
MISALIGNED = AlignmentCategory(key="red", label="Misaligned", lower_bound=float("-inf"))


def alignment_score(
    projection: Sequence[ProjectionPoint],
    target_year: int,
    target_value: float,
) -> float:
    """
    Percentage of ``target_value`` reached by the projection in ``target_year``.

    A year outside the projection counts as 0; a zero target scores 0.
    The result is clamped to [0, 100].
    """
    if target_value == 0:
        return 0.0

    projected = value_at_year(projection, target_year)
    score = projected / target_value * 100
    return max(0.0, min(100.0, score))


def nearest_goal(goals: Sequence[Goal], as_of_year: int) -> Optional[Goal]:
    """Goal whose target year is closest to ``as_of_year``; the first one wins ties."""
    nearest: Optional[Goal] = None
    for goal in goals:
        if nearest is None or abs(goal.target_year - as_of_year) < abs(nearest.target_year - as_of_year):
            nearest = goal
    return nearest


def alignment_category(score: float) -> AlignmentCategory:
    for category in ALIGNMENT_CATEGORIES:
        if score > category.lower_bound:
            return category
    return MISALIGNED


__all__ = [
    "Goal",
    "AlignmentCategory",
    "ALIGNMENT_CATEGORIES",
    "MISALIGNED",
    "alignment_score",
    "nearest_goal",
    "alignment_category",
]
