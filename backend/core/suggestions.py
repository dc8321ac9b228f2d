from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from backend.core.projection import ProjectionPoint, value_at_year

# Scores at or above this need no action.
WELL_ALIGNED_SCORE = 90.0
REVIEW_STRATEGY_SCORE = 70.0
URGENT_ACTION_SCORE = 80.0
URGENT_ACTION_YEARS = 5
HIGH_PRIORITY_SCORE = 50.0


class SuggestionKind(str, Enum):
    INCREASE_CONTRIBUTION = "INCREASE_CONTRIBUTION"
    REVIEW_STRATEGY = "REVIEW_STRATEGY"
    URGENT_ACTION = "URGENT_ACTION"


@dataclass(frozen=True)
class Suggestion:
    kind: SuggestionKind
    description: str
    priority: int
    impact: Optional[float] = None


def generate_suggestions(
    projection: Sequence[ProjectionPoint],
    target_year: int,
    target_value: float,
    alignment_score: float,
    as_of_year: int,
) -> List[Suggestion]:
    """
    Recommendations for closing the gap between the projection and a target.

    Every rule is checked independently, so a badly aligned client close to
    their target date can receive all three suggestions at once.
    """
    if alignment_score >= WELL_ALIGNED_SCORE:
        return []

    suggestions: List[Suggestion] = []
    years_remaining = target_year - as_of_year
    gap = target_value - value_at_year(projection, target_year)

    if gap > 0 and years_remaining > 0:
        monthly_contribution = gap / (years_remaining * 12)
        suggestions.append(
            Suggestion(
                kind=SuggestionKind.INCREASE_CONTRIBUTION,
                description=(
                    f"Increase the monthly contribution by {monthly_contribution:.2f} "
                    "to reach the goal"
                ),
                impact=gap,
                priority=1 if alignment_score < HIGH_PRIORITY_SCORE else 2,
            )
        )

    if alignment_score < REVIEW_STRATEGY_SCORE:
        suggestions.append(
            Suggestion(
                kind=SuggestionKind.REVIEW_STRATEGY,
                description="Consider reviewing the investment strategy to improve alignment",
                priority=1,
            )
        )

    if years_remaining < URGENT_ACTION_YEARS and alignment_score < URGENT_ACTION_SCORE:
        suggestions.append(
            Suggestion(
                kind=SuggestionKind.URGENT_ACTION,
                description="Goal is near and poorly aligned. Urgent action required",
                priority=1,
            )
        )

    return suggestions


__all__ = [
    "SuggestionKind",
    "Suggestion",
    "generate_suggestions",
]
