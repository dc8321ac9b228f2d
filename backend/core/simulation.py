from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

from backend.core.alignment import (
    AlignmentCategory,
    Goal,
    alignment_category,
    alignment_score,
    nearest_goal,
)
from backend.core.projection import ProjectionPoint, ProjectionRequest, simulate
from backend.core.suggestions import Suggestion, generate_suggestions

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectionSummary:
    initial_wealth: float
    final_value: float
    total_growth: float
    years_projected: int

    @classmethod
    def from_projection(
        cls, initial_wealth: float, projection: Sequence[ProjectionPoint]
    ) -> "ProjectionSummary":
        final_value = projection[-1].projected_value if projection else 0.0
        return cls(
            initial_wealth=initial_wealth,
            final_value=final_value,
            total_growth=final_value - initial_wealth,
            years_projected=len(projection),
        )


@dataclass(frozen=True)
class SimulationOutcome:
    projection: List[ProjectionPoint]
    alignment_score: float
    category: AlignmentCategory
    suggestions: List[Suggestion]
    summary: ProjectionSummary


def run_simulation(
    request: ProjectionRequest,
    goals: Sequence[Goal],
    as_of_year: int,
) -> SimulationOutcome:
    """
    Project wealth, then score and advise against the client's goals.

    The score is measured against the goal nearest to ``as_of_year``;
    suggestions are built against the primary goal (the first one supplied)
    using that score. Without goals the score is 0 and nothing is suggested.
    """
    projection = simulate(request, as_of_year)

    score = 0.0
    suggestions: List[Suggestion] = []
    if goals:
        scored_goal = nearest_goal(goals, as_of_year)
        score = alignment_score(projection, scored_goal.target_year, scored_goal.target_value)

        primary_goal = goals[0]
        suggestions = generate_suggestions(
            projection,
            target_year=primary_goal.target_year,
            target_value=primary_goal.target_value,
            alignment_score=score,
            as_of_year=as_of_year,
        )

    LOGGER.debug(
        "simulation: %d points, %d goals, score=%.2f, %d suggestions",
        len(projection),
        len(goals),
        score,
        len(suggestions),
    )

    return SimulationOutcome(
        projection=projection,
        alignment_score=score,
        category=alignment_category(score),
        suggestions=suggestions,
        summary=ProjectionSummary.from_projection(request.initial_wealth, projection),
    )


__all__ = ["ProjectionSummary", "SimulationOutcome", "run_simulation"]
