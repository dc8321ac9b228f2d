from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from backend.core.scheduler import CashFlowEvent, net_contribution

LOGGER = logging.getLogger(__name__)

DEFAULT_HORIZON_END_YEAR = 2060


@dataclass(frozen=True)
class ProjectionRequest:
    initial_wealth: float
    annual_rate: float
    events: Sequence[CashFlowEvent] = field(default_factory=tuple)
    horizon_end_year: Optional[int] = None


@dataclass(frozen=True)
class ProjectionPoint:
    year: int
    projected_value: float


def monthly_rate(annual_rate: float) -> float:
    """Per-month rate whose 12-fold compounding equals ``annual_rate``."""
    return (1.0 + annual_rate) ** (1.0 / 12.0) - 1.0


def simulate(request: ProjectionRequest, as_of_year: int) -> List[ProjectionPoint]:
    """
    Project wealth year by year from ``as_of_year`` to the horizon end (inclusive).

    Order of operations (per month):
      1) Add the month's net event contribution at the START of the month.
      2) Apply one month of growth to the resulting balance.

    Values are rounded to cents only when the year-end snapshot is recorded;
    the running balance keeps full precision between months and years.
    An end year before ``as_of_year`` yields an empty list.
    """
    end_year = (
        request.horizon_end_year
        if request.horizon_end_year is not None
        else DEFAULT_HORIZON_END_YEAR
    )
    growth = 1.0 + monthly_rate(request.annual_rate)
    events = tuple(request.events)

    balance = float(request.initial_wealth)
    points: List[ProjectionPoint] = []

    for year in range(as_of_year, end_year + 1):
        for month in range(1, 13):
            balance = (balance + net_contribution(events, year, month)) * growth

        points.append(ProjectionPoint(year=year, projected_value=round(balance, 2)))

    LOGGER.debug(
        "projected %d years (%s-%s) over %d events",
        len(points),
        as_of_year,
        end_year,
        len(events),
    )
    return points


def value_at_year(projection: Sequence[ProjectionPoint], year: int) -> float:
    """Projected value for ``year``, or 0.0 when the year is outside the series."""
    for point in projection:
        if point.year == year:
            return point.projected_value
    return 0.0


__all__ = [
    "DEFAULT_HORIZON_END_YEAR",
    "ProjectionRequest",
    "ProjectionPoint",
    "monthly_rate",
    "simulate",
    "value_at_year",
]
