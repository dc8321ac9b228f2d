"""Cash-flow event scheduling: which events land in a given calendar month."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, List, Optional

# Events without an end date run until this year.
DEFAULT_EVENT_END_YEAR = 2060


class Frequency(str, Enum):
    ONCE = "ONCE"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


@dataclass(frozen=True)
class CashFlowEvent:
    """
    One scheduled contribution (positive amount) or withdrawal (negative).

    Only the year and month of the dates are used; the day is ignored.
    """

    amount: float
    frequency: Frequency
    start_date: date
    end_date: Optional[date] = None

    @property
    def end_year(self) -> int:
        return self.end_date.year if self.end_date is not None else DEFAULT_EVENT_END_YEAR


def _is_active(event: CashFlowEvent, year: int, month: int) -> bool:
    start = event.start_date
    if year < start.year or year > event.end_year:
        return False

    if event.frequency == Frequency.ONCE:
        return year == start.year and month == start.month

    if event.frequency == Frequency.YEARLY:
        return month == start.month

    if event.frequency == Frequency.MONTHLY:
        # every month from January of the start year; cut off after the end month
        if event.end_date is not None and year == event.end_date.year and month > event.end_date.month:
            return False
        return True

    return False


def active_events_for_month(events: Iterable[CashFlowEvent], year: int, month: int) -> List[CashFlowEvent]:
    """Return the events that fire in ``month`` (1-12) of ``year``."""
    return [event for event in events if _is_active(event, year, month)]


def net_contribution(events: Iterable[CashFlowEvent], year: int, month: int) -> float:
    """Sum of the amounts of every event active in the given month."""
    return sum((event.amount for event in active_events_for_month(events, year, month)), 0.0)


__all__ = [
    "DEFAULT_EVENT_END_YEAR",
    "Frequency",
    "CashFlowEvent",
    "active_events_for_month",
    "net_contribution",
]
