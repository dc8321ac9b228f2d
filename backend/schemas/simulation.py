"""Data contracts for the projection and simulation endpoints."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from backend.core.alignment import Goal
from backend.core.projection import ProjectionPoint, ProjectionRequest
from backend.core.scheduler import CashFlowEvent, Frequency
from backend.core.simulation import ProjectionSummary, SimulationOutcome
from backend.core.suggestions import Suggestion


class EventType(str, Enum):
    CONTRIBUTION = "CONTRIBUTION"
    WITHDRAWAL = "WITHDRAWAL"
    INCOME_CHANGE = "INCOME_CHANGE"
    EXPENSE_CHANGE = "EXPENSE_CHANGE"
    BONUS = "BONUS"
    OTHER = "OTHER"


class GoalType(str, Enum):
    RETIREMENT = "RETIREMENT"
    SHORT_TERM = "SHORT_TERM"
    MEDIUM_TERM = "MEDIUM_TERM"
    LONG_TERM = "LONG_TERM"
    EMERGENCY_FUND = "EMERGENCY_FUND"
    EDUCATION = "EDUCATION"
    REAL_ESTATE = "REAL_ESTATE"
    OTHER = "OTHER"


def _coerce_date(value):
    # accept full ISO datetimes ("2024-06-30T00:00:00Z") as well as plain dates
    if isinstance(value, str) and "T" in value:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    if isinstance(value, datetime):
        return value.date()
    return value


# -----------------------------
# Requests
# -----------------------------


class EventIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    type: Optional[EventType] = None
    value: float
    frequency: Frequency
    startDate: date
    endDate: Optional[date] = None
    isActive: bool = True

    @field_validator("startDate", "endDate", mode="before")
    @classmethod
    def parse_dates(cls, value):
        return _coerce_date(value)

    @model_validator(mode="after")
    def ensure_validity(self) -> "EventIn":
        if self.value == 0:
            raise ValueError("value must not be zero")
        if (
            self.endDate is not None
            and self.frequency != Frequency.ONCE
            and self.endDate <= self.startDate
        ):
            raise ValueError("endDate must be after startDate")
        return self

    def to_event(self) -> CashFlowEvent:
        return CashFlowEvent(
            amount=self.value,
            frequency=self.frequency,
            start_date=self.startDate,
            end_date=self.endDate,
        )


class GoalIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    type: Optional[GoalType] = None
    targetValue: float = Field(gt=0)
    targetDate: date
    priority: int = Field(default=1, ge=1, le=3)

    @field_validator("targetDate", mode="before")
    @classmethod
    def parse_target_date(cls, value):
        return _coerce_date(value)

    def to_goal(self) -> Goal:
        return Goal(target_value=self.targetValue, target_date=self.targetDate, title=self.title)


def _to_projection_request(payload, default_end_year: int) -> ProjectionRequest:
    """Build the engine request from a validated payload; inactive events are dropped."""
    return ProjectionRequest(
        initial_wealth=payload.initialWealth,
        annual_rate=payload.projectionRate,
        events=tuple(event.to_event() for event in payload.events if event.isActive),
        horizon_end_year=payload.endYear if payload.endYear is not None else default_end_year,
    )


class ProjectionIn(BaseModel):
    """Ad hoc projection request; every field has a sensible default."""

    model_config = ConfigDict(extra="forbid")

    initialWealth: float = Field(default=100000.0, ge=0)
    events: List[EventIn] = Field(default_factory=list)
    projectionRate: float = Field(default=0.04, ge=0, le=1)
    endYear: Optional[int] = Field(default=None, ge=1900, le=2200)

    def to_request(self, default_end_year: int) -> ProjectionRequest:
        return _to_projection_request(self, default_end_year)


class SimulationIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=2)
    description: Optional[str] = None
    initialWealth: float = Field(ge=0)
    projectionRate: float = Field(ge=0, le=1)
    events: List[EventIn] = Field(default_factory=list)
    goals: List[GoalIn] = Field(default_factory=list)
    endYear: Optional[int] = Field(default=None, ge=1900, le=2200)

    def to_request(self, default_end_year: int) -> ProjectionRequest:
        return _to_projection_request(self, default_end_year)

    def to_goals(self) -> List[Goal]:
        return [goal.to_goal() for goal in self.goals]


# -----------------------------
# Responses
# -----------------------------


class ProjectionPointOut(BaseModel):
    year: int
    projectedValue: float

    @classmethod
    def from_point(cls, point: ProjectionPoint) -> "ProjectionPointOut":
        return cls(year=point.year, projectedValue=point.projected_value)


class SummaryOut(BaseModel):
    initialWealth: float
    finalValue: float
    totalGrowth: float
    yearsProjected: int

    @classmethod
    def from_summary(cls, summary: ProjectionSummary) -> "SummaryOut":
        return cls(
            initialWealth=summary.initial_wealth,
            finalValue=summary.final_value,
            totalGrowth=summary.total_growth,
            yearsProjected=summary.years_projected,
        )


class SuggestionOut(BaseModel):
    type: str
    description: str
    impact: Optional[float] = None
    priority: int = Field(ge=1, le=3)

    @classmethod
    def from_suggestion(cls, suggestion: Suggestion) -> "SuggestionOut":
        return cls(
            type=suggestion.kind.value,
            description=suggestion.description,
            impact=suggestion.impact,
            priority=suggestion.priority,
        )


class AlignmentCategoryOut(BaseModel):
    key: str
    label: str


class ProjectionResponse(BaseModel):
    projectionData: List[ProjectionPointOut]
    summary: SummaryOut


class SimulationResponse(BaseModel):
    title: str
    description: Optional[str] = None
    initialWealth: float
    projectionRate: float
    asOfYear: int
    projectionData: List[ProjectionPointOut]
    alignmentScore: float = Field(ge=0, le=100)
    alignmentCategory: AlignmentCategoryOut
    suggestions: List[SuggestionOut]
    summary: SummaryOut

    @classmethod
    def from_outcome(
        cls, payload: SimulationIn, outcome: SimulationOutcome, as_of_year: int
    ) -> "SimulationResponse":
        return cls(
            title=payload.title,
            description=payload.description,
            initialWealth=payload.initialWealth,
            projectionRate=payload.projectionRate,
            asOfYear=as_of_year,
            projectionData=[ProjectionPointOut.from_point(p) for p in outcome.projection],
            alignmentScore=outcome.alignment_score,
            alignmentCategory=AlignmentCategoryOut(
                key=outcome.category.key, label=outcome.category.label
            ),
            suggestions=[SuggestionOut.from_suggestion(s) for s in outcome.suggestions],
            summary=SummaryOut.from_summary(outcome.summary),
        )


class PingResponse(BaseModel):
    message: str
