from __future__ import annotations

from datetime import date
from math import isclose

import pytest

from backend.core.projection import (
    ProjectionRequest,
    monthly_rate,
    simulate,
    value_at_year,
)
from backend.core.scheduler import CashFlowEvent, Frequency

GROWTH_4PCT = 1.04 ** (1 / 12)


def run(initial_wealth=100000.0, annual_rate=0.04, events=(), end_year=2025, as_of_year=2024):
    request = ProjectionRequest(
        initial_wealth=initial_wealth,
        annual_rate=annual_rate,
        events=list(events),
        horizon_end_year=end_year,
    )
    return simulate(request, as_of_year=as_of_year)


def test_monthly_rate_compounds_back_to_annual_rate():
    assert isclose((1 + monthly_rate(0.04)) ** 12, 1.04, rel_tol=1e-12)
    assert isclose(monthly_rate(0.04), 0.0032737, abs_tol=1e-7)
    assert monthly_rate(0.0) == 0.0


def test_simple_projection_without_events():
    rows = run()

    assert [row.year for row in rows] == [2024, 2025]
    # monthly-equivalent compounding reproduces the annual rate exactly
    assert rows[0].projected_value == pytest.approx(104000.0, abs=0.01)
    assert rows[1].projected_value == pytest.approx(108160.0, abs=0.01)


def test_twelve_percent_rate():
    rows = run(annual_rate=0.12)

    assert rows[0].projected_value == pytest.approx(112000.0, abs=0.01)


def test_zero_rate_keeps_wealth_constant():
    rows = run(annual_rate=0.0, end_year=2030)

    assert len(rows) == 7
    for row in rows:
        assert row.projected_value == 100000.0


def test_once_contribution_in_january():
    event = CashFlowEvent(amount=12000.0, frequency=Frequency.ONCE, start_date=date(2024, 1, 1))
    rows = run(events=[event])

    assert rows[0].projected_value == pytest.approx(112000.0 * 1.04, abs=0.01)
    # the one-off event does not repeat the following year
    assert rows[1].projected_value == pytest.approx(112000.0 * 1.04 ** 2, abs=0.01)


def test_monthly_contribution_compounds_above_simple_sum():
    event = CashFlowEvent(amount=1000.0, frequency=Frequency.MONTHLY, start_date=date(2024, 1, 1))
    rows = run(events=[event])

    expected = 100000.0 * 1.04 + sum(1000.0 * GROWTH_4PCT ** k for k in range(1, 13))
    assert rows[0].projected_value == pytest.approx(expected, abs=0.01)
    assert rows[0].projected_value > 116000.0


def test_yearly_contribution_lands_each_january():
    event = CashFlowEvent(amount=10000.0, frequency=Frequency.YEARLY, start_date=date(2024, 1, 1))
    rows = run(events=[event], end_year=2026)

    assert len(rows) == 3
    assert rows[0].projected_value == pytest.approx(114400.0, abs=0.01)
    assert rows[1].projected_value == pytest.approx((114400.0 + 10000.0) * 1.04, abs=0.01)


def test_withdrawal_reduces_year_end_value():
    event = CashFlowEvent(amount=-5000.0, frequency=Frequency.ONCE, start_date=date(2024, 6, 1))
    rows = run(events=[event])

    # withdrawn at the start of June, so it misses seven months of growth
    expected = 104000.0 - 5000.0 * GROWTH_4PCT ** 7
    assert rows[0].projected_value == pytest.approx(expected, abs=0.01)
    assert rows[0].projected_value < 104000.0


def test_zero_initial_wealth_with_contributions():
    event = CashFlowEvent(amount=1000.0, frequency=Frequency.MONTHLY, start_date=date(2024, 1, 1))
    rows = run(initial_wealth=0.0, events=[event])

    assert rows[0].projected_value > 12000.0


def test_default_horizon_runs_through_2060():
    request = ProjectionRequest(initial_wealth=100000.0, annual_rate=0.04)
    rows = simulate(request, as_of_year=2024)

    assert len(rows) == 2060 - 2024 + 1
    assert rows[-1].year == 2060


def test_horizon_before_as_of_year_is_empty():
    assert run(end_year=2023) == []


def test_values_are_rounded_to_cents():
    rows = run(initial_wealth=100000.123456, end_year=2040)

    for row in rows:
        assert row.projected_value == round(row.projected_value, 2)


def test_positive_rate_without_withdrawals_never_decreases():
    events = [
        CashFlowEvent(amount=250.0, frequency=Frequency.MONTHLY, start_date=date(2026, 3, 1)),
        CashFlowEvent(amount=4000.0, frequency=Frequency.YEARLY, start_date=date(2025, 12, 1)),
    ]
    rows = run(initial_wealth=5000.0, annual_rate=0.07, events=events, end_year=2060)

    values = [row.projected_value for row in rows]
    assert values == sorted(values)


def test_events_are_summed_within_the_same_month():
    half = CashFlowEvent(amount=500.0, frequency=Frequency.MONTHLY, start_date=date(2024, 1, 1))
    whole = CashFlowEvent(amount=1000.0, frequency=Frequency.MONTHLY, start_date=date(2024, 1, 1))

    split = run(events=[half, half], end_year=2035)
    combined = run(events=[whole], end_year=2035)

    assert [r.projected_value for r in split] == [r.projected_value for r in combined]


def test_event_order_does_not_matter():
    events = [
        CashFlowEvent(amount=800.0, frequency=Frequency.MONTHLY, start_date=date(2024, 2, 1)),
        CashFlowEvent(amount=-20000.0, frequency=Frequency.ONCE, start_date=date(2027, 9, 1)),
        CashFlowEvent(amount=3000.0, frequency=Frequency.YEARLY, start_date=date(2025, 7, 1)),
    ]

    forward = run(events=events, end_year=2040)
    backward = run(events=list(reversed(events)), end_year=2040)

    assert [r.projected_value for r in forward] == pytest.approx([r.projected_value for r in backward])


def test_repeated_runs_are_independent():
    event = CashFlowEvent(amount=1000.0, frequency=Frequency.MONTHLY, start_date=date(2024, 1, 1))
    request = ProjectionRequest(initial_wealth=1000.0, annual_rate=0.05, events=[event], horizon_end_year=2030)

    assert simulate(request, as_of_year=2024) == simulate(request, as_of_year=2024)


def test_value_at_year_defaults_to_zero():
    rows = run()

    assert value_at_year(rows, 2025) == rows[1].projected_value
    assert value_at_year(rows, 2099) == 0.0
