import logging
import math

import pytest

from targetdash.schemas.records import MonthlyActualRecord
from targetdash.services.planned_actuals import (
    allocate_remaining_gap,
    filter_monthly_actuals,
    generate_monthly_planned_actuals,
    planned_actuals_from_series,
)

TAIL_HEAVY = [0.05, 0.05] + [0.1] * 8 + [0.05, 0.05]


def _actual(month: int, value: float, org_id: str = "ORG1", product: str = "auto") -> MonthlyActualRecord:
    return MonthlyActualRecord(year=2026, month=month, org_id=org_id, product=product, monthly_actual=value)


def test_linear_plan_spreads_gap_evenly() -> None:
    planned = generate_monthly_planned_actuals(1200, [_actual(1, 100)], "linear")
    assert planned[0] == 100
    assert planned[1:] == [100.0] * 11


def test_target_already_met_leaves_future_months_empty() -> None:
    records = [_actual(1, 700), _actual(2, 600)]
    planned = generate_monthly_planned_actuals(1200, records, "linear")
    assert planned[:2] == [700, 600]
    assert planned[2:] == [None] * 10


def test_weighted_plan_renormalizes_over_future_months() -> None:
    records = [_actual(1, 100), _actual(2, 100)]
    planned = generate_monthly_planned_actuals(1000, records, "weighted", TAIL_HEAVY)
    assert planned[:2] == [100, 100]
    assert planned[2] == pytest.approx(800 * 0.1 / 0.9)
    assert planned[11] == pytest.approx(800 * 0.05 / 0.9)
    assert sum(planned) == pytest.approx(1000)


def test_weighted_plan_with_zero_future_weights(caplog: pytest.LogCaptureFixture) -> None:
    weights = [0.5, 0.5] + [0.0] * 10
    with caplog.at_level(logging.ERROR, logger="targetdash.planned"):
        planned = generate_monthly_planned_actuals(100, [_actual(1, 10), _actual(2, 10)], "weighted", weights)
    assert planned[:2] == [10, 10]
    assert planned[2:] == [None] * 10
    assert "sum to 0" in caplog.text


def test_prior_year_plan_follows_last_year_shape() -> None:
    records = [_actual(month, 100) for month in range(1, 7)]
    prior_year = [100.0] * 6 + [200.0] * 6
    planned = generate_monthly_planned_actuals(1500, records, "2025-actual", prior_year=prior_year)
    assert planned[6:] == pytest.approx([150.0] * 6)


def test_missing_mode_inputs_produce_an_empty_plan() -> None:
    assert generate_monthly_planned_actuals(1200, [_actual(1, 100)], "weighted") == [None] * 12
    assert generate_monthly_planned_actuals(1200, [], "actual2025", prior_year=[1.0] * 3) == [None] * 12


def test_nan_actuals_are_treated_as_unobserved() -> None:
    planned = generate_monthly_planned_actuals(1200, [_actual(1, math.nan)], "linear")
    assert planned == [100.0] * 12


def test_plan_from_series() -> None:
    series = [300.0, None, 300.0] + [None] * 9
    planned = planned_actuals_from_series(1200, series, "linear")
    assert planned[0] == 300
    assert planned[2] == 300
    assert planned[1] == pytest.approx(600 / 10)
    assert sum(planned) == pytest.approx(1200)


def test_allocate_remaining_gap_modes() -> None:
    assert allocate_remaining_gap(90, [], "linear") == {}
    assert allocate_remaining_gap(90, [10, 11, 12], "linear") == {10: 30, 11: 30, 12: 30}
    assert allocate_remaining_gap(90, [11, 12], "weighted") == {}
    prior = [None] * 10 + [10.0, 20.0]
    planned = allocate_remaining_gap(90, [11, 12], "actual2025", prior_year=prior)
    assert planned == pytest.approx({11: 30, 12: 60})


def test_filter_monthly_actuals() -> None:
    records = [_actual(1, 10), _actual(1, 20, org_id="ORG2"), _actual(1, 30, product="life")]
    assert filter_monthly_actuals(records, "ORG1", "auto") == [records[0]]
