import pytest

from targetdash.models.enums import NullReason
from targetdash.services.time_progress import (
    cumulative_progress,
    expected_cumulative_target,
    linear_progress_year,
    month_to_quarter,
    prior_year_progress_year,
    progress_curve,
    quarter_bounds,
    quarter_completion,
    quarter_progress,
    quarter_time_achievement_rate,
    quarterly_target_slices,
    time_achievement_rate,
    weighted_progress_year,
)

FRONT_LOADED = [0.05, 0.05, 0.05, 0.05, 0.08, 0.08, 0.08, 0.08, 0.10, 0.10, 0.10, 0.18]
ACTUALS_2025 = [100, 120, 150, 200, 220, 250, 280, 300, 320, 350, 380, 400]


@pytest.mark.parametrize(
    "month, quarter",
    [(1, 1), (3, 1), (4, 2), (6, 2), (7, 3), (9, 3), (10, 4), (12, 4)],
)
def test_month_to_quarter(month: int, quarter: int) -> None:
    assert month_to_quarter(month) == quarter


def test_quarter_bounds() -> None:
    assert quarter_bounds(1) == (1, 3)
    assert quarter_bounds(4) == (10, 12)


def test_linear_progress() -> None:
    assert linear_progress_year(6) == 0.5
    assert linear_progress_year(12) == 1.0
    assert cumulative_progress("linear", 3) == 0.25
    assert cumulative_progress("linear", 0) == 0.0


def test_weighted_progress_is_cumulative_weight() -> None:
    assert weighted_progress_year(FRONT_LOADED, 3) == pytest.approx(0.15)
    assert cumulative_progress("weighted", 6, FRONT_LOADED) == pytest.approx(0.36)
    assert cumulative_progress("weighted", 12, FRONT_LOADED) == pytest.approx(1.0)


def test_weighted_progress_rejects_bad_weights() -> None:
    assert weighted_progress_year([0.5, 0.5], 1) is None
    assert cumulative_progress("weighted", 3, [0.5, 0.5]) is None


def test_prior_year_progress_uses_prior_year_shape() -> None:
    assert prior_year_progress_year(ACTUALS_2025, 1) == pytest.approx(100 / 3070)
    assert prior_year_progress_year(ACTUALS_2025, 3) == pytest.approx(370 / 3070)
    assert prior_year_progress_year(ACTUALS_2025, 12) == pytest.approx(1.0)


def test_progress_curve_starts_at_zero() -> None:
    curve = progress_curve("weighted", FRONT_LOADED)
    assert curve is not None
    assert len(curve) == 13
    assert curve[0] == 0.0
    assert curve[12] == pytest.approx(1.0)


def test_quarter_progress_is_relative_to_quarter_start() -> None:
    assert quarter_progress("linear", 5) == pytest.approx(2 / 12)
    assert quarter_progress("linear", 4) == pytest.approx(1 / 12)
    assert quarter_progress("weighted", 5, FRONT_LOADED) == pytest.approx(0.13)
    assert quarter_progress("weighted", 1, FRONT_LOADED) == pytest.approx(0.05)


def test_quarter_completion_normalizes_by_quarter_share() -> None:
    assert quarter_completion("linear", 5) == pytest.approx(2 / 3)
    assert quarter_completion("weighted", 5, FRONT_LOADED) == pytest.approx(0.13 / 0.21)
    zero_q1 = [0, 0, 0, 0.25, 0.25, 0.25, 0.25, 0, 0, 0, 0, 0]
    assert quarter_completion("weighted", 2, zero_q1) is None


def test_quarterly_target_slices() -> None:
    assert quarterly_target_slices(1200, "linear") == pytest.approx([300, 300, 300, 300])
    slices = quarterly_target_slices(1000, "weighted", FRONT_LOADED)
    assert slices == pytest.approx([150, 210, 260, 380])
    assert quarterly_target_slices(1000, "weighted", None) == []


def test_expected_cumulative_target() -> None:
    assert expected_cumulative_target(1200, "linear", 6) == pytest.approx(600)
    assert expected_cumulative_target(1200, "weighted", 6, None) is None


def test_time_achievement_rate() -> None:
    result = time_achievement_rate(500, 1200, "linear", 6)
    assert result.value == pytest.approx(500 / 600)
    assert result.reason is None


def test_time_achievement_rate_unobserved_ytd_is_null() -> None:
    result = time_achievement_rate(None, 1200, "linear", 6)
    assert result.value is None
    assert result.reason == NullReason.no_current_data


def test_time_achievement_rate_zero_expected_is_null() -> None:
    result = time_achievement_rate(100, 0, "linear", 6)
    assert result.value is None
    assert result.reason == "division_by_zero"


def test_quarter_time_achievement_rate() -> None:
    result = quarter_time_achievement_rate(150, 1200, "linear", 5)
    assert result.value == pytest.approx(150 / 200)
    assert quarter_time_achievement_rate(None, 1200, "linear", 5).value is None


def test_progress_past_december_stays_at_full_year() -> None:
    assert cumulative_progress("linear", 13) == 1.0
    assert cumulative_progress("weighted", 13, FRONT_LOADED) == pytest.approx(1.0)


def test_weighted_progress_without_weights_is_null() -> None:
    assert weighted_progress_year(None, 3) is None
