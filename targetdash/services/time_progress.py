from __future__ import annotations

import logging
from collections.abc import Sequence
from itertools import accumulate

from targetdash.models.enums import NullReason, ProgressMode
from targetdash.services.allocation import weights_for_mode
from targetdash.services.arithmetic import DivisionResult, safe_divide
from targetdash.utils.series import MONTHS, has_twelve, length


logger = logging.getLogger("targetdash.time")


def month_to_quarter(month: int) -> int:
    if month <= 3:
        return 1
    if month <= 6:
        return 2
    if month <= 9:
        return 3
    return 4


def quarter_bounds(quarter: int) -> tuple[int, int]:
    start = (quarter - 1) * 3 + 1
    return start, start + 2


def linear_progress_year(month: int) -> float:
    return month / MONTHS


def weighted_progress_year(weights: Sequence[float] | None, month: int) -> float | None:
    if not has_twelve(weights):
        logger.warning("weighted_progress_year: expected 12 weights, got %d.", length(weights))
        return None
    return sum(weights[:month])


def progress_curve(
    mode: ProgressMode | str,
    weights: Sequence[float] | None = None,
    prior_year: Sequence[float | None] | None = None,
) -> list[float] | None:
    """Cumulative fraction of the year consumed, indexed by month (index 0 is 0.0)."""
    if ProgressMode(mode) == ProgressMode.linear:
        return [linear_progress_year(month) for month in range(MONTHS + 1)]
    monthly = weights_for_mode(mode, weights, prior_year)
    if not monthly:
        return None
    return [0.0, *accumulate(monthly)]


def cumulative_progress(
    mode: ProgressMode | str,
    month: int,
    weights: Sequence[float] | None = None,
    prior_year: Sequence[float | None] | None = None,
) -> float | None:
    if month <= 0:
        return 0.0
    if ProgressMode(mode) == ProgressMode.linear:
        return linear_progress_year(min(month, MONTHS))
    curve = progress_curve(mode, weights, prior_year)
    if curve is None:
        return None
    return curve[min(month, MONTHS)]


def prior_year_progress_year(prior_year: Sequence[float | None], month: int) -> float | None:
    return cumulative_progress(ProgressMode.prior_year_actual, month, prior_year=prior_year)


def _quarter_span(
    mode: ProgressMode | str,
    month: int,
    weights: Sequence[float] | None,
    prior_year: Sequence[float | None] | None,
) -> tuple[float, float, float] | None:
    start, end = quarter_bounds(month_to_quarter(month))
    at_start = cumulative_progress(mode, start - 1, weights, prior_year)
    at_month = cumulative_progress(mode, month, weights, prior_year)
    at_end = cumulative_progress(mode, end, weights, prior_year)
    if at_start is None or at_month is None or at_end is None:
        return None
    return at_start, at_month, at_end


def quarter_progress(
    mode: ProgressMode | str,
    month: int,
    weights: Sequence[float] | None = None,
    prior_year: Sequence[float | None] | None = None,
) -> float | None:
    span = _quarter_span(mode, month, weights, prior_year)
    if span is None:
        return None
    at_start, at_month, _ = span
    return at_month - at_start


def quarter_completion(
    mode: ProgressMode | str,
    month: int,
    weights: Sequence[float] | None = None,
    prior_year: Sequence[float | None] | None = None,
) -> float | None:
    span = _quarter_span(mode, month, weights, prior_year)
    if span is None:
        return None
    at_start, at_month, at_end = span
    return safe_divide(at_month - at_start, at_end - at_start).value


def quarterly_target_slices(
    annual_target: float,
    mode: ProgressMode | str,
    weights: Sequence[float] | None = None,
    prior_year: Sequence[float | None] | None = None,
) -> list[float]:
    curve = progress_curve(mode, weights, prior_year)
    if curve is None:
        return []
    slices: list[float] = []
    for quarter in range(1, 5):
        start, end = quarter_bounds(quarter)
        slices.append(annual_target * (curve[end] - curve[start - 1]))
    return slices


def expected_cumulative_target(
    annual_target: float,
    mode: ProgressMode | str,
    month: int,
    weights: Sequence[float] | None = None,
    prior_year: Sequence[float | None] | None = None,
) -> float | None:
    progress = cumulative_progress(mode, month, weights, prior_year)
    if progress is None:
        return None
    return annual_target * progress


def time_achievement_rate(
    ytd_actual: float | None,
    annual_target: float,
    mode: ProgressMode | str,
    month: int,
    weights: Sequence[float] | None = None,
    prior_year: Sequence[float | None] | None = None,
) -> DivisionResult:
    if ytd_actual is None:
        return DivisionResult(value=None, reason=NullReason.no_current_data)
    expected = expected_cumulative_target(annual_target, mode, month, weights, prior_year)
    if expected is None:
        return DivisionResult(value=None, reason=NullReason.no_baseline_data)
    return safe_divide(ytd_actual, expected)


def quarter_time_achievement_rate(
    qtd_actual: float | None,
    annual_target: float,
    mode: ProgressMode | str,
    month: int,
    weights: Sequence[float] | None = None,
    prior_year: Sequence[float | None] | None = None,
) -> DivisionResult:
    if qtd_actual is None:
        return DivisionResult(value=None, reason=NullReason.no_current_data)
    progress = quarter_progress(mode, month, weights, prior_year)
    if progress is None:
        return DivisionResult(value=None, reason=NullReason.no_baseline_data)
    return safe_divide(qtd_actual, annual_target * progress)
