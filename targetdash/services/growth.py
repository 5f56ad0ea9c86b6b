from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from targetdash.models.enums import NullReason
from targetdash.services.arithmetic import DivisionResult, safe_divide
from targetdash.services.time_progress import month_to_quarter, quarter_bounds
from targetdash.utils.series import observed, sum_observed


@dataclass(frozen=True)
class PeriodValues:
    month: float | None
    quarter: float | None
    ytd: float | None


@dataclass(frozen=True)
class GrowthMetrics:
    growth_month_rate: float | None
    growth_quarter_rate: float | None
    growth_ytd_rate: float | None
    inc_month: float | None
    inc_quarter: float | None
    inc_ytd: float | None
    reason: NullReason | None = None


def period_values(series: Sequence[float | None], month: int) -> PeriodValues:
    if month < 1 or month > len(series):
        return PeriodValues(month=None, quarter=None, ytd=None)
    start, _ = quarter_bounds(month_to_quarter(month))
    return PeriodValues(
        month=observed(series[month - 1]),
        quarter=sum_observed(series[start - 1 : month]),
        ytd=sum_observed(series[:month]),
    )


def _safe_subtract(a: float | None, b: float | None) -> float | None:
    if a is None or b is None:
        return None
    return a - b


def _safe_growth_rate(current: float | None, baseline: float | None) -> DivisionResult:
    if current is None:
        return DivisionResult(value=None, reason=NullReason.no_current_data)
    if baseline is None:
        return DivisionResult(value=None, reason=NullReason.no_baseline_data)
    return safe_divide(current - baseline, baseline)


def calculate_growth_metrics(current: PeriodValues, baseline: PeriodValues) -> GrowthMetrics:
    month = _safe_growth_rate(current.month, baseline.month)
    quarter = _safe_growth_rate(current.quarter, baseline.quarter)
    ytd = _safe_growth_rate(current.ytd, baseline.ytd)

    return GrowthMetrics(
        growth_month_rate=month.value,
        growth_quarter_rate=quarter.value,
        growth_ytd_rate=ytd.value,
        inc_month=_safe_subtract(current.month, baseline.month),
        inc_quarter=_safe_subtract(current.quarter, baseline.quarter),
        inc_ytd=_safe_subtract(current.ytd, baseline.ytd),
        reason=month.reason or quarter.reason or ytd.reason,
    )
