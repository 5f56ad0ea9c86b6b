from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from targetdash.models.enums import NullReason, ProductCode, ProgressMode
from targetdash.schemas.records import HeadquartersTargetRecord
from targetdash.services.arithmetic import DivisionResult, safe_divide
from targetdash.services.time_progress import progress_curve, quarter_bounds
from targetdash.utils.series import MONTHS, has_twelve, length, observed, sum_observed


logger = logging.getLogger("targetdash.headquarters")

HQ_PRODUCTS = (ProductCode.auto, ProductCode.property, ProductCode.life)


@dataclass(frozen=True)
class HqMonthPoint:
    month: int
    value: float | None
    is_actual: bool
    cum_actual: float | None
    cum_target: float
    rate: float | None
    reason: NullReason | None = None


@dataclass(frozen=True)
class HqQuarterPoint:
    quarter: int
    actual: float | None
    target: float
    rate: float | None
    reason: NullReason | None = None


def aggregate_hq_targets_by_product(
    records: Iterable[HeadquartersTargetRecord],
    year: int | None = None,
) -> dict[ProductCode, float]:
    rows = list(records)
    years = {record.year for record in rows}
    if year is None and len(years) > 1:
        year = max(years)
        logger.warning("hq targets span years %s, using %d.", sorted(years), year)

    targets: dict[ProductCode, float] = {}
    for record in rows:
        if year is not None and record.year != year:
            continue
        product = ProductCode(record.product)
        if product not in HQ_PRODUCTS:
            continue
        targets[product] = targets.get(product, 0.0) + record.annual_target
    targets[ProductCode.total] = sum(targets.get(product, 0.0) for product in HQ_PRODUCTS)
    return targets


def calculate_hq_achievement_rate(actual_value: float, hq_target: float) -> DivisionResult:
    return safe_divide(actual_value, hq_target)


def calculate_hq_gap(actual_value: float, hq_target: float) -> float:
    return actual_value - hq_target


def calculate_quarter_hq_achievement_rate(quarter_actual: float, quarter_hq_target: float) -> DivisionResult:
    return safe_divide(quarter_actual, quarter_hq_target)


def _monthly_basis(
    monthly_actuals: Sequence[float | None],
    curve: list[float],
    org_annual_target: float | None,
) -> list[tuple[float | None, bool]]:
    basis: list[tuple[float | None, bool]] = []
    for month in range(1, MONTHS + 1):
        value = observed(monthly_actuals[month - 1])
        if value is not None:
            basis.append((value, True))
        elif org_annual_target is not None:
            basis.append((org_annual_target * (curve[month] - curve[month - 1]), False))
        else:
            basis.append((None, False))
    return basis


def _prepare(
    monthly_actuals: Sequence[float | None],
    progress_mode: ProgressMode | str,
    weights: Sequence[float] | None,
    prior_year: Sequence[float | None] | None,
    org_annual_target: float | None,
) -> tuple[list[float], list[tuple[float | None, bool]]] | None:
    if not has_twelve(monthly_actuals):
        logger.error("hq prediction: expected 12 monthly actuals, got %d.", length(monthly_actuals))
        return None
    curve = progress_curve(progress_mode, weights, prior_year)
    if curve is None:
        logger.error("hq prediction: no progress curve for mode %s.", ProgressMode(progress_mode).value)
        return None
    return curve, _monthly_basis(monthly_actuals, curve, org_annual_target)


def predict_monthly_hq_achievement(
    monthly_actuals: Sequence[float | None],
    annual_hq_target: float,
    progress_mode: ProgressMode | str = ProgressMode.linear,
    *,
    weights: Sequence[float] | None = None,
    prior_year: Sequence[float | None] | None = None,
    org_annual_target: float | None = None,
) -> list[HqMonthPoint]:
    prepared = _prepare(monthly_actuals, progress_mode, weights, prior_year, org_annual_target)
    if prepared is None:
        return []
    curve, basis = prepared

    points: list[HqMonthPoint] = []
    running: float | None = 0.0
    for month, (value, is_actual) in enumerate(basis, start=1):
        running = None if running is None or value is None else running + value
        cum_target = annual_hq_target * curve[month]
        if running is None:
            rate = DivisionResult(value=None, reason=NullReason.no_current_data)
        else:
            rate = safe_divide(running, cum_target)
        points.append(
            HqMonthPoint(
                month=month,
                value=value,
                is_actual=is_actual,
                cum_actual=running,
                cum_target=cum_target,
                rate=rate.value,
                reason=rate.reason,
            )
        )
    return points


def predict_quarterly_hq_achievement(
    monthly_actuals: Sequence[float | None],
    annual_hq_target: float,
    progress_mode: ProgressMode | str = ProgressMode.linear,
    *,
    weights: Sequence[float] | None = None,
    prior_year: Sequence[float | None] | None = None,
    org_annual_target: float | None = None,
) -> list[HqQuarterPoint]:
    prepared = _prepare(monthly_actuals, progress_mode, weights, prior_year, org_annual_target)
    if prepared is None:
        return []
    curve, basis = prepared

    points: list[HqQuarterPoint] = []
    for quarter in range(1, 5):
        start, end = quarter_bounds(quarter)
        actual = sum_observed(value for value, _ in basis[start - 1 : end])
        target = annual_hq_target * (curve[end] - curve[start - 1])
        if actual is None:
            rate = DivisionResult(value=None, reason=NullReason.no_current_data)
        else:
            rate = calculate_quarter_hq_achievement_rate(actual, target)
        points.append(HqQuarterPoint(quarter=quarter, actual=actual, target=target, rate=rate.value, reason=rate.reason))
    return points
