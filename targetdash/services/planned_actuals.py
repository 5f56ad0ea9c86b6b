"""Forecast series that keep real actuals and spread the remaining gap forward."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from targetdash.models.enums import ProgressMode
from targetdash.schemas.records import MonthlyActualRecord
from targetdash.utils.series import MONTHS, has_twelve, observed


logger = logging.getLogger("targetdash.planned")


def _observed_by_month(records: Iterable[MonthlyActualRecord]) -> dict[int, float]:
    actuals: dict[int, float] = {}
    for record in records:
        value = observed(record.monthly_actual)
        if 1 <= record.month <= MONTHS and value is not None:
            actuals[record.month] = value
    return actuals


def _proportional(gap: float, future_months: list[int], basis: Sequence[float | None]) -> dict[int, float]:
    shares = {month: observed(basis[month - 1]) or 0.0 for month in future_months}
    basis_total = sum(shares.values())
    if basis_total == 0:
        return {}
    return {month: gap * (share / basis_total) for month, share in shares.items()}


def allocate_remaining_gap(
    remaining_gap: float,
    future_months: list[int],
    progress_mode: ProgressMode | str,
    weights: Sequence[float] | None = None,
    prior_year: Sequence[float | None] | None = None,
) -> dict[int, float]:
    mode = ProgressMode(progress_mode)
    if not future_months:
        return {}

    if mode == ProgressMode.linear:
        per_month = remaining_gap / len(future_months)
        return {month: per_month for month in future_months}

    if mode == ProgressMode.weighted:
        if not has_twelve(weights):
            logger.error("allocate_remaining_gap: weighted mode is missing its weight vector.")
            return {}
        planned = _proportional(remaining_gap, future_months, weights)
        if not planned:
            logger.error("allocate_remaining_gap: future month weights sum to 0.")
        return planned

    if not has_twelve(prior_year):
        logger.error("allocate_remaining_gap: prior-year mode is missing its 12-month series.")
        return {}
    planned = _proportional(remaining_gap, future_months, prior_year)
    if not planned:
        logger.error("allocate_remaining_gap: future months have no prior-year actuals.")
    return planned


def _plan(
    annual_target: float,
    actuals: dict[int, float],
    mode: ProgressMode,
    weights: Sequence[float] | None,
    prior_year: Sequence[float | None] | None,
) -> list[float | None]:
    if mode == ProgressMode.weighted and not has_twelve(weights):
        logger.warning("planned actuals: weighted mode needs a 12-entry weight vector.")
        return [None] * MONTHS
    if mode == ProgressMode.prior_year_actual and not has_twelve(prior_year):
        logger.warning("planned actuals: prior-year mode needs a 12-month prior-year series.")
        return [None] * MONTHS

    remaining_gap = annual_target - sum(actuals.values())
    future_months = [month for month in range(1, MONTHS + 1) if month not in actuals]

    if not future_months or remaining_gap <= 0:
        return [actuals.get(month) for month in range(1, MONTHS + 1)]

    planned = allocate_remaining_gap(remaining_gap, future_months, mode, weights, prior_year)
    return [
        actuals[month] if month in actuals else planned.get(month)
        for month in range(1, MONTHS + 1)
    ]


def generate_monthly_planned_actuals(
    annual_target: float,
    actual_records: Iterable[MonthlyActualRecord],
    progress_mode: ProgressMode | str,
    weights: Sequence[float] | None = None,
    prior_year: Sequence[float | None] | None = None,
) -> list[float | None]:
    return _plan(annual_target, _observed_by_month(actual_records), ProgressMode(progress_mode), weights, prior_year)


def planned_actuals_from_series(
    annual_target: float,
    monthly_actuals: Sequence[float | None],
    progress_mode: ProgressMode | str,
    weights: Sequence[float] | None = None,
    prior_year: Sequence[float | None] | None = None,
) -> list[float | None]:
    actuals = {
        month: value
        for month, value in enumerate((observed(item) for item in monthly_actuals[:MONTHS]), start=1)
        if value is not None
    }
    return _plan(annual_target, actuals, ProgressMode(progress_mode), weights, prior_year)


def filter_monthly_actuals(
    records: Iterable[MonthlyActualRecord],
    org_id: str,
    product: str,
) -> list[MonthlyActualRecord]:
    return [record for record in records if record.org_id == org_id and record.product == product]
