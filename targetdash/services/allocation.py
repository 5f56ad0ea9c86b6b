from __future__ import annotations

import logging
from collections.abc import Sequence

from targetdash.models.enums import ProgressMode, RoundingMode
from targetdash.utils.decimal_math import money, whole
from targetdash.utils.series import MONTHS, has_twelve, length, observed


logger = logging.getLogger("targetdash.allocation")


def _round(value: float, mode: RoundingMode) -> float:
    if mode == RoundingMode.none:
        return value
    if mode == RoundingMode.integer:
        return whole(value)
    return money(value)


def linear_weights() -> list[float]:
    return [1 / MONTHS] * MONTHS


def allocate_annual_to_monthly(
    annual: float,
    weights: Sequence[float] | None,
    rounding: RoundingMode | str = RoundingMode.none,
) -> list[float]:
    if not has_twelve(weights):
        logger.error("allocate_annual_to_monthly: expected 12 weights, got %d.", length(weights))
        return []
    mode = RoundingMode(rounding)
    # residual rounding drift is left in place, callers sum the rounded months themselves
    return [_round(annual * weight, mode) for weight in weights]


def calculate_prior_year_weights(series: Sequence[float | None] | None) -> list[float]:
    if not has_twelve(series):
        logger.warning("calculate_prior_year_weights: expected 12 months, got %d.", length(series))
        return []

    values = [observed(value) for value in series]
    present = [value for value in values if value is not None]
    total = sum(present)
    if not present or total == 0:
        return linear_weights()

    observed_share = len(present) / MONTHS
    return [
        1 / MONTHS if value is None else (value / total) * observed_share
        for value in values
    ]


def weights_for_mode(
    mode: ProgressMode | str,
    weights: Sequence[float] | None = None,
    prior_year: Sequence[float | None] | None = None,
) -> list[float] | None:
    progress_mode = ProgressMode(mode)
    if progress_mode == ProgressMode.linear:
        return linear_weights()
    if progress_mode == ProgressMode.weighted:
        if not has_twelve(weights):
            logger.warning("weighted progress needs a 12-entry weight vector.")
            return None
        return [float(weight) for weight in weights]
    if not has_twelve(prior_year):
        logger.warning("prior-year progress needs a 12-month prior-year series.")
        return None
    return calculate_prior_year_weights(prior_year)


def resolve_forecast_weights(
    mode: ProgressMode | str,
    weights: Sequence[float] | None = None,
    prior_year_weights: Sequence[float] | None = None,
) -> tuple[list[float], ProgressMode]:
    """Pick a usable 12-month weight vector, falling back weighted -> prior year -> linear."""
    progress_mode = ProgressMode(mode)
    has_weights = has_twelve(weights) and sum(weights) > 0
    has_prior = has_twelve(prior_year_weights) and sum(prior_year_weights) > 0

    if progress_mode == ProgressMode.linear:
        return linear_weights(), ProgressMode.linear
    if progress_mode == ProgressMode.weighted and has_weights:
        return [float(weight) for weight in weights], ProgressMode.weighted
    if progress_mode == ProgressMode.prior_year_actual and has_prior:
        return [float(weight) for weight in prior_year_weights], ProgressMode.prior_year_actual

    if has_weights:
        resolved = ProgressMode.weighted
        chosen = [float(weight) for weight in weights]
    elif has_prior:
        resolved = ProgressMode.prior_year_actual
        chosen = [float(weight) for weight in prior_year_weights]
    else:
        resolved = ProgressMode.linear
        chosen = linear_weights()
    logger.warning("forecast weights for %s unavailable, using %s.", progress_mode.value, resolved.value)
    return chosen, resolved


def monthly_to_quarterly(monthly: Sequence[float]) -> list[float]:
    return [sum(monthly[quarter * 3 : quarter * 3 + 3]) for quarter in range(4)]


def monthly_to_ytd(monthly: Sequence[float], through_month: int) -> float:
    return sum(monthly[:through_month])


def calculate_future_targets(
    annual_target: float,
    ytd_actual: float,
    current_month: int,
    progress_mode: ProgressMode | str,
    weights: Sequence[float] | None = None,
    prior_year: Sequence[float | None] | None = None,
) -> list[float]:
    mode = ProgressMode(progress_mode)
    remaining = max(0.0, annual_target - ytd_actual)
    elapsed_average = ytd_actual / current_month if current_month > 0 else 0.0

    if remaining <= 0 or current_month >= MONTHS:
        return [elapsed_average if index < current_month else 0.0 for index in range(MONTHS)]

    future_count = MONTHS - current_month
    future_shares = [1 / future_count] * future_count

    if mode == ProgressMode.weighted:
        if not has_twelve(weights):
            logger.error("calculate_future_targets: weighted mode needs 12 weights.")
            return []
        raw = [float(weight) for weight in weights[current_month:]]
        raw_total = sum(raw)
        if raw_total == 0:
            logger.warning("calculate_future_targets: future weights sum to 0, falling back to linear.")
        else:
            future_shares = [weight / raw_total for weight in raw]
    elif mode == ProgressMode.prior_year_actual:
        if not has_twelve(prior_year):
            logger.error("calculate_future_targets: prior-year mode needs a 12-month series.")
            return []
        raw = [observed(value) or 0.0 for value in prior_year[current_month:]]
        raw_total = sum(raw)
        if raw_total == 0:
            logger.warning("calculate_future_targets: prior-year data missing, falling back to linear.")
        else:
            future_shares = [value / raw_total for value in raw]

    result = [elapsed_average] * current_month
    result.extend(remaining * share for share in future_shares)
    return result
