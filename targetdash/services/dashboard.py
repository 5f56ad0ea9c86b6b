from __future__ import annotations

import logging
from dataclasses import dataclass, field

from targetdash.core.config import Settings, get_settings
from targetdash.models.enums import AchievementStatus, NullReason, ProductCode, ProgressMode, RoundingMode
from targetdash.schemas.records import AnnualActualRecord, AnnualTargetRecord, MonthlyActualRecord, Org
from targetdash.services.aggregate import annual_actual_total, annual_target_total, monthly_series, orgs_in_view
from targetdash.services.allocation import allocate_annual_to_monthly, monthly_to_quarterly, weights_for_mode
from targetdash.services.growth import GrowthMetrics, PeriodValues, calculate_growth_metrics, period_values
from targetdash.services.planned_actuals import planned_actuals_from_series
from targetdash.services.thresholds import Thresholds, classify_achievement
from targetdash.services.time_progress import quarter_time_achievement_rate, time_achievement_rate
from targetdash.utils.series import MONTHS, sum_observed


logger = logging.getLogger("targetdash.dashboard")


@dataclass(frozen=True)
class DashboardInputs:
    orgs: list[Org]
    annual_targets: list[AnnualTargetRecord]
    monthly_actuals: list[MonthlyActualRecord]
    prior_monthly_actuals: list[MonthlyActualRecord] = field(default_factory=list)
    prior_annual_actuals: list[AnnualActualRecord] = field(default_factory=list)
    allocation_weights: list[float] | None = None


@dataclass(frozen=True)
class ProductDashboard:
    view: str
    product: ProductCode
    current_month: int
    progress_mode: ProgressMode
    annual_target: float
    prior_annual_actual: float | None
    monthly_targets: list[float]
    quarterly_targets: list[float]
    current_monthly: list[float | None]
    prior_monthly: list[float | None]
    current_period: PeriodValues
    prior_period: PeriodValues
    growth: GrowthMetrics
    ytd_achievement_rate: float | None
    quarter_achievement_rate: float | None
    achievement_reason: NullReason | None
    achievement_status: AchievementStatus
    planned_actuals: list[float | None]
    planned_annual_total: float | None


def build_product_dashboard(
    inputs: DashboardInputs,
    *,
    current_month: int,
    view: str = "all",
    product: ProductCode | str = ProductCode.total,
    progress_mode: ProgressMode | str | None = None,
    rounding: RoundingMode | str | None = None,
    thresholds: Thresholds | None = None,
    settings: Settings | None = None,
) -> ProductDashboard:
    settings = settings or get_settings()
    thresholds = thresholds or Thresholds.from_settings(settings)
    mode = ProgressMode(progress_mode or settings.default_progress_mode)
    rounding_mode = RoundingMode(rounding or settings.default_rounding)
    product_code = ProductCode(product)
    month = max(1, min(MONTHS, current_month))

    org_ids = orgs_in_view(view, inputs.orgs)
    if not org_ids:
        logger.warning("View %s matches no organizations.", view)

    annual = annual_target_total(inputs.annual_targets, product_code, org_ids)
    current = monthly_series(inputs.monthly_actuals, product_code, org_ids)
    prior = monthly_series(inputs.prior_monthly_actuals, product_code, org_ids)
    weights = inputs.allocation_weights

    mode_weights = weights_for_mode(mode, weights, prior)
    monthly_targets = allocate_annual_to_monthly(annual, mode_weights, rounding_mode) if mode_weights else []
    quarterly_targets = monthly_to_quarterly(monthly_targets) if monthly_targets else []

    current_period = period_values(current, month)
    prior_period = period_values(prior, month)
    growth = calculate_growth_metrics(current_period, prior_period)

    ytd_rate = time_achievement_rate(current_period.ytd, annual, mode, month, weights, prior)
    quarter_rate = quarter_time_achievement_rate(current_period.quarter, annual, mode, month, weights, prior)
    planned = planned_actuals_from_series(annual, current, mode, weights, prior)

    logger.info(
        "Dashboard %s/%s month=%d mode=%s annual=%.2f ytd_rate=%s",
        view,
        product_code.value,
        month,
        mode.value,
        annual,
        ytd_rate.value,
    )

    return ProductDashboard(
        view=view,
        product=product_code,
        current_month=month,
        progress_mode=mode,
        annual_target=annual,
        prior_annual_actual=annual_actual_total(inputs.prior_annual_actuals, product_code, org_ids),
        monthly_targets=monthly_targets,
        quarterly_targets=quarterly_targets,
        current_monthly=current,
        prior_monthly=prior,
        current_period=current_period,
        prior_period=prior_period,
        growth=growth,
        ytd_achievement_rate=ytd_rate.value,
        quarter_achievement_rate=quarter_rate.value,
        achievement_reason=ytd_rate.reason,
        achievement_status=classify_achievement(ytd_rate.value, thresholds),
        planned_actuals=planned,
        planned_annual_total=sum_observed(planned),
    )
