from __future__ import annotations

import calendar
import logging
from collections.abc import Collection, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date

from targetdash.core.config import Settings
from targetdash.models.enums import ProductCode
from targetdash.schemas.records import AnnualTargetRecord, EarnedPremiumFields, MonthlyActualRecord
from targetdash.services.arithmetic import safe_divide
from targetdash.utils.series import MONTHS, has_twelve, length


logger = logging.getLogger("targetdash.earned")

MISSING_EARNED_DIAGNOSTIC = "missing first-day expense rate or premium split"
EARNED_PRODUCTS = (ProductCode.auto, ProductCode.property, ProductCode.life)


@dataclass(frozen=True)
class EarnedPremiumFactors:
    days_per_year: float = 365.0
    auto_commercial_day_one: float = 0.94
    auto_compulsory_day_one: float = 0.82
    life_day_one: float = 0.967

    @classmethod
    def from_settings(cls, settings: Settings) -> "EarnedPremiumFactors":
        return cls(
            days_per_year=settings.days_per_year,
            auto_commercial_day_one=settings.auto_commercial_day_one_factor,
            auto_compulsory_day_one=settings.auto_compulsory_day_one_factor,
            life_day_one=settings.life_day_one_factor,
        )


DEFAULT_FACTORS = EarnedPremiumFactors()


@dataclass(frozen=True)
class EarnedPremiumSeries:
    product: ProductCode
    premium: list[float | None]
    earned: list[float | None]
    has_actual: list[bool]
    missing_earned: list[bool]
    commercial: list[float | None] | None = None
    compulsory: list[float | None] | None = None
    diagnostics: list[str] = field(default_factory=list)

    def maturity_rates(self) -> list[float | None]:
        rates: list[float | None] = []
        for premium, earned in zip(self.premium, self.earned):
            if premium is None or earned is None:
                rates.append(None)
            else:
                rates.append(calculate_maturity_rate(earned, premium))
        return rates


def month_days(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def _next_month_start(month_start: date) -> date:
    if month_start.month == 12:
        return date(month_start.year + 1, 1, 1)
    return date(month_start.year, month_start.month + 1, 1)


def calculate_maturity_days(month_start: date, days_in_month: int, stat_date: date) -> float:
    # policies are taken as issued mid-month; the stat date itself counts as elapsed
    extra_days = max(0, (stat_date - _next_month_start(month_start)).days + 1)
    return days_in_month / 2 + extra_days


def maturity_days_for_year(year: int, stat_date: date) -> list[float]:
    return [
        calculate_maturity_days(date(year, month, 1), month_days(year, month), stat_date)
        for month in range(1, MONTHS + 1)
    ]


def calculate_auto_earned_premium(
    *,
    commercial_premium: float,
    commercial_expense_rate: float,
    compulsory_premium: float,
    compulsory_expense_rate: float,
    maturity_days: float,
    factors: EarnedPremiumFactors = DEFAULT_FACTORS,
) -> float:
    maturity_factor = maturity_days / factors.days_per_year
    return (
        commercial_premium * commercial_expense_rate * factors.auto_commercial_day_one
        + commercial_premium * (1 - commercial_expense_rate) * maturity_factor
        + compulsory_premium * compulsory_expense_rate * factors.auto_compulsory_day_one
        + compulsory_premium * (1 - compulsory_expense_rate) * maturity_factor
    )


def calculate_property_earned_premium(
    *,
    premium: float,
    first_day_expense_rate: float,
    maturity_days: float,
    factors: EarnedPremiumFactors = DEFAULT_FACTORS,
) -> float:
    maturity_factor = maturity_days / factors.days_per_year
    return premium * first_day_expense_rate + premium * (1 - first_day_expense_rate) * maturity_factor


def calculate_life_earned_premium(
    *,
    premium: float,
    first_day_expense_rate: float,
    maturity_days: float,
    factors: EarnedPremiumFactors = DEFAULT_FACTORS,
) -> float:
    maturity_factor = maturity_days / factors.days_per_year
    return (
        premium * first_day_expense_rate * factors.life_day_one
        + premium * (1 - first_day_expense_rate) * maturity_factor
    )


def calculate_maturity_rate(earned: float, premium: float) -> float | None:
    return safe_divide(earned, premium).value


def _auto_premium(record: MonthlyActualRecord) -> float:
    if record.commercial_premium is None and record.compulsory_premium is None:
        return record.monthly_actual
    return (record.commercial_premium or 0.0) + (record.compulsory_premium or 0.0)


def _earned(
    fields: EarnedPremiumFields,
    product: ProductCode,
    maturity_days: float,
    factors: EarnedPremiumFactors,
    *,
    premium: float,
    commercial: float | None,
    compulsory: float | None,
) -> float | None:
    if product == ProductCode.auto:
        if (
            commercial is None
            or compulsory is None
            or fields.commercial_expense_rate is None
            or fields.compulsory_expense_rate is None
        ):
            return None
        return calculate_auto_earned_premium(
            commercial_premium=commercial,
            commercial_expense_rate=fields.commercial_expense_rate,
            compulsory_premium=compulsory,
            compulsory_expense_rate=fields.compulsory_expense_rate,
            maturity_days=maturity_days,
            factors=factors,
        )
    if product == ProductCode.property:
        if fields.property_first_day_expense_rate is None:
            return None
        return calculate_property_earned_premium(
            premium=premium,
            first_day_expense_rate=fields.property_first_day_expense_rate,
            maturity_days=maturity_days,
            factors=factors,
        )
    if fields.life_first_day_expense_rate is None:
        return None
    return calculate_life_earned_premium(
        premium=premium,
        first_day_expense_rate=fields.life_first_day_expense_rate,
        maturity_days=maturity_days,
        factors=factors,
    )


def _unavailable_series(product: ProductCode, diagnostic: str) -> EarnedPremiumSeries:
    return EarnedPremiumSeries(
        product=product,
        premium=[None] * MONTHS,
        earned=[None] * MONTHS,
        has_actual=[False] * MONTHS,
        missing_earned=[False] * MONTHS,
        diagnostics=[diagnostic],
    )


def _rejected_inputs(
    caller: str,
    product: ProductCode,
    maturity_days: Sequence[float] | None,
) -> EarnedPremiumSeries | None:
    if product not in EARNED_PRODUCTS:
        logger.error("%s: no earned formula for product %s.", caller, product.value)
        return _unavailable_series(product, f"no earned premium formula for {product.value}")
    if not has_twelve(maturity_days):
        logger.error("%s: expected 12 maturity-day entries, got %d.", caller, length(maturity_days))
        return _unavailable_series(product, "maturity days must cover 12 months")
    return None


def _normalized(values: list[float], keep: list[bool]) -> list[float | None]:
    return [value if keep[idx] else None for idx, value in enumerate(values)]


def _missing_diagnostic(org_id: str, product: ProductCode, period: str) -> str:
    message = f"{org_id} {product.value} {period}: {MISSING_EARNED_DIAGNOSTIC}"
    logger.warning(message)
    return message


def build_earned_premium_series(
    records: Iterable[MonthlyActualRecord],
    maturity_days: Sequence[float],
    product: ProductCode | str,
    *,
    org_ids: Collection[str] | None = None,
    factors: EarnedPremiumFactors = DEFAULT_FACTORS,
) -> EarnedPremiumSeries:
    product_code = ProductCode(product)
    rejected = _rejected_inputs("build_earned_premium_series", product_code, maturity_days)
    if rejected is not None:
        return rejected

    premium = [0.0] * MONTHS
    earned = [0.0] * MONTHS
    commercial = [0.0] * MONTHS
    compulsory = [0.0] * MONTHS
    has_actual = [False] * MONTHS
    missing = [False] * MONTHS
    diagnostics: list[str] = []

    for record in records:
        if record.product != product_code.value:
            continue
        if org_ids is not None and record.org_id not in org_ids:
            continue
        idx = record.month - 1

        record_premium = _auto_premium(record) if product_code == ProductCode.auto else record.monthly_actual
        premium[idx] += record_premium
        if product_code == ProductCode.auto:
            commercial[idx] += record.commercial_premium or 0.0
            compulsory[idx] += record.compulsory_premium or 0.0
            if record_premium != 0:
                has_actual[idx] = True
        else:
            has_actual[idx] = True

        record_earned = _earned(
            record,
            product_code,
            maturity_days[idx],
            factors,
            premium=record.monthly_actual,
            commercial=record.commercial_premium,
            compulsory=record.compulsory_premium,
        )
        if record_earned is None:
            if record_premium != 0:
                missing[idx] = True
                diagnostics.append(_missing_diagnostic(record.org_id, product_code, f"month {record.month}"))
            continue
        earned[idx] += record_earned
        has_actual[idx] = True

    is_auto = product_code == ProductCode.auto
    return EarnedPremiumSeries(
        product=product_code,
        premium=_normalized(premium, has_actual),
        earned=_normalized(earned, [flag and not gap for flag, gap in zip(has_actual, missing)]),
        has_actual=has_actual,
        missing_earned=missing,
        commercial=_normalized(commercial, has_actual) if is_auto else None,
        compulsory=_normalized(compulsory, has_actual) if is_auto else None,
        diagnostics=diagnostics,
    )


def build_forecast_earned_premium_series(
    targets: Iterable[AnnualTargetRecord],
    weights: Sequence[float],
    maturity_days: Sequence[float],
    product: ProductCode | str,
    *,
    org_ids: Collection[str] | None = None,
    factors: EarnedPremiumFactors = DEFAULT_FACTORS,
) -> EarnedPremiumSeries:
    """Spread annual targets over the year by ``weights`` and earn each month's slice.

    Auto spreads its commercial/compulsory split; property and life spread ``annual_target``.
    """
    product_code = ProductCode(product)
    rejected = _rejected_inputs("build_forecast_earned_premium_series", product_code, maturity_days)
    if rejected is not None:
        return rejected
    if not has_twelve(weights):
        logger.error("build_forecast_earned_premium_series: expected 12 weights, got %d.", length(weights))
        return _unavailable_series(product_code, "forecast weights must cover 12 months")

    is_auto = product_code == ProductCode.auto
    premium = [0.0] * MONTHS
    earned = [0.0] * MONTHS
    commercial = [0.0] * MONTHS
    compulsory = [0.0] * MONTHS
    has_value = [False] * MONTHS
    missing = [False] * MONTHS
    diagnostics: list[str] = []

    for record in targets:
        if record.product != product_code.value:
            continue
        if org_ids is not None and record.org_id not in org_ids:
            continue

        record_missing = False
        for idx, weight in enumerate(weights):
            month_commercial: float | None = None
            month_compulsory: float | None = None
            if is_auto:
                month_commercial = (record.commercial_premium or 0.0) * weight
                month_compulsory = (record.compulsory_premium or 0.0) * weight
                month_premium = month_commercial + month_compulsory
                commercial[idx] += month_commercial
                compulsory[idx] += month_compulsory
            else:
                month_premium = record.annual_target * weight
            premium[idx] += month_premium
            if month_premium > 0:
                has_value[idx] = True

            month_earned = _earned(
                record,
                product_code,
                maturity_days[idx],
                factors,
                premium=month_premium,
                commercial=month_commercial,
                compulsory=month_compulsory,
            )
            if month_earned is None:
                if month_premium > 0:
                    missing[idx] = True
                    record_missing = True
                continue
            earned[idx] += month_earned

        if record_missing:
            diagnostics.append(_missing_diagnostic(record.org_id, product_code, "target"))

    return EarnedPremiumSeries(
        product=product_code,
        premium=_normalized(premium, has_value),
        earned=_normalized(earned, [flag and not gap for flag, gap in zip(has_value, missing)]),
        has_actual=has_value,
        missing_earned=missing,
        commercial=_normalized(commercial, has_value) if is_auto else None,
        compulsory=_normalized(compulsory, has_value) if is_auto else None,
        diagnostics=diagnostics,
    )


def merge_earned_premium_series(
    actual: EarnedPremiumSeries,
    forecast: EarnedPremiumSeries,
) -> EarnedPremiumSeries:
    # a month with any actual data never shows forecast figures
    sources = [actual if actual.has_actual[idx] else forecast for idx in range(MONTHS)]

    def pick(name: str) -> list[float | None] | None:
        if getattr(actual, name) is None and getattr(forecast, name) is None:
            return None
        picked: list[float | None] = []
        for idx, source in enumerate(sources):
            values = getattr(source, name)
            picked.append(None if values is None else values[idx])
        return picked

    return EarnedPremiumSeries(
        product=actual.product,
        premium=pick("premium"),
        earned=pick("earned"),
        has_actual=[source.has_actual[idx] for idx, source in enumerate(sources)],
        missing_earned=[source.missing_earned[idx] for idx, source in enumerate(sources)],
        commercial=pick("commercial"),
        compulsory=pick("compulsory"),
        diagnostics=[*actual.diagnostics, *forecast.diagnostics],
    )


def combine_earned_premium_series(parts: Sequence[EarnedPremiumSeries]) -> EarnedPremiumSeries:
    premium: list[float | None] = []
    earned: list[float | None] = []
    has_actual: list[bool] = []
    missing: list[bool] = []
    for idx in range(MONTHS):
        present = [part for part in parts if part.has_actual[idx]]
        month_missing = any(part.missing_earned[idx] for part in present)
        has_actual.append(bool(present))
        missing.append(month_missing)
        if not present:
            premium.append(None)
            earned.append(None)
            continue
        premium.append(sum(part.premium[idx] or 0.0 for part in present))
        earned.append(None if month_missing else sum(part.earned[idx] or 0.0 for part in present))

    return EarnedPremiumSeries(
        product=ProductCode.total,
        premium=premium,
        earned=earned,
        has_actual=has_actual,
        missing_earned=missing,
        diagnostics=[message for part in parts for message in part.diagnostics],
    )
