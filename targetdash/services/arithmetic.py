from __future__ import annotations

from dataclasses import dataclass

from targetdash.models.enums import NullReason


@dataclass(frozen=True)
class DivisionResult:
    value: float | None
    reason: NullReason | None = None


def safe_divide(numerator: float, denominator: float) -> DivisionResult:
    if denominator == 0:
        return DivisionResult(value=None, reason=NullReason.division_by_zero)
    return DivisionResult(value=numerator / denominator)


def diff(a: float, b: float) -> float:
    return a - b


def growth_rate(current: float, base: float) -> DivisionResult:
    return safe_divide(current - base, base)
