from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from targetdash.models.enums import GroupCode, ProductCode
from targetdash.utils.decimal_math import quantize, whole


PLACEHOLDER = "—"
TENTH = Decimal("0.1")


@dataclass(frozen=True)
class ProductLabels:
    auto: str = "车险"
    property: str = "财产险"
    life: str = "人身险"
    health: str = "健康险"
    total: str = "合计"


@dataclass(frozen=True)
class GroupLabels:
    local: str = "同城"
    remote: str = "异地"
    all: str = "全省"


DEFAULT_PRODUCT_LABELS = ProductLabels()
DEFAULT_GROUP_LABELS = GroupLabels()


def format_product_label(
    product: ProductCode | str,
    labels: ProductLabels = DEFAULT_PRODUCT_LABELS,
) -> str:
    return getattr(labels, ProductCode(product).value)


def format_group_label(group: GroupCode | str, labels: GroupLabels = DEFAULT_GROUP_LABELS) -> str:
    return getattr(labels, GroupCode(group).value)


def format_growth_rate(rate: float | None) -> str:
    if rate is None:
        return PLACEHOLDER
    return f"{quantize(rate * 100, TENTH):.1f}%"


def format_increment(inc: float | None) -> str:
    if inc is None:
        return PLACEHOLDER
    return f"{whole(inc):.0f}"


def format_amount(value: float | None, *, places: int = 2) -> str:
    if value is None:
        return PLACEHOLDER
    return f"{value:,.{places}f}"
