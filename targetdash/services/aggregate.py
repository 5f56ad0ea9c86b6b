from __future__ import annotations

from collections import defaultdict
from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass
from typing import NamedTuple

from targetdash.models.enums import GroupCode, ProductCode
from targetdash.schemas.records import AnnualActualRecord, AnnualTargetRecord, MonthlyActualRecord, Org
from targetdash.utils.series import MONTHS


class AggKey(NamedTuple):
    group: GroupCode
    product: ProductCode


@dataclass(frozen=True)
class FactRow:
    org_id: str
    group: GroupCode
    product: ProductCode
    value: float


def matches_view(view: str, org: Org) -> bool:
    if view == GroupCode.all.value:
        return True
    if view in (GroupCode.local.value, GroupCode.remote.value):
        return org.group == view
    return org.org_id == view


def orgs_in_view(view: str, orgs: Iterable[Org]) -> set[str]:
    return {org.org_id for org in orgs if matches_view(view, org)}


def aggregate_to_group_and_all(rows: Iterable[FactRow]) -> dict[AggKey, float]:
    totals: dict[AggKey, float] = defaultdict(float)
    for row in rows:
        group = GroupCode(row.group)
        product = ProductCode(row.product)
        for key in (
            AggKey(group, product),
            AggKey(GroupCode.all, product),
            AggKey(group, ProductCode.total),
            AggKey(GroupCode.all, ProductCode.total),
        ):
            totals[key] += row.value
    return dict(totals)


def fact_rows(
    values: Iterable[tuple[str, str, float]],
    org_map: Mapping[str, Org],
) -> list[FactRow]:
    rows: list[FactRow] = []
    for org_id, product, value in values:
        org = org_map.get(org_id)
        if org is None:
            continue
        rows.append(FactRow(org_id=org_id, group=GroupCode(org.group), product=ProductCode(product), value=value))
    return rows


def _wanted(product: str, record_product: str) -> bool:
    return product == ProductCode.total.value or record_product == product


def monthly_series(
    records: Iterable[MonthlyActualRecord],
    product: ProductCode | str,
    org_ids: Collection[str] | None = None,
) -> list[float | None]:
    product_value = ProductCode(product).value
    series: list[float | None] = [None] * MONTHS
    for record in records:
        if not _wanted(product_value, record.product):
            continue
        if org_ids is not None and record.org_id not in org_ids:
            continue
        idx = record.month - 1
        series[idx] = (series[idx] or 0.0) + record.monthly_actual
    return series


def annual_target_total(
    records: Iterable[AnnualTargetRecord],
    product: ProductCode | str,
    org_ids: Collection[str] | None = None,
) -> float:
    product_value = ProductCode(product).value
    return sum(
        record.annual_target
        for record in records
        if _wanted(product_value, record.product) and (org_ids is None or record.org_id in org_ids)
    )


def annual_actual_total(
    records: Iterable[AnnualActualRecord],
    product: ProductCode | str,
    org_ids: Collection[str] | None = None,
) -> float | None:
    product_value = ProductCode(product).value
    values = [
        record.annual_actual
        for record in records
        if _wanted(product_value, record.product) and (org_ids is None or record.org_id in org_ids)
    ]
    return sum(values) if values else None
