from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from targetdash.core.config import get_settings


@dataclass(frozen=True)
class OrgValidationResult:
    valid: bool
    missing: list[str]
    extra: list[str]


def validate_organization_ids(
    data_org_ids: Sequence[str],
    standard_org_ids: Sequence[str],
) -> OrgValidationResult:
    standard = set(standard_org_ids)
    data = set(data_org_ids)
    missing = [org_id for org_id in standard_org_ids if org_id not in data]
    extra = [org_id for org_id in data_org_ids if org_id not in standard]
    return OrgValidationResult(valid=not missing and not extra, missing=missing, extra=extra)


def generate_validation_report(result: OrgValidationResult, data_source: str) -> str:
    if result.valid:
        return f"✅ {data_source}: organization ids match the standard directory."

    issues: list[str] = []
    if result.missing:
        issues.append(f"missing orgs: {', '.join(result.missing)}")
    if result.extra:
        issues.append(f"unknown orgs: {', '.join(result.extra)}")
    body = "\n  ".join(issues)
    return f"❌ {data_source}: organization id validation failed\n  {body}"


def validate_organization_count(count: int, expected: int | None = None) -> bool:
    if expected is None:
        expected = get_settings().expected_org_count
    return count == expected
