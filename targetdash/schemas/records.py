from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


Unit = Literal["万元"]
RecordProduct = Literal["auto", "property", "life", "health"]
OrgGroup = Literal["local", "remote"]


class RecordModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class Org(RecordModel):
    org_id: str = Field(min_length=1)
    org_cn: str = Field(min_length=1)
    org_en: str | None = None
    group: OrgGroup


class EarnedPremiumFields(RecordModel):
    compulsory_premium: float | None = Field(default=None, ge=0)
    commercial_premium: float | None = Field(default=None, ge=0)
    compulsory_expense_rate: float | None = Field(default=None, ge=0, le=1)
    commercial_expense_rate: float | None = Field(default=None, ge=0, le=1)
    property_first_day_expense_rate: float | None = Field(default=None, ge=0, le=1)
    life_first_day_expense_rate: float | None = Field(default=None, ge=0, le=1)


class AnnualTargetRecord(EarnedPremiumFields):
    year: int
    org_id: str = Field(min_length=1)
    product: RecordProduct
    annual_target: float = Field(ge=0)
    unit: Unit = "万元"


class AnnualActualRecord(RecordModel):
    year: int
    org_id: str = Field(min_length=1)
    product: RecordProduct
    annual_actual: float = Field(ge=0)
    unit: Unit = "万元"


class MonthlyActualRecord(EarnedPremiumFields):
    year: int
    month: int = Field(ge=1, le=12)
    org_id: str = Field(min_length=1)
    product: RecordProduct
    monthly_actual: float
    unit: Unit = "万元"


class AllocationRule(RecordModel):
    rule_id: str = Field(min_length=1)
    scope: Literal["global"] = "global"
    scope_key: Literal["all"] = "all"
    weights: list[float] = Field(min_length=12, max_length=12)
    notes_cn: str | None = None

    @field_validator("weights")
    @classmethod
    def _non_negative(cls, value: list[float]) -> list[float]:
        if any(weight < 0 for weight in value):
            raise ValueError("weights must be >= 0.")
        return value


class RateThreshold(RecordModel):
    good_min: float
    warning_min: float


class ThresholdRule(RecordModel):
    rule_id: str = Field(min_length=1)
    scope: Literal["global"] = "global"
    achievement: RateThreshold
    growth: RateThreshold
    notes_cn: str | None = None

    @model_validator(mode="after")
    def _consistent(self) -> "ThresholdRule":
        if self.achievement.good_min <= 1:
            raise ValueError(f"achievement.good_min must be > 1, got {self.achievement.good_min}")
        if self.achievement.warning_min >= 1:
            raise ValueError(f"achievement.warning_min must be < 1, got {self.achievement.warning_min}")
        if self.achievement.warning_min < 0:
            raise ValueError(f"achievement.warning_min must be >= 0, got {self.achievement.warning_min}")
        if self.growth.good_min <= self.growth.warning_min:
            raise ValueError("growth.good_min must be > growth.warning_min")
        return self


class HeadquartersTargetRecord(RecordModel):
    year: int
    product: RecordProduct
    annual_target: float = Field(ge=0)
    unit: Unit = "万元"


class OrgsFile(RecordModel):
    version: str
    orgs: list[Org]


class TargetsAnnualFile(RecordModel):
    year: int
    unit: Unit = "万元"
    type: Literal["targets_annual"] = "targets_annual"
    records: list[AnnualTargetRecord]


class ActualsAnnualFile(RecordModel):
    year: int
    unit: Unit = "万元"
    type: Literal["actuals_annual"] = "actuals_annual"
    records: list[AnnualActualRecord]


class MonthlyActualsFile(RecordModel):
    year: int
    unit: Unit = "万元"
    type: Literal["actuals_monthly"] = "actuals_monthly"
    records: list[MonthlyActualRecord]
    notes_cn: str | None = None


class AllocationRulesFile(RecordModel):
    version: str
    type: Literal["allocation_rules"] = "allocation_rules"
    rules: list[AllocationRule] = Field(min_length=1)


class HeadquartersTargetsFile(RecordModel):
    year: int
    unit: Unit = "万元"
    type: Literal["targets_headquarters"] = "targets_headquarters"
    records: list[HeadquartersTargetRecord]
