"""Boundary validation for loader payloads.

Engines only ever see the narrow record models produced here.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel

from targetdash.core.config import get_settings
from targetdash.schemas.records import (
    ActualsAnnualFile,
    AllocationRulesFile,
    HeadquartersTargetsFile,
    MonthlyActualsFile,
    OrgsFile,
    TargetsAnnualFile,
    ThresholdRule,
)


logger = logging.getLogger("targetdash.loaders")

ModelT = TypeVar("ModelT", bound=BaseModel)
Payload = Mapping[str, Any] | str | bytes


def _validate(model: type[ModelT], payload: Payload) -> ModelT:
    if isinstance(payload, (str, bytes)):
        return model.model_validate_json(payload)
    return model.model_validate(payload)


def validate_weights(weights: Sequence[float], tolerance: float | None = None) -> None:
    if tolerance is None:
        tolerance = get_settings().weights_sum_tolerance
    total = sum(weights)
    if abs(total - 1) > tolerance:
        raise ValueError(f"weights_sum_not_one: sum={total}")


def parse_orgs_file(payload: Payload) -> OrgsFile:
    parsed = _validate(OrgsFile, payload)
    logger.debug("Loaded %d organizations (version %s).", len(parsed.orgs), parsed.version)
    return parsed


def parse_targets_annual_file(payload: Payload) -> TargetsAnnualFile:
    return _validate(TargetsAnnualFile, payload)


def parse_actuals_annual_file(payload: Payload) -> ActualsAnnualFile:
    return _validate(ActualsAnnualFile, payload)


def parse_monthly_actuals_file(payload: Payload) -> MonthlyActualsFile:
    parsed = _validate(MonthlyActualsFile, payload)
    if not parsed.records:
        logger.info("Monthly actuals for %d are empty: %s", parsed.year, parsed.notes_cn or "no records")
    return parsed


def parse_allocation_rules_file(payload: Payload) -> AllocationRulesFile:
    parsed = _validate(AllocationRulesFile, payload)
    for rule in parsed.rules:
        validate_weights(rule.weights)
    return parsed


def parse_headquarters_targets_file(payload: Payload) -> HeadquartersTargetsFile:
    return _validate(HeadquartersTargetsFile, payload)


def parse_threshold_rule(payload: Payload) -> ThresholdRule:
    return _validate(ThresholdRule, payload)
