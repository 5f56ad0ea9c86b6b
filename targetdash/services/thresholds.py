from __future__ import annotations

from dataclasses import dataclass

from targetdash.core.config import Settings
from targetdash.models.enums import AchievementStatus
from targetdash.schemas.records import ThresholdRule


@dataclass(frozen=True)
class Thresholds:
    achievement_good_min: float = 1.05
    achievement_warning_min: float = 0.95
    growth_good_min: float = 0.12
    growth_warning_min: float = 0.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "Thresholds":
        return cls(
            achievement_good_min=settings.achievement_good_min,
            achievement_warning_min=settings.achievement_warning_min,
            growth_good_min=settings.growth_good_min,
            growth_warning_min=settings.growth_warning_min,
        )

    @classmethod
    def from_rule(cls, rule: ThresholdRule) -> "Thresholds":
        return cls(
            achievement_good_min=rule.achievement.good_min,
            achievement_warning_min=rule.achievement.warning_min,
            growth_good_min=rule.growth.good_min,
            growth_warning_min=rule.growth.warning_min,
        )


DEFAULT_THRESHOLDS = Thresholds()


def classify_achievement(rate: float | None, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> AchievementStatus:
    if rate is None:
        return AchievementStatus.unknown
    if rate >= thresholds.achievement_good_min:
        return AchievementStatus.excellent
    if rate >= 1:
        return AchievementStatus.normal
    if rate >= thresholds.achievement_warning_min:
        return AchievementStatus.warning
    return AchievementStatus.danger


def classify_growth(rate: float | None, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> AchievementStatus:
    if rate is None:
        return AchievementStatus.unknown
    if rate >= thresholds.growth_good_min:
        return AchievementStatus.excellent
    if rate >= thresholds.growth_warning_min:
        return AchievementStatus.normal
    if rate >= 0:
        return AchievementStatus.warning
    return AchievementStatus.danger
