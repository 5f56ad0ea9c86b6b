import pytest

from targetdash.core.config import Settings
from targetdash.models.enums import AchievementStatus
from targetdash.schemas.records import RateThreshold, ThresholdRule
from targetdash.services.thresholds import Thresholds, classify_achievement, classify_growth


@pytest.mark.parametrize(
    ("rate", "status"),
    [
        (None, AchievementStatus.unknown),
        (1.2, AchievementStatus.excellent),
        (1.05, AchievementStatus.excellent),
        (1.0, AchievementStatus.normal),
        (0.97, AchievementStatus.warning),
        (0.5, AchievementStatus.danger),
    ],
)
def test_classify_achievement(rate: float | None, status: AchievementStatus) -> None:
    assert classify_achievement(rate) == status


@pytest.mark.parametrize(
    ("rate", "status"),
    [
        (None, AchievementStatus.unknown),
        (0.2, AchievementStatus.excellent),
        (0.05, AchievementStatus.normal),
        (0.0, AchievementStatus.normal),
        (-0.01, AchievementStatus.danger),
    ],
)
def test_classify_growth(rate: float | None, status: AchievementStatus) -> None:
    assert classify_growth(rate) == status


def test_thresholds_from_rule_and_settings() -> None:
    rule = ThresholdRule(
        rule_id="strict",
        achievement=RateThreshold(good_min=1.2, warning_min=0.8),
        growth=RateThreshold(good_min=0.3, warning_min=0.1),
    )
    strict = Thresholds.from_rule(rule)
    assert classify_achievement(1.1, strict) == AchievementStatus.normal
    assert classify_achievement(0.85, strict) == AchievementStatus.warning
    assert classify_growth(0.05, strict) == AchievementStatus.warning

    relaxed = Thresholds.from_settings(Settings(achievement_good_min=1.01))
    assert classify_achievement(1.02, relaxed) == AchievementStatus.excellent
