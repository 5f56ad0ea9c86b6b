from targetdash.models.enums import (
    AchievementStatus,
    GroupCode,
    NullReason,
    ProductCode,
    ProgressMode,
    RoundingMode,
)

__all__ = [
    "AchievementStatus",
    "GroupCode",
    "NullReason",
    "ProductCode",
    "ProgressMode",
    "RoundingMode",
]
