import enum


class ProductCode(str, enum.Enum):
    auto = "auto"
    property = "property"
    life = "life"
    health = "health"
    # synthetic roll-up, never present on a loaded record
    total = "total"


class GroupCode(str, enum.Enum):
    local = "local"
    remote = "remote"
    all = "all"


class ProgressMode(str, enum.Enum):
    linear = "linear"
    weighted = "weighted"
    prior_year_actual = "actual2025"

    @classmethod
    def _missing_(cls, value: object) -> "ProgressMode | None":
        if value in ("2025-actual", "prior_year_actual", "prior-year-actual"):
            return cls.prior_year_actual
        return None


class RoundingMode(str, enum.Enum):
    none = "none"
    two_decimals = "2dp"
    integer = "integer"


class NullReason(str, enum.Enum):
    division_by_zero = "division_by_zero"
    no_current_data = "no_current_data"
    no_baseline_data = "no_baseline_data"


class AchievementStatus(str, enum.Enum):
    excellent = "excellent"
    normal = "normal"
    warning = "warning"
    danger = "danger"
    unknown = "unknown"
