from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "TargetDash Engine"
    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

    default_progress_mode: str = "linear"
    default_rounding: str = "none"

    days_per_year: float = 365.0
    auto_commercial_day_one_factor: float = 0.94
    auto_compulsory_day_one_factor: float = 0.82
    life_day_one_factor: float = 0.967

    weights_sum_tolerance: float = 1e-9
    expected_org_count: int = 14

    achievement_good_min: float = 1.05
    achievement_warning_min: float = 0.95
    growth_good_min: float = 0.12
    growth_warning_min: float = 0.0

    model_config = SettingsConfigDict(
        env_prefix="TARGETDASH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
