from __future__ import annotations

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.domain.analytics.timeline import LactationInference
from src.domain.value_objects.animal_status import StatusMarkers
from src.domain.value_objects.period_kind import PeriodKind


def _split_csv(value: str) -> list[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


class Settings(BaseSettings):
    log_level: str = "INFO"
    environment: str = "dev"
    # CORS
    cors_allow_origins: str = "*"
    # Farm-local wall clock used for "now" and aware ISO dates
    timezone_name: str = "Europe/Moscow"
    # Analytics defaults
    default_period: PeriodKind = PeriodKind.MONTH
    default_pdo: int = 50
    lactation_inference: LactationInference = LactationInference.CALVING_DATE
    culled_status_markers: str = "Брак,culled"
    pregnant_status_markers: str = "Стельная,Отёл,pregnant,calved"
    gestating_status_markers: str = "Стельная,pregnant"
    # Upper bound on a single records snapshot
    max_records: int = 50_000

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("timezone_name")
    @classmethod
    def ensure_known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @field_validator("default_pdo")
    @classmethod
    def ensure_non_negative_pdo(cls, value: int) -> int:
        return max(0, value)

    @property
    def cors_allow_origins_list(self) -> list[str]:
        """Convert cors_allow_origins string to list"""
        return _split_csv(self.cors_allow_origins)

    @property
    def culled_status_markers_list(self) -> list[str]:
        return _split_csv(self.culled_status_markers)

    @property
    def pregnant_status_markers_list(self) -> list[str]:
        return _split_csv(self.pregnant_status_markers)

    @property
    def gestating_status_markers_list(self) -> list[str]:
        return _split_csv(self.gestating_status_markers)

    def status_markers(self) -> StatusMarkers:
        return StatusMarkers.from_lists(
            self.culled_status_markers_list,
            self.pregnant_status_markers_list,
            self.gestating_status_markers_list,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
