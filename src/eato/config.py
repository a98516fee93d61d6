"""Application configuration."""

import os

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

_WEEKDAY_NAMES = (
    "sunday",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    environment: str = _ENVIRONMENT
    log_level: str = "INFO"
    default_timezone: str = "UTC"
    default_daily_calorie_goal: int = 2000
    default_week_start_day: int = 0
    minimum_daily_budget: int = 1200
    streak_reminder_hour: int = 20

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("default_week_start_day", mode="before")
    @classmethod
    def _parse_week_start(cls, value: object) -> int:
        return parse_week_start_day(value)


def parse_week_start_day(raw: object) -> int:
    """Parse a week start from a digit or weekday name; 0 is Sunday."""
    if raw is None:
        return 0
    cleaned = str(raw).strip().lower()
    for index, name in enumerate(_WEEKDAY_NAMES):
        if cleaned in {name, name[:3]}:
            return index
    if cleaned.isdigit() and int(cleaned) < len(_WEEKDAY_NAMES):
        return int(cleaned)
    raise ValueError(f"Invalid week start day: {raw!r}")
