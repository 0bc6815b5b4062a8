"""
Settings and configuration for the Scheduling Engine.
"""

from services.common.logging_config import setup_service_logging
from services.common.settings import (
    AliasChoices,
    BaseSettings,
    Field,
    SettingsConfigDict,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    working_hours_start: int = Field(
        default=9,
        description="Default start of the working day (hour, 0-23)",
        validation_alias=AliasChoices("SCHEDULING_WORKING_HOURS_START"),
    )
    working_hours_end: int = Field(
        default=17,
        description="Default end of the working day (hour, 1-24)",
        validation_alias=AliasChoices("SCHEDULING_WORKING_HOURS_END"),
    )
    default_horizon_days: int = Field(
        default=14,
        description="Days searched by the optimal time search when unspecified",
        validation_alias=AliasChoices("SCHEDULING_DEFAULT_HORIZON_DAYS"),
    )
    alternative_search_days: int = Field(
        default=7,
        description="Days searched for alternatives when a request conflicts",
        validation_alias=AliasChoices("SCHEDULING_ALTERNATIVE_SEARCH_DAYS"),
    )
    max_alternatives: int = Field(
        default=5,
        description="Alternatives returned for a conflicting request",
        validation_alias=AliasChoices("SCHEDULING_MAX_ALTERNATIVES"),
    )
    max_suggestions: int = Field(
        default=10,
        description="Suggestions returned by the optimal time search",
        validation_alias=AliasChoices("SCHEDULING_MAX_SUGGESTIONS"),
    )

    # Logging configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        validation_alias=AliasChoices("LOG_LEVEL"),
    )
    log_format: str = Field(
        default="json",
        description="Log format (json or text)",
        validation_alias=AliasChoices("LOG_FORMAT"),
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None


def configure_logging(settings: Settings | None = None) -> None:
    """Set up structlog for the scheduling service from its settings."""
    settings = settings or get_settings()
    setup_service_logging(
        service_name="scheduling",
        log_level=settings.log_level,
        log_format=settings.log_format,
    )
