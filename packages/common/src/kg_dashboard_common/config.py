"""Configuration management using Pydantic BaseSettings.

Loads configuration from environment variables with defaults that mirror the
dashboard's data-sources panel. Override via environment variables or a .env
file.

Usage:
    from kg_dashboard_common.config import get_settings

    settings = get_settings()
    print(settings.stagger_interval)
"""

from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    All durations are in seconds.

    Attributes:
        stagger_interval: Delay added per registry position before a source starts
        tick_interval_min: Lower bound of a source's tick cadence
        tick_interval_max: Upper bound of a source's tick cadence
        max_increment: Upper bound of the random progress added per tick
        failure_probability: Chance a source ends in the error state
        success_message: Info attached to a completed source
        failure_message: Info attached to a failed source
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: Log format (json or console)
        telemetry_console: Export trace spans to stdout
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Scheduling
    stagger_interval: float = Field(
        default=0.3,
        ge=0.0,
        description="Per-source start delay multiplier (seconds)",
    )
    tick_interval_min: float = Field(
        default=0.5,
        ge=0.0,
        description="Minimum delay between progress ticks (seconds)",
    )
    tick_interval_max: float = Field(
        default=1.5,
        ge=0.0,
        description="Maximum delay between progress ticks (seconds)",
    )

    # Simulation
    max_increment: float = Field(
        default=20.0,
        gt=0.0,
        description="Maximum progress added per tick (percent)",
    )
    failure_probability: float = Field(
        default=0.10,
        ge=0.0,
        le=1.0,
        description="Probability that a source ends in error",
    )
    success_message: str = Field(default="Found 27 matches")
    failure_message: str = Field(default="Connection timeout")

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: str = Field(
        default="console",
        description="Log format: json or console",
    )

    # Telemetry (optional)
    telemetry_console: bool = Field(
        default=False,
        description="Print finished trace spans to stdout",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        valid_formats = {"json", "console"}
        lower = v.lower()
        if lower not in valid_formats:
            raise ValueError(f"log_format must be one of {valid_formats}")
        return lower

    @model_validator(mode="after")
    def validate_tick_bounds(self) -> "Settings":
        """Ensure the tick cadence range is not inverted."""
        if self.tick_interval_min > self.tick_interval_max:
            raise ValueError(
                "tick_interval_min must not exceed tick_interval_max "
                f"({self.tick_interval_min} > {self.tick_interval_max})"
            )
        return self


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded once and cached for the lifetime of the process.
    Call get_settings.cache_clear() to reload.
    """
    return Settings()
