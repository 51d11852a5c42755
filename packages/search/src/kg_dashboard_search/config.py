"""Simulation parameters for the search progress orchestrator."""

from dataclasses import dataclass, fields, replace
from typing import Any, Optional

from kg_dashboard_common import ConfigurationError, Settings, get_settings


@dataclass(frozen=True)
class SimulationConfig:
    """Timing and outcome parameters for one orchestrator.

    All durations are in seconds.

    Attributes:
        stagger_interval: Start delay multiplier per registry position (default: 0.3)
        tick_interval_min: Lower bound of a source's tick cadence (default: 0.5)
        tick_interval_max: Upper bound of a source's tick cadence (default: 1.5)
        max_increment: Upper bound of progress added per tick (default: 20.0)
        failure_probability: Chance a finished source ends in error (default: 0.10)
        success_message: Info for a completed source
        failure_message: Info for a failed source
    """

    stagger_interval: float = 0.3
    tick_interval_min: float = 0.5
    tick_interval_max: float = 1.5
    max_increment: float = 20.0
    failure_probability: float = 0.10
    success_message: str = "Found 27 matches"
    failure_message: str = "Connection timeout"

    def __post_init__(self) -> None:
        if self.stagger_interval < 0:
            raise ConfigurationError(
                f"stagger_interval must be non-negative, got {self.stagger_interval}"
            )
        if self.tick_interval_min < 0 or self.tick_interval_max < 0:
            raise ConfigurationError("tick intervals must be non-negative")
        if self.tick_interval_min > self.tick_interval_max:
            raise ConfigurationError(
                "tick_interval_min must not exceed tick_interval_max "
                f"({self.tick_interval_min} > {self.tick_interval_max})"
            )
        if self.max_increment <= 0:
            raise ConfigurationError(
                f"max_increment must be positive, got {self.max_increment}"
            )
        if not 0.0 <= self.failure_probability <= 1.0:
            raise ConfigurationError(
                f"failure_probability must be within [0, 1], got {self.failure_probability}"
            )
        if not self.success_message or not self.failure_message:
            raise ConfigurationError("success and failure messages must be non-empty")

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "SimulationConfig":
        """Build from application settings (default: get_settings())."""
        if settings is None:
            settings = get_settings()

        return cls(
            stagger_interval=settings.stagger_interval,
            tick_interval_min=settings.tick_interval_min,
            tick_interval_max=settings.tick_interval_max,
            max_increment=settings.max_increment,
            failure_probability=settings.failure_probability,
            success_message=settings.success_message,
            failure_message=settings.failure_message,
        )

    def with_overrides(self, **overrides: Any) -> "SimulationConfig":
        """Copy with the given fields replaced; None values are ignored.

        Raises:
            ConfigurationError: Unknown field name or invalid resulting config
        """
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigurationError(f"Unknown simulation settings: {sorted(unknown)}")

        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)
