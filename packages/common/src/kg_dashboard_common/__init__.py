"""KG Dashboard Common - Shared utilities.

Version: 1.0.0

This package provides:
- Settings (pydantic-settings)
- Structured logging (structlog)
- OpenTelemetry instrumentation helpers
- Custom error types
"""

from kg_dashboard_common.config import Settings, get_settings
from kg_dashboard_common.errors import (
    ConfigurationError,
    KGDashboardError,
    OrchestratorDisposedError,
    OrchestratorError,
    RegistryError,
    SessionCancelledError,
    UnknownSourceError,
)
from kg_dashboard_common.instrumentation import (
    get_tracer,
    init_telemetry,
    instrument_function,
)
from kg_dashboard_common.logging_config import (
    configure_logging,
    get_logger,
    session_context,
)

__version__ = "1.0.0"

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Logging
    "configure_logging",
    "get_logger",
    "session_context",
    # Instrumentation
    "init_telemetry",
    "get_tracer",
    "instrument_function",
    # Errors
    "KGDashboardError",
    "ConfigurationError",
    "RegistryError",
    "UnknownSourceError",
    "OrchestratorError",
    "OrchestratorDisposedError",
    "SessionCancelledError",
]
