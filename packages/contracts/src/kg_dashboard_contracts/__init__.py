"""KG Dashboard Contracts - Pure Pydantic schemas.

Version: 1.0.0

This package contains ONLY Pydantic schemas with no business logic.
Dependencies: pydantic only (no OpenTelemetry, no logging).
"""

from kg_dashboard_contracts.models import (
    TERMINAL_STATUSES,
    ProgressState,
    Source,
    SourceCategory,
    SourceSnapshot,
    SourceStatus,
)

__version__ = "1.0.0"

__all__ = [
    # Catalog
    "Source",
    "SourceCategory",
    # Progress
    "ProgressState",
    "SourceStatus",
    "SourceSnapshot",
    "TERMINAL_STATUSES",
]
