"""KG Dashboard Search - Federated search progress orchestration.

Version: 1.0.0

This package provides:
- SourceRegistry (static data source catalog)
- ScheduleManager (staggered, cancellable start triggers)
- ProgressSimulator (per-source randomized progress task)
- SearchProgressOrchestrator (session lifecycle and state ownership)
- SearchController (query submission and supersession)
"""

from kg_dashboard_search.config import SimulationConfig
from kg_dashboard_search.controller import SearchController
from kg_dashboard_search.orchestrator import SearchProgressOrchestrator
from kg_dashboard_search.registry import (
    DEFAULT_SOURCES,
    SourceRegistry,
    default_registry,
)
from kg_dashboard_search.scheduler import ScheduleManager
from kg_dashboard_search.simulator import ProgressSimulator

__version__ = "1.0.0"

__all__ = [
    "SimulationConfig",
    "SourceRegistry",
    "DEFAULT_SOURCES",
    "default_registry",
    "ScheduleManager",
    "ProgressSimulator",
    "SearchProgressOrchestrator",
    "SearchController",
]
