"""Custom error types for the KG dashboard.

All errors follow the "fail fast" principle with explicit messages.
A data source ending in the error state is a simulated outcome, not an
exception, and never appears here.
"""


class KGDashboardError(Exception):
    """Base exception for all kg-dashboard errors."""

    pass


class ConfigurationError(KGDashboardError):
    """Invalid simulation or scheduling parameters."""

    pass


class RegistryError(KGDashboardError):
    """Error building or querying the data source catalog."""

    pass


class UnknownSourceError(RegistryError, KeyError):
    """Source id is not present in the registry.

    Attributes:
        source_id: The id that was looked up
    """

    def __init__(self, source_id: str):
        self.source_id = source_id
        super().__init__(f"Unknown data source: {source_id}")

    def __str__(self) -> str:
        return f"Unknown data source: {self.source_id}"


class OrchestratorError(KGDashboardError):
    """Error driving the search progress orchestrator."""

    pass


class OrchestratorDisposedError(OrchestratorError):
    """Operation attempted on an orchestrator after dispose()."""

    pass


class SessionCancelledError(KGDashboardError):
    """Search session ended before every source reached a terminal state."""

    pass
