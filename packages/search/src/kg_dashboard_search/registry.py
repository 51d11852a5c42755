"""Static catalog of the data sources a federated search fans out to."""

from typing import Iterable, Iterator

from kg_dashboard_common import RegistryError, UnknownSourceError
from kg_dashboard_contracts import Source, SourceCategory

# Display order of the knowledge graph search panel
DEFAULT_SOURCES: tuple[Source, ...] = (
    Source(id="crunchbase", name="Crunchbase", category=SourceCategory.DATABASE),
    Source(id="pitchbook", name="Pitchbook", category=SourceCategory.DATABASE),
    Source(id="apollo", name="Apollo", category=SourceCategory.DATABASE),
    Source(id="google-news", name="Google News", category=SourceCategory.WEB),
    Source(id="techcrunch", name="TechCrunch", category=SourceCategory.WEB),
    Source(id="opencorporates", name="OpenCorporates", category=SourceCategory.API),
    Source(id="sec-edgar", name="SEC EDGAR", category=SourceCategory.API),
)


class SourceRegistry:
    """Ordered, read-only lookup table of sources.

    Order is significant: it is the order in which sources are started.

    Example:
        >>> registry = SourceRegistry([Source(id="a", name="A", category="web")])
        >>> registry.get("a").name
        'A'
    """

    def __init__(self, sources: Iterable[Source]):
        self._sources = tuple(sources)
        if not self._sources:
            raise RegistryError("registry requires at least one source")

        self._by_id: dict[str, Source] = {}
        for source in self._sources:
            if source.id in self._by_id:
                raise RegistryError(f"Duplicate source id: {source.id}")
            self._by_id[source.id] = source

    def list(self) -> tuple[Source, ...]:
        """All sources in registry order."""
        return self._sources

    def ids(self) -> tuple[str, ...]:
        return tuple(self._by_id)

    def get(self, source_id: str) -> Source:
        """Look up a source by id.

        Raises:
            UnknownSourceError: If the id is not registered
        """
        try:
            return self._by_id[source_id]
        except KeyError:
            raise UnknownSourceError(source_id) from None

    def __contains__(self, source_id: object) -> bool:
        return source_id in self._by_id

    def __iter__(self) -> Iterator[Source]:
        return iter(self._sources)

    def __len__(self) -> int:
        return len(self._sources)

    def __repr__(self) -> str:
        return f"SourceRegistry({list(self._by_id)!r})"


def default_registry() -> SourceRegistry:
    """Registry of the seven company/investor data sources."""
    return SourceRegistry(DEFAULT_SOURCES)
