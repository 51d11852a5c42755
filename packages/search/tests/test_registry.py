"""Tests for the data source registry."""

import pytest

from kg_dashboard_common import RegistryError, UnknownSourceError
from kg_dashboard_contracts import Source, SourceCategory
from kg_dashboard_search import DEFAULT_SOURCES, SourceRegistry, default_registry


class TestDefaultRegistry:
    """The dashboard's built-in catalog."""

    def test_seven_sources_in_panel_order(self):
        registry = default_registry()

        assert registry.ids() == (
            "crunchbase",
            "pitchbook",
            "apollo",
            "google-news",
            "techcrunch",
            "opencorporates",
            "sec-edgar",
        )

    def test_categories(self):
        registry = default_registry()

        assert registry.get("pitchbook").category == SourceCategory.DATABASE
        assert registry.get("google-news").category == SourceCategory.WEB
        assert registry.get("sec-edgar").category == SourceCategory.API
        assert registry.get("sec-edgar").name == "SEC EDGAR"

    def test_list_matches_default_sources(self):
        assert default_registry().list() == DEFAULT_SOURCES


class TestSourceRegistry:
    """Construction and lookup."""

    def test_iteration_preserves_order(self, two_sources):
        assert [s.id for s in two_sources] == ["a", "b"]
        assert len(two_sources) == 2

    def test_membership(self, two_sources):
        assert "a" in two_sources
        assert "z" not in two_sources

    def test_unknown_source(self, two_sources):
        with pytest.raises(UnknownSourceError) as exc_info:
            two_sources.get("z")

        assert exc_info.value.source_id == "z"

    def test_empty_registry_rejected(self):
        with pytest.raises(RegistryError, match="at least one"):
            SourceRegistry([])

    def test_duplicate_ids_rejected(self):
        source = Source(id="apollo", name="Apollo", category="database")

        with pytest.raises(RegistryError, match="Duplicate"):
            SourceRegistry([source, source])

    def test_accepts_generator(self):
        registry = SourceRegistry(s for s in DEFAULT_SOURCES[:2])

        assert registry.ids() == ("crunchbase", "pitchbook")
