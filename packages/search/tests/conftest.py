"""Fixtures for search orchestration tests.

Timings are scaled down to milliseconds so sessions settle quickly.
"""

import random

import pytest

from kg_dashboard_contracts import Source, SourceCategory
from kg_dashboard_search import SimulationConfig, SourceRegistry


class ScriptedRandom(random.Random):
    """Random source that replays fixed uniform() and random() draws.

    Falls back to a seeded stream once a script runs out.
    """

    def __init__(self, uniforms=(), randoms=()):
        super().__init__(0)
        self._uniforms = list(uniforms)
        self._randoms = list(randoms)

    def uniform(self, a, b):
        if self._uniforms:
            return self._uniforms.pop(0)
        return super().uniform(a, b)

    def random(self):
        if self._randoms:
            return self._randoms.pop(0)
        return super().random()


@pytest.fixture
def scripted_random():
    """Factory for ScriptedRandom instances."""
    return ScriptedRandom


@pytest.fixture
def two_sources() -> SourceRegistry:
    """Registry with sources A and B, in that order."""
    return SourceRegistry(
        [
            Source(id="a", name="Source A", category=SourceCategory.DATABASE),
            Source(id="b", name="Source B", category=SourceCategory.WEB),
        ]
    )


@pytest.fixture
def three_sources() -> SourceRegistry:
    return SourceRegistry(
        [
            Source(id="crunchbase", name="Crunchbase", category=SourceCategory.DATABASE),
            Source(id="google-news", name="Google News", category=SourceCategory.WEB),
            Source(id="sec-edgar", name="SEC EDGAR", category=SourceCategory.API),
        ]
    )


@pytest.fixture
def fast_config() -> SimulationConfig:
    """Quick sessions that always complete."""
    return SimulationConfig(
        stagger_interval=0.01,
        tick_interval_min=0.001,
        tick_interval_max=0.002,
        failure_probability=0.0,
    )


@pytest.fixture
def slow_config() -> SimulationConfig:
    """Sessions that stay in flight long enough to be cancelled."""
    return SimulationConfig(
        stagger_interval=0.1,
        tick_interval_min=1.0,
        tick_interval_max=1.0,
        failure_probability=0.0,
    )
