"""Shared fixtures for map generation tests."""

import pytest

from py_polymap.core.map_generator import generate_map
from py_polymap.core.options import MapOptions

SCENARIO_OPTIONS = dict(
    width=600,
    height=600,
    num_polygons=300,
    seed="test-seed",
    point_relaxation_iterations=3,
    corner_relaxation_iterations=1,
)


@pytest.fixture(scope="session")
def scenario_options():
    return MapOptions(**SCENARIO_OPTIONS)


@pytest.fixture(scope="session")
def scenario_map(scenario_options):
    """Fully generated reference map; treat as read-only."""
    return generate_map(scenario_options)
