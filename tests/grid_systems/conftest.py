"""Shared fixtures for grid system tests."""

import pytest

from fogmap.config.config import Config
from fogmap.abstractions.types import Viewport
from fogmap.grid_systems import FogGrid, BoundsManager, BoundsDefinition


@pytest.fixture
def test_config():
    """Config with defaults only (config.yml discovery is off under pytest)."""
    return Config()


@pytest.fixture
def taiwan_grid(test_config):
    """Default Taiwan fog grid: 1/111° x 0.01° cells."""
    return FogGrid('taiwan', config=test_config)


@pytest.fixture
def small_grid(test_config):
    """2° x 2° region with exact 0.25° cells -> 8 x 8 cells."""
    return FogGrid((0.0, 0.0, 2.0, 2.0), cell_size_lat=0.25, cell_size_lon=0.25,
                   config=test_config)


@pytest.fixture
def ragged_grid(test_config):
    """1° x 1° region with 0.3° cells; the last row and column overshoot the region."""
    return FogGrid((0.0, 0.0, 1.0, 1.0), cell_size_lat=0.3, cell_size_lon=0.3,
                   config=test_config)


@pytest.fixture
def taipei_viewport():
    return Viewport(north=25.1, south=24.9, east=121.7, west=121.4)


@pytest.fixture
def bounds_manager(test_config):
    """Create bounds manager instance."""
    return BoundsManager(test_config)


@pytest.fixture
def sample_bounds():
    """Sample bounds for testing."""
    return {
        'small': BoundsDefinition('small', (0, 0, 1, 1)),
        'medium': BoundsDefinition('medium', (-10, -10, 10, 10)),
        'taiwan': BoundsDefinition('taiwan', (119.0, 21.5, 122.5, 25.5)),
    }
