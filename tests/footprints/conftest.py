"""Shared fixtures for footprint tests."""

from datetime import datetime, timedelta

import pytest

from fogmap.config.config import Config
from fogmap.footprints import Footprint
from fogmap.grid_systems import FogGrid


@pytest.fixture
def grid():
    """2° x 2° region with 0.25° cells -> 8 x 8 cells."""
    return FogGrid((0.0, 0.0, 2.0, 2.0), cell_size_lat=0.25, cell_size_lon=0.25, config=Config())


@pytest.fixture
def base_time():
    return datetime(2024, 5, 1, 8, 0, 0)


@pytest.fixture
def footprints(base_time):
    """Visits: two in one cell, one elsewhere, one outside, one garbled."""
    return [
        Footprint('0.10,0.10', base_time),
        Footprint('0.20,0.15', base_time + timedelta(hours=2)),
        Footprint('1.60,1.10', base_time + timedelta(hours=1)),
        Footprint('25.03,121.56', base_time),
        Footprint('somewhere', base_time),
    ]
