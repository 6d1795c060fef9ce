# fogmap/grid_systems/__init__.py
"""Fog grid implementation."""

from .bounds_manager import BoundsManager, BoundsDefinition
from .level_of_detail import LevelOfDetail
from .cell_enumerator import CellEnumerator
from .geometry import to_polygons, to_feature_collection
from .fog_grid import FogGrid
from .grid_factory import (
    GridFactory,
    GridSpecification,
    get_default_factory,
    grid_from_config,
    get_or_create_grid
)

__all__ = [
    'BoundsManager',
    'BoundsDefinition',
    'LevelOfDetail',
    'CellEnumerator',
    'to_polygons',
    'to_feature_collection',
    'FogGrid',
    'GridFactory',
    'GridSpecification',
    'get_default_factory',
    'grid_from_config',
    'get_or_create_grid'
]
