"""Footprint helpers: turn a user's stored visits into explored cells and fog."""

from .exceptions import FootprintError, CoordinateParseError
from .models import Coordinate, Footprint, ExploredCell
from .parser import parse_coordinate, format_coordinate
from .exploration import (
    collect_explored_cells,
    exploration_percentage,
    fog_cells,
    fog_polygons
)

__all__ = [
    'FootprintError',
    'CoordinateParseError',
    'Coordinate',
    'Footprint',
    'ExploredCell',
    'parse_coordinate',
    'format_coordinate',
    'collect_explored_cells',
    'exploration_percentage',
    'fog_cells',
    'fog_polygons'
]
