# fogmap/abstractions/types/grid_types.py
"""Grid system type definitions."""

from dataclasses import dataclass
from typing import Dict, Any, List, NamedTuple, Tuple
from shapely.geometry import Polygon, mapping


@dataclass(frozen=True, order=True)
class CellId:
    """
    Identifier of a single fog cell.

    A cell is addressed by the integer row/column of its lower-left corner,
    counted from the region origin (min latitude, min longitude). The
    fixed-decimal string form is produced by the grid that owns the cell,
    see ``FogGrid.format_cell_id``.
    """
    row: int
    col: int

    def is_aligned(self, stride: int) -> bool:
        """Check if the cell sits on a ``stride`` block boundary."""
        return self.row % stride == 0 and self.col % stride == 0


@dataclass(frozen=True)
class CellBounds:
    """Geographic extent of a cell or a merged block of cells."""
    lat: float
    lon: float
    lat_max: float
    lon_max: float

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """Bounds in (minx, miny, maxx, maxy) order."""
        return (self.lon, self.lat, self.lon_max, self.lat_max)

    def ring(self) -> List[Tuple[float, float]]:
        """Closed exterior ring: lower-left, lower-right, upper-right, upper-left, lower-left."""
        return [
            (self.lon, self.lat),
            (self.lon_max, self.lat),
            (self.lon_max, self.lat_max),
            (self.lon, self.lat_max),
            (self.lon, self.lat),
        ]

    def to_polygon(self) -> Polygon:
        """Get bounds as polygon."""
        return Polygon(self.ring())


@dataclass(frozen=True)
class Viewport:
    """
    Visible window of a map.

    ``north > south`` and ``east > west`` are expected; windows crossing
    the antimeridian are not supported.
    """
    north: float
    south: float
    east: float
    west: float

    @classmethod
    def from_bounds(cls, bounds: Tuple[float, float, float, float]) -> 'Viewport':
        """Build a viewport from (minx, miny, maxx, maxy)."""
        west, south, east, north = bounds
        return cls(north=north, south=south, east=east, west=west)

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return (self.west, self.south, self.east, self.north)


class VisibleCells(NamedTuple):
    """Cells selected for a viewport together with the sampling stride used."""
    cell_ids: List[CellId]
    stride: int


@dataclass
class CellPolygon:
    """Renderable polygon for one cell (or one merged block of cells)."""
    cell_id: CellId
    grid_id: str
    geometry: Polygon
    bounds: CellBounds
    stride: int = 1

    def to_feature(self) -> Dict[str, Any]:
        """Convert to a GeoJSON feature."""
        return {
            'type': 'Feature',
            'properties': {'gridId': self.grid_id},
            'geometry': mapping(self.geometry),
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage."""
        return {
            'grid_id': self.grid_id,
            'row': self.cell_id.row,
            'col': self.cell_id.col,
            'stride': self.stride,
            'geometry_wkt': self.geometry.wkt,
            'bounds': self.bounds.bounds,
        }
