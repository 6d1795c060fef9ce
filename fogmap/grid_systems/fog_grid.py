"""Fixed-size fog-of-war grid over a geographic region."""

from typing import Iterable, List, Optional, Tuple, Union
import logging
import math
import time

import pyproj

from ..abstractions.types import CellId, CellBounds, CellPolygon, Viewport, VisibleCells
from ..base import BaseGrid
from ..config import config as default_config
from ..infrastructure.logging import get_logger
from .bounds_manager import BoundsManager, BoundsDefinition
from .cell_enumerator import CellEnumerator
from .geometry import to_polygons as emit_polygons
from .level_of_detail import LevelOfDetail

logger = get_logger(__name__)

# Absorbs float error when a cell corner is divided back by the cell size
# and lands just below its integer index
INDEX_EPSILON = 1e-9

BoundsSpec = Union[str, Tuple[float, float, float, float], BoundsDefinition]


class FogGrid(BaseGrid):
    """
    Fog grid of roughly square kilometre cells.

    Cells are addressed by (row, col) of their lower-left corner counted
    from the region's minimum latitude/longitude. Every path that turns an
    index into a coordinate uses ``min + index * cell_size``, so point
    lookup, enumeration and viewport selection agree on cell corners.
    """

    def __init__(self,
                 bounds: Optional[BoundsSpec] = None,
                 cell_size_lat: Optional[float] = None,
                 cell_size_lon: Optional[float] = None,
                 longitude_correction: Optional[bool] = None,
                 reference_latitude: Optional[float] = None,
                 level_of_detail: Optional[LevelOfDetail] = None,
                 enumerator: Optional[CellEnumerator] = None,
                 config=None):
        """
        Initialize fog grid.

        Args:
            bounds: Region name, (min_lon, min_lat, max_lon, max_lat) tuple
                or BoundsDefinition (defaults to ``fog_grid.region``)
            cell_size_lat: Cell height in degrees of latitude
            cell_size_lon: Cell width in degrees of longitude
            longitude_correction: Derive the cell width from
                ``fog_grid.cell_size_km`` at ``reference_latitude``
            reference_latitude: Latitude used for the longitude correction
            level_of_detail: Zoom to stride mapping
            enumerator: Cell cache service; one is created when omitted
            config: Config instance (defaults to the global config)
        """
        self.config = config or default_config
        grid_config = self.config.get('fog_grid', {})

        bounds_manager = BoundsManager(self.config)
        if bounds is None:
            bounds = grid_config.get('region', 'taiwan')
        if isinstance(bounds, BoundsDefinition):
            bounds_def = bounds
        elif isinstance(bounds, str):
            bounds_def = bounds_manager.get_bounds(bounds)
        else:
            bounds_def = BoundsDefinition('custom', tuple(bounds))

        super().__init__(bounds_def)

        if longitude_correction is None:
            longitude_correction = grid_config.get('longitude_correction', False)
        if reference_latitude is None:
            reference_latitude = grid_config.get('reference_latitude', bounds_def.center_lat)

        if cell_size_lat is None:
            cell_size_lat = grid_config.get('cell_size_lat', 1.0 / 111.0)
        self.cell_size_lat = float(cell_size_lat)
        self.longitude_correction = bool(longitude_correction)
        self.reference_latitude = float(reference_latitude)
        if cell_size_lon is not None:
            self.cell_size_lon = float(cell_size_lon)
        elif self.longitude_correction:
            self.cell_size_lon = self._corrected_cell_size_lon(
                grid_config.get('cell_size_km', 1.0), self.reference_latitude
            )
        else:
            self.cell_size_lon = float(grid_config.get('cell_size_lon', 0.01))

        if self.cell_size_lat <= 0 or self.cell_size_lon <= 0:
            raise ValueError(
                f"Cell size must be positive, got: {self.cell_size_lat} x {self.cell_size_lon}"
            )

        self.identifier_prefix = grid_config.get('identifier_prefix', 'grid')
        self.identifier_precision = int(grid_config.get('identifier_precision', 6))

        self.lat_steps = self._steps(bounds_def.max_lat - bounds_def.min_lat, self.cell_size_lat)
        self.lon_steps = self._steps(bounds_def.max_lon - bounds_def.min_lon, self.cell_size_lon)
        self.max_row_index = self.lat_steps - 1
        self.max_col_index = self.lon_steps - 1

        self.level_of_detail = level_of_detail or LevelOfDetail(config=self.config)
        self.enumerator = enumerator or CellEnumerator(self.dimensions)

        logger.info(
            f"Created fog grid '{bounds_def.name}': {self.lat_steps} x {self.lon_steps} cells "
            f"({self.cell_size_lat:.6f}° x {self.cell_size_lon:.6f}°)"
        )

    @staticmethod
    def _corrected_cell_size_lon(cell_size_km: float, reference_latitude: float) -> float:
        """Degrees of longitude spanning ``cell_size_km`` eastwards at a latitude."""
        geod = pyproj.Geod(ellps='WGS84')
        end_lon, _, _ = geod.fwd(0.0, reference_latitude, 90.0, cell_size_km * 1000.0)
        return end_lon

    @staticmethod
    def _steps(span: float, cell_size: float) -> int:
        return max(1, math.ceil(span / cell_size - INDEX_EPSILON))

    @staticmethod
    def _index(offset: float, cell_size: float) -> int:
        return math.floor(offset / cell_size + INDEX_EPSILON)

    def dimensions(self) -> Tuple[int, int]:
        """(lat_steps, lon_steps) of the grid."""
        return self.lat_steps, self.lon_steps

    # Coordinate quantizer

    def quantize(self, lat: float, lon: float) -> Optional[CellId]:
        """Get the cell containing a coordinate, or None outside the region."""
        b = self.bounds_def
        if not (b.min_lat <= lat <= b.max_lat and b.min_lon <= lon <= b.max_lon):
            return None

        # The upper edges belong to the last row/column
        row = min(self._index(lat - b.min_lat, self.cell_size_lat), self.max_row_index)
        col = min(self._index(lon - b.min_lon, self.cell_size_lon), self.max_col_index)
        return CellId(row, col)

    def cell_origin(self, cell_id: CellId) -> Tuple[float, float]:
        """(lat, lon) of the cell's lower-left corner."""
        return (
            self.bounds_def.min_lat + cell_id.row * self.cell_size_lat,
            self.bounds_def.min_lon + cell_id.col * self.cell_size_lon,
        )

    def cell_bounds(self, cell_id: CellId, stride: int = 1) -> CellBounds:
        """
        Get the extent of a cell or merged block.

        Single cells keep their natural size even where the last row or
        column pokes past the region; merged blocks are clipped to the
        region's upper edges.
        """
        lat, lon = self.cell_origin(cell_id)
        if stride <= 1:
            return CellBounds(lat, lon, lat + self.cell_size_lat, lon + self.cell_size_lon)

        return CellBounds(
            lat,
            lon,
            min(lat + stride * self.cell_size_lat, self.bounds_def.max_lat),
            min(lon + stride * self.cell_size_lon, self.bounds_def.max_lon),
        )

    # Cell enumerator

    def all_cell_ids(self) -> List[CellId]:
        """Get every cell of the region (cached for the grid's lifetime)."""
        return self.enumerator.all_cell_ids()

    def cell_count(self) -> int:
        return self.lat_steps * self.lon_steps

    # Viewport selector

    def visible_cells(self, viewport: Viewport, zoom: Optional[float] = None) -> VisibleCells:
        """
        Get the cells intersecting a map viewport.

        At low zoom only every ``stride``-th row and column is returned,
        starting on a multiple of ``stride`` so that merged blocks keep the
        same boundaries while the map is panned.
        """
        start_time = time.perf_counter()

        window = self.bounds_def.intersection(viewport.bounds)
        if window is None:
            return VisibleCells([], 1)

        stride = self.level_of_detail.stride_for_zoom(zoom)
        west, south, east, north = window
        b = self.bounds_def

        start_row = max(0, self._index(south - b.min_lat, self.cell_size_lat))
        end_row = min(self.max_row_index,
                      math.ceil((north - b.min_lat) / self.cell_size_lat - INDEX_EPSILON))
        start_col = max(0, self._index(west - b.min_lon, self.cell_size_lon))
        end_col = min(self.max_col_index,
                      math.ceil((east - b.min_lon) / self.cell_size_lon - INDEX_EPSILON))
        end_row = max(end_row, start_row)
        end_col = max(end_col, start_col)

        if stride > 1:
            start_row = (start_row // stride) * stride
            start_col = (start_col // stride) * stride

        # Lower-left corners must fall in [min, max) on both axes
        rows = [row for row in range(start_row, end_row + 1, stride)
                if b.min_lat + row * self.cell_size_lat < b.max_lat]
        cols = [col for col in range(start_col, end_col + 1, stride)
                if b.min_lon + col * self.cell_size_lon < b.max_lon]

        cell_ids = [CellId(row, col) for row in rows for col in cols]

        logger.log_performance(
            'visible_cells',
            time.perf_counter() - start_time,
            level=logging.DEBUG,  # runs on every pan/zoom
            cell_count=len(cell_ids),
            stride=stride,
            zoom=zoom
        )
        return VisibleCells(cell_ids, stride)

    # Geometry emitter

    def to_polygons(self,
                    cell_ids: Iterable[Union[CellId, str]],
                    stride: int = 1) -> List[CellPolygon]:
        """Polygons for cells, merged into ``stride`` x ``stride`` blocks when coarsened."""
        return emit_polygons(self, cell_ids, stride)

    # Serialization

    def format_cell_id(self, cell_id: CellId) -> str:
        """Serialize a cell as ``grid_<lat>_<lon>`` with fixed decimals."""
        lat, lon = self.cell_origin(cell_id)
        precision = self.identifier_precision
        return f"{self.identifier_prefix}_{lat:.{precision}f}_{lon:.{precision}f}"

    def parse_cell_id(self, text: str) -> Optional[CellId]:
        """
        Parse a serialized cell identifier.

        Returns None for a wrong prefix or shape, non-numeric parts, or a
        corner that is not a cell of this grid.
        """
        parts = text.split('_') if isinstance(text, str) else []
        if len(parts) != 3 or parts[0] != self.identifier_prefix:
            return None

        try:
            lat = float(parts[1])
            lon = float(parts[2])
        except ValueError:
            return None

        if not (math.isfinite(lat) and math.isfinite(lon)):
            return None

        row = round((lat - self.bounds_def.min_lat) / self.cell_size_lat)
        col = round((lon - self.bounds_def.min_lon) / self.cell_size_lon)
        if not (0 <= row <= self.max_row_index and 0 <= col <= self.max_col_index):
            return None

        cell_id = CellId(row, col)
        origin_lat, origin_lon = self.cell_origin(cell_id)
        # Half a unit in the last serialized decimal
        tolerance = 0.5 * 10 ** -self.identifier_precision + INDEX_EPSILON
        if abs(origin_lat - lat) > tolerance or abs(origin_lon - lon) > tolerance:
            return None

        return cell_id

    def get_cell_id(self, lat: float, lon: float) -> Optional[str]:
        """Serialized identifier of the cell containing a coordinate."""
        cell_id = self.quantize(lat, lon)
        return self.format_cell_id(cell_id) if cell_id is not None else None

    def __repr__(self) -> str:
        return (f"FogGrid(region={self.bounds_def.name!r}, "
                f"cells={self.lat_steps}x{self.lon_steps}, stride_table={self.level_of_detail!r})")
