"""Base grid class for fog-of-war grid systems."""

from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional, TYPE_CHECKING

from ..abstractions.types import CellId, CellBounds, Viewport, VisibleCells

if TYPE_CHECKING:
    from ..grid_systems.bounds_manager import BoundsDefinition


class BaseGrid(ABC):
    """
    Base class for grids tiling a geographic region.

    Handles:
    - Coordinate to cell lookup
    - Cell enumeration
    - Viewport selection
    - Cell geometry
    """

    def __init__(self, bounds_def: 'BoundsDefinition'):
        """
        Initialize grid system.

        Args:
            bounds_def: Region covered by the grid
        """
        self.bounds_def = bounds_def

    @property
    def bounds(self):
        """(min_lon, min_lat, max_lon, max_lat) of the covered region."""
        return self.bounds_def.bounds

    @abstractmethod
    def quantize(self, lat: float, lon: float) -> Optional[CellId]:
        """
        Get the cell containing a coordinate.

        Args:
            lat: Latitude in degrees
            lon: Longitude in degrees

        Returns:
            CellId, or None when the coordinate is outside the region
        """
        pass

    @abstractmethod
    def cell_bounds(self, cell_id: CellId, stride: int = 1) -> CellBounds:
        """
        Get the extent of a cell, or of the block of ``stride`` x ``stride``
        cells whose lower-left cell is ``cell_id``.
        """
        pass

    @abstractmethod
    def all_cell_ids(self) -> List[CellId]:
        """Get every cell of the region."""
        pass

    @abstractmethod
    def visible_cells(self, viewport: Viewport, zoom: Optional[float] = None) -> VisibleCells:
        """
        Get the cells intersecting a map viewport.

        Args:
            viewport: Visible map window
            zoom: Map zoom level; lower zoom samples cells more sparsely

        Returns:
            VisibleCells with the selected cells and the stride used
        """
        pass

    def contains(self, lat: float, lon: float) -> bool:
        """Check if a coordinate lies in the covered region."""
        return self.bounds_def.contains(lon, lat)

    def cell_count(self) -> int:
        """Get total number of cells."""
        return len(self.all_cell_ids())

    def calculate_statistics(self) -> Dict[str, Any]:
        """Calculate grid statistics."""
        cell_count = self.cell_count()
        area = self.bounds_def.area_km2

        return {
            'region': self.bounds_def.name,
            'cell_count': cell_count,
            'region_area_km2': area,
            'avg_cell_area_km2': area / cell_count if cell_count else 0,
            'bounds': self.bounds,
            'crs': self.bounds_def.crs
        }
