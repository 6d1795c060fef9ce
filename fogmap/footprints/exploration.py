"""Explored cells, exploration progress and fog selection for a user's footprints."""

import logging
from typing import Dict, Iterable, List, Optional, Set, Union

from ..abstractions.types import CellId, CellPolygon, Viewport, VisibleCells
from ..grid_systems.fog_grid import FogGrid
from ..infrastructure.logging import get_logger, log_operation
from .exceptions import CoordinateParseError
from .models import ExploredCell, Footprint
from .parser import parse_coordinate

logger = get_logger(__name__)

CellRef = Union[CellId, str]


def collect_explored_cells(grid: FogGrid, footprints: Iterable[Footprint]) -> Dict[CellId, ExploredCell]:
    """
    Reduce footprints to one entry per explored cell.

    Each cell keeps its most recent visit. Footprints whose coordinate
    cannot be parsed or lies outside the grid region are skipped.
    """
    explored: Dict[CellId, ExploredCell] = {}
    skipped = 0

    for footprint in footprints:
        try:
            coordinate = parse_coordinate(footprint.coordinate)
        except CoordinateParseError as e:
            logger.debug(f"Skipping footprint: {e}")
            skipped += 1
            continue

        cell_id = grid.quantize(coordinate.lat, coordinate.lon)
        if cell_id is None:
            skipped += 1
            continue

        existing = explored.get(cell_id)
        if existing is None or footprint.created_at > existing.explored_at:
            explored[cell_id] = ExploredCell(
                cell_id=cell_id,
                grid_id=grid.format_cell_id(cell_id),
                coordinate=footprint.coordinate,
                explored_at=footprint.created_at,
            )

    if skipped:
        logger.warning(f"Skipped {skipped} footprints that map to no cell of '{grid.bounds_def.name}'")

    return explored


def _as_cell_ids(grid: FogGrid, cells: Iterable[CellRef]) -> Set[CellId]:
    """Normalise CellIds and serialized identifiers into a set of CellIds."""
    result = set()
    for item in cells:
        cell_id = item if isinstance(item, CellId) else grid.parse_cell_id(item)
        if cell_id is not None:
            result.add(cell_id)
    return result


def exploration_percentage(grid: FogGrid, explored: Iterable[CellRef]) -> float:
    """Share of the region's cells that have been explored, in percent (2 decimals)."""
    total = len(grid.all_cell_ids())
    if total == 0:
        return 0.0

    explored_ids = {
        cell_id for cell_id in _as_cell_ids(grid, explored)
        if 0 <= cell_id.row <= grid.max_row_index and 0 <= cell_id.col <= grid.max_col_index
    }
    return round(len(explored_ids) / total * 100, 2)


def fog_cells(grid: FogGrid,
              viewport: Viewport,
              explored: Iterable[CellRef],
              zoom: Optional[float] = None) -> VisibleCells:
    """
    Visible cells that still need fog.

    When the viewport is coarsened, a block is cleared only when its
    lower-left sample cell has been explored.
    """
    visible = grid.visible_cells(viewport, zoom)
    if not visible.cell_ids:
        return visible

    explored_ids = _as_cell_ids(grid, explored)
    unexplored = [cell_id for cell_id in visible.cell_ids if cell_id not in explored_ids]
    return VisibleCells(unexplored, visible.stride)


@log_operation("fog_polygons", level=logging.DEBUG)
def fog_polygons(grid: FogGrid,
                 viewport: Viewport,
                 explored: Iterable[CellRef],
                 zoom: Optional[float] = None) -> List[CellPolygon]:
    """Fog polygons for the unexplored part of a viewport."""
    cell_ids, stride = fog_cells(grid, viewport, explored, zoom)
    return grid.to_polygons(cell_ids, stride)
