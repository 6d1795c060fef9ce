"""Polygon geometry for fog cells."""

from typing import Any, Dict, Iterable, List, Union, TYPE_CHECKING

from ..abstractions.types import CellId, CellPolygon
from ..infrastructure.logging import get_logger

if TYPE_CHECKING:
    from .fog_grid import FogGrid

logger = get_logger(__name__)


def to_polygons(grid: 'FogGrid',
                cell_ids: Iterable[Union[CellId, str]],
                stride: int = 1) -> List[CellPolygon]:
    """
    Build one polygon per cell identifier.

    With ``stride`` 1 each polygon is the cell itself. With a larger stride
    each polygon covers the ``stride`` x ``stride`` block whose lower-left
    cell is the identifier, clipped to the region's north and east edges.

    Args:
        grid: Grid the identifiers belong to
        cell_ids: CellId values or their serialized ``grid_<lat>_<lon>`` form
        stride: Stride returned by the viewport selection

    Returns:
        List of CellPolygon, in input order
    """
    stride = max(1, int(stride))
    polygons = []

    for item in cell_ids:
        if isinstance(item, CellId):
            cell_id = item
        else:
            cell_id = grid.parse_cell_id(item)
            if cell_id is None:
                logger.warning(f"Skipping unparseable cell identifier: {item!r}")
                continue

        bounds = grid.cell_bounds(cell_id, stride)
        polygons.append(CellPolygon(
            cell_id=cell_id,
            grid_id=grid.format_cell_id(cell_id),
            geometry=bounds.to_polygon(),
            bounds=bounds,
            stride=stride,
        ))

    return polygons


def to_feature_collection(polygons: Iterable[CellPolygon]) -> Dict[str, Any]:
    """GeoJSON FeatureCollection of cell polygons, each tagged with its ``gridId``."""
    return {
        'type': 'FeatureCollection',
        'features': [polygon.to_feature() for polygon in polygons],
    }
