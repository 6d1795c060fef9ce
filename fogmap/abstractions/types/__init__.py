# fogmap/abstractions/types/__init__.py
"""Type definitions for the abstractions layer."""

# Grid types
from .grid_types import CellId, CellBounds, Viewport, VisibleCells, CellPolygon

__all__ = [
    'CellId',
    'CellBounds',
    'Viewport',
    'VisibleCells',
    'CellPolygon',
]
