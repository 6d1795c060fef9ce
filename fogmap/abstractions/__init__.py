"""Abstractions layer - value types with no dependencies on the rest of fogmap."""

from .types import CellId, CellBounds, Viewport, VisibleCells, CellPolygon

__all__ = [
    'CellId',
    'CellBounds',
    'Viewport',
    'VisibleCells',
    'CellPolygon',
]
