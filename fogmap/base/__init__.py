"""
Base classes for the fog grid engine.

- BaseGrid: region tiling, coordinate lookup, viewport selection
"""

from .grid import BaseGrid

__all__ = ['BaseGrid']
