"""
Fog-of-war grid engine for GPS exploration maps.

This package tiles a geographic region into fixed-size cells, maps GPS
coordinates to cell identifiers, selects the cells visible in a map
viewport and emits polygon geometry for rendering explored and
unexplored ground.
"""

__version__ = "1.0.0"
__description__ = "Geospatial fog-of-war grid engine"

# Note: Modules should be imported explicitly when needed so that
# importing the package does not load configuration files.

__all__ = [
    '__version__',
    '__description__',
]
