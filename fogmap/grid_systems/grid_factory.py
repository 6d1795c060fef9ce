# fogmap/grid_systems/grid_factory.py
"""Factory for creating and sharing fog grids."""

import threading
from typing import Dict, Optional, Tuple, Union
from dataclasses import dataclass, asdict

from ..config import config as default_config
from ..infrastructure.logging import get_logger
from .bounds_manager import BoundsManager, BoundsDefinition
from .fog_grid import FogGrid

logger = get_logger(__name__)


@dataclass(frozen=True)
class GridSpecification:
    """Specification for fog grid creation. Unset fields fall back to config."""
    region: Optional[str] = None
    cell_size_lat: Optional[float] = None
    cell_size_lon: Optional[float] = None
    longitude_correction: Optional[bool] = None
    reference_latitude: Optional[float] = None

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return asdict(self)


class GridFactory:
    """
    Factory for fog grids.

    Grids are cached per resolved specification, so every caller asking
    for the same region and cell size shares one grid and therefore one
    cell enumeration.
    """

    def __init__(self, config=None):
        """Initialize grid factory."""
        self.config = config or default_config
        self.bounds_manager = BoundsManager(self.config)
        self._grid_cache: Dict[Tuple, FogGrid] = {}
        self._lock = threading.Lock()

    def _resolve(self, spec: GridSpecification) -> GridSpecification:
        """Fill unset specification fields from config."""
        grid_config = self.config.get('fog_grid', {})

        correction = spec.longitude_correction
        if correction is None:
            correction = bool(grid_config.get('longitude_correction', False))

        cell_size_lon = spec.cell_size_lon
        if cell_size_lon is None and not correction:
            cell_size_lon = grid_config.get('cell_size_lon')

        return GridSpecification(
            region=spec.region or grid_config.get('region', 'taiwan'),
            cell_size_lat=spec.cell_size_lat if spec.cell_size_lat is not None
            else grid_config.get('cell_size_lat'),
            cell_size_lon=cell_size_lon,
            longitude_correction=correction,
            reference_latitude=spec.reference_latitude if spec.reference_latitude is not None
            else grid_config.get('reference_latitude'),
        )

    def create_grid(self, spec: Union[GridSpecification, Dict, None] = None) -> FogGrid:
        """
        Create a new (uncached) grid from a specification.

        Args:
            spec: Grid specification; None uses the configured defaults

        Returns:
            Created grid instance
        """
        if spec is None:
            spec = GridSpecification()
        elif isinstance(spec, dict):
            spec = GridSpecification(**spec)

        resolved = self._resolve(spec)
        bounds_def: BoundsDefinition = self.bounds_manager.get_bounds(resolved.region)

        logger.info(f"Creating fog grid for region '{bounds_def.name}'")

        return FogGrid(
            bounds=bounds_def,
            cell_size_lat=resolved.cell_size_lat,
            cell_size_lon=resolved.cell_size_lon,
            longitude_correction=resolved.longitude_correction,
            reference_latitude=resolved.reference_latitude,
            config=self.config,
        )

    def get_grid(self, spec: Union[GridSpecification, Dict, None] = None) -> FogGrid:
        """Get the shared grid for a specification, creating it on first use."""
        if spec is None:
            spec = GridSpecification()
        elif isinstance(spec, dict):
            spec = GridSpecification(**spec)

        key = tuple(self._resolve(spec).to_dict().values())
        grid = self._grid_cache.get(key)
        if grid is not None:
            return grid

        with self._lock:
            if key not in self._grid_cache:
                self._grid_cache[key] = self.create_grid(spec)
            return self._grid_cache[key]

    def clear_cache(self):
        """Forget all shared grids and their cell caches."""
        with self._lock:
            for grid in self._grid_cache.values():
                grid.enumerator.clear()
            self._grid_cache.clear()


_default_factory: Optional[GridFactory] = None
_factory_lock = threading.Lock()


def get_default_factory() -> GridFactory:
    """Process-wide factory bound to the global config."""
    global _default_factory
    if _default_factory is None:
        with _factory_lock:
            if _default_factory is None:
                _default_factory = GridFactory()
    return _default_factory


def grid_from_config(config=None) -> FogGrid:
    """Create a grid exactly as the ``fog_grid`` section of a config describes it."""
    return GridFactory(config).create_grid()


def get_or_create_grid(region: Optional[str] = None, **spec_fields) -> FogGrid:
    """
    Get the process-shared grid for a region.

    Args:
        region: Region name (defaults to ``fog_grid.region``)
        **spec_fields: Other GridSpecification fields

    Returns:
        Grid instance
    """
    return get_default_factory().get_grid(GridSpecification(region=region, **spec_fields))
