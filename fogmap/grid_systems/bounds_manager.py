"""Bounds management for fog grid regions."""

from typing import Tuple, Dict, List, Optional, cast
from dataclasses import dataclass
from shapely.geometry import Polygon, box
import math

from ..config import config as default_config
from ..infrastructure.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class BoundsDefinition:
    """Structured bounds definition of a geographic region."""
    name: str
    bounds: Tuple[float, float, float, float]  # min_lon, min_lat, max_lon, max_lat
    crs: str = "EPSG:4326"
    category: str = "custom"  # country, island, global, custom
    metadata: Optional[Dict] = None

    def __post_init__(self):
        if len(self.bounds) != 4:
            raise ValueError(f"Bounds must have 4 values, got: {self.bounds}")
        min_lon, min_lat, max_lon, max_lat = self.bounds
        if not (min_lon < max_lon and min_lat < max_lat):
            raise ValueError(f"Bounds for '{self.name}' are empty or inverted: {self.bounds}")

    @property
    def min_lat(self) -> float:
        return self.bounds[1]

    @property
    def max_lat(self) -> float:
        return self.bounds[3]

    @property
    def min_lon(self) -> float:
        return self.bounds[0]

    @property
    def max_lon(self) -> float:
        return self.bounds[2]

    @property
    def center_lat(self) -> float:
        return (self.min_lat + self.max_lat) / 2

    @property
    def polygon(self) -> Polygon:
        """Get bounds as polygon."""
        return box(*self.bounds)

    @property
    def area_km2(self) -> float:
        """Calculate area in km² using simple approximation."""
        # 1 degree ≈ 111 km at the equator, longitude scaled by cos(latitude)
        width_km = (self.max_lon - self.min_lon) * 111.0 * abs(math.cos(math.radians(self.center_lat)))
        height_km = (self.max_lat - self.min_lat) * 111.0

        return width_km * height_km

    def contains(self, lon: float, lat: float) -> bool:
        """Check if point is within bounds (edges included)."""
        return (self.min_lon <= lon <= self.max_lon and
                self.min_lat <= lat <= self.max_lat)

    def intersects(self, other_bounds: Tuple[float, float, float, float]) -> bool:
        """Check if bounds intersect with other bounds."""
        return self.polygon.intersects(box(*other_bounds))

    def intersection(self, other_bounds: Tuple[float, float, float, float]) -> Optional[Tuple[float, float, float, float]]:
        """
        Get the overlapping window of two bounds.

        Returns None when the overlap has no area, including windows that
        only touch along an edge.
        """
        west = max(other_bounds[0], self.min_lon)
        south = max(other_bounds[1], self.min_lat)
        east = min(other_bounds[2], self.max_lon)
        north = min(other_bounds[3], self.max_lat)

        # Also rejects NaN edges
        if not (south < north and west < east):
            return None

        return (west, south, east, north)


class BoundsManager:
    """Manage named regions that a fog grid can cover."""

    # Predefined regions
    REGIONS = {
        'taiwan': BoundsDefinition('taiwan', (119.0, 21.5, 122.5, 25.5), category='country'),
        'penghu': BoundsDefinition('penghu', (119.3, 23.1, 119.8, 23.8), category='island'),
        'kinmen': BoundsDefinition('kinmen', (118.2, 24.3, 118.5, 24.6), category='island'),
        'global': BoundsDefinition('global', (-180, -90, 180, 90), category='global'),
    }

    def __init__(self, config=None):
        """Initialize bounds manager."""
        self.config = config or default_config
        self.custom_regions: Dict[str, BoundsDefinition] = {}
        self._load_custom_regions()

    def _load_custom_regions(self):
        """Load custom regions from config."""
        custom_bounds = self.config.get('regions.custom', {}) or {}

        for name, bounds_config in custom_bounds.items():
            if isinstance(bounds_config, (list, tuple)) and len(bounds_config) == 4:
                self.custom_regions[name] = BoundsDefinition(
                    name=name,
                    bounds=cast(Tuple[float, float, float, float],
                                tuple(float(v) for v in bounds_config)),
                    category='custom'
                )
            elif isinstance(bounds_config, dict):
                self.custom_regions[name] = BoundsDefinition(
                    name=name,
                    bounds=cast(Tuple[float, float, float, float],
                                tuple(float(v) for v in bounds_config['bounds'])),
                    category=bounds_config.get('category', 'custom'),
                    metadata=bounds_config.get('metadata')
                )
            else:
                logger.warning(f"Ignoring malformed custom region '{name}': {bounds_config!r}")

    def get_bounds(self, name: str) -> BoundsDefinition:
        """
        Get bounds by name.

        Args:
            name: Region name or 'min_lon,min_lat,max_lon,max_lat' string

        Returns:
            BoundsDefinition object
        """
        if name in self.custom_regions:
            return self.custom_regions[name]

        if name in self.REGIONS:
            return self.REGIONS[name]

        # Try to parse as bounds string
        if ',' in name:
            try:
                parts = [float(x.strip()) for x in name.split(',')]
            except ValueError:
                parts = []
            if len(parts) == 4:
                return BoundsDefinition(
                    name='custom_bounds',
                    bounds=cast(Tuple[float, float, float, float], tuple(parts)),
                    category='custom'
                )

        raise ValueError(f"Unknown bounds: {name}. Available: {self.list_available()}")

    def list_available(self) -> Dict[str, List[str]]:
        """List all available bounds grouped by category."""
        available: Dict[str, List[str]] = {}

        for name, bounds_def in self.REGIONS.items():
            available.setdefault(bounds_def.category, []).append(name)

        if self.custom_regions:
            available['custom'] = list(self.custom_regions.keys())

        return available
