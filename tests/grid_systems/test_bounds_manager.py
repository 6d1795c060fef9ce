"""Tests for bounds manager."""

import pytest

from fogmap.config.config import Config
from fogmap.grid_systems import BoundsManager, BoundsDefinition


class TestBoundsDefinition:
    """Test BoundsDefinition class."""

    def test_bounds_creation(self):
        """Test creating bounds definition."""
        bounds = BoundsDefinition('test', (0, 0, 10, 10))

        assert bounds.name == 'test'
        assert bounds.bounds == (0, 0, 10, 10)
        assert bounds.crs == "EPSG:4326"
        assert bounds.category == "custom"

    def test_lat_lon_accessors(self, sample_bounds):
        """Test min/max accessors follow (min_lon, min_lat, max_lon, max_lat)."""
        taiwan = sample_bounds['taiwan']

        assert taiwan.min_lon == 119.0
        assert taiwan.min_lat == 21.5
        assert taiwan.max_lon == 122.5
        assert taiwan.max_lat == 25.5
        assert taiwan.center_lat == 23.5

    @pytest.mark.parametrize("bounds", [
        (0, 0, 1),
        (0, 0, 0, 1),
        (0, 5, 1, 1),
        (5, 0, 1, 1),
    ])
    def test_invalid_bounds_rejected(self, bounds):
        """Test that empty, inverted or malformed bounds raise."""
        with pytest.raises(ValueError):
            BoundsDefinition('bad', bounds)

    def test_polygon_property(self):
        """Test polygon generation."""
        poly = BoundsDefinition('test', (0, 0, 10, 10)).polygon

        assert poly.bounds == (0, 0, 10, 10)
        assert poly.area == 100

    def test_area_calculation(self):
        """Test area calculation in km²."""
        # Approximate 1 degree = 111 km at equator
        area = BoundsDefinition('test', (0, 0, 1, 1)).area_km2

        assert area > 12000  # Should be ~12,321 km²
        assert area < 13000

    def test_contains_point(self):
        """Test point containment, edges included."""
        bounds = BoundsDefinition('test', (0, 0, 10, 10))

        assert bounds.contains(5, 5)       # Inside
        assert bounds.contains(0, 0)       # Corner
        assert bounds.contains(10, 10)     # Opposite corner
        assert not bounds.contains(-1, 5)  # Outside
        assert not bounds.contains(5, 11)  # Outside

    def test_intersects(self):
        """Test bounds intersection check."""
        bounds = BoundsDefinition('test1', (0, 0, 10, 10))

        assert bounds.intersects((5, 5, 15, 15))
        assert bounds.intersects((2, 2, 8, 8))
        assert not bounds.intersects((20, 20, 30, 30))

    def test_intersection(self):
        """Test bounds intersection calculation."""
        bounds = BoundsDefinition('test1', (0, 0, 10, 10))

        assert bounds.intersection((5, 5, 15, 15)) == (5, 5, 10, 10)
        assert bounds.intersection((2, 2, 8, 8)) == (2, 2, 8, 8)
        assert bounds.intersection((20, 20, 30, 30)) is None

    def test_intersection_without_area(self):
        """Test that edge contact and inverted windows give no intersection."""
        bounds = BoundsDefinition('test1', (0, 0, 10, 10))

        assert bounds.intersection((10, 0, 20, 10)) is None   # Shares east edge
        assert bounds.intersection((0, 10, 10, 20)) is None   # Shares north edge
        assert bounds.intersection((8, 2, 2, 8)) is None      # west > east
        assert bounds.intersection((float('nan'), 0, 5, 5)) is None


class TestBoundsManager:
    """Test BoundsManager class."""

    def test_predefined_regions(self, bounds_manager):
        """Test accessing predefined regions."""
        taiwan = bounds_manager.get_bounds('taiwan')
        assert taiwan.name == 'taiwan'
        assert taiwan.bounds == (119.0, 21.5, 122.5, 25.5)
        assert taiwan.category == 'country'

        penghu = bounds_manager.get_bounds('penghu')
        assert penghu.category == 'island'

        global_bounds = bounds_manager.get_bounds('global')
        assert global_bounds.bounds == (-180, -90, 180, 90)

    def test_custom_bounds_string(self, bounds_manager):
        """Test parsing custom bounds from string."""
        bounds = bounds_manager.get_bounds('121.0,24.5,122.0,25.5')

        assert bounds.name == 'custom_bounds'
        assert bounds.bounds == (121.0, 24.5, 122.0, 25.5)

    @pytest.mark.parametrize("name", ['atlantis', '1,2,3', 'a,b,c,d'])
    def test_unknown_bounds(self, bounds_manager, name):
        """Test that unknown regions raise ValueError."""
        with pytest.raises(ValueError, match="Unknown bounds"):
            bounds_manager.get_bounds(name)

    def test_custom_regions_from_config(self):
        """Test list and mapping forms of configured regions."""
        config = Config()
        config.set('regions.custom', {
            'yilan': [121.3, 24.3, 122.0, 24.9],
            'green_island': {
                'bounds': [121.45, 22.63, 121.52, 22.69],
                'category': 'island',
                'metadata': {'county': 'Taitung'},
            },
        })

        manager = BoundsManager(config)

        yilan = manager.get_bounds('yilan')
        assert yilan.bounds == (121.3, 24.3, 122.0, 24.9)
        assert yilan.category == 'custom'

        green_island = manager.get_bounds('green_island')
        assert green_island.category == 'island'
        assert green_island.metadata == {'county': 'Taitung'}

    def test_custom_region_overrides_predefined(self):
        """Test that a configured region replaces a predefined one of the same name."""
        config = Config()
        config.set('regions.custom', {'taiwan': [120.0, 22.0, 122.0, 25.0]})

        manager = BoundsManager(config)

        assert manager.get_bounds('taiwan').bounds == (120.0, 22.0, 122.0, 25.0)

    def test_malformed_custom_region_ignored(self):
        """Test that malformed configured regions are skipped."""
        config = Config()
        config.set('regions.custom', {'broken': 'not-a-region'})

        manager = BoundsManager(config)

        assert 'broken' not in manager.custom_regions
        with pytest.raises(ValueError):
            manager.get_bounds('broken')

    def test_list_available(self, bounds_manager):
        """Test listing available bounds."""
        available = bounds_manager.list_available()

        assert 'taiwan' in available['country']
        assert set(available['island']) == {'penghu', 'kinmen'}
        assert available['global'] == ['global']
        assert 'custom' not in available
