"""Tests for the cached cell enumeration."""

import threading
import time

from fogmap.abstractions.types import CellId
from fogmap.grid_systems import CellEnumerator


class TestCellEnumerator:
    """Test CellEnumerator directly."""

    def test_row_major_order(self):
        """Test cells are listed row by row."""
        enumerator = CellEnumerator(lambda: (2, 3))

        assert enumerator.all_cell_ids() == [
            CellId(0, 0), CellId(0, 1), CellId(0, 2),
            CellId(1, 0), CellId(1, 1), CellId(1, 2),
        ]

    def test_lazy_and_cached(self):
        """Test nothing is computed until first access, and only once."""
        enumerator = CellEnumerator(lambda: (4, 4))
        assert not enumerator.is_populated
        assert enumerator.computations == 0

        first = enumerator.all_cell_ids()
        second = enumerator.all_cell_ids()

        assert enumerator.is_populated
        assert first is second
        assert enumerator.computations == 1

    def test_concurrent_first_access(self):
        """Test concurrent first callers trigger a single computation."""
        def slow_dimensions():
            time.sleep(0.05)
            return (50, 50)

        enumerator = CellEnumerator(slow_dimensions)
        barrier = threading.Barrier(8)
        results = []
        results_lock = threading.Lock()

        def worker():
            barrier.wait()
            cells = enumerator.all_cell_ids()
            with results_lock:
                results.append(cells)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert enumerator.computations == 1
        assert len(results) == 8
        assert all(cells is results[0] for cells in results)
        assert len(results[0]) == 2500

    def test_clear(self):
        """Test clearing forces a recomputation."""
        enumerator = CellEnumerator(lambda: (3, 3))
        enumerator.all_cell_ids()

        enumerator.clear()

        assert not enumerator.is_populated
        assert len(enumerator.all_cell_ids()) == 9
        assert enumerator.computations == 2


class TestGridEnumeration:
    """Test enumeration through a fog grid."""

    def test_taiwan_cell_count(self, taiwan_grid):
        """Test the Taiwan grid has 444 x 350 cells."""
        cells = taiwan_grid.all_cell_ids()

        assert len(cells) == 155400
        assert cells[0] == CellId(0, 0)
        assert cells[-1] == CellId(443, 349)
        assert len(set(cells)) == len(cells)

    def test_enumerated_cells_match_lookup(self, taiwan_grid):
        """Test each enumerated cell's corner maps back to that cell."""
        for cell_id in taiwan_grid.all_cell_ids():
            lat, lon = taiwan_grid.cell_origin(cell_id)
            assert taiwan_grid.quantize(lat, lon) == cell_id

    def test_enumerated_identifiers_unique(self, taiwan_grid):
        """Test serialized identifiers are distinct across the grid."""
        identifiers = {taiwan_grid.format_cell_id(cell_id) for cell_id in taiwan_grid.all_cell_ids()}

        assert len(identifiers) == 155400

    def test_ragged_region(self, ragged_grid):
        """Test a region that is not a whole number of cells rounds up."""
        assert len(ragged_grid.all_cell_ids()) == 16

    def test_grid_shares_enumerator(self, small_grid):
        """Test repeated access on a grid reuses the cached list."""
        assert small_grid.all_cell_ids() is small_grid.all_cell_ids()
        assert small_grid.enumerator.computations == 1

    def test_injected_enumerator(self, test_config):
        """Test a grid can use a provided enumerator."""
        from fogmap.grid_systems import FogGrid

        enumerator = CellEnumerator(lambda: (2, 2))
        grid = FogGrid((0.0, 0.0, 2.0, 2.0), cell_size_lat=1.0, cell_size_lon=1.0,
                       enumerator=enumerator, config=test_config)

        assert grid.enumerator is enumerator
        assert grid.all_cell_ids() == [CellId(0, 0), CellId(0, 1), CellId(1, 0), CellId(1, 1)]
