"""Process-lifetime cache of every cell in a fog grid."""

import threading
from typing import Callable, List, Optional, Tuple

from ..abstractions.types import CellId
from ..infrastructure.logging import get_logger, log_operation

logger = get_logger(__name__)


class CellEnumerator:
    """
    Lazily computes and caches the full list of cells of a grid.

    The list is built on first access under a lock, so concurrent first
    callers trigger exactly one computation; afterwards reads take no lock.
    The cached list is shared and must be treated as read-only.
    """

    def __init__(self, dimensions: Callable[[], Tuple[int, int]]):
        """
        Args:
            dimensions: Callable returning ``(lat_steps, lon_steps)`` of the grid
        """
        self._dimensions = dimensions
        self._cells: Optional[List[CellId]] = None
        self._lock = threading.Lock()
        self.computations = 0

    def all_cell_ids(self) -> List[CellId]:
        """Get all cell identifiers (computed once)."""
        cells = self._cells
        if cells is not None:
            return cells

        with self._lock:
            if self._cells is None:
                self._cells = self._enumerate()
            return self._cells

    @log_operation("enumerate_cells")
    def _enumerate(self) -> List[CellId]:
        lat_steps, lon_steps = self._dimensions()
        self.computations += 1
        return [CellId(row, col) for row in range(lat_steps) for col in range(lon_steps)]

    @property
    def is_populated(self) -> bool:
        return self._cells is not None

    def clear(self):
        """Drop the cached cells; the next access recomputes them."""
        with self._lock:
            if self._cells is not None:
                logger.info(f"Clearing cell cache ({len(self._cells)} cells)")
            self._cells = None
