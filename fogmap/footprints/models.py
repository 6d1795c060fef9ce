"""Footprint records as handed over by the persistence layer."""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Any

from ..abstractions.types import CellId


@dataclass(frozen=True)
class Coordinate:
    """A parsed GPS coordinate in degrees."""
    lat: float
    lon: float


@dataclass(frozen=True)
class Footprint:
    """One recorded visit: the raw stored coordinate text and when it was made."""
    coordinate: str
    created_at: datetime


@dataclass(frozen=True)
class ExploredCell:
    """Most recent visit inside a cell."""
    cell_id: CellId
    grid_id: str
    coordinate: str
    explored_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            'gridId': self.grid_id,
            'coordinate': self.coordinate,
            'exploredAt': self.explored_at.isoformat(),
        }
