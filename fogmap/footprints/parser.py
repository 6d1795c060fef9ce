"""Parsing of stored "lat,lon" coordinate strings."""

import math

from .exceptions import CoordinateParseError
from .models import Coordinate


def parse_coordinate(text: str) -> Coordinate:
    """
    Parse a ``"lat,lon"`` string.

    Raises:
        CoordinateParseError: For anything other than two finite numbers
    """
    if not isinstance(text, str):
        raise CoordinateParseError(f"Coordinate must be a string, got {type(text).__name__}")

    parts = text.split(',')
    if len(parts) != 2:
        raise CoordinateParseError(f"Expected 'lat,lon', got {text!r}")

    try:
        lat = float(parts[0].strip())
        lon = float(parts[1].strip())
    except ValueError as e:
        raise CoordinateParseError(f"Non-numeric coordinate {text!r}", e)

    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise CoordinateParseError(f"Non-finite coordinate {text!r}")

    return Coordinate(lat, lon)


def format_coordinate(lat: float, lon: float) -> str:
    """Inverse of parse_coordinate, as the footprint store writes it."""
    return f"{lat},{lon}"
