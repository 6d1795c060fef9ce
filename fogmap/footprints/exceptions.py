"""Footprint-specific exceptions."""

from typing import Optional


class FootprintError(Exception):
    """Base footprint error."""
    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        super().__init__(message)
        self.original_exception = original_exception


class CoordinateParseError(FootprintError):
    """Raised when a stored "lat,lon" coordinate cannot be parsed."""
    pass
