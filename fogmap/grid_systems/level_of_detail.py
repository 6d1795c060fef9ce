"""Zoom level to sampling stride mapping."""

from bisect import bisect_right
from typing import List, Optional, Sequence, Tuple

from ..config import config as default_config


class LevelOfDetail:
    """
    Step function from map zoom level to cell sampling stride.

    Thresholds are ``(zoom_below, stride)`` pairs: a zoom strictly below
    ``zoom_below`` uses ``stride``; the first matching pair wins. Zoom
    levels past the last threshold, or no zoom at all, use the default
    stride. Lower zoom always yields an equal or coarser stride.
    """

    def __init__(self,
                 thresholds: Optional[Sequence[Sequence[int]]] = None,
                 default_stride: Optional[int] = None,
                 config=None):
        config = config or default_config
        if thresholds is None:
            thresholds = config.get('level_of_detail.thresholds', [])
        if default_stride is None:
            default_stride = config.get('level_of_detail.default_stride', 1)

        self.thresholds: List[Tuple[float, int]] = sorted(
            (float(zoom), int(stride)) for zoom, stride in thresholds
        )
        self.default_stride = int(default_stride)
        self._validate()

        self._zoom_limits = [zoom for zoom, _ in self.thresholds]

    def _validate(self):
        strides = [stride for _, stride in self.thresholds] + [self.default_stride]
        if any(stride < 1 for stride in strides):
            raise ValueError(f"Strides must be positive integers, got: {strides}")
        # Coarser at lower zoom: strides must not increase as zoom grows
        for coarser, finer in zip(strides, strides[1:]):
            if finer > coarser:
                raise ValueError(
                    f"Level-of-detail table must not get coarser with zoom: {self.thresholds} "
                    f"(default {self.default_stride})"
                )

    def stride_for_zoom(self, zoom: Optional[float]) -> int:
        """Sampling stride in cell units for a zoom level."""
        if zoom is None:
            return self.default_stride

        index = bisect_right(self._zoom_limits, zoom)
        if index < len(self.thresholds):
            return self.thresholds[index][1]
        return self.default_stride

    def __repr__(self) -> str:
        return f"LevelOfDetail(thresholds={self.thresholds}, default_stride={self.default_stride})"
