"""
Map Service - Interface for resolving lane references to map points.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple


class IMapService(ABC):
    """Abstract interface for lane geometry lookups."""

    @abstractmethod
    def get_smooth_point(self, lane_id: str, s: float) -> Optional[Tuple[float, float]]:
        """
        Resolve a point at arc length s along a lane.

        Args:
            lane_id: Lane identifier
            s: Arc length along the lane [m]

        Returns:
            (x, y) in global coordinates, or None if the lane is unknown
        """
        pass
