"""
Reference Line - Interface for the geometric centerline of the planning corridor.
"""

from abc import ABC, abstractmethod
from typing import Optional

from .data_types import SLPoint


class IReferenceLine(ABC):
    """Abstract interface for a reference line with a Frenet projection."""

    @property
    @abstractmethod
    def length(self) -> float:
        """Total arc length of the reference line in meters."""
        pass

    @abstractmethod
    def get_point_in_frenet_frame(self, x: float, y: float) -> Optional[SLPoint]:
        """
        Project a Cartesian point onto the reference line.

        Args:
            x: Global X position [m]
            y: Global Y position [m]

        Returns:
            SLPoint, or None if the point cannot be projected
        """
        pass
