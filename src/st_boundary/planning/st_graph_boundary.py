"""
ST graph boundary - a forbidden region in the station-time plane.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from st_boundary.gateway.data_types import STPoint
from st_boundary.planning.geometry_utils import get_area, is_positive_area


class BoundaryType(Enum):
    """Decision that produced a boundary."""
    UNKNOWN = 0
    STOP = 1
    FOLLOW = 2
    YIELD = 3
    OVERTAKE = 4
    MISSION_COMPLETE = 5


@dataclass(frozen=True)
class StGraphBoundary:
    """
    Polygon in the ST plane where the ego vehicle must not be.

    Vertices must enclose a strictly positive signed area; construction
    fails otherwise.
    """
    points: Tuple[STPoint, ...]
    boundary_type: BoundaryType = BoundaryType.UNKNOWN
    characteristic_length: float = 1.0
    obstacle_id: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'points', tuple(self.points))
        if not is_positive_area(self.points):
            raise ValueError(f"Boundary area must be positive, got {get_area(self.points):.6f}")

    @property
    def area(self) -> float:
        return get_area(self.points)

    @property
    def min_s(self) -> float:
        return min(p.s for p in self.points)

    @property
    def max_s(self) -> float:
        return max(p.s for p in self.points)

    @property
    def min_t(self) -> float:
        return min(p.t for p in self.points)

    @property
    def max_t(self) -> float:
        return max(p.t for p in self.points)
