"""
Data structures exchanged with the planning collaborators.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class PathPoint:
    """Point on the planned path."""
    x: float        # Global X position [m]
    y: float        # Global Y position [m]
    theta: float    # Heading [rad]
    s: float = 0.0  # Accumulated arc length [m]


@dataclass
class PathData:
    """Planned path as an ordered sequence of points with non-decreasing s."""
    path_points: List[PathPoint] = field(default_factory=list)

    @property
    def num_of_points(self) -> int:
        return len(self.path_points)


@dataclass(frozen=True)
class SLPoint:
    """Point in the Frenet frame of a reference line."""
    s: float  # Station [m]
    l: float  # Lateral offset [m] (positive = left)


@dataclass(frozen=True)
class STPoint:
    """Point in the station-time plane."""
    s: float  # Station [m]
    t: float  # Time [s]


@dataclass(frozen=True)
class TrajectoryPoint:
    """Predicted pose of an obstacle at a time relative to its trajectory start."""
    path_point: PathPoint
    relative_time: float = 0.0  # [s]


@dataclass
class PredictionTrajectory:
    """One predicted motion hypothesis for an obstacle."""
    start_timestamp: float = 0.0  # Absolute time of the first point [s]
    trajectory_points: List[TrajectoryPoint] = field(default_factory=list)

    @property
    def num_of_points(self) -> int:
        return len(self.trajectory_points)
