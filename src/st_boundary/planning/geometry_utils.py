"""
Geometric utility functions for ST boundary mapping.

Polygon areas are computed in the station-time plane with time as the first
axis and station as the second, so a boundary whose vertices go forward in
time along its lower edge and back along its upper edge has positive area.
Footprint overlap uses oriented boxes backed by shapely polygons.
"""

import math
from typing import List, Sequence, Tuple

import numpy as np
from shapely.geometry import Polygon

from st_boundary.config.vehicle_config import VehicleParam
from st_boundary.gateway.data_types import PathPoint, STPoint

# Areas at or below this are treated as degenerate
AREA_EPSILON = 1e-6


def get_area(boundary_points: Sequence[STPoint]) -> float:
    """
    Compute the signed area of an ST polygon.

    Args:
        boundary_points: Ordered polygon vertices

    Returns:
        Signed area (positive for counter-clockwise order in (t, s)), 0 for fewer than 3 points
    """
    if len(boundary_points) < 3:
        return 0.0

    t = np.array([p.t for p in boundary_points], dtype=float)
    s = np.array([p.s for p in boundary_points], dtype=float)
    return float(0.5 * (np.dot(t, np.roll(s, -1)) - np.dot(s, np.roll(t, -1))))


def is_positive_area(boundary_points: Sequence[STPoint]) -> bool:
    """Check that a polygon encloses a strictly positive signed area."""
    return get_area(boundary_points) > AREA_EPSILON


class Box2d:
    """Oriented rectangle in the global frame."""

    def __init__(self, center_x: float, center_y: float, heading: float, length: float, width: float):
        """
        Args:
            center_x: Box center X [m]
            center_y: Box center Y [m]
            heading: Orientation of the length axis [rad]
            length: Extent along heading [m]
            width: Extent across heading [m]
        """
        self.center = np.array([center_x, center_y], dtype=float)
        self.heading = heading
        self.length = length
        self.width = width
        self._polygon = None

    def corners(self) -> List[Tuple[float, float]]:
        """
        Compute the four corners, counter-clockwise from front-left.

        Returns:
            List of (x, y) tuples
        """
        direction = np.array([math.cos(self.heading), math.sin(self.heading)])
        normal = np.array([-direction[1], direction[0]])
        half_length = direction * self.length / 2.0
        half_width = normal * self.width / 2.0

        corners = [
            self.center + half_length + half_width,
            self.center - half_length + half_width,
            self.center - half_length - half_width,
            self.center + half_length - half_width,
        ]
        return [(float(c[0]), float(c[1])) for c in corners]

    @property
    def polygon(self) -> Polygon:
        if self._polygon is None:
            self._polygon = Polygon(self.corners())
        return self._polygon

    def has_overlap(self, other: 'Box2d') -> bool:
        """Check whether two boxes intersect (touching counts as overlap)."""
        return self.polygon.intersects(other.polygon)


def get_vehicle_box(path_point: PathPoint, vehicle_param: VehicleParam, buffer: float) -> Box2d:
    """
    Build the ego footprint at a path point.

    Path points refer to the rear axle center, so the footprint center sits
    mid_to_rear_center behind the point along its heading.
    """
    offset = vehicle_param.mid_to_rear_center
    x = path_point.x - offset * math.cos(path_point.theta)
    y = path_point.y - offset * math.sin(path_point.theta)
    return Box2d(
        x, y, path_point.theta,
        vehicle_param.length + 2.0 * buffer,
        vehicle_param.width + 2.0 * buffer
    )


def check_overlap(path_point: PathPoint, vehicle_param: VehicleParam, obs_box: Box2d, buffer: float) -> bool:
    """
    Check whether the ego footprint at a path point overlaps an obstacle box.

    Args:
        path_point: Ego reference point on the planned path
        vehicle_param: Ego vehicle dimensions
        obs_box: Obstacle footprint
        buffer: Margin added on every side of the ego footprint [m]

    Returns:
        True if the footprints intersect
    """
    return obs_box.has_overlap(get_vehicle_box(path_point, vehicle_param, buffer))
