"""
Overlap Locator - Finds where on the planned path the ego footprint meets an obstacle.

For one predicted obstacle pose, two path indices converge from both ends of
the path until each lands on a point whose ego footprint overlaps the
expanded obstacle box. The first and last overlapping stations become one
lower and one upper ST envelope sample.
"""

from typing import Optional, Sequence, Tuple

from st_boundary.config.st_boundary_config import StBoundaryConfig
from st_boundary.config.vehicle_config import VehicleParam
from st_boundary.gateway.data_types import PathPoint, STPoint, TrajectoryPoint
from st_boundary.planning.geometry_utils import Box2d, check_overlap


def build_obstacle_box(
    trajectory_point: TrajectoryPoint,
    obstacle_length: float,
    obstacle_width: float,
    expanding_coeff: float
) -> Box2d:
    """Obstacle footprint at a predicted pose, scaled by the expansion coefficient."""
    pose = trajectory_point.path_point
    return Box2d(
        pose.x, pose.y, pose.theta,
        obstacle_length * expanding_coeff,
        obstacle_width * expanding_coeff
    )


def find_overlap_indices(
    path_points: Sequence[PathPoint],
    obs_box: Box2d,
    vehicle_param: VehicleParam,
    buffer: float
) -> Optional[Tuple[int, int]]:
    """
    Search the path from both ends for the first and last overlapping points.

    Args:
        path_points: Planned path
        obs_box: Obstacle footprint
        vehicle_param: Ego vehicle dimensions
        buffer: Margin around the ego footprint [m]

    Returns:
        (low, high) path indices, or None if either search reaches the other index first
    """
    low = 0
    high = len(path_points) - 1
    find_low = False
    find_high = False

    while low < high:
        if find_low and find_high:
            break
        if not find_low:
            if check_overlap(path_points[low], vehicle_param, obs_box, buffer):
                find_low = True
            else:
                low += 1
        if not find_high:
            if check_overlap(path_points[high], vehicle_param, obs_box, buffer):
                find_high = True
            else:
                high -= 1

    if find_low and find_high:
        return low, high
    return None


def locate_overlap(
    trajectory_point: TrajectoryPoint,
    obstacle_length: float,
    obstacle_width: float,
    path_points: Sequence[PathPoint],
    vehicle_param: VehicleParam,
    config: StBoundaryConfig,
    time: float
) -> Optional[Tuple[STPoint, STPoint]]:
    """
    Compute the lower and upper ST samples for one predicted obstacle pose.

    Args:
        trajectory_point: Predicted obstacle pose
        obstacle_length: Obstacle length [m]
        obstacle_width: Obstacle width [m]
        path_points: Planned path
        vehicle_param: Ego vehicle dimensions
        config: Boundary margins
        time: Sample time relative to the current planning cycle [s]

    Returns:
        (lower, upper) STPoints, or None if the obstacle does not meet the path at this time
    """
    obs_box = build_obstacle_box(trajectory_point, obstacle_length, obstacle_width, config.expanding_coeff)
    indices = find_overlap_indices(path_points, obs_box, vehicle_param, config.boundary_buffer)
    if indices is None:
        return None

    low, high = indices
    lower = STPoint(path_points[low].s - config.point_extension, time)
    upper = STPoint(path_points[high].s + config.point_extension, time)
    return lower, upper
