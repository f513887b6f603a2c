"""
Shared fixtures: a straight 100 m path along the x axis with s == x.
"""

import math
from typing import List, Optional

import pytest

from st_boundary.config import StBoundaryConfig, VehicleParam
from st_boundary.gateway import (
    IReferenceLine, PathData, PathPoint, PredictionTrajectory, SLPoint, TrajectoryPoint
)
from st_boundary.maps import DiscretizedReferenceLine, FixedVehicleState, LaneMap
from st_boundary.planning import Obstacle, StBoundaryMapper


class FakeReferenceLine(IReferenceLine):
    """Reference line that projects every point to a fixed station."""

    def __init__(self, length: float, projected_s: Optional[float]):
        self._length = length
        self.projected_s = projected_s

    @property
    def length(self) -> float:
        return self._length

    def get_point_in_frenet_frame(self, x, y):
        if self.projected_s is None:
            return None
        return SLPoint(self.projected_s, 0.0)


def make_trajectory(poses, start_timestamp: float = 0.0) -> PredictionTrajectory:
    """Build a trajectory from (x, y, theta, relative_time) tuples."""
    return PredictionTrajectory(
        start_timestamp,
        [TrajectoryPoint(PathPoint(x, y, theta), t) for x, y, theta, t in poses]
    )


def make_parked_obstacle(obstacle_id: str, x: float, decisions: List, times=(0.0, 1.0, 2.0, 3.0, 4.0),
                         length: float = 4.0, width: float = 2.0, speed: float = 0.0) -> Obstacle:
    """Obstacle predicted to sit on the path at x for every sample time."""
    trajectory = make_trajectory([(x, 0.0, 0.0, t) for t in times])
    return Obstacle(obstacle_id, length, width, speed, [trajectory], decisions)


@pytest.fixture
def config():
    return StBoundaryConfig(
        boundary_buffer=0.1,
        follow_buffer=1.0,
        point_extension=1.0,
        expanding_coeff=1.0,
        minimal_follow_time=2.0,
        success_tunnel=1.5,
        backward_routing_distance=5.0,
        decision_valid_stop_range=1.0
    )


@pytest.fixture
def vehicle_param():
    # Footprint spans [x - 3, x + 1] around a path point at x
    return VehicleParam(length=4.0, width=2.0, front_edge_to_center=1.0)


@pytest.fixture
def path_data():
    return PathData([PathPoint(float(x), 0.0, 0.0, float(x)) for x in range(101)])


@pytest.fixture
def reference_line():
    return DiscretizedReferenceLine([(0.0, 0.0), (200.0, 0.0)])


@pytest.fixture
def lane_map():
    return LaneMap({'lane_1': [(0.0, 0.0), (200.0, 0.0)]})


@pytest.fixture
def vehicle_state():
    return FixedVehicleState(0.0)


@pytest.fixture
def mapper(config, vehicle_param, lane_map, vehicle_state):
    return StBoundaryMapper(config, vehicle_param, lane_map, vehicle_state)


def assert_points(boundary, expected):
    assert len(boundary.points) == len(expected)
    for point, (s, t) in zip(boundary.points, expected):
        assert math.isclose(point.s, s, abs_tol=1e-9), (point, s, t)
        assert math.isclose(point.t, t, abs_tol=1e-9), (point, s, t)
