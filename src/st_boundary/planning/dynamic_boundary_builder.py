"""
Dynamic Boundary Builder - ST boundaries from an obstacle's predicted trajectories.

Each predicted pose is run through the overlap locator. The resulting lower
and upper station samples form two envelopes that run across all of the
obstacle's trajectories, and the first and last entries of each envelope
span a quadrilateral in the ST plane.
The quadrilateral is then adjusted for the follow, yield or overtake
decision attached to the obstacle.
"""

import logging
import math
from typing import List, Optional

from st_boundary.config.st_boundary_config import StBoundaryConfig
from st_boundary.config.vehicle_config import VehicleParam
from st_boundary.gateway.data_types import PathData, PredictionTrajectory, STPoint
from st_boundary.gateway.vehicle_state import IVehicleState
from st_boundary.planning.decisions import FollowDecision, ObjectDecision, OvertakeDecision, YieldDecision
from st_boundary.planning.errors import BuildStatus, ObstacleMappingError
from st_boundary.planning.geometry_utils import is_positive_area
from st_boundary.planning.obstacle import Obstacle
from st_boundary.planning.overlap_locator import locate_overlap
from st_boundary.planning.st_graph_boundary import BoundaryType, StGraphBoundary

# Start time of a followed obstacle's boundary, read downstream as "blocked since the start of time"
OPEN_START_TIME = -1.0


class DynamicBoundaryBuilder:
    """Builds FOLLOW, YIELD and OVERTAKE boundaries for moving obstacles."""

    def __init__(self, config: StBoundaryConfig, vehicle_param: VehicleParam, vehicle_state: IVehicleState):
        """
        Args:
            config: Boundary margins
            vehicle_param: Ego vehicle dimensions
            vehicle_state: Source of the current planning timestamp
        """
        self.config = config
        self.vehicle_param = vehicle_param
        self.vehicle_state = vehicle_state
        self.logger = logging.getLogger(__name__)

    def map_obstacle_with_prediction_trajectory(
        self,
        obstacle: Obstacle,
        decision: ObjectDecision,
        path_data: PathData,
        boundaries: List[StGraphBoundary]
    ) -> BuildStatus:
        """
        Append one boundary spanning every predicted sample that meets the path.

        Args:
            obstacle: Obstacle with prediction trajectories
            decision: Follow, yield or overtake decision for this obstacle
            path_data: Planned path
            boundaries: Output list

        Returns:
            BuildStatus.OK if a boundary was appended, BuildStatus.SKIP otherwise

        Raises:
            ObstacleMappingError: If the obstacle's dimensions or predicted poses are invalid
            TypeError: If decision is not a follow, yield or overtake decision
        """
        if not isinstance(decision, (FollowDecision, YieldDecision, OvertakeDecision)):
            raise TypeError(f"Cannot build a dynamic boundary for {type(decision).__name__}")
        self._validate_obstacle(obstacle)

        if not obstacle.prediction_trajectories:
            self.logger.warning(f"Obstacle (id = {obstacle.id}) has NO prediction trajectory.")
            return BuildStatus.SKIP

        # Envelopes run across every trajectory of the obstacle
        lower_points: List[STPoint] = []
        upper_points: List[STPoint] = []
        for trajectory in obstacle.prediction_trajectories:
            self._collect_envelopes(obstacle, decision, trajectory, path_data, lower_points, upper_points)

        if not lower_points:
            return BuildStatus.SKIP

        boundary = self._build_boundary(obstacle, decision, lower_points, upper_points)
        if boundary is None:
            return BuildStatus.SKIP

        boundaries.append(boundary)
        return BuildStatus.OK

    def _validate_obstacle(self, obstacle: Obstacle) -> None:
        for name, value in (('length', obstacle.length), ('width', obstacle.width)):
            if not math.isfinite(value) or value <= 0.0:
                self.logger.error(f"Obstacle (id = {obstacle.id}) has invalid {name} {value}")
                raise ObstacleMappingError(obstacle.id, f"invalid {name} {value}")
        if not math.isfinite(obstacle.speed):
            self.logger.error(f"Obstacle (id = {obstacle.id}) has invalid speed {obstacle.speed}")
            raise ObstacleMappingError(obstacle.id, f"invalid speed {obstacle.speed}")

    def _collect_envelopes(
        self,
        obstacle: Obstacle,
        decision: ObjectDecision,
        trajectory: PredictionTrajectory,
        path_data: PathData,
        lower_points: List[STPoint],
        upper_points: List[STPoint]
    ) -> None:
        current_time = self.vehicle_state.timestamp()

        for j, trajectory_point in enumerate(trajectory.trajectory_points):
            pose = trajectory_point.path_point
            time = trajectory_point.relative_time + trajectory.start_timestamp - current_time
            if not all(math.isfinite(v) for v in (pose.x, pose.y, pose.theta, time)):
                raise ObstacleMappingError(obstacle.id, f"non-finite prediction at point[{j}]")

            overlap = locate_overlap(
                trajectory_point, obstacle.length, obstacle.width,
                path_data.path_points, self.vehicle_param, self.config, time
            )
            if overlap is None:
                if isinstance(decision, (YieldDecision, OvertakeDecision)):
                    self.logger.info(f"Point[{j}] cannot find low or high index.")
                continue

            lower_points.append(overlap[0])
            upper_points.append(overlap[1])

    def _build_boundary(
        self,
        obstacle: Obstacle,
        decision: ObjectDecision,
        lower_points: List[STPoint],
        upper_points: List[STPoint]
    ) -> Optional[StGraphBoundary]:
        follow_buffer = self.config.follow_buffer
        if lower_points[0].t > lower_points[-1].t or upper_points[0].t > upper_points[-1].t:
            self.logger.warning("lower/upper points are reversed.")

        # [s, t] per vertex: lower start, lower end, upper end, upper start
        vertices = [
            [lower_points[0].s - follow_buffer, lower_points[0].t],
            [lower_points[-1].s - follow_buffer, lower_points[-1].t],
            [upper_points[-1].s + follow_buffer + self.config.boundary_buffer, upper_points[-1].t],
            [upper_points[0].s + follow_buffer, upper_points[0].t],
        ]

        if isinstance(decision, FollowDecision):
            follow_distance = (max(obstacle.speed * self.config.minimal_follow_time, abs(decision.distance_s))
                               + self.vehicle_param.front_edge_to_center)
            vertices[0][0] -= follow_distance
            vertices[1][0] -= follow_distance
            vertices[3][1] = OPEN_START_TIME
            boundary_type = BoundaryType.FOLLOW
        elif isinstance(decision, YieldDecision):
            dis = abs(decision.distance_s)
            # Both lower vertices are placed relative to the first one
            base_s = vertices[0][0]
            if base_s - dis < 0.0:
                yield_s = max(base_s - self.config.yield_fallback_offset, 0.0)
            else:
                yield_s = max(base_s - dis, 0.0)
            vertices[0][0] = yield_s
            vertices[1][0] = yield_s
            boundary_type = BoundaryType.YIELD
        else:
            dis = abs(decision.distance_s)
            vertices[2][0] += dis
            vertices[3][0] += dis
            boundary_type = BoundaryType.OVERTAKE

        points = [STPoint(s, t) for s, t in vertices]
        if not is_positive_area(points):
            self.logger.debug(f"Discard {boundary_type.name} boundary of obstacle {obstacle.id} with non-positive area")
            return None

        self.logger.debug(
            f"Added {boundary_type.name} boundary for obstacle {obstacle.id}: "
            f"s=[{min(p.s for p in points):.3f}, {max(p.s for p in points):.3f}], "
            f"t=[{min(p.t for p in points):.3f}, {max(p.t for p in points):.3f}]"
        )
        return StGraphBoundary(points, boundary_type, characteristic_length=follow_buffer, obstacle_id=obstacle.id)
