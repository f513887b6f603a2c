"""
Stop Boundary Builder - Full-horizon boundaries for stop and mission-complete decisions.

Both decisions block everything beyond a static station for the whole
planning horizon. The resulting quadrilateral is widened at the far time
edge by the boundary buffer.
"""

import logging
from typing import List

from st_boundary.config.st_boundary_config import StBoundaryConfig
from st_boundary.config.vehicle_config import VehicleParam
from st_boundary.gateway.data_types import STPoint
from st_boundary.gateway.map_service import IMapService
from st_boundary.gateway.reference_line import IReferenceLine
from st_boundary.planning.decisions import StopDecision
from st_boundary.planning.errors import BuildStatus, ProjectionError
from st_boundary.planning.geometry_utils import is_positive_area
from st_boundary.planning.st_graph_boundary import BoundaryType, StGraphBoundary


class StopBoundaryBuilder:
    """Builds STOP and MISSION_COMPLETE boundaries from static stations."""

    def __init__(self, config: StBoundaryConfig, vehicle_param: VehicleParam, map_service: IMapService):
        """
        Args:
            config: Boundary margins and horizon offsets
            vehicle_param: Ego vehicle dimensions
            map_service: Resolves stop line lane references to map points
        """
        self.config = config
        self.vehicle_param = vehicle_param
        self.map_service = map_service
        self.logger = logging.getLogger(__name__)

    def map_stop_decision(
        self,
        stop: StopDecision,
        reference_line: IReferenceLine,
        planning_distance: float,
        planning_time: float,
        boundaries: List[StGraphBoundary]
    ) -> BuildStatus:
        """
        Append a STOP boundary in front of the enforced stop line.

        Args:
            stop: Stop decision with the stop line lane reference
            reference_line: Reference line for the Frenet projection
            planning_distance: Planning distance horizon [m]
            planning_time: Planning time horizon [s]
            boundaries: Output list

        Returns:
            BuildStatus.OK if a boundary was appended, BuildStatus.SKIP otherwise

        Raises:
            ProjectionError: If the stop line cannot be located on the reference line
        """
        map_point = self.map_service.get_smooth_point(stop.lane_id, stop.distance_s)
        if map_point is None:
            msg = f"Fail to map stop decision since lane[{stop.lane_id}] is not in the map."
            self.logger.error(msg)
            raise ProjectionError(msg)

        sl_point = reference_line.get_point_in_frenet_frame(map_point[0], map_point[1])
        if sl_point is None:
            msg = "Fail to map stop decision since get_point_in_frenet_frame failed."
            self.logger.error(msg)
            raise ProjectionError(msg)

        s = sl_point.s - self.config.backward_routing_distance
        stop_rear_center_s = (s - self.config.decision_valid_stop_range
                              - self.vehicle_param.front_edge_to_center)
        horizon_s = reference_line.length - self.config.backward_routing_distance

        if stop_rear_center_s < 0.0:
            self.logger.error(f"stop_rear_center_s[{stop_rear_center_s:.3f}] is behind the vehicle, clamping to 0")
        elif stop_rear_center_s >= horizon_s:
            self.logger.warning(
                f"Skip stop decision since stop_rear_center_s[{stop_rear_center_s:.3f}] "
                f"is beyond the reachable horizon[{horizon_s:.3f}]"
            )
            return BuildStatus.SKIP

        s_min = max(stop_rear_center_s, 0.0)
        s_max = max(s_min + 1.0, planning_distance, reference_line.length)
        return self._append_blocking_boundary(s_min, s_max, planning_time, BoundaryType.STOP, boundaries)

    def map_mission_complete(
        self,
        reference_line: IReferenceLine,
        planning_distance: float,
        planning_time: float,
        boundaries: List[StGraphBoundary]
    ) -> BuildStatus:
        """
        Append a MISSION_COMPLETE boundary starting at the success tunnel.

        Returns:
            BuildStatus.OK if a boundary was appended, BuildStatus.SKIP otherwise
        """
        s_min = self.config.success_tunnel
        s_max = min(planning_distance, reference_line.length - self.config.backward_routing_distance)
        return self._append_blocking_boundary(
            s_min, s_max, planning_time, BoundaryType.MISSION_COMPLETE, boundaries
        )

    def _append_blocking_boundary(
        self,
        s_min: float,
        s_max: float,
        planning_time: float,
        boundary_type: BoundaryType,
        boundaries: List[StGraphBoundary]
    ) -> BuildStatus:
        buffer = self.config.boundary_buffer
        points = [
            STPoint(s_min, 0.0),
            STPoint(s_min, planning_time),
            STPoint(s_max + buffer, planning_time),
            STPoint(s_max, 0.0),
        ]
        if not is_positive_area(points):
            self.logger.warning(f"Skip {boundary_type.name} boundary with non-positive area: s=[{s_min:.3f}, {s_max:.3f}]")
            return BuildStatus.SKIP

        boundaries.append(StGraphBoundary(points, boundary_type, characteristic_length=buffer))
        self.logger.debug(f"Added {boundary_type.name} boundary: s=[{s_min:.3f}, {s_max:.3f}], t=[0, {planning_time:.3f}]")
        return BuildStatus.OK
