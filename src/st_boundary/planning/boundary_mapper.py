"""
Boundary Mapper - Converts one planning cycle's decisions into ST graph boundaries.

The mapper validates its inputs, maps the scene's main decision (stop or
mission complete), then every static obstacle, then every decision attached
to each dynamic obstacle, appending boundaries in that order. All
collaborators are injected at construction.
"""

import logging
from typing import Any, List, Optional

from st_boundary.config.st_boundary_config import StBoundaryConfig
from st_boundary.config.vehicle_config import VehicleParam
from st_boundary.gateway.data_types import PathData
from st_boundary.gateway.map_service import IMapService
from st_boundary.gateway.reference_line import IReferenceLine
from st_boundary.gateway.vehicle_state import IVehicleState
from st_boundary.planning.decisions import (
    FollowDecision, MissionCompleteDecision, NoDecision, OvertakeDecision,
    StopDecision, YieldDecision, check_decision
)
from st_boundary.planning.dynamic_boundary_builder import DynamicBoundaryBuilder
from st_boundary.planning.errors import BuildStatus, ObstacleMappingError, PreconditionError, StBoundaryError
from st_boundary.planning.obstacle import DecisionData, Obstacle
from st_boundary.planning.st_graph_boundary import StGraphBoundary
from st_boundary.planning.stop_boundary_builder import StopBoundaryBuilder


class StBoundaryMapper:
    """
    Maps driving decisions and obstacle predictions to ST graph boundaries.

    Dynamic obstacle handling:
    - Follow decisions go to the planning-based extension point; failure is fatal.
    - Yield and overtake decisions go to the prediction-based builder. An obstacle
      that yields nothing or fails to map is logged and skipped. With
      config.legacy_abort_on_dynamic_failure the first such obstacle ends the
      whole mapping instead and the call still reports success.
    """

    def __init__(
        self,
        config: StBoundaryConfig,
        vehicle_param: VehicleParam,
        map_service: IMapService,
        vehicle_state: IVehicleState
    ):
        """
        Initialize boundary mapper.

        Args:
            config: Boundary margins and horizon offsets
            vehicle_param: Ego vehicle dimensions
            map_service: Lane lookups for stop decisions
            vehicle_state: Current planning timestamp for prediction times
        """
        self.config = config
        self.vehicle_param = vehicle_param
        self.stop_builder = StopBoundaryBuilder(config, vehicle_param, map_service)
        self.dynamic_builder = DynamicBoundaryBuilder(config, vehicle_param, vehicle_state)
        self.logger = logging.getLogger(__name__)

    def get_graph_boundary(
        self,
        initial_planning_point: Any,
        decision_data: DecisionData,
        path_data: PathData,
        reference_line: IReferenceLine,
        planning_distance: float,
        planning_time: float,
        boundaries: Optional[List[StGraphBoundary]]
    ) -> BuildStatus:
        """
        Fill boundaries with the ST boundaries of one planning cycle.

        Args:
            initial_planning_point: Trajectory point the cycle plans from
            decision_data: Main decision and static/dynamic obstacles
            path_data: Planned path (at least 2 points)
            reference_line: Reference line for Frenet projections
            planning_distance: Planning distance horizon [m]
            planning_time: Planning time horizon [s], non-negative
            boundaries: Output list, cleared before use

        Returns:
            BuildStatus.OK

        Raises:
            PreconditionError: If the output list is missing, planning_time < 0,
                or the path has fewer than 2 points
            ProjectionError: If a stop line cannot be located on the reference line
            ObstacleMappingError: If a static or followed obstacle cannot be mapped
        """
        self._check_preconditions(path_data, planning_time, boundaries)
        boundaries.clear()

        self._map_main_decision(decision_data.main_decision, reference_line,
                                planning_distance, planning_time, boundaries)

        for obstacle in decision_data.static_obstacles:
            try:
                self.map_obstacle_without_trajectory(initial_planning_point, obstacle, path_data,
                                                     planning_distance, planning_time, boundaries)
            except StBoundaryError:
                self.logger.error(f"Fail to map static obstacle with id[{obstacle.id}].")
                raise

        for obstacle in decision_data.dynamic_obstacles:
            for decision in obstacle.decisions:
                if not self._map_dynamic_decision(initial_planning_point, obstacle, check_decision(decision),
                                                  path_data, planning_distance, planning_time, boundaries):
                    return BuildStatus.OK

        return BuildStatus.OK

    def map_boundaries(
        self,
        initial_planning_point: Any,
        decision_data: DecisionData,
        path_data: PathData,
        reference_line: IReferenceLine,
        planning_distance: float,
        planning_time: float
    ) -> List[StGraphBoundary]:
        """Run get_graph_boundary into a fresh list and return it."""
        boundaries: List[StGraphBoundary] = []
        self.get_graph_boundary(initial_planning_point, decision_data, path_data, reference_line,
                                planning_distance, planning_time, boundaries)
        return boundaries

    def map_obstacle_without_trajectory(
        self,
        initial_planning_point: Any,
        obstacle: Obstacle,
        path_data: PathData,
        planning_distance: float,
        planning_time: float,
        boundaries: List[StGraphBoundary]
    ) -> BuildStatus:
        """Extension point for static obstacles. Adds nothing."""
        return BuildStatus.OK

    def map_obstacle_with_planning(
        self,
        initial_planning_point: Any,
        obstacle: Obstacle,
        path_data: PathData,
        planning_distance: float,
        planning_time: float,
        boundaries: List[StGraphBoundary]
    ) -> BuildStatus:
        """Extension point for followed obstacles. Adds nothing."""
        return BuildStatus.OK

    def _check_preconditions(
        self,
        path_data: PathData,
        planning_time: float,
        boundaries: Optional[List[StGraphBoundary]]
    ) -> None:
        if boundaries is None:
            msg = "boundaries is None."
            self.logger.error(msg)
            raise PreconditionError(msg)

        if planning_time < 0.0:
            msg = f"Fail to get params since planning_time[{planning_time}] < 0."
            self.logger.error(msg)
            raise PreconditionError(msg)

        if path_data.num_of_points < 2:
            msg = f"Fail to get params because of too few path points. path points size: {path_data.num_of_points}."
            self.logger.error(msg)
            raise PreconditionError(msg)

    def _map_main_decision(
        self,
        main_decision,
        reference_line: IReferenceLine,
        planning_distance: float,
        planning_time: float,
        boundaries: List[StGraphBoundary]
    ) -> None:
        if isinstance(main_decision, StopDecision):
            status = self.stop_builder.map_stop_decision(
                main_decision, reference_line, planning_distance, planning_time, boundaries)
        elif isinstance(main_decision, MissionCompleteDecision):
            status = self.stop_builder.map_mission_complete(
                reference_line, planning_distance, planning_time, boundaries)
        elif isinstance(main_decision, NoDecision):
            return
        else:
            raise TypeError(f"Unsupported main decision: {type(main_decision).__name__}")

        if status == BuildStatus.SKIP:
            self.logger.info(f"Main decision {type(main_decision).__name__} produced no boundary")

    def _map_dynamic_decision(
        self,
        initial_planning_point: Any,
        obstacle: Obstacle,
        decision,
        path_data: PathData,
        planning_distance: float,
        planning_time: float,
        boundaries: List[StGraphBoundary]
    ) -> bool:
        """
        Map one decision of a dynamic obstacle.

        Returns:
            False if mapping must stop here (legacy short-circuit), True to continue
        """
        if isinstance(decision, FollowDecision):
            try:
                self.map_obstacle_with_planning(initial_planning_point, obstacle, path_data,
                                                planning_distance, planning_time, boundaries)
            except StBoundaryError:
                self.logger.error(f"Fail to map follow dynamic obstacle with id {obstacle.id}.")
                raise
            return True

        if isinstance(decision, (YieldDecision, OvertakeDecision)):
            try:
                status = self.dynamic_builder.map_obstacle_with_prediction_trajectory(
                    obstacle, decision, path_data, boundaries)
            except ObstacleMappingError as e:
                self.logger.error(f"Fail to map dynamic obstacle with id {obstacle.id}: {e.reason}")
                status = None

            if status == BuildStatus.OK:
                return True
            if self.config.legacy_abort_on_dynamic_failure:
                self.logger.warning(
                    f"Stop mapping dynamic obstacles at id {obstacle.id} (legacy_abort_on_dynamic_failure)")
                return False
            if status == BuildStatus.SKIP:
                self.logger.debug(f"Dynamic obstacle with id {obstacle.id} produced no boundary")
            return True

        # Stop, mission complete and empty decisions carry no meaning for an obstacle
        return True
