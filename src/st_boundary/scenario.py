"""
Scenario loading - builds one planning cycle's mapper inputs from YAML.

A scenario file holds the reference line, lane geometry, planned path,
main decision, obstacles with their predictions and decisions, and the
planning horizons. See config/example_scenario.yaml.
"""

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from st_boundary.gateway.data_types import PathData, PathPoint, PredictionTrajectory, TrajectoryPoint
from st_boundary.maps.discretized_reference_line import DiscretizedReferenceLine
from st_boundary.maps.lane_map import LaneMap
from st_boundary.maps.vehicle_state import FixedVehicleState
from st_boundary.planning.decisions import (
    FollowDecision, MissionCompleteDecision, NoDecision, OvertakeDecision,
    StopDecision, YieldDecision
)
from st_boundary.planning.obstacle import DecisionData, Obstacle

logger = logging.getLogger(__name__)


@dataclass
class Scenario:
    """Inputs of one mapper call."""
    reference_line: DiscretizedReferenceLine
    lane_map: LaneMap
    vehicle_state: FixedVehicleState
    path_data: PathData
    decision_data: DecisionData
    planning_distance: float
    planning_time: float


def build_path_data(points: List[List[float]]) -> PathData:
    """
    Build a path from [x, y, theta] rows, accumulating s from the first point.
    """
    path_points = []
    s = 0.0
    for i, row in enumerate(points):
        x, y, theta = (float(v) for v in row[:3])
        if i > 0:
            prev = path_points[-1]
            s += math.hypot(x - prev.x, y - prev.y)
        path_points.append(PathPoint(x, y, theta, s))
    return PathData(path_points)


def parse_decision(entry: Dict[str, Any]):
    """
    Parse one decision mapping such as {type: yield, distance_s: 5.0}.

    Raises:
        ValueError: If the decision type is unknown
    """
    kind = str(entry.get('type', 'none')).lower()
    if kind == 'stop':
        return StopDecision(lane_id=str(entry['lane_id']), distance_s=float(entry['distance_s']))
    elif kind == 'mission_complete':
        return MissionCompleteDecision()
    elif kind == 'follow':
        return FollowDecision(float(entry.get('distance_s', 0.0)))
    elif kind == 'yield':
        return YieldDecision(float(entry.get('distance_s', 0.0)))
    elif kind == 'overtake':
        return OvertakeDecision(float(entry.get('distance_s', 0.0)))
    elif kind == 'none':
        return NoDecision()
    raise ValueError(f"Unknown decision type '{kind}'")


def parse_obstacle(entry: Dict[str, Any]) -> Obstacle:
    """Parse one obstacle with trajectories given as [x, y, theta, relative_time] rows."""
    trajectories = []
    for trajectory in entry.get('trajectories', []):
        points = [
            TrajectoryPoint(PathPoint(float(x), float(y), float(theta)), float(relative_time))
            for x, y, theta, relative_time in trajectory.get('points', [])
        ]
        trajectories.append(PredictionTrajectory(float(trajectory.get('start_timestamp', 0.0)), points))

    return Obstacle(
        id=str(entry['id']),
        length=float(entry['length']),
        width=float(entry['width']),
        speed=float(entry.get('speed', 0.0)),
        prediction_trajectories=trajectories,
        decisions=[parse_decision(d) for d in entry.get('decisions', [])]
    )


def load_scenario(scenario_path: Union[str, Path]) -> Scenario:
    """
    Load a scenario YAML file.

    Args:
        scenario_path: Path to the scenario file

    Returns:
        Scenario ready to be passed to StBoundaryMapper
    """
    with open(scenario_path, 'r') as f:
        config = yaml.safe_load(f) or {}
    logger.info(f"Loaded scenario from {scenario_path}")

    obstacles = [parse_obstacle(o) for o in config.get('obstacles', [])]
    decision_data = DecisionData.from_obstacles(
        obstacles,
        main_decision=parse_decision(config.get('main_decision', {'type': 'none'}))
    )

    return Scenario(
        reference_line=DiscretizedReferenceLine(config['reference_line']),
        lane_map=LaneMap(config.get('lanes', {})),
        vehicle_state=FixedVehicleState(float(config.get('timestamp', 0.0))),
        path_data=build_path_data(config['path']),
        decision_data=decision_data,
        planning_distance=float(config.get('planning_distance', 100.0)),
        planning_time=float(config.get('planning_time', 8.0))
    )
