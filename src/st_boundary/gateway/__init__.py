"""
Gateway module for the ST boundary mapper.

This module defines the data types and abstract interfaces through which the
mapper consumes its collaborators (reference line, map, vehicle state).
"""

from .reference_line import IReferenceLine
from .map_service import IMapService
from .vehicle_state import IVehicleState
from .data_types import (
    PathPoint, PathData, SLPoint, STPoint,
    TrajectoryPoint, PredictionTrajectory
)

__all__ = [
    # Collaborator interfaces
    'IReferenceLine', 'IMapService', 'IVehicleState',
    # Data types
    'PathPoint', 'PathData', 'SLPoint', 'STPoint',
    'TrajectoryPoint', 'PredictionTrajectory'
]
