"""
Planning module: ST boundary construction from decisions and predictions.
"""

from .boundary_mapper import StBoundaryMapper
from .decisions import (
    Decision, StopDecision, MissionCompleteDecision, FollowDecision,
    YieldDecision, OvertakeDecision, NoDecision
)
from .dynamic_boundary_builder import DynamicBoundaryBuilder, OPEN_START_TIME
from .errors import (
    BuildStatus, StBoundaryError, PreconditionError, ProjectionError, ObstacleMappingError
)
from .obstacle import Obstacle, DecisionData
from .st_graph_boundary import BoundaryType, StGraphBoundary
from .stop_boundary_builder import StopBoundaryBuilder

__all__ = [
    # Mapper and builders
    'StBoundaryMapper', 'StopBoundaryBuilder', 'DynamicBoundaryBuilder', 'OPEN_START_TIME',
    # Decisions
    'Decision', 'StopDecision', 'MissionCompleteDecision', 'FollowDecision',
    'YieldDecision', 'OvertakeDecision', 'NoDecision',
    # Scene
    'Obstacle', 'DecisionData',
    # Output
    'BoundaryType', 'StGraphBoundary',
    # Errors
    'BuildStatus', 'StBoundaryError', 'PreconditionError', 'ProjectionError', 'ObstacleMappingError'
]
