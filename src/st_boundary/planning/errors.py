"""
Error types raised by the ST boundary mapper.

Fatal conditions are exceptions. Non-fatal skips (degenerate polygons, stop
lines beyond the reachable horizon) are reported as BuildStatus.SKIP instead.
"""

from enum import Enum


class BuildStatus(Enum):
    """Result of a boundary builder or of a whole mapping call."""
    OK = 0
    SKIP = 1


class StBoundaryError(Exception):
    """Base class for fatal ST boundary mapping errors."""


class PreconditionError(StBoundaryError):
    """Invalid mapper input detected before any work was done."""


class ProjectionError(StBoundaryError):
    """A map reference could not be resolved or projected onto the reference line."""


class ObstacleMappingError(StBoundaryError):
    """An obstacle could not be converted into ST boundaries."""

    def __init__(self, obstacle_id: str, reason: str):
        super().__init__(f"Fail to map obstacle with id[{obstacle_id}]: {reason}")
        self.obstacle_id = obstacle_id
        self.reason = reason
