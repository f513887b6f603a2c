"""
Fixed vehicle state for replaying a single planning cycle.
"""

from st_boundary.gateway.vehicle_state import IVehicleState


class FixedVehicleState(IVehicleState):
    """Vehicle state frozen at one timestamp."""

    def __init__(self, timestamp: float = 0.0):
        self._timestamp = timestamp

    def timestamp(self) -> float:
        return self._timestamp
