"""
In-memory implementations of the gateway interfaces.
"""

from .discretized_reference_line import DiscretizedReferenceLine
from .lane_map import LaneMap
from .vehicle_state import FixedVehicleState

__all__ = ['DiscretizedReferenceLine', 'LaneMap', 'FixedVehicleState']
