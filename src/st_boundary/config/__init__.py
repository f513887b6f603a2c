"""
Configuration for the ST boundary mapper.
"""

from .st_boundary_config import StBoundaryConfig
from .vehicle_config import VehicleParam

__all__ = ['StBoundaryConfig', 'VehicleParam']
