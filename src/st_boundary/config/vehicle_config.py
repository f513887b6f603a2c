"""
Configuration dataclass for ego vehicle geometry.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from st_boundary.config.st_boundary_config import load_yaml_section, filter_known_fields


@dataclass
class VehicleParam:
    """Fixed ego vehicle dimensions."""

    length: float = 4.933
    width: float = 2.11

    # Distance from the rear axle center to the front bumper (m)
    front_edge_to_center: float = 3.89

    @property
    def mid_to_rear_center(self) -> float:
        """Offset from the footprint center back to the path reference point."""
        return self.length / 2.0 - self.front_edge_to_center

    @classmethod
    def from_yaml(cls, config_path: Optional[Union[str, Path]] = None) -> 'VehicleParam':
        """Build vehicle params from the 'vehicle' section of a YAML file."""
        values = load_yaml_section(config_path, 'vehicle')
        return cls(**filter_known_fields(cls, values))
