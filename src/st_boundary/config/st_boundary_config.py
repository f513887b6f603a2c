"""
Configuration dataclass for ST boundary mapping.

This module centralizes the safety margins and horizon offsets used when
converting decisions and obstacle predictions into station-time boundaries.
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent.parent / "config" / "st_boundary_config.yaml"


def load_yaml_section(config_path: Optional[Union[str, Path]], section: str) -> Dict[str, Any]:
    """
    Load one top-level section of a YAML configuration file.

    Args:
        config_path: Path to the YAML file (defaults to config/st_boundary_config.yaml)
        section: Name of the top-level mapping to return

    Returns:
        Section contents, or an empty dict if the file or section is missing
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f) or {}
        logger.info(f"Loaded config from {config_path}")
    except FileNotFoundError:
        logger.warning(f"Config not found at {config_path}, using defaults")
        return {}

    values = config.get(section, {})
    if not isinstance(values, dict):
        logger.warning(f"Section '{section}' in {config_path} is not a mapping, using defaults")
        return {}
    return values


def filter_known_fields(cls, values: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys that are not dataclass fields of cls, warning about each one."""
    known = {f.name for f in fields(cls)}
    for key in values:
        if key not in known:
            logger.warning(f"Ignoring unknown {cls.__name__} key '{key}'")
    return {k: v for k, v in values.items() if k in known}


@dataclass
class StBoundaryConfig:
    """Configuration for ST boundary mapping."""

    # Margins applied to raw overlap geometry (m)
    boundary_buffer: float = 0.1
    follow_buffer: float = 1.0
    point_extension: float = 1.0

    # Obstacle footprint scale factor
    expanding_coeff: float = 1.0

    # Follow decision
    minimal_follow_time: float = 2.0

    # Mission complete
    success_tunnel: float = 1.5

    # Stop decision (m)
    backward_routing_distance: float = 100.0
    decision_valid_stop_range: float = 0.5

    # Yield decision fallback when the requested distance would go behind s=0 (m)
    yield_fallback_offset: float = 2.0

    # Stop mapping dynamic obstacles at the first yield/overtake failure and report success
    legacy_abort_on_dynamic_failure: bool = False

    @classmethod
    def from_yaml(cls, config_path: Optional[Union[str, Path]] = None) -> 'StBoundaryConfig':
        """
        Build config from the 'st_boundary' section of a YAML file.

        Args:
            config_path: Path to the YAML file (defaults to config/st_boundary_config.yaml)

        Returns:
            StBoundaryConfig with file values overriding defaults
        """
        values = load_yaml_section(config_path, 'st_boundary')
        return cls(**filter_known_fields(cls, values))
