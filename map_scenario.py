"""
Map a recorded planning cycle to ST graph boundaries.

Loads a scenario YAML file, runs the boundary mapper once and prints the
resulting boundaries.

Usage:
    python map_scenario.py config/example_scenario.yaml
    python map_scenario.py my_scenario.yaml --config config/st_boundary_config.yaml -v
"""

import argparse
import logging
import sys

from st_boundary.config import StBoundaryConfig, VehicleParam
from st_boundary.planning import StBoundaryError, StBoundaryMapper
from st_boundary.scenario import load_scenario


def setup_logging(verbose: bool = False):
    """Configure logging."""
    log_level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Suppress verbose libraries
    logging.getLogger('shapely').setLevel(logging.WARNING)


def main():
    parser = argparse.ArgumentParser(description='Map a planning cycle to ST graph boundaries')
    parser.add_argument('scenario', type=str,
                        help='Scenario YAML file')
    parser.add_argument('--config', type=str, default=None,
                        help='Mapper config YAML (default: config/st_boundary_config.yaml)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Enable verbose logging (DEBUG level)')
    args = parser.parse_args()

    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    config = StBoundaryConfig.from_yaml(args.config)
    vehicle_param = VehicleParam.from_yaml(args.config)
    scenario = load_scenario(args.scenario)

    mapper = StBoundaryMapper(config, vehicle_param, scenario.lane_map, scenario.vehicle_state)
    try:
        boundaries = mapper.map_boundaries(
            None,
            scenario.decision_data,
            scenario.path_data,
            scenario.reference_line,
            scenario.planning_distance,
            scenario.planning_time
        )
    except StBoundaryError as e:
        logger.error(f"Mapping failed: {e}")
        sys.exit(1)

    logger.info(f"Mapped {len(boundaries)} boundaries")
    for i, boundary in enumerate(boundaries):
        source = boundary.obstacle_id or "scene"
        vertices = ", ".join(f"({p.s:.2f}, {p.t:.2f})" for p in boundary.points)
        print(f"[{i}] {boundary.boundary_type.name:<16} {source:<10} area={boundary.area:.2f} vertices(s, t): {vertices}")


if __name__ == '__main__':
    main()
