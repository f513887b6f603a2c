"""
Lane map - in-memory lane geometry keyed by lane identifier.
"""

import logging
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from st_boundary.gateway.map_service import IMapService

logger = logging.getLogger(__name__)


class LaneMap(IMapService):
    """Map service backed by lane centerline polylines."""

    def __init__(self, lanes: Dict[str, Sequence[Tuple[float, float]]]):
        """
        Args:
            lanes: Mapping of lane id to ordered (x, y) centerline points (at least 2 each)
        """
        self._lanes = {}
        for lane_id, points in lanes.items():
            xy = np.asarray(points, dtype=float)
            if xy.ndim != 2 or xy.shape[0] < 2 or xy.shape[1] != 2:
                raise ValueError(f"Lane {lane_id} needs at least 2 (x, y) points")
            lengths = np.hypot(*np.diff(xy, axis=0).T)
            self._lanes[lane_id] = (xy, np.concatenate(([0.0], np.cumsum(lengths))))

    def get_smooth_point(self, lane_id: str, s: float) -> Optional[Tuple[float, float]]:
        """
        Interpolate the lane centerline at arc length s, clamped to the lane.
        """
        lane = self._lanes.get(lane_id)
        if lane is None:
            logger.warning(f"Lane {lane_id} not found in map")
            return None

        xy, accumulated_s = lane
        s = float(np.clip(s, 0.0, accumulated_s[-1]))
        x = float(np.interp(s, accumulated_s, xy[:, 0]))
        y = float(np.interp(s, accumulated_s, xy[:, 1]))
        return x, y
