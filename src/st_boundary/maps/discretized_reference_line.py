"""
Discretized reference line - a polyline centerline with a Frenet projection.

Points are projected onto the nearest polyline segment. Points whose nearest
location lies before the first point or past the last point of the line
cannot be projected.
"""

from typing import Optional, Sequence, Tuple

import numpy as np

from st_boundary.gateway.data_types import PathData, SLPoint
from st_boundary.gateway.reference_line import IReferenceLine


class DiscretizedReferenceLine(IReferenceLine):
    """Reference line backed by an ordered list of (x, y) points."""

    def __init__(self, points: Sequence[Tuple[float, float]]):
        """
        Args:
            points: Ordered (x, y) centerline points, at least 2, no duplicates in a row
        """
        xy = np.asarray(points, dtype=float)
        if xy.ndim != 2 or xy.shape[0] < 2 or xy.shape[1] != 2:
            raise ValueError("Reference line needs at least 2 (x, y) points")

        segments = np.diff(xy, axis=0)
        segment_lengths = np.hypot(segments[:, 0], segments[:, 1])
        if np.any(segment_lengths <= 0.0):
            raise ValueError("Reference line contains repeated points")

        self._xy = xy
        self._segments = segments
        self._segment_lengths = segment_lengths
        self._accumulated_s = np.concatenate(([0.0], np.cumsum(segment_lengths)))

    @classmethod
    def from_path_data(cls, path_data: PathData) -> 'DiscretizedReferenceLine':
        """Use the planned path itself as the reference line."""
        return cls([(p.x, p.y) for p in path_data.path_points])

    @property
    def length(self) -> float:
        return float(self._accumulated_s[-1])

    def get_point_in_frenet_frame(self, x: float, y: float) -> Optional[SLPoint]:
        """
        Project a Cartesian point onto the nearest segment.

        Returns:
            SLPoint with positive l to the left of the line, or None outside the line's extent
        """
        point = np.array([x, y], dtype=float)
        offsets = point - self._xy[:-1]
        ratio = np.einsum('ij,ij->i', offsets, self._segments) / self._segment_lengths ** 2
        clamped = np.clip(ratio, 0.0, 1.0)
        nearest = self._xy[:-1] + self._segments * clamped[:, None]
        distances = np.hypot(*(point - nearest).T)
        index = int(np.argmin(distances))

        if (index == 0 and ratio[0] < 0.0) or (index == len(ratio) - 1 and ratio[-1] > 1.0):
            return None

        segment = self._segments[index]
        offset = offsets[index]
        s = self._accumulated_s[index] + clamped[index] * self._segment_lengths[index]
        l = (segment[0] * offset[1] - segment[1] * offset[0]) / self._segment_lengths[index]
        return SLPoint(float(s), float(l))
