from __future__ import annotations
from dataclasses import dataclass, field
from typing import Sequence, Tuple

import numpy as np
import structlog
from shapely.geometry import Polygon

from .datastructures import GeometricPoint
from .errors import InsufficientBoundaryPoints

logger = structlog.get_logger()


@dataclass(frozen=True)
class BoundedPointSet:
    """
    Raw input: a point list (duplicates and invalid entries allowed) and the
    bounding ring, conventionally closed by repeating the first vertex.

    The methods below are the validated view handed to the later stages.
    """
    points: Tuple[Tuple[float, float], ...] = field(default_factory=tuple)
    bound: Tuple[Tuple[float, float], ...] = field(default_factory=tuple)

    @classmethod
    def from_sequences(cls, points: Sequence, bound: Sequence) -> "BoundedPointSet":
        return cls(
            points=tuple(tuple(p) for p in points),
            bound=tuple(tuple(p) for p in bound),
        )

    def bounding_polygon(self) -> Polygon:
        """
        The bound as a shapely polygon. Neither closure nor self-intersection
        is checked here; a malformed ring fails later while clipping.
        """
        ring = [(float(p[0]), float(p[1])) for p in self.bound]
        if len(ring) < 3:
            raise InsufficientBoundaryPoints(
                "At least 3 points are needed to specify a bounding polygon.",
                n_points=len(ring),
            )
        return Polygon(ring)

    def unique_points(self) -> Tuple[GeometricPoint, ...]:
        """
        Distinct valid points in first-seen order. Invalid entries (non-finite,
        subnormal, malformed) are dropped without error.
        """
        unique = {}
        dropped = 0
        for raw in self.points:
            try:
                x, y = raw
            except (TypeError, ValueError):
                point = None
            else:
                point = GeometricPoint.create(x, y)
            if point is None:
                dropped += 1
                continue
            unique.setdefault(point, None)

        if dropped:
            logger.debug("Dropped invalid points", dropped=dropped, total=len(self.points))
        return tuple(unique)

    def tessellation_sites(self) -> np.ndarray:
        """Sites as an (N,2) array, row order matching :meth:`unique_points`."""
        pts = self.unique_points()
        if not pts:
            return np.zeros((0, 2), dtype=np.float64)
        return np.array([p.as_tuple() for p in pts], dtype=np.float64)
