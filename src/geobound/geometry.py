from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

import numpy as np
import shapely
from shapely import affinity
from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry

from .datastructures import GeometricPoint
from .errors import InvalidBoundingRegion


@dataclass(frozen=True)
class ExtentSummary:
    """Axis-aligned extents of a polygon or a point set."""
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @classmethod
    def from_polygon(cls, ring) -> Optional["ExtentSummary"]:
        """
        Extents of a shapely geometry or of a raw (N,2) coordinate ring.
        None if no bounding rectangle can be computed.
        """
        if isinstance(ring, BaseGeometry):
            if ring.is_empty:
                return None
            min_x, min_y, max_x, max_y = map(float, ring.bounds)
        else:
            coords = np.asarray(ring, dtype=np.float64)
            if coords.size == 0 or coords.size % 2:
                return None
            coords = coords.reshape(-1, 2)
            min_x, min_y = (float(c) for c in coords.min(axis=0))
            max_x, max_y = (float(c) for c in coords.max(axis=0))

        if not np.all(np.isfinite([min_x, max_x, min_y, max_y])):
            return None
        return cls(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y)

    @classmethod
    def from_point_set(cls, points: Iterable[GeometricPoint]) -> Optional["ExtentSummary"]:
        """Single pass over the points; None for an empty set."""
        min_x = min_y = float("inf")
        max_x = max_y = float("-inf")
        seen = False
        for p in points:
            seen = True
            if p.x < min_x:
                min_x = p.x
            if p.x > max_x:
                max_x = p.x
            if p.y < min_y:
                min_y = p.y
            if p.y > max_y:
                max_y = p.y
        if not seen:
            return None
        return cls(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def centre(self) -> Tuple[float, float]:
        return (self.min_x + self.width / 2.0, self.min_y + self.height / 2.0)


def recentre_polygon(polygon: Polygon, x: float, y: float) -> Polygon:
    """
    Translate `polygon` so that the centre of its bounding rectangle lands on (x, y).
    """
    extent = ExtentSummary.from_polygon(polygon)
    if extent is None:
        raise InvalidBoundingRegion("Invalid polygon. Cannot calculate bounding rectangle.")
    cx, cy = extent.centre
    return affinity.translate(polygon, xoff=x - cx, yoff=y - cy)


def polygon_parts(geom: BaseGeometry) -> Iterator[Polygon]:
    """
    Yield the polygonal parts of a boolean operation result in engine order.
    Lower dimensional leftovers (touching edges / points) are skipped.
    """
    for part in shapely.get_parts(geom):
        if part.is_empty:
            continue
        if part.geom_type == "Polygon":
            yield part
        elif part.geom_type in ("MultiPolygon", "GeometryCollection"):
            yield from polygon_parts(part)
