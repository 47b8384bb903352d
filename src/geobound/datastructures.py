from __future__ import annotations
from dataclasses import dataclass
import math
import numbers
import sys
from typing import Optional, Tuple

import numpy as np


def _is_usable(value: float) -> bool:
    # finite and either zero or normal; subnormals are rejected
    return math.isfinite(value) and (value == 0.0 or abs(value) >= sys.float_info.min)


@dataclass(frozen=True, order=True)
class GeometricPoint:
    """
    A 2D coordinate whose components are finite and normal (or zero).

    Use :meth:`create`; it returns None instead of raising for unusable input.
    Since NaN can never be stored and -0.0 is folded into 0.0, the generated
    equality, ordering and hash agree with a bit-wise comparison of the
    coordinates, so points are safe set/dict keys.
    """
    x: float
    y: float

    @classmethod
    def create(cls, x, y) -> Optional["GeometricPoint"]:
        # only real numbers; strings and booleans are not coordinates
        for v in (x, y):
            if not isinstance(v, numbers.Real) or isinstance(v, (bool, np.bool_)):
                return None
        x = float(x)
        y = float(y)
        if not (_is_usable(x) and _is_usable(y)):
            return None
        # adding 0.0 turns -0.0 into 0.0
        return cls(x + 0.0, y + 0.0)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


def _frozen_polygon(vertices) -> np.ndarray:
    arr = np.array(vertices, dtype=np.float64).reshape(-1, 2)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class UnclippedCell:
    site: GeometricPoint
    polygon: np.ndarray  # (N,2), finite, within the enclosing region

    def __post_init__(self):
        object.__setattr__(self, "polygon", _frozen_polygon(self.polygon))


@dataclass(frozen=True, eq=False)
class BoundedVoronoiCell:
    site: GeometricPoint
    polygon: np.ndarray  # (N,2), counter-clockwise, closing vertex not repeated

    def __post_init__(self):
        object.__setattr__(self, "polygon", _frozen_polygon(self.polygon))

    def vertex_count(self) -> int:
        return len(self.polygon)

    def to_record(self) -> dict:
        """Plain record in the ``{"site": [x, y], "cell": [[x, y], ...]}`` layout."""
        return {
            "site": [self.site.x, self.site.y],
            "cell": self.polygon.tolist(),
        }
