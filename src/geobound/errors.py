"""Errors raised while computing a bounded Voronoi diagram.

Every failure is fatal for the whole computation: there is no partial
output. All errors derive from :class:`GeometryError`, itself a
``ValueError``, so callers can catch the whole family at once.
"""

from __future__ import annotations


class GeometryError(ValueError):
    """Base class of all bounded Voronoi failures."""


class InsufficientBoundaryPoints(GeometryError):
    """Raised when the bounding ring has fewer than 3 points."""

    def __init__(self, message: str, n_points: int):
        super().__init__(message)
        self.n_points = int(n_points)


class InvalidBoundingRegion(GeometryError):
    """Raised when a polygon has no computable bounding rectangle."""


class InsufficientPoints(GeometryError):
    """Raised when no valid point is left after deduplication."""


class TessellationFailed(GeometryError):
    """Raised when the Voronoi engine could not build a diagram."""


class NoContainingIntersection(GeometryError):
    """Raised when no bound/cell intersection region contains the site."""

    def __init__(self, message: str, site: tuple[float, float], n_regions: int):
        super().__init__(message)
        self.site = site
        self.n_regions = int(n_regions)
