from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np
import structlog
from scipy.spatial import QhullError, Voronoi
from shapely.geometry import Polygon, box

from .bounded_input import BoundedPointSet
from .datastructures import GeometricPoint, UnclippedCell
from .errors import InsufficientPoints, InvalidBoundingRegion, TessellationFailed
from .geometry import ExtentSummary, polygon_parts

logger = structlog.get_logger()


@dataclass(frozen=True)
class TessellationSettings:
    """
    Engine configuration, built per call.

    There is deliberately no relaxation setting: sites are never moved.
    """
    reflection_diagonals: bool = True
    qhull_options: str = "Qbb Qc Qz"


@dataclass(frozen=True)
class EnclosingRegion:
    centre_x: float
    centre_y: float
    width: float
    height: float

    @property
    def bounds(self):
        """(minx, miny, maxx, maxy)"""
        hw = self.width / 2.0
        hh = self.height / 2.0
        return (self.centre_x - hw, self.centre_y - hh, self.centre_x + hw, self.centre_y + hh)

    def mirror(self, sites: np.ndarray, *, diagonals: bool = True) -> np.ndarray:
        """
        Images of `sites` reflected across the sides of the region (and, with
        `diagonals`, across its corners). With these ghost sites present every
        original Voronoi region is finite and bounded by the region's sides.
        """
        minx, miny, maxx, maxy = self.bounds
        # (sx, ox): x' = sx * x + ox, likewise for y; identity first
        xs = np.array([[1.0, 0.0], [-1.0, 2 * minx], [-1.0, 2 * maxx]])
        ys = np.array([[1.0, 0.0], [-1.0, 2 * miny], [-1.0, 2 * maxy]])
        maps = [
            (i, j) for i in range(3) for j in range(3)
            if (i, j) != (0, 0) and (diagonals or i == 0 or j == 0)
        ]
        scale = np.array([[xs[i, 0], ys[j, 0]] for i, j in maps])
        offset = np.array([[xs[i, 1], ys[j, 1]] for i, j in maps])
        ghosts = sites[None, :, :] * scale[:, None, :] + offset[:, None, :]
        return ghosts.reshape(-1, 2)

    def as_polygon(self) -> Polygon:
        return box(*self.bounds)


def enclosing_region(bound_extent: ExtentSummary, points_extent: ExtentSummary) -> EnclosingRegion:
    """
    Rectangle centred on the point set, as wide (high) as the point set and the
    bound together. The bound is later moved onto each site independently, so
    the plain sum is the worst case reach of any recentred bound.
    """
    cx, cy = points_extent.centre
    return EnclosingRegion(
        centre_x=cx,
        centre_y=cy,
        width=points_extent.width + bound_extent.width,
        height=points_extent.height + bound_extent.height,
    )


def voronoi_in_region(
    sites: np.ndarray,
    region: EnclosingRegion,
    settings: TessellationSettings,
) -> List[np.ndarray]:
    """
    One polygon per site (same order): its Voronoi cell clipped to `region`.
    Sites must be distinct and lie strictly inside the region.
    """
    sites = np.asarray(sites, dtype=np.float64)
    if sites.ndim != 2 or sites.shape[1] != 2 or len(sites) == 0:
        raise TessellationFailed("Sites must be a non-empty (N,2) array")
    if not (region.width > 0.0 and region.height > 0.0):
        raise TessellationFailed(
            f"Degenerate enclosing region ({region.width} x {region.height})"
        )

    minx, miny, maxx, maxy = region.bounds
    inside = (
        (sites[:, 0] > minx) & (sites[:, 0] < maxx)
        & (sites[:, 1] > miny) & (sites[:, 1] < maxy)
    )
    if not inside.all():
        raise TessellationFailed("Enclosing region does not strictly contain all sites")

    ghosts = region.mirror(sites, diagonals=settings.reflection_diagonals)
    all_sites = np.vstack([sites, ghosts])

    try:
        vor = Voronoi(all_sites, qhull_options=settings.qhull_options)
    except (QhullError, ValueError) as exc:
        raise TessellationFailed(
            "No Voronoi diagram could be built for the specified point set."
        ) from exc

    frame = region.as_polygon()
    cells = []
    for i in range(len(sites)):
        vertex_ids = vor.regions[vor.point_region[i]]
        if -1 in vertex_ids or len(vertex_ids) < 3:
            raise TessellationFailed(f"Unbounded Voronoi region for site {i}")

        clipped = Polygon(vor.vertices[vertex_ids]).intersection(frame)
        parts = list(polygon_parts(clipped))
        if not parts:
            raise TessellationFailed(f"Empty Voronoi region for site {i}")
        # reflected sites make the raw region convex, so there is a single part
        cells.append(np.array(parts[0].exterior.coords[:-1], dtype=np.float64))

    return cells


def tessellate(
    bounded_input: BoundedPointSet,
    bound: Polygon,
    *,
    settings: TessellationSettings | None = None,
) -> List[UnclippedCell]:
    """
    Size the enclosing region from the bound and point set extents and run the
    engine once over all unique sites.
    """
    if settings is None:
        settings = TessellationSettings()

    bound_extent = ExtentSummary.from_polygon(bound)
    if bound_extent is None:
        raise InvalidBoundingRegion("The bounding polygon is invalid.")

    points: Sequence[GeometricPoint] = bounded_input.unique_points()
    points_extent = ExtentSummary.from_point_set(points)
    if points_extent is None:
        raise InsufficientPoints("The point set does not contain enough valid points.")

    region = enclosing_region(bound_extent, points_extent)
    logger.debug(
        "Enclosing region sized",
        centre=(region.centre_x, region.centre_y),
        width=region.width,
        height=region.height,
    )

    sites = bounded_input.tessellation_sites()
    polygons = voronoi_in_region(sites, region, settings)
    logger.info("Voronoi diagram calculated", sites=len(points))

    return [UnclippedCell(site=p, polygon=poly) for p, poly in zip(points, polygons)]
