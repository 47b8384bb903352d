"""
Per-cell clipping of a raw Voronoi cell against the user's bound.

The bound is moved so that the centre of its bounding rectangle sits on the
cell's site, then intersected with the raw cell. With a non-convex bound the
intersection may fall apart into several regions; the one containing the
site becomes the bounded cell.
"""
from __future__ import annotations
from typing import Literal

import structlog
from shapely.errors import GEOSException
from shapely.geometry import Point, Polygon
from shapely.geometry.polygon import orient

from .datastructures import BoundedVoronoiCell, UnclippedCell
from .errors import InvalidBoundingRegion, NoContainingIntersection
from .geometry import polygon_parts, recentre_polygon

logger = structlog.get_logger()

Selection = Literal["first", "largest"]
HolePolicy = Literal["drop", "raise"]


def clip_cell(
    cell: UnclippedCell,
    bound: Polygon,
    *,
    selection: Selection = "first",
    holes: HolePolicy = "drop",
) -> BoundedVoronoiCell:
    """
    Clip one raw cell to the bound recentred on its site.

    selection:
        - "first": first intersection region (engine order) containing the site
        - "largest": largest-area region among those containing the site
    holes:
        - "drop": keep only the exterior ring of the chosen region
        - "raise": raise InvalidBoundingRegion if the region has holes
    """
    if selection not in ("first", "largest"):
        raise ValueError(f"Unknown selection mode: {selection!r}")
    if holes not in ("drop", "raise"):
        raise ValueError(f"Unknown hole policy: {holes!r}")

    site = cell.site
    centred_bound = recentre_polygon(bound, site.x, site.y)
    site_point = Point(site.x, site.y)

    try:
        intersection = Polygon(cell.polygon).intersection(centred_bound)
    except GEOSException as exc:
        raise NoContainingIntersection(
            "The bound and the voronoi cell could not be intersected.",
            site=site.as_tuple(),
            n_regions=0,
        ) from exc

    regions = list(polygon_parts(intersection))
    chosen = None
    for region in regions:
        if not region.contains(site_point):
            continue
        if selection == "first":
            chosen = region
            break
        if chosen is None or region.area > chosen.area:
            chosen = region

    if chosen is None:
        logger.warning("No containing intersection", site=site.as_tuple(), regions=len(regions))
        raise NoContainingIntersection(
            "No intersection could be found between the bound and the voronoi cell.",
            site=site.as_tuple(),
            n_regions=len(regions),
        )

    if len(chosen.interiors):
        if holes == "raise":
            raise InvalidBoundingRegion(
                f"Bounded cell of site {site.as_tuple()} has {len(chosen.interiors)} hole(s)"
            )
        logger.debug("Dropping holes", site=site.as_tuple(), holes=len(chosen.interiors))

    exterior = orient(Polygon(chosen.exterior), sign=1.0).exterior
    return BoundedVoronoiCell(site=site, polygon=list(exterior.coords)[:-1])
