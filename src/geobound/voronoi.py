from __future__ import annotations
from typing import List

import structlog

from .bounded_input import BoundedPointSet
from .clipping import HolePolicy, Selection, clip_cell
from .datastructures import BoundedVoronoiCell
from .tessellation import TessellationSettings, tessellate

logger = structlog.get_logger()


def compute_bounded_voronoi(
    point_set: BoundedPointSet,
    *,
    selection: Selection = "first",
    holes: HolePolicy = "drop",
    reflection_diagonals: bool = True,
) -> List[BoundedVoronoiCell]:
    """
    Compute the Voronoi diagram of `point_set`, each cell clipped to the bound
    recentred on its site.

    Key design detail:
    - The raw diagram is computed once inside a rectangle large enough that
      no recentred bound reaches past it.
    - Cells come back in the order of ``point_set.unique_points()``.
    - The first failing stage or cell aborts the computation; there is no
      partial result.
    """
    bound = point_set.bounding_polygon()
    settings = TessellationSettings(reflection_diagonals=reflection_diagonals)
    raw_cells = tessellate(point_set, bound, settings=settings)

    cells = [clip_cell(c, bound, selection=selection, holes=holes) for c in raw_cells]
    logger.info("Bounded voronoi computed", cells=len(cells))
    return cells
