from .datastructures import GeometricPoint, UnclippedCell, BoundedVoronoiCell
from .errors import (
    GeometryError,
    InsufficientBoundaryPoints,
    InvalidBoundingRegion,
    InsufficientPoints,
    TessellationFailed,
    NoContainingIntersection,
)
from .geometry import ExtentSummary, recentre_polygon
from .bounded_input import BoundedPointSet
from .tessellation import EnclosingRegion, TessellationSettings, enclosing_region, tessellate
from .clipping import clip_cell
from .voronoi import compute_bounded_voronoi
from .io import load_point_set, dump_cells
