"""JSON reading and writing of point sets and bounded cells."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Union

from .bounded_input import BoundedPointSet
from .datastructures import BoundedVoronoiCell

PathLike = Union[str, Path]


def point_set_from_dict(data) -> BoundedPointSet:
    """
    Build a point set from ``{"points": [[x, y], ...], "bound": [[x, y], ...]}``.
    Individual point entries are not validated here.
    """
    if not isinstance(data, dict):
        raise ValueError("Point set document must be a JSON object")
    missing = [k for k in ("points", "bound") if k not in data]
    if missing:
        raise ValueError(f"Point set document is missing key(s): {', '.join(missing)}")

    points, bound = data["points"], data["bound"]
    if not isinstance(points, list) or not isinstance(bound, list):
        raise ValueError("'points' and 'bound' must be arrays")
    for p in bound:
        if not isinstance(p, list) or len(p) != 2:
            raise ValueError(f"Bound vertices must be [x, y] pairs, got {p!r}")

    # malformed point entries are kept: they are dropped during deduplication
    return BoundedPointSet(
        points=tuple(tuple(p) if isinstance(p, list) else p for p in points),
        bound=tuple(tuple(p) for p in bound),
    )


def load_point_set(path: PathLike) -> BoundedPointSet:
    with Path(path).open("r", encoding="utf-8") as fh:
        return point_set_from_dict(json.load(fh))


def cells_to_records(cells: Iterable[BoundedVoronoiCell]) -> list:
    return [c.to_record() for c in cells]


def dump_cells(cells: Iterable[BoundedVoronoiCell], path: PathLike) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(cells_to_records(cells)), encoding="utf-8")
    return path
