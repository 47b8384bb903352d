from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import structlog

from .errors import GeometryError
from .io import dump_cells, load_point_set
from .voronoi import compute_bounded_voronoi

OUTPUT_FILE_NAME = "geo_bound_voronoi.json"

logger = structlog.get_logger()


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geobound",
        description="Generate the Voronoi diagram of a point set bound by an arbitrary geometry.",
    )
    parser.add_argument(
        "point_set_file",
        type=Path,
        help='JSON file of the form {"points": [[x, y], ...], "bound": [[x, y], ...]}',
    )
    parser.add_argument(
        "-o", "--output-directory",
        type=Path,
        default=None,
        help="Output directory (default: the directory containing the point set file)",
    )
    parser.add_argument(
        "--selection",
        choices=("first", "largest"),
        default="first",
        help="Which containing intersection region to keep",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def output_directory(args: argparse.Namespace) -> Path:
    if args.output_directory is not None:
        return args.output_directory
    return args.point_set_file.parent


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        point_set = load_point_set(args.point_set_file)
        cells = compute_bounded_voronoi(point_set, selection=args.selection)
        out = dump_cells(cells, output_directory(args) / OUTPUT_FILE_NAME)
    except (GeometryError, OSError, ValueError) as exc:
        logger.error("Bounded voronoi failed", error=str(exc), kind=type(exc).__name__)
        return 1

    logger.info("Wrote bounded voronoi", path=str(out), cells=len(cells))
    return 0
